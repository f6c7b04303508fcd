"""WooCommerce stage: replace billing, shipping and payment attributes."""

from ..fields import COMMERCE_FIELDS, WOOCOMMERCE_PLUGIN, WOOCOMMERCE_TABLES
from ..mutator import USER_META, POST_META
from .base import Stage, StageResult


class WooCommerceStage(Stage):
    """
    Replace every non-empty commerce attribute with a fresh fake value.

    The fields live on customers (wp_usermeta) and on orders (wp_postmeta),
    with and without a leading underscore.
    """

    name = 'woocommerce'
    title = 'WooCommerce data'
    plugin = WOOCOMMERCE_PLUGIN
    tables = WOOCOMMERCE_TABLES

    def execute(self, result: StageResult) -> None:
        for key in COMMERCE_FIELDS:
            self.logger.info(f"  Starting {key}")
            kind = COMMERCE_FIELDS.kind_for(key)
            for table in (USER_META, POST_META):
                result.add(table.name, self.apply_field(table, key, kind))
