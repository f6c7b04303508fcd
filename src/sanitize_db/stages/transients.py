"""Ephemeral cache stage: delete all transients."""

from sqlalchemy import or_

from ..fields import TRANSIENT_PREFIXES
from ..mutator import OPTIONS, SITE_META
from .base import Stage, StageResult


def _prefixed(column, prefixes):
    # autoescape: '_' is a LIKE wildcard
    return or_(*[column.startswith(prefix, autoescape=True) for prefix in prefixes])


class TransientsStage(Stage):
    """
    Delete every transient (and its timeout companion).

    Transients expire on their own and are rebuilt on demand, so removing
    them all is safe.
    """

    name = 'transients'
    title = 'transients'

    def execute(self, result: StageResult) -> None:
        deleted = self.mutator.delete_where(OPTIONS, _prefixed(OPTIONS.key, TRANSIENT_PREFIXES))
        result.add(OPTIONS.name, deleted)

        # multisite network transients
        if self.mutator.has_table(SITE_META.name):
            deleted = self.mutator.delete_where(SITE_META, _prefixed(SITE_META.key, ['_site_transient_']))
            result.add(SITE_META.name, deleted)
