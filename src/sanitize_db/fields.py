"""
Field mapping registry.

Static tables declaring which stored attribute keys are sanitized and with
what kind of synthetic value. Stored keys may carry a leading underscore
("private" meta); both spellings are the same logical field and resolve to
the same kind.
"""

from typing import Dict, Iterable, List, Optional

from .providers import SyntheticKind


def normalize_key(key: str) -> str:
    """Strip one leading underscore from a stored key."""
    if key.startswith('_'):
        return key[1:]
    return key


def key_variants(key: str) -> List[str]:
    """Both stored spellings of a logical key: ``[key, '_' + key]``."""
    logical = normalize_key(key)
    return [logical, f'_{logical}']


class FieldMap:
    """Lookup of logical key -> SyntheticKind."""

    def __init__(self, mapping: Dict[str, Optional[SyntheticKind]]):
        self._mapping = {normalize_key(k): v for k, v in mapping.items()}

    @classmethod
    def deleting(cls, keys: Iterable[str]) -> 'FieldMap':
        """Mapping-by-presence: every listed key is deleted outright."""
        return cls({key: SyntheticKind.DELETE for key in keys})

    def kind_for(self, key: str) -> Optional[SyntheticKind]:
        """Kind for a stored key (either variant); None when unmapped."""
        return self._mapping.get(normalize_key(key))

    def __contains__(self, key: str) -> bool:
        return normalize_key(key) in self._mapping

    def __iter__(self):
        return iter(self._mapping)

    def __len__(self):
        return len(self._mapping)

    def items(self):
        return self._mapping.items()


# ============================================================================
# Accounts
# ============================================================================

ACCOUNT_META_FIELDS = FieldMap({
    'first_name': SyntheticKind.FIRST_NAME,
    'last_name': SyntheticKind.LAST_NAME,
    'nickname': SyntheticKind.WORD,
    'description': SyntheticKind.TEXT,
})

# Social/IM contact methods: no meaningful synthetic equivalent
CONTACT_METHOD_FIELDS = FieldMap.deleting([
    'facebook',
    'googleplus',
    'jabber',
    'aim',
    'yim',
])


# ============================================================================
# WooCommerce
# ============================================================================

# Stored in both wp_usermeta and wp_postmeta (orders), with and without
# the leading underscore.
COMMERCE_FIELDS = FieldMap({
    'billing_first_name': SyntheticKind.FIRST_NAME,
    'billing_last_name': SyntheticKind.LAST_NAME,
    'billing_company': SyntheticKind.COMPANY,
    'billing_email': SyntheticKind.EMAIL,
    'billing_phone': SyntheticKind.PHONE,
    'billing_country': SyntheticKind.COUNTRY_CODE,
    'billing_address_1': SyntheticKind.STREET_ADDRESS,
    'billing_address_2': SyntheticKind.SECONDARY_ADDRESS,
    'billing_city': SyntheticKind.CITY,
    'billing_state': SyntheticKind.STATE_ABBR,
    'billing_postcode': SyntheticKind.POSTCODE,
    'shipping_first_name': SyntheticKind.FIRST_NAME,
    'shipping_last_name': SyntheticKind.LAST_NAME,
    'shipping_full_name': SyntheticKind.NAME,
    'shipping_company': SyntheticKind.COMPANY,
    'shipping_phone': SyntheticKind.PHONE,
    'shipping_country': SyntheticKind.COUNTRY_CODE,
    'shipping_address_1': SyntheticKind.STREET_ADDRESS,
    'shipping_address_2': SyntheticKind.SECONDARY_ADDRESS,
    'shipping_city': SyntheticKind.CITY,
    'shipping_state': SyntheticKind.STATE_ABBR,
    'shipping_postcode': SyntheticKind.POSTCODE,
    'credit_card_holder_name': SyntheticKind.NAME,
    'cc_last_4': SyntheticKind.NUMBER,
})

WOOCOMMERCE_PLUGIN = 'woocommerce/woocommerce.php'
WOOCOMMERCE_TABLES = ['wp_woocommerce_order_items']


# ============================================================================
# Gravity Forms
# ============================================================================

GRAVITY_FORMS_PLUGIN = 'gravityforms/gravityforms.php'

# Entry storage only; form definitions are kept. Pre-2.3 (rg_) and
# 2.3+ (gf_) table names.
GRAVITY_FORMS_TABLES = [
    'wp_rg_incomplete_submissions',
    'wp_rg_lead',
    'wp_rg_lead_detail',
    'wp_rg_lead_detail_long',
    'wp_rg_lead_meta',
    'wp_rg_lead_notes',
    'wp_gf_draft_submissions',
    'wp_gf_entry',
    'wp_gf_entry_meta',
    'wp_gf_entry_notes',
]


# ============================================================================
# Transients
# ============================================================================

TRANSIENT_PREFIXES = ['_transient_', '_site_transient_']
