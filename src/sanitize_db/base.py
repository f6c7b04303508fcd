#-------------------------------------------------------------------------bh-
#-------------------------------------------------------------------------eh-

from datetime import datetime
from typing import Optional
from sqlalchemy import (
    Column, Integer, String, DateTime, BigInteger, Text, Index
)
from sqlalchemy.orm import declarative_base, declared_attr


#-------------------------------------------------------------------------bm-
Base = declarative_base()

# ============================================================================
# Mixins - Common patterns extracted
# ============================================================================
class MetaMixin:
    """
    Generic key/value side table (usermeta, postmeta, sitemeta).

    Subclasses declare their own primary key and owner columns; the key and
    value columns are shared.
    """

    @declared_attr
    def meta_key(cls):
        return Column(String(255))

    @declared_attr
    def meta_value(cls):
        return Column(Text)
#-------------------------------------------------------------------------em-
