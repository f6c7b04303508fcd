"""
Extension (plugin) registry.

Answers "is plugin X installed" from what the database itself records: the
``active_plugins`` option and the set of tables present in the schema.
"""

import re
import logging
from typing import Iterable, List, Set

from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .core.options import Option
from .exceptions import BulkOperationFailure

logger = logging.getLogger(__name__)

# PHP serialize() string entries: s:29:"gravityforms/gravityforms.php";
_SERIALIZED_STRING = re.compile(r's:\d+:"([^"]*)";')


def parse_plugin_list(value) -> Set[str]:
    """Plugin files listed in a PHP-serialized ``active_plugins`` value."""
    if not value:
        return set()
    return set(_SERIALIZED_STRING.findall(value))


class ExtensionRegistry:
    """Plugin activation and table presence for one database."""

    def __init__(self, session: Session):
        self.session = session
        self._active = None
        self._tables = None

    @property
    def active_plugins(self) -> Set[str]:
        if self._active is None:
            if self.has_table(Option.__tablename__, refresh=False):
                try:
                    value = Option.get_value(self.session, 'active_plugins')
                except SQLAlchemyError as e:
                    raise BulkOperationFailure('read', Option.__tablename__, e) from e
                self._active = parse_plugin_list(value)
            else:
                self._active = set()
            logger.debug(f"Active plugins: {sorted(self._active)}")
        return self._active

    def is_active(self, plugin_file: str) -> bool:
        """True if ``plugin_file`` (e.g. 'woocommerce/woocommerce.php') is active."""
        return plugin_file in self.active_plugins

    def table_names(self, refresh: bool = False) -> Set[str]:
        if self._tables is None or refresh:
            try:
                self._tables = set(inspect(self.session.connection()).get_table_names())
            except SQLAlchemyError as e:
                raise BulkOperationFailure('inspect', 'schema', e) from e
        return self._tables

    def has_table(self, name: str, refresh: bool = False) -> bool:
        return name in self.table_names(refresh=refresh)

    def existing_tables(self, names: Iterable[str]) -> List[str]:
        """The subset of ``names`` present in the schema, order preserved."""
        present = self.table_names()
        return [name for name in names if name in present]

    def plugin_present(self, plugin_file: str, tables: Iterable[str] = ()) -> bool:
        """Plugin is active, or at least one of its tables exists."""
        return self.is_active(plugin_file) or bool(self.existing_tables(tables))
