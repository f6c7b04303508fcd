"""Gravity Forms stage: empty the form entry tables."""

from ..fields import GRAVITY_FORMS_PLUGIN, GRAVITY_FORMS_TABLES
from .base import Stage, StageResult


class GravityFormsStage(Stage):
    """
    Truncate every Gravity Forms entry table.

    We don't know what is in there and it is not used at runtime, so all of
    it goes. Walking entries one by one exhausts memory on sites with
    millions of entry-detail rows.
    """

    name = 'gravityforms'
    title = 'Gravity Forms tables'
    plugin = GRAVITY_FORMS_PLUGIN
    tables = GRAVITY_FORMS_TABLES

    def execute(self, result: StageResult) -> None:
        for table in self.tables:
            if self.mutator.truncate(table):
                self.logger.info(f"  Truncated {table}")
                result.add('tables_truncated')
