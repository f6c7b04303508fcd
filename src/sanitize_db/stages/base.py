"""Base stage classes for the sanitization pipeline."""

import time
import logging
from abc import ABC, abstractmethod
from typing import Dict, Optional

from sqlalchemy.orm import Session

from ..accessors import EntityAccessor
from ..config import SanitizeConfig
from ..extensions import ExtensionRegistry
from ..fields import key_variants
from ..mutator import AttributeTable, BulkMutator
from ..providers import FakeValueProvider, SyntheticKind


class StageContext:
    """Everything a stage needs, passed explicitly instead of found globally."""

    def __init__(self, session: Session, config: Optional[SanitizeConfig] = None,
                 provider: Optional[FakeValueProvider] = None):
        self.session = session
        self.config = config or SanitizeConfig()
        self.provider = provider or FakeValueProvider(seed=self.config.seed, locale=self.config.locale)
        self.mutator = BulkMutator(session, batch_size=self.config.batch_size)
        self.accessor = EntityAccessor(session)
        self.registry = ExtensionRegistry(session)


class StageResult:
    """Outcome of one stage run."""

    def __init__(self, name: str):
        self.name = name
        self.counts: Dict[str, int] = {}
        self.failures = 0
        self.elapsed = 0.0
        self.error: Optional[Exception] = None

    def add(self, key: str, amount: int = 1):
        self.counts[key] = self.counts.get(key, 0) + amount

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def total(self) -> int:
        return sum(self.counts.values())

    def __repr__(self):
        return f"<StageResult({self.name}, counts={self.counts}, failures={self.failures})>"


class Stage(ABC):
    """One unit of the sanitization pipeline."""

    name: str = ''
    title: str = ''

    def __init__(self, ctx: StageContext):
        self.ctx = ctx
        self.session = ctx.session
        self.config = ctx.config
        self.provider = ctx.provider
        self.mutator = ctx.mutator
        self.accessor = ctx.accessor
        self.logger = logging.getLogger(self.__class__.__module__)

    def apply_field(self, table: AttributeTable, key: str, kind: SyntheticKind) -> int:
        """
        Sanitize one logical attribute (both key variants) across a table.

        ``SyntheticKind.DELETE`` removes the rows; any other kind replaces
        every non-empty value with a fresh one.

        Returns:
            Number of rows deleted or replaced
        """
        if kind is SyntheticKind.DELETE:
            return self.mutator.delete_attribute(table, key_variants(key))
        return self.mutator.replace_attribute(table, key_variants(key), self.provider.source(kind))

    @abstractmethod
    def execute(self, result: StageResult) -> None:
        """Do the stage's work, recording counts on ``result``."""
        pass

    def run(self) -> StageResult:
        """Execute the stage with timing and boundary logging."""
        result = StageResult(self.name)
        self.logger.info(f"Sanitizing {self.title}")
        start = time.monotonic()
        try:
            self.execute(result)
        finally:
            result.elapsed = time.monotonic() - start
        if result.failures:
            self.logger.warning(f"{self.title}: {result.failures:,} record(s) could not be updated")
        self.logger.info(f"Finished {self.title} in {result.elapsed:.1f}s: {result.counts}")
        return result
