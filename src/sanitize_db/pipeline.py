"""
Sanitization pipeline orchestration.

The full run is an ordered list of stage descriptors processed by one loop:

    transients -> comments -> users -> gravityforms* -> woocommerce*

Stages marked * are optional: they only run when their plugin is active or
its tables exist. A stage raising BulkOperationFailure stops the run; the
stages already completed stay applied and are reported alongside the
failure.

Usage:
    ctx = StageContext(session, config)
    pipeline = SanitizationPipeline(ctx)
    result = pipeline.run_full_sanitization(confirmed=True)
"""

import time
import logging
from typing import Callable, List, Optional

from sqlalchemy.exc import SQLAlchemyError

from .exceptions import (
    BulkOperationFailure,
    ConfirmationRequired,
    StorePrerequisiteMissing,
)
from .extensions import ExtensionRegistry
from .stages import (
    StageContext,
    StageResult,
    TransientsStage,
    CommentsStage,
    UsersStage,
    GravityFormsStage,
    WooCommerceStage,
)

logger = logging.getLogger(__name__)


class StageDescriptor:
    """A pipeline slot: the stage to run and the condition under which it runs."""

    def __init__(self, stage_class, prerequisite: Optional[Callable[[ExtensionRegistry], bool]] = None,
                 prerequisite_description: str = ''):
        self.stage_class = stage_class
        self.name = stage_class.name
        self.prerequisite = prerequisite
        self.prerequisite_description = prerequisite_description

    @property
    def optional(self) -> bool:
        return self.prerequisite is not None

    def is_available(self, registry: ExtensionRegistry) -> bool:
        return self.prerequisite is None or bool(self.prerequisite(registry))

    def __repr__(self):
        return f"<StageDescriptor({self.name}, optional={self.optional})>"


def plugin_stage(stage_class) -> StageDescriptor:
    """Descriptor for a stage gated on its plugin being present."""
    return StageDescriptor(
        stage_class,
        prerequisite=lambda registry: registry.plugin_present(stage_class.plugin, stage_class.tables),
        prerequisite_description=f"plugin {stage_class.plugin}",
    )


# Order matters: later stages may assume earlier ones succeeded
STAGES = [
    StageDescriptor(TransientsStage),
    StageDescriptor(CommentsStage),
    StageDescriptor(UsersStage),
    plugin_stage(GravityFormsStage),
    plugin_stage(WooCommerceStage),
]


class PipelineResult:
    """Per-stage outcome of a pipeline run."""

    def __init__(self):
        self.stages: List[StageResult] = []
        self.skipped: List[str] = []
        self.failed_stage: Optional[str] = None
        self.failure: Optional[Exception] = None
        self.not_run: List[str] = []
        self.elapsed = 0.0

    @property
    def ok(self) -> bool:
        return self.failure is None

    def __repr__(self):
        return (f"<PipelineResult(ok={self.ok}, stages={[s.name for s in self.stages]}, "
                f"skipped={self.skipped}, failed={self.failed_stage})>")


class SanitizationPipeline:
    """Runs sanitization stages in order against one database."""

    def __init__(self, ctx: StageContext, stages: Optional[List[StageDescriptor]] = None):
        self.ctx = ctx
        self.stages = list(STAGES if stages is None else stages)

    @property
    def stage_names(self) -> List[str]:
        return [d.name for d in self.stages]

    def get_descriptor(self, name: str) -> StageDescriptor:
        for descriptor in self.stages:
            if descriptor.name == name:
                return descriptor
        raise KeyError(f"Unknown stage: {name}")

    def run_full_sanitization(self, confirmed: bool) -> PipelineResult:
        """
        Run every stage whose prerequisite holds, in order.

        Args:
            confirmed: Must be True; the caller has obtained confirmation

        Returns:
            PipelineResult; ``ok`` is False if a stage failed, in which case
            the remaining stages were not started

        Raises:
            ConfirmationRequired: ``confirmed`` is not True (nothing is touched)
        """
        if confirmed is not True:
            raise ConfirmationRequired("Full sanitization requires confirmation")

        result = PipelineResult()
        start = time.monotonic()

        for index, descriptor in enumerate(self.stages):
            try:
                if not self._is_available(descriptor):
                    logger.info(f"Skipping {descriptor.name}: {descriptor.prerequisite_description} not present")
                    result.skipped.append(descriptor.name)
                    continue
                result.stages.append(self._run(descriptor))
            except BulkOperationFailure as e:
                logger.error(f"Stage {descriptor.name} failed: {e}")
                failed = StageResult(descriptor.name)
                failed.error = e
                result.stages.append(failed)
                result.failed_stage = descriptor.name
                result.failure = e
                result.not_run = [d.name for d in self.stages[index + 1:]]
                break

        result.elapsed = time.monotonic() - start
        if result.ok:
            logger.info(f"Database sanitized in {result.elapsed:.1f}s")
        else:
            logger.error(f"Sanitization stopped at {result.failed_stage}; "
                         f"not run: {', '.join(result.not_run) or 'none'}")
        return result

    def run_stage(self, name: str, confirmed: bool, force: bool = False) -> StageResult:
        """
        Run a single stage.

        Args:
            name: Stage name (see ``stage_names``)
            confirmed: Must be True
            force: Run an optional stage even if its prerequisite is absent

        Raises:
            ConfirmationRequired: ``confirmed`` is not True
            StorePrerequisiteMissing: optional stage whose plugin is absent
            BulkOperationFailure: the stage failed
        """
        descriptor = self.get_descriptor(name)
        if confirmed is not True:
            raise ConfirmationRequired(f"Stage {name} requires confirmation")

        if not force and not self._is_available(descriptor):
            raise StorePrerequisiteMissing(name, descriptor.prerequisite_description)

        return self._run(descriptor)

    def _is_available(self, descriptor: StageDescriptor) -> bool:
        try:
            return descriptor.is_available(self.ctx.registry)
        except BulkOperationFailure:
            self.ctx.session.rollback()
            raise
        except SQLAlchemyError as e:
            self.ctx.session.rollback()
            raise BulkOperationFailure('inspect', descriptor.name, e) from e

    def _run(self, descriptor: StageDescriptor) -> StageResult:
        """Run one stage; any database error leaves the session rolled back."""
        try:
            return descriptor.stage_class(self.ctx).run()
        except BulkOperationFailure:
            self.ctx.session.rollback()
            raise
        except SQLAlchemyError as e:
            self.ctx.session.rollback()
            raise BulkOperationFailure(descriptor.name, 'database', e) from e
