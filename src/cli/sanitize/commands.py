"""Sanitize command classes."""

from cli.core.base import BaseSanitizeCommand
from cli.core.utils import EXIT_SUCCESS, EXIT_ERROR
from cli.sanitize.display import display_pipeline_result, display_stage_result
from sanitize_db.exceptions import SanitizeError, StorePrerequisiteMissing


class SanitizeDatabaseCommand(BaseSanitizeCommand):
    """Run every available stage, confirming once."""

    def execute(self, yes: bool = False) -> int:
        aborted = self.confirm(yes)
        if aborted is not None:
            return aborted

        try:
            result = self.pipeline.run_full_sanitization(confirmed=True)
        except SanitizeError as e:
            return self.handle_exception(e)

        display_pipeline_result(self.ctx, result)
        if not result.ok:
            self.ctx.stderr_console.print(
                f"❌ Stage '{result.failed_stage}' failed: {result.failure}", style="bold red"
            )
            return EXIT_ERROR

        self.console.print("✅ Database sanitized.", style="green bold")
        return EXIT_SUCCESS


class SanitizeStageCommand(BaseSanitizeCommand):
    """Run one stage on its own."""

    def execute(self, stage: str, yes: bool = False, force: bool = False) -> int:
        aborted = self.confirm(yes)
        if aborted is not None:
            return aborted

        try:
            result = self.pipeline.run_stage(stage, confirmed=True, force=force)
        except StorePrerequisiteMissing as e:
            self.console.print(f"⚠️  Skipped: {e} (use --force to run anyway)", style="yellow")
            return EXIT_SUCCESS
        except SanitizeError as e:
            return self.handle_exception(e)

        display_stage_result(self.ctx, result)
        if result.failures:
            self.console.print(f"⚠️  {result.failures:,} record(s) could not be updated", style="yellow")
        self.console.print(f"✅ {stage} sanitized.", style="green bold")
        return EXIT_SUCCESS
