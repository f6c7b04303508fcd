"""Base command classes for the sanitizer CLI."""

from abc import ABC, abstractmethod
from cli.core.context import Context
from cli.core.utils import EXIT_DECLINED, EXIT_ERROR
from sanitize_db.confirm import CONFIRM_MESSAGE, require_confirmation
from sanitize_db.exceptions import ConfirmationDeclined
from sanitize_db.pipeline import SanitizationPipeline
from sanitize_db.stages import StageContext


class BaseCommand(ABC):
    """Base class for all commands."""

    def __init__(self, ctx: Context):
        self.ctx = ctx
        self.session = ctx.session
        self.console = ctx.console

    @abstractmethod
    def execute(self, **kwargs) -> int:
        """Execute command. Returns exit code."""
        pass

    def handle_exception(self, e: Exception) -> int:
        """Common error handling."""
        self.ctx.stderr_console.print(f"❌ Error: {e}", style="bold red")
        if self.ctx.verbose:
            import traceback
            self.console.print(traceback.format_exc(), style="dim")
        return EXIT_ERROR


class BaseSanitizeCommand(BaseCommand):
    """Base for destructive commands: confirmation first, then the pipeline."""

    def __init__(self, ctx: Context):
        super().__init__(ctx)
        self.pipeline = SanitizationPipeline(StageContext(self.session, ctx.config))

    def confirm(self, yes: bool) -> int:
        """Returns None when confirmed, otherwise the exit code to abort with."""
        try:
            require_confirmation(CONFIRM_MESSAGE, auto_yes=yes)
        except ConfirmationDeclined:
            self.ctx.stderr_console.print("Aborted: nothing was changed.", style="bold yellow")
            return EXIT_DECLINED
        return None
