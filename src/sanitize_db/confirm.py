"""
Confirmation gate for destructive operations.
"""

import click

from .exceptions import ConfirmationDeclined

CONFIRM_MESSAGE = "Are you sure you want to DELETE this sensitive data in the database?"


def confirm(message: str = CONFIRM_MESSAGE, auto_yes: bool = False, prompt=click.confirm) -> bool:
    """
    Ask the operator to confirm.

    Args:
        message: Question to show
        auto_yes: Skip the prompt and answer yes (already confirmed upstream)
        prompt: Prompt function; defaults to ``click.confirm`` (default answer: no)

    Returns:
        True only on an explicit yes. Ctrl-C / end of input count as no.
    """
    if auto_yes:
        return True
    try:
        return bool(prompt(message, default=False))
    except (click.Abort, EOFError, KeyboardInterrupt):
        return False


def require_confirmation(message: str = CONFIRM_MESSAGE, auto_yes: bool = False, prompt=click.confirm):
    """Like ``confirm`` but raises ConfirmationDeclined instead of returning False."""
    if not confirm(message, auto_yes=auto_yes, prompt=prompt):
        raise ConfirmationDeclined("Operation aborted: confirmation declined")
