"""Context class for the sanitizer CLI."""

import sys
from typing import Optional
from sqlalchemy.orm import Session
from rich.console import Console

from sanitize_db.config import SanitizeConfig


class Context:
    """Shared context for CLI commands."""

    def __init__(self):
        self.session: Optional[Session] = None
        self.engine = None
        self.config: Optional[SanitizeConfig] = None
        self.verbose: bool = False
        self.console = Console()
        self.stderr_console = Console(file=sys.stderr)
