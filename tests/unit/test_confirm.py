"""Tests for the confirmation gate."""

import click
import pytest
from unittest.mock import MagicMock

from sanitize_db.confirm import confirm, require_confirmation, CONFIRM_MESSAGE
from sanitize_db.exceptions import ConfirmationDeclined


class TestConfirm:

    def test_yes(self):
        prompt = MagicMock(return_value=True)
        assert confirm(prompt=prompt) is True
        prompt.assert_called_once_with(CONFIRM_MESSAGE, default=False)

    def test_no(self):
        assert confirm(prompt=MagicMock(return_value=False)) is False

    @pytest.mark.parametrize('error', [click.Abort, EOFError, KeyboardInterrupt])
    def test_interrupted_counts_as_no(self, error):
        assert confirm(prompt=MagicMock(side_effect=error)) is False

    def test_auto_yes_skips_prompt(self):
        prompt = MagicMock()
        assert confirm(auto_yes=True, prompt=prompt) is True
        prompt.assert_not_called()


class TestRequireConfirmation:

    def test_declined_raises(self):
        with pytest.raises(ConfirmationDeclined):
            require_confirmation(prompt=MagicMock(return_value=False))

    def test_accepted(self):
        require_confirmation(prompt=MagicMock(return_value=True))
