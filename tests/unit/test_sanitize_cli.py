import pytest
from click.testing import CliRunner
from unittest.mock import patch, MagicMock
from sqlalchemy.exc import OperationalError

from cli.cmds.sanitize import cli
from cli.core.utils import EXIT_SUCCESS, EXIT_DECLINED, EXIT_CONFIG, EXIT_ERROR
from sanitize_db.config import SanitizeConfig
from sanitize_db.accessors import EntityAccessor
from sanitize_db.exceptions import BulkOperationFailure
from sanitize_db.mutator import BulkMutator

from fixtures.test_config import STAFF_DOMAIN, create_plugin_table, snapshot, user_row


class TestSanitizeCli:

    @pytest.fixture
    def runner(self):
        return CliRunner()

    @pytest.fixture(autouse=True)
    def no_environment(self):
        # Keep the developer's .env and root logging out of the tests
        with patch.object(SanitizeConfig, '_load_env', return_value={}), \
             patch('cli.cmds.sanitize.setup_logging'):
            yield

    @pytest.fixture
    def mock_db_session(self, session, seeded):
        with patch('cli.cmds.sanitize.create_sanitize_engine') as mock_create_engine:
            mock_create_engine.return_value = (MagicMock(), lambda: session)
            yield session

    def invoke(self, runner, *args, **kwargs):
        return runner.invoke(cli, ['--database-url', 'sqlite://', '--seed', '7', *args], **kwargs)

    def test_cli_help(self, runner):
        result = runner.invoke(cli, ['--help'])
        assert result.exit_code == 0
        assert "Sanitize sensitive data in a WordPress database" in result.output
        for command in ('db', 'transients', 'comments', 'users', 'gravityforms', 'woocommerce'):
            assert command in result.output

    def test_no_database_configured(self, runner):
        result = runner.invoke(cli, ['transients', '--yes'])
        assert result.exit_code == EXIT_CONFIG
        assert "No database configured" in result.output

    def test_connection_error(self, runner):
        with patch('cli.cmds.sanitize.create_sanitize_engine',
                   side_effect=OperationalError('connect', {}, Exception('refused'))):
            result = self.invoke(runner, 'transients', '--yes')
        assert result.exit_code == EXIT_CONFIG
        assert "Error connecting to database" in result.output

    def test_bad_config_file(self, runner, tmp_path):
        result = runner.invoke(cli, ['--config', str(tmp_path / 'missing.yaml'), 'transients'])
        assert result.exit_code == EXIT_CONFIG
        assert "Configuration error" in result.output

    def test_decline_changes_nothing(self, runner, mock_db_session):
        before = snapshot(mock_db_session)

        result = self.invoke(runner, 'db', input='n\n')

        assert result.exit_code == EXIT_DECLINED
        assert "Aborted" in result.output
        assert snapshot(mock_db_session) == before

    def test_no_input_changes_nothing(self, runner, mock_db_session):
        before = snapshot(mock_db_session)
        result = self.invoke(runner, 'users')
        assert result.exit_code == EXIT_DECLINED
        assert snapshot(mock_db_session) == before

    def test_db_confirmed_interactively(self, runner, mock_db_session):
        result = self.invoke(runner, 'db', input='y\n')
        assert result.exit_code == EXIT_SUCCESS
        assert "Sanitization Summary" in result.output
        assert "Database sanitized" in result.output

    def test_db_preserve_domain(self, runner, mock_db_session, seeded):
        staff = user_row(mock_db_session, seeded['staff'])

        result = self.invoke(runner, 'db', '--yes', '--preserve-domain', STAFF_DOMAIN)

        assert result.exit_code == EXIT_SUCCESS
        assert user_row(mock_db_session, seeded['staff']) == staff

    def test_transients(self, runner, mock_db_session):
        result = self.invoke(runner, 'transients', '--yes')
        assert result.exit_code == EXIT_SUCCESS
        assert "transients sanitized" in result.output

    def test_plugin_absent_skips(self, runner, mock_db_session):
        result = self.invoke(runner, 'gravityforms', '--yes')
        assert result.exit_code == EXIT_SUCCESS
        assert "Skipped" in result.output

    def test_plugin_force(self, runner, mock_db_session):
        result = self.invoke(runner, 'gravityforms', '--yes', '--force')
        assert result.exit_code == EXIT_SUCCESS
        assert "gravityforms sanitized" in result.output

    def test_plugin_present_by_table(self, runner, mock_db_session):
        create_plugin_table(mock_db_session, 'wp_rg_lead')
        result = self.invoke(runner, 'gravityforms', '-y')
        assert result.exit_code == EXIT_SUCCESS
        assert "tables_truncated: 1" in result.output

    def test_stage_failure_exit_code(self, runner, mock_db_session):
        error = BulkOperationFailure('replace', 'wp_usermeta', Exception('lost connection'))
        with patch.object(BulkMutator, 'replace_attribute', side_effect=error):
            result = self.invoke(runner, 'woocommerce', '--yes')
        assert result.exit_code == EXIT_ERROR
        assert "Error" in result.output

    def test_pipeline_failure_reported(self, runner, mock_db_session):
        error = BulkOperationFailure('delete', 'wp_usermeta', Exception('lost connection'))
        with patch.object(BulkMutator, 'delete_attribute', side_effect=error):
            result = self.invoke(runner, 'db', '--yes')
        assert result.exit_code == EXIT_ERROR
        assert "FAILED" in result.output
        assert "woocommerce" in result.output

    def test_database_error_mid_run_reported(self, runner, mock_db_session):
        error = OperationalError('select', {}, Exception('server has gone away'))
        with patch.object(EntityAccessor, 'iter_content', side_effect=error):
            result = self.invoke(runner, 'db', '--yes')
        assert result.exit_code == EXIT_ERROR
        assert "Sanitization Summary" in result.output
        assert "FAILED" in result.output
