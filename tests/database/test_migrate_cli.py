"""Tests for the `memberhub-migrate` command line."""

import os
from unittest.mock import AsyncMock, patch

from click.testing import CliRunner

from memberhub.database import cli


@patch.object(cli, "_seed", new_callable=AsyncMock)
@patch.object(cli.command, "upgrade")
def test_upgrade_then_seed(mock_upgrade, mock_seed):
    result = CliRunner().invoke(cli.main, ["upgrade", "--seed"])

    assert result.exit_code == 0
    config, revision = mock_upgrade.call_args.args
    assert revision == "head"
    assert config.config_file_name == str(cli.ALEMBIC_INI)
    mock_seed.assert_awaited_once()


@patch.object(cli, "_seed", new_callable=AsyncMock)
@patch.object(cli.command, "upgrade", side_effect=RuntimeError("boom"))
def test_failed_upgrade_exits_without_seeding(mock_upgrade, mock_seed):
    result = CliRunner().invoke(cli.main, ["upgrade", "--seed"])

    assert result.exit_code == 1
    mock_seed.assert_not_awaited()


@patch.object(cli.command, "downgrade")
def test_database_url_option_exported(mock_downgrade):
    with patch.dict(os.environ, {}, clear=False):
        result = CliRunner().invoke(
            cli.main, ["--database-url", "postgresql://cli/db", "downgrade", "base"]
        )

        assert result.exit_code == 0
        assert os.environ["MEMBERHUB_DATABASE_URL"] == "postgresql://cli/db"
    assert mock_downgrade.call_args.args[1] == "base"


@patch.object(cli, "_check", new_callable=AsyncMock, return_value=(False, "refused"))
def test_check_reports_unreachable_database(mock_check):
    result = CliRunner().invoke(cli.main, ["check"])

    assert result.exit_code == 1
    assert "refused" in result.output
