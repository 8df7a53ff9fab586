"""Unit tests for the interactive launcher and its entry point."""

from unittest.mock import AsyncMock, patch

import pytest
from click.testing import CliRunner

from token_launcher.__main__ import main
from token_launcher.cli.app import LauncherApp
from token_launcher.config import Network
from token_launcher.utils.errors import NotFoundError


@pytest.fixture
def app(config):
    launcher = LauncherApp(config)
    launcher.initialize()
    return launcher


class TestLauncherApp:
    """Test suite for LauncherApp."""

    def test_initialize_creates_directories(self, app, config):
        assert config.paths.wallets.is_dir()
        assert config.paths.tokens.is_dir()
        assert config.paths.config.is_dir()
        assert app.network is Network.DEVNET

    @pytest.mark.asyncio
    async def test_dispatch_reports_failures(self, app):
        """A failed flow returns to the menu instead of raising."""
        app.check_token = AsyncMock(side_effect=NotFoundError("missing", resource_type="mint", resource_id="x"))

        await app.dispatch("check")

        app.check_token.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_dispatch_reports_unexpected_errors(self, app):
        app.show_help = AsyncMock(side_effect=RuntimeError("boom"))

        await app.dispatch("help")

    @pytest.mark.asyncio
    async def test_list_tokens_with_broken_file(self, app, record_store, sample_record):
        app.store = record_store
        record_store.save(sample_record)
        (record_store.tokens_dir / "broken-1.json").write_text("{not json")

        await app.list_tokens()

        assert len(list(record_store.iter_records())) == 2

    @pytest.mark.asyncio
    async def test_session_network_change(self, app):
        with patch("token_launcher.cli.app.prompts.choose", return_value="network"), \
                patch("token_launcher.cli.app.prompts.select_network", return_value=Network.TESTNET):
            await app.settings()

        assert app.network is Network.TESTNET
        assert app.config.default_network is Network.DEVNET


class TestMain:
    """Test suite for the click entry point."""

    @pytest.fixture
    def env(self, monkeypatch, tmp_path):
        for name in ("WALLETS_DIR", "TOKENS_DIR", "CONFIG_DIR"):
            monkeypatch.setenv(name, str(tmp_path / name.lower()))
        env_file = tmp_path / ".env"
        env_file.write_text("")
        return str(env_file)

    def test_startup_failure_exits_1(self, env, monkeypatch):
        monkeypatch.setenv("DEFAULT_DECIMALS", "99")

        result = CliRunner().invoke(main, ["--env-file", env])

        assert result.exit_code == 1

    def test_quit_exits_0(self, env):
        with patch("token_launcher.__main__.configure_logging"), \
                patch.object(LauncherApp, "run", new=AsyncMock()) as run:
            result = CliRunner().invoke(main, ["--env-file", env, "--network", "testnet"])

        assert result.exit_code == 0
        run.assert_awaited_once()
