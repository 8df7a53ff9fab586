"""Unit tests for configuration loading."""

from pathlib import Path

import pytest

from token_launcher.config import Network, load_config
from token_launcher.utils.errors import ConfigurationError

ENV_VARS = [
    "TOKEN_LAUNCHER_NETWORK", "SOLANA_DEVNET_RPC_URL", "SOLANA_MAINNET_RPC_URL", "SOLANA_TESTNET_RPC_URL",
    "SOLANA_COMMITMENT", "SOLANA_MAX_RETRIES", "SOLANA_SKIP_PREFLIGHT", "SOLANA_TIMEOUT",
    "PINATA_JWT", "PINATA_API_URL", "PINATA_GATEWAY", "DEFAULT_DECIMALS", "SELLER_FEE_BASIS_POINTS",
    "METADATA_IS_MUTABLE", "DEFAULT_INITIAL_SUPPLY", "WALLETS_DIR", "TOKENS_DIR", "CONFIG_DIR",
    "SPL_TOKEN_BIN", "HTTP_TIMEOUT", "LOG_LEVEL",
]


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    for name in ENV_VARS:
        # registered with monkeypatch so values loaded from .env files are undone too
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    env_file = tmp_path / ".env"
    env_file.write_text("")
    return str(env_file)


def test_defaults(clean_env):
    config = load_config(clean_env)

    assert config.default_network is Network.DEVNET
    assert config.solana.rpc_url(Network.DEVNET) == "https://api.devnet.solana.com"
    assert config.solana.rpc_url("mainnet-beta") == "https://api.mainnet-beta.solana.com"
    assert config.solana.commitment == "confirmed"
    assert config.solana.max_retries == 3
    assert config.defaults.decimals == 9
    assert config.defaults.initial_supply == 1_000_000
    assert config.defaults.is_mutable is True
    assert config.pinata.is_configured is False
    assert config.paths.tokens == Path("./tokens")
    assert config.spl_token_bin == "spl-token"


def test_environment_values(clean_env, monkeypatch):
    monkeypatch.setenv("TOKEN_LAUNCHER_NETWORK", "mainnet-beta")
    monkeypatch.setenv("PINATA_JWT", "jwt")
    monkeypatch.setenv("DEFAULT_DECIMALS", "6")
    monkeypatch.setenv("METADATA_IS_MUTABLE", "false")
    monkeypatch.setenv("TOKENS_DIR", "/tmp/records")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    config = load_config(clean_env)

    assert config.default_network is Network.MAINNET
    assert config.pinata.is_configured is True
    assert config.defaults.decimals == 6
    assert config.defaults.is_mutable is False
    assert config.paths.tokens == Path("/tmp/records")
    assert config.log_level == "DEBUG"


def test_env_file_is_read(clean_env, monkeypatch):
    Path(clean_env).write_text("PINATA_JWT=from-file\n")

    config = load_config(clean_env)

    assert config.pinata.jwt == "from-file"


def test_overrides_take_precedence(clean_env, monkeypatch):
    monkeypatch.setenv("TOKEN_LAUNCHER_NETWORK", "devnet")

    config = load_config(clean_env, default_network=Network.TESTNET, log_level=None)

    assert config.default_network is Network.TESTNET
    assert config.log_level == "WARNING"


@pytest.mark.parametrize("name,value", [
    ("DEFAULT_DECIMALS", "19"),
    ("DEFAULT_DECIMALS", "nine"),
    ("SOLANA_COMMITMENT", "eventually"),
    ("SOLANA_DEVNET_RPC_URL", "not a url"),
    ("TOKEN_LAUNCHER_NETWORK", "localnet"),
    ("LOG_LEVEL", "LOUD"),
    ("SOLANA_MAX_RETRIES", "-1"),
])
def test_invalid_values(clean_env, monkeypatch, name, value):
    monkeypatch.setenv(name, value)

    with pytest.raises(ConfigurationError):
        load_config(clean_env)


def test_network_helpers():
    assert Network.from_value("MAINNET") is Network.MAINNET
    assert Network.MAINNET.cli_cluster == "mainnet-beta"
    assert Network.DEVNET.cli_cluster == "devnet"
    with pytest.raises(ValueError):
        Network.from_value("localnet")
