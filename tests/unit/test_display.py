"""Unit tests for error hints shown by the launcher."""

import pytest

from token_launcher.cli.display import error_hint
from token_launcher.utils.errors import (
    ConfigurationError,
    ExternalProcessError,
    ImmutableMetadataError,
    NetworkError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)


@pytest.mark.parametrize("error,expected", [
    (UnauthorizedError("not authority", required_authority="a", wallet="b"), "update authority"),
    (ImmutableMetadataError("mint"), "never be changed"),
    (ConfigurationError("no jwt", details={"setting": "PINATA_JWT"}), "PINATA_JWT"),
    (NetworkError("Pinata request failed: timeout", service_name="Pinata"), "PINATA_JWT"),
    (NetworkError("Solana RPC request failed", service_name="Solana RPC"), "RPC URL"),
    (NotFoundError("Token not found", resource_type="mint", resource_id="x"), "selected network"),
    (NotFoundError("No wallets", resource_type="wallet", resource_id="wallets"), "wallets directory"),
])
def test_error_hint(error, expected):
    assert expected in error_hint(error)


def test_process_diagnostic_hints():
    funds = ExternalProcessError("mint failed", command="spl-token mint", raw_diagnostic="Error: insufficient funds")
    disabled = ExternalProcessError(
        "revoke failed", command="spl-token authorize", raw_diagnostic="authority is already disabled"
    )

    assert "airdrop" in error_hint(funds)
    assert "already been revoked" in error_hint(disabled)


def test_no_hint_for_plain_validation():
    assert error_hint(ValidationError("Token name is required", field="name")) is None
