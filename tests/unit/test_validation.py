"""Unit tests for input validation."""

import pytest

from token_launcher.utils.errors import ValidationError
from token_launcher.utils.validation import (
    validate_amount,
    validate_decimals,
    validate_name,
    validate_public_key,
    validate_solana_address,
    validate_symbol,
    validate_token_config,
    validate_transaction_signature,
)

VALID_CONFIG = {
    "name": "Test Token",
    "symbol": "test",
    "description": "A token",
    "decimals": "9",
    "initial_supply": "1000",
}


def test_validate_public_key():
    assert validate_public_key("EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v")
    assert validate_public_key("11111111111111111111111111111111")
    assert not validate_public_key("not-a-valid-solana-public-key")
    assert not validate_public_key("")
    assert not validate_public_key(None)


def test_validate_solana_address_raises():
    with pytest.raises(ValidationError) as excinfo:
        validate_solana_address("abc", "mint_address")
    assert excinfo.value.details["field"] == "mint_address"


def test_validate_transaction_signature():
    assert validate_transaction_signature("5" * 88)
    assert not validate_transaction_signature("0OIl")


def test_symbol_is_upper_cased():
    assert validate_symbol(" abc ") == "ABC"


def test_symbol_too_long():
    with pytest.raises(ValidationError):
        validate_symbol("ABCDEFGHIJK")


@pytest.mark.parametrize("symbol", ["a/b", "..\\x", "AB C", "T.KN", "TK\x00"])
def test_symbol_rejects_unsafe_characters(symbol):
    with pytest.raises(ValidationError) as excinfo:
        validate_symbol(symbol)
    assert excinfo.value.details["field"] == "symbol"


def test_symbol_allows_common_marks():
    assert validate_symbol("$wif") == "$WIF"
    assert validate_symbol("usd-c_2") == "USD-C_2"


def test_name_byte_limit():
    assert validate_name(" " + "N" * 32 + " ") == "N" * 32
    with pytest.raises(ValidationError):
        validate_name("N" * 33)
    # 11 three-byte characters are 33 bytes
    with pytest.raises(ValidationError):
        validate_name("\u20ac" * 11)


def test_token_config_rejects_long_name():
    with pytest.raises(ValidationError) as excinfo:
        validate_token_config(dict(VALID_CONFIG, name="N" * 40))
    assert excinfo.value.details["field"] == "name"


@pytest.mark.parametrize("value", [-1, 19, "nine", None])
def test_invalid_decimals(value):
    with pytest.raises(ValidationError):
        validate_decimals(value)


def test_amount_bounds():
    assert validate_amount("10") == 10
    assert validate_amount(0, allow_zero=True) == 0
    with pytest.raises(ValidationError):
        validate_amount(0)
    with pytest.raises(ValidationError):
        validate_amount("1.5")


def test_token_config_normalized():
    config = validate_token_config(VALID_CONFIG)

    assert config["symbol"] == "TEST"
    assert config["decimals"] == 9
    assert config["initial_supply"] == 1000


@pytest.mark.parametrize("missing", ["name", "symbol", "description"])
def test_token_config_required_fields(missing):
    config = dict(VALID_CONFIG)
    config[missing] = ""

    with pytest.raises(ValidationError) as excinfo:
        validate_token_config(config)
    assert excinfo.value.details["field"] == missing
