"""Validation utilities for Token Launcher.

This module provides utilities for validating Solana-specific data and the
token configuration entered by the user.
"""

import re
from typing import Any, Dict, Optional

import base58

from token_launcher.constants import MAX_DECIMALS, MAX_NAME_LENGTH, MAX_SYMBOL_LENGTH
from token_launcher.utils.errors import ValidationError

# Solana public key validation pattern (base58 format)
PUBKEY_PATTERN = re.compile(r"^[1-9A-HJ-NP-Za-km-z]{32,44}$")
SYMBOL_PATTERN = re.compile(r"^[A-Z0-9$_-]+$")


def validate_public_key(pubkey: str) -> bool:
    """Validate a Solana public key.

    The key must be base58 and decode to exactly 32 bytes.

    Args:
        pubkey: The public key to validate

    Returns:
        True if the public key is valid, False otherwise
    """
    if not pubkey or not isinstance(pubkey, str):
        return False
    if not PUBKEY_PATTERN.match(pubkey):
        return False
    try:
        return len(base58.b58decode(pubkey)) == 32
    except ValueError:
        return False


def validate_solana_address(address: str, field_name: str = "address") -> None:
    """Validate a Solana address and raise an exception if invalid.

    Args:
        address: The address to validate
        field_name: Name of the field for the error message

    Raises:
        ValidationError: If the address is invalid
    """
    if not validate_public_key(address):
        raise ValidationError(f"Invalid Solana {field_name}: {address}", field=field_name)


def validate_transaction_signature(signature: str) -> bool:
    """Validate a Solana transaction signature.

    Args:
        signature: The transaction signature to validate

    Returns:
        True if the signature is valid, False otherwise
    """
    if not signature or not isinstance(signature, str):
        return False

    # Transaction signatures are also base58 encoded but longer than public keys
    return bool(re.match(r"^[1-9A-HJ-NP-Za-km-z]{43,128}$", signature))


def validate_required(value: Optional[str], field_name: str) -> str:
    """Ensure a text field is present and not blank."""
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} is required", field=field_name)
    return str(value).strip()


def _check_byte_length(value: str, limit: int, field_name: str) -> str:
    if len(value.encode("utf-8")) > limit:
        raise ValidationError(
            f"Token {field_name} must be at most {limit} bytes (UTF-8)",
            field=field_name
        )
    return value


def validate_name(name: Optional[str]) -> str:
    """Validate a token name against the on-chain metadata limit.

    Raises:
        ValidationError: If the name is empty or longer than 32 bytes
    """
    return _check_byte_length(validate_required(name, "name"), MAX_NAME_LENGTH, "name")


def validate_symbol(symbol: Optional[str]) -> str:
    """Validate a token symbol and return it upper-cased.

    The symbol also names the local record file, so only letters, digits,
    `$`, `_` and `-` are accepted.

    Raises:
        ValidationError: If the symbol is empty, too long or has other characters
    """
    symbol = validate_required(symbol, "symbol").upper()
    if not SYMBOL_PATTERN.match(symbol):
        raise ValidationError(
            "Token symbol may only contain letters, digits, '$', '_' and '-'",
            field="symbol"
        )
    return _check_byte_length(symbol, MAX_SYMBOL_LENGTH, "symbol")


def validate_decimals(decimals: Any) -> int:
    """Validate token decimals (0-18)."""
    try:
        value = int(decimals)
    except (TypeError, ValueError):
        raise ValidationError(f"Decimals must be an integer, got {decimals!r}", field="decimals")
    if value < 0 or value > MAX_DECIMALS:
        raise ValidationError(f"Decimals must be between 0 and {MAX_DECIMALS}", field="decimals")
    return value


def validate_amount(amount: Any, field_name: str = "amount", allow_zero: bool = False) -> int:
    """Validate a whole token amount.

    Args:
        amount: Value to validate
        field_name: Name of the field for the error message
        allow_zero: Whether zero is accepted

    Returns:
        The amount as an integer

    Raises:
        ValidationError: If the amount is not a non-negative integer
    """
    try:
        value = int(amount)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a whole number", field=field_name)
    if value < 0 or (value == 0 and not allow_zero):
        bound = "0 or greater" if allow_zero else "greater than 0"
        raise ValidationError(f"{field_name} must be {bound}", field=field_name)
    return value


def validate_token_config(config: Dict[str, Any]) -> Dict[str, Any]:
    """Validate the token configuration collected for token creation.

    Args:
        config: Dict with name, symbol, description, decimals and initial_supply

    Returns:
        A normalized copy of the configuration

    Raises:
        ValidationError: On the first invalid field
    """
    missing = [field for field in ("name", "symbol", "description") if not config.get(field)]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}", field=missing[0])

    normalized = dict(config)
    normalized["name"] = validate_name(config["name"])
    normalized["symbol"] = validate_symbol(config["symbol"])
    normalized["description"] = validate_required(config["description"], "description")
    normalized["decimals"] = validate_decimals(config.get("decimals", 0))
    normalized["initial_supply"] = validate_amount(
        config.get("initial_supply", 0), "initial_supply", allow_zero=True
    )
    return normalized
