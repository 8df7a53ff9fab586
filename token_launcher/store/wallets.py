"""Wallet keypair files.

A wallet file is the Solana CLI keypair format: a JSON array of the 64
secret key bytes.
"""

import json
from pathlib import Path
from typing import List, Union

from solders.keypair import Keypair

from token_launcher.logging_config import get_logger
from token_launcher.utils.errors import ConfigurationError, NotFoundError, ValidationError

logger = get_logger(__name__)

KEYPAIR_LENGTH = 64


class WalletStore:
    """Lists and loads keypair files from the wallets directory."""

    def __init__(self, wallets_dir: Union[str, Path]):
        self.wallets_dir = Path(wallets_dir)

    def ensure_directory(self) -> None:
        try:
            self.wallets_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ConfigurationError(
                f"Cannot create wallets directory {self.wallets_dir}: {e}",
                details={"path": str(self.wallets_dir)}
            ) from e

    def list_wallets(self) -> List[Path]:
        """Wallet files, sorted by name."""
        if not self.wallets_dir.is_dir():
            return []
        return sorted(p for p in self.wallets_dir.glob("*.json") if p.is_file())

    def resolve(self, name: Union[str, Path]) -> Path:
        """Resolve a bare file name against the wallets directory."""
        path = Path(name)
        if not path.is_absolute() and not path.exists():
            path = self.wallets_dir / path
        return path

    def load_keypair(self, path: Union[str, Path]) -> Keypair:
        """Load a keypair file.

        Args:
            path: Wallet file path, or a file name inside the wallets directory

        Returns:
            The keypair

        Raises:
            NotFoundError: If the file does not exist
            ValidationError: If the file is not a 64-byte JSON array
        """
        path = self.resolve(path)
        if not path.is_file():
            raise NotFoundError(f"Wallet file not found: {path}", "wallet", str(path))

        try:
            with open(path, "r", encoding="utf-8") as f:
                secret = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ValidationError(f"Wallet file {path.name} is not valid JSON: {e}", field="wallet") from e

        if (
            not isinstance(secret, list)
            or len(secret) != KEYPAIR_LENGTH
            or not all(isinstance(b, int) and 0 <= b <= 255 for b in secret)
        ):
            raise ValidationError(
                f"Wallet file {path.name} must contain an array of {KEYPAIR_LENGTH} bytes",
                field="wallet"
            )

        try:
            keypair = Keypair.from_bytes(bytes(secret))
        except ValueError as e:
            raise ValidationError(f"Wallet file {path.name} holds an invalid keypair: {e}", field="wallet") from e

        logger.debug(f"Loaded wallet {keypair.pubkey()} from {path}")
        return keypair
