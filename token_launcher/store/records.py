"""
Local token record store.

One JSON document per created token, named `<symbol>-<epoch-millis>.json`,
under the tokens directory. Records are created once and then patched in
place by mint address.
"""

import itertools
import json
import re
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from token_launcher.constants import TOOL_VERSION
from token_launcher.logging_config import get_logger
from token_launcher.models.token import TokenRecord, utc_now
from token_launcher.utils.errors import ConfigurationError, RecordParseError, ValidationError

logger = get_logger(__name__)

UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9$_-]+")


def safe_file_stem(symbol: str) -> str:
    """Symbol reduced to characters that are safe in a file name."""
    return UNSAFE_FILENAME_CHARS.sub("_", symbol).strip("_") or "TOKEN"


@dataclass
class RecordEntry:
    """One file seen while iterating the store: a record or the reason it failed."""

    path: Path
    record: Optional[TokenRecord] = None
    error: Optional[RecordParseError] = None

    @property
    def ok(self) -> bool:
        return self.record is not None


class TokenRecordStore:
    """Reads and writes token records in a directory."""

    def __init__(self, tokens_dir: Union[str, Path]):
        self.tokens_dir = Path(tokens_dir)

    def ensure_directory(self) -> None:
        """Create the tokens directory if needed.

        Raises:
            ConfigurationError: If the directory cannot be created
        """
        try:
            self.tokens_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ConfigurationError(
                f"Cannot create tokens directory {self.tokens_dir}: {e}",
                details={"path": str(self.tokens_dir)}
            ) from e

    def list(self) -> List[Path]:
        """JSON files in the tokens directory, sorted by name."""
        if not self.tokens_dir.is_dir():
            return []
        return sorted(p for p in self.tokens_dir.glob("*.json") if p.is_file())

    def load(self, path: Union[str, Path]) -> TokenRecord:
        """Load one record.

        Raises:
            RecordParseError: If the file is unreadable, not JSON, or not a token record
        """
        path = Path(path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise RecordParseError(str(path), str(e)) from e

        if not isinstance(data, dict):
            raise RecordParseError(str(path), "expected a JSON object")

        try:
            return TokenRecord.model_validate(data)
        except PydanticValidationError as e:
            raise RecordParseError(str(path), f"{e.error_count()} invalid field(s)") from e

    def iter_records(self) -> Iterator[RecordEntry]:
        """Yield every file in the store, parsed or with its parse error."""
        for path in self.list():
            try:
                yield RecordEntry(path=path, record=self.load(path))
            except RecordParseError as e:
                logger.warning(e.message)
                yield RecordEntry(path=path, error=e)

    def records(self) -> List[TokenRecord]:
        """All readable records; broken files are skipped."""
        return [entry.record for entry in self.iter_records() if entry.ok]

    def find_path(self, mint_address: str) -> Optional[Path]:
        """Path of the file holding the record for a mint address."""
        for entry in self.iter_records():
            if entry.ok and entry.record.mint_address == mint_address:
                return entry.path
        return None

    def load_by_mint_address(self, mint_address: str) -> Optional[TokenRecord]:
        """Record for a mint address, or None if none is stored."""
        path = self.find_path(mint_address)
        return self.load(path) if path else None

    def save(self, record: TokenRecord) -> Path:
        """Write a new record, stamping createdAt and toolVersion.

        Returns:
            Path of the written file

        Raises:
            ValidationError: If a record for the mint address already exists
            ConfigurationError: If the tokens directory cannot be created
        """
        if self.find_path(record.mint_address) is not None:
            raise ValidationError(
                f"A record for {record.mint_address} already exists",
                field="mintAddress"
            )

        self.ensure_directory()
        record = record.model_copy(update={
            "created_at": record.created_at or utc_now(),
            "tool_version": TOOL_VERSION,
        })

        path = self._create_file(record)
        logger.info(f"Saved token record {record.mint_address} to {path}")
        return path

    def patch(self, mint_address: str, changes: Dict[str, Any]) -> Optional[TokenRecord]:
        """Overlay changes on the stored record and rewrite its file.

        Returns:
            The updated record, or None when no record matches (no file is created)
        """
        path = self.find_path(mint_address)
        if path is None:
            logger.warning(f"No token record found for {mint_address}; nothing patched")
            return None

        record = self.load(path).patched(changes)
        self._write(path, record)
        logger.info(f"Patched token record {mint_address}: {sorted(changes)}")
        return record

    def _create_file(self, record: TokenRecord) -> Path:
        """Write a record to a new `<symbol>-<millis>.json`, never replacing a file."""
        base = f"{safe_file_stem(record.symbol)}-{int(time.time() * 1000)}"
        candidates = itertools.chain([base], (f"{base}-{n}" for n in itertools.count(1)))
        for stem in candidates:
            path = self.tokens_dir / f"{stem}.json"
            try:
                self._write(path, record, mode="x")
            except FileExistsError:
                continue
            return path

    @staticmethod
    def _write(path: Path, record: TokenRecord, mode: str = "w") -> None:
        with open(path, mode, encoding="utf-8") as f:
            json.dump(record.to_json_dict(), f, indent=2)
