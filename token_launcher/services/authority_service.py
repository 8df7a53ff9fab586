"""
spl-token command dispatcher.

Mint, revoke, associated-account creation and balance lookups go through
the `spl-token` program. Each run is tracked as an operation that moves
from pending to executing and ends in succeeded or failed. The program's
output is only trusted for its exit code and the `Signature: <sig>` line.
"""

import asyncio
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List, Optional, Sequence, Union

from token_launcher.config import Network
from token_launcher.constants import ACCOUNT_EXISTS_MARKER, SIGNATURE_PATTERN
from token_launcher.logging_config import get_logger, log_with_context
from token_launcher.utils.errors import ExternalProcessError

logger = get_logger(__name__)


class OperationState(str, Enum):
    """Lifecycle of a single dispatched operation."""

    PENDING = "pending"
    EXECUTING = "executing"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class OperationKind(str, Enum):
    """Operations the dispatcher can run."""

    REVOKE_MINT = "revoke_mint"
    REVOKE_FREEZE = "revoke_freeze"
    MINT = "mint"
    CREATE_ACCOUNT = "create_account"
    BALANCE = "balance"


class AuthorityKind(str, Enum):
    """Authorities that can be revoked."""

    MINT = "mint"
    FREEZE = "freeze"

    @property
    def operation(self) -> OperationKind:
        return OperationKind.REVOKE_MINT if self is AuthorityKind.MINT else OperationKind.REVOKE_FREEZE


@dataclass
class OperationResult:
    """Outcome of one external program run."""

    operation: OperationKind
    state: OperationState = OperationState.PENDING
    signature: Optional[str] = None
    raw_diagnostic: str = ""
    output: str = ""

    @property
    def success(self) -> bool:
        return self.state is OperationState.SUCCEEDED

    def raise_for_failure(self) -> "OperationResult":
        """Raise ExternalProcessError unless the operation succeeded."""
        if not self.success:
            raise ExternalProcessError(
                f"{self.operation.value} failed: {self.raw_diagnostic or 'no output'}",
                command=self.operation.value,
                raw_diagnostic=self.raw_diagnostic
            )
        return self


def extract_signature(output: str) -> Optional[str]:
    """Transaction signature printed by spl-token, if any."""
    match = SIGNATURE_PATTERN.search(output or "")
    return match.group(1) if match else None


class SplTokenCli:
    """Runs spl-token commands with per-command keypair and cluster flags."""

    def __init__(self, binary: str = "spl-token"):
        self.binary = binary

    async def run(self, operation: OperationKind, args: Sequence[str]) -> OperationResult:
        """Run spl-token with the given arguments.

        Never raises for process failures; the result carries the state and
        the raw diagnostic text instead.
        """
        result = OperationResult(operation=operation)
        result.state = OperationState.EXECUTING
        command = [self.binary, *args]
        log_with_context(logger, "info", "Running spl-token", operation=operation.value, command=" ".join(command))

        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            result.state = OperationState.FAILED
            result.raw_diagnostic = f"Could not run {self.binary}: {e}"
            logger.error(result.raw_diagnostic)
            return result

        stdout, stderr = await process.communicate()
        result.output = stdout.decode("utf-8", errors="replace").strip()
        error_text = stderr.decode("utf-8", errors="replace").strip()

        if process.returncode == 0:
            result.state = OperationState.SUCCEEDED
            result.signature = extract_signature(result.output) or extract_signature(error_text)
            result.raw_diagnostic = error_text
            log_with_context(logger, "info", "spl-token succeeded", operation=operation.value, signature=result.signature)
        else:
            result.state = OperationState.FAILED
            result.raw_diagnostic = error_text or result.output
            log_with_context(
                logger, "error", "spl-token failed",
                operation=operation.value, returncode=process.returncode, diagnostic=result.raw_diagnostic
            )
        return result

    @staticmethod
    def _common_args(network: Network, keypair_path: Union[str, Path]) -> List[str]:
        return [
            "--url", Network.from_value(network).cli_cluster,
            "--fee-payer", str(keypair_path),
        ]

    async def revoke_authority(
        self,
        mint_address: str,
        authority: AuthorityKind,
        network: Network,
        keypair_path: Union[str, Path]
    ) -> OperationResult:
        """Permanently disable the mint or freeze authority of a token."""
        authority = AuthorityKind(authority)
        args = [
            "authorize", mint_address, authority.value, "--disable",
            "--authority", str(keypair_path),
            *self._common_args(network, keypair_path),
        ]
        return await self.run(authority.operation, args)

    async def create_associated_account(
        self,
        mint_address: str,
        network: Network,
        keypair_path: Union[str, Path],
        owner: Optional[str] = None
    ) -> OperationResult:
        """Create the associated token account; an existing account counts as success."""
        args = ["create-account", mint_address, *self._common_args(network, keypair_path)]
        if owner:
            args += ["--owner", owner]

        result = await self.run(OperationKind.CREATE_ACCOUNT, args)
        if not result.success and ACCOUNT_EXISTS_MARKER.lower() in result.raw_diagnostic.lower():
            logger.info(f"Associated token account for {mint_address} already exists")
            result.state = OperationState.SUCCEEDED
        return result

    async def mint(
        self,
        mint_address: str,
        amount: int,
        network: Network,
        keypair_path: Union[str, Path],
        recipient: Optional[str] = None
    ) -> OperationResult:
        """Mint tokens to the wallet's (or the recipient's) associated account."""
        args = [
            "mint", mint_address, str(amount),
            "--mint-authority", str(keypair_path),
            *self._common_args(network, keypair_path),
        ]
        if recipient:
            args += ["--recipient-owner", recipient]
        return await self.run(OperationKind.MINT, args)

    async def balance(self, mint_address: str, network: Network, owner: str) -> OperationResult:
        """Token balance of an owner; the amount is in `output`."""
        args = [
            "balance", mint_address,
            "--owner", owner,
            "--url", Network.from_value(network).cli_cluster,
        ]
        return await self.run(OperationKind.BALANCE, args)
