"""Async Solana RPC client for the Token Launcher."""

# Standard library imports
from typing import Optional, Sequence, Union

# Third-party library imports
from solana.rpc.async_api import AsyncClient
from solana.rpc.commitment import Commitment, Confirmed
from solana.rpc.types import TxOpts
from solders.instruction import Instruction
from solders.keypair import Keypair
from solders.message import Message
from solders.pubkey import Pubkey
from solders.transaction import Transaction

# Internal imports
from token_launcher.config import Network, SolanaConfig
from token_launcher.logging_config import get_logger, log_with_context
from token_launcher.metaplex import decode_metadata_account, find_metadata_pda
from token_launcher.models.token import TokenMetadata
from token_launcher.utils.errors import NetworkError, handle_network_errors

# Get logger
logger = get_logger(__name__)

SERVICE_NAME = "Solana RPC"


def to_pubkey(address: Union[str, Pubkey]) -> Pubkey:
    """Accept either a base58 string or a Pubkey."""
    if isinstance(address, Pubkey):
        return address
    return Pubkey.from_string(address)


class TokenChainClient:
    """Client for the Solana RPC calls the launcher makes."""

    def __init__(self, config: SolanaConfig, network: Network, client: Optional[AsyncClient] = None):
        """Initialize the chain client.

        Args:
            config: Solana configuration
            network: Network to connect to
            client: Optional preconfigured AsyncClient
        """
        self.config = config
        self.network = Network.from_value(network)
        self.rpc_url = config.rpc_url(self.network)
        self.client = client or AsyncClient(
            self.rpc_url,
            commitment=Commitment(config.commitment),
            timeout=config.timeout,
        )

    @handle_network_errors(SERVICE_NAME)
    async def get_account_data(self, address: Union[str, Pubkey]) -> Optional[bytes]:
        """Raw data of an account, or None if the account does not exist."""
        resp = await self.client.get_account_info(to_pubkey(address))
        if resp.value is None:
            return None
        return bytes(resp.value.data)

    async def get_metadata(self, mint: Union[str, Pubkey]) -> Optional[TokenMetadata]:
        """Metaplex metadata of a mint.

        Returns:
            TokenMetadata, or None if the mint has no readable metadata account
        """
        metadata_pda = find_metadata_pda(to_pubkey(mint))
        data = await self.get_account_data(metadata_pda)
        if data is None:
            logger.info(f"No metadata account at {metadata_pda} for mint {mint}")
            return None

        try:
            return decode_metadata_account(data)
        except ValueError as e:
            logger.warning(f"Could not decode metadata account {metadata_pda}: {e}")
            return None

    @handle_network_errors(SERVICE_NAME)
    async def get_minimum_balance_for_rent_exemption(self, size: int) -> int:
        resp = await self.client.get_minimum_balance_for_rent_exemption(size)
        return resp.value

    @handle_network_errors(SERVICE_NAME)
    async def send_and_confirm(
        self,
        instructions: Sequence[Instruction],
        payer: Keypair,
        signers: Sequence[Keypair] = ()
    ) -> str:
        """Build, sign, send and confirm a transaction.

        Args:
            instructions: Instructions in execution order
            payer: Fee payer, always a signer
            signers: Additional signers

        Returns:
            Transaction signature

        Raises:
            NetworkError: If the RPC node rejects or drops the transaction
        """
        blockhash = (await self.client.get_latest_blockhash()).value.blockhash
        message = Message.new_with_blockhash(list(instructions), payer.pubkey(), blockhash)

        all_signers = [payer] + [s for s in signers if s.pubkey() != payer.pubkey()]
        transaction = Transaction(all_signers, message, blockhash)

        opts = TxOpts(
            skip_preflight=self.config.skip_preflight,
            preflight_commitment=Confirmed,
            max_retries=self.config.max_retries,
        )
        resp = await self.client.send_transaction(transaction, opts=opts)
        signature = resp.value
        if signature is None:
            raise NetworkError(f"Transaction was not accepted: {resp}", service_name=SERVICE_NAME)

        log_with_context(logger, "info", "Transaction sent", signature=str(signature), network=self.network.value)
        await self.client.confirm_transaction(signature, commitment=Confirmed)
        return str(signature)

    async def __aenter__(self):
        """Async context manager entry.

        Returns:
            Self
        """
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        """Close the client and release resources."""
        await self.client.close()
