"""
Interactive menu loop and the wizard flow behind each menu entry.
"""

from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncIterator, Dict, Optional, Tuple

from rich.table import Table
from solders.keypair import Keypair

from token_launcher.cli import prompts
from token_launcher.cli.display import (
    console,
    print_banner,
    print_error,
    print_explorer_links,
    print_help,
    print_inspection,
    print_mint_result,
    print_record,
    print_revoke_result,
    print_settings,
    print_title,
)
from token_launcher.clients.pinata_client import PinataClient
from token_launcher.clients.solana_client import TokenChainClient
from token_launcher.config import LauncherConfig, Network
from token_launcher.constants import DEFAULT_IMAGE_URL
from token_launcher.logging_config import get_logger
from token_launcher.models.token import TokenUpdateRequest
from token_launcher.services.authority_service import AuthorityKind, SplTokenCli
from token_launcher.services.inspection_service import inspect_token
from token_launcher.services.token_service import TokenService
from token_launcher.store.records import TokenRecordStore
from token_launcher.store.wallets import WalletStore
from token_launcher.utils.errors import ConfigurationError, TokenLauncherError
from token_launcher.utils.validation import (
    validate_amount,
    validate_decimals,
    validate_name,
    validate_required,
    validate_symbol,
)

logger = get_logger(__name__)

MENU_OPTIONS = [
    ("Create New Token", "create"),
    ("Mint Tokens", "mint"),
    ("Revoke Authorities", "revoke"),
    ("Update Token Metadata", "update"),
    ("Check Token Info", "check"),
    ("Settings", "settings"),
    ("View Created Tokens", "list"),
    ("Help", "help"),
    ("Exit", "exit"),
]

UPDATE_FIELDS = [
    ("Name", "name"),
    ("Symbol", "symbol"),
    ("Description", "description"),
    ("Image URL", "image"),
    ("External URL", "external_url"),
]

# Fields written on chain carry the metadata length limits
FIELD_VALIDATORS = {
    "name": validate_name,
    "symbol": validate_symbol,
}


class LauncherApp:
    """The interactive token launcher."""

    def __init__(self, config: LauncherConfig, network: Optional[Network] = None,
                 spl_token: Optional[SplTokenCli] = None):
        self.config = config
        self.network = Network.from_value(network or config.default_network)
        self.store = TokenRecordStore(config.paths.tokens)
        self.wallets = WalletStore(config.paths.wallets)
        self.spl_token = spl_token or SplTokenCli(config.spl_token_bin)

    def initialize(self) -> None:
        """Create the working directories.

        Raises:
            ConfigurationError: If a directory cannot be created
        """
        self.wallets.ensure_directory()
        self.store.ensure_directory()
        try:
            self.config.paths.config.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ConfigurationError(
                f"Cannot create config directory {self.config.paths.config}: {e}",
                details={"path": str(self.config.paths.config)}
            ) from e

    @asynccontextmanager
    async def token_service(self) -> AsyncIterator[TokenService]:
        """TokenService bound to the session network; the RPC client is closed afterwards."""
        async with TokenChainClient(self.config.solana, self.network) as chain:
            yield TokenService(
                chain=chain,
                pinata=PinataClient(self.config.pinata, timeout=self.config.http_timeout),
                store=self.store,
                spl_token=self.spl_token,
                defaults=self.config.defaults,
            )

    async def run(self) -> None:
        """Show the menu until the user exits."""
        print_banner(self.network)
        console.print(f"[green]Wallets directory:[/green] {self.config.paths.wallets}")
        console.print(f"[green]Tokens directory:[/green] {self.config.paths.tokens}")

        while True:
            action = prompts.choose(f"What would you like to do? [dim]({self.network.value})[/dim]", MENU_OPTIONS)
            if action == "exit":
                console.print("\n[green]Thank you for using Solana Token Launcher![/green]")
                return
            await self.dispatch(action)
            prompts.pause()

    async def dispatch(self, action: str) -> None:
        """Run one menu action; failures are reported and the menu continues."""
        handlers = {
            "create": self.create_token,
            "mint": self.mint_tokens,
            "revoke": self.revoke_authorities,
            "update": self.update_metadata,
            "check": self.check_token,
            "settings": self.settings,
            "list": self.list_tokens,
            "help": self.show_help,
        }
        handler = handlers.get(action)
        if handler is None:
            console.print("[red]Invalid option selected[/red]")
            return

        try:
            await handler()
        except TokenLauncherError as e:
            logger.error(f"{action} failed: {e.message}")
            print_error(e)
        except Exception as e:
            logger.exception(f"Unexpected error in {action}: {e}")
            print_error(e)

    def _load_wallet(self) -> Tuple[Path, Keypair]:
        path = prompts.select_wallet(self.wallets)
        keypair = self.wallets.load_keypair(path)
        console.print(f"[cyan]Wallet:[/cyan] {keypair.pubkey()}")
        return path, keypair

    def _confirm_mainnet(self) -> bool:
        if self.network is not Network.MAINNET:
            return True
        console.print("[bold yellow]You are on MAINNET. This costs real SOL.[/bold yellow]")
        return prompts.confirm("Continue on mainnet?", default=False)

    async def create_token(self) -> None:
        print_title("CREATE NEW TOKEN")
        wallet_path, keypair = self._load_wallet()
        defaults = self.config.defaults

        token_config: Dict[str, Any] = {
            "name": prompts.ask_validated("Token name", validate_name),
            "symbol": prompts.ask_validated("Token symbol", validate_symbol),
            "description": prompts.ask_validated("Description", lambda v: validate_required(v, "description")),
            "decimals": prompts.ask_validated("Decimals", validate_decimals, default=str(defaults.decimals)),
            "initial_supply": prompts.ask_validated(
                "Initial supply",
                lambda v: validate_amount(v, "initial_supply", allow_zero=True),
                default=str(defaults.initial_supply),
            ),
            "image": prompts.ask_optional("Image URL", default=DEFAULT_IMAGE_URL),
            "external_url": prompts.ask_optional("External URL (optional)"),
        }

        print_title("TOKEN SUMMARY")
        for key in ("name", "symbol", "description", "decimals", "initial_supply"):
            console.print(f"[cyan]{key.replace('_', ' ').title()}:[/cyan] {token_config[key]}")
        console.print(f"[cyan]Network:[/cyan] {self.network.value}")

        if not self._confirm_mainnet() or not prompts.confirm("Create this token?"):
            console.print("Token creation cancelled")
            return

        async with self.token_service() as service:
            with console.status("Creating token on Solana..."):
                record = await service.create_token(token_config, keypair, wallet_file=wallet_path.name)

        console.print("[bold green]Token created successfully![/bold green]")
        print_record(record)
        console.print("[dim]Use 'Mint Tokens' to mint the initial supply.[/dim]")

    async def mint_tokens(self) -> None:
        print_title("MINT TOKENS")
        wallet_path, keypair = self._load_wallet()
        mint_address = prompts.select_token(self.store, self.network)
        amount = prompts.ask_validated("Amount to mint", validate_amount)

        recipient = None
        if prompts.confirm("Mint to a different owner?", default=False):
            recipient = prompts.ask_address("Recipient wallet address", "recipient")

        console.print(f"[cyan]Minting[/cyan] {amount:,} to {recipient or keypair.pubkey()}")
        if not self._confirm_mainnet() or not prompts.confirm("Proceed with minting?"):
            console.print("Minting cancelled")
            return

        async with self.token_service() as service:
            with console.status("Minting tokens..."):
                result = await service.mint_tokens(
                    mint_address, amount, wallet_path.resolve(), str(keypair.pubkey()), recipient=recipient
                )
        print_mint_result(mint_address, amount, self.network, result)

    async def revoke_authorities(self) -> None:
        print_title("REVOKE AUTHORITIES")
        wallet_path, _ = self._load_wallet()
        mint_address = prompts.select_token(self.store, self.network)
        authorities = prompts.choose_many("Authorities to revoke", [
            ("Mint authority (no more tokens can ever be minted)", AuthorityKind.MINT),
            ("Freeze authority (accounts can never be frozen)", AuthorityKind.FREEZE),
        ])

        console.print("[bold red]Revoking an authority is PERMANENT and cannot be undone.[/bold red]")
        if not self._confirm_mainnet() or not prompts.confirm("Revoke the selected authorities?", default=False):
            console.print("Revocation cancelled")
            return

        async with self.token_service() as service:
            with console.status("Revoking authorities..."):
                result = await service.revoke_authorities(mint_address, authorities, wallet_path.resolve())
        print_revoke_result(mint_address, self.network, result)

    async def update_metadata(self) -> None:
        print_title("UPDATE TOKEN METADATA")
        _, keypair = self._load_wallet()
        mint_address = prompts.select_token(self.store, self.network)
        record = self.store.load_by_mint_address(mint_address)
        fields = prompts.choose_many("Fields to update", UPDATE_FIELDS)

        current = {
            "name": record.name if record else None,
            "symbol": record.symbol if record else None,
            "description": record.description if record else None,
            "image": record.image_uri if record else DEFAULT_IMAGE_URL,
            "external_url": record.external_url if record else None,
        }
        labels = {value: label for label, value in UPDATE_FIELDS}
        values: Dict[str, Any] = {}
        for field_name in fields:
            label = labels[field_name]
            validator = FIELD_VALIDATORS.get(field_name, lambda v, f=field_name: validate_required(v, f))
            values[field_name] = prompts.ask_validated(f"New {label}", validator, default=current[field_name])
        request = TokenUpdateRequest(**values)

        print_title("PREVIEW OF CHANGES")
        for field_name in request.changed_fields():
            console.print(f"[cyan]{field_name}:[/cyan] {current.get(field_name) or '-'} -> {getattr(request, field_name)}")
        if not self._confirm_mainnet() or not prompts.confirm("Proceed with metadata update?"):
            console.print("Metadata update cancelled")
            return

        async with self.token_service() as service:
            with console.status("Updating metadata..."):
                result = await service.update_metadata(mint_address, request, keypair)

        console.print("[bold green]Metadata updated successfully![/bold green]")
        console.print(f"[cyan]Metadata URI:[/cyan] {result.metadata_uri}")
        console.print(f"[cyan]Transaction:[/cyan] {result.signature}")
        if result.record is None:
            console.print("[dim]No local record for this token; nothing saved.[/dim]")
        print_explorer_links(result.signature, "tx", self.network)

    async def check_token(self) -> None:
        print_title("CHECK TOKEN INFO")
        mint_address = prompts.select_token(self.store, self.network)
        async with TokenChainClient(self.config.solana, self.network) as chain:
            with console.status("Fetching token information..."):
                report = await inspect_token(chain, mint_address, http_timeout=self.config.http_timeout)
        print_inspection(report, self.store.load_by_mint_address(mint_address))

    async def settings(self) -> None:
        print_settings(self.config, self.network)
        action = prompts.choose("What would you like to do?", [
            ("Back to main menu", "back"),
            ("Change network for this session", "network"),
        ])
        if action == "network":
            self.network = prompts.select_network(self.network)
            console.print(f"[green]Network set to {self.network.value}[/green]")
            console.print("[dim]Set TOKEN_LAUNCHER_NETWORK to change the default.[/dim]")

    async def list_tokens(self) -> None:
        print_title("CREATED TOKENS")
        entries = list(self.store.iter_records())
        if not entries:
            console.print("[yellow]No tokens created yet[/yellow]")
            return

        table = Table()
        table.add_column("#", style="cyan")
        table.add_column("Name")
        table.add_column("Symbol")
        table.add_column("Mint Address", style="yellow")
        table.add_column("Network")
        table.add_column("Minted", justify="right")
        for index, entry in enumerate(entries, start=1):
            if entry.ok:
                record = entry.record
                table.add_row(str(index), record.name, record.symbol, record.mint_address,
                              record.network.value, f"{record.total_minted:,}")
            else:
                table.add_row(str(index), f"[red]Error reading {entry.path.name}[/red]", "", "", "", "")
        console.print(table)

    async def show_help(self) -> None:
        print_help()
