"""Console rendering for the interactive launcher."""

from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from token_launcher import __version__
from token_launcher.config import LauncherConfig, Network
from token_launcher.explorer import build_explorer_links
from token_launcher.models.token import OffChainStatus, TokenInspection, TokenRecord
from token_launcher.services.authority_service import AuthorityKind
from token_launcher.services.token_service import MintResult, RevokeResult
from token_launcher.utils.errors import (
    ConfigurationError,
    ExternalProcessError,
    ImmutableMetadataError,
    NetworkError,
    NotFoundError,
    TokenLauncherError,
    UnauthorizedError,
)

console = Console()

# (substring of the error text, hint)
ERROR_HINTS = [
    ("insufficient funds", "Add SOL to your wallet; on devnet run: solana airdrop 2"),
    ("could not run", "Make sure the Solana CLI tools (solana, spl-token) are installed and on PATH"),
    ("already disabled", "This authority has already been revoked"),
    ("authority", "Make sure you are using the wallet that holds the required authority"),
    ("invalid mint", "Check the token address"),
    ("pinata", "Check PINATA_JWT and the Pinata settings"),
    ("blockhash", "The network is congested; try again"),
    ("network", "Check your connection and the RPC URL"),
]


def error_hint(error: Exception) -> Optional[str]:
    """Contextual suggestion for a failed operation."""
    if isinstance(error, UnauthorizedError):
        return "Use the wallet that is the update authority for this token"
    if isinstance(error, ImmutableMetadataError):
        return "Immutable metadata can never be changed"
    if isinstance(error, ConfigurationError) and "PINATA" in str(error.details.get("setting", "")):
        return "Set PINATA_JWT in your environment or .env file"
    if isinstance(error, NetworkError) and "pinata" in error.message.lower():
        return "Check PINATA_JWT and the Pinata settings"

    text = str(error).lower()
    if isinstance(error, ExternalProcessError):
        text = f"{text} {error.raw_diagnostic.lower()}"
    if isinstance(error, NotFoundError):
        resource_type = error.details.get("resource_type")
        if resource_type == "mint":
            return "Check the token address and the selected network"
        if resource_type == "wallet":
            return "Put your keypair file in the wallets directory"

    for needle, hint in ERROR_HINTS:
        if needle in text:
            return hint
    if isinstance(error, NetworkError):
        return "Check your connection and the RPC URL"
    return None


def print_error(error: Exception) -> None:
    message = error.message if isinstance(error, TokenLauncherError) else str(error)
    console.print(f"[bold red]Error:[/bold red] {message}")
    hint = error_hint(error)
    if hint:
        console.print(f"[yellow]Hint:[/yellow] {hint}")


def print_banner(network: Network) -> None:
    console.print(Panel.fit(
        "[bold cyan]SOLANA TOKEN LAUNCHER[/bold cyan]\n"
        f"[dim]SPL token creation tool | version {__version__} | network {network.value}[/dim]",
        border_style="cyan"
    ))


def print_title(title: str) -> None:
    console.print()
    console.rule(f"[bold cyan]{title}[/bold cyan]")


def print_explorer_links(address: str, kind: str, network: Network) -> None:
    links = build_explorer_links(address, kind, network)
    console.print(f"[cyan]Solana Explorer:[/cyan] {links.primary}")
    console.print(f"[cyan]Solscan:[/cyan] {links.secondary}")


def print_record(record: TokenRecord) -> None:
    """Summary of a created token."""
    table = Table(show_header=False, box=None)
    table.add_row("[cyan]Name[/cyan]", record.name)
    table.add_row("[cyan]Symbol[/cyan]", record.symbol)
    table.add_row("[cyan]Mint Address[/cyan]", f"[yellow]{record.mint_address}[/yellow]")
    table.add_row("[cyan]Decimals[/cyan]", str(record.decimals))
    table.add_row("[cyan]Initial Supply[/cyan]", f"{record.initial_supply:,}")
    table.add_row("[cyan]Network[/cyan]", record.network.value)
    if record.metadata_uri:
        table.add_row("[cyan]Metadata URI[/cyan]", record.metadata_uri)
    if record.create_transaction:
        table.add_row("[cyan]Transaction[/cyan]", record.create_transaction)
    console.print(table)
    print_explorer_links(record.mint_address, "address", record.network)


def print_inspection(report: TokenInspection, record: Optional[TokenRecord] = None) -> None:
    """Everything known about a token, section by section."""
    print_title("TOKEN INFORMATION")
    console.print(f"[cyan]Token Address:[/cyan] [yellow]{report.mint_address}[/yellow]")
    console.print(f"[cyan]Network:[/cyan] {report.network.value}")
    console.print("[cyan]Mint Account:[/cyan] [green]exists[/green]")

    mint = report.mint
    if mint is None:
        console.print("[yellow]Could not parse mint account data[/yellow]")
    else:
        console.print(f"[cyan]Supply:[/cyan] {mint.ui_supply} ({mint.supply} base units)")
        console.print(f"[cyan]Decimals:[/cyan] {mint.decimals}")
        console.print(f"[cyan]Initialized:[/cyan] {'yes' if mint.is_initialized else 'no'}")
        console.print(f"[cyan]Mint Authority:[/cyan] {mint.mint_authority or '[green]revoked[/green]'}")
        console.print(f"[cyan]Freeze Authority:[/cyan] {mint.freeze_authority or '[green]none[/green]'}")

    metadata = report.metadata
    print_title("METADATA")
    if metadata is None:
        console.print("[red]No metadata found for this token[/red]")
        console.print("[dim]This token was created without Metaplex metadata[/dim]")
    else:
        console.print(f"[cyan]Name:[/cyan] {metadata.name}")
        console.print(f"[cyan]Symbol:[/cyan] {metadata.symbol}")
        console.print(f"[cyan]URI:[/cyan] [blue]{metadata.uri}[/blue]")
        console.print(f"[cyan]Update Authority:[/cyan] {metadata.update_authority}")
        console.print(f"[cyan]Is Mutable:[/cyan] {'yes' if metadata.is_mutable else 'no'}")
        console.print(f"[cyan]Primary Sale:[/cyan] {'yes' if metadata.primary_sale_happened else 'no'}")
        console.print(f"[cyan]Seller Fee:[/cyan] {metadata.seller_fee_percent:g}%")
        console.print(f"[cyan]Token Standard:[/cyan] {metadata.token_standard_name}")
        for index, creator in enumerate(metadata.creators, start=1):
            mark = "verified" if creator.verified else "unverified"
            console.print(f"  {index}. {creator.address} ({creator.share}%) {mark}")

    if report.offchain_status is OffChainStatus.UNAVAILABLE:
        console.print("[yellow]Off-chain metadata unavailable[/yellow]")
    elif report.offchain is not None:
        offchain = report.offchain
        print_title("OFF-CHAIN METADATA")
        if offchain.description:
            description = offchain.description
            console.print(f"[cyan]Description:[/cyan] {description[:100]}{'...' if len(description) > 100 else ''}")
        if offchain.image:
            console.print(f"[cyan]Image:[/cyan] [blue]{offchain.image}[/blue]")
        if offchain.external_url:
            console.print(f"[cyan]External URL:[/cyan] [blue]{offchain.external_url}[/blue]")
        for attribute in offchain.attributes:
            console.print(f"  {attribute.get('trait_type')}: {attribute.get('value')}")

    if record is not None:
        print_title("LOCAL RECORD")
        if record.created_at:
            console.print(f"[cyan]Created:[/cyan] {record.created_at:%Y-%m-%d %H:%M:%S %Z}")
        console.print(f"[cyan]Tool Version:[/cyan] {record.tool_version or 'Unknown'}")
        console.print(f"[cyan]Wallet Used:[/cyan] {record.wallet_file or 'Unknown'}")
        if record.create_transaction:
            console.print(f"[cyan]Create Tx:[/cyan] {record.create_transaction}")
        if record.last_update_date:
            console.print(f"[cyan]Last Updated:[/cyan] {record.last_update_date:%Y-%m-%d %H:%M:%S %Z}")
        console.print(f"[cyan]Total Minted:[/cyan] {record.total_minted:,}")

    console.print()
    print_explorer_links(report.mint_address, "address", report.network)


def print_mint_result(mint_address: str, amount: int, network: Network, result: MintResult) -> None:
    console.print("[bold green]Tokens minted successfully![/bold green]")
    console.print(f"[cyan]Token Address:[/cyan] {mint_address}")
    console.print(f"[cyan]Amount Minted:[/cyan] {amount:,}")
    if result.mint.signature:
        console.print(f"[cyan]Transaction:[/cyan] {result.mint.signature}")
    if result.balance_text is not None:
        console.print(f"[cyan]Current Balance:[/cyan] {result.balance_text}")
    if result.record is not None:
        console.print(f"[cyan]Total Minted:[/cyan] {result.record.total_minted:,}")
    print_explorer_links(mint_address, "address", network)


def print_revoke_result(mint_address: str, network: Network, result: RevokeResult) -> None:
    console.print(f"[cyan]Token Address:[/cyan] {mint_address}")
    for authority, outcome in result.results.items():
        label = "Mint Authority" if authority is AuthorityKind.MINT else "Freeze Authority"
        if outcome.success:
            console.print(f"[green]{label}: REVOKED[/green]")
            if outcome.signature:
                console.print(f"   Transaction: {outcome.signature}")
        else:
            console.print(f"[red]{label}: FAILED[/red]")
            console.print(f"   [dim]{outcome.raw_diagnostic}[/dim]")
            hint = error_hint(Exception(outcome.raw_diagnostic))
            if hint:
                console.print(f"   [yellow]Hint:[/yellow] {hint}")
    print_explorer_links(mint_address, "address", network)


def print_settings(config: LauncherConfig, network: Network) -> None:
    print_title("CURRENT SETTINGS")
    table = Table(show_header=False, box=None)
    table.add_row("[cyan]Network[/cyan]", network.value)
    table.add_row("[cyan]RPC URL[/cyan]", config.solana.rpc_url(network))
    table.add_row("[cyan]Commitment[/cyan]", config.solana.commitment)
    table.add_row("[cyan]Default Decimals[/cyan]", str(config.defaults.decimals))
    table.add_row("[cyan]Default Supply[/cyan]", f"{config.defaults.initial_supply:,}")
    table.add_row("[cyan]Metadata Mutable[/cyan]", "yes" if config.defaults.is_mutable else "no")
    table.add_row("[cyan]Pinata Configured[/cyan]", "yes" if config.pinata.is_configured else "no")
    table.add_row("[cyan]Wallets Directory[/cyan]", str(config.paths.wallets))
    table.add_row("[cyan]Tokens Directory[/cyan]", str(config.paths.tokens))
    table.add_row("[cyan]spl-token[/cyan]", config.spl_token_bin)
    console.print(table)


def print_help() -> None:
    print_title("SOLANA TOKEN LAUNCHER HELP")
    sections = [
        ("Create New Token", "Create a new SPL token with Metaplex metadata; the metadata JSON is pinned via Pinata"),
        ("Mint Tokens", "Mint tokens to your wallet or another owner's associated account"),
        ("Revoke Authorities", "Permanently revoke the mint or freeze authority (IRREVERSIBLE)"),
        ("Update Token Metadata", "Change name, symbol, description, image or external URL; needs the update authority"),
        ("Check Token Info", "Show supply, authorities, on-chain and off-chain metadata of any token"),
        ("Settings", "Show the configuration and switch the network for this session"),
        ("View Created Tokens", "List the token records saved in the tokens directory"),
    ]
    for title, text in sections:
        console.print(f"\n[cyan]{title}[/cyan]\n   {text}")
    console.print(
        "\n[cyan]Files[/cyan]\n"
        "   ./wallets/  keypair files (JSON array of 64 numbers)\n"
        "   ./tokens/   one JSON record per created token"
    )
    console.print("\n[cyan]Networks[/cyan]\n   devnet (default), mainnet, testnet")
    console.print(
        "\n[yellow]Tips[/yellow]\n"
        "   Test on devnet first and keep your wallet files secure."
    )
