"""Interactive prompts. Invalid input is reported and asked for again."""

from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple, TypeVar

from rich.prompt import Confirm, Prompt

from token_launcher.cli.display import console
from token_launcher.config import Network
from token_launcher.store.records import TokenRecordStore
from token_launcher.store.wallets import WalletStore
from token_launcher.utils.errors import NotFoundError, ValidationError
from token_launcher.utils.validation import validate_solana_address

T = TypeVar('T')

MANUAL_ENTRY = "__manual__"


def ask_validated(prompt: str, validator: Callable[[str], T], default: Optional[str] = None) -> T:
    """Ask until the validator accepts the answer."""
    while True:
        answer = Prompt.ask(prompt, default=default, console=console)
        try:
            return validator(answer or "")
        except ValidationError as e:
            console.print(f"[red]{e.message}[/red]")


def ask_optional(prompt: str, default: Optional[str] = None) -> Optional[str]:
    """Free text answer; blank means None."""
    answer = Prompt.ask(prompt, default=default or "", console=console, show_default=bool(default))
    return answer.strip() or None


def ask_address(prompt: str, field_name: str = "address") -> str:
    def check(value: str) -> str:
        value = value.strip()
        validate_solana_address(value, field_name)
        return value
    return ask_validated(prompt, check)


def confirm(prompt: str, default: bool = True) -> bool:
    return Confirm.ask(prompt, default=default, console=console)


def choose(title: str, options: Sequence[Tuple[str, T]], default: int = 1) -> T:
    """Numbered menu; returns the value of the chosen option."""
    console.print(f"\n[bold]{title}[/bold]")
    for index, (label, _) in enumerate(options, start=1):
        console.print(f"  [cyan]{index}.[/cyan] {label}")
    choices = [str(i) for i in range(1, len(options) + 1)]
    answer = Prompt.ask("Select", choices=choices, default=str(default), console=console, show_choices=False)
    return options[int(answer) - 1][1]


def choose_many(title: str, options: Sequence[Tuple[str, T]]) -> List[T]:
    """Comma separated selection from a numbered list; at least one is required."""
    console.print(f"\n[bold]{title}[/bold]")
    for index, (label, _) in enumerate(options, start=1):
        console.print(f"  [cyan]{index}.[/cyan] {label}")

    def parse(answer: str) -> List[T]:
        picked: List[T] = []
        for part in answer.replace(" ", "").split(","):
            if not part:
                continue
            if not part.isdigit() or not 1 <= int(part) <= len(options):
                raise ValidationError(f"Invalid selection: {part}", field="selection")
            value = options[int(part) - 1][1]
            if value not in picked:
                picked.append(value)
        if not picked:
            raise ValidationError("Select at least one option", field="selection")
        return picked

    return ask_validated("Numbers, comma separated", parse)


def select_wallet(wallets: WalletStore) -> Path:
    """Pick a wallet file.

    Raises:
        NotFoundError: If the wallets directory holds no wallet files
    """
    files = wallets.list_wallets()
    if not files:
        raise NotFoundError(
            f"No wallet files found in {wallets.wallets_dir}",
            resource_type="wallet",
            resource_id=str(wallets.wallets_dir)
        )
    if len(files) == 1:
        console.print(f"Using wallet [cyan]{files[0].name}[/cyan]")
        return files[0]
    return choose("Select wallet", [(path.name, path) for path in files])


def select_token(store: TokenRecordStore, network: Network, prompt: str = "Select token") -> str:
    """Pick a recorded token on the network, or type a mint address."""
    records = [record for record in store.records() if record.network is network]
    options: List[Tuple[str, str]] = [
        (f"{record.display_name} [dim]{record.mint_address}[/dim]", record.mint_address)
        for record in records
    ]
    options.append(("Enter token address manually", MANUAL_ENTRY))

    choice = choose(prompt, options) if records else MANUAL_ENTRY
    if choice == MANUAL_ENTRY:
        return ask_address("Token mint address", "mint_address")
    return choice


def select_network(current: Network) -> Network:
    options = [
        ("devnet (recommended for testing)", Network.DEVNET),
        ("mainnet (production)", Network.MAINNET),
        ("testnet", Network.TESTNET),
    ]
    default = [value for _, value in options].index(current) + 1
    return choose("Select network", options, default=default)


def pause() -> None:
    Prompt.ask("[dim]Press Enter to continue[/dim]", default="", show_default=False, console=console)
