"""Block explorer link building."""

from dataclasses import dataclass
from typing import Any

from token_launcher.config import Network
from token_launcher.constants import PRIMARY_EXPLORER_URL, SECONDARY_EXPLORER_URL


@dataclass(frozen=True)
class ExplorerLinks:
    """Links to the same address on two explorers."""

    primary: str
    secondary: str


def cluster_suffix(network: Any) -> str:
    """Query string selecting the cluster; mainnet needs none.

    Raises:
        ValueError: If the network is not one of devnet, mainnet or testnet
    """
    network = Network.from_value(network)
    if network is Network.MAINNET:
        return ""
    return f"?cluster={network.value}"


def build_explorer_links(address: str, kind: str = "address", network: Any = Network.DEVNET) -> ExplorerLinks:
    """Build Solana Explorer and Solscan links.

    Args:
        address: Account address or transaction signature
        kind: Path segment, e.g. "address", "token" or "tx"
        network: Network the address lives on

    Returns:
        ExplorerLinks with the primary (Solana Explorer) and secondary (Solscan) URL
    """
    suffix = cluster_suffix(network)
    return ExplorerLinks(
        primary=f"{PRIMARY_EXPLORER_URL}/{kind}/{address}{suffix}",
        secondary=f"{SECONDARY_EXPLORER_URL}/{kind}/{address}{suffix}",
    )
