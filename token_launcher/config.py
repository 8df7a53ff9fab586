"""Configuration module for the Token Launcher."""

# Standard library imports
import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, Optional
from urllib.parse import urlsplit

# Third-party library imports
from dotenv import load_dotenv

# Internal imports
from token_launcher.utils.errors import ConfigurationError


class Network(str, Enum):
    """Solana clusters the launcher can target."""

    DEVNET = "devnet"
    MAINNET = "mainnet"
    TESTNET = "testnet"

    @classmethod
    def from_value(cls, value: Any) -> "Network":
        """Coerce user or file input (any case, `mainnet-beta`) to a Network.

        Raises:
            ValueError: If the value names no known network
        """
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower()
        if normalized == "mainnet-beta":
            normalized = "mainnet"
        for network in cls:
            if network.value == normalized:
                return network
        raise ValueError(f"Unknown network: {value!r}")

    @property
    def cli_cluster(self) -> str:
        """Cluster moniker understood by the solana / spl-token `--url` flag."""
        return "mainnet-beta" if self is Network.MAINNET else self.value


def get_env_var(key: str, default: Any = None, required: bool = False,
               validator: Optional[Callable[[str], Any]] = None) -> Any:
    """Read one setting from the environment.

    Empty values count as unset.

    Args:
        key: Variable name
        default: Returned when the variable is unset
        required: Raise instead of returning the default
        validator: Converts the raw string; ValueError marks it invalid

    Returns:
        The converted value, or the default

    Raises:
        ConfigurationError: If required and not found, or fails validation
    """
    value = os.environ.get(key)

    if value is None or value == "":
        if required:
            raise ConfigurationError(
                f"Required environment variable '{key}' not found",
                details={"setting": key}
            )
        return default

    if validator:
        try:
            return validator(value)
        except ValueError as e:
            raise ConfigurationError(
                f"Invalid value for environment variable '{key}': {str(e)}",
                details={"setting": key, "value": value}
            )

    return value


TRUE_VALUES = ("true", "1", "yes", "y", "on")
FALSE_VALUES = ("false", "0", "no", "n", "off")
COMMITMENTS = ("processed", "confirmed", "finalized")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def bool_validator(value: str) -> bool:
    """Parse a yes/no style flag.

    Raises:
        ValueError: If the value is neither a true nor a false spelling
    """
    lowered = value.strip().lower()
    if lowered in TRUE_VALUES:
        return True
    if lowered in FALSE_VALUES:
        return False
    raise ValueError(f"expected one of {TRUE_VALUES + FALSE_VALUES}, got '{value}'")


def int_validator(value: str) -> int:
    try:
        return int(value.strip())
    except ValueError:
        raise ValueError(f"'{value}' is not a whole number")


def url_validator(value: str) -> str:
    """Accept absolute http(s) URLs with a host.

    Raises:
        ValueError: If the scheme or host is missing
    """
    parts = urlsplit(value.strip())
    if parts.scheme not in ("http", "https") or not parts.netloc or " " in value.strip():
        raise ValueError(f"'{value}' is not an http(s) URL")
    return value.strip()


def commitment_validator(value: str) -> str:
    lowered = value.strip().lower()
    if lowered not in COMMITMENTS:
        raise ValueError(f"commitment must be one of {', '.join(COMMITMENTS)}")
    return lowered


def log_level_validator(value: str) -> str:
    upper = value.strip().upper()
    if upper not in LOG_LEVELS:
        raise ValueError(f"log level must be one of {', '.join(LOG_LEVELS)}")
    return upper


def network_validator(value: str) -> Network:
    """Validate a network name."""
    return Network.from_value(value)


@dataclass(frozen=True)
class SolanaConfig:
    """Configuration for Solana RPC connections."""

    rpc_urls: Dict[Network, str] = field(default_factory=lambda: {
        Network.DEVNET: "https://api.devnet.solana.com",
        Network.MAINNET: "https://api.mainnet-beta.solana.com",
        Network.TESTNET: "https://api.testnet.solana.com",
    })
    commitment: str = "confirmed"
    max_retries: int = 3
    skip_preflight: bool = False
    timeout: int = 30  # seconds

    def rpc_url(self, network: Network) -> str:
        """Get the RPC endpoint for a network."""
        return self.rpc_urls[Network.from_value(network)]


@dataclass(frozen=True)
class PinataConfig:
    """Configuration for the Pinata IPFS pinning service."""

    jwt: str = ""
    api_url: str = "https://api.pinata.cloud/pinning/pinJSONToIPFS"
    gateway: str = "https://gateway.pinata.cloud/ipfs/"

    @property
    def is_configured(self) -> bool:
        """Check if a JWT is set."""
        return bool(self.jwt)


@dataclass(frozen=True)
class TokenDefaults:
    """Default values offered when creating a token."""

    decimals: int = 9
    seller_fee_basis_points: int = 0
    is_mutable: bool = True
    initial_supply: int = 1_000_000


@dataclass(frozen=True)
class PathsConfig:
    """Local directories used by the launcher."""

    wallets: Path = Path("./wallets")
    tokens: Path = Path("./tokens")
    config: Path = Path("./config")


@dataclass(frozen=True)
class LauncherConfig:
    """Comprehensive application configuration.

    Loaded once at process start and passed to every component.
    """

    default_network: Network = Network.DEVNET
    solana: SolanaConfig = field(default_factory=SolanaConfig)
    pinata: PinataConfig = field(default_factory=PinataConfig)
    defaults: TokenDefaults = field(default_factory=TokenDefaults)
    paths: PathsConfig = field(default_factory=PathsConfig)
    spl_token_bin: str = "spl-token"
    http_timeout: float = 30.0
    log_level: str = "WARNING"


def load_config(env_file: Optional[str] = None, **overrides: Any) -> LauncherConfig:
    """Build the launcher configuration from environment variables.

    Args:
        env_file: Optional path to a .env file; the default lookup is used otherwise
        overrides: Top-level LauncherConfig fields that take precedence

    Returns:
        LauncherConfig instance

    Raises:
        ConfigurationError: If environment variables fail validation
    """
    load_dotenv(env_file)

    solana = SolanaConfig(
        rpc_urls={
            Network.DEVNET: get_env_var("SOLANA_DEVNET_RPC_URL", "https://api.devnet.solana.com",
                                        validator=url_validator),
            Network.MAINNET: get_env_var("SOLANA_MAINNET_RPC_URL", "https://api.mainnet-beta.solana.com",
                                         validator=url_validator),
            Network.TESTNET: get_env_var("SOLANA_TESTNET_RPC_URL", "https://api.testnet.solana.com",
                                         validator=url_validator),
        },
        commitment=get_env_var("SOLANA_COMMITMENT", "confirmed", validator=commitment_validator),
        max_retries=get_env_var("SOLANA_MAX_RETRIES", 3, validator=int_validator),
        skip_preflight=get_env_var("SOLANA_SKIP_PREFLIGHT", False, validator=bool_validator),
        timeout=get_env_var("SOLANA_TIMEOUT", 30, validator=int_validator),
    )

    pinata = PinataConfig(
        jwt=get_env_var("PINATA_JWT", ""),
        api_url=get_env_var("PINATA_API_URL", "https://api.pinata.cloud/pinning/pinJSONToIPFS",
                            validator=url_validator),
        gateway=get_env_var("PINATA_GATEWAY", "https://gateway.pinata.cloud/ipfs/",
                            validator=url_validator),
    )

    defaults = TokenDefaults(
        decimals=get_env_var("DEFAULT_DECIMALS", 9, validator=int_validator),
        seller_fee_basis_points=get_env_var("SELLER_FEE_BASIS_POINTS", 0, validator=int_validator),
        is_mutable=get_env_var("METADATA_IS_MUTABLE", True, validator=bool_validator),
        initial_supply=get_env_var("DEFAULT_INITIAL_SUPPLY", 1_000_000, validator=int_validator),
    )

    paths = PathsConfig(
        wallets=Path(get_env_var("WALLETS_DIR", "./wallets")),
        tokens=Path(get_env_var("TOKENS_DIR", "./tokens")),
        config=Path(get_env_var("CONFIG_DIR", "./config")),
    )

    values: Dict[str, Any] = {
        "default_network": get_env_var("TOKEN_LAUNCHER_NETWORK", Network.DEVNET, validator=network_validator),
        "solana": solana,
        "pinata": pinata,
        "defaults": defaults,
        "paths": paths,
        "spl_token_bin": get_env_var("SPL_TOKEN_BIN", "spl-token"),
        "http_timeout": float(get_env_var("HTTP_TIMEOUT", 30, validator=int_validator)),
        "log_level": get_env_var("LOG_LEVEL", "WARNING", validator=log_level_validator),
    }
    values.update({key: value for key, value in overrides.items() if value is not None})

    if not 0 <= defaults.decimals <= 18:
        raise ConfigurationError(
            "Default decimals must be between 0 and 18",
            details={"setting": "DEFAULT_DECIMALS", "value": defaults.decimals}
        )

    if solana.max_retries < 0:
        raise ConfigurationError(
            "Max retries must be non-negative",
            details={"setting": "SOLANA_MAX_RETRIES", "value": solana.max_retries}
        )

    return LauncherConfig(**values)
