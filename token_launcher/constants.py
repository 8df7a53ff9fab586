"""Constants used throughout the Token Launcher application.

This module defines common constants to avoid duplication and ensure consistency.
"""

import re

# Metaplex Token Metadata program
METADATA_PROGRAM_ID = "metaqbxxUerdq28cj1RbAWkYQm3ybzjb6a8bt518x1s"

# SPL mint account layout
MINT_ACCOUNT_LEN = 82
MINT_AUTHORITY_OFFSET = 0
MINT_SUPPLY_OFFSET = 36
MINT_DECIMALS_OFFSET = 44
MINT_INITIALIZED_OFFSET = 45
MINT_FREEZE_AUTHORITY_OFFSET = 46

# Metaplex token metadata instruction discriminators
CREATE_METADATA_ACCOUNT_V3 = 33
UPDATE_METADATA_ACCOUNT_V2 = 15

# Metaplex string limits
MAX_NAME_LENGTH = 32
MAX_SYMBOL_LENGTH = 10
MAX_URI_LENGTH = 200

# Token config limits
MAX_DECIMALS = 18

# Output of the spl-token CLI carries the transaction signature on this line
SIGNATURE_PATTERN = re.compile(r"Signature: ([A-Za-z0-9]+)", re.IGNORECASE)
ACCOUNT_EXISTS_MARKER = "Account already exists"

TOOL_VERSION = "1.0.0"

DEFAULT_IMAGE_URL = "https://ipfs.io/ipfs/bafkreia4mu5q7xpmajldouuuvv6kgiac6bxisy4ekg5hdijbscki5oloo4"

PRIMARY_EXPLORER_URL = "https://explorer.solana.com"
SECONDARY_EXPLORER_URL = "https://solscan.io"

TOKEN_STANDARD_NAMES = {
    0: "NonFungible",
    1: "FungibleAsset",
    2: "Fungible",
    3: "NonFungibleEdition",
    4: "ProgrammableNonFungible",
    5: "ProgrammableNonFungibleEdition",
}
