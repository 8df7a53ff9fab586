"""Solana Token Launcher Package.

This package provides an interactive tool for the SPL token lifecycle on
Solana: token creation with Metaplex metadata, minting, authority
revocation, metadata updates and token inspection.
"""

__version__ = "1.0.0"
__author__ = "Token Launcher Contributors"
__email__ = "maintainers@token-launcher.dev"
