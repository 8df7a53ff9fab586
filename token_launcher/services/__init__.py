"""Services for the token lifecycle operations."""

from token_launcher.services.authority_service import (
    AuthorityKind,
    OperationKind,
    OperationResult,
    OperationState,
    SplTokenCli,
    extract_signature,
)
from token_launcher.services.inspection_service import inspect_token
from token_launcher.services.token_service import (
    MetadataUpdateResult,
    MintResult,
    RevokeResult,
    TokenService,
    build_metadata_document,
)

__all__ = [
    'AuthorityKind',
    'MetadataUpdateResult',
    'MintResult',
    'OperationKind',
    'OperationResult',
    'OperationState',
    'RevokeResult',
    'SplTokenCli',
    'TokenService',
    'build_metadata_document',
    'extract_signature',
    'inspect_token',
]
