"""Test configuration for pytest.

This module imports fixtures that should be available to all tests.
"""

# Import fixtures
from tests.fixtures.common import (  # noqa
    config,
    mint_address,
    mock_chain_client,
    mock_pinata_client,
    mock_spl_token,
    payer,
    record_store,
    sample_metadata,
    sample_record,
    token_service,
    wallet_store,
)
