"""Local file stores for token records and wallets."""

from token_launcher.store.records import RecordEntry, TokenRecordStore
from token_launcher.store.wallets import WalletStore

__all__ = ['RecordEntry', 'TokenRecordStore', 'WalletStore']
