"""Explicit wiring of the key, settings, ledger and content-store components."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from common.constants import IPFS_API_URL, LEDGER_FILE_PATH, SETTINGS_FILE_PATH
from common.logging_config import get_logger
from ipfs.content_store_client import ContentStore, IpfsClient
from ledger.metadata_ledger import MetadataLedger
from signer.key_store import KeyStore
from signer.settings_store import SettingsStore
from signer.signature_engine import SignatureEngine

logger = get_logger(__name__)


@dataclass
class IntegrityContext:
    """
    Everything one installation's operations share. Independent contexts do
    not see each other's keypair or files.
    """
    key_store: KeyStore
    settings_store: SettingsStore
    signature_engine: SignatureEngine
    ledger: MetadataLedger
    content_store: ContentStore
    download_path: str = ""

    def close(self) -> None:
        close = getattr(self.content_store, 'close', None)
        if callable(close):
            close()


def build_context(
    settings_path: Path = Path(SETTINGS_FILE_PATH),
    ledger_path: Path = Path(LEDGER_FILE_PATH),
    api_url: str = IPFS_API_URL,
    content_store: Optional[ContentStore] = None,
    key_store: Optional[KeyStore] = None,
) -> IntegrityContext:
    """
    Create a context and bring its settings and keypair up.

    Args:
        settings_path: Settings JSON file
        ledger_path: Ledger JSON file
        api_url: IPFS RPC API URL, used when no content_store is given
        content_store: Optional store to use instead of an IpfsClient
        key_store: Optional KeyStore (e.g. one with a pre-generated keypair)

    Returns:
        Ready-to-use IntegrityContext

    Raises:
        StorageError: If the settings file cannot be read or written
        KeyDecodeError: If persisted keys are malformed
    """
    key_store = key_store or KeyStore()
    settings_store = SettingsStore(Path(settings_path), key_store)
    settings_store.ensure_settings()
    download_path = settings_store.load_download_path()

    if content_store is None:
        content_store = IpfsClient(api_url)

    logger.info(f"Context ready [settings={settings_path}, ledger={ledger_path}]")
    return IntegrityContext(
        key_store=key_store,
        settings_store=settings_store,
        signature_engine=SignatureEngine(key_store),
        ledger=MetadataLedger(Path(ledger_path)),
        content_store=content_store,
        download_path=download_path,
    )
