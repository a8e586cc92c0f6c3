"""Key custody, settings persistence and content signatures."""

from signer.key_store import Keypair, KeyStore
from signer.settings_store import SettingsStore
from signer.signature_engine import SignatureEngine

__all__ = [
    "Keypair",
    "KeyStore",
    "SettingsStore",
    "SignatureEngine",
]
