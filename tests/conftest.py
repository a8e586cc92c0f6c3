"""Shared pytest fixtures for all tests."""

import hashlib

import pytest
from pathlib import Path

from cryptography.hazmat.primitives.asymmetric import rsa

from common.exceptions import TransportError
from ledger.metadata_ledger import MetadataLedger
from signer.key_store import Keypair, KeyStore
from signer.signature_engine import SignatureEngine
from workflow.context import build_context


class InMemoryContentStore:
    """Content store double keyed by a fake CID derived from the content."""

    def __init__(self):
        self.objects = {}
        self.put_calls = 0
        self.fail_put = False

    def put(self, content: bytes, name: str = "file") -> str:
        self.put_calls += 1
        if self.fail_put:
            raise TransportError("Cannot connect to IPFS node. Is the daemon running?")
        cid = "Qm" + hashlib.sha256(content).hexdigest()[:44]
        self.objects[cid] = content
        return cid

    def get(self, cid: str) -> bytes:
        if cid not in self.objects:
            raise TransportError(f"IPFS node error: could not resolve {cid}", status_code=500)
        return self.objects[cid]

    def stream(self, cid: str):
        content = self.get(cid)
        for i in range(0, len(content), 4):
            yield content[i:i + 4]


@pytest.fixture(scope='session')
def rsa_private_key():
    """
    One RSA key for the whole session; generation is slow.

    Returns:
        2048-bit RSA private key
    """
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope='session')
def other_rsa_private_key():
    """A second, unrelated RSA key."""
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


def key_store_with(private_key) -> KeyStore:
    return KeyStore(keypair=Keypair(private_key=private_key, public_key=private_key.public_key()))


@pytest.fixture
def key_store(rsa_private_key):
    """KeyStore whose active keypair is the session key."""
    return key_store_with(rsa_private_key)


@pytest.fixture
def other_key_store(other_rsa_private_key):
    """KeyStore holding a keypair unrelated to key_store."""
    return key_store_with(other_rsa_private_key)


@pytest.fixture
def signature_engine(key_store):
    return SignatureEngine(key_store)


@pytest.fixture
def settings_path(tmp_path) -> Path:
    """
    Path of a settings file that does not exist yet.
    """
    return tmp_path / 'settings.json'


@pytest.fixture
def ledger_path(tmp_path) -> Path:
    """
    Path of a ledger file that does not exist yet.
    """
    return tmp_path / 'files.json'


@pytest.fixture
def ledger(ledger_path):
    return MetadataLedger(ledger_path)


@pytest.fixture
def content_store():
    return InMemoryContentStore()


@pytest.fixture
def download_dir(tmp_path) -> Path:
    directory = tmp_path / 'downloads'
    directory.mkdir()
    return directory


@pytest.fixture
def context(settings_path, ledger_path, content_store, key_store):
    """
    Fully wired context backed by temp files and the in-memory store.
    """
    return build_context(
        settings_path=settings_path,
        ledger_path=ledger_path,
        content_store=content_store,
        key_store=key_store,
    )


@pytest.fixture
def sample_file(tmp_path):
    """
    Create a 10-byte sample file named a.txt.

    Returns:
        Path to sample text file
    """
    file_path = tmp_path / 'a.txt'
    file_path.write_bytes(b'0123456789')
    return file_path
