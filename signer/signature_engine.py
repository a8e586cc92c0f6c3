"""RSA-PSS signing and verification of file content over a SHA-256 digest."""

import base64
import binascii
import hashlib
from typing import Union

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding, utils

from common.exceptions import KeyUnavailableError
from signer.key_store import KeyStore


def compute_digest(content: bytes) -> bytes:
    """
    Compute the SHA-256 digest that is signed for a piece of content.

    Args:
        content: File content

    Returns:
        32-byte digest
    """
    return hashlib.sha256(content).digest()


def encode_signature(signature: bytes) -> str:
    return base64.b64encode(signature).decode('ascii')


def decode_signature(signature: str) -> bytes:
    """
    Raises:
        ValueError: If the text is not valid base64
    """
    return base64.b64decode(signature.strip(), validate=True)


class SignatureEngine:
    """
    Signs and verifies content with the KeyStore's active keypair.

    Signing uses PSS with the maximum salt length; verification detects the
    salt length, so signatures from other PSS implementations verify as well.
    """

    _PRE_HASHED = utils.Prehashed(hashes.SHA256())

    def __init__(self, key_store: KeyStore):
        self.key_store = key_store

    def sign(self, content: bytes) -> bytes:
        """
        Sign the SHA-256 digest of content.

        Raises:
            KeyUnavailableError: If no keypair is active
        """
        keypair = self.key_store.keypair
        digest = compute_digest(content)
        return keypair.private_key.sign(
            digest,
            padding.PSS(mgf=padding.MGF1(hashes.SHA256()), salt_length=padding.PSS.MAX_LENGTH),
            self._PRE_HASHED,
        )

    def sign_encoded(self, content: bytes) -> str:
        """Sign content and return the signature as base64 text."""
        return encode_signature(self.sign(content))

    def verify(self, content: bytes, signature: Union[bytes, str]) -> bool:
        """
        Check a signature against content.

        Text signatures are base64-decoded first. Any malformed or mismatching
        signature, and a missing keypair, yield False.
        """
        if isinstance(signature, str):
            try:
                signature = decode_signature(signature)
            except (binascii.Error, ValueError):
                return False

        try:
            public_key = self.key_store.keypair.public_key
        except KeyUnavailableError:
            return False

        digest = compute_digest(content)
        try:
            public_key.verify(
                signature,
                digest,
                padding.PSS(mgf=padding.MGF1(hashes.SHA256()), salt_length=padding.PSS.AUTO),
                self._PRE_HASHED,
            )
        except (InvalidSignature, ValueError, TypeError):
            return False
        return True
