"""PEM encoding and decoding of the RSA keypair as stored in the settings file.

Private keys are written as a PKCS#8 body under the ``RSA PRIVATE KEY`` label,
public keys as a SubjectPublicKeyInfo body under the ``RSA PUBLIC KEY`` label.
Public keys written by earlier versions carry a bare PKCS#1 body instead, so
decoding tries the SubjectPublicKeyInfo form first and then the PKCS#1 form.
"""

import base64
import binascii
import re
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from common.constants import PRIVATE_KEY_PEM_LABEL, PUBLIC_KEY_PEM_LABEL
from common.exceptions import KeyDecodeError

_PEM_BLOCK = re.compile(
    r'-----BEGIN ([A-Z0-9 ]+)-----\s*(.*?)\s*-----END \1-----',
    re.DOTALL,
)

PRIVATE_KEY_LABELS = (PRIVATE_KEY_PEM_LABEL, "PRIVATE KEY")
PUBLIC_KEY_LABELS = (PUBLIC_KEY_PEM_LABEL, "PUBLIC KEY")


@dataclass(frozen=True)
class DecodedKey:
    """Public key decoding succeeded."""
    key: rsa.RSAPublicKey
    encoding: str


@dataclass(frozen=True)
class Unrecognized:
    """Public key text matched none of the supported encodings."""
    reason: str


PublicKeyDecodeResult = Union[DecodedKey, Unrecognized]


def _armor(label: str, der: bytes) -> bytes:
    encoded = base64.b64encode(der).decode('ascii')
    body = '\n'.join(encoded[i:i + 64] for i in range(0, len(encoded), 64))
    return f"-----BEGIN {label}-----\n{body}\n-----END {label}-----\n".encode('ascii')


def _unarmor(text: str) -> Optional[Tuple[str, bytes]]:
    """Split PEM text into (label, der). Returns None if no block is found."""
    match = _PEM_BLOCK.search(text)
    if match is None:
        return None
    try:
        der = base64.b64decode(''.join(match.group(2).split()), validate=True)
    except (binascii.Error, ValueError):
        return None
    return match.group(1), der


def encode_private_key(private_key: rsa.RSAPrivateKey) -> str:
    """Serialize a private key as a PKCS#8 body under the RSA PRIVATE KEY label."""
    der = private_key.private_bytes(
        encoding=serialization.Encoding.DER,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )
    return _armor(PRIVATE_KEY_PEM_LABEL, der).decode('ascii')


def encode_public_key(public_key: rsa.RSAPublicKey) -> str:
    """Serialize a public key as a SubjectPublicKeyInfo body under the RSA PUBLIC KEY label."""
    der = public_key.public_bytes(
        encoding=serialization.Encoding.DER,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )
    return _armor(PUBLIC_KEY_PEM_LABEL, der).decode('ascii')


def decode_private_key(text: str) -> rsa.RSAPrivateKey:
    """
    Parse a persisted private key.

    Accepts a PKCS#8 or PKCS#1 DER body under either supported label.

    Raises:
        KeyDecodeError: If the text is not a usable RSA private key
    """
    block = _unarmor(text or '')
    if block is None:
        raise KeyDecodeError("invalid private key PEM")

    label, der = block
    if label not in PRIVATE_KEY_LABELS:
        raise KeyDecodeError(f"unexpected private key PEM label: {label}")

    try:
        key = serialization.load_der_private_key(der, password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise KeyDecodeError(f"failed to parse private key: {e}") from e

    if not isinstance(key, rsa.RSAPrivateKey):
        raise KeyDecodeError("not an RSA private key")
    return key


def _try_subject_public_key_info(der: bytes) -> PublicKeyDecodeResult:
    try:
        key = serialization.load_pem_public_key(_armor("PUBLIC KEY", der))
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        return Unrecognized(f"not SubjectPublicKeyInfo: {e}")
    if not isinstance(key, rsa.RSAPublicKey):
        return Unrecognized("not an RSA public key (SubjectPublicKeyInfo)")
    return DecodedKey(key=key, encoding="spki")


def _try_pkcs1(der: bytes) -> PublicKeyDecodeResult:
    try:
        key = serialization.load_pem_public_key(_armor("RSA PUBLIC KEY", der))
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        return Unrecognized(f"not PKCS#1 RSAPublicKey: {e}")
    return DecodedKey(key=key, encoding="pkcs1")


def decode_public_key(text: str) -> PublicKeyDecodeResult:
    """
    Parse a persisted public key, trying the full encoding before the bare one.

    Returns:
        DecodedKey on success, Unrecognized describing the last failure otherwise
    """
    block = _unarmor(text or '')
    if block is None:
        return Unrecognized("invalid public key PEM")

    label, der = block
    if label not in PUBLIC_KEY_LABELS:
        return Unrecognized(f"unexpected public key PEM label: {label}")

    result = _try_subject_public_key_info(der)
    if isinstance(result, DecodedKey):
        return result
    return _try_pkcs1(der)


def decode_keypair(private_text: str, public_text: str) -> Tuple[rsa.RSAPrivateKey, rsa.RSAPublicKey]:
    """
    Decode both halves and check that they belong together.

    Raises:
        KeyDecodeError: If either half is malformed or they do not match
    """
    private_key = decode_private_key(private_text)

    result = decode_public_key(public_text)
    if isinstance(result, Unrecognized):
        raise KeyDecodeError(f"failed to parse public key: {result.reason}")

    public_key = result.key
    if public_key.public_numbers() != private_key.public_key().public_numbers():
        raise KeyDecodeError("public key does not match private key")
    return private_key, public_key
