"""Owns the single active RSA keypair of an installation."""

from dataclasses import dataclass
from typing import Optional, Tuple

from cryptography.hazmat.primitives.asymmetric import rsa

from common.constants import RSA_KEY_SIZE, RSA_PUBLIC_EXPONENT
from common.exceptions import KeyUnavailableError
from common.logging_config import get_logger
from signer.key_codec import decode_keypair, encode_private_key, encode_public_key

logger = get_logger(__name__)


@dataclass(frozen=True)
class Keypair:
    """
    RSA signing keypair. Both halves are always set together.
    """
    private_key: rsa.RSAPrivateKey
    public_key: rsa.RSAPublicKey


class KeyStore:
    """
    Holds the active keypair for one context.

    A keypair is generated at most once; loading persisted keys replaces the
    active pair only when both halves decode and match.
    """

    def __init__(self, key_size: int = RSA_KEY_SIZE, keypair: Optional[Keypair] = None):
        self._key_size = key_size
        self._keypair: Optional[Keypair] = keypair

    @property
    def has_keypair(self) -> bool:
        return self._keypair is not None

    @property
    def keypair(self) -> Keypair:
        """
        Active keypair.

        Raises:
            KeyUnavailableError: If no keypair is active
        """
        if self._keypair is None:
            raise KeyUnavailableError("No active keypair. Settings must be initialized first.")
        return self._keypair

    def generate_keypair(self) -> Keypair:
        """
        Generate a keypair if none is active and return the active one.
        """
        if self._keypair is None:
            private_key = rsa.generate_private_key(
                public_exponent=RSA_PUBLIC_EXPONENT,
                key_size=self._key_size,
            )
            self._keypair = Keypair(private_key=private_key, public_key=private_key.public_key())
            logger.info(f"Generated new {self._key_size}-bit RSA keypair")
        return self._keypair

    def load_encoded(self, private_text: str, public_text: str) -> Keypair:
        """
        Make the persisted keypair active.

        Raises:
            KeyDecodeError: If either key is malformed; the active keypair is unchanged
        """
        private_key, public_key = decode_keypair(private_text, public_text)
        self._keypair = Keypair(private_key=private_key, public_key=public_key)
        logger.debug("Loaded keypair from settings")
        return self._keypair

    def export_encoded(self) -> Tuple[str, str]:
        """
        Encode the active keypair for persistence.

        Returns:
            Tuple of (private_key_pem, public_key_pem)
        """
        keypair = self.keypair
        return encode_private_key(keypair.private_key), encode_public_key(keypair.public_key)
