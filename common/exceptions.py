"""Custom exception classes for the integrity and key-custody layer."""

from typing import Optional


class FileSignError(Exception):
    """
    Base exception class for all file-signature errors.
    """
    pass


class StorageError(FileSignError):
    """
    Raised when the settings or ledger file cannot be read, written or parsed.
    """
    pass


class KeyDecodeError(FileSignError):
    """
    Raised when persisted key text is malformed or the two halves do not match.
    """
    pass


class KeyUnavailableError(FileSignError):
    """
    Raised when signing is attempted with no active keypair.
    """
    pass


class TransportError(FileSignError):
    """
    Raised when the content store is unreachable or returns an error.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class NotFoundError(FileSignError):
    """
    Raised when a CID has no record in the ledger and one is required.
    """

    def __init__(self, cid: str):
        super().__init__(f"No ledger record for CID {cid}")
        self.cid = cid


class LocalFileError(FileSignError):
    """
    Raised when a local source file cannot be opened or read.
    """
    pass
