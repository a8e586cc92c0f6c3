"""Ingest, lookup, download and verification of signed files."""

from pathlib import Path
from typing import List, Optional

from common.exceptions import LocalFileError, NotFoundError, StorageError
from common.file_io import write_bytes_atomic
from common.logging_config import get_logger
from common.types import FileRecord
from workflow.context import IntegrityContext

logger = get_logger(__name__)


class IntegrityWorkflow:
    """
    User-level operations. Each one either completes or leaves persisted
    state as it was; nothing is retried.
    """

    def __init__(self, context: IntegrityContext):
        self.context = context

    def ingest(self, file_path: str) -> FileRecord:
        """
        Sign a local file, add it to the content store and record it.

        Signing happens before the store is contacted, and the record is only
        appended once the store returned a CID.

        Args:
            file_path: Path of the local file

        Returns:
            The appended FileRecord

        Raises:
            LocalFileError: If the file cannot be read
            KeyUnavailableError: If no keypair is active
            TransportError: If the content store call fails
            StorageError: If the ledger cannot be written
        """
        path = Path(file_path)
        if not path.is_file():
            raise LocalFileError(f"Not a file: {file_path}")
        try:
            content = path.read_bytes()
        except OSError as e:
            raise LocalFileError(f"Error opening the file {file_path}: {e}") from e

        signature = self.context.signature_engine.sign_encoded(content)
        cid = self.context.content_store.put(content, name=path.name)

        record = FileRecord(name=path.name, size=len(content), cid=cid, signature=signature)
        self.context.ledger.append(record)
        logger.info(f"Ingested {path.name} ({len(content)} bytes) [cid={cid}]")
        return record

    def list_files(self) -> List[FileRecord]:
        return self.context.ledger.list_all()

    def lookup(self, cid: str) -> Optional[FileRecord]:
        return self.context.ledger.find_by_cid(cid)

    def retrieve_content(self, cid: str) -> bytes:
        """Fetch content straight from the store; the ledger is not consulted."""
        return self.context.content_store.get(cid)

    def download(self, cid: str) -> Path:
        """
        Save the content for a ledger CID under its original name.

        An existing file with the same name in the download directory is
        replaced once the whole content has arrived.

        Returns:
            Path of the written file

        Raises:
            NotFoundError: If the CID is not in the ledger
            StorageError: If no download path is configured or the file cannot be written
            TransportError: If the content store call fails
        """
        record = self.context.ledger.find_by_cid(cid)
        if record is None:
            raise NotFoundError(cid)

        if not self.context.download_path:
            raise StorageError("Download path is not configured")

        file_name = Path(record.name).name
        if file_name in ("", ".", ".."):
            raise StorageError(f"Recorded file name {record.name!r} cannot be used as a download target")

        target = Path(self.context.download_path) / file_name
        try:
            written = write_bytes_atomic(target, self.context.content_store.stream(cid))
        except OSError as e:
            raise StorageError(f"Error saving file to local system: {e}") from e

        logger.info(f"Downloaded {record.name} ({written} bytes) to {target}")
        return target

    def verify(self, cid: str, signature: str) -> bool:
        """
        Check a supplied signature against the content stored under cid.

        Returns:
            True if the signature matches the content, False otherwise

        Raises:
            TransportError: If the content cannot be fetched
        """
        content = self.context.content_store.get(cid)
        valid = self.context.signature_engine.verify(content, signature)
        logger.info(f"Verification of {cid}: {'confirmed' if valid else 'refuted'}")
        return valid

    def verify_record(self, cid: str) -> bool:
        """
        Verify stored content against the signature recorded in the ledger.

        Raises:
            NotFoundError: If the CID is not in the ledger
            TransportError: If the content cannot be fetched
        """
        record = self.context.ledger.find_by_cid(cid)
        if record is None:
            raise NotFoundError(cid)
        return self.verify(cid, record.signature)

    def set_download_path(self, new_path: str) -> None:
        """
        Persist a new download path.

        Raises:
            StorageError: If the settings file cannot be updated
        """
        self.context.settings_store.update_download_path(new_path)
        self.context.download_path = new_path
