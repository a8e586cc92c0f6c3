"""Ordered ledger of ingested files, persisted as one JSON array."""

import json
import threading
from pathlib import Path
from typing import List, Optional

from pydantic import TypeAdapter, ValidationError

from common.exceptions import StorageError
from common.file_io import read_json, write_json_atomic
from common.logging_config import get_logger
from common.types import FileRecord

logger = get_logger(__name__)

_RECORD_LIST = TypeAdapter(List[FileRecord])


class MetadataLedger:
    """
    File records in insertion order.

    Every append loads the whole document, appends one record and rewrites
    the whole document. Appends from one instance are serialized; separate
    processes writing the same file can still lose records (last writer wins).
    """

    def __init__(self, ledger_path: Path):
        """
        Initialize ledger.

        Args:
            ledger_path: Path to the ledger JSON file
        """
        self.ledger_path = Path(ledger_path)
        self._lock = threading.Lock()

    def list_all(self) -> List[FileRecord]:
        """
        Load every record in insertion order.

        Returns:
            List of records, empty if the ledger file does not exist

        Raises:
            StorageError: If the file cannot be read or is malformed
        """
        with self._lock:
            return self._load()

    def append(self, record: FileRecord) -> None:
        """
        Persist one more record at the end of the ledger.

        Raises:
            StorageError: If the ledger cannot be read or written; nothing is persisted
        """
        with self._lock:
            records = self._load()
            records.append(record)
            self._save(records)
        logger.info(f"Appended record for {record.name} [cid={record.cid}] ({len(records)} total)")

    def find_by_cid(self, cid: str) -> Optional[FileRecord]:
        """
        Find the first record with the given CID.

        Returns:
            FileRecord if found, None otherwise
        """
        for record in self.list_all():
            if record.cid == cid:
                return record
        return None

    def _load(self) -> List[FileRecord]:
        if not self.ledger_path.exists():
            return []

        try:
            data = read_json(self.ledger_path)
        except FileNotFoundError:
            return []
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(f"Failed to read ledger file: {e}") from e

        if data is None:
            return []

        try:
            return _RECORD_LIST.validate_python(data)
        except ValidationError as e:
            raise StorageError(f"Ledger file {self.ledger_path} is malformed: {e}") from e

    def _save(self, records: List[FileRecord]) -> None:
        document = [record.model_dump() for record in records]
        try:
            write_json_atomic(self.ledger_path, document)
        except OSError as e:
            logger.error(f"Failed to write ledger file: {e}")
            raise StorageError(f"Failed to write ledger file: {e}") from e
