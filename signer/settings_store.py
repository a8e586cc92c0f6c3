"""Persistence of the settings record: download path and encoded keypair."""

import json
import shutil
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from common.constants import (
    SETTINGS_DOWNLOAD_PATH_KEY,
    SETTINGS_PRIVATE_KEY_KEY,
    SETTINGS_PUBLIC_KEY_KEY,
    SETTINGS_REQUIRED_KEYS,
)
from common.exceptions import StorageError
from common.file_io import read_json, write_json_atomic
from common.logging_config import get_logger
from common.types import SettingsRecord
from signer.key_store import KeyStore

logger = get_logger(__name__)

SETTINGS_FILE_MODE = 0o600


class SettingsStore:
    """Manages the settings document stored in a single JSON file."""

    def __init__(self, settings_path: Path, key_store: KeyStore):
        """
        Initialize settings store.

        Args:
            settings_path: Path to the settings JSON file
            key_store: KeyStore whose keypair is persisted in the settings
        """
        self.settings_path = Path(settings_path)
        self.key_store = key_store

    def ensure_settings(self) -> SettingsRecord:
        """
        Make sure a complete settings record exists on disk.

        A missing file is created with an empty download path and a fresh
        keypair. A file missing any required field is rewritten with defaults,
        keeping the existing download path. A file that is not a JSON object
        is backed up next to itself and replaced with defaults.

        Returns:
            The settings record now on disk

        Raises:
            StorageError: If the file cannot be read or written
        """
        if not self.settings_path.exists():
            logger.info(f"Settings file not found, creating {self.settings_path}")
            return self._write_default("")

        try:
            data = read_json(self.settings_path)
        except json.JSONDecodeError as e:
            logger.warning(f"Settings file {self.settings_path} is corrupted ({e}), regenerating")
            self._backup()
            return self._write_default("")
        except OSError as e:
            raise StorageError(f"Failed to read settings file: {e}") from e

        if not isinstance(data, dict):
            logger.warning(f"Settings file {self.settings_path} is not an object, regenerating")
            self._backup()
            return self._write_default("")

        # Field names are not accepted in place of the persisted keys.
        missing = [key for key in SETTINGS_REQUIRED_KEYS if key not in data]
        if missing:
            logger.warning(f"Settings file is missing required fields {missing}, regenerating keys")
        else:
            try:
                return SettingsRecord.model_validate(data)
            except ValidationError as e:
                logger.warning(f"Settings file has {e.error_count()} invalid field(s), regenerating keys")

        download_path = data.get(SETTINGS_DOWNLOAD_PATH_KEY)
        if not isinstance(download_path, str):
            download_path = ""
        return self._write_default(download_path)

    def load_download_path(self) -> str:
        """
        Read the download path and activate the persisted keypair.

        Returns:
            The persisted download path (possibly empty)

        Raises:
            StorageError: If the file cannot be read or has no download path
            KeyDecodeError: If a persisted key is malformed
        """
        data = self._read_document()

        download_path = data.get(SETTINGS_DOWNLOAD_PATH_KEY)
        if not isinstance(download_path, str):
            raise StorageError(f"{SETTINGS_DOWNLOAD_PATH_KEY} key not found in settings file")

        private_text = data.get(SETTINGS_PRIVATE_KEY_KEY)
        public_text = data.get(SETTINGS_PUBLIC_KEY_KEY)
        if private_text is not None and public_text is not None:
            self.key_store.load_encoded(private_text, public_text)

        return download_path

    def update_download_path(self, new_path: str) -> None:
        """
        Rewrite the download path, leaving the keys untouched.

        Raises:
            StorageError: If the file cannot be read or written
        """
        data = self._read_document()
        data[SETTINGS_DOWNLOAD_PATH_KEY] = new_path
        self._write_document(data)
        logger.info(f"Download path updated to {new_path}")

    def _write_default(self, download_path: str) -> SettingsRecord:
        self.key_store.generate_keypair()
        private_text, public_text = self.key_store.export_encoded()
        record = SettingsRecord(
            download_path=download_path,
            private_key=private_text,
            public_key=public_text,
        )
        self._write_document(record.to_document())
        return record

    def _read_document(self) -> dict:
        try:
            data = read_json(self.settings_path)
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(f"Failed to read settings file: {e}") from e
        if not isinstance(data, dict):
            raise StorageError("Settings file does not contain an object")
        return data

    def _write_document(self, data: dict) -> None:
        try:
            write_json_atomic(self.settings_path, data, mode=SETTINGS_FILE_MODE)
        except OSError as e:
            raise StorageError(f"Failed to write settings file: {e}") from e

    def _backup(self) -> Optional[Path]:
        backup_path = self.settings_path.with_suffix(self.settings_path.suffix + '.bak')
        try:
            shutil.copy(self.settings_path, backup_path)
        except OSError as e:
            logger.warning(f"Could not back up settings file: {e}")
            return None
        return backup_path
