"""Project-wide constants (file locations, IPFS endpoint, key parameters)."""

import os

SETTINGS_FILE_PATH: str = os.environ.get("FILESIGN_SETTINGS_PATH", "settings.json")
LEDGER_FILE_PATH: str = os.environ.get("FILESIGN_LEDGER_PATH", "files.json")

IPFS_API_URL: str = os.environ.get("IPFS_API_URL", "http://127.0.0.1:5001")
IPFS_TIMEOUT_SECONDS: float = float(os.environ.get("IPFS_TIMEOUT", "30"))

RSA_KEY_SIZE: int = 2048
RSA_PUBLIC_EXPONENT: int = 65537

SETTINGS_DOWNLOAD_PATH_KEY = "downloadpath"
SETTINGS_PRIVATE_KEY_KEY = "privateKey"
SETTINGS_PUBLIC_KEY_KEY = "publicKey"
SETTINGS_REQUIRED_KEYS = (
    SETTINGS_DOWNLOAD_PATH_KEY,
    SETTINGS_PRIVATE_KEY_KEY,
    SETTINGS_PUBLIC_KEY_KEY,
)

PRIVATE_KEY_PEM_LABEL = "RSA PRIVATE KEY"
PUBLIC_KEY_PEM_LABEL = "RSA PUBLIC KEY"

STREAM_CHUNK_SIZE: int = 64 * 1024
