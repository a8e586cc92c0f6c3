"""Utility functions for CLI operations."""

import os
import sys
from pathlib import Path
from typing import Optional

from common.types import FileRecord


def clear_screen() -> None:
    """Clear the terminal screen (cross-platform)."""
    if sys.platform == "win32":
        os.system("cls")
    else:
        os.system("clear")


def validate_download_path(path: str) -> Optional[str]:
    """
    Check that a path is an existing, writable directory.

    Writability is tested by creating and removing a probe file.

    Args:
        path: Candidate download directory

    Returns:
        Error message, or None if the path is usable
    """
    path = path.strip()
    if not path:
        return "the path cannot be empty"

    directory = Path(path)
    if not directory.exists():
        return "the path does not exist"
    if not directory.is_dir():
        return "the path is not a directory"

    probe = directory / ".filesign-write-test"
    try:
        probe.touch()
        probe.unlink()
    except OSError:
        return "cannot write to the directory"

    return None


def format_record(record: FileRecord, include_cid: bool = True) -> str:
    """Render a ledger record on one line."""
    parts = [f"Name: {record.name}", f"Size: {format_file_size(record.size)}"]
    if include_cid:
        parts.append(f"CID: {record.cid}")
    parts.append(f"Signature: {record.signature}")
    return ", ".join(parts)


def format_file_size(size_bytes: int) -> str:
    """
    Format file size in bytes to human-readable format with appropriate unit.

    Uses binary units (1024-based) and automatically selects the most
    appropriate unit (B, KiB, MiB, GiB, TiB).

    Args:
        size_bytes: File size in bytes

    Returns:
        Formatted string with size and unit (e.g., "1.50 MiB", "512 B")
    """
    if size_bytes < 1024:
        return f"{size_bytes} B"

    units = ['KiB', 'MiB', 'GiB', 'TiB']
    size = size_bytes / 1024.0

    for unit in units:
        if size < 1024.0:
            return f"{size:.2f} {unit}"
        size /= 1024.0

    return f"{size:.2f} PiB"
