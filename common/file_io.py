"""Whole-document JSON persistence with atomic replace."""

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Iterable, Optional


def read_json(path: Path) -> Any:
    """
    Read and decode a JSON document.

    Raises:
        FileNotFoundError: If the file does not exist
        OSError: If the file cannot be read
        json.JSONDecodeError: If the content is not valid JSON
    """
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)


def write_json_atomic(path: Path, data: Any, mode: Optional[int] = None) -> None:
    """
    Write a JSON document so readers see either the old or the new file.

    The document is written to a temporary file in the target directory,
    flushed to disk and renamed over the target.

    Args:
        path: Target file path
        data: JSON-serializable document
        mode: Optional permission bits applied before the rename

    Raises:
        OSError: If any step fails; the target is left untouched
    """
    payload = json.dumps(data, indent=4).encode('utf-8')
    write_bytes_atomic(path, [payload], mode=mode)


def write_bytes_atomic(path: Path, chunks: Iterable[bytes], mode: Optional[int] = None) -> int:
    """
    Stream chunks into a temporary sibling of path and rename it into place.

    Returns:
        Number of bytes written
    """
    path = Path(path)
    directory = path.parent
    directory.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(dir=str(directory), prefix=f'.{path.name}.', suffix='.tmp')
    written = 0
    try:
        with os.fdopen(fd, 'wb') as tmp:
            for chunk in chunks:
                tmp.write(chunk)
                written += len(chunk)
            tmp.flush()
            os.fsync(tmp.fileno())
        if mode is not None:
            os.chmod(tmp_name, mode)
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise
    return written
