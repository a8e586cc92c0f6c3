"""Command request data types for CLI."""

from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True)
class AddCommand:
    """Sign and add a local file."""

    file_path: str
    command: Literal["add"] = "add"


@dataclass(frozen=True)
class ListCommand:
    """List recorded files."""

    command: Literal["list"] = "list"


@dataclass(frozen=True)
class InfoCommand:
    """Show the ledger record for a CID."""

    cid: str
    command: Literal["info"] = "info"


@dataclass(frozen=True)
class CatCommand:
    """Print stored content for a CID."""

    cid: str
    command: Literal["cat"] = "cat"


@dataclass(frozen=True)
class DownloadCommand:
    """Download a recorded file by CID."""

    cid: str
    command: Literal["download"] = "download"


@dataclass(frozen=True)
class VerifyCommand:
    """Verify a supplied signature against stored content."""

    cid: str
    signature: str
    command: Literal["verify"] = "verify"


@dataclass(frozen=True)
class VerifyRecordCommand:
    """Verify stored content against its recorded signature."""

    cid: str
    command: Literal["verify-record"] = "verify-record"


@dataclass(frozen=True)
class SetPathCommand:
    """Change the download path."""

    path: str
    command: Literal["set-path"] = "set-path"


CommandRequest = (
    AddCommand
    | ListCommand
    | InfoCommand
    | CatCommand
    | DownloadCommand
    | VerifyCommand
    | VerifyRecordCommand
    | SetPathCommand
)
