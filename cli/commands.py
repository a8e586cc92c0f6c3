"""Command handler functions for CLI operations."""

from typing import Optional

from common.exceptions import (
    FileSignError,
    KeyDecodeError,
    KeyUnavailableError,
    LocalFileError,
    NotFoundError,
    StorageError,
    TransportError,
)
from common.logging_config import get_logger
from cli.constants import GREEN, RED, RESET
from cli.models import (
    AddCommand,
    CatCommand,
    DownloadCommand,
    InfoCommand,
    ListCommand,
    SetPathCommand,
    VerifyCommand,
    VerifyRecordCommand,
)
from cli.utils import format_file_size, format_record, validate_download_path
from workflow.context import build_context
from workflow.integrity_workflow import IntegrityWorkflow

logger = get_logger(__name__)


_workflow: Optional[IntegrityWorkflow] = None


def get_workflow() -> IntegrityWorkflow:
    """
    Get or create the process IntegrityWorkflow.

    Returns:
        IntegrityWorkflow instance
    """
    global _workflow
    if _workflow is None:
        logger.debug("Creating new IntegrityWorkflow instance")
        _workflow = IntegrityWorkflow(build_context())
    return _workflow


def format_error(error: FileSignError) -> str:
    """
    Map an operation failure to a user-facing message.

    Args:
        error: Raised taxonomy error

    Returns:
        Message naming the kind of failure
    """
    if isinstance(error, NotFoundError):
        return "File information not found."
    if isinstance(error, TransportError):
        return f"Error retrieving file content: {error}"
    if isinstance(error, LocalFileError):
        return f"Error opening the file: {error}"
    if isinstance(error, KeyUnavailableError):
        return f"Error signing the file: {error}"
    if isinstance(error, KeyDecodeError):
        return f"Error loading keys from settings: {error}"
    if isinstance(error, StorageError):
        return f"Storage error: {error}"
    return f"Error: {error}"


def handle_add(cmd: AddCommand, workflow: Optional[IntegrityWorkflow] = None) -> str:
    """
    Handle 'add' command.

    Args:
        cmd: AddCommand with file_path
        workflow: Optional IntegrityWorkflow for dependency injection (testing)

    Returns:
        Success or error message
    """
    logger.info(f"Executing add command: {cmd.file_path}")
    if workflow is None:
        workflow = get_workflow()
    try:
        record = workflow.ingest(cmd.file_path)
    except FileSignError as e:
        logger.warning(f"Add command failed: {e}")
        return format_error(e)
    return (
        f"File successfully added! CID: {record.cid}\n"
        f"Size: {format_file_size(record.size)}\n"
        f"Signature: {record.signature}"
    )


def handle_list(cmd: ListCommand, workflow: Optional[IntegrityWorkflow] = None) -> str:
    """
    Handle 'list' command.

    Returns:
        Formatted list of files
    """
    if workflow is None:
        workflow = get_workflow()
    try:
        records = workflow.list_files()
    except FileSignError as e:
        return format_error(e)

    if not records:
        return "No files have been added yet."

    output = [f"Found {len(records)} file(s):"]
    for record in records:
        output.append(f"  - {format_record(record)}")
    return '\n'.join(output)


def handle_info(cmd: InfoCommand, workflow: Optional[IntegrityWorkflow] = None) -> str:
    """
    Handle 'info' command.

    Returns:
        Record details or a not-found message
    """
    if workflow is None:
        workflow = get_workflow()
    try:
        record = workflow.lookup(cmd.cid)
    except FileSignError as e:
        return format_error(e)

    if record is None:
        return "File not found."
    return format_record(record, include_cid=False)


def handle_cat(cmd: CatCommand, workflow: Optional[IntegrityWorkflow] = None) -> str:
    """
    Handle 'cat' command.

    Returns:
        Stored content decoded as text, or an error message
    """
    if workflow is None:
        workflow = get_workflow()
    try:
        content = workflow.retrieve_content(cmd.cid)
    except FileSignError as e:
        return format_error(e)
    return f"File content:\n{content.decode('utf-8', errors='replace')}"


def handle_download(cmd: DownloadCommand, workflow: Optional[IntegrityWorkflow] = None) -> str:
    """
    Handle 'download' command.

    Returns:
        Success message with the saved location, or an error message
    """
    logger.info(f"Executing download command: cid={cmd.cid}")
    if workflow is None:
        workflow = get_workflow()
    try:
        target = workflow.download(cmd.cid)
    except FileSignError as e:
        logger.warning(f"Download command failed: {e}")
        return format_error(e)
    return f"File downloaded successfully to {target}"


def handle_verify(cmd: VerifyCommand, workflow: Optional[IntegrityWorkflow] = None) -> str:
    """
    Handle 'verify' command.

    Returns:
        Confirmation or refutation message
    """
    if workflow is None:
        workflow = get_workflow()
    try:
        valid = workflow.verify(cmd.cid, cmd.signature)
    except FileSignError as e:
        return format_error(e)
    return _verification_message(valid)


def handle_verify_record(cmd: VerifyRecordCommand, workflow: Optional[IntegrityWorkflow] = None) -> str:
    """
    Handle 'verify-record' command.

    Returns:
        Confirmation or refutation message
    """
    if workflow is None:
        workflow = get_workflow()
    try:
        valid = workflow.verify_record(cmd.cid)
    except FileSignError as e:
        return format_error(e)
    return _verification_message(valid)


def handle_set_path(cmd: SetPathCommand, workflow: Optional[IntegrityWorkflow] = None) -> str:
    """
    Handle 'set-path' command.

    Returns:
        Success or validation/error message
    """
    error = validate_download_path(cmd.path)
    if error:
        return f"Error: {error}"

    if workflow is None:
        workflow = get_workflow()
    try:
        workflow.set_download_path(cmd.path.strip())
    except FileSignError as e:
        return format_error(e)
    return f"Download path set to {cmd.path.strip()}"


def _verification_message(valid: bool) -> str:
    if valid:
        return f"{GREEN}File integrity confirmed.{RESET}"
    return f"{RED}File integrity refuted.{RESET}"
