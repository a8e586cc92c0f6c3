"""Command parser for CLI input."""

import shlex

from cli.models import (
    AddCommand,
    CatCommand,
    CommandRequest,
    DownloadCommand,
    InfoCommand,
    ListCommand,
    SetPathCommand,
    VerifyCommand,
    VerifyRecordCommand,
)


class ParseError(Exception):
    """Raised when command parsing fails."""

    pass


def parse_command(input_line: str) -> CommandRequest:
    """Parse user input into a CommandRequest object.

    Args:
        input_line: Raw user input from REPL

    Returns:
        CommandRequest object

    Raises:
        ParseError: If command syntax is invalid
    """
    if not input_line.strip():
        raise ParseError("Empty command")

    try:
        tokens = shlex.split(input_line)
    except ValueError as e:
        raise ParseError(f"Invalid syntax: {e}")

    if not tokens:
        raise ParseError("Empty command")

    command_name = tokens[0]
    args = tokens[1:]

    if command_name == "add":
        return AddCommand(file_path=_single_arg("add", "<file-path>", args))
    elif command_name == "list":
        if args:
            raise ParseError("list takes no arguments")
        return ListCommand()
    elif command_name == "info":
        return InfoCommand(cid=_single_arg("info", "<cid>", args))
    elif command_name == "cat":
        return CatCommand(cid=_single_arg("cat", "<cid>", args))
    elif command_name == "download":
        return DownloadCommand(cid=_single_arg("download", "<cid>", args))
    elif command_name == "verify":
        return _parse_verify(args)
    elif command_name == "verify-record":
        return VerifyRecordCommand(cid=_single_arg("verify-record", "<cid>", args))
    elif command_name == "set-path":
        return SetPathCommand(path=_single_arg("set-path", "<directory>", args))
    else:
        raise ParseError(f"Unknown command: {command_name}")


def _single_arg(command_name: str, placeholder: str, args: list[str]) -> str:
    """Return the only argument of a one-argument command."""
    if len(args) != 1:
        raise ParseError(f"{command_name} requires exactly 1 argument: {placeholder}")
    return args[0]


def _parse_verify(args: list[str]) -> VerifyCommand:
    """Parse 'verify <cid> <signature>' command."""
    if len(args) != 2:
        raise ParseError("verify requires exactly 2 arguments: <cid> <signature>")

    cid, signature = args
    return VerifyCommand(cid=cid, signature=signature)
