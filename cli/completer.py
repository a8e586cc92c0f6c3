"""Custom completer for FileSign CLI with local file autocompletion."""

import os
from pathlib import Path
from typing import Iterable

from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document

from cli.constants import COMMANDS

PATH_COMMANDS = {"add": False, "set-path": True}


class FileSignCompleter(Completer):
    """
    Custom completer that provides:
    - Command name completion for the first token
    - Local path completion for 'add' (files and directories) and
      'set-path' (directories only)
    """

    def get_completions(
        self, document: Document, complete_event
    ) -> Iterable[Completion]:
        """
        Generate completions based on cursor position and context.
        """
        text = document.text_before_cursor
        tokens = text.split()

        is_typing_new_token = text.endswith(" ") or not tokens

        if not tokens or (len(tokens) == 1 and not is_typing_new_token):
            yield from self._complete_commands(tokens[0] if tokens else "")
            return

        command = tokens[0].lower()
        if command not in PATH_COMMANDS:
            return

        argument_count = len(tokens) - 1 + (1 if is_typing_new_token else 0)
        if argument_count > 1:
            return

        current_word = "" if is_typing_new_token else tokens[-1]
        yield from self._complete_paths(current_word, dirs_only=PATH_COMMANDS[command])

    def _complete_commands(self, partial: str) -> Iterable[Completion]:
        """Complete command names matching the partial input."""
        partial_lower = partial.lower()
        for cmd in COMMANDS:
            if cmd.startswith(partial_lower):
                yield Completion(cmd, start_position=-len(partial))

    def _complete_paths(self, partial: str, dirs_only: bool) -> Iterable[Completion]:
        """
        Complete entries of the directory named by the partial path.

        Directories are completed with a trailing separator.
        """
        head, tail = os.path.split(partial)
        base = Path(head) if head else Path.cwd()

        if not base.is_dir():
            return

        try:
            entries = sorted(base.iterdir(), key=lambda p: p.name)
        except OSError:
            return

        for entry in entries:
            if not entry.name.startswith(tail):
                continue
            if entry.name.startswith(".") and not tail.startswith("."):
                continue
            is_dir = entry.is_dir()
            if dirs_only and not is_dir:
                continue
            suffix = os.sep if is_dir else ""
            candidate = os.path.join(head, entry.name) + suffix
            yield Completion(candidate, start_position=-len(partial))
