"""REPL with prompt_toolkit for user interaction."""

from prompt_toolkit import PromptSession
from prompt_toolkit.history import InMemoryHistory

from common.exceptions import FileSignError
from common.logging_config import get_logger
from cli.commands import (
    format_error,
    get_workflow,
    handle_add,
    handle_cat,
    handle_download,
    handle_info,
    handle_list,
    handle_set_path,
    handle_verify,
    handle_verify_record,
)
from cli.completer import FileSignCompleter
from cli.constants import (
    DOWNLOAD_PATH_PROMPT,
    HELP_TEXT,
    PROMPT_TEXT,
    STYLE,
    WELCOME_HELP,
    WELCOME_TITLE,
)
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
from cli.parser import ParseError, parse_command
from cli.utils import clear_screen, validate_download_path

logger = get_logger(__name__)


def show_welcome() -> None:
    print(WELCOME_TITLE)
    print(WELCOME_HELP)


def dispatch_command(cmd_obj) -> str:
    """Dispatch parsed command to appropriate handler."""
    if isinstance(cmd_obj, AddCommand):
        return handle_add(cmd_obj)
    elif isinstance(cmd_obj, ListCommand):
        return handle_list(cmd_obj)
    elif isinstance(cmd_obj, InfoCommand):
        return handle_info(cmd_obj)
    elif isinstance(cmd_obj, CatCommand):
        return handle_cat(cmd_obj)
    elif isinstance(cmd_obj, DownloadCommand):
        return handle_download(cmd_obj)
    elif isinstance(cmd_obj, VerifyCommand):
        return handle_verify(cmd_obj)
    elif isinstance(cmd_obj, VerifyRecordCommand):
        return handle_verify_record(cmd_obj)
    elif isinstance(cmd_obj, SetPathCommand):
        return handle_set_path(cmd_obj)
    else:
        return f"Unknown command type: {type(cmd_obj)}"


def prompt_download_path(session: PromptSession) -> None:
    """Ask for a download path until a usable directory is given and saved."""
    workflow = get_workflow()
    while True:
        path = session.prompt(DOWNLOAD_PATH_PROMPT)
        error = validate_download_path(path)
        if error:
            print(f"Error: {error}")
            continue
        try:
            workflow.set_download_path(path.strip())
        except FileSignError as e:
            print(format_error(e))
            continue
        return


def repl_loop() -> None:
    """Start interactive REPL with prompt_toolkit."""
    history = InMemoryHistory()
    session: PromptSession = PromptSession(
        completer=FileSignCompleter(), history=history, style=STYLE
    )

    workflow = get_workflow()

    check_node = getattr(workflow.context.content_store, 'is_available', None)
    if callable(check_node) and not check_node():
        print("Warning: IPFS node is not reachable. Start it with 'ipfs daemon'.")

    if not workflow.context.download_path:
        try:
            prompt_download_path(session)
        except (KeyboardInterrupt, EOFError):
            print("\nGoodbye!")
            return
        clear_screen()

    show_welcome()

    while True:
        try:
            user_input = session.prompt([("class:prompt", PROMPT_TEXT)])

            if not user_input.strip():
                continue

            if user_input.strip() == "exit":
                print("Goodbye!")
                break

            if user_input.strip() == "help":
                print(HELP_TEXT)
                continue

            if user_input.strip() == "clear":
                clear_screen()
                show_welcome()
                continue

            cmd_obj = parse_command(user_input)
            result = dispatch_command(cmd_obj)
            print(result)
            print()

        except ParseError as e:
            print(f"Error: {e}")
        except KeyboardInterrupt:
            continue
        except EOFError:
            print("\nGoodbye!")
            break
