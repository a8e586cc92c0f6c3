"""CLI constants and configuration."""

from prompt_toolkit.styles import Style

COMMANDS = ["add", "list", "info", "cat", "download", "verify", "verify-record", "set-path", "clear", "exit", "help"]

STYLE = Style.from_dict(
    {
        "prompt": "#2E9E6B bold",
        "command": "#0088ff bold",
    }
)

GREEN = "\033[32m"
RED = "\033[31m"
RESET = "\033[0m"

WELCOME_TITLE = "FileSign CLI - signed files on IPFS"
WELCOME_HELP = "Type 'help' for commands or 'exit' to quit.\n"

PROMPT_TEXT = "filesign> "
DOWNLOAD_PATH_PROMPT = "Enter the path where the files will be downloaded: "

HELP_TEXT = """Available commands:
  add <file-path>                 Sign a local file and add it to IPFS
  list                            List added files
  info <cid>                      Show the recorded information for a CID
  cat <cid>                       Print the content stored under a CID
  download <cid>                  Save a recorded file into the download path
  verify <cid> <signature>        Check a signature against the content of a CID
  verify-record <cid>             Check a CID against its recorded signature
  set-path <directory>            Change the download path
  clear                           Clear screen and redisplay welcome message
  help                            Show this help
  exit                            Exit REPL

Examples:
  add ./report.pdf
  info QmYwAPJzv5CZsnA625s3Xf2nemtYgPpHdWEz79ojWnPbdG
  download QmYwAPJzv5CZsnA625s3Xf2nemtYgPpHdWEz79ojWnPbdG
  verify QmYwAPJzv5CZsnA625s3Xf2nemtYgPpHdWEz79ojWnPbdG c2lnbmF0dXJl..."""
