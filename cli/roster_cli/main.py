"""Main entry point for Roster CLI."""
from __future__ import annotations

import logging
import sys

from roster.kernel.file_storage import FileStorage
from roster.kernel.store import StudentStore
from roster_cli import __version__
from roster_cli.config import Config
from roster_cli.repl import Repl


def print_help():
    """Print help message."""
    print(f"""
Roster CLI v{__version__}

Usage:
  roster [options]

Options:
  --data-file PATH  JSON file holding the student list (default: ~/.roster/students.json)
  --key NAME        Storage slot inside the data file (default: students)
  -h, --help        Show this help
  -v, --version     Show version

Environment:
  ROSTER_DATA_FILE    Same as --data-file (takes precedence)
  ROSTER_STORAGE_KEY  Same as --key (takes precedence)
  ROSTER_LOG_LEVEL    Logging level (default: WARNING)

REPL Commands:
  /list             Show statistics and the filtered students
  /show <id>        Show one student
  /add              Add a new student
  /edit <id>        Edit a student
  /delete <id>      Delete a student (asks first)
  /search [term]    Search by name, email, or course
  /course [name|n]  Filter by course
  /year [name|n]    Filter by year
  /clear            Clear search and filters
  /stats            Show statistics
  /export <file>    Write the current view as HTML
  /help             Show REPL help
  /quit             Exit REPL
""")


def parse_args(args: list[str]) -> dict:
    """
    Parse command line arguments.

    Returns dict with:
        data_file: str | None
        key: str | None
        show_help: bool
        show_version: bool
    """
    result = {
        "data_file": None,
        "key": None,
        "show_help": False,
        "show_version": False,
    }

    i = 0
    while i < len(args):
        arg = args[i]

        if arg == "--data-file":
            if i + 1 < len(args):
                result["data_file"] = args[i + 1]
                i += 1
            else:
                print("Error: --data-file requires a path")
                sys.exit(1)
        elif arg == "--key":
            if i + 1 < len(args):
                result["key"] = args[i + 1]
                i += 1
            else:
                print("Error: --key requires a name")
                sys.exit(1)
        elif arg in ("--help", "-h"):
            result["show_help"] = True
        elif arg in ("--version", "-v"):
            result["show_version"] = True
        elif arg.startswith("-"):
            print(f"Unknown option: {arg}")
            print("Run 'roster --help' for usage.")
            sys.exit(1)
        else:
            print(f"Unknown command: {arg}")
            print("Run 'roster --help' for usage.")
            sys.exit(1)

        i += 1

    return result


def build_store(config: Config) -> StudentStore:
    """File-backed store for the configured data file and slot."""
    return StudentStore(FileStorage(config.data_file), key=config.storage_key)


def main():
    """Main entry point."""
    args = parse_args(sys.argv[1:])

    if args["show_help"]:
        print_help()
        return

    if args["show_version"]:
        print(f"roster {__version__}")
        return

    config = Config(data_file_override=args["data_file"], key_override=args["key"])

    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    store = build_store(config)
    Repl(store).start()


if __name__ == "__main__":
    main()
