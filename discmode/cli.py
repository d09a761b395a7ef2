"""
Command-line entry point.

Usage:
    xbox-drive-convertor                         # help
    sudo xbox-drive-convertor list
    sudo xbox-drive-convertor read /dev/sr0
    sudo xbox-drive-convertor set pc /dev/sr0
    sudo xbox-drive-convertor toggle

Exit codes: 0 ok, 1 operation failed / nothing found, 2 bad usage.
"""

APP_VERSION = "1.0.0"

import sys
import logging
import argparse
from typing import Optional, Sequence

from .controller import ModeController
from .privileges import elevation_hint, is_elevated

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_USAGE = 2

USAGE = """\
Usage: xbox-drive-convertor <command> <arg?> <path-to-disc-if-needed>
Supported commands: 'list', 'read', 'set', 'toggle'
Command examples:
         list - print list of xbox discs with mode
         read /dev/mydiscpath - read the mode of `/dev/mydiscpath` disc
         set pc /dev/mydiscpath - set the mode to `pc` for `/dev/mydiscpath` disc
         set xbox /dev/mydiscpath - set the mode to `xbox` for `/dev/mydiscpath` disc
         toggle - toggle mode from for first mounted xbox disc
Don't forget run app from administrator user. Example for Linux and MacOS: sudo xbox-drive-convertor list

How use? Mount xbox disc and execute command: sudo xbox-drive-convertor toggle
"""


def build_parser() -> argparse.ArgumentParser:
    """Flags only; the command and its arguments are left as plain words."""
    parser = argparse.ArgumentParser(
        prog="xbox-drive-convertor",
        description="Switch an Xbox drive between xbox and pc mode.",
        add_help=False,
        allow_abbrev=False,
    )
    parser.add_argument("-h", "--help", action="store_true", help="Show usage")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--version", action="version",
                        version=f"%(prog)s {APP_VERSION}")
    return parser


def parse_argv(argv: Sequence[str]) -> tuple[argparse.Namespace, list[str]]:
    """
    Split ``argv`` into flags and command words.  Flags may appear anywhere;
    anything argparse does not know (including paths starting with '-') is
    kept as a word, in order.
    """
    opts, words = build_parser().parse_known_args(list(argv))
    return opts, [w for w in words if w != "--"]


def setup_logging(verbose: bool = False):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def _hint_if_not_elevated():
    if not is_elevated():
        logger.warning(elevation_hint())


def run(argv: Sequence[str], controller: Optional[ModeController] = None) -> int:
    """Dispatch ``argv`` (without the program name). Returns the exit code."""
    opts, words = parse_argv(argv)
    if opts.help or not words:
        print(USAGE)
        return EXIT_OK

    controller = controller or ModeController()
    command = words[0].lower()
    rest = words[1:]

    if command == "list":
        controller.list_devices()
        return EXIT_OK

    if command == "read":
        if len(rest) != 1:
            print("Please provide the disc path for reading")
            return EXIT_USAGE
        mode = controller.read(rest[0])
        return EXIT_OK if mode.is_known else EXIT_FAILED

    if command == "set":
        if len(rest) != 2:
            print("Please provide mode (`xbox` or `pc`) and then the disc path")
            return EXIT_USAGE
        mode, path = rest
        if controller.set(path, mode):
            return EXIT_OK
        _hint_if_not_elevated()
        return EXIT_FAILED

    if command == "toggle":
        # an empty scan already tells the user to run as administrator
        return EXIT_OK if controller.toggle() is not None else EXIT_FAILED

    print(f"Invalid command {words[0]}. Use 'list', 'read', 'set' or 'toggle'")
    return EXIT_USAGE


def main(argv: Optional[Sequence[str]] = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    try:
        opts, _ = parse_argv(argv)
        setup_logging(opts.verbose)
        return run(argv)
    except SystemExit as e:
        # argparse: --version
        return e.code if isinstance(e.code, int) else EXIT_USAGE
    except KeyboardInterrupt:
        print("\n  Aborted.")
        return EXIT_FAILED


if __name__ == "__main__":
    sys.exit(main())
