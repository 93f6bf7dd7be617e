"""Command-line option parsing."""

from __future__ import annotations

import getopt
import sys
from typing import Dict, Optional, Sequence

VERSION = "v0.1"

_SHORT_OPTIONS = "g:c:shp:l:"
_LONG_OPTIONS = ["config_file=", "server", "port=", "log=", "help", "host=", "game="]

_OPTION_KEYS = {
    "-g": "game",
    "--game": "game",
    "-c": "config_file",
    "--config_file": "config_file",
    "-p": "port",
    "--port": "port",
    "-l": "log_file",
    "--log": "log_file",
    "--host": "host",
}

HELP = (
    f"ours {VERSION}\n"
    "usage: ours [-slpcgh]\n"
    "  -s\t\tTurn on server mode\n"
    "  -l\t\tSpecify a different log file (default: ours.log)\n"
    "  -p [port]\tSpecify a different port (default: 4096)\n"
    "  -c [file]\tSpecify a different config file (default: ~/.nmrc)\n"
    "  -g [file]\tSpecify a game to load.\n"
    "  --host [host]\tSpecify a host.\n"
    "  -h --help\tDisplay this help message\n"
)


def parse_options(argv: Optional[Sequence[str]] = None) -> Dict[str, str]:
    """Parse command-line arguments (without the program name) into a settings dict.

    Prints the help text and exits with status 0 on -h/--help; reports bad
    options on stderr and exits with status 1.
    """
    args = sys.argv[1:] if argv is None else list(argv)
    try:
        parsed, rest = getopt.gnu_getopt(args, _SHORT_OPTIONS, _LONG_OPTIONS)
    except getopt.GetoptError as err:
        print(f"ours: {err}", file=sys.stderr)
        raise SystemExit(1) from None

    options: Dict[str, str] = {}
    for option, value in parsed:
        if option in ("-h", "--help"):
            print(HELP, end="")
            raise SystemExit(0)
        if option in ("-s", "--server"):
            options["server"] = "true"
        else:
            options[_OPTION_KEYS[option]] = value

    if rest:
        options["rest"] = rest[0]
    return options