"""Command-line interface — print the environment a tool would see.

``envmap`` assembles one map from the process environment, any number
of dotenv files and ``-e KEY=VALUE`` flags, then prints it::

    $ envmap --no-environ -f .env -e DEBUG=1
    DEBUG=1
    DB_HOST=localhost

It is also a worked example of the intended call order: ``-e`` pairs
are extracted *before* ``argparse`` sees the arguments, because
argparse would otherwise treat ``-e=A=b`` and friends as errors.

``main()`` returns an exit status instead of calling ``sys.exit`` so it
can be tested directly.
"""

import argparse
import json
import sys
from collections.abc import Sequence

from envmap.logging import LogLevel
from envmap.loader import Loader
from envmap.mapping import EnvMap
from envmap.pair import Pair
from envmap.reader import EnvReadError

FORMATS = ("dotenv", "json")
_JSON_INDENT = 2


def build_parser() -> argparse.ArgumentParser:
    """Build the parser for the options left after ``-e`` extraction."""
    parser = argparse.ArgumentParser(
        prog="envmap",
        description="Merge environment, dotenv files and -e KEY=VALUE flags.",
        epilog="Pairs are given with -e KEY=VALUE, -e=KEY=VALUE, --e KEY=VALUE or --e=KEY=VALUE.",
    )
    parser.add_argument(
        "-f",
        "--file",
        action="append",
        default=[],
        metavar="PATH",
        help="dotenv file to load (repeatable, later files win)",
    )
    parser.add_argument(
        "--no-environ",
        action="store_true",
        help="do not start from the process environment",
    )
    parser.add_argument(
        "--missing-ok",
        action="store_true",
        help="skip files that do not exist",
    )
    parser.add_argument("--format", choices=FORMATS, default="dotenv", help="output format")
    parser.add_argument("--get", metavar="KEY", help="print only the value of KEY")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="print the parse log to stderr",
    )
    return parser


def format_env(env: EnvMap, fmt: str = "dotenv") -> str:
    """Render *env* sorted by key.

    Args:
        env: The map to render.
        fmt: ``"dotenv"`` for re-parseable ``KEY=VALUE`` lines, or
            ``"json"`` for an object.

    Returns:
        The rendered text, without a trailing newline.

    """
    pairs = sorted(env.items())
    if fmt == "json":
        return json.dumps(dict(pairs), indent=_JSON_INDENT)
    return "\n".join(str(Pair(key=key, value=value)) for key, value in pairs)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the CLI and return the exit status."""
    if argv is None:
        argv = sys.argv[1:]

    loader = Loader(flag="e")
    rest = loader.load_args(argv)
    options = build_parser().parse_args(rest)

    try:
        for path in options.file:
            loader.load_file(path, missing_ok=options.missing_ok)
    except EnvReadError as e:
        print(f"Error: {e}", file=sys.stderr)  # noqa: T201
        status = 1
    else:
        if not options.no_environ:
            loader.load_environ()
        status = _emit(loader, options)

    min_level = LogLevel.DEBUG if options.verbose else LogLevel.WARNING
    for entry in loader.logger.filter(min_level=min_level):
        print(entry, file=sys.stderr)  # noqa: T201
    return status


def _emit(loader: Loader, options: argparse.Namespace) -> int:
    """Print the requested output; return 1 if ``--get`` found nothing."""
    if options.get is not None:
        value = loader.lookup(options.get)
        if value is None:
            print(f"Error: {options.get} is not set", file=sys.stderr)  # noqa: T201
            return 1
        print(value)  # noqa: T201
        return 0

    text = format_env(loader.build(), options.format)
    if text:
        print(text)  # noqa: T201
    return 0
