"""envmap — parse ``KEY=VALUE`` pairs from the environment, files and flags.

Re-exports public symbols so callers can write::

    from envmap import EnvMap, open_file, parse_flag_args
"""

from envmap.environ import environ, getenv, lookup_env, parse_slice
from envmap.flags import parse_flag_args
from envmap.loader import Layer, Loader
from envmap.logging import LogEntry, Logger, LogLevel
from envmap.mapping import EnvMap
from envmap.pair import Pair, parse_pair
from envmap.reader import EnvReadError, iter_lines, open_file, read

__all__ = [
    "EnvMap",
    "EnvReadError",
    "Layer",
    "Loader",
    "LogEntry",
    "LogLevel",
    "Logger",
    "Pair",
    "environ",
    "getenv",
    "iter_lines",
    "lookup_env",
    "open_file",
    "parse_flag_args",
    "parse_pair",
    "parse_slice",
    "read",
]
