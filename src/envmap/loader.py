"""Layered loading — combine environment, files and flags into one map.

A command-line tool usually accepts configuration from several places
and lets the more specific ones win::

    environment  <  config files (in order)  <  -e flags

``Loader`` keeps one map per source, so the precedence holds no matter
in which order the sources are loaded.  A tool typically extracts its
``-e`` flags first (to get the residual arguments for its own parser),
then loads whichever files those arguments name, then calls
``build()``::

    loader = Loader(flag="e")
    rest = loader.load_args(sys.argv[1:])
    options = parser.parse_args(rest)
    for path in options.file:
        loader.load_file(path)
    loader.load_environ()
    env = loader.build()
"""

from collections.abc import Iterable, Sequence
from enum import IntEnum
from pathlib import Path

from envmap.environ import environ, lookup_env
from envmap.flags import parse_flag_args
from envmap.logging import Logger, LogLevel
from envmap.mapping import EnvMap
from envmap.reader import EnvReadError, open_file, read


class Layer(IntEnum):
    """Precedence of each source; a higher layer overrides a lower one."""

    ENVIRON = 0
    FILE = 1
    ARGS = 2


class Loader:
    """Collect pairs from several sources and merge them by precedence.

    Every load call records what it did in ``logger``; pass your own
    ``Logger`` to share it, or read ``loader.logger`` afterwards.
    """

    def __init__(self, *, flag: str = "e", logger: Logger | None = None) -> None:
        """Create an empty loader.

        Args:
            flag: Bare name of the flag that carries pairs on the
                command line.
            logger: Audit log to record into (a new one if None).

        """
        self._flag = flag
        self.logger = logger if logger is not None else Logger()
        self._environ: EnvMap | None = None
        self._files: list[EnvMap] = []
        self._args = EnvMap()

    @property
    def flag(self) -> str:
        """Return the bare flag name used by ``load_args``."""
        return self._flag

    def load_environ(self, entries: Iterable[str] | None = None) -> int:
        """Load the process environment (or the given entries).

        Loading the environment again replaces the previous snapshot.

        Returns:
            The number of pairs loaded.

        """
        self._environ, count = environ(entries, logger=self.logger)
        return count

    def load_file(self, path: str | Path, *, missing_ok: bool = False) -> int:
        """Load a dotenv file as a new file layer.

        Args:
            path: The file to read.
            missing_ok: Log a warning instead of raising when *path*
                does not exist.

        Returns:
            The number of pairs loaded.

        Raises:
            EnvReadError: If the file cannot be read (and *missing_ok*
                does not cover it).

        """
        env = EnvMap()
        if missing_ok and not Path(path).exists():
            self.logger.log(LogLevel.WARNING, "file not found, skipped", source=str(path))
            return 0
        try:
            count = open_file(path, env, logger=self.logger)
        except EnvReadError:
            if env:
                # Keep what was read before the failure.
                self._files.append(env)
            raise
        self._files.append(env)
        return count

    def load_stream(self, stream: Iterable[str], *, name: str = "stream") -> int:
        """Load an already open text stream as a new file layer."""
        env = EnvMap()
        try:
            count = read(stream, env, logger=self.logger, source=name)
        except EnvReadError:
            if env:
                self._files.append(env)
            raise
        self._files.append(env)
        return count

    def load_args(self, args: Sequence[str]) -> list[str]:
        """Extract flagged pairs from *args*.

        Returns:
            The arguments that were not consumed, in their original order.

        """
        residual, _count = parse_flag_args(self._flag, args, self._args, logger=self.logger)
        return residual

    def layers(self) -> list[tuple[Layer, EnvMap]]:
        """Return the loaded maps from lowest to highest precedence."""
        result: list[tuple[Layer, EnvMap]] = []
        if self._environ is not None:
            result.append((Layer.ENVIRON, self._environ))
        result.extend((Layer.FILE, env) for env in self._files)
        result.append((Layer.ARGS, self._args))
        return result

    def build(self) -> EnvMap:
        """Merge every layer into a new map, higher layers winning."""
        env = EnvMap()
        for _layer, source in self.layers():
            env.merge(source)
        return env

    def lookup(self, key: str) -> str | None:
        """Find *key* in the highest layer that has it.

        The real process environment is only consulted if it was loaded
        with ``load_environ``.
        """
        maps = [source for _layer, source in reversed(self.layers())]
        return lookup_env(key, *maps, fallback={})

    def getenv(self, key: str) -> str:
        """Like ``lookup`` but return ``""`` for a missing key."""
        value = self.lookup(key)
        return value if value is not None else ""
