"""File Compiler — concatenates a build's sources and runs its filters.

Invariants:
    - Sources are read as UTF-8 and joined with a newline, in declared order
    - Filters run in declared order on the joined text
    - Every failure surfaces as CompileError naming the build
"""

import logging
from collections.abc import Callable, Mapping

import rcssmin
import rjsmin

from miniasset.core.domain_types import Build
from miniasset.core.errors import CompileError

logger = logging.getLogger(__name__)

FILTERS: dict[str, Callable[[str], str]] = {
    "jsmin": rjsmin.jsmin,
    "cssmin": rcssmin.cssmin,
}


class FileCompiler:
    """Compiler capability backed by the local filesystem."""

    def __init__(self, filters: Mapping[str, Callable[[str], str]] | None = None):
        self._filters = dict(FILTERS if filters is None else filters)

    def generate(self, build: Build) -> bytes:
        parts = [self._read_source(build, source) for source in build.sources]
        output = "\n".join(parts)
        for name in build.filters:
            output = self._apply_filter(build, name, output)
        logger.debug(
            f"Compiled {build.name} from {len(parts)} file(s)",
            extra={"build_name": build.name},
        )
        return output.encode("utf-8")

    @staticmethod
    def _read_source(build: Build, source) -> str:
        try:
            return source.read_text(encoding="utf-8")
        except FileNotFoundError:
            raise CompileError(
                f"Could not locate {source} for {build.name}", build.name,
            ) from None
        except (OSError, UnicodeDecodeError) as e:
            raise CompileError(f"Could not read {source}: {e}", build.name) from e

    def _apply_filter(self, build: Build, name: str, text: str) -> str:
        flt = self._filters.get(name)
        if flt is None:
            raise CompileError(f"Unknown filter '{name}' on {build.name}", build.name)
        try:
            return flt(text)
        except Exception as e:
            raise CompileError(
                f"Filter '{name}' failed on {build.name}: {e}", build.name,
            ) from e
