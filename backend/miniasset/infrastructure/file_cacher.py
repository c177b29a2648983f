"""File Cacher — build outputs stored as files under the output directory.

Invariants:
    - Cache entry for a build lives at <output_dir>/<build name>, with the
      digest of the definition it was built from at <output_dir>/.<name>.digest
    - Fresh means: entry exists, its digest matches the build's current
      definition (sources + filters), and it is at least as new as every source
    - A missing source makes the entry stale (the compile then reports it)
    - Writes go to a temp file and are os.replace'd into place: readers see
      either the previous entry or the complete new one
    - The digest is written after the entry; a missing or mismatched digest
      only ever makes the entry stale
    - Every OSError maps to CacheStorageError
"""

import hashlib
import logging
import os
import tempfile
from pathlib import Path

from miniasset.core.domain_types import Build
from miniasset.core.errors import CacheStorageError

logger = logging.getLogger(__name__)


def definition_digest(build: Build) -> str:
    """sha256 over a build's name, resolved sources and filters, in order."""
    h = hashlib.sha256()
    h.update(build.name.encode("utf-8"))
    for source in build.sources:
        h.update(b"\0source\0" + str(source).encode("utf-8"))
    for name in build.filters:
        h.update(b"\0filter\0" + name.encode("utf-8"))
    return h.hexdigest()


class FileCacher:
    """Cacher capability backed by a directory on disk."""

    def __init__(self, output_dir: str | os.PathLike):
        self.output_dir = Path(output_dir)

    def cache_path(self, build: Build) -> Path:
        return self.output_dir / build.name

    def digest_path(self, build: Build) -> Path:
        return self.output_dir / f".{build.name}.digest"

    def is_fresh(self, build: Build) -> bool:
        try:
            built_at = self.cache_path(build).stat().st_mtime
            recorded = self.digest_path(build).read_text(encoding="ascii").strip()
        except FileNotFoundError:
            return False
        except (OSError, UnicodeDecodeError) as e:
            raise CacheStorageError(str(e), "stat", build.name) from e
        if recorded != definition_digest(build):
            return False

        for source in build.sources:
            try:
                if source.stat().st_mtime > built_at:
                    return False
            except FileNotFoundError:
                return False
            except OSError as e:
                raise CacheStorageError(str(e), "stat", build.name) from e
        return True

    def read(self, build: Build) -> bytes:
        try:
            return self.cache_path(build).read_bytes()
        except OSError as e:
            raise CacheStorageError(str(e), "read", build.name) from e

    def write(self, build: Build, contents: bytes) -> None:
        target = self.cache_path(build)
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            self._replace(build, target, contents)
            self._replace(
                build, self.digest_path(build), definition_digest(build).encode("ascii"),
            )
        except OSError as e:
            raise CacheStorageError(str(e), "write", build.name) from e
        logger.debug(f"Cached {build.name} at {target}", extra={"build_name": build.name})

    def invalidate(self, build: Build) -> None:
        """Drop the cache entry so the next request recompiles."""
        try:
            self.digest_path(build).unlink(missing_ok=True)
            self.cache_path(build).unlink(missing_ok=True)
        except OSError as e:
            raise CacheStorageError(str(e), "invalidate", build.name) from e

    def _replace(self, build: Build, target: Path, data: bytes) -> None:
        fd, tmp = tempfile.mkstemp(
            dir=self.output_dir, prefix=f".{build.name}.", suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "wb") as fh:
                fh.write(data)
            os.replace(tmp, target)
        except BaseException:
            if os.path.exists(tmp):
                os.unlink(tmp)
            raise
