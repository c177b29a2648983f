"""Asset Factory — builds the collection, compiler and cacher from settings.

Invariants:
    - The AssetCollection is parsed once and shared read-only by every request
    - With reload enabled, the collection is re-parsed only when the config
      file's mtime changes
    - Compiler and cacher are created once per factory
"""

import logging
import os
import threading
from pathlib import Path

from miniasset.core.domain_types import AssetCollection
from miniasset.infrastructure.asset_definitions import load_asset_definitions
from miniasset.infrastructure.file_cacher import FileCacher
from miniasset.infrastructure.file_compiler import FileCompiler

logger = logging.getLogger(__name__)


class AssetFactory:
    """Memoized source of the collaborators the engine needs."""

    def __init__(
        self,
        config_path: str | os.PathLike,
        output_dir: str | os.PathLike,
        reload: bool = False,
    ):
        self.config_path = Path(config_path)
        self.output_dir = Path(output_dir)
        self.reload = reload
        self._lock = threading.Lock()
        self._collection: AssetCollection | None = None
        self._loaded_mtime: float | None = None
        self._compiler = FileCompiler()
        self._cacher = FileCacher(self.output_dir)

    def asset_collection(self) -> AssetCollection:
        with self._lock:
            if self._collection is None or (self.reload and self._config_changed()):
                mtime = self._config_mtime()
                self._collection = load_asset_definitions(self.config_path)
                self._loaded_mtime = mtime
            return self._collection

    def compiler(self) -> FileCompiler:
        return self._compiler

    def cacher(self) -> FileCacher:
        return self._cacher

    def _config_mtime(self) -> float | None:
        try:
            return self.config_path.stat().st_mtime
        except OSError:
            return None

    def _config_changed(self) -> bool:
        changed = self._config_mtime() != self._loaded_mtime
        if changed:
            logger.info(f"Asset configuration changed, reloading {self.config_path}")
        return changed
