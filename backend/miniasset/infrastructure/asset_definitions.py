"""Asset Definitions — INI configuration → AssetCollection.

Invariants:
    - Sections without a dot ([js], [css]) hold per-extension defaults
    - Sections with a dot ([app.js]) are build targets
    - Source files resolve against the extension's search paths, relative to
      the INI file; the first existing match wins
    - Target filters follow the extension defaults, duplicates dropped
    - Any parse/validation problem raises AssetConfigError

Example:
    [js]
    paths = js, vendor/js
    filters = jsmin

    [app.js]
    files = base.js, app.js
"""

import configparser
import logging
import re
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError, field_validator

from miniasset.core.domain_types import AssetCollection, Build
from miniasset.core.errors import AssetConfigError
from miniasset.infrastructure.file_compiler import FILTERS

logger = logging.getLogger(__name__)

TARGET_NAME_PATTERN = r"^[A-Za-z0-9_\-][A-Za-z0-9_.\-]*\.[A-Za-z0-9]+$"


def _split_list(value: object) -> object:
    if isinstance(value, str):
        return [item.strip() for item in re.split(r"[,\n]", value) if item.strip()]
    return value


class ExtensionDefaults(BaseModel):
    """Search paths and default filters shared by every build of one extension."""
    paths: list[str] = Field(default_factory=list)
    filters: list[str] = Field(default_factory=list)

    @field_validator("paths", "filters", mode="before")
    @classmethod
    def split_lists(cls, v: object) -> object:
        return _split_list(v)


class TargetDefinition(BaseModel):
    """One [name.ext] section."""
    name: str = Field(pattern=TARGET_NAME_PATTERN)
    files: list[str] = Field(min_length=1)
    filters: list[str] = Field(default_factory=list)

    @field_validator("files", "filters", mode="before")
    @classmethod
    def split_lists(cls, v: object) -> object:
        return _split_list(v)

    @property
    def ext(self) -> str:
        return self.name.rsplit(".", 1)[1]


def load_asset_definitions(config_path: str | Path) -> AssetCollection:
    """Parse ``config_path`` into an immutable AssetCollection."""
    path = Path(config_path)
    parser = configparser.ConfigParser(interpolation=None)
    try:
        with path.open(encoding="utf-8") as fh:
            parser.read_file(fh)
    except FileNotFoundError:
        raise AssetConfigError("file not found", str(path)) from None
    except (OSError, UnicodeDecodeError, configparser.Error) as e:
        raise AssetConfigError(str(e), str(path)) from e

    defaults: dict[str, ExtensionDefaults] = {}
    targets: list[TargetDefinition] = []
    for section in parser.sections():
        values = dict(parser.items(section))
        try:
            if "." in section:
                targets.append(TargetDefinition(**{**values, "name": section}))
            else:
                defaults[section] = ExtensionDefaults(**values)
        except ValidationError as e:
            raise AssetConfigError(f"[{section}] {_describe(e)}", str(path)) from e

    base_dir = path.parent
    builds = [_to_build(t, defaults.get(t.ext), base_dir, path) for t in targets]
    logger.info(f"Loaded {len(builds)} build(s) from {path}")
    return AssetCollection.from_builds(builds)


def _to_build(
    target: TargetDefinition,
    ext_defaults: ExtensionDefaults | None,
    base_dir: Path,
    config_path: Path,
) -> Build:
    ext_defaults = ext_defaults or ExtensionDefaults()
    search_dirs = [base_dir / p for p in ext_defaults.paths] or [base_dir]
    filters = tuple(dict.fromkeys(ext_defaults.filters + target.filters))
    unknown = [f for f in filters if f not in FILTERS]
    if unknown:
        raise AssetConfigError(
            f"[{target.name}] unknown filter(s): {', '.join(unknown)}", str(config_path),
        )
    return Build(
        name=target.name,
        sources=tuple(_resolve_source(f, search_dirs) for f in target.files),
        filters=filters,
    )


def _resolve_source(filename: str, search_dirs: list[Path]) -> Path:
    for directory in search_dirs:
        candidate = directory / filename
        if candidate.is_file():
            return candidate
    return search_dirs[0] / filename


def _describe(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(loc) for loc in e['loc'])}: {e['msg']}" for e in exc.errors()
    )
