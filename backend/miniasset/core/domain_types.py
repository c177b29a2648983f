"""Domain Types — builds, collections, and the plain-data request/response seam.

Invariants:
    - Build is frozen: name and ext never change once resolved
    - AssetCollection is read-only after construction (MappingProxyType)
    - BuildOutcome is exactly Built | BuildFailed — capability failures are values
    - AssetRequest/AssetResponse carry no framework types

Design Decisions:
    - Frozen dataclasses over pydantic here: core stays free of validation IO
    - Decision is PassThrough | AssetResponse so the host maps it with one match
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Mapping


# ─── Builds ──────────────────────────────────────────────────────

@dataclass(frozen=True)
class Build:
    """One named output artifact, e.g. ``app.js``."""
    name: str
    sources: tuple[Path, ...] = ()
    filters: tuple[str, ...] = ()

    @property
    def ext(self) -> str:
        """Extension after the last dot, without the dot; "" when absent."""
        _, dot, ext = self.name.rpartition(".")
        return ext if dot else ""


class AssetCollection:
    """Immutable name → Build mapping for one configuration snapshot."""

    def __init__(self, builds: Mapping[str, Build] | None = None):
        self._builds = MappingProxyType(dict(builds or {}))

    @classmethod
    def from_builds(cls, builds: list[Build]) -> "AssetCollection":
        return cls({b.name: b for b in builds})

    def contains(self, name: str) -> bool:
        return name in self._builds

    def get(self, name: str) -> Build:
        """Return the build named ``name``. Callers check contains() first."""
        try:
            return self._builds[name]
        except KeyError:
            raise KeyError(f"Unknown build '{name}'") from None

    def names(self) -> list[str]:
        return sorted(self._builds)

    def __iter__(self) -> Iterator[Build]:
        return iter(self._builds[name] for name in self.names())

    def __len__(self) -> int:
        return len(self._builds)


# ─── Routing ─────────────────────────────────────────────────────

class RouteMiss(str, Enum):
    """Why a request is not handled here. Neither value is an error."""
    NOT_ASSET = "not_asset"
    UNKNOWN_BUILD = "unknown_build"


@dataclass(frozen=True)
class AssetRequest:
    """Host-agnostic request descriptor."""
    path: str
    method: str = "GET"


@dataclass(frozen=True)
class AssetResponse:
    """Host-agnostic response descriptor."""
    status: int
    body: bytes
    headers: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class PassThrough:
    """Signal to hand the request to the next handler unchanged."""
    reason: RouteMiss


Decision = PassThrough | AssetResponse


# ─── Build Outcomes ──────────────────────────────────────────────

@dataclass(frozen=True)
class Built:
    contents: bytes
    from_cache: bool = False


@dataclass(frozen=True)
class BuildFailed:
    code: str
    message: str


BuildOutcome = Built | BuildFailed
