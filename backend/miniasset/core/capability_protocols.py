"""Capability Protocols — contracts for the collaborators the core drives.

Invariants:
    - Core NEVER imports concrete implementations — they are injected
    - Any method may raise; the gateway converts failures to BuildFailed values
    - Methods are synchronous: they do blocking IO and are run in worker
      threads by the services layer
"""

from typing import Protocol

from miniasset.core.domain_types import AssetCollection, Build


class Compiler(Protocol):
    """Turns a Build's sources into output bytes."""
    def generate(self, build: Build) -> bytes: ...


class Cacher(Protocol):
    """Stores compiled bytes keyed by build and judges their freshness."""
    def is_fresh(self, build: Build) -> bool: ...
    def read(self, build: Build) -> bytes: ...
    def write(self, build: Build, contents: bytes) -> None: ...


class CollectionProvider(Protocol):
    """Supplies the current AssetCollection snapshot."""
    def asset_collection(self) -> AssetCollection: ...
