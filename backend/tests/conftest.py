"""Root conftest — fakes for the compiler/cacher capabilities.

Invariants:
    - Fakes record every call so tests can assert how often they ran
    - FakeCacher freshness is controlled directly (entries + stale set)
    - Configured errors are raised from the matching capability method
"""

import threading

import pytest

from miniasset.core.domain_types import AssetCollection, Build
from miniasset.services.build_gateway import BuildCacheGateway
from miniasset.services.decision_engine import AssetEngine


class FakeCompiler:
    def __init__(self):
        self.calls: list[str] = []
        self.outputs: dict[str, bytes] = {}
        self.error: Exception | None = None

    def generate(self, build: Build) -> bytes:
        self.calls.append(build.name)
        if self.error:
            raise self.error
        return self.outputs.get(build.name, f"/* {build.name} */".encode())


class FakeCacher:
    def __init__(self):
        self.entries: dict[str, bytes] = {}
        self.stale: set[str] = set()
        self.writes: list[str] = []
        self.fresh_error: Exception | None = None
        self.read_error: Exception | None = None
        self.write_error: Exception | None = None

    def is_fresh(self, build: Build) -> bool:
        if self.fresh_error:
            raise self.fresh_error
        return build.name in self.entries and build.name not in self.stale

    def read(self, build: Build) -> bytes:
        if self.read_error:
            raise self.read_error
        return self.entries[build.name]

    def write(self, build: Build, contents: bytes) -> None:
        if self.write_error:
            raise self.write_error
        self.entries[build.name] = contents
        self.stale.discard(build.name)
        self.writes.append(build.name)


class StaticCollections:
    """CollectionProvider returning a fixed collection, recording each load and its thread."""

    def __init__(self, collection: AssetCollection):
        self.collection = collection
        self.loads = 0
        self.load_threads: list[int] = []
        self.error: Exception | None = None

    def asset_collection(self) -> AssetCollection:
        self.loads += 1
        self.load_threads.append(threading.get_ident())
        if self.error:
            raise self.error
        return self.collection


@pytest.fixture
def fake_compiler():
    return FakeCompiler()


@pytest.fixture
def fake_cacher():
    return FakeCacher()


@pytest.fixture
def collections():
    return StaticCollections(AssetCollection.from_builds([
        Build("app.js"), Build("site.css"), Build("logo.svg"),
    ]))


@pytest.fixture
def gateway(fake_compiler, fake_cacher):
    return BuildCacheGateway(fake_compiler, fake_cacher)


@pytest.fixture
def engine(collections, gateway):
    return AssetEngine(collections, gateway, "/asset/")
