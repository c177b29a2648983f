"""Build Resolver — maps a request path to a Build in the AssetCollection.

Invariants:
    - Paths outside the prefix have no target name (not an asset request,
      never an error)
    - Names absent from the collection resolve to RouteMiss.UNKNOWN_BUILD
    - Lookup is exact: no normalization, no case folding
"""

from miniasset.core.domain_types import AssetCollection, Build, RouteMiss


def asset_target_name(path: str, prefix: str) -> str | None:
    """Candidate build name, or None when ``path`` is not under ``prefix``."""
    if not path.startswith(prefix):
        return None
    return path[len(prefix):]


def lookup_build(name: str, collection: AssetCollection) -> Build | RouteMiss:
    if not collection.contains(name):
        return RouteMiss.UNKNOWN_BUILD
    return collection.get(name)
