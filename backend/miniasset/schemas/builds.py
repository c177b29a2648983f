"""Build Schemas — JSON views of the configured builds."""

from pydantic import BaseModel


class BuildSummary(BaseModel):
    """One build as listed by the builds API."""
    name: str
    ext: str
    content_type: str
    url: str
    sources: list[str]
    filters: list[str]
    fresh: bool


class BuildList(BaseModel):
    builds: list[BuildSummary]
    count: int
