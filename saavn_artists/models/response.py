"""Search response envelope models.

Shared by the service layer, which builds them, and the HTTP and CLI
surfaces, which serialize them.  Field names follow the existing
JavaScript clients (``perPage``, ``searchQuery``) on the wire via aliases,
while Python code uses snake_case.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ArtistOut(BaseModel):
    """An artist as shown to callers.

    ``id``, ``url`` and ``popularity`` are only populated for
    ``extended=true`` requests and are omitted from the JSON otherwise.
    """

    name: str
    role: str = ""
    image: str = ""
    id: str | None = None
    url: str | None = None
    popularity: int | None = None


class ArtistSearchResponse(BaseModel):
    """Successful search envelope."""

    model_config = ConfigDict(populate_by_name=True)

    page: int = Field(ge=1)
    per_page: int = Field(alias="perPage", ge=1)
    language: str = Field(description='Resolved language tag, or "default"')
    search_query: str = Field(alias="searchQuery")
    total: int = Field(ge=0)
    artists: list[ArtistOut] = Field(default_factory=list)
    cached: bool = Field(description="True when served from the result cache")
