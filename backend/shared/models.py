"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    Base model serialized with camelCase keys.

    Accepts both camelCase and snake_case on input so persisted documents
    and request bodies can use the wire names.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_document(self) -> dict[str, Any]:
        """Dump to a JSON-ready dict using the wire (camelCase) names."""
        return self.model_dump(mode="json", by_alias=True)


class MediaCategory(str, Enum):
    """Kind of media a request is for."""

    MOVIE = "movie"
    SHOW = "show"

    @property
    def collection_key(self) -> str:
        """Key of the per-category list in the requests and blacklist documents."""
        return "movies" if self is MediaCategory.MOVIE else "shows"


class MediaItem(CamelModel):
    """
    A media item as picked by the user from search results.

    Only the id is required. Extra provider fields (actors, imdb, tvdb
    links, ...) pass through untouched to the downloader.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    id: str = Field(..., min_length=1, description="Provider media identifier")
    title: Optional[str] = Field(None, description="Display title")
    year: Optional[Union[int, str]] = Field(None, description="Release year")
    poster: Optional[str] = Field(None, description="Poster image URL")
    plot: Optional[str] = Field(None, description="Short synopsis")
