from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class BookRecord(BaseModel):
    """Normalized Google Books volume.

    Attribute names are snake_case; ``to_dict`` renders the provider's
    camelCase keys and leaves out anything the volume did not carry.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str | None = Field(default=None)
    self_link: str | None = Field(default=None, alias="selfLink")
    title: str | None = Field(default=None)
    authors: list[str] | None = Field(default=None)
    publisher: str | None = Field(default=None)
    published_date: str | None = Field(default=None, alias="publishedDate")
    page_count: int | None = Field(default=None, alias="pageCount")
    print_type: str | None = Field(default=None, alias="printType")
    categories: list[str] | None = Field(default=None)
    language: str | None = Field(default=None)
    info_link: str | None = Field(default=None, alias="infoLink")
    description: str | None = Field(default=None)
    average_rating: float | None = Field(default=None, alias="averageRating")
    ratings_count: int | None = Field(default=None, alias="ratingsCount")
    preview_link: str | None = Field(default=None, alias="previewLink")
    thumbnail: str | None = Field(default=None)
    isbn10: str | None = Field(default=None)
    isbn13: str | None = Field(default=None)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)
