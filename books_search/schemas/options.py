from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


SearchField = Literal["title", "author", "publisher", "subject", "isbn"]
PrintType = Literal["all", "books", "magazines"]
OrderBy = Literal["relevance", "newest"]

# https://developers.google.com/books/docs/v1/using#st_params
FIELD_KEYWORDS: dict[str, str] = {
    "title": "intitle:",
    "author": "inauthor:",
    "publisher": "inpublisher:",
    "subject": "subject:",
    "isbn": "isbn:",
}

MAX_LIMIT = 40


class SearchOptions(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    key: str | None = Field(default=None)
    field: SearchField | None = Field(default=None)
    offset: int = Field(default=0)
    limit: int = Field(default=10)
    type: PrintType = Field(default="all")
    order: OrderBy = Field(default="relevance")
    lang: str | None = Field(default=None)


class FetchOptions(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    lang: str | None = Field(default=None)


DEFAULT_SEARCH_OPTIONS = SearchOptions()
DEFAULT_FETCH_OPTIONS = FetchOptions()
