from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ValidationError

from books_search.clients.google_books import GoogleBooksClient, GoogleBooksError
from books_search.observability.logging import get_logger
from books_search.observability.request_id import request_scope
from books_search.schemas.book import BookRecord
from books_search.schemas.options import (
    DEFAULT_FETCH_OPTIONS,
    DEFAULT_SEARCH_OPTIONS,
    FIELD_KEYWORDS,
    MAX_LIMIT,
    FetchOptions,
    SearchOptions,
)
from books_search.services.book_service import project_fetch_result, project_search_results

logger = get_logger(__name__)

OptionsInput = BaseModel | Mapping[str, Any] | None

_BLANK_AS_UNSET = {"field", "lang", "key"}


class InvalidArgumentError(GoogleBooksError, ValueError):
    pass


def _provided(options: OptionsInput) -> dict[str, Any]:
    if options is None:
        return {}
    if isinstance(options, BaseModel):
        options = options.model_dump()
    return {
        key: value
        for key, value in options.items()
        if value is not None and not (key in _BLANK_AS_UNSET and value == "")
    }


def _merge(defaults: BaseModel, overrides: dict[str, Any]) -> Any:
    try:
        return type(defaults).model_validate({**defaults.model_dump(), **overrides})
    except ValidationError as exc:
        names = sorted({str(error["loc"][0]) for error in exc.errors() if error.get("loc")})
        raise InvalidArgumentError(f"Invalid value for option(s): {', '.join(names)}") from exc


def resolve_search_options(options: OptionsInput = None) -> SearchOptions:
    return _merge(DEFAULT_SEARCH_OPTIONS, _provided(options))


def resolve_fetch_options(options: OptionsInput = None) -> FetchOptions:
    overrides = {key: value for key, value in _provided(options).items() if key == "lang"}
    return _merge(DEFAULT_FETCH_OPTIONS, overrides)


def _reject(message: str, operation: str) -> InvalidArgumentError:
    logger.warning(
        "google_books.validation.failed",
        extra={"operation": operation, "error_code": "invalid_argument"},
    )
    return InvalidArgumentError(message)


def validate_search(query: str | None, options: OptionsInput = None) -> SearchOptions:
    if not query:
        raise _reject("Query is required", "search")

    try:
        resolved = resolve_search_options(options)
    except InvalidArgumentError as exc:
        raise _reject(str(exc), "search") from exc

    if resolved.offset < 0:
        raise _reject("Offset cannot be below 0", "search")
    if resolved.limit < 1 or resolved.limit > MAX_LIMIT:
        raise _reject(f"Limit must be between 1 and {MAX_LIMIT}", "search")
    return resolved


def validate_fetch(volume_id: str | None, options: OptionsInput = None) -> FetchOptions:
    if not volume_id:
        raise _reject("The book ID is required", "fetch")

    try:
        return resolve_fetch_options(options)
    except InvalidArgumentError as exc:
        raise _reject(str(exc), "fetch") from exc


def build_query_text(query: str, field: str | None) -> str:
    if field:
        return FIELD_KEYWORDS[field] + query
    return query


def build_search_params(query: str, options: SearchOptions, default_key: str | None = None) -> dict[str, Any]:
    params: dict[str, Any] = {
        "q": build_query_text(query, options.field),
        "startIndex": options.offset,
        "maxResults": options.limit,
        "printType": options.type,
        "orderBy": options.order,
    }
    if options.lang:
        params["langRestrict"] = options.lang
    key = options.key or default_key
    if key:
        params["key"] = key
    return params


def build_fetch_params(options: FetchOptions) -> dict[str, Any]:
    if options.lang:
        return {"langRestrict": options.lang}
    return {}


async def search(
    query: str,
    options: OptionsInput = None,
    client: GoogleBooksClient | None = None,
) -> list[BookRecord]:
    """Search Google Books and return normalized records in provider order.

    Raises ``InvalidArgumentError`` before any request is sent when the
    query or options are invalid, and a ``GoogleBooksClientError`` subclass
    when the request itself fails.
    """
    with request_scope():
        resolved = validate_search(query, options)
        google_client = client or GoogleBooksClient()
        payload = await google_client.search_volumes(
            build_search_params(query, resolved, default_key=google_client.api_key)
        )
        results = project_search_results(payload)
        logger.info("google_books.search.complete", extra={"operation": "search", "result_count": len(results)})
        return results


async def fetch(
    volume_id: str,
    options: OptionsInput = None,
    client: GoogleBooksClient | None = None,
) -> BookRecord | None:
    """Fetch a single volume by id; ``None`` when the provider returns an empty body."""
    with request_scope():
        resolved = validate_fetch(volume_id, options)
        google_client = client or GoogleBooksClient()
        payload = await google_client.get_volume(volume_id, build_fetch_params(resolved))
        return project_fetch_result(payload)
