from typing import Any

from pydantic import ValidationError

from books_search.clients.google_books import GoogleBooksResponseError
from books_search.schemas.book import BookRecord


def _thumbnail(volume_info: dict[str, Any]) -> str | None:
    image_links = volume_info.get("imageLinks")
    if not isinstance(image_links, dict):
        return None
    return image_links.get("thumbnail") or None


def _isbns(volume_info: dict[str, Any]) -> tuple[str | None, str | None]:
    identifiers = volume_info.get("industryIdentifiers")
    if not isinstance(identifiers, list):
        return None, None

    isbn10: str | None = None
    isbn13: str | None = None
    for entry in identifiers:
        if not isinstance(entry, dict):
            continue
        if entry.get("type") == "ISBN_10":
            isbn10 = entry.get("identifier")
        elif entry.get("type") == "ISBN_13":
            isbn13 = entry.get("identifier")
    return isbn10, isbn13


def project_volume(item: dict[str, Any]) -> BookRecord:
    """Project one raw volume resource onto a ``BookRecord``.

    Only whitelisted ``volumeInfo`` fields are copied, plus the item's
    ``id`` and ``selfLink``, the thumbnail link and the ISBNs. Pure: the
    same input always yields an equal record.
    """
    volume_info = item.get("volumeInfo")
    if not isinstance(volume_info, dict):
        volume_info = {}

    isbn10, isbn13 = _isbns(volume_info)

    try:
        return BookRecord(
            id=item.get("id"),
            self_link=item.get("selfLink"),
            title=volume_info.get("title"),
            authors=volume_info.get("authors"),
            publisher=volume_info.get("publisher"),
            published_date=volume_info.get("publishedDate"),
            page_count=volume_info.get("pageCount"),
            print_type=volume_info.get("printType"),
            categories=volume_info.get("categories"),
            language=volume_info.get("language"),
            info_link=volume_info.get("infoLink"),
            description=volume_info.get("description"),
            average_rating=volume_info.get("averageRating"),
            ratings_count=volume_info.get("ratingsCount"),
            preview_link=volume_info.get("previewLink"),
            thumbnail=_thumbnail(volume_info),
            isbn10=isbn10,
            isbn13=isbn13,
        )
    except ValidationError as exc:
        raise GoogleBooksResponseError(f"Unexpected volume shape for {item.get('id')!r}") from exc


def project_search_results(payload: Any) -> list[BookRecord]:
    if not isinstance(payload, dict):
        return []
    items = payload.get("items")
    if not isinstance(items, list):
        return []
    results: list[BookRecord] = []
    for index, item in enumerate(items):
        if not isinstance(item, dict):
            raise GoogleBooksResponseError(f"Unexpected search item at index {index}: {type(item).__name__}")
        results.append(project_volume(item))
    return results


def project_fetch_result(payload: Any) -> BookRecord | None:
    if not payload or not isinstance(payload, dict):
        return None
    return project_volume(payload)
