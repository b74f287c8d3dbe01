from __future__ import annotations

from typing import Any

import pytest

from books_search.clients.google_books import GoogleBooksResponseError
from books_search.services.book_service import project_fetch_result, project_search_results, project_volume


def _item(**volume_info: Any) -> dict[str, Any]:
    return {"id": "vol1", "selfLink": "https://example.test/vol1", "volumeInfo": {"title": "Title", **volume_info}}


def test_isbn_identifiers_are_routed_and_not_leaked() -> None:
    item = _item(
        industryIdentifiers=[
            {"type": "ISBN_13", "identifier": "9780000000002"},
            {"type": "OTHER", "identifier": "OCLC:123"},
            {"type": "ISBN_10", "identifier": "0000000001"},
        ]
    )

    result = project_volume(item).to_dict()

    assert result["isbn10"] == "0000000001"
    assert result["isbn13"] == "9780000000002"
    assert "industryIdentifiers" not in result
    assert "OCLC:123" not in result.values()


def test_later_isbn_of_same_type_wins() -> None:
    item = _item(
        industryIdentifiers=[
            {"type": "ISBN_13", "identifier": "first"},
            {"type": "ISBN_13", "identifier": "second"},
        ]
    )

    assert project_volume(item).isbn13 == "second"


def test_missing_image_links_means_no_thumbnail() -> None:
    result = project_volume(_item()).to_dict()

    assert "thumbnail" not in result
    assert "imageLinks" not in result


def test_thumbnail_is_lifted_from_image_links() -> None:
    result = project_volume(_item(imageLinks={"smallThumbnail": "s", "thumbnail": "t"})).to_dict()

    assert result["thumbnail"] == "t"
    assert "imageLinks" not in result


def test_only_whitelisted_fields_survive() -> None:
    item = _item(subtitle="Sub", maturityRating="NOT_MATURE", readingModes={"text": True}, language="en")
    item["saleInfo"] = {"saleability": "NOT_FOR_SALE"}

    assert project_volume(item).to_dict() == {
        "id": "vol1",
        "selfLink": "https://example.test/vol1",
        "title": "Title",
        "language": "en",
    }


def test_item_id_and_self_link_override_volume_info() -> None:
    item = _item(id="shadow", selfLink="shadow-link")

    record = project_volume(item)

    assert record.id == "vol1"
    assert record.self_link == "https://example.test/vol1"


def test_missing_volume_info_keeps_identity_fields() -> None:
    record = project_volume({"id": "bare", "selfLink": "link"})

    assert record.to_dict() == {"id": "bare", "selfLink": "link"}


def test_projection_is_deterministic() -> None:
    item = _item(
        authors=["A", "B"],
        imageLinks={"thumbnail": "t"},
        industryIdentifiers=[{"type": "ISBN_10", "identifier": "x"}],
    )

    first = project_volume(item)
    second = project_volume(item)

    assert first == second
    assert first.to_dict() == second.to_dict()
    assert item["volumeInfo"]["industryIdentifiers"] == [{"type": "ISBN_10", "identifier": "x"}]


def test_unexpected_field_types_raise_response_error() -> None:
    with pytest.raises(GoogleBooksResponseError):
        project_volume(_item(authors="not-a-list"))


@pytest.mark.parametrize("payload", [{}, {"totalItems": 0}, {"items": None}, None, []])
def test_search_results_without_items_are_empty(payload: Any) -> None:
    assert project_search_results(payload) == []


def test_fetch_result_for_empty_payload_is_none() -> None:
    assert project_fetch_result(None) is None
    assert project_fetch_result({}) is None
    assert project_fetch_result({"id": "vol1"}) is not None


def test_non_object_search_item_raises_response_error() -> None:
    payload = {"items": [{"id": "a"}, "junk", {"id": "b"}]}

    with pytest.raises(GoogleBooksResponseError, match="index 1"):
        project_search_results(payload)
