from __future__ import annotations

from metadata.merge import merge_result, no_album_record
from metadata.types import CandidatePage, EnrichmentResult, ImageRef, ScoredCandidate

_THUMB = ImageRef(url="https://upload.example/thumb.jpg", width=500, height=500)
_ORIGINAL = ImageRef(url="https://upload.example/orig.jpg", width=3000, height=3000)
_SPOTIFY = ImageRef(url="https://i.scdn.example/abbey.jpg", width=640, height=640)


def _scored(**overrides) -> ScoredCandidate:
    fields = {
        "title": "Abbey Road",
        "extract": "Abbey Road is the eleventh studio album by the Beatles. It was released in 1969.",
        "thumbnail": _THUMB,
        "original": _ORIGINAL,
    }
    fields.update(overrides)
    return ScoredCandidate(page=CandidatePage(**fields), relevance_score=10300)


def test_no_match_ignores_enrichment() -> None:
    record = merge_result("Abbey Road", None, EnrichmentResult(artist_names=("The Beatles",), preview_image=_SPOTIFY))

    assert record.display_text == "No album found."
    assert record.image_url is None
    assert record.thumbnail is None
    assert record == no_album_record("Abbey Road")


def test_match_without_enrichment_uses_first_sentence_and_original_image() -> None:
    record = merge_result("Abbey Road", _scored(), None)

    assert record.display_text == "Abbey Road is the eleventh studio album by the Beatles."
    assert record.image_url == _ORIGINAL.url
    assert record.thumbnail == _THUMB
    assert record.query == "Abbey Road"


def test_enrichment_adds_artist_prefix() -> None:
    enrichment = EnrichmentResult(artist_names=("Simon & Garfunkel", "Art Garfunkel"), preview_image=None)

    record = merge_result("Bookends", _scored(extract="Bookends is the fourth studio album."), enrichment)

    assert record.display_text == "By Simon & Garfunkel, Art Garfunkel. Bookends is the fourth studio album."


def test_enrichment_without_artists_keeps_empty_prefix() -> None:
    record = merge_result("Abbey Road", _scored(), EnrichmentResult(artist_names=()))
    assert record.display_text.startswith("By . Abbey Road is")


def test_missing_enrichment_adds_no_prefix() -> None:
    record = merge_result("Abbey Road", _scored(), None)
    assert record.display_text.startswith("Abbey Road is")


def test_image_precedence_original_then_thumbnail_then_placeholder() -> None:
    assert merge_result("q", _scored(), None).image_url == _ORIGINAL.url
    assert merge_result("q", _scored(original=None), None).image_url == _THUMB.url
    assert (
        merge_result("q", _scored(original=None, thumbnail=None), None).image_url
        == "https://via.placeholder.com/400x300"
    )


def test_spotify_image_only_feeds_display_thumbnail() -> None:
    enrichment = EnrichmentResult(artist_names=("The Beatles",), preview_image=_SPOTIFY)

    with_wiki_images = merge_result("Abbey Road", _scored(), enrichment)
    assert with_wiki_images.image_url == _ORIGINAL.url
    assert with_wiki_images.thumbnail == _SPOTIFY

    without_wiki_images = merge_result("Abbey Road", _scored(original=None, thumbnail=None), enrichment)
    assert without_wiki_images.image_url == "https://via.placeholder.com/400x300"
    assert without_wiki_images.thumbnail == _SPOTIFY


def test_field_sources_are_logged(caplog) -> None:
    enrichment = EnrichmentResult(artist_names=("The Beatles",), preview_image=_SPOTIFY)

    with caplog.at_level("INFO"):
        merge_result("Abbey Road", _scored(original=None), enrichment)

    messages = [r.getMessage() for r in caplog.records if "result_field_source" in r.getMessage()]
    assert "result_field_source field=artists source=spotify" in messages
    assert "result_field_source field=image_url source=wikipedia_thumbnail" in messages
    assert "result_field_source field=thumbnail source=spotify" in messages


def test_to_dict_uses_display_keys() -> None:
    record = merge_result("Abbey Road", _scored(), None)
    assert record.to_dict() == {
        "displayText": "Abbey Road is the eleventh studio album by the Beatles.",
        "imageUrl": _ORIGINAL.url,
        "query": "Abbey Road",
        "thumbnail": {"url": _THUMB.url, "width": 500, "height": 500},
    }
