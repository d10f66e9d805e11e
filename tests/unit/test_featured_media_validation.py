"""
Featured media validation unit tests.
"""

from __future__ import annotations

from content_model.components.featured_media import FeaturedMediaConfig, validate_featured_media
from content_model.domain.entities import Media, ReferenceCaptionItem

CAPTION_MESSAGE = "Please either remove the caption or select a Media entity"


class MockMediaLookup:
    def __init__(self, *media: Media) -> None:
        self._media = {m.id: m for m in media}

    def get_by_id(self, media_id: str) -> Media | None:
        return self._media.get(media_id)


def test_valid_items_pass() -> None:
    items = [
        ReferenceCaptionItem(target_id="1", caption="Image 1 caption"),
        ReferenceCaptionItem(target_id="2"),
    ]

    assert validate_featured_media(items, FeaturedMediaConfig()) == []


def test_caption_without_target() -> None:
    items = [ReferenceCaptionItem(caption="Invalid caption")]

    errors = validate_featured_media(items, FeaturedMediaConfig())

    assert len(errors) == 1
    assert errors[0].code == "caption_without_target"
    assert errors[0].message == CAPTION_MESSAGE
    assert errors[0].field == "featured_media_field[0][caption]"
    assert errors[0].delta == 0


def test_every_caption_without_target_is_reported() -> None:
    items = [
        ReferenceCaptionItem(caption="first"),
        ReferenceCaptionItem(target_id="1", caption="ok"),
        ReferenceCaptionItem(caption="second"),
        ReferenceCaptionItem(caption="third"),
    ]

    errors = validate_featured_media(items, FeaturedMediaConfig())

    assert [e.delta for e in errors] == [0, 2, 3]
    assert all(e.code == "caption_without_target" for e in errors)


def test_blank_and_whitespace_rows_are_ignored() -> None:
    items = [ReferenceCaptionItem(), ReferenceCaptionItem(caption="   ")]

    assert validate_featured_media(items, FeaturedMediaConfig()) == []


def test_target_label_comes_from_config() -> None:
    config = FeaturedMediaConfig(target_label="Image")

    errors = validate_featured_media([ReferenceCaptionItem(caption="x")], config)

    assert errors[0].message == "Please either remove the caption or select a Image"


def test_field_name_in_error_path() -> None:
    errors = validate_featured_media(
        [ReferenceCaptionItem(caption="x")],
        FeaturedMediaConfig(),
        field_name="gallery",
    )

    assert errors[0].field == "gallery[0][caption]"


def test_caption_too_long() -> None:
    config = FeaturedMediaConfig(caption_max_length=5)

    errors = validate_featured_media(
        [ReferenceCaptionItem(target_id="1", caption="too long")], config
    )

    assert [e.code for e in errors] == ["caption_too_long"]


def test_too_many_values() -> None:
    config = FeaturedMediaConfig(cardinality=1)
    items = [ReferenceCaptionItem(target_id="1"), ReferenceCaptionItem(target_id="2")]

    errors = validate_featured_media(items, config)

    assert [e.code for e in errors] == ["too_many_values"]
    assert errors[0].delta is None


def test_missing_target_reported_with_lookup() -> None:
    lookup = MockMediaLookup(Media(id="1", name="Image 1"))
    items = [ReferenceCaptionItem(target_id="media:1"), ReferenceCaptionItem(target_id="9")]

    errors = validate_featured_media(items, FeaturedMediaConfig(), media_lookup=lookup)

    assert [(e.code, e.delta) for e in errors] == [("target_not_found", 1)]


def test_target_bundle_not_allowed() -> None:
    lookup = MockMediaLookup(Media(id="3", bundle="document", name="Report"))
    config = FeaturedMediaConfig(allowed_target_bundles=("image",))

    errors = validate_featured_media(
        [ReferenceCaptionItem(target_id="3")], config, media_lookup=lookup
    )

    assert [e.code for e in errors] == ["target_bundle_not_allowed"]
