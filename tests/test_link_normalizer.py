from __future__ import annotations

import json

import pytest

from link_normalizer import (
    SHAPE_BY_QUALITY,
    SHAPE_LIST,
    SHAPE_NONE,
    SHAPE_SINGLE,
    detect_shape,
    normalize_download_links,
    normalize_short_links,
)


def test_valid_links_keep_order_and_count() -> None:
    raw = [
        {"label": "GDrive", "url": "http://a"},
        {"label": "Mega", "url": "http://b", "size": " 1.4GB ", "quality": "720p"},
        {"label": "GDrive", "url": "http://a"},
    ]

    links = normalize_download_links(raw)

    assert [(link.label, link.url) for link in links] == [
        ("GDrive", "http://a"),
        ("Mega", "http://b"),
        ("GDrive", "http://a"),
    ]
    assert links[1].size == "1.4GB"
    assert links[1].quality == "720p"
    assert links[0].size is None
    assert all(link.click_count == 0 for link in links)


def test_json_string_payload_drops_entry_with_empty_label() -> None:
    raw = '[{"label":"GDrive","url":"http://a"},{"label":"","url":"http://b"}]'

    links = normalize_download_links(raw)

    assert len(links) == 1
    assert links[0].label == "GDrive"


@pytest.mark.parametrize(
    "raw",
    ["", "not json", "[{", '{"label": ', "[1, 2", b"\xff\xfe"],
)
def test_malformed_json_yields_no_links(raw: object) -> None:
    assert normalize_download_links(raw) == []


@pytest.mark.parametrize("raw", [None, 42, "42", "null", True, [None, "x", 3]])
def test_unusable_payloads_yield_no_links(raw: object) -> None:
    assert normalize_download_links(raw) == []


def test_entries_missing_label_or_url_are_dropped() -> None:
    raw = [
        {"label": "ok", "url": "  http://ok  "},
        {"label": "no url"},
        {"url": "http://no-label"},
        {"label": "blank url", "url": "   "},
        {"label": "   ", "url": "http://blank-label"},
        {"label": 5, "url": "http://numeric-label"},
    ]

    links = normalize_download_links(raw)

    assert [link.url for link in links] == ["http://ok"]


def test_click_counts_are_preserved_when_numeric() -> None:
    raw = [
        {"label": "a", "url": "http://a", "click_count": 7},
        {"label": "b", "url": "http://b", "clickCount": 3},
        {"label": "c", "url": "http://c", "click_count": "9"},
        {"label": "d", "url": "http://d", "click_count": -2},
    ]

    assert [link.click_count for link in normalize_download_links(raw)] == [7, 3, 0, 0]


def test_quality_keyed_map_is_flattened_in_key_order() -> None:
    raw = {
        "1080p": [{"label": "GDrive", "url": "http://hd"}],
        "720p": [
            {"label": "Mega", "url": "http://sd"},
            {"label": "Zippy", "url": "http://sd2", "quality": "720p HEVC"},
        ],
        "480p": {"label": "Direct", "url": "http://low"},
    }

    links = normalize_download_links(json.dumps(raw))

    assert [(link.url, link.quality) for link in links] == [
        ("http://hd", "1080p"),
        ("http://sd", "720p"),
        ("http://sd2", "720p HEVC"),
        ("http://low", "480p"),
    ]


def test_single_link_object_is_accepted() -> None:
    links = normalize_download_links({"label": "Only", "url": "http://only"})

    assert [link.url for link in links] == ["http://only"]


def test_shape_detection() -> None:
    assert detect_shape(None)[0] == SHAPE_NONE
    assert detect_shape("[]")[0] == SHAPE_LIST
    assert detect_shape({"url": "http://x"})[0] == SHAPE_SINGLE
    assert detect_shape({"720p": []})[0] == SHAPE_BY_QUALITY


def test_stored_short_links_default_original_url() -> None:
    links = normalize_short_links(
        [
            {"label": "GDrive", "url": "https://s/1"},
            {"url": "https://s/2", "original_url": "http://b", "click_count": 4},
            {"label": "broken"},
        ]
    )

    assert [(link.url, link.original_url, link.click_count) for link in links] == [
        ("https://s/1", "https://s/1", 0),
        ("https://s/2", "http://b", 4),
    ]
    assert links[1].label == ""
