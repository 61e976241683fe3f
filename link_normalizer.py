# link_normalizer.py

# Download links have been submitted in several shapes over time:
#   - a JSON encoded string (multipart forms)
#   - a list of {label, url, size, quality, click_count}
#   - a single link object
#   - a quality keyed map: {"720p": [{...}, ...], "1080p": {...}}
# normalize_download_links() detects the shape once and always returns the
# canonical ordered list. It never raises: anything unusable becomes [].

import json
import logging
from typing import Any, Iterator, List, Mapping, Optional, Tuple

from models import DownloadLink, ShortLink

logger = logging.getLogger("filmycosmo.links")

SHAPE_NONE = "none"
SHAPE_LIST = "list"
SHAPE_SINGLE = "single"
SHAPE_BY_QUALITY = "by_quality"
SHAPE_UNKNOWN = "unknown"


def _decode(raw: Any) -> Any:
    if isinstance(raw, (str, bytes)):
        try:
            return json.loads(raw)
        except (TypeError, ValueError):
            logger.info("ignoring download links payload that is not valid JSON")
            return None
    return raw


def detect_shape(raw: Any) -> Tuple[str, Any]:
    value = _decode(raw)
    if value is None:
        return SHAPE_NONE, None
    if isinstance(value, (list, tuple)):
        return SHAPE_LIST, value
    if isinstance(value, Mapping):
        if "url" in value or "label" in value:
            return SHAPE_SINGLE, value
        return SHAPE_BY_QUALITY, value
    return SHAPE_UNKNOWN, value


def _candidates(shape: str, value: Any) -> Iterator[Tuple[Any, Optional[str]]]:
    """Yield (link_object, quality_hint) pairs in submission order."""
    if shape == SHAPE_LIST:
        for item in value:
            yield item, None
    elif shape == SHAPE_SINGLE:
        yield value, None
    elif shape == SHAPE_BY_QUALITY:
        for quality, group in value.items():
            hint = quality.strip() if isinstance(quality, str) else None
            if isinstance(group, Mapping):
                yield group, hint
            elif isinstance(group, (list, tuple)):
                for item in group:
                    yield item, hint


def _text(value: Any) -> Optional[str]:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return None


def _click_count(link: Mapping) -> int:
    value = link.get("click_count", link.get("clickCount"))
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    return max(0, int(value))


def _to_download_link(item: Any, quality_hint: Optional[str]) -> Optional[DownloadLink]:
    if not isinstance(item, Mapping):
        return None
    label = _text(item.get("label"))
    url = _text(item.get("url"))
    if not label or not url:
        return None
    return DownloadLink(
        label=label,
        url=url,
        size=_text(item.get("size")),
        quality=_text(item.get("quality")) or quality_hint,
        click_count=_click_count(item),
    )


def normalize_download_links(raw: Any) -> List[DownloadLink]:
    shape, value = detect_shape(raw)
    links: List[DownloadLink] = []
    for item, hint in _candidates(shape, value):
        link = _to_download_link(item, hint)
        if link is not None:
            links.append(link)
    return links


def normalize_short_links(raw: Any) -> List[ShortLink]:
    """
    Re-read stored short links. Only url is required; original_url falls back
    to url for records written before it was tracked.
    """
    value = _decode(raw)
    if not isinstance(value, (list, tuple)):
        return []

    links: List[ShortLink] = []
    for item in value:
        if not isinstance(item, Mapping):
            continue
        url = _text(item.get("url"))
        if not url:
            continue
        links.append(
            ShortLink(
                label=_text(item.get("label")) or "",
                url=url,
                original_url=_text(item.get("original_url")) or url,
                size=_text(item.get("size")),
                click_count=_click_count(item),
            )
        )
    return links
