# field_reconciler.py

# Maps submitted movie fields onto the canonical stored names.
# Every logical field has an ordered list of accepted names (canonical first,
# then legacy aliases) and a coercion rule. Routes and the movie service only
# ever see the canonical names produced here.

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Tuple

from errors import ValidationError

MISSING = object()


def is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple)):
        return len(value) == 0
    return False


def coerce_text(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return MISSING


def coerce_bool(value: Any) -> Any:
    """Native bools, or the literal strings "true"/"false"."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized == "true":
            return True
        if normalized == "false":
            return False
    return MISSING


def coerce_int(value: Any) -> Any:
    if isinstance(value, bool):
        return MISSING
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else MISSING
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return MISSING
    return MISSING


def coerce_list(value: Any) -> Any:
    """
    Accept a native sequence or one comma separated string.
    Elements are trimmed and empty ones dropped; order is kept, duplicates too.
    """
    if isinstance(value, str):
        items = value.split(",")
    elif isinstance(value, (list, tuple)):
        items = value
    else:
        return MISSING

    result: List[str] = []
    for item in items:
        if is_blank(item):
            continue
        text = coerce_text(item)
        if text is MISSING or not text:
            continue
        result.append(text)
    return result


@dataclass(frozen=True)
class FieldRule:
    field: str
    aliases: Tuple[str, ...]
    coerce: Callable[[Any], Any]
    # value stored when every supplied alias is blank; MISSING = leave as is
    clear_to: Any = MISSING
    # value stored on create when nothing usable was supplied
    default: Any = MISSING
    required: bool = False


FIELD_RULES: Tuple[FieldRule, ...] = (
    FieldRule("movie_name", ("movie_name", "title"), coerce_text, required=True),
    FieldRule("movie_description", ("movie_description", "description"), coerce_text, clear_to=""),
    FieldRule("movie_poster", ("movie_poster", "posterUrl"), coerce_text),
    FieldRule("movie_year", ("movie_year", "year"), coerce_int),
    FieldRule("movie_tags", ("movie_tags", "tags"), coerce_list, clear_to=[], default=[]),
    FieldRule("movie_screenshots", ("movie_screenshots", "screenshots"), coerce_list, default=[]),
    FieldRule("movie_show", ("movie_show", "isActive"), coerce_bool, default=True),
    FieldRule("trending", ("trending",), coerce_bool, default=False),
    FieldRule("movie_genre", ("movie_genre", "genre"), coerce_list, clear_to=[], default=[]),
    FieldRule("movie_duration", ("movie_duration",), coerce_text),
    FieldRule("movie_language", ("movie_language", "language"), coerce_list, clear_to=[], default=[]),
    FieldRule("movie_starcast", ("movie_starcast", "starcast"), coerce_list, clear_to=[], default=[]),
    FieldRule("movie_type", ("movie_type", "type"), coerce_text),
    FieldRule("movie_size", ("movie_size", "size"), coerce_text),
)

DOWNLOAD_LINK_KEYS: Tuple[str, ...] = ("download_links", "downloadLinks")


def _fresh(value: Any) -> Any:
    return list(value) if isinstance(value, list) else value


def _resolve(rule: FieldRule, raw: Mapping[str, Any]) -> Tuple[bool, Any]:
    """
    Returns (supplied, value). value is MISSING when the field must not change.
    The first alias carrying a non-blank value wins; if its value cannot be
    coerced the field is left alone rather than falling through to later aliases.
    """
    supplied = [alias for alias in rule.aliases if alias in raw]
    if not supplied:
        return False, MISSING

    for alias in supplied:
        value = raw[alias]
        if not is_blank(value):
            return True, rule.coerce(value)

    return True, _fresh(rule.clear_to)


def reconcile_fields(raw: Mapping[str, Any], *, creating: bool) -> Dict[str, Any]:
    """
    Build a partial update of canonical fields from a submitted payload.

    On create, fields that were not supplied (or could not be coerced) take
    their defaults. On update they are simply absent from the result, so the
    stored value stays untouched.

    Raises ValidationError when the movie name is missing on create, or when an
    update supplies a name that is blank.
    """
    update: Dict[str, Any] = {}

    for rule in FIELD_RULES:
        supplied, value = _resolve(rule, raw)

        if rule.required and (value is MISSING or value == ""):
            if creating:
                raise ValidationError("Movie Name is required")
            if supplied:
                raise ValidationError("Movie name cannot be empty")
            continue

        if value is not MISSING:
            update[rule.field] = value
        elif creating and rule.default is not MISSING:
            update[rule.field] = _fresh(rule.default)

    return update


def has_download_links(raw: Mapping[str, Any]) -> bool:
    return any(key in raw for key in DOWNLOAD_LINK_KEYS)


def download_links_payload(raw: Mapping[str, Any]) -> Any:
    for key in DOWNLOAD_LINK_KEYS:
        if key in raw:
            return raw[key]
    return None
