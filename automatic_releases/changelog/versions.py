"""Semantic version validation and ordering for release tags.

Tag names are cleaned the way npm's strict ``semver.valid`` cleans them
(surrounding whitespace and a single lowercase ``v`` are tolerated) and then
compared with SemVer 2.0.0 precedence.
"""

from functools import cmp_to_key
from typing import Any, Callable, Iterable, Literal, TypeVar

from semver import Version

from automatic_releases.release.exceptions import InvalidVersionError
from automatic_releases.utils.constants import MAX_VERSION_LENGTH, VERSION_PREFIX_PATTERN

T = TypeVar("T")


def _parse(tag: str) -> Version | None:
    if not isinstance(tag, str) or len(tag) > MAX_VERSION_LENGTH:
        return None
    candidate = VERSION_PREFIX_PATTERN.sub("", tag.strip(), count=1)
    try:
        return Version.parse(candidate)
    except ValueError:
        return None


def _parse_or_raise(tag: str) -> Version:
    version = _parse(tag)
    if version is None:
        raise InvalidVersionError(tag)
    return version


def clean(tag: str) -> str | None:
    """Return the normalized version text of a tag, or None if it is not a semantic version."""
    version = _parse(tag)
    return str(version) if version is not None else None


def is_valid(tag: str) -> bool:
    """Whether a tag name is a semantic version. Never raises."""
    return _parse(tag) is not None


def compare_descending(a: str, b: str) -> Literal[-1, 0, 1]:
    """Compare two versions so that sorting puts the highest version first."""
    result = _parse_or_raise(b).compare(_parse_or_raise(a))
    if result < 0:
        return -1
    if result > 0:
        return 1
    return 0


def less_than(a: str, b: str) -> bool:
    """Whether version a has lower precedence than version b."""
    return _parse_or_raise(a).compare(_parse_or_raise(b)) < 0


def sort_descending(items: Iterable[T], key: Callable[[T], Any] = str) -> list[T]:
    """Sort items by the valid version key(item), from highest to lowest precedence.

    The sort is stable, so items of equal precedence (e.g. differing only in
    build metadata) keep their input order.
    """
    return sorted(items, key=cmp_to_key(lambda a, b: compare_descending(key(a), key(b))))
