"""Utility helpers shared by the site config loader and validator."""

from __future__ import annotations

import collections.abc as cabc
import typing as typ
from urllib.parse import urlsplit

from .models import SiteConfigError

ABSOLUTE_URL_SCHEMES = frozenset({"http", "https", "mailto"})
HEAD_TAG_NAMES = frozenset(
    {"base", "link", "meta", "noscript", "script", "style", "title"}
)
_PAGE_SUFFIXES = (".md", ".html")


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _require_str(value: object | None) -> str:
    """Return a stripped string, treating a missing value as empty."""
    return _optional_str(value) or ""


def _optional_bool(value: object | None) -> bool | None:
    if value is None:
        return None
    return bool(value)


def _is_absolute_url(link: str) -> bool:
    """Return True for well-formed absolute URLs the generator can link to."""
    try:
        parts = urlsplit(link)
    except ValueError:
        return False
    if parts.scheme not in ABSOLUTE_URL_SCHEMES:
        return False
    if parts.scheme == "mailto":
        return "@" in parts.path
    return bool(parts.hostname)


def _is_internal_link(link: str) -> bool:
    """Return True for site-relative links such as ``/sdk/client``."""
    return link.startswith("/") and not link.startswith("//")


def _is_valid_link(link: str) -> bool:
    return _is_internal_link(link) or _is_absolute_url(link)


def _is_protocol_relative(link: str) -> bool:
    return link.startswith("//")


def _normalize_link(link: str, *, keep_fragment: bool = False) -> str:
    """Collapse equivalent internal links to a single comparable form.

    The generator resolves ``/guide/intro``, ``/guide/intro.md`` and
    ``/guide/intro.html?ref=nav`` to the same page. Nav/sidebar cross-checks
    compare the bare page path. Duplicate detection passes ``keep_fragment``
    because ``/guide/#install`` and ``/guide/#usage`` are distinct entries.
    """
    if not _is_internal_link(link):
        return link
    path, _, fragment = link.partition("#")
    path = path.split("?", 1)[0]
    for suffix in _PAGE_SUFFIXES:
        if path.endswith(suffix):
            path = path[: -len(suffix)]
            break
    if path.endswith("/index"):
        path = path[: -len("index")]
    path = path or "/"
    if keep_fragment and fragment:
        return f"{path}#{fragment}"
    return path


def _as_mapping(value: object, location: str) -> typ.Mapping[str, typ.Any]:
    match value:
        case cabc.Mapping():
            return value
        case _:
            msg = f"{location} must be a mapping."
            raise SiteConfigError(msg)


def _as_list(value: object | None, location: str) -> list[typ.Any]:
    match value:
        case None:
            return []
        case list() | tuple():
            return list(value)
        case _:
            msg = f"{location} must be a list."
            raise SiteConfigError(msg)


__all__ = [
    "ABSOLUTE_URL_SCHEMES",
    "HEAD_TAG_NAMES",
    "_as_list",
    "_as_mapping",
    "_is_absolute_url",
    "_is_internal_link",
    "_is_protocol_relative",
    "_is_valid_link",
    "_normalize_link",
    "_optional_bool",
    "_optional_str",
    "_require_str",
]
