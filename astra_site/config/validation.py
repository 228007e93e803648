"""Semantic checks run on a site descriptor before it reaches the generator.

Validation is exhaustive: :func:`validate` walks the whole descriptor and
returns every :class:`ConfigIssue` it finds in document order (site identity,
head tags, navigation, sidebar, social links, then nav/sidebar
cross-consistency). :func:`ensure_valid` wraps the same walk and raises a
single :class:`SiteValidationError` listing all of them, which is what the
build entry points use to abort before writing anything.

Examples
--------
>>> from astra_site.sites import get_site
>>> validate(get_site("expanded"))
()
"""

from __future__ import annotations

import re
import typing as typ

from .helpers import (
    HEAD_TAG_NAMES,
    _is_absolute_url,
    _is_internal_link,
    _is_protocol_relative,
    _is_valid_link,
    _normalize_link,
)
from .models import (
    ConfigIssue,
    IssueKind,
    NavGroup,
    NavItem,
    NavLink,
    SiteConfig,
    SiteValidationError,
)

_ATTRIBUTE_NAME = re.compile(r"^[A-Za-z_:][-A-Za-z0-9_:.]*$")


def validate(site: SiteConfig) -> tuple[ConfigIssue, ...]:
    """Return all validation issues for ``site``; empty means valid."""
    issues: list[ConfigIssue] = []
    issues.extend(_check_meta(site))
    issues.extend(_check_head(site))
    issues.extend(_check_nav(site.nav, "themeConfig.nav"))
    issues.extend(_check_sidebar(site))
    issues.extend(_check_social_links(site))
    issues.extend(_check_nav_resolves(site))
    return tuple(issues)


def ensure_valid(site: SiteConfig) -> SiteConfig:
    """Return ``site`` unchanged, or raise when any issue is found.

    Raises
    ------
    SiteValidationError
        Carrying every issue reported by :func:`validate`.
    """
    issues = validate(site)
    if issues:
        raise SiteValidationError(issues)
    return site


def _check_meta(site: SiteConfig) -> typ.Iterator[ConfigIssue]:
    for key, value in (
        ("lang", site.language),
        ("title", site.title),
        ("description", site.description),
    ):
        if not value.strip():
            yield ConfigIssue(
                IssueKind.MISSING_FIELD, key, f"Site '{key}' must not be empty."
            )


def _check_head(site: SiteConfig) -> typ.Iterator[ConfigIssue]:
    for index, tag in enumerate(site.head):
        location = f"head[{index}]"
        if tag.tag.lower() not in HEAD_TAG_NAMES:
            yield ConfigIssue(
                IssueKind.MALFORMED_HEAD_TAG,
                location,
                f"Unsupported head tag '{tag.tag}'.",
            )
        for name, _ in tag.attributes:
            if not _ATTRIBUTE_NAME.match(name):
                yield ConfigIssue(
                    IssueKind.MALFORMED_HEAD_TAG,
                    location,
                    f"Invalid attribute name '{name}' on <{tag.tag}>.",
                )


def _check_nav(
    items: typ.Sequence[NavItem], location: str
) -> typ.Iterator[ConfigIssue]:
    for index, item in enumerate(items):
        item_location = f"{location}[{index}]"
        if not item.text:
            yield ConfigIssue(
                IssueKind.MISSING_FIELD,
                f"{item_location}.text",
                "Navigation items require 'text'.",
            )
        match item:
            case NavGroup(items=children) if not children:
                yield ConfigIssue(
                    IssueKind.MISSING_FIELD,
                    f"{item_location}.items",
                    f"Navigation group '{item.text}' has no items.",
                )
            case NavGroup(items=children):
                yield from _check_nav(children, f"{item_location}.items")
            case NavLink(link=link) if not _is_valid_link(link):
                yield ConfigIssue(
                    IssueKind.BROKEN_LINK,
                    f"{item_location}.link",
                    f"Navigation link '{link}' for '{item.text}'"
                    f" {_link_problem(link)}",
                )


def _link_problem(link: str) -> str:
    if _is_protocol_relative(link):
        return "is protocol-relative; use an absolute https:// URL instead."
    return "must start with '/' or be an absolute URL."


def _check_sidebar(site: SiteConfig) -> typ.Iterator[ConfigIssue]:
    seen: dict[str, str] = {}
    for prefix, groups in site.sidebar:
        prefix_location = f"themeConfig.sidebar[{prefix!r}]"
        if not (prefix.startswith("/") and prefix.endswith("/")):
            yield ConfigIssue(
                IssueKind.ORPHAN_PREFIX,
                prefix_location,
                f"Sidebar prefix '{prefix}' must start and end with '/'.",
            )
        if not groups:
            yield ConfigIssue(
                IssueKind.ORPHAN_PREFIX,
                prefix_location,
                f"Sidebar prefix '{prefix}' has no groups.",
            )
        for group_index, group in enumerate(groups):
            group_location = f"{prefix_location}[{group_index}]"
            if not group.text:
                yield ConfigIssue(
                    IssueKind.MISSING_FIELD,
                    f"{group_location}.text",
                    "Sidebar groups require 'text'.",
                )
            if not group.items:
                yield ConfigIssue(
                    IssueKind.MISSING_FIELD,
                    f"{group_location}.items",
                    f"Sidebar group '{group.text}' has no items.",
                )
            for item_index, item in enumerate(group.items):
                item_location = f"{group_location}.items[{item_index}]"
                if not item.text:
                    yield ConfigIssue(
                        IssueKind.MISSING_FIELD,
                        f"{item_location}.text",
                        "Sidebar links require 'text'.",
                    )
                if not _is_valid_link(item.link):
                    yield ConfigIssue(
                        IssueKind.BROKEN_LINK,
                        f"{item_location}.link",
                        f"Sidebar link '{item.link}' {_link_problem(item.link)}",
                    )
                    continue
                key = _normalize_link(item.link, keep_fragment=True)
                if key in seen:
                    yield ConfigIssue(
                        IssueKind.DUPLICATE_SIDEBAR_ENTRY,
                        f"{item_location}.link",
                        f"Sidebar link '{item.link}' already appears at {seen[key]}.",
                    )
                else:
                    seen[key] = f"{item_location}.link"


def _check_social_links(site: SiteConfig) -> typ.Iterator[ConfigIssue]:
    for index, social in enumerate(site.social_links):
        location = f"themeConfig.socialLinks[{index}]"
        if not social.icon:
            yield ConfigIssue(
                IssueKind.MISSING_FIELD,
                f"{location}.icon",
                "Social links require an 'icon'.",
            )
        if not _is_absolute_url(social.link):
            yield ConfigIssue(
                IssueKind.BROKEN_LINK,
                f"{location}.link",
                f"Social link '{social.link}' must be an absolute URL.",
            )


def _check_nav_resolves(site: SiteConfig) -> typ.Iterator[ConfigIssue]:
    """Report internal nav links under a sidebar prefix with no sidebar entry."""
    prefixes = [prefix for prefix, groups in site.sidebar if groups]
    if not prefixes:
        return
    targets = {
        _normalize_link(link)
        for link in site.sidebar_links()
        if _is_internal_link(link)
    }
    for location, leaf in _iter_nav_leaves(site.nav, "themeConfig.nav"):
        if not _is_internal_link(leaf.link):
            continue
        path = _normalize_link(leaf.link)
        covering = [prefix for prefix in prefixes if path.startswith(prefix)]
        if covering and path not in targets:
            yield ConfigIssue(
                IssueKind.UNRESOLVED_NAV_LINK,
                f"{location}.link",
                f"Navigation link '{leaf.link}' falls under sidebar prefix"
                f" '{covering[0]}' but no sidebar entry points to it.",
            )


def _iter_nav_leaves(
    items: typ.Sequence[NavItem], location: str
) -> typ.Iterator[tuple[str, NavLink]]:
    for index, item in enumerate(items):
        item_location = f"{location}[{index}]"
        match item:
            case NavGroup(items=children):
                yield from _iter_nav_leaves(children, f"{item_location}.items")
            case NavLink():
                yield item_location, item


__all__ = ["ensure_valid", "validate"]
