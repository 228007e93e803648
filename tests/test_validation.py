"""Unit tests for site descriptor validation.

These tests cover the exhaustive validator in ``astra_site.config.validation``:
broken navigation links, duplicate sidebar entries, empty sidebar prefixes,
missing identity fields, malformed head tags, and nav links that fall under a
sidebar prefix without a matching sidebar entry.

Usage
-----
Run ``pytest tests/test_validation.py -v`` to execute the suite. Fixtures
providing mutable copies of the built-in descriptors live in
``tests/conftest.py``.
"""

from __future__ import annotations

import typing as typ

import pytest

from astra_site.config import (
    IssueKind,
    SiteValidationError,
    build_site_config,
    ensure_valid,
    validate,
)
from astra_site.sites import get_site


def _kinds(payload: dict[str, typ.Any]) -> list[IssueKind]:
    return [issue.kind for issue in validate(build_site_config(payload))]


def _bare_site(**theme: typ.Any) -> dict[str, typ.Any]:
    return {
        "lang": "zh-CN",
        "title": "AstraFaber",
        "description": "基于 Apache Arrow 的高性能数据库",
        "themeConfig": theme,
    }


def test_builtin_sites_are_valid() -> None:
    """Both shipped descriptors should pass validation."""
    for name in ("minimal", "expanded"):
        issues = validate(get_site(name))
        assert issues == (), f"Expected no issues for {name}, got {issues!r}"


def test_expanded_sidebar_has_five_unique_links() -> None:
    """The expanded /sdk/ forest flattens to exactly five distinct links."""
    site = get_site("expanded")
    links = site.sidebar_links()
    group_titles = [group.text for group in site.sidebar_groups("/sdk/")]
    assert group_titles == ["总览", "Vera 模块", "Arca 模块"]
    assert len(links) == 5
    assert len(set(links)) == 5


def test_root_nav_link_is_valid() -> None:
    """A nav leaf pointing at the site root is accepted."""
    payload = _bare_site(nav=[{"text": "首页", "link": "/"}])
    assert _kinds(payload) == []


def test_absolute_nav_link_is_valid() -> None:
    """External nav links must be well-formed absolute URLs."""
    payload = _bare_site(
        nav=[{"text": "GitHub", "link": "https://github.com/AstraFaber/astra-faber"}]
    )
    assert _kinds(payload) == []


@pytest.mark.parametrize("link", ["sdk/client", "", "https://", "ftp://host/x"])
def test_relative_nav_link_is_broken(link: str) -> None:
    """Links neither rooted at '/' nor absolute are reported as broken."""
    payload = _bare_site(nav=[{"text": "Bad", "link": link}])
    issues = validate(build_site_config(payload))
    assert [issue.kind for issue in issues] == [IssueKind.BROKEN_LINK]
    assert issues[0].location == "themeConfig.nav[0].link"


def test_nested_nav_links_are_checked() -> None:
    """Broken leaves inside groups report their nested location."""
    payload = _bare_site(
        nav=[
            {
                "text": "SDK",
                "items": [
                    {"text": "Client SDK", "link": "/sdk/client"},
                    {"text": "Bad", "link": "sdk/twin"},
                ],
            }
        ]
    )
    issues = validate(build_site_config(payload))
    assert [issue.location for issue in issues] == ["themeConfig.nav[0].items[1].link"]


def test_empty_nav_group_is_missing_items() -> None:
    payload = _bare_site(nav=[{"text": "SDK", "items": []}])
    assert _kinds(payload) == [IssueKind.MISSING_FIELD]


def test_duplicate_sidebar_entry(expanded_payload: dict[str, typ.Any]) -> None:
    """Two groups sharing a link produce a single duplicate issue."""
    groups = expanded_payload["themeConfig"]["sidebar"]["/sdk/"]
    groups.append(
        {
            "text": "Vera 备份",
            "items": [{"text": "Vera Client", "link": "/sdk/vera/client"}],
        }
    )
    issues = validate(build_site_config(expanded_payload))
    assert [issue.kind for issue in issues] == [IssueKind.DUPLICATE_SIDEBAR_ENTRY]
    assert issues[0].location == "themeConfig.sidebar['/sdk/'][3].items[0].link"
    assert "themeConfig.sidebar['/sdk/'][1].items[0].link" in issues[0].message


@pytest.mark.parametrize(
    ("link", "first"),
    [
        ("/sdk/vera/client.md", "[1].items[0]"),
        ("/sdk/vera/client.html", "[1].items[0]"),
        ("/sdk/vera/client?ref=sidebar", "[1].items[0]"),
        ("/sdk/index", "[0].items[0]"),
        ("/sdk/index.md", "[0].items[0]"),
    ],
)
def test_duplicate_detection_normalizes_page_paths(
    expanded_payload: dict[str, typ.Any], link: str, first: str
) -> None:
    """Suffixes, queries and ``index`` pages name the same sidebar entry."""
    group = expanded_payload["themeConfig"]["sidebar"]["/sdk/"][2]
    group["items"].append({"text": "Again", "link": link})
    issues = validate(build_site_config(expanded_payload))
    assert [issue.kind for issue in issues] == [IssueKind.DUPLICATE_SIDEBAR_ENTRY]
    assert issues[0].location == "themeConfig.sidebar['/sdk/'][2].items[2].link"
    assert f"themeConfig.sidebar['/sdk/']{first}.link" in issues[0].message


def test_anchors_on_one_page_are_distinct_entries() -> None:
    """Several sidebar entries may point at sections of the same page."""
    payload = _bare_site(
        sidebar={
            "/guide/": [
                {
                    "text": "指南",
                    "items": [
                        {"text": "安装", "link": "/guide/#install"},
                        {"text": "使用", "link": "/guide/#usage"},
                        {"text": "概览", "link": "/guide/"},
                    ],
                }
            ]
        }
    )
    assert _kinds(payload) == []


@pytest.mark.parametrize("repeat", ["/guide/#install", "/guide/index.md#install"])
def test_repeated_anchor_is_duplicate(repeat: str) -> None:
    payload = _bare_site(
        sidebar={
            "/guide/": [
                {
                    "text": "指南",
                    "items": [
                        {"text": "安装", "link": "/guide/#install"},
                        {"text": "再次", "link": repeat},
                    ],
                }
            ]
        }
    )
    assert _kinds(payload) == [IssueKind.DUPLICATE_SIDEBAR_ENTRY]


def test_empty_prefix_is_orphan() -> None:
    payload = _bare_site(sidebar={"/sdk/": []})
    issues = validate(build_site_config(payload))
    assert [issue.kind for issue in issues] == [IssueKind.ORPHAN_PREFIX]
    assert issues[0].location == "themeConfig.sidebar['/sdk/']"


def test_prefix_must_be_a_directory_path() -> None:
    payload = _bare_site(
        sidebar={"sdk": [{"text": "SDK", "items": [{"text": "A", "link": "/sdk/a"}]}]}
    )
    assert _kinds(payload) == [IssueKind.ORPHAN_PREFIX]


def test_empty_sidebar_group_is_missing_items() -> None:
    payload = _bare_site(sidebar={"/sdk/": [{"text": "SDK", "items": []}]})
    assert _kinds(payload) == [IssueKind.MISSING_FIELD]


@pytest.mark.parametrize("field", ["lang", "title", "description"])
def test_empty_identity_field_is_missing(field: str) -> None:
    """Empty language, title or description fail with MissingField."""
    payload = _bare_site()
    payload[field] = ""
    issues = validate(build_site_config(payload))
    assert [(issue.kind, issue.location) for issue in issues] == [
        (IssueKind.MISSING_FIELD, field)
    ]


def test_malformed_head_tags() -> None:
    payload = _bare_site()
    payload["head"] = [
        ["meta", {"name": "theme-color", "content": "#7c3aed"}],
        ["blink", {}],
        ["link", {"bad name": "x"}],
    ]
    issues = validate(build_site_config(payload))
    assert [(issue.kind, issue.location) for issue in issues] == [
        (IssueKind.MALFORMED_HEAD_TAG, "head[1]"),
        (IssueKind.MALFORMED_HEAD_TAG, "head[2]"),
    ]


def test_social_link_must_be_absolute() -> None:
    payload = _bare_site(socialLinks=[{"icon": "github", "link": "/github"}])
    assert _kinds(payload) == [IssueKind.BROKEN_LINK]


@pytest.mark.parametrize(
    ("link", "expected"),
    [
        ("mailto:docs@astrafaber.io", []),
        ("mailto:", [IssueKind.BROKEN_LINK]),
        ("mailto:docs", [IssueKind.BROKEN_LINK]),
    ],
)
def test_mailto_nav_links(link: str, expected: list[IssueKind]) -> None:
    """``mailto:`` links count as absolute only when they carry an address."""
    payload = _bare_site(nav=[{"text": "联系我们", "link": link}])
    assert _kinds(payload) == expected


@pytest.mark.parametrize("location", ["nav", "sidebar"])
def test_protocol_relative_link_is_named_in_message(location: str) -> None:
    link = "//cdn.example.com/sdk.html"
    if location == "nav":
        payload = _bare_site(nav=[{"text": "CDN", "link": link}])
    else:
        group = {"text": "SDK", "items": [{"text": "CDN", "link": link}]}
        payload = _bare_site(sidebar={"/sdk/": [group]})
    issues = validate(build_site_config(payload))
    assert [issue.kind for issue in issues] == [IssueKind.BROKEN_LINK]
    assert "protocol-relative" in issues[0].message
    assert "must start with '/'" not in issues[0].message


@pytest.mark.parametrize(
    "link",
    [
        "/sdk/vera/client.html",
        "/sdk/arca/client?tab=api",
        "/sdk/vera/client#setup",
        "/sdk/index",
    ],
)
def test_nav_resolution_normalizes_links(
    expanded_payload: dict[str, typ.Any], link: str
) -> None:
    """Nav links resolve to sidebar entries regardless of suffix or anchor."""
    expanded_payload["themeConfig"]["nav"][1]["items"].append(
        {"text": "Alias", "link": link}
    )
    assert _kinds(expanded_payload) == []


@pytest.mark.parametrize(
    "entry",
    [["", {}], ["  ", {"name": "x"}], ["meta", {"": "x"}]],
)
def test_empty_head_names_are_malformed(entry: list[typ.Any]) -> None:
    payload = _bare_site()
    payload["head"] = [entry]
    issues = validate(build_site_config(payload))
    assert [(issue.kind, issue.location) for issue in issues] == [
        (IssueKind.MALFORMED_HEAD_TAG, "head[0]")
    ]


def test_social_link_requires_icon() -> None:
    payload = _bare_site(socialLinks=[{"icon": "", "link": "https://github.com/x"}])
    issues = validate(build_site_config(payload))
    assert [(issue.kind, issue.location) for issue in issues] == [
        (IssueKind.MISSING_FIELD, "themeConfig.socialLinks[0].icon")
    ]


def test_nav_link_without_sidebar_entry_is_unresolved(
    expanded_payload: dict[str, typ.Any],
) -> None:
    """Nav links under a sidebar prefix must land on a sidebar entry."""
    sdk_menu = expanded_payload["themeConfig"]["nav"][1]["items"]
    sdk_menu.append({"text": "Lumen 模块", "link": "/sdk/lumen/client"})
    issues = validate(build_site_config(expanded_payload))
    assert [issue.kind for issue in issues] == [IssueKind.UNRESOLVED_NAV_LINK]
    assert issues[0].location == "themeConfig.nav[1].items[3].link"


def test_nav_link_outside_sidebar_prefixes_is_not_checked(
    expanded_payload: dict[str, typ.Any],
) -> None:
    expanded_payload["themeConfig"]["nav"].append(
        {"text": "博客", "link": "/blog/"}
    )
    assert _kinds(expanded_payload) == []


def test_issues_are_reported_in_document_order() -> None:
    """Validation is exhaustive and keeps document order."""
    payload = _bare_site(
        nav=[{"text": "Bad", "link": "sdk/client"}],
        sidebar={"/sdk/": []},
    )
    payload["lang"] = ""
    assert _kinds(payload) == [
        IssueKind.MISSING_FIELD,
        IssueKind.BROKEN_LINK,
        IssueKind.ORPHAN_PREFIX,
    ]


def test_ensure_valid_raises_with_every_issue() -> None:
    payload = _bare_site(nav=[{"text": "Bad", "link": "sdk/client"}])
    payload["title"] = ""
    site = build_site_config(payload)
    with pytest.raises(SiteValidationError) as excinfo:
        ensure_valid(site)
    error = excinfo.value
    assert len(error.issues) == 2
    assert "MissingField: title" in str(error)
    assert "BrokenLink: themeConfig.nav[0].link" in str(error)


def test_ensure_valid_returns_site_when_valid() -> None:
    site = get_site("minimal")
    assert ensure_valid(site) is site
    assert site.validate() == ()
