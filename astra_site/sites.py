"""Built-in AstraFaber site descriptors.

Two variants of the same schema are kept side by side: ``minimal`` is the
original single-section layout listing the Client and Twin SDK pages, while
``expanded`` splits the SDK docs into an overview plus the Vera and Arca
modules. Only the data differs between them.

The literals are read-only mappings. :func:`get_site` builds, validates and
caches a variant the first time it is requested, so each process holds exactly
one immutable instance per variant. :func:`variant_payload` hands out a
mutable copy for callers that want to edit a literal.

Examples
--------
>>> site = get_site("expanded")
>>> len(site.sidebar_links())
5
>>> sorted(SITE_VARIANTS)
['expanded', 'minimal']
"""

from __future__ import annotations

import collections.abc as cabc
import functools
import types
import typing as typ

from .config import build_site_config, ensure_valid

if typ.TYPE_CHECKING:
    from .config import SiteConfig

DEFAULT_SITE = "expanded"


def _freeze(value: typ.Any) -> typ.Any:
    """Return a read-only copy: mappings become proxies and lists tuples."""
    match value:
        case cabc.Mapping():
            return types.MappingProxyType(
                {key: _freeze(item) for key, item in value.items()}
            )
        case list() | tuple():
            return tuple(_freeze(item) for item in value)
        case _:
            return value


def _thaw(value: typ.Any) -> typ.Any:
    match value:
        case cabc.Mapping():
            return {key: _thaw(item) for key, item in value.items()}
        case tuple():
            return [_thaw(item) for item in value]
        case _:
            return value


_HEAD: list[list[typ.Any]] = [
    ["link", {"rel": "icon", "type": "image/svg+xml", "href": "/logo.svg"}],
    ["meta", {"name": "theme-color", "content": "#7c3aed"}],
    ["meta", {"name": "og:type", "content": "website"}],
    ["meta", {"name": "og:title", "content": "AstraFaber"}],
    ["meta", {"name": "og:description", "content": "基于 Apache Arrow 的高性能数据库"}],
]

_SOCIAL_LINKS: list[dict[str, str]] = [
    {"icon": "github", "link": "https://github.com/AstraFaber/astra-faber"},
]

_SEARCH: dict[str, typ.Any] = {
    "provider": "local",
    "options": {
        "translations": {
            "button": {"buttonText": "搜索文档", "buttonAriaLabel": "搜索文档"},
            "modal": {
                "noResultsText": "无法找到相关结果",
                "resetButtonTitle": "清除查询条件",
                "footer": {
                    "selectText": "选择",
                    "navigateText": "切换",
                    "closeText": "关闭",
                },
            },
        },
    },
}

_SHARED_THEME: dict[str, typ.Any] = {
    "logo": "/logo.svg",
    "siteTitle": "AstraFaber",
    "socialLinks": _SOCIAL_LINKS,
    "search": _SEARCH,
    "footer": {
        "message": "基于 Apache Arrow 构建",
        "copyright": "Copyright © 2024-present AstraFaber",
    },
    "docFooter": {"prev": "上一篇", "next": "下一篇"},
    "outline": {"label": "页面导航", "level": [2, 3]},
    "lastUpdated": {"text": "最后更新于"},
}

MINIMAL_SITE: cabc.Mapping[str, typ.Any] = _freeze(
    {
        "lang": "zh-CN",
        "title": "AstraFaber",
        "description": "基于 Apache Arrow 的高性能数据库，面向 IoT 与边缘计算",
        "head": _HEAD,
        "themeConfig": {
            **_SHARED_THEME,
            "nav": [
                {"text": "首页", "link": "/"},
                {
                    "text": "SDK",
                    "items": [
                        {"text": "Client SDK", "link": "/sdk/client"},
                        {"text": "Twin SDK", "link": "/sdk/twin"},
                    ],
                },
            ],
            "sidebar": {
                "/sdk/": [
                    {
                        "text": "SDK 文档",
                        "items": [
                            {"text": "Client SDK", "link": "/sdk/client"},
                            {"text": "Twin SDK", "link": "/sdk/twin"},
                        ],
                    },
                ],
            },
        },
    }
)

EXPANDED_SITE: cabc.Mapping[str, typ.Any] = _freeze(
    {
        "lang": "zh-CN",
        "title": "AstraFaber",
        "description": "基于 Apache Arrow 的高性能数据库，面向 IoT 与边缘计算",
        "head": _HEAD,
        "themeConfig": {
            **_SHARED_THEME,
            "nav": [
                {"text": "首页", "link": "/"},
                {
                    "text": "SDK",
                    "items": [
                        {"text": "总览", "link": "/sdk/"},
                        {"text": "Vera 模块", "link": "/sdk/vera/client"},
                        {"text": "Arca 模块", "link": "/sdk/arca/client"},
                    ],
                },
            ],
            "sidebar": {
                "/sdk/": [
                    {
                        "text": "总览",
                        "items": [{"text": "SDK 总览", "link": "/sdk/"}],
                    },
                    {
                        "text": "Vera 模块",
                        "collapsed": False,
                        "items": [
                            {"text": "Vera Client", "link": "/sdk/vera/client"},
                            {"text": "Vera Twin", "link": "/sdk/vera/twin"},
                        ],
                    },
                    {
                        "text": "Arca 模块",
                        "collapsed": False,
                        "items": [
                            {"text": "Arca Client", "link": "/sdk/arca/client"},
                            {"text": "Arca Twin", "link": "/sdk/arca/twin"},
                        ],
                    },
                ],
            },
        },
    }
)

SITE_VARIANTS: cabc.Mapping[str, cabc.Mapping[str, typ.Any]] = (
    types.MappingProxyType({"minimal": MINIMAL_SITE, "expanded": EXPANDED_SITE})
)


def variant_payload(name: str) -> dict[str, typ.Any]:
    """Return a mutable deep copy of a built-in literal for editing."""
    return _thaw(_variant(name))


def get_site(name: str | None = None) -> SiteConfig:
    """Return the validated descriptor for a built-in variant.

    ``get_site()`` and ``get_site(DEFAULT_SITE)`` return the same instance.

    Raises
    ------
    KeyError
        If ``name`` is not a known variant.
    SiteValidationError
        If the literal descriptor fails validation.
    """
    return _build_site(name or DEFAULT_SITE)


@functools.cache
def _build_site(name: str) -> SiteConfig:
    return ensure_valid(build_site_config(_variant(name)))


def _variant(name: str) -> cabc.Mapping[str, typ.Any]:
    try:
        return SITE_VARIANTS[name]
    except KeyError as exc:
        available = ", ".join(sorted(SITE_VARIANTS))
        msg = f"Unknown site '{name}'. Known sites: {available}"
        raise KeyError(msg) from exc


__all__ = [
    "DEFAULT_SITE",
    "EXPANDED_SITE",
    "MINIMAL_SITE",
    "SITE_VARIANTS",
    "get_site",
    "variant_payload",
]
