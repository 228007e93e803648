"""Build site descriptors from literal mappings or YAML files."""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

from ruamel.yaml import YAML

from .helpers import (
    _as_list,
    _as_mapping,
    _optional_bool,
    _optional_str,
    _require_str,
)
from .models import (
    ButtonTranslations,
    ConfigIssue,
    DocFooterConfig,
    FooterConfig,
    HeadTag,
    IssueKind,
    LastUpdatedConfig,
    ModalFooterTranslations,
    ModalTranslations,
    NavGroup,
    NavItem,
    NavLink,
    OutlineConfig,
    SearchConfig,
    SearchProvider,
    SearchTranslations,
    SidebarForest,
    SidebarGroup,
    SidebarLink,
    SiteConfig,
    SiteConfigError,
    SiteMeta,
    SocialLink,
    ThemeConfig,
)

if typ.TYPE_CHECKING:
    from pathlib import Path

DEFAULT_OUTLINE_LEVEL = (2, 2)


def load_site_config(path: Path) -> SiteConfig:
    """Load a YAML file holding a site descriptor.

    Parameters
    ----------
    path : Path
        Filesystem path to a YAML document using the generator's key names
        (``lang``, ``title``, ``themeConfig`` and so on).

    Returns
    -------
    SiteConfig
        The parsed, immutable descriptor. It is not validated; call
        :func:`astra_site.config.ensure_valid` before handing it off.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    SiteConfigError
        If a section has the wrong shape (for example a nav item carrying
        both ``link`` and ``items``).
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> site = load_site_config(Path("site.yaml"))  # doctest: +SKIP
    >>> site.title  # doctest: +SKIP
    'AstraFaber'
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    return build_site_config(loaded)


def build_site_config(payload: typ.Mapping[str, typ.Any]) -> SiteConfig:
    """Build a :class:`SiteConfig` from a generator-shaped mapping.

    Missing identity strings become empty strings so that validation can
    report them as missing fields instead of failing during construction.
    """
    data = _as_mapping(payload, "Site configuration")
    meta = SiteMeta(
        language=_require_str(data.get("lang")),
        title=_require_str(data.get("title")),
        description=_require_str(data.get("description")),
    )
    head = tuple(
        _build_head_tag(entry, f"head[{index}]")
        for index, entry in enumerate(_as_list(data.get("head"), "head"))
    )
    theme_raw = data.get("themeConfig") or {}
    theme = _build_theme_config(_as_mapping(theme_raw, "themeConfig"))
    return SiteConfig(meta=meta, head=head, theme=theme)


def _build_head_tag(entry: object, location: str) -> HeadTag:
    match entry:
        case [tag, cabc.Mapping() as attributes]:
            pass
        case [tag]:
            attributes = {}
        case _:
            msg = f"{location} must be a [tagName, attributes] pair."
            issue = ConfigIssue(
                IssueKind.MALFORMED_HEAD_TAG,
                location,
                "Head entries must be [tagName, attributes] pairs.",
            )
            raise SiteConfigError(msg, issues=(issue,))
    return HeadTag(
        tag=str(tag).strip(),
        attributes=tuple(
            (str(name).strip(), str(value)) for name, value in attributes.items()
        ),
    )


def _build_theme_config(payload: typ.Mapping[str, typ.Any]) -> ThemeConfig:
    location = "themeConfig"
    nav = _build_nav_items(payload.get("nav"), f"{location}.nav")
    sidebar = _build_sidebar(payload.get("sidebar"), f"{location}.sidebar")
    social_links = tuple(
        _build_social_link(entry, f"{location}.socialLinks[{index}]")
        for index, entry in enumerate(
            _as_list(payload.get("socialLinks"), f"{location}.socialLinks")
        )
    )
    search_raw = payload.get("search")
    footer_raw = payload.get("footer")
    doc_footer_raw = payload.get("docFooter")
    outline_raw = payload.get("outline")
    last_updated_raw = payload.get("lastUpdated")
    return ThemeConfig(
        nav=nav,
        sidebar=sidebar,
        social_links=social_links,
        search=(
            _build_search_config(search_raw, f"{location}.search")
            if search_raw is not None
            else None
        ),
        footer=(
            _build_footer_config(footer_raw, f"{location}.footer")
            if footer_raw is not None
            else None
        ),
        doc_footer=(
            _build_doc_footer(doc_footer_raw, f"{location}.docFooter")
            if doc_footer_raw is not None
            else None
        ),
        outline=(
            _build_outline(outline_raw, f"{location}.outline")
            if outline_raw is not None
            else None
        ),
        last_updated=(
            _build_last_updated(last_updated_raw, f"{location}.lastUpdated")
            if last_updated_raw is not None
            else None
        ),
        logo=_optional_str(payload.get("logo")),
        site_title=_optional_str(payload.get("siteTitle")),
    )


def _build_nav_items(entries: object | None, location: str) -> tuple[NavItem, ...]:
    return tuple(
        _build_nav_item(entry, f"{location}[{index}]")
        for index, entry in enumerate(_as_list(entries, location))
    )


def _build_nav_item(entry: object, location: str) -> NavItem:
    """Discriminate a nav entry into a leaf or a group by its keys."""
    match entry:
        case {"link": _, "items": _}:
            msg = f"{location} must define either 'link' or 'items', not both."
            raise SiteConfigError(msg)
        case {"items": children, **rest}:
            return NavGroup(
                text=_require_str(rest.get("text")),
                items=_build_nav_items(children, f"{location}.items"),
            )
        case {"link": link, **rest}:
            return NavLink(
                text=_require_str(rest.get("text")),
                link=_require_str(link),
                active_match=_optional_str(rest.get("activeMatch")),
            )
        case cabc.Mapping():
            msg = f"{location} must define 'link' or 'items'."
            raise SiteConfigError(msg)
        case _:
            msg = f"{location} must be a mapping."
            raise SiteConfigError(msg)


def _build_sidebar(payload: object | None, location: str) -> SidebarForest:
    if payload is None:
        return ()
    forest = _as_mapping(payload, location)
    result: list[tuple[str, tuple[SidebarGroup, ...]]] = []
    for prefix, groups_raw in forest.items():
        prefix_location = f"{location}[{prefix!r}]"
        groups = tuple(
            _build_sidebar_group(group, f"{prefix_location}[{index}]")
            for index, group in enumerate(_as_list(groups_raw, prefix_location))
        )
        result.append((str(prefix), groups))
    return tuple(result)


def _build_sidebar_group(entry: object, location: str) -> SidebarGroup:
    data = _as_mapping(entry, location)
    items_location = f"{location}.items"
    items: list[SidebarLink] = []
    for index, item in enumerate(_as_list(data.get("items"), items_location)):
        match item:
            case {"items": _}:
                msg = f"{items_location}[{index}] cannot nest further groups."
                raise SiteConfigError(msg)
            case cabc.Mapping():
                items.append(
                    SidebarLink(
                        text=_require_str(item.get("text")),
                        link=_require_str(item.get("link")),
                    )
                )
            case _:
                msg = f"{items_location}[{index}] must be a mapping."
                raise SiteConfigError(msg)
    return SidebarGroup(
        text=_require_str(data.get("text")),
        items=tuple(items),
        collapsed=_optional_bool(data.get("collapsed")),
    )


def _build_social_link(entry: object, location: str) -> SocialLink:
    data = _as_mapping(entry, location)
    return SocialLink(
        icon=_require_str(data.get("icon")),
        link=_require_str(data.get("link")),
    )


def _build_search_config(payload: object, location: str) -> SearchConfig:
    data = _as_mapping(payload, location)
    provider_raw = _require_str(data.get("provider")) or SearchProvider.LOCAL.value
    try:
        provider = SearchProvider(provider_raw)
    except ValueError as exc:
        known = ", ".join(member.value for member in SearchProvider)
        msg = f"{location}.provider '{provider_raw}' is not supported ({known})."
        raise SiteConfigError(msg) from exc
    options = _as_mapping(data.get("options") or {}, f"{location}.options")
    translations = _as_mapping(
        options.get("translations") or {}, f"{location}.options.translations"
    )
    return SearchConfig(
        provider=provider, translations=_build_translations(translations)
    )


def _build_translations(payload: typ.Mapping[str, typ.Any]) -> SearchTranslations:
    """Pick out the recognised search labels, ignoring unknown keys."""
    button = payload.get("button") or {}
    modal = payload.get("modal") or {}
    if not isinstance(button, cabc.Mapping):
        button = {}
    if not isinstance(modal, cabc.Mapping):
        modal = {}
    footer = modal.get("footer") or {}
    if not isinstance(footer, cabc.Mapping):
        footer = {}
    return SearchTranslations(
        button=ButtonTranslations(
            button_text=_optional_str(button.get("buttonText")),
            button_aria_label=_optional_str(button.get("buttonAriaLabel")),
        ),
        modal=ModalTranslations(
            display_details=_optional_str(modal.get("displayDetails")),
            reset_button_title=_optional_str(modal.get("resetButtonTitle")),
            back_button_title=_optional_str(modal.get("backButtonTitle")),
            no_results_text=_optional_str(modal.get("noResultsText")),
            footer=ModalFooterTranslations(
                select_text=_optional_str(footer.get("selectText")),
                select_key_aria_label=_optional_str(footer.get("selectKeyAriaLabel")),
                navigate_text=_optional_str(footer.get("navigateText")),
                navigate_up_key_aria_label=_optional_str(
                    footer.get("navigateUpKeyAriaLabel")
                ),
                navigate_down_key_aria_label=_optional_str(
                    footer.get("navigateDownKeyAriaLabel")
                ),
                close_text=_optional_str(footer.get("closeText")),
                close_key_aria_label=_optional_str(footer.get("closeKeyAriaLabel")),
            ),
        ),
    )


def _build_footer_config(payload: object, location: str) -> FooterConfig:
    data = _as_mapping(payload, location)
    return FooterConfig(
        message=_require_str(data.get("message")),
        copyright=_require_str(data.get("copyright")),
    )


def _build_doc_footer(payload: object, location: str) -> DocFooterConfig:
    data = _as_mapping(payload, location)
    return DocFooterConfig(
        prev=_optional_str(data.get("prev")),
        next=_optional_str(data.get("next")),
    )


def _build_outline(payload: object, location: str) -> OutlineConfig:
    data = _as_mapping(payload, location)
    return OutlineConfig(
        label=_optional_str(data.get("label")),
        level=_parse_outline_level(data.get("level"), f"{location}.level"),
    )


def _parse_outline_level(value: object | None, location: str) -> tuple[int, int]:
    match value:
        case None:
            return DEFAULT_OUTLINE_LEVEL
        case int() as depth if not isinstance(depth, bool):
            low, high = depth, depth
        case [int() as low, int() as high]:
            pass
        case _:
            msg = f"{location} must be a heading depth or a [min, max] pair."
            raise SiteConfigError(msg)
    if not 1 <= low <= high <= 6:
        msg = f"{location} must satisfy 1 <= min <= max <= 6, got [{low}, {high}]."
        raise SiteConfigError(msg)
    return (low, high)


def _build_last_updated(payload: object, location: str) -> LastUpdatedConfig:
    data = _as_mapping(payload, location)
    return LastUpdatedConfig(text=_optional_str(data.get("text")))


__all__ = ["build_site_config", "load_site_config"]
