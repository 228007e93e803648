"""Typed dataclasses describing the AstraFaber documentation-site descriptor."""

from __future__ import annotations

import dataclasses as dc
import enum
import typing as typ


class IssueKind(enum.StrEnum):
    """Categories of problems reported by site validation."""

    MISSING_FIELD = "MissingField"
    BROKEN_LINK = "BrokenLink"
    DUPLICATE_SIDEBAR_ENTRY = "DuplicateSidebarEntry"
    ORPHAN_PREFIX = "OrphanPrefix"
    MALFORMED_HEAD_TAG = "MalformedHeadTag"
    UNRESOLVED_NAV_LINK = "UnresolvedNavLink"


@dc.dataclass(frozen=True, slots=True)
class ConfigIssue:
    """A single validation problem and where it was found."""

    kind: IssueKind
    location: str
    message: str

    def __str__(self) -> str:
        return f"{self.kind}: {self.location}: {self.message}"


class SiteConfigError(ValueError):
    """Raised when the site configuration is invalid or incomplete.

    Errors that map onto a reportable problem carry it on ``issues`` so the
    CLI can print them the same way as validation results.
    """

    def __init__(
        self, message: str, *, issues: typ.Sequence[ConfigIssue] = ()
    ) -> None:
        super().__init__(message)
        self.issues = tuple(issues)


class SiteValidationError(SiteConfigError):
    """Raised when a site descriptor fails validation.

    All collected issues are kept on ``issues`` in document order so callers
    can report every problem at once rather than fixing them one by one.
    """

    def __init__(self, issues: typ.Sequence[ConfigIssue]) -> None:
        lines = "\n".join(f"  - {issue}" for issue in issues)
        super().__init__(f"Site configuration is invalid:\n{lines}", issues=issues)


class SearchProvider(enum.StrEnum):
    """Search backends understood by the site generator."""

    LOCAL = "local"


@dc.dataclass(frozen=True, slots=True)
class SiteMeta:
    """Site identity emitted into every generated page."""

    language: str
    title: str
    description: str


@dc.dataclass(frozen=True, slots=True)
class HeadTag:
    """An element injected into the ``<head>`` of every page."""

    tag: str
    attributes: tuple[tuple[str, str], ...] = ()


@dc.dataclass(frozen=True, slots=True)
class NavLink:
    """Top navigation leaf pointing at a page or external URL."""

    text: str
    link: str
    active_match: str | None = None


@dc.dataclass(frozen=True, slots=True)
class NavGroup:
    """Top navigation dropdown holding nested items."""

    text: str
    items: tuple[NavItem, ...]


NavItem: typ.TypeAlias = NavLink | NavGroup


@dc.dataclass(frozen=True, slots=True)
class SidebarLink:
    """Sidebar entry linking to a single page."""

    text: str
    link: str


@dc.dataclass(frozen=True, slots=True)
class SidebarGroup:
    """Titled block of sidebar links."""

    text: str
    items: tuple[SidebarLink, ...]
    collapsed: bool | None = None


SidebarForest: typ.TypeAlias = tuple[tuple[str, tuple[SidebarGroup, ...]], ...]


@dc.dataclass(frozen=True, slots=True)
class SocialLink:
    """Icon link rendered in the navigation bar."""

    icon: str
    link: str


@dc.dataclass(frozen=True, slots=True)
class ButtonTranslations:
    """Labels for the search button."""

    button_text: str | None = None
    button_aria_label: str | None = None


@dc.dataclass(frozen=True, slots=True)
class ModalFooterTranslations:
    """Keyboard hint labels in the search modal footer."""

    select_text: str | None = None
    select_key_aria_label: str | None = None
    navigate_text: str | None = None
    navigate_up_key_aria_label: str | None = None
    navigate_down_key_aria_label: str | None = None
    close_text: str | None = None
    close_key_aria_label: str | None = None


@dc.dataclass(frozen=True, slots=True)
class ModalTranslations:
    """Labels for the search modal."""

    display_details: str | None = None
    reset_button_title: str | None = None
    back_button_title: str | None = None
    no_results_text: str | None = None
    footer: ModalFooterTranslations = ModalFooterTranslations()


@dc.dataclass(frozen=True, slots=True)
class SearchTranslations:
    """Localised strings for local search; unset labels use generator defaults."""

    button: ButtonTranslations = ButtonTranslations()
    modal: ModalTranslations = ModalTranslations()


@dc.dataclass(frozen=True, slots=True)
class SearchConfig:
    """Search provider selection and its options."""

    provider: SearchProvider = SearchProvider.LOCAL
    translations: SearchTranslations = SearchTranslations()


@dc.dataclass(frozen=True, slots=True)
class FooterConfig:
    """Footer copy shown beneath every page."""

    message: str
    copyright: str


@dc.dataclass(frozen=True, slots=True)
class DocFooterConfig:
    """Labels for the previous/next page links."""

    prev: str | None = None
    next: str | None = None


@dc.dataclass(frozen=True, slots=True)
class OutlineConfig:
    """On-page outline label and heading depth range."""

    label: str | None = None
    level: tuple[int, int] = (2, 2)


@dc.dataclass(frozen=True, slots=True)
class LastUpdatedConfig:
    """Label preceding the last-updated timestamp."""

    text: str | None = None


@dc.dataclass(frozen=True, slots=True)
class ThemeConfig:
    """Theme options consumed by the generator's default theme."""

    nav: tuple[NavItem, ...] = ()
    sidebar: SidebarForest = ()
    social_links: tuple[SocialLink, ...] = ()
    search: SearchConfig | None = None
    footer: FooterConfig | None = None
    doc_footer: DocFooterConfig | None = None
    outline: OutlineConfig | None = None
    last_updated: LastUpdatedConfig | None = None
    logo: str | None = None
    site_title: str | None = None


@dc.dataclass(frozen=True, slots=True)
class SiteConfig:
    """Complete, immutable site descriptor handed to the generator."""

    meta: SiteMeta
    head: tuple[HeadTag, ...] = ()
    theme: ThemeConfig = ThemeConfig()

    @property
    def language(self) -> str:
        return self.meta.language

    @property
    def title(self) -> str:
        return self.meta.title

    @property
    def description(self) -> str:
        return self.meta.description

    @property
    def nav(self) -> tuple[NavItem, ...]:
        return self.theme.nav

    @property
    def sidebar(self) -> SidebarForest:
        return self.theme.sidebar

    @property
    def social_links(self) -> tuple[SocialLink, ...]:
        return self.theme.social_links

    @property
    def search(self) -> SearchConfig | None:
        return self.theme.search

    @property
    def footer(self) -> FooterConfig | None:
        return self.theme.footer

    @property
    def doc_footer(self) -> DocFooterConfig | None:
        return self.theme.doc_footer

    @property
    def outline(self) -> OutlineConfig | None:
        return self.theme.outline

    @property
    def last_updated(self) -> LastUpdatedConfig | None:
        return self.theme.last_updated

    def sidebar_groups(self, prefix: str) -> tuple[SidebarGroup, ...]:
        """Return the sidebar groups registered for ``prefix``."""
        for key, groups in self.theme.sidebar:
            if key == prefix:
                return groups
        available = ", ".join(key for key, _ in self.theme.sidebar)
        msg = f"Unknown sidebar prefix '{prefix}'. Known prefixes: {available}"
        raise KeyError(msg)

    def sidebar_links(self) -> tuple[str, ...]:
        """Return every sidebar link across the forest in document order."""
        return tuple(
            item.link
            for _, groups in self.theme.sidebar
            for group in groups
            for item in group.items
        )

    def nav_links(self) -> tuple[NavLink, ...]:
        """Return the navigation leaves in depth-first order."""
        return tuple(_iter_nav_leaves(self.theme.nav))

    def validate(self) -> tuple[ConfigIssue, ...]:
        """Return every validation issue; an empty tuple means the site is valid."""
        from .validation import validate

        return validate(self)


def _iter_nav_leaves(items: typ.Iterable[NavItem]) -> typ.Iterator[NavLink]:
    for item in items:
        match item:
            case NavGroup(items=children):
                yield from _iter_nav_leaves(children)
            case NavLink():
                yield item


__all__ = [
    "ButtonTranslations",
    "ConfigIssue",
    "DocFooterConfig",
    "FooterConfig",
    "HeadTag",
    "IssueKind",
    "LastUpdatedConfig",
    "ModalFooterTranslations",
    "ModalTranslations",
    "NavGroup",
    "NavItem",
    "NavLink",
    "OutlineConfig",
    "SearchConfig",
    "SearchProvider",
    "SearchTranslations",
    "SidebarForest",
    "SidebarGroup",
    "SidebarLink",
    "SiteConfig",
    "SiteConfigError",
    "SiteMeta",
    "SiteValidationError",
    "SocialLink",
    "ThemeConfig",
]
