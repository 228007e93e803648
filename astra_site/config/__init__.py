"""Build and validate the AstraFaber documentation-site descriptor.

This subpackage turns a generator-shaped mapping (the same keys the site
generator's ``defineConfig`` accepts: ``lang``, ``title``, ``head``,
``themeConfig`` ...) into immutable dataclasses (:class:`SiteConfig`,
:class:`ThemeConfig`, :class:`SidebarGroup`, etc.) and checks them before
handoff. :func:`build_site_config` accepts a literal mapping,
:func:`load_site_config` reads the same shape from YAML, and
:func:`ensure_valid` raises :class:`SiteValidationError` listing every problem
found.

Examples
--------
>>> from astra_site.config import build_site_config, validate
>>> site = build_site_config(
...     {"lang": "zh-CN", "title": "AstraFaber", "description": "Docs"}
... )
>>> validate(site)
()
"""

from .loader import build_site_config, load_site_config
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
    SiteValidationError,
    SocialLink,
    ThemeConfig,
)
from .validation import ensure_valid, validate

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
    "build_site_config",
    "ensure_valid",
    "load_site_config",
    "validate",
]
