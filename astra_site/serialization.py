"""Serialize site descriptors into the shape the site generator consumes.

:func:`to_payload` produces a plain nested ``dict``/``list`` graph keyed
exactly as the generator's ``defineConfig`` expects (``lang``, ``head``,
``themeConfig.nav`` ...); optional values that are unset are omitted so the
generator falls back to its own defaults. The payload can be emitted as JSON
(``msgspec``), as YAML (``ruamel.yaml``), or rendered into the
``.vitepress/config.mjs`` module via :class:`ConfigModuleBuilder`.

Feeding a payload back through :func:`astra_site.config.build_site_config`
yields an equal :class:`~astra_site.config.SiteConfig`.

Examples
--------
>>> from astra_site.sites import get_site
>>> payload = to_payload(get_site("minimal"))
>>> payload["themeConfig"]["sidebar"]["/sdk/"][0]["text"]
'SDK 文档'
"""

from __future__ import annotations

import io
import typing as typ
from pathlib import Path

import msgspec.json as msgspec_json
from jinja2 import Environment, FileSystemLoader, select_autoescape
from ruamel.yaml import YAML

from ._constants import CONFIG_MODULE_TEMPLATE
from .config import ensure_valid
from .config.models import (
    NavGroup,
    NavItem,
    NavLink,
    SearchConfig,
    SearchTranslations,
    SiteConfig,
    ThemeConfig,
)


def to_payload(site: SiteConfig) -> dict[str, typ.Any]:
    """Return the generator-shaped mapping for ``site``."""
    payload: dict[str, typ.Any] = {
        "lang": site.language,
        "title": site.title,
        "description": site.description,
    }
    if site.head:
        payload["head"] = [
            [tag.tag, dict(tag.attributes)] for tag in site.head
        ]
    payload["themeConfig"] = _theme_payload(site.theme)
    return payload


def _theme_payload(theme: ThemeConfig) -> dict[str, typ.Any]:
    result: dict[str, typ.Any] = {}
    if theme.logo:
        result["logo"] = theme.logo
    if theme.site_title:
        result["siteTitle"] = theme.site_title
    if theme.nav:
        result["nav"] = [_nav_payload(item) for item in theme.nav]
    if theme.sidebar:
        result["sidebar"] = {
            prefix: [
                _drop_none(
                    {
                        "text": group.text,
                        "collapsed": group.collapsed,
                        "items": [
                            {"text": item.text, "link": item.link}
                            for item in group.items
                        ],
                    }
                )
                for group in groups
            ]
            for prefix, groups in theme.sidebar
        }
    if theme.social_links:
        result["socialLinks"] = [
            {"icon": social.icon, "link": social.link}
            for social in theme.social_links
        ]
    if theme.search is not None:
        result["search"] = _search_payload(theme.search)
    if theme.footer is not None:
        result["footer"] = {
            "message": theme.footer.message,
            "copyright": theme.footer.copyright,
        }
    if theme.doc_footer is not None:
        result["docFooter"] = _drop_none(
            {"prev": theme.doc_footer.prev, "next": theme.doc_footer.next}
        )
    if theme.outline is not None:
        result["outline"] = _drop_none(
            {"label": theme.outline.label, "level": list(theme.outline.level)}
        )
    if theme.last_updated is not None:
        result["lastUpdated"] = _drop_none({"text": theme.last_updated.text})
    return result


def _nav_payload(item: NavItem) -> dict[str, typ.Any]:
    match item:
        case NavGroup(text=text, items=children):
            return {"text": text, "items": [_nav_payload(child) for child in children]}
        case NavLink(text=text, link=link, active_match=active_match):
            return _drop_none(
                {"text": text, "link": link, "activeMatch": active_match}
            )
    msg = f"Unsupported navigation item: {item!r}"
    raise TypeError(msg)


def _search_payload(search: SearchConfig) -> dict[str, typ.Any]:
    result: dict[str, typ.Any] = {"provider": search.provider.value}
    translations = _translations_payload(search.translations)
    if translations:
        result["options"] = {"translations": translations}
    return result


def _translations_payload(translations: SearchTranslations) -> dict[str, typ.Any]:
    button = translations.button
    modal = translations.modal
    footer = modal.footer
    tree = {
        "button": _drop_none(
            {
                "buttonText": button.button_text,
                "buttonAriaLabel": button.button_aria_label,
            }
        ),
        "modal": _drop_none(
            {
                "displayDetails": modal.display_details,
                "resetButtonTitle": modal.reset_button_title,
                "backButtonTitle": modal.back_button_title,
                "noResultsText": modal.no_results_text,
                "footer": _drop_none(
                    {
                        "selectText": footer.select_text,
                        "selectKeyAriaLabel": footer.select_key_aria_label,
                        "navigateText": footer.navigate_text,
                        "navigateUpKeyAriaLabel": footer.navigate_up_key_aria_label,
                        "navigateDownKeyAriaLabel": (
                            footer.navigate_down_key_aria_label
                        ),
                        "closeText": footer.close_text,
                        "closeKeyAriaLabel": footer.close_key_aria_label,
                    }
                )
                or None,
            }
        ),
    }
    return _drop_none({key: value or None for key, value in tree.items()})


def _drop_none(mapping: dict[str, typ.Any]) -> dict[str, typ.Any]:
    return {key: value for key, value in mapping.items() if value is not None}


def encode_json(site: SiteConfig, *, indent: int = 2) -> bytes:
    """Encode the generator payload as UTF-8 JSON."""
    encoded = msgspec_json.encode(to_payload(site))
    if indent:
        return msgspec_json.format(encoded, indent=indent)
    return encoded


def decode_json(data: bytes | str) -> dict[str, typ.Any]:
    """Decode a JSON payload previously produced by :func:`encode_json`."""
    return msgspec_json.decode(data, type=dict[str, typ.Any])


def dump_yaml(site: SiteConfig) -> str:
    """Return the generator payload as a YAML document."""
    yaml = _build_roundtrip_yaml()
    stream = io.StringIO()
    yaml.dump(to_payload(site), stream)
    return stream.getvalue()


def _build_roundtrip_yaml() -> YAML:
    yaml = YAML()
    yaml.width = 120
    yaml.indent(mapping=2, sequence=4, offset=2)
    return yaml


class ConfigModuleBuilder:
    """Render the generator's ``config.mjs`` entry module for a site."""

    def __init__(
        self,
        site: SiteConfig,
        *,
        source: str = "custom",
        templates_dir: Path | None = None,
    ) -> None:
        """Initialize the builder and Jinja environment.

        Parameters
        ----------
        site : SiteConfig
            Descriptor to hand off. It is validated when the module is
            rendered, not here.
        source : str, optional
            Label naming where the descriptor came from (a built-in variant
            name or a YAML path); recorded in the generated file header.
        templates_dir : Path, optional
            Directory containing Jinja templates. Defaults to
            ``astra_site/templates``.
        """
        self.site = site
        self.source = source
        self.templates_dir = templates_dir or Path(__file__).parent / "templates"
        self.env = Environment(
            loader=FileSystemLoader(self.templates_dir),
            autoescape=select_autoescape(
                enabled_extensions=("html",), default_for_string=False
            ),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self.template = self.env.get_template(CONFIG_MODULE_TEMPLATE)

    def render(self) -> str:
        """Validate the site and return the rendered module source.

        Raises
        ------
        SiteValidationError
            If the descriptor fails validation; nothing is rendered.
        """
        ensure_valid(self.site)
        payload = encode_json(self.site).decode("utf-8").rstrip("\n")
        text = self.template.render(source=self.source, payload=payload)
        if not text.endswith("\n"):
            text += "\n"
        return text

    def run(self, output_path: Path) -> Path:
        """Render and write the module to ``output_path``, returning the path."""
        text = self.render()
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(text, encoding="utf-8")
        return output_path


def render_config_module(site: SiteConfig, *, source: str = "custom") -> str:
    """Return the ``config.mjs`` source for ``site`` after validating it."""
    return ConfigModuleBuilder(site, source=source).render()


__all__ = [
    "ConfigModuleBuilder",
    "decode_json",
    "dump_yaml",
    "encode_json",
    "render_config_module",
    "to_payload",
]
