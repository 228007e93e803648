"""Cyclopts CLI entrypoint for checking and emitting the site descriptor.

The ``astra-site`` console script defined here validates one of the built-in
descriptors (or a YAML file with the same shape) and hands it to the site
generator by writing ``.vitepress/config.mjs``. Validation failures are
printed to stderr and stop the command with exit status 1 before anything is
written, so a broken navigation tree never reaches the generator.

Examples
--------
Check the default descriptor:

>>> from astra_site.cli import main
>>> main()  # doctest: +SKIP

Write the generator config for the minimal variant:

>>> from astra_site.cli import app
>>> app.run(
...     ["build", "--site", "minimal", "--output", "docs/.vitepress/config.mjs"]
... )  # doctest: +SKIP
"""

from __future__ import annotations

import enum
import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter
from ruamel.yaml.error import YAMLError

from ._constants import CONFIG_MODULE_PATH
from .config import (
    SiteConfig,
    SiteConfigError,
    SiteValidationError,
    build_site_config,
    ensure_valid,
    load_site_config,
)
from .serialization import ConfigModuleBuilder, dump_yaml, encode_json
from .sites import DEFAULT_SITE, SITE_VARIANTS

app = App(name="astra-site", config=cyclopts.config.Env("INPUT_", command=False))  # type: ignore[unknown-argument]


class ExportFormat(enum.StrEnum):
    """Payload encodings supported by ``export``."""

    JSON = "json"
    YAML = "yaml"


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _resolve_site(site: str | None, config: Path | None) -> tuple[SiteConfig, str]:
    """Return the requested descriptor and a label naming its source.

    The descriptor is returned unvalidated so the caller can report every
    issue instead of stopping at construction. A YAML file that cannot be
    read or built into a descriptor stops the command through :func:`_fail`.
    """
    if site and config:
        msg = "Pass either --site or --config, not both."
        raise ValueError(msg)
    if config is not None:
        try:
            return load_site_config(config), _format_path(config)
        except (SiteConfigError, FileNotFoundError, TypeError, YAMLError) as exc:
            _fail(exc)
    name = site or DEFAULT_SITE
    if name not in SITE_VARIANTS:
        available = ", ".join(sorted(SITE_VARIANTS))
        msg = f"Unknown site '{name}'. Known sites: {available}"
        raise KeyError(msg)
    return build_site_config(SITE_VARIANTS[name]), name


def _fail(error: Exception) -> typ.NoReturn:
    issues = error.issues if isinstance(error, SiteConfigError) else ()
    lines = [str(issue) for issue in issues] or [str(error)]
    for line in lines:
        print(f"error: {line}", file=sys.stderr)
    print(f"{len(lines)} issue(s) found; aborting.", file=sys.stderr)
    raise SystemExit(1)


SiteOption = typ.Annotated[
    str | None,
    Parameter(help="Built-in site variant (minimal, expanded)", env_var="INPUT_SITE"),
]
ConfigOption = typ.Annotated[
    Path | None,
    Parameter(help="Path to a YAML site descriptor", env_var="INPUT_CONFIG"),
]


@app.command(help="Validate a site descriptor and report every issue.")
def check(*, site: SiteOption = None, config: ConfigOption = None) -> None:
    """Validate the selected descriptor without writing anything.

    Parameters
    ----------
    site : str or None, optional
        Built-in variant name; defaults to ``expanded`` when neither ``site``
        nor ``config`` is given.
    config : Path or None, optional
        YAML descriptor to validate instead of a built-in variant.

    Raises
    ------
    SystemExit
        With status 1 when validation fails.
    """
    descriptor, source = _resolve_site(site, config)
    try:
        ensure_valid(descriptor)
    except SiteValidationError as exc:
        _fail(exc)
    links = len(descriptor.sidebar_links())
    print(f"ok: {source} ({descriptor.title}, {links} sidebar links)")


@app.command(help="Validate a site descriptor and write the generator config module.")
def build(
    *,
    site: SiteOption = None,
    config: ConfigOption = None,
    output: typ.Annotated[
        Path,
        Parameter(help="Where to write config.mjs", env_var="INPUT_OUTPUT"),
    ] = CONFIG_MODULE_PATH,
) -> None:
    """Render ``config.mjs`` for the generator from a validated descriptor.

    Parameters
    ----------
    site : str or None, optional
        Built-in variant name.
    config : Path or None, optional
        YAML descriptor to build instead of a built-in variant.
    output : Path, optional
        Destination of the generated module; defaults to
        ``docs/.vitepress/config.mjs``.

    Raises
    ------
    SystemExit
        With status 1 when validation fails; ``output`` is left untouched.
    """
    descriptor, source = _resolve_site(site, config)
    builder = ConfigModuleBuilder(descriptor, source=source)
    try:
        written = builder.run(output)
    except SiteValidationError as exc:
        _fail(exc)
    print(f"wrote {_format_path(written)}")


@app.command(help="Print or save the generator payload as JSON or YAML.")
def export(
    *,
    site: SiteOption = None,
    config: ConfigOption = None,
    format: typ.Annotated[  # noqa: A002 - mirrors the CLI flag name
        ExportFormat, Parameter(help="Output encoding", env_var="INPUT_FORMAT")
    ] = ExportFormat.JSON,
    output: typ.Annotated[
        Path | None, Parameter(help="Write to this file instead of stdout")
    ] = None,
) -> None:
    """Emit the validated payload in the requested encoding."""
    descriptor, _ = _resolve_site(site, config)
    try:
        ensure_valid(descriptor)
    except SiteValidationError as exc:
        _fail(exc)
    if format is ExportFormat.YAML:
        text = dump_yaml(descriptor)
    else:
        text = encode_json(descriptor).decode("utf-8")
    if not text.endswith("\n"):
        text += "\n"
    if output is None:
        sys.stdout.write(text)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text, encoding="utf-8")
    print(f"wrote {_format_path(output)}")


def main() -> None:
    """Invoke the Cyclopts application that powers the ``astra-site`` command."""
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
