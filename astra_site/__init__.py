"""Configuration model for the AstraFaber documentation site.

This package holds the site descriptor handed to the static-site generator:
typed, immutable dataclasses, validation that rejects broken navigation
before a build, and the ``astra-site`` CLI that writes the generator's
``config.mjs``.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from astra_site import main
>>> main()  # doctest: +SKIP
>>> from astra_site import app
>>> callable(app)
True
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
