"""Common literal values used across astra_site.

These constants keep the generator's file names in one place so the CLI,
the config module builder, and tests agree on where the handoff lands.
Intended for internal use within the astra_site package.

Examples
--------
>>> from astra_site import _constants
>>> _constants.CONFIG_MODULE_PATH.name
'config.mjs'
>>> _constants.CONFIG_MODULE_TEMPLATE.endswith(".jinja")
True
"""

from pathlib import Path

CONFIG_MODULE_PATH = Path("docs/.vitepress/config.mjs")
CONFIG_MODULE_TEMPLATE = "vitepress_config.mjs.jinja"
