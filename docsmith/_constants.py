"""Common literal values used across docsmith.

These constants keep file names, navigation labels, and script globals
centralized so the theme loader, sitemap builder, writers, and tests can import
the same values without drifting.

Examples
--------
>>> from docsmith import _constants
>>> _constants.THEME_FILE_NAME
'theme.json'
>>> _constants.NAVIGATION_GLOBAL
'docsmith'
"""

THEME_FILE_NAME = "theme.json"
DEFAULT_THEME = "classic"
DEFAULT_SCRIPT_TARGET = "script.js"
DEFAULT_STYLE_TARGET = "styles.css"
TEMPLATE_EXTENSION = ".jinja"
SCRIPT_EXTENSION = ".js"
STYLE_EXTENSION = ".css"
SITEMAP_FILE_NAME = "sitemap.json"
NAVIGATION_GLOBAL = "docsmith"
