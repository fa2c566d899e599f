"""Markdown transformation and theme template rendering."""

from .templates import PARTIAL_SUFFIX, TemplateRenderer, ThemeTemplateLoader
from .transformer import MarkdownTransformer

__all__ = [
    "PARTIAL_SUFFIX",
    "MarkdownTransformer",
    "TemplateRenderer",
    "ThemeTemplateLoader",
]
