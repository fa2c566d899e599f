"""Markdown-to-HTML text transform used for markdown theme parameters.

:class:`MarkdownTransformer` is the text-transform collaborator handed to the
theme loader and to settings validation. It renders with Python-Markdown and
Pygments, and shields template expressions (``{{ ... }}``) so parameter values
can still be used as inline templates after transformation.

Examples
--------
>>> transformer = MarkdownTransformer()
>>> transformer("Hello **world**")
'<p>Hello <strong>world</strong></p>'
>>> transformer("See {{ site_name }}")
'<p>See {{ site_name }}</p>'
"""

from __future__ import annotations

import re
import secrets
import typing as typ
from html import escape

from markdown import Markdown
from pygments.formatters.html import HtmlFormatter

if typ.TYPE_CHECKING:
    from markdown.extensions import Extension
else:  # pragma: no cover - type-checking fallback
    Extension = typ.Any

TEMPLATE_EXPRESSION_PATTERN = re.compile(r"\{{2,}[^}]+\}{2,}")
CODE_BLOCK_PATTERN = re.compile(r"```([A-Za-z0-9_+#.-]+)?[^\n]*\n(.*?)```", re.DOTALL)
FENCED_INDENT_PATTERN = re.compile(r"^[ ]{1,3}([`~]{3,})", re.MULTILINE)
FENCE_LABEL_PATTERN = re.compile(
    r"^([`~]{3,})([A-Za-z0-9_+#.-]+)?(,[^\r\n]+)$", re.MULTILINE
)
CODEHILITE_OPEN_TAG = re.compile(r'<div class="codehilite">')


class MarkdownTransformer:
    """Render markdown text into HTML with highlighted code blocks."""

    def __init__(
        self,
        pygments_style: str = "default",
        extensions: typ.Sequence[Extension | str] = (),
    ) -> None:
        """Initialize the transformer.

        Parameters
        ----------
        pygments_style : str, optional
            Pygments style used for highlighted code blocks.
        extensions : Sequence[Extension | str], optional
            Additional Python-Markdown extensions.
        """
        self.pygments_style = pygments_style
        self._formatter = HtmlFormatter(style=pygments_style, cssclass="codehilite")
        self._extra_extensions = list(extensions)

    @property
    def stylesheet(self) -> str:
        """Return the CSS used for highlighted code blocks."""
        return self._formatter.get_style_defs(".codehilite")

    def __call__(self, text: str) -> str:
        return self.transform(text)

    def transform(self, text: str) -> str:
        """Return ``text`` rendered as HTML; blank input yields ``""``."""
        if not text or not text.strip():
            return ""
        protected, placeholders = self._protect_template_expressions(text)
        normalized = self._normalize_fenced_blocks(protected)
        md = Markdown(
            extensions=[
                "fenced_code",
                "codehilite",
                "tables",
                "sane_lists",
                *self._extra_extensions,
            ],
            extension_configs={
                "codehilite": {
                    "linenums": False,
                    "guess_lang": False,
                    "css_class": "codehilite",
                    "pygments_style": self.pygments_style,
                }
            },
        )
        html = self._annotate_codehilite(md.convert(normalized), normalized)
        for placeholder, expression in placeholders.items():
            html = html.replace(placeholder, expression)
        return html

    @staticmethod
    def _protect_template_expressions(text: str) -> tuple[str, dict[str, str]]:
        """Swap template expressions for placeholders markdown leaves alone."""
        token = secrets.token_hex(4)
        placeholders: dict[str, str] = {}

        def _repl(match: re.Match[str]) -> str:
            placeholder = f"TPLEXPR{token}X{len(placeholders)}X"
            placeholders[placeholder] = match.group(0)
            return placeholder

        return TEMPLATE_EXPRESSION_PATTERN.sub(_repl, text), placeholders

    def _annotate_codehilite(self, html: str, source_markdown: str) -> str:
        """Attach language metadata to each highlighted block."""
        languages = [
            match.group(1) or "text"
            for match in CODE_BLOCK_PATTERN.finditer(source_markdown)
        ]
        if not languages:
            return html
        lang_iter = iter(languages)

        def _repl(match: re.Match[str]) -> str:
            lang = next(lang_iter, "text")
            return (
                f'<div class="codehilite" data-language="{escape(lang, quote=True)}">'
            )

        return CODEHILITE_OPEN_TAG.sub(_repl, html, len(languages))

    @staticmethod
    def _normalize_fenced_blocks(text: str) -> str:
        without_indent = FENCED_INDENT_PATTERN.sub(r"\1", text)

        def _strip_labels(match: re.Match[str]) -> str:
            fence, language, _extras = match.groups()
            return f"{fence}{language or ''}"

        return FENCE_LABEL_PATTERN.sub(_strip_labels, without_indent)


__all__ = ["MarkdownTransformer", "TEMPLATE_EXPRESSION_PATTERN"]
