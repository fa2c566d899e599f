"""Assemble a :class:`TemplateRenderer` for a documentation run."""

from __future__ import annotations

import collections.abc as cabc
import logging
import typing as typ

from docsmith.context import RenderContext
from docsmith.settings import build_template_data

from .templates import TemplateRenderer

if typ.TYPE_CHECKING:
    from docsmith.context import DocContext
    from docsmith.theme import TextTransform, Theme

logger = logging.getLogger(__name__)


def build_render_context(
    context: DocContext,
    theme: Theme,
    settings: cabc.Mapping[str, object] | None = None,
    *,
    transform: TextTransform | None = None,
    autoescape: bool = True,
) -> RenderContext:
    """Return the renderer, context, and template data for ``theme``.

    Common run data is placed first, then theme metadata, parameter defaults,
    bundle names, and finally the validated ``settings``. Markdown-typed
    settings are also registered as ``<name>_partial`` inline templates.
    """
    data = build_template_data(
        theme, settings, common=context.common_data(), transform=transform
    )
    renderer = TemplateRenderer(
        theme, data.values, transform=transform, autoescape=autoescape
    )
    for name, html in data.partials.items():
        renderer.add_partial(name, html)
    logger.debug(
        "Loaded %d templates from theme '%s'", len(theme.templates), theme.id
    )
    return RenderContext(renderer=renderer, context=context, data=data)


__all__ = ["build_render_context"]
