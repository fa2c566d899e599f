"""Combine theme defaults with per-build theme settings into template data.

Theme parameters carry validated defaults; a build may override them through
``theme_settings`` in its configuration. Overrides for declared parameters
are validated against the parameter's type. Unlike defaults, which are
checked when the theme loads and abort the run on error, an invalid override
is only logged as a warning and dropped so generation can proceed.

Examples
--------
>>> from docsmith.theme import CaseInsensitiveMapping, ThemeParameter
>>> params = CaseInsensitiveMapping({"title": ThemeParameter.create("string", None, "Docs")})
>>> data = build_template_data_from_parameters(params, {"Title": 5})
>>> data.values["title"]
'Docs'
"""

from __future__ import annotations

import collections.abc as cabc
import copy
import dataclasses as dc
import logging
import typing as typ

from docsmith.theme import ParameterFormatError, ThemeParameterType

if typ.TYPE_CHECKING:
    from docsmith.theme import TextTransform, Theme, ThemeParameter

logger = logging.getLogger(__name__)


@dc.dataclass(slots=True)
class TemplateData:
    """Values shared by every rendered template.

    Attributes
    ----------
    values : dict[str, object]
        Template variables: theme metadata, parameter defaults, bundle names,
        and validated settings.
    partials : dict[str, str]
        Markdown-typed defaults and settings to register as ``<name>_partial``
        templates.
    """

    values: dict[str, object] = dc.field(default_factory=dict)
    partials: dict[str, str] = dc.field(default_factory=dict)


def _parameter_defaults(
    parameters: cabc.Mapping[str, ThemeParameter],
) -> dict[str, object]:
    return {
        name: copy.deepcopy(parameter.default_value)
        for name, parameter in parameters.items()
        if parameter.default_value is not None
    }


def _markdown_partials(
    parameters: cabc.Mapping[str, ThemeParameter],
) -> dict[str, str]:
    return {
        name: str(parameter.default_value)
        for name, parameter in parameters.items()
        if parameter.type is ThemeParameterType.MARKDOWN
        and parameter.default_value is not None
    }


def apply_theme_settings(
    data: TemplateData,
    parameters: cabc.Mapping[str, ThemeParameter],
    settings: cabc.Mapping[str, object],
    *,
    transform: TextTransform | None = None,
) -> TemplateData:
    """Overlay user ``settings`` onto ``data`` and return it.

    ``None`` values are ignored. Names the theme does not declare are passed
    through unvalidated. Values of the wrong shape for a declared parameter
    are reported as warnings and skipped.
    """
    for name, value in settings.items():
        if value is None:
            continue
        parameter = parameters.get(name)
        if parameter is None:
            data.values[name] = value
            continue
        try:
            validated = parameter.validate(value, transform=transform)
        except ParameterFormatError as exc:
            logger.warning("Invalid value for theme parameter '%s'. %s", name, exc)
            continue
        key = next(key for key in parameters if key.casefold() == name.casefold())
        data.values[key] = validated
        if parameter.type is ThemeParameterType.MARKDOWN:
            data.partials[key] = str(validated)
    return data


def build_template_data_from_parameters(
    parameters: cabc.Mapping[str, ThemeParameter],
    settings: cabc.Mapping[str, object] | None = None,
    *,
    transform: TextTransform | None = None,
) -> TemplateData:
    """Return template data built from parameter defaults and ``settings``."""
    data = TemplateData(
        values=_parameter_defaults(parameters),
        partials=_markdown_partials(parameters),
    )
    return apply_theme_settings(data, parameters, settings or {}, transform=transform)


def build_template_data(
    theme: Theme,
    settings: cabc.Mapping[str, object] | None = None,
    *,
    common: cabc.Mapping[str, object] | None = None,
    transform: TextTransform | None = None,
) -> TemplateData:
    """Return the template data for ``theme`` and the build's ``settings``.

    Parameters
    ----------
    theme : Theme
        Resolved theme supplying metadata, defaults, and bundle names.
    settings : Mapping[str, object], optional
        Per-build ``theme_settings`` overrides.
    common : Mapping[str, object], optional
        Run-wide values (language, page flags) placed first.
    transform : callable, optional
        Text transform for markdown-typed settings.
    """
    data = TemplateData(values=dict(common or {}))
    if theme.metadata is not None:
        data.values["theme"] = theme.metadata.as_dict()
    data.values.update(_parameter_defaults(theme.parameters))
    data.partials.update(_markdown_partials(theme.parameters))
    data.values["scripts"] = list(theme.scripts)
    data.values["styles"] = list(theme.styles)
    return apply_theme_settings(
        data, theme.parameters, settings or {}, transform=transform
    )


__all__ = [
    "TemplateData",
    "apply_theme_settings",
    "build_template_data",
    "build_template_data_from_parameters",
]
