"""Behaviour tests for theme inheritance using pytest-bdd.

The scenarios in ``features/theme_inheritance.feature`` write small theme
trees under ``tmp_path`` and load them with :class:`ThemeLoader`, checking how
templates, bundles, and parameters combine across the inheritance chain.
"""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

import pytest
from pytest_bdd import given, parsers, scenarios, then, when

from docsmith.rendering import MarkdownTransformer
from docsmith.theme import Theme, ThemeLoader

if typ.TYPE_CHECKING:
    from conftest import ThemeFactory

FEATURE_FILE = (
    Path(__file__).resolve().parents[2] / "features" / "theme_inheritance.feature"
)
scenarios(FEATURE_FILE)

ScenarioState = dict[str, typ.Any]


@pytest.fixture
def scenario_state() -> ScenarioState:
    """Share mutable scenario data across pytest-bdd steps."""
    return {}


def _split(names: str) -> list[str]:
    return [name.strip() for name in names.split(",") if name.strip()]


@given(parsers.parse('a parent theme with a "{template}" template'))
def given_parent_template(make_theme: ThemeFactory, template: str) -> None:
    make_theme(
        "parent",
        {"templates": ["templates/"]},
        {f"templates/{template}.jinja": "parent"},
    )


@given(
    parsers.parse(
        'a child theme deriving from the parent with its own "{template}" template'
    )
)
def given_child_template(make_theme: ThemeFactory, template: str) -> None:
    make_theme(
        "child",
        {"base": "parent", "templates": ["templates/"]},
        {f"templates/{template}.jinja": "child"},
    )


@given(parsers.parse('a parent theme with scripts "{first}" and "{second}"'))
def given_parent_scripts(make_theme: ThemeFactory, first: str, second: str) -> None:
    make_theme(
        "parent",
        {"scripts": {"source": [f"scripts/{first}", f"scripts/{second}"]}},
        {f"scripts/{first}": first, f"scripts/{second}": second},
    )


@given(
    parsers.parse(
        'a child theme deriving from the parent with scripts "{first}" and "{second}"'
    )
)
def given_child_scripts(make_theme: ThemeFactory, first: str, second: str) -> None:
    make_theme(
        "child",
        {
            "base": "parent",
            "scripts": {"source": [f"scripts/{first}", f"scripts/{second}"]},
        },
        {f"scripts/{first}": first, f"scripts/{second}": second},
    )


@given(
    parsers.parse(
        'a parent theme with a markdown parameter "{name}" defaulting to "{value}"'
    )
)
def given_markdown_parameter(make_theme: ThemeFactory, name: str, value: str) -> None:
    make_theme(
        "parent",
        {"parameters": {name: {"type": "markdown", "defaultValue": value}}},
    )


@given(
    parsers.parse(
        'themes "{last}" deriving from "{middle}" deriving from "{first}" '
        'each bundling one script into "{target}"'
    )
)
def given_chain(
    make_theme: ThemeFactory, last: str, middle: str, first: str, target: str
) -> None:
    for name, base in ((first, None), (middle, first), (last, middle)):
        make_theme(
            name,
            {"base": base, "scripts": {"source": [f"js/{name}"], "targetPath": target}},
            {f"js/{name}.js": name},
        )


@when(parsers.parse("I load the {name} theme"))
@when(parsers.parse('I load theme "{name}"'))
def when_load_theme(
    themes_root: Path,
    scenario_state: ScenarioState,
    caplog: pytest.LogCaptureFixture,
    name: str,
) -> None:
    loader = ThemeLoader(themes_root / "html", transform=MarkdownTransformer())
    with caplog.at_level(logging.DEBUG, logger="docsmith.theme.loader"):
        scenario_state["theme"] = loader.load(name)
    scenario_state["log"] = caplog.text


@then(parsers.parse('the "{template}" template comes from the child theme'))
def then_template_from_child(scenario_state: ScenarioState, template: str) -> None:
    theme = typ.cast("Theme", scenario_state["theme"])
    assert theme.templates[template].read_text(encoding="utf-8") == "child"


@then(parsers.parse('the "{target}" bundle lists "{files}"'))
def then_bundle_lists(scenario_state: ScenarioState, target: str, files: str) -> None:
    theme = typ.cast("Theme", scenario_state["theme"])
    listed = [f"{path.parent.parent.name}/{path.name}" for path in theme.scripts[target]]
    assert listed == _split(files), f"unexpected bundle order: {listed}"


@then(parsers.parse('the "{name}" parameter default is "{expected}"'))
def then_parameter_default(
    scenario_state: ScenarioState, name: str, expected: str
) -> None:
    theme = typ.cast("Theme", scenario_state["theme"])
    assert theme.parameters[name].default_value == expected


@then(parsers.parse('the themes were resolved in the order "{order}"'))
def then_resolution_order(scenario_state: ScenarioState, order: str) -> None:
    assert f"Resolved theme '{order[0]}' from {order}" in scenario_state["log"]
