"""
Template registry for wrapping code snippets into compilable programs.

A template is a text skeleton with literal slots:
  {imports}  rendered `with X; use X;` lines
  {unit}     the program unit name (matches the generated file name)
  {body}     the (variable-substituted) block body

Slots are filled by plain string replacement, never str.format, so Ada text
containing braces is left alone. The registry is closed: looking up a name
that was never registered raises TemplateNotFoundError.
"""

from __future__ import annotations

import textwrap
from dataclasses import dataclass


BODY_SLOT = "{body}"
IMPORTS_SLOT = "{imports}"
UNIT_SLOT = "{unit}"


class TemplateNotFoundError(KeyError):
    """Raised when a block names a template that is not registered."""

    def __init__(self, name: str, known: list[str]):
        self.name = name
        self.known = known
        super().__init__(name)

    def __str__(self) -> str:
        known = ", ".join(self.known) or "(none)"
        return f"No template named '{self.name}' is registered (known: {known})"


@dataclass(frozen=True)
class Template:
    name: str
    text: str
    indent: int = 0  # spaces added in front of each body line

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Template name must not be empty")
        if BODY_SLOT not in self.text:
            raise ValueError(f"Template '{self.name}' has no {BODY_SLOT} slot")

    def render(self, body: str, imports: str = "", unit: str = "Main") -> str:
        if self.indent:
            body = textwrap.indent(body, " " * self.indent)
        # Body last so text inside the body is never treated as a slot.
        text = self.text.replace(IMPORTS_SLOT, imports).replace(UNIT_SLOT, unit)
        return text.replace(BODY_SLOT, body)


MAIN_TEMPLATE = Template(
    name="main",
    text=(
        "{imports}\n"
        "procedure {unit} is\n"
        "begin\n"
        "{body}\n"
        "end {unit};\n"
    ),
    indent=3,
)

SPARK_MAIN_TEMPLATE = Template(
    name="spark_main",
    text=(
        "{imports}\n"
        "procedure {unit} with SPARK_Mode => On is\n"
        "begin\n"
        "{body}\n"
        "end {unit};\n"
    ),
    indent=3,
)


class TemplateRegistry:
    """Mapping of template name -> Template, validated on registration."""

    def __init__(self, templates: list[Template] | None = None):
        self._templates: dict[str, Template] = {}
        for template in templates or []:
            self.register(template)

    def register(self, template: Template, *, replace: bool = False) -> None:
        if not isinstance(template, Template):
            raise TypeError(f"Expected a Template, got {type(template).__name__}")
        if template.name in self._templates and not replace:
            raise ValueError(f"Template '{template.name}' is already registered")
        self._templates[template.name] = template

    def get(self, name: str) -> Template:
        try:
            return self._templates[name]
        except KeyError:
            raise TemplateNotFoundError(name, self.names()) from None

    def names(self) -> list[str]:
        return sorted(self._templates)

    def __contains__(self, name: object) -> bool:
        return name in self._templates


def default_registry() -> TemplateRegistry:
    return TemplateRegistry([MAIN_TEMPLATE, SPARK_MAIN_TEMPLATE])
