"""Token-level checks on control formulas.

Formulas are opaque expressions; only the identifiers they mention are
inspected here, nothing is evaluated.
"""

import re

from capnio.schemas.assets import ControlDefinition

_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_QUOTED = re.compile(r"""\[\s*['"]([^'"]+)['"]\s*\]""")
# Targets: `conso = ...` or `sensor['conso'].value = ...`
_ASSIGNMENT = re.compile(
    r"""^\s*(?:([A-Za-z_][A-Za-z0-9_]*)|sensor\[\s*['"]([^'"]+)['"]\s*\]\.value)\s*=(?!=)"""
)


def formula_tokens(formula: str | None) -> set[str]:
    """Identifiers and subscript keys (``sensor['temp']`` gives ``temp``) in a formula."""
    if not formula:
        return set()
    return set(_IDENTIFIER.findall(formula)) | set(_QUOTED.findall(formula))


def derived_variables(control: ControlDefinition) -> set[str]:
    """Variables assigned by the calculation formula.

    Both ``conso = ...`` and ``sensor['conso'].value = ...`` assign ``conso``.
    """
    if not control.calculation_formula:
        return set()
    derived = set()
    for statement in re.split(r"[;\n]", control.calculation_formula):
        match = _ASSIGNMENT.match(statement)
        if match:
            derived.add(match.group(1) or match.group(2))
    return derived


def mapped_variables(control: ControlDefinition) -> list[str]:
    """Variables that must be bound to a sensor on each machine."""
    derived = {v.casefold() for v in derived_variables(control)}
    return [v for v in control.variables if v.casefold() not in derived]


def check_definition(control: ControlDefinition) -> list[str]:
    """Authoring problems in a control definition (empty when it is sound)."""
    problems = []
    if not control.verification_formula.strip():
        problems.append("verification formula is required")

    tokens = formula_tokens(control.verification_formula) | formula_tokens(
        control.calculation_formula
    )
    for variable in control.variables:
        if variable not in tokens:
            problems.append(f"variable {variable!r} is not referenced by any formula")

    seen: set[str] = set()
    for param in control.expected_params:
        if param.id in seen:
            problems.append(f"parameter {param.id!r} is declared twice")
        seen.add(param.id)
        if param.default_value is not None and not value_matches_type(
            param.default_value, param.type
        ):
            problems.append(f"default of parameter {param.id!r} is not a {param.type}")
    return problems


def value_matches_type(value: object, param_type: str) -> bool:
    if param_type == "boolean":
        return isinstance(value, bool)
    if param_type == "number":
        return isinstance(value, int | float) and not isinstance(value, bool)
    return isinstance(value, str)
