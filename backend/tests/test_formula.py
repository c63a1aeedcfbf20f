"""Tests for formula token inspection and control authoring checks."""

from capnio.core.formula import (
    check_definition,
    derived_variables,
    formula_tokens,
    mapped_variables,
    value_matches_type,
)
from capnio.schemas import ControlDefinition, ControlParameter


def _control(**overrides) -> ControlDefinition:
    data = {
        "id": "c1",
        "name": "Contrôle",
        "variables": ["temp"],
        "verification_formula": "sensor['temp'].value <= machine.params['seuil_max']",
        "expected_params": [ControlParameter(id="seuil_max", label="Seuil", default_value=5)],
    }
    data.update(overrides)
    return ControlDefinition(**data)


def test_tokens_include_subscript_keys():
    tokens = formula_tokens("sensor['temp'].value > machine.params[\"seuil\"]")
    assert {"sensor", "temp", "value", "machine", "params", "seuil"} <= tokens


def test_tokens_of_missing_formula():
    assert formula_tokens(None) == set()


def test_derived_variables_from_assignment(definitions):
    assert derived_variables(definitions["control-002"]) == {"conso"}
    assert derived_variables(definitions["control-001"]) == set()


def test_sensor_value_assignment_target():
    control = _control(
        variables=["tension", "courant", "conso"],
        calculation_formula="sensor['conso'].value = sensor['tension'].value * sensor['courant'].value",
    )
    assert derived_variables(control) == {"conso"}
    assert mapped_variables(control) == ["tension", "courant"]


def test_double_quoted_sensor_target():
    control = _control(calculation_formula='sensor["delta"].value = sensor["temp"].value - 4')
    assert derived_variables(control) == {"delta"}


def test_comparison_is_not_an_assignment():
    control = _control(calculation_formula="temp == 3")
    assert derived_variables(control) == set()


def test_mapped_variables_skip_derived(definitions):
    assert mapped_variables(definitions["control-002"]) == ["tension", "courant"]


def test_demo_definitions_are_sound(definitions):
    for definition in definitions.values():
        assert check_definition(definition) == []


def test_unreferenced_variable_is_reported():
    problems = check_definition(_control(variables=["temp", "hum"]))
    assert problems == ["variable 'hum' is not referenced by any formula"]


def test_blank_verification_formula_is_reported():
    problems = check_definition(_control(verification_formula="  ", variables=[]))
    assert "verification formula is required" in problems


def test_duplicate_param_and_bad_default():
    params = [
        ControlParameter(id="seuil_max", label="A", default_value=5),
        ControlParameter(id="seuil_max", label="B", type="boolean", default_value="oui"),
    ]
    problems = check_definition(_control(expected_params=params))
    assert "parameter 'seuil_max' is declared twice" in problems
    assert "default of parameter 'seuil_max' is not a boolean" in problems


def test_value_matches_type():
    assert value_matches_type(3.5, "number")
    assert not value_matches_type(True, "number")
    assert value_matches_type(False, "boolean")
    assert value_matches_type("x", "string")
    assert not value_matches_type(1, "string")
