"""Tests for the archetype registry, validation and computed mappings."""

import pytest

from engines.archetypes import (
    ARCHETYPE_SCHEMAS,
    ARCHETYPES,
    ENGINE_TARGETS,
    INFO_TARGETS,
    archetype_formulas,
    get_archetype_input_defaults,
    list_archetypes,
    map_archetype_inputs,
    validate_archetype_inputs,
)
from engines.benchmarks import PROCESS_TYPES

ARCHETYPE_IDS = [s["id"] for s in ARCHETYPE_SCHEMAS]


class TestRegistry:
    def test_twelve_archetypes_with_eight_inputs(self):
        assert len(ARCHETYPE_IDS) == 12
        assert len(set(ARCHETYPE_IDS)) == 12
        for schema in ARCHETYPE_SCHEMAS:
            assert len(schema["inputs"]) == 8, schema["id"]

    def test_process_types_are_known(self):
        for schema in ARCHETYPE_SCHEMAS:
            assert schema["processType"] in PROCESS_TYPES

    def test_mapping_targets_are_declared(self):
        for schema in ARCHETYPE_SCHEMAS:
            for m in schema["mappings"]:
                assert m["mapsTo"] in ENGINE_TARGETS + INFO_TARGETS

    def test_defaults_within_bounds(self):
        for schema in ARCHETYPE_SCHEMAS:
            for inp in schema["inputs"]:
                assert inp["min"] <= inp["default"] <= inp["max"], (schema["id"], inp["key"])

    def test_list_summary(self):
        summary = {a["id"]: a for a in list_archetypes()}
        assert summary["supply-chain-ai"]["label"] == "Supply Chain AI"
        assert summary["it-operations-aiops"]["inputCount"] == 8
        assert "automationPotential" in summary["internal-process-automation"]["mapsTo"]


class TestDefaults:
    @pytest.mark.parametrize("archetype_id", ARCHETYPE_IDS)
    def test_defaults_validate_cleanly(self, archetype_id):
        defaults = get_archetype_input_defaults(archetype_id)
        assert len(defaults) == 8
        assert validate_archetype_inputs(archetype_id, defaults) == []

    def test_unknown_archetype_defaults_empty(self):
        assert get_archetype_input_defaults("nope") == {}

    def test_defaults_are_a_fresh_copy(self):
        d = get_archetype_input_defaults("hr-talent-ai")
        d.clear()
        assert get_archetype_input_defaults("hr-talent-ai")


class TestValidation:
    def test_missing_fields_are_permitted(self):
        assert validate_archetype_inputs("customer-facing-ai", {}) == []
        assert validate_archetype_inputs("customer-facing-ai", {"ticketsPerMonth": None}) == []

    def test_non_numeric_value(self):
        errors = validate_archetype_inputs("customer-facing-ai", {"ticketsPerMonth": "lots"})
        assert errors == [{"field": "ticketsPerMonth", "message": "Support tickets/month: must be a number"}]

    def test_booleans_are_not_numbers(self):
        errors = validate_archetype_inputs("customer-facing-ai", {"churnRate": True})
        assert errors[0]["message"].endswith("must be a number")

    def test_int_too_large_for_float_is_not_a_number(self):
        errors = validate_archetype_inputs("internal-process-automation", {"errorRate": 10 ** 400})
        assert errors == [{"field": "errorRate", "message": "Current error/rework rate: must be a number"}]

    def test_infinity_is_not_a_number(self):
        errors = validate_archetype_inputs("internal-process-automation", {"processVolume": float("inf")})
        assert errors[0]["message"].endswith("must be a number")

    def test_bounds(self):
        errors = validate_archetype_inputs("customer-facing-ai", {"churnRate": 1.5, "resolutionTimeMin": 0})
        messages = {e["field"]: e["message"] for e in errors}
        assert messages["churnRate"] == "Annual churn rate: maximum is 1"
        assert messages["resolutionTimeMin"] == "Avg resolution time (minutes): minimum is 1"

    def test_unknown_archetype(self):
        assert validate_archetype_inputs("nope", {}) == [{"field": "_schema", "message": "Unknown archetype: nope"}]


class TestMapping:
    @pytest.mark.parametrize("archetype_id", ARCHETYPE_IDS)
    def test_default_mappings_respect_invariants(self, archetype_id):
        overrides = map_archetype_inputs(archetype_id, {})
        assert overrides
        if "automationPotential" in overrides:
            assert 0 <= overrides["automationPotential"] <= 1
        if "hoursPerWeek" in overrides:
            assert overrides["hoursPerWeek"] >= 1

    def test_internal_process_defaults(self):
        overrides = map_archetype_inputs("internal-process-automation", {})
        assert overrides["automationPotential"] == pytest.approx(0.65 * 0.80 * 0.90)
        assert overrides["errorRate"] == 0.08
        assert overrides["hoursPerWeek"] == 289

    def test_automation_is_capped(self):
        overrides = map_archetype_inputs("internal-process-automation",
                                         {"pctAutomatable": 1.0, "humanInLoopPct": 0, "integrationComplexity": 1})
        assert overrides["automationPotential"] == 0.85

    def test_extreme_inputs_stay_in_range(self):
        overrides = map_archetype_inputs("customer-facing-ai", {"ticketsPerMonth": 0, "deflectionTarget": 0})
        assert overrides["hoursPerWeek"] == 1
        assert overrides["automationPotential"] == 0

    def test_failing_mapping_is_dropped_alone(self):
        overrides = map_archetype_inputs("revenue-growth-ai", {"avgDealSize": 0})
        assert "hoursPerWeek" not in overrides
        assert "automationPotential" in overrides
        assert "revenueImpact" in overrides

    def test_non_numeric_input_drops_dependent_mapping(self):
        overrides = map_archetype_inputs("internal-process-automation", {"processVolume": "abc"})
        assert "hoursPerWeek" not in overrides
        assert "automationPotential" in overrides

    def test_overflowing_identity_mapping_is_dropped_alone(self):
        overrides = map_archetype_inputs("internal-process-automation", {"errorRate": 10 ** 400})
        assert "errorRate" not in overrides
        assert overrides["hoursPerWeek"] == 289
        assert "automationPotential" in overrides

    def test_overflowing_arithmetic_is_dropped_alone(self):
        overrides = map_archetype_inputs("internal-process-automation", {"processVolume": 10 ** 400})
        assert "hoursPerWeek" not in overrides
        assert overrides["errorRate"] == 0.08

    def test_unknown_archetype_maps_to_nothing(self):
        assert map_archetype_inputs("nope", {"x": 1}) == {}


class TestFormulas:
    def test_formulas_use_placeholders(self):
        formulas = {f["mapsTo"]: f["formula"] for f in archetype_formulas("internal-process-automation")}
        assert formulas["automationPotential"].startswith("MAX(0,MIN(0.85,")
        assert "{pctAutomatable}" in formulas["automationPotential"]
        assert formulas["hoursPerWeek"].startswith("MAX(1,ROUND(")
        assert formulas["errorRate"] == "{errorRate}"

    def test_every_archetype_has_formulas(self):
        for archetype_id in ARCHETYPES:
            assert len(archetype_formulas(archetype_id)) == len(ARCHETYPES[archetype_id]["mappings"])

    def test_unknown_archetype_formulas(self):
        assert archetype_formulas("nope") == []
