"""Tests for the calculation engine."""

import math

import pytest

from engines.archetypes import ARCHETYPE_SCHEMAS
from engines.benchmarks import COMPANY_SIZES, DEFAULT_BENCHMARKS, INDUSTRIES
from engines.calculations import (
    active_overrides,
    normalize_inputs,
    run_calculations,
    solve_irr,
)

BASE_INPUTS = {
    "teamSize": 10,
    "avgSalary": 100000,
    "hoursPerWeek": 20,
    "errorRate": 0.10,
    "industry": "Technology / Software",
    "processType": "Document Processing",
}

FULL_INPUTS = {
    **BASE_INPUTS,
    "teamSize": 40,
    "companySize": "Enterprise (5,001-50,000)",
    "teamLocation": "US - Other",
    "companyState": "California",
    "currentToolCosts": 60000,
    "changeReadiness": 4,
    "dataReadiness": 4,
    "execSponsor": True,
    "implementationBudget": 400000,
    "expectedTimeline": 6,
    "ongoingAnnualCost": 80000,
}


@pytest.fixture(scope="module")
def base_result():
    return run_calculations(BASE_INPUTS)


@pytest.fixture(scope="module")
def full_result():
    return run_calculations(FULL_INPUTS)


def assert_result_invariants(result, team_size):
    scenarios = result["scenarios"]
    assert scenarios["conservative"]["npv"] <= scenarios["base"]["npv"] <= scenarios["optimistic"]["npv"]
    for s in scenarios.values():
        assert -1 <= s["roic"] <= 1
        assert math.isnan(s["irr"]) or -0.75 <= s["irr"] <= 0.75
        assert len(s["projections"]) == 5
        for p in s["projections"]:
            for key, value in p.items():
                assert math.isfinite(value), key
        assert s["projections"][0]["separationCost"] == 0
    fte = result["oneTimeCosts"]
    assert fte["displacedFTEs"] <= math.floor(0.75 * team_size)
    assert fte["displacedFTEs"] + fte["retainedFTEs"] == team_size
    assert_numeric_leaves_finite(result)


# IRR is NaN by contract when it has no root; every other number is finite.
NAN_ALLOWED = {"irr", "rawIrr"}


def assert_numeric_leaves_finite(node, path="result"):
    if isinstance(node, dict):
        for key, value in node.items():
            if key in NAN_ALLOWED and isinstance(value, float) and math.isnan(value):
                continue
            assert_numeric_leaves_finite(value, f"{path}.{key}")
    elif isinstance(node, (list, tuple)):
        for i, value in enumerate(node):
            assert_numeric_leaves_finite(value, f"{path}[{i}]")
    elif isinstance(node, (int, float)) and not isinstance(node, bool):
        assert math.isfinite(node), path


class TestBackwardCompatibility:
    def test_generic_inputs_without_archetype(self, base_result):
        base = base_result["scenarios"]["base"]
        assert base["roic"] is not None
        assert math.isfinite(base["roic"])
        assert len(base["projections"]) == 5
        assert [p["year"] for p in base["projections"]] == [1, 2, 3, 4, 5]
        assert base_result["archetypeImpact"] is None

    def test_invariants(self, base_result):
        assert_result_invariants(base_result, 10)

    def test_inputs_not_mutated(self):
        inputs = dict(BASE_INPUTS)
        run_calculations(inputs)
        assert inputs == BASE_INPUTS

    def test_defaults_fill_missing_categories(self):
        n = normalize_inputs({})
        assert n["industry"] == "Other"
        assert n["companySize"] == "Mid-Market (501-5,000)"
        assert n["changeReadiness"] == 3
        assert n["execSponsor"] is False


class TestGoldenValues:
    """Hand-derived figures for BASE_INPUTS: Technology / Software, Document
    Processing, Mid-Market, readiness 3, no sponsor."""

    def test_current_state(self, base_result):
        cs = base_result["currentState"]
        assert cs["hourlyRate"] == pytest.approx(100000 / 2080)
        assert cs["annualLaborCost"] == 1_000_000
        assert cs["annualHours"] == 10_400
        assert cs["annualReworkCost"] == pytest.approx(100_000)
        assert cs["totalCurrentCost"] == pytest.approx(1_100_000)

    def test_benchmarks_and_risk(self, base_result):
        assert base_result["benchmarks"]["automationPotential"] == 0.60
        assert base_result["benchmarks"]["industrySuccessRate"] == 0.72
        risk = base_result["riskAdjustments"]
        assert risk["adoptionRate"] == 0.70
        assert risk["sponsorAdjustment"] == 0.85
        assert risk["orgReadiness"] == pytest.approx(0.595)
        assert risk["riskMultiplier"] == pytest.approx(0.6575)
        assert base_result["discountRate"] == 0.10

    def test_displacement(self, base_result):
        fte = base_result["oneTimeCosts"]
        assert fte["rawDisplacedFTEs"] == 4
        assert fte["displacedFTEs"] == 4
        assert fte["retainedFTEs"] == 6

    def test_savings(self, base_result):
        savings = base_result["savings"]
        assert savings["grossAnnualSavings"] == pytest.approx(660_000)
        assert savings["riskAdjustedSavings"] == pytest.approx(660_000 * 0.6575)


class TestNormalization:
    def test_aliases(self):
        n = normalize_inputs({"toolCost": 12000, "hasExecSponsor": True, "location": "India / South Asia"})
        assert n["currentToolCosts"] == 12000
        assert n["execSponsor"] is True
        assert n["teamLocation"] == "India / South Asia"

    def test_clamping(self):
        n = normalize_inputs({"teamSize": 0, "hoursPerWeek": 200, "errorRate": 3, "changeReadiness": 9})
        assert n["teamSize"] == 10
        assert n["hoursPerWeek"] == 80
        assert n["errorRate"] == 1
        assert n["changeReadiness"] == 5

    def test_amounts_have_upper_bounds(self):
        huge = 1e308
        n = normalize_inputs({"currentToolCosts": huge, "implementationBudget": huge, "ongoingAnnualCost": huge,
                              "vendorTerminationCost": huge, "expectedTimeline": huge, "vendorsReplaced": 10 ** 400})
        assert n["currentToolCosts"] == 1e9
        assert n["implementationBudget"] == 1e10
        assert n["ongoingAnnualCost"] == 1e9
        assert n["vendorTerminationCost"] == 1e9
        assert n["expectedTimeline"] == 120
        assert n["vendorsReplaced"] == 1000

    def test_extreme_amounts_keep_every_leaf_finite(self):
        huge = 1e308
        result = run_calculations({**BASE_INPUTS, "currentToolCosts": huge, "implementationBudget": huge,
                                   "ongoingAnnualCost": huge, "vendorTerminationCost": huge,
                                   "expectedTimeline": huge})
        assert_numeric_leaves_finite(result)

    def test_non_numeric_amount_raises_value_error(self):
        with pytest.raises(ValueError):
            normalize_inputs({"currentToolCosts": "a lot"})
        with pytest.raises(ValueError):
            normalize_inputs({"changeReadiness": "high"})

    def test_readiness_text_and_huge_values(self):
        n = normalize_inputs({"changeReadiness": "4", "dataReadiness": 10 ** 400})
        assert n["changeReadiness"] == 4
        assert n["dataReadiness"] == 5

    @pytest.mark.parametrize("value,expected", [
        (True, True), (False, False), ("false", False), ("no", False), ("0", False),
        ("true", True), ("Yes", True), (1, True), (0, False), (None, False),
    ])
    def test_sponsor_flag(self, value, expected):
        assert normalize_inputs({"execSponsor": value})["execSponsor"] is expected

    def test_overflowing_archetype_input_is_dropped(self):
        result = run_calculations({**BASE_INPUTS, "projectArchetype": "internal-process-automation",
                                   "archetypeInputs": {"errorRate": 10 ** 400}})
        overrides = result["archetypeImpact"]["overrides"]
        assert "errorRate" not in overrides
        assert overrides["hoursPerWeek"] == 289
        assert_numeric_leaves_finite(result)

    def test_zero_error_rate_is_kept(self):
        assert normalize_inputs({"errorRate": 0})["errorRate"] == 0

    def test_auto_derived_assumptions(self):
        n = normalize_inputs(BASE_INPUTS)
        assert n["implementationBudget"] > 0
        assert n["implementationBudget"] % 5000 == 0
        assert n["expectedTimeline"] > 0
        assert n["ongoingAnnualCost"] % 5000 == 0

    def test_stated_assumptions_win(self):
        n = normalize_inputs(FULL_INPUTS)
        assert n["implementationBudget"] == 400000
        assert n["expectedTimeline"] == 6
        assert n["ongoingAnnualCost"] == 80000

    def test_unknown_category_raises(self):
        with pytest.raises(LookupError):
            normalize_inputs({**BASE_INPUTS, "industry": "Alchemy"})

    def test_unknown_archetype_raises(self):
        with pytest.raises(LookupError):
            run_calculations({**BASE_INPUTS, "projectArchetype": "time-travel-ai"})


class TestArchetypeOverrides:
    def test_overrides_replace_generic_inputs(self):
        n = normalize_inputs({"teamSize": 10, "projectArchetype": "internal-process-automation"})
        assert n["processType"] == "Workflow Automation"
        assert n["hoursPerWeek"] == 80
        assert n["errorRate"] == 0.08
        assert n["automationPotentialOverride"] == pytest.approx(0.468)
        assert active_overrides(n) == frozenset({"automationPotential"})

    def test_result_reports_archetype_impact(self):
        result = run_calculations({**BASE_INPUTS, "projectArchetype": "customer-facing-ai"})
        impact = result["archetypeImpact"]
        assert impact["archetype"] == "customer-facing-ai"
        assert impact["label"] == "Customer-Facing AI"
        assert impact["revenueImpact"] > 0
        assert result["benchmarks"]["automationPotential"] == pytest.approx(impact["overrides"]["automationPotential"])

    def test_explicit_process_type_kept(self):
        n = normalize_inputs({**BASE_INPUTS, "projectArchetype": "internal-process-automation"})
        assert n["processType"] == "Document Processing"


class TestFinancials:
    def test_invariants(self, full_result):
        assert_result_invariants(full_result, 40)

    def test_totals_add_up(self, full_result):
        r = full_result
        assert r["totalInvestment"] == pytest.approx(r["upfrontInvestment"] + r["oneTimeCosts"]["totalSeparationCost"])
        hidden = r["hiddenCosts"]
        assert hidden["totalHidden"] == pytest.approx(
            hidden["changeManagement"] + hidden["culturalResistance"] + hidden["dataCleanup"]
            + hidden["integrationTesting"] + hidden["productivityDip"])
        breakdown = sum(v["total"] for v in r["oneTimeCosts"]["separationBreakdown"].values())
        assert breakdown == pytest.approx(r["oneTimeCosts"]["totalSeparationCost"])

    def test_npv_matches_cash_flows(self, full_result):
        base = full_result["scenarios"]["base"]
        rate = full_result["discountRate"]
        npv = -full_result["upfrontInvestment"] + sum(
            p["netCashFlow"] / (1 + rate) ** p["year"] for p in base["projections"])
        assert base["npv"] == pytest.approx(npv)

    def test_expected_values_are_weighted(self, full_result):
        s, w = full_result["scenarios"], full_result["scenarioWeights"]
        assert full_result["expectedNPV"] == pytest.approx(sum(w[k] * s[k]["npv"] for k in s))
        assert full_result["expectedROIC"] == pytest.approx(sum(w[k] * s[k]["roic"] for k in s))

    def test_payback_labelling(self, full_result):
        for s in full_result["scenarios"].values():
            assert s["noBreakEven"] == (s["paybackMonths"] > 60)
            assert s["paybackMonths"] >= 0

    def test_ongoing_costs_escalate(self, full_result):
        costs = full_result["aiCostModel"]["ongoingCostsByYear"]
        base = full_result["aiCostModel"]["baseOngoingCost"]
        assert costs[0] == pytest.approx(base)
        assert costs[1] == pytest.approx(base * 1.08)

    def test_cost_of_inaction_compounds(self, full_result):
        opp = full_result["opportunityCost"]
        years = opp["yearlyBreakdown"]
        assert opp["costOfWaiting24Months"] == pytest.approx(years[0]["total"] + years[1]["total"])
        assert opp["totalCost5Year"] == pytest.approx(sum(y["total"] for y in years))

    def test_rd_credit_for_us_team(self, full_result):
        rd = full_result["rdTaxCredit"]
        assert rd["eligible"] is True
        assert rd["stateRate"] == 0.24
        assert rd["totalCredit"] == pytest.approx(rd["qualifiedExpenses"] * (0.065 + 0.24))

    def test_rd_credit_for_offshore_team(self):
        rd = run_calculations({**FULL_INPUTS, "teamLocation": "India / South Asia"})["rdTaxCredit"]
        assert rd["eligible"] is False
        assert rd["totalCredit"] == 0

    def test_revenue_enablement_only_for_eligible_process(self, full_result):
        assert full_result["revenueEnablement"] == {"eligible": False, "processType": "Document Processing"}
        result = run_calculations({**FULL_INPUTS, "processType": "Customer Communication"})
        assert result["revenueEnablement"]["eligible"] is True
        assert result["revenueEnablement"]["totalAnnualRevenue"] > 0

    def test_scalability_premium(self, full_result):
        rows = {r["label"]: r for r in full_result["scalabilityPremium"]["scenarios"]}
        ongoing = full_result["aiCostModel"]["baseOngoingCost"]
        assert rows["2x"]["aiCost"] == pytest.approx(ongoing * 1.25)
        assert rows["3x"]["aiCost"] == pytest.approx(ongoing * 1.40)

    def test_peer_percentile_bounds(self, full_result):
        assert 5 <= full_result["peerComparison"]["percentileRank"] <= 95

    def test_sensitivity_sorted_by_swing(self, full_result):
        rows = full_result["extendedSensitivity"]
        assert len(rows) == 6
        swings = [abs(r["npvHigh"] - r["npvLow"]) for r in rows]
        assert swings == sorted(swings, reverse=True)
        base_npv = full_result["scenarios"]["base"]["npv"]
        assert full_result["sensitivity"]["quickBaseNPV"] == pytest.approx(base_npv)
        assert full_result["sensitivity"]["doubleTimeline"] <= base_npv

    def test_confidence_interval_ordering(self, full_result):
        ci = full_result["confidenceIntervals"]["npv"]
        assert ci["p25"] <= ci["p50"] <= ci["p75"]

    def test_threshold_analysis(self, full_result):
        t = full_result["thresholdAnalysis"]
        assert t["riskMargin"] == pytest.approx(t["currentRiskMultiplier"] - t["breakevenRiskMultiplier"])
        assert t["isViable"] == (t["riskMargin"] > 0)

    def test_custom_benchmarks(self):
        constants = DEFAULT_BENCHMARKS.to_dict()["constants"]
        constants["maxRoic"] = 0.10
        custom = DEFAULT_BENCHMARKS.with_overrides(constants=constants)
        result = run_calculations(FULL_INPUTS, benchmarks=custom)
        assert all(-0.10 <= s["roic"] <= 0.10 for s in result["scenarios"].values())
        assert result["benchmarkVersion"].endswith("+custom")


class TestIrr:
    def test_simple_root(self):
        assert solve_irr([-100, 110]) == pytest.approx(0.10, abs=1e-6)

    def test_no_sign_change_is_nan(self):
        assert math.isnan(solve_irr([100, 10, 10]))
        assert math.isnan(solve_irr([-100, -10, -10]))

    def test_multi_period(self):
        flows = [-1000, 300, 400, 500]
        irr = solve_irr(flows)
        assert sum(cf / (1 + irr) ** t for t, cf in enumerate(flows)) == pytest.approx(0, abs=1e-4)

    def test_losing_project_has_capped_or_nan_irr(self):
        result = run_calculations({**BASE_INPUTS, "implementationBudget": 50000000})
        irr = result["scenarios"]["base"]["irr"]
        assert math.isnan(irr) or irr == -0.75


@pytest.mark.parametrize("size", COMPANY_SIZES)
@pytest.mark.parametrize("industry", INDUSTRIES)
@pytest.mark.parametrize("archetype_id", [s["id"] for s in ARCHETYPE_SCHEMAS])
def test_archetype_industry_size_cross_product(archetype_id, industry, size):
    inputs = {"teamSize": 25, "avgSalary": 95000, "industry": industry, "companySize": size,
              "projectArchetype": archetype_id}
    result = run_calculations(inputs)
    assert result["archetypeImpact"]["archetype"] == archetype_id
    assert_result_invariants(result, 25)
