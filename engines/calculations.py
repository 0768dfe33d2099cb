"""
ROI Navigator - Calculation Engine
Normalizes an input profile, evaluates the model graphs and assembles the
result: cost stacks, value breakdown, three-scenario 5-year DCF, sensitivity
sweep, confidence intervals, peer comparison, cost of inaction, R&D credit,
revenue enablement and threshold analysis.

The engine is a pure function of (inputs, benchmarks). IRR is the only
procedural metric; everything else is a node in engines.model.
"""
import logging
import math

from engines.archetypes import ARCHETYPES, map_archetype_inputs
from engines.benchmarks import DEFAULT_BENCHMARKS, DEFAULT_CATEGORIES
from engines.formulas import round_half_up, ceiling
from engines.model import (
    YEARS, SCENARIOS, INPUT_BOUNDS,
    build_core_graph, build_projection_graph, build_inaction_graph,
    build_revenue_scale_graph, build_summary_graph,
)

# Accepted alternate names for InputProfile fields
INPUT_ALIASES = {
    'toolCost': 'currentToolCosts',
    'hasExecSponsor': 'execSponsor',
    'statedBudget': 'implementationBudget',
    'expectedTimelineMonths': 'expectedTimeline',
    'statedOngoingCost': 'ongoingAnnualCost',
    'vendorsToReplace': 'vendorsReplaced',
    'location': 'teamLocation',
    'state': 'companyState',
}

# Category input -> benchmark table whose keys it must match
CATEGORY_TABLES = {
    'industry': 'industries',
    'processType': 'processTypes',
    'companySize': 'companySizes',
    'teamLocation': 'aiTeamSalary',
    'companyState': 'stateRdCredit',
}

IRR_BRACKET = (-0.99, 10.0)
IRR_MAX_ITERATIONS = 200
IRR_TOLERANCE = 1e-9


# ══════════════════════════════════════════════════════════════
#  INPUT NORMALIZATION
# ══════════════════════════════════════════════════════════════

def _clamp(name, value):
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{name} must be a number, got {value!r}")
    lo, hi = INPUT_BOUNDS[name]
    return max(lo, min(value, hi))


def _readiness(value):
    if value is None:
        return 3
    try:
        value = float(value)
    except OverflowError:
        value = math.inf if value > 0 else -math.inf
    except (TypeError, ValueError):
        raise ValueError(f"readiness must be a number from 1 to 5, got {value!r}") from None
    return int(max(1, min(5, round_half_up(value))))


def _flag(value):
    if isinstance(value, str):
        return value.strip().lower() in ('true', 'yes', 'y', '1', 'on')
    return bool(value)


def _category(inputs, key, benchmarks, fallback=None):
    value = inputs.get(key) or fallback or DEFAULT_CATEGORIES[key]
    table = CATEGORY_TABLES[key]
    if value not in benchmarks.table(table):
        raise LookupError(f"Unknown {key}: {value!r}")
    return value


def _archetype_overrides(inputs):
    archetype_id = inputs.get('projectArchetype')
    if not archetype_id:
        return None, {}
    if archetype_id not in ARCHETYPES:
        raise LookupError(f"Unknown projectArchetype: {archetype_id!r}")
    overrides = map_archetype_inputs(archetype_id, inputs.get('archetypeInputs') or {})
    logging.info(f"[{archetype_id}] archetype overrides applied: {', '.join(sorted(overrides)) or 'none'}")
    return archetype_id, overrides


def normalize_inputs(inputs, benchmarks=DEFAULT_BENCHMARKS):
    """Flat InputProfile -> engine input vector.

    Resolves aliases, category defaults, archetype overrides, clamps and the
    auto-derived investment assumptions. Raises LookupError on an unknown
    category key or archetype id.
    """
    raw = dict(inputs or {})
    for alias, name in INPUT_ALIASES.items():
        if alias in raw and raw.get(name) is None:
            raw[name] = raw[alias]

    archetype_id, overrides = _archetype_overrides(raw)
    archetype_process = ARCHETYPES[archetype_id]['processType'] if archetype_id else None

    n = {
        'industry': _category(raw, 'industry', benchmarks),
        'processType': _category(raw, 'processType', benchmarks, archetype_process),
        'companySize': _category(raw, 'companySize', benchmarks),
        'teamLocation': _category(raw, 'teamLocation', benchmarks),
        'companyState': _category(raw, 'companyState', benchmarks),
    }

    # Archetype hours/error replace the generic inputs before clamping
    if 'hoursPerWeek' in overrides:
        raw['hoursPerWeek'] = overrides['hoursPerWeek']
    if 'errorRate' in overrides:
        raw['errorRate'] = overrides['errorRate']

    n['teamSize'] = _clamp('teamSize', raw.get('teamSize') or 10)
    n['avgSalary'] = _clamp('avgSalary', raw.get('avgSalary') or 100000)
    n['hoursPerWeek'] = _clamp('hoursPerWeek', raw.get('hoursPerWeek') or 20)
    err = raw.get('errorRate')
    n['errorRate'] = _clamp('errorRate', 0.10 if err is None else err)
    n['currentToolCosts'] = _clamp('currentToolCosts', raw.get('currentToolCosts') or 0)
    n['changeReadiness'] = _readiness(raw.get('changeReadiness'))
    n['dataReadiness'] = _readiness(raw.get('dataReadiness'))
    n['execSponsor'] = _flag(raw.get('execSponsor', False))
    n['vendorsReplaced'] = _clamp('vendorsReplaced', raw.get('vendorsReplaced') or 0)
    n['vendorTerminationCost'] = _clamp('vendorTerminationCost', raw.get('vendorTerminationCost') or 0)

    for name in ('automationPotential', 'toolReplacementRate'):
        if name in overrides:
            n[name + 'Override'] = max(0, min(1, overrides[name]))

    # ── Auto-derived investment assumptions ──
    size = n['companySize']
    size_mult = benchmarks.lookup('companySizes', size, 'sizeMultiplier')
    data_tl = benchmarks.lookup('readiness', n['dataReadiness'], 'timelineMultiplier')
    auto_months = ceiling(6 * data_tl * size_mult)
    auto_years = auto_months / 12
    data_hc = 1.3 if n['dataReadiness'] <= 2 else 1.1 if n['dataReadiness'] == 3 else 1.0
    scope_min = max(1, ceiling(n['teamSize'] / 12))
    eng = min(ceiling(scope_min * data_hc), benchmarks.lookup('companySizes', size, 'maxTeamSize'))
    pm = max(0.5, ceiling(eng / 5))
    ai_salary = benchmarks.lookup('aiTeamSalary', n['teamLocation'])
    pm_factor = benchmarks.constant('pmSalaryFactor')

    budget = raw.get('implementationBudget')
    if budget is None:
        budget = round_half_up((eng * ai_salary * auto_years + pm * ai_salary * pm_factor * auto_years) * 1.20 / 5000) * 5000
        logging.info(f"implementationBudget auto-derived: ${budget:,.0f} ({eng} eng, {pm} PM, {auto_months} mo)")
    timeline = raw.get('expectedTimeline')
    if timeline is None:
        timeline = auto_months / size_mult
        logging.info(f"expectedTimeline auto-derived: {timeline:.1f} months")
    ongoing = raw.get('ongoingAnnualCost')
    if ongoing is None:
        license_ = benchmarks.lookup('companySizes', size, 'annualLicense')
        ongoing = round_half_up((license_ + eng * ai_salary * 0.15) / 5000) * 5000
        logging.info(f"ongoingAnnualCost auto-derived: ${ongoing:,.0f}")

    n['implementationBudget'] = _clamp('implementationBudget', budget)
    n['expectedTimeline'] = _clamp('expectedTimeline', timeline)
    n['ongoingAnnualCost'] = _clamp('ongoingAnnualCost', ongoing)
    n['projectArchetype'] = archetype_id
    n['archetypeOverrides'] = overrides
    return n


def active_overrides(normalized):
    """Benchmark rates replaced by archetype mappings for this input vector."""
    return frozenset(k[:-len('Override')] for k in normalized if k.endswith('Override'))


# ══════════════════════════════════════════════════════════════
#  FINANCIAL HELPERS
# ══════════════════════════════════════════════════════════════

def _npv_at(rate, cash_flows):
    return sum(cf / (1 + rate) ** t for t, cf in enumerate(cash_flows))


def solve_irr(cash_flows):
    """Bisection on a fixed bracket. Returns NaN when the series has no sign
    change or the NPV function does not change sign across the bracket."""
    if not (any(cf > 0 for cf in cash_flows) and any(cf < 0 for cf in cash_flows)):
        logging.warning("IRR undefined: cash flows do not change sign")
        return math.nan
    lo, hi = IRR_BRACKET
    f_lo = _npv_at(lo, cash_flows)
    f_hi = _npv_at(hi, cash_flows)
    if f_lo == 0:
        return lo
    if f_hi == 0:
        return hi
    if (f_lo > 0) == (f_hi > 0):
        logging.warning(f"IRR did not converge: no root in [{lo}, {hi}]")
        return math.nan
    mid = (lo + hi) / 2
    for _ in range(IRR_MAX_ITERATIONS):
        mid = (lo + hi) / 2
        f_mid = _npv_at(mid, cash_flows)
        if f_mid == 0 or (hi - lo) / 2 < IRR_TOLERANCE:
            break
        if (f_mid > 0) == (f_lo > 0):
            lo, f_lo = mid, f_mid
        else:
            hi = mid
    return mid


def _projection_rows(values):
    graph = build_projection_graph()
    rows = {y: {'year': y} for y in YEARS}
    for node in graph.nodes:
        if node.year in rows:
            rows[node.year][node.metric] = values[node.key]
    return [rows[y] for y in YEARS]


def _run_scenario(key, env, core, benchmarks):
    cfg = SCENARIOS[key]
    multiplier = benchmarks.constant(cfg['multiplier'])
    values = build_projection_graph().evaluate(dict(env, scenarioMultiplier=multiplier), benchmarks)
    cash_flows = [values[f'netCashFlow{y}'] for y in [0] + YEARS]
    raw_irr = solve_irr(cash_flows)
    max_irr = benchmarks.constant('maxIrr')
    if math.isnan(raw_irr):
        irr, irr_capped = math.nan, False
    else:
        irr = max(-max_irr, min(max_irr, raw_irr))
        irr_capped = irr != raw_irr
    return {
        'label': cfg['label'],
        'multiplier': multiplier,
        'savings': values['avgNetSavings'],
        'timeline': ceiling(core['adjustedTimeline'] * cfg['timelineFactor']),
        'projections': _projection_rows(values),
        'npv': values['npv'],
        'irr': irr,
        'rawIrr': raw_irr,
        'irrCapped': irr_capped,
        'roic': values['roic'],
        'rawRoic': values['rawRoic'],
        'roicCapped': values['roicCapped'],
        'paybackMonths': values['paybackMonths'],
        'noBreakEven': values['noBreakEven'],
        'totalNetReturn': values['totalNetReturn'],
    }


# ══════════════════════════════════════════════════════════════
#  SENSITIVITY
# ══════════════════════════════════════════════════════════════

def _dcf_npv(env, benchmarks, ramp='adoptionRamp', **changes):
    """Base-case (m = 1) NPV with some core outputs replaced."""
    return build_projection_graph(ramp).evaluate(dict(env, scenarioMultiplier=1, **changes), benchmarks)['npv']


def _value_for(inputs, overrides, benchmarks, **changes):
    core = build_core_graph(overrides).evaluate(dict(inputs, **changes), benchmarks)
    return {'enhancementRiskAdjusted': core['enhancementRiskAdjusted'],
            'headcountRiskAdjusted': core['headcountRiskAdjusted']}


def _upfront_for(impl, core, benchmarks):
    c = benchmarks.constant
    hidden = impl * (c('changeManagementRate') + c('culturalResistanceRate') + core['dataCleanupRate']
                     + c('integrationTestingRate')) + core['productivityDip']
    return impl + hidden + core['totalOneTimeCosts']


def _sensitivity_sweep(inputs, core, env, overrides, benchmarks):
    base_npv = _dcf_npv(env, benchmarks)
    team, salary, err = inputs['teamSize'], inputs['avgSalary'], inputs['errorRate']
    ap, impl, ongoing = core['automationPotential'], core['realisticImplCost'], core['baseOngoingCost']

    def npv_for(**changes):
        return _dcf_npv(env, benchmarks, **_value_for(inputs, overrides, benchmarks, **changes))

    ap_overrides = overrides | {'automationPotential'}

    def npv_for_ap(value):
        vals = _value_for(inputs, ap_overrides, benchmarks, automationPotentialOverride=value)
        return _dcf_npv(env, benchmarks, **vals)

    team_lo, team_hi = max(1, round_half_up(team * 0.80)), round_half_up(team * 1.20)
    sal_lo, sal_hi = salary * 0.80, salary * 1.20
    err_lo, err_hi = max(0, err * 0.50), min(0.50, err * 1.50)
    ap_lo, ap_hi = max(0.10, ap - 0.15), min(0.95, ap + 0.15)
    ong_lo, ong_hi = ongoing * 0.50, ongoing * 2.0

    def row(label, base_val, low_label, high_label, npv_low, npv_high):
        return {'label': label, 'baseVal': base_val, 'lowLabel': low_label, 'highLabel': high_label,
                'npvLow': npv_low, 'npvHigh': npv_high, 'baseNPV': base_npv}

    rows = [
        row('Team Size', f"{team:g} people", f"{team_lo:g} (-20%)", f"{team_hi:g} (+20%)",
            npv_for(teamSize=team_lo), npv_for(teamSize=team_hi)),
        row('Avg Cost per Person', f"${salary / 1000:.0f}K", f"${sal_lo / 1000:.0f}K (-20%)", f"${sal_hi / 1000:.0f}K (+20%)",
            npv_for(avgSalary=sal_lo), npv_for(avgSalary=sal_hi)),
        row('Error / Rework Rate', f"{err * 100:.0f}%", f"{err_lo * 100:.0f}% (-50%)", f"{err_hi * 100:.0f}% (+50%)",
            npv_for(errorRate=err_lo), npv_for(errorRate=err_hi)),
        row('Automation Potential', f"{ap * 100:.0f}%", f"{ap_lo * 100:.0f}% (-15pp)", f"{ap_hi * 100:.0f}% (+15pp)",
            npv_for_ap(ap_lo), npv_for_ap(ap_hi)),
        row('Implementation Cost', f"${impl / 1000:.0f}K", '-20%', '+50%',
            _dcf_npv(env, benchmarks, upfrontInvestment=_upfront_for(impl * 0.80, core, benchmarks)),
            _dcf_npv(env, benchmarks, upfrontInvestment=_upfront_for(impl * 1.50, core, benchmarks))),
        row('Ongoing Annual Cost', f"${ongoing / 1000:.0f}K", f"${ong_lo / 1000:.0f}K (-50%)", f"${ong_hi / 1000:.0f}K (+100%)",
            _dcf_npv(env, benchmarks, baseOngoingCost=ong_lo), _dcf_npv(env, benchmarks, baseOngoingCost=ong_hi)),
    ]
    by_label = {r['label']: r for r in rows}
    double_timeline = _dcf_npv(env, benchmarks, ramp='delayedAdoptionRamp')
    summary = {
        'quickBaseNPV': base_npv,
        'lowerAdoption': by_label['Team Size']['npvLow'],
        'higherCosts': by_label['Implementation Cost']['npvHigh'],
        'doubleTimeline': double_timeline,
        'lowerAdoptionDelta': by_label['Team Size']['npvLow'] - base_npv,
        'higherCostsDelta': by_label['Implementation Cost']['npvHigh'] - base_npv,
        'doubleTimelineDelta': double_timeline - base_npv,
    }
    rows.sort(key=lambda r: abs(r['npvHigh'] - r['npvLow']), reverse=True)
    return rows, summary


def _confidence_intervals(scenarios, sweep):
    cons, base, opt = scenarios['conservative'], scenarios['base'], scenarios['optimistic']
    spread = [v for r in sweep for v in (r['npvLow'], r['npvHigh'])]
    lo = min([cons['npv']] + spread)
    hi = max([opt['npv']] + spread)
    return {
        'npv': {'p25': base['npv'] + (lo - base['npv']) * 0.5, 'p50': base['npv'], 'p75': base['npv'] + (hi - base['npv']) * 0.5},
        'payback': {'p25': cons['paybackMonths'], 'p50': base['paybackMonths'], 'p75': opt['paybackMonths']},
        'roic': {'p25': cons['rawRoic'], 'p50': base['rawRoic'], 'p75': opt['rawRoic']},
    }


# ══════════════════════════════════════════════════════════════
#  MAIN ENTRY
# ══════════════════════════════════════════════════════════════

def run_calculations(inputs, benchmarks=DEFAULT_BENCHMARKS):
    """Full ROI model for one input profile. Returns a fresh result dict."""
    n = normalize_inputs(inputs, benchmarks)
    overrides = active_overrides(n)
    core = build_core_graph(overrides).evaluate(n, benchmarks)
    env = dict(n, **core)

    # ── Scenarios ──
    scenarios = {key: _run_scenario(key, env, core, benchmarks) for key in SCENARIOS}
    base = scenarios['base']
    summary_env = dict(env, baseRawRoic=base['rawRoic'], baseTotalNetReturn=base['totalNetReturn'],
                       baseNetCashFlow3=base['projections'][2]['netCashFlow'])
    for key, s in scenarios.items():
        summary_env['npv' + key.capitalize()] = s['npv']
        summary_env['roic' + key.capitalize()] = s['roic']

    inaction = build_inaction_graph().evaluate(env, benchmarks)
    revenue = build_revenue_scale_graph().evaluate(env, benchmarks)
    summary = build_summary_graph().evaluate(summary_env, benchmarks)
    sweep, sensitivity = _sensitivity_sweep(n, core, env, overrides, benchmarks)

    sched = [benchmarks.lookup('yearSchedule', y) for y in YEARS]
    ongoing_by_year = [base['projections'][i]['ongoingCost'] for i in range(len(YEARS))]
    risk_adjusted = {
        'headcount': core['headcountRiskAdjusted'],
        'efficiency': core['efficiencyRiskAdjusted'],
        'errorReduction': core['errorReductionRiskAdjusted'],
        'toolReplacement': core['toolReplacementRiskAdjusted'],
    }

    separation_breakdown = {
        key: {'label': item['label'],
              'perFTE': core['separationCostPerFTE'] * item['rate'],
              'total': core['totalSeparationCost'] * item['rate']}
        for key, item in benchmarks.table('separationBreakdown').items()
    }

    phased = []
    for phase in benchmarks.table('valuePhases'):
        value = sum(risk_adjusted[t] for t in phase['valueTypes'])
        phased.append({
            'phase': phase['phase'], 'label': phase['label'], 'monthRange': list(phase['monthRange']),
            'description': phase['description'], 'valueTypes': list(phase['valueTypes']),
            'realizationPct': phase['realizationPct'], 'estimatedValue': value * phase['realizationPct'],
        })

    inaction_rows = [{
        'year': y,
        'wageInflation': inaction[f'wageInflation{y}'],
        'legacyCreep': inaction[f'legacyCreep{y}'],
        'forgoneSavings': inaction[f'forgoneSavings{y}'],
        'competitiveLoss': inaction[f'competitiveLoss{y}'],
        'complianceRisk': inaction[f'complianceRisk{y}'],
        'total': inaction[f'inactionTotal{y}'],
    } for y in YEARS]

    if revenue['revenueEligible']:
        revenue_enablement = {
            'eligible': True,
            'revenueProxy': revenue['revenueProxy'],
            'timeToMarket': revenue['revenueTimeToMarket'],
            'customerExperience': revenue['revenueCustomerExperience'],
            'newCapability': revenue['revenueNewCapability'],
            'totalAnnualRevenue': revenue['revenueTotalAnnual'],
            'riskDiscount': benchmarks.constant('revenueRiskDiscount'),
        }
    else:
        revenue_enablement = {'eligible': False, 'processType': n['processType']}

    archetype_impact = None
    if n['projectArchetype']:
        ov = n['archetypeOverrides']
        archetype_impact = {
            'archetype': n['projectArchetype'],
            'label': ARCHETYPES[n['projectArchetype']]['label'],
            'overrides': dict(ov),
            'revenueImpact': ov.get('revenueImpact'),
            'riskReduction': ov.get('riskReduction'),
        }

    weights = {key: benchmarks.constant(cfg['weight']) for key, cfg in SCENARIOS.items()}

    return {
        'currentState': {
            'hourlyRate': core['hourlyRate'],
            'annualLaborCost': core['annualLaborCost'],
            'weeklyHours': core['weeklyHours'],
            'annualHours': core['annualHours'],
            'annualReworkCost': core['annualReworkCost'],
            'totalCurrentCost': core['totalCurrentCost'],
        },
        'benchmarks': {
            'automationPotential': core['automationPotential'],
            'industrySuccessRate': core['industrySuccessRate'],
            'toolReplacementRate': core['toolReplacementRate'],
        },
        'riskAdjustments': {
            'adoptionRate': core['adoptionRate'],
            'sponsorAdjustment': core['sponsorAdjustment'],
            'orgReadiness': core['orgReadiness'],
            'riskMultiplier': core['riskMultiplier'],
            'adjustedTimeline': core['adjustedTimeline'],
            'adjustedImplementationCost': core['realisticImplCost'],
        },
        'aiCostModel': {
            'aiSalary': core['aiSalary'],
            'implEngineers': core['implEngineers'],
            'implPMs': core['implPMs'],
            'implTimelineYears': core['implTimelineYears'],
            'implEngineeringCost': core['implEngineeringCost'],
            'implPMCost': core['implPMCost'],
            'implInfraCost': core['implInfraCost'],
            'implTrainingCost': core['implTrainingCost'],
            'computedImplCost': core['computedImplCost'],
            'realisticImplCost': core['realisticImplCost'],
            'budgetGap': core['budgetGap'],
            'ongoingAiHeadcount': core['ongoingAiHeadcount'],
            'ongoingAiLaborCost': core['ongoingAiLaborCost'],
            'monthlyApiVolume': core['monthlyApiVolume'],
            'monthlyApiCost': core['monthlyApiCost'],
            'annualApiCost': core['annualApiCost'],
            'annualLicenseCost': core['annualLicenseCost'],
            'annualAdjacentCost': core['annualAdjacentCost'],
            'coreOngoingCost': core['coreOngoingCost'],
            'modelRetrainingCost': core['modelRetrainingCost'],
            'annualComplianceCost': core['annualComplianceCost'],
            'retainedRetrainingCost': core['retainedRetrainingCost'],
            'techDebtCost': core['techDebtCost'],
            'cyberInsuranceCost': core['cyberInsuranceCost'],
            'computedOngoingCost': core['computedOngoingCost'],
            'baseOngoingCost': core['baseOngoingCost'],
            'ongoingCostsByYear': ongoing_by_year,
            'totalOngoing5Year': core['totalOngoing5Year'],
            'escalationSchedule': [row['costEscalation'] for row in sched],
        },
        'oneTimeCosts': {
            'displacedFTEs': core['displacedFTEs'],
            'retainedFTEs': core['retainedFTEs'],
            'rawDisplacedFTEs': core['rawDisplacedFTEs'],
            'maxHeadcountReduction': benchmarks.constant('maxHeadcountReduction'),
            'separationMultiplier': core['separationMultiplier'],
            'separationCostPerFTE': core['separationCostPerFTE'],
            'totalSeparationCost': core['totalSeparationCost'],
            'separationBreakdown': separation_breakdown,
            'separationByYear': [p['separationCost'] for p in base['projections']],
            'separationPhasing': [row['hrReduction'] for row in sched],
            'severanceWeeks': core['severanceWeeks'],
            'legalComplianceCost': core['legalComplianceCost'],
            'securityAuditCost': core['securityAuditCost'],
            'contingencyReserve': core['contingencyReserve'],
            'vendorSwitchingCost': core['vendorSwitchingCost'],
            'vendorSwitchingRate': core['vendorSwitchingRate'],
            'vendorsReplaced': n['vendorsReplaced'],
            'vendorTerminationCost': n['vendorTerminationCost'],
            'totalOneTimeCosts': core['totalOneTimeCosts'],
        },
        'hiddenCosts': {
            'changeManagement': core['changeManagement'],
            'culturalResistance': core['culturalResistance'],
            'dataCleanup': core['dataCleanup'],
            'integrationTesting': core['integrationTesting'],
            'productivityDip': core['productivityDip'],
            'totalHidden': core['totalHidden'],
        },
        'upfrontInvestment': core['upfrontInvestment'],
        'totalInvestment': core['totalInvestment'],
        'discountRate': core['discountRate'],
        'dcfYears': benchmarks.constant('dcfYears'),
        'savings': {
            'grossAnnualSavings': core['grossAnnualSavings'],
            'riskAdjustedSavings': core['riskAdjustedSavings'],
            'netAnnualSavings': core['netAnnualSavings'],
        },
        'valueBreakdown': {
            'headcount': {'gross': core['headcountGross'], 'riskAdjusted': core['headcountRiskAdjusted']},
            'efficiency': {'gross': core['efficiencyGross'], 'riskAdjusted': core['efficiencyRiskAdjusted']},
            'errorReduction': {'gross': core['errorReductionGross'], 'riskAdjusted': core['errorReductionRiskAdjusted']},
            'toolReplacement': {'gross': core['toolReplacementGross'], 'riskAdjusted': core['toolReplacementRiskAdjusted']},
            'totalGross': core['valueTotalGross'],
            'totalRiskAdjusted': core['valueTotalRiskAdjusted'],
            'perEmployeeGain': core['perEmployeeGain'],
            'enhancementPhaseAnnual': core['enhancementRiskAdjusted'],
            'headcountPhaseAnnual': core['headcountRiskAdjusted'],
            'ongoingAiCostYear1': core['baseOngoingCost'],
        },
        'opportunityCost': {
            'costOfWaiting12Months': inaction['costOfWaiting12Months'],
            'costOfWaiting24Months': inaction['costOfWaiting24Months'],
            'totalCost5Year': inaction['inactionTotal5Year'],
            'yearlyBreakdown': inaction_rows,
        },
        'revenueEnablement': revenue_enablement,
        'rdTaxCredit': {
            'eligible': revenue['rdEligible'],
            'qualifiedExpenses': revenue['rdQualifiedExpenses'],
            'federalCredit': revenue['rdFederalCredit'],
            'stateCredit': revenue['rdStateCredit'],
            'totalCredit': revenue['rdTotalCredit'],
            'companyState': n['companyState'],
            'federalRate': revenue['rdFederalRate'],
            'stateRate': revenue['rdStateRate'],
        },
        'thresholdAnalysis': {
            'breakevenRiskMultiplier': core['breakevenRiskMultiplier'],
            'currentRiskMultiplier': core['riskMultiplier'],
            'riskMargin': core['riskMargin'],
            'isViable': core['isViable'],
            'maxOngoingCost': core['maxOngoingCost'],
            'currentOngoingCost': core['baseOngoingCost'],
            'ongoingCostMargin': core['ongoingCostMargin'],
        },
        'phasedTimeline': phased,
        'scalabilityPremium': {
            'currentCost': core['totalCurrentCost'],
            'aiOngoingCost': core['baseOngoingCost'],
            'scenarios': [{
                'label': label,
                'traditionalCost': revenue[f'scale{label}TraditionalCost'],
                'aiCost': revenue[f'scale{label}AiCost'],
                'savings': revenue[f'scale{label}Savings'],
                'savingsPercent': revenue[f'scale{label}SavingsPercent'],
            } for label in benchmarks.keys('scaleFactors')],
        },
        'confidenceIntervals': _confidence_intervals(scenarios, sweep),
        'peerComparison': {
            'percentileRank': summary['percentileRank'],
            'peerMedian': summary['peerMedian'],
            'peerP25': summary['peerP25'],
            'peerP75': summary['peerP75'],
            'userROIC': base['rawRoic'],
            'vsMedian': summary['vsMedian'],
        },
        'scenarios': scenarios,
        'scenarioWeights': weights,
        'expectedNPV': summary['expectedNPV'],
        'expectedROIC': summary['expectedROIC'],
        'sensitivity': sensitivity,
        'extendedSensitivity': sweep,
        'vendorLockIn': {
            'level': core['vendorLockInLevel'],
            'switchingCost': core['vendorSwitchingCost'],
            'switchingRate': core['vendorSwitchingRate'],
            'escalationSchedule': [row['costEscalation'] for row in sched],
            'year5OngoingCost': core['year5OngoingCost'],
            'totalOngoing5Year': core['totalOngoing5Year'],
            'vendorsReplaced': n['vendorsReplaced'],
            'vendorTerminationCost': n['vendorTerminationCost'],
        },
        'confidenceLevel': core['confidenceLevel'],
        'capitalEfficiency': {
            'wacc': summary['wacc'],
            'nopat': summary['nopat'],
            'eva': summary['eva'],
            'cashOnCash': summary['cashOnCash'],
            'roic': base['rawRoic'],
            'roicWaccSpread': summary['roicWaccSpread'],
            'createsValue': summary['createsValue'],
            'totalInvestment': core['totalInvestment'],
            'effectiveTaxRate': benchmarks.constant('effectiveTaxRate'),
        },
        'archetypeImpact': archetype_impact,
        'benchmarkVersion': benchmarks.version,
    }
