"""
ROI Navigator - Model Definition
The ROI model as formula graphs. Every closed-form quantity the engine reports
is a node here; calculations.py evaluates the graphs and workbook.py writes
them out as live spreadsheet formulas.

Graphs, in evaluation order:
  core        benchmarks, risk, timeline, current state, FTEs, cost stacks, value stack
  projection  one 5-year cash-flow block per scenario multiplier
  inaction    compounding cost of waiting
  revenue     R&D credit, revenue enablement, scalability premium (informational)
  summary     expected values, peer percentile, capital efficiency
"""
from functools import lru_cache

from engines.formulas import (
    Graph, Ref, Lookup, Member, C, SUM, CLAMP,
    MIN, MAX, ROUND, CEILING, FLOOR, LEFT, IF, AND, EQ, NE, LE, GT, GE,
)

YEARS = [1, 2, 3, 4, 5]
SCENARIOS = {
    'conservative': {'label': 'Conservative', 'multiplier': 'conservativeMultiplier', 'weight': 'conservativeWeight', 'timelineFactor': 1.30},
    'base': {'label': 'Base Case', 'multiplier': 'baseMultiplier', 'weight': 'baseWeight', 'timelineFactor': 1.0},
    'optimistic': {'label': 'Optimistic', 'multiplier': 'optimisticMultiplier', 'weight': 'optimisticWeight', 'timelineFactor': 0.80},
}
OVERRIDABLE = ('automationPotential', 'toolReplacementRate')

# Generic input bounds; applied after archetype overrides are merged.
INPUT_BOUNDS = {
    'teamSize': (1, 100000),
    'avgSalary': (10000, 10000000),
    'hoursPerWeek': (1, 80),
    'errorRate': (0, 1),
    'currentToolCosts': (0, 1e9),
    'implementationBudget': (0, 1e10),
    'expectedTimeline': (0, 120),
    'ongoingAnnualCost': (0, 1e9),
    'vendorsReplaced': (0, 1000),
    'vendorTerminationCost': (0, 1e9),
}

USD, PCT, NUM, MULT = '$#,##0', '0.0%', '#,##0.0', '0.00'

_i = Ref  # inputs read by name


def clamp_input(name, expr):
    lo, hi = INPUT_BOUNDS[name]
    return CLAMP(expr, lo, hi)


def _sched(field, year):
    return Lookup('yearSchedule', [year], field)


@lru_cache(maxsize=None)
def build_core_graph(overrides=frozenset()):
    """Single-year model. `overrides` names the benchmark rates supplied as
    `<name>Override` inputs (archetype mappings) instead of table lookups."""
    g = Graph('core')
    industry, process, size = _i('industry'), _i('processType'), _i('companySize')
    team, salary, sponsor = _i('teamSize'), _i('avgSalary'), _i('execSponsor')
    data_ready = _i('dataReadiness')

    g.section('Industry Benchmarks')
    if 'automationPotential' in overrides:
        ap = g.define('automationPotential', _i('automationPotentialOverride'), 'Automation potential (archetype)', PCT)
    else:
        ap = g.define('automationPotential', Lookup('automationPotential', [industry, process]), 'Automation potential', PCT)
    success = g.define('industrySuccessRate', Lookup('industries', [industry], 'successRate'), 'Industry success rate', PCT)
    g.define('competitivePenaltyRate', Lookup('industries', [industry], 'competitivePenaltyRate'), 'Competitive penalty rate', PCT)
    g.define('complianceRiskRate', Lookup('industries', [industry], 'complianceRiskRate'), 'Compliance risk escalation', PCT)

    g.section('Risk Adjustments')
    adoption = g.define('adoptionRate', Lookup('readiness', [_i('changeReadiness')], 'adoptionRate'), 'Adoption rate (change readiness)', PCT)
    sponsor_adj = g.define('sponsorAdjustment', IF(sponsor, 1, 0.85), 'Sponsor adjustment', MULT)
    org = g.define('orgReadiness', adoption * sponsor_adj, 'Org readiness', PCT)
    risk = g.define('riskMultiplier', (org + success) / 2, 'Risk multiplier', PCT)

    g.section('Discount Rate & Timeline')
    g.define('discountRate', Lookup('companySizes', [size], 'discountRate'), 'Discount rate (WACC proxy)', PCT)
    dtm = g.define('dataTimelineMultiplier', Lookup('readiness', [data_ready], 'timelineMultiplier'), 'Data timeline multiplier', MULT)
    sm = g.define('sizeMultiplier', Lookup('companySizes', [size], 'sizeMultiplier'), 'Size multiplier', MULT)
    stm = g.define('sponsorTimelineMultiplier', IF(sponsor, 1, 1.25), 'Sponsor timeline multiplier', MULT)
    adj_tl = g.define('adjustedTimeline', CEILING(_i('expectedTimeline') * dtm * sm * stm, 1), 'Adjusted timeline (months)', '0')
    years = g.define('implTimelineYears', adj_tl / 12, 'Implementation timeline (years)', MULT)

    g.section('Current State')
    g.define('hourlyRate', salary / C('hoursPerYear'), 'Hourly rate', '$#,##0.00')
    labor = g.define('annualLaborCost', team * salary, 'Annual labor cost', USD)
    weekly = g.define('weeklyHours', team * _i('hoursPerWeek'), 'Weekly hours', '#,##0')
    g.define('annualHours', weekly * 52, 'Annual hours', '#,##0')
    rework = g.define('annualReworkCost', labor * _i('errorRate'), 'Annual rework cost', USD)
    tools = _i('currentToolCosts')
    current = g.define('totalCurrentCost', labor + rework + tools, 'Total current cost', USD)

    g.section('FTE Displacement')
    raw_disp = g.define('rawDisplacedFTEs', ROUND(team * ap * adoption, 0), 'Raw displaced FTEs', '0')
    max_disp = g.define('maxDisplacedFTEs', FLOOR(team * C('maxHeadcountReduction'), 1), 'Max displaced FTEs (75% ceiling)', '0')
    displaced = g.define('displacedFTEs', MIN(raw_disp, max_disp), 'Displaced FTEs', '0')
    retained = g.define('retainedFTEs', team - displaced, 'Retained FTEs', '0')

    g.section('Implementation Team')
    ai_sal = g.define('aiSalary', Lookup('aiTeamSalary', [_i('teamLocation')]), 'AI team salary (loaded)', USD)
    scope_min = g.define('scopeMinEngineers', MAX(1, CEILING(team / 12, 1)), 'Scope minimum engineers', '0')
    stated_tl = _i('expectedTimeline')
    pressure = g.define('timelinePressure', IF(LE(stated_tl, 3), 1.5, IF(LE(stated_tl, 6), 1.2, 1)), 'Timeline pressure', MULT)
    data_hc = g.define('dataHeadcountMultiplier', IF(LE(data_ready, 2), 1.3, IF(EQ(data_ready, 3), 1.1, 1)), 'Data headcount multiplier', MULT)
    max_team = g.define('maxTeamSize', Lookup('companySizes', [size], 'maxTeamSize'), 'Max implementation team', '0')
    raw_eng = g.define('rawEngineers', CEILING(scope_min * pressure * data_hc, 1), 'Raw engineers', '0')
    eng = g.define('implEngineers', MIN(raw_eng, max_team), 'Implementation engineers', '0')
    pms = g.define('implPMs', MAX(0.5, CEILING(eng / 5, 1)), 'Implementation PMs', '0.0')

    g.section('Implementation Cost')
    eng_cost = g.define('implEngineeringCost', eng * ai_sal * years, 'Engineering cost', USD)
    pm_cost = g.define('implPMCost', pms * (ai_sal * C('pmSalaryFactor')) * years, 'PM cost', USD)
    infra = g.define('implInfraCost', (eng_cost + pm_cost) * C('infraCostRate'), 'Infrastructure', USD)
    training = g.define('implTrainingCost', (eng_cost + pm_cost) * C('trainingCostRate'), 'Training', USD)
    computed = g.define('computedImplCost', eng_cost + pm_cost + infra + training, 'Computed implementation cost', USD)
    dcm = g.define('dataCostMultiplier', Lookup('readiness', [data_ready], 'costMultiplier'), 'Data cost multiplier', MULT)
    user_adj = g.define('userAdjustedImplCost', _i('implementationBudget') * dcm, 'Stated budget (data-adjusted)', USD)
    impl = g.define('realisticImplCost', MAX(user_adj, computed), 'Realistic implementation cost', USD)
    g.define('budgetGap', computed - user_adj, 'Budget gap', USD)

    g.section('Ongoing Annual Cost')
    ong_hc = g.define('ongoingAiHeadcount', MAX(0.5, ROUND(eng * 0.25 * 2, 0) / 2), 'Ongoing AI headcount', '0.0')
    ong_labor = g.define('ongoingAiLaborCost', ong_hc * ai_sal, 'Ongoing AI labor', USD)
    rph = g.define('requestsPerHour', Lookup('processTypes', [process], 'requestsPerHour'), 'Requests per person-hour', '0')
    volume = g.define('monthlyApiVolume', team * _i('hoursPerWeek') * C('weeksPerMonth') * rph, 'Monthly API volume', '#,##0')
    per1k = g.define('apiCostPer1k', Lookup('processTypes', [process], 'apiCostPer1k'), 'API cost per 1K requests', USD)
    monthly_api = g.define('monthlyApiCost', volume / 1000 * per1k, 'Monthly API cost', USD)
    api = g.define('annualApiCost', monthly_api * 12, 'Annual API cost', USD)
    license_ = g.define('annualLicenseCost', Lookup('companySizes', [size], 'annualLicense'), 'Annual platform license', USD)
    adjacent = g.define('annualAdjacentCost', license_ * C('adjacentProductRate'), 'Adjacent products', USD)
    retrain = g.define('modelRetrainingCost', impl * C('modelRetrainingRate'), 'Model retraining', USD)
    compliance = g.define('annualComplianceCost', Lookup('companySizes', [size], 'complianceCost'), 'Annual compliance', USD)
    retained_rt = g.define('retainedRetrainingCost', retained * salary * C('retainedRetrainingRate'), 'Retained staff retraining', USD)
    debt = g.define('techDebtCost', impl * C('techDebtRate'), 'Tech debt', USD)
    cyber = g.define('cyberInsuranceCost', Lookup('companySizes', [size], 'cyberInsuranceCost'), 'Cyber insurance increase', USD)
    core_ong = g.define('coreOngoingCost', ong_labor + api + license_ + adjacent, 'Core ongoing cost', USD)
    computed_ong = g.define('computedOngoingCost', core_ong + retrain + compliance + retained_rt + debt + cyber, 'Computed ongoing cost', USD)
    base_ong = g.define('baseOngoingCost', MAX(_i('ongoingAnnualCost'), computed_ong), 'Base ongoing cost (year 1)', USD)

    g.section('One-Time Costs')
    sep_mult = g.define('separationMultiplier', Lookup('companySizes', [size], 'separationMultiplier'), 'Separation multiplier', MULT)
    per_fte = g.define('separationCostPerFTE', salary * sep_mult, 'Separation cost per FTE', USD)
    separation = g.define('totalSeparationCost', displaced * per_fte, 'Total separation cost', USD)
    g.define('severanceWeeks', Lookup('companySizes', [size], 'severanceWeeks'), 'Severance weeks', '0')
    legal = g.define('legalComplianceCost', Lookup('companySizes', [size], 'legalCost'), 'Legal & compliance review', USD)
    security = g.define('securityAuditCost', Lookup('companySizes', [size], 'securityCost'), 'Security & privacy audit', USD)
    contingency = g.define('contingencyReserve', impl * C('contingencyRate'), 'Contingency reserve', USD)
    switch_rate = g.define('vendorSwitchingRate', Lookup('companySizes', [size], 'vendorSwitchingRate'), 'Vendor switching rate', PCT)
    g.define('vendorSwitchingCost', impl * switch_rate, 'Vendor switching cost', USD)
    one_time = g.define('totalOneTimeCosts', legal + security + contingency + _i('vendorTerminationCost'), 'Total one-time costs', USD)

    g.section('Hidden Costs')
    change = g.define('changeManagement', impl * C('changeManagementRate'), 'Change management', USD)
    culture = g.define('culturalResistance', impl * C('culturalResistanceRate'), 'Cultural resistance', USD)
    cleanup_rate = g.define('dataCleanupRate', IF(LE(data_ready, 2), 0.25, IF(EQ(data_ready, 3), 0.1, 0)), 'Data cleanup rate', PCT)
    cleanup = g.define('dataCleanup', impl * cleanup_rate, 'Data cleanup', USD)
    testing = g.define('integrationTesting', impl * C('integrationTestingRate'), 'Integration testing', USD)
    dip = g.define('productivityDip', labor / 12 * C('productivityDipMonths') * C('productivityDipRate'), 'Productivity dip', USD)
    hidden = g.define('totalHidden', change + culture + cleanup + testing + dip, 'Total hidden costs', USD)

    g.section('Investment')
    upfront = g.define('upfrontInvestment', impl + hidden + one_time, 'Upfront investment', USD)
    total_inv = g.define('totalInvestment', upfront + separation, 'Total investment', USD)

    g.section('Value Creation')
    if 'toolReplacementRate' in overrides:
        trr = g.define('toolReplacementRate', _i('toolReplacementRateOverride'), 'Tool replacement rate (archetype)', PCT)
    else:
        trr = g.define('toolReplacementRate', Lookup('processTypes', [process], 'toolReplacementRate'), 'Tool replacement rate', PCT)
    hc_gross = g.define('headcountGross', displaced * salary, 'Headcount value (gross)', USD)
    g.define('headcountRiskAdjusted', hc_gross * risk, 'Headcount value (risk-adj)', USD)
    eff_gross = g.define('efficiencyGross', MAX(0, labor * ap - hc_gross), 'Efficiency value (gross)', USD)
    g.define('efficiencyRiskAdjusted', eff_gross * risk, 'Efficiency value (risk-adj)', USD)
    err_gross = g.define('errorReductionGross', rework * ap, 'Error reduction (gross)', USD)
    g.define('errorReductionRiskAdjusted', err_gross * risk, 'Error reduction (risk-adj)', USD)
    tool_gross = g.define('toolReplacementGross', tools * trr, 'Tool replacement (gross)', USD)
    g.define('toolReplacementRiskAdjusted', tool_gross * risk, 'Tool replacement (risk-adj)', USD)
    enh_gross = g.define('enhancementGross', eff_gross + err_gross + tool_gross, 'Enhancement value (gross)', USD)
    enh_ra = g.define('enhancementRiskAdjusted', enh_gross * risk, 'Enhancement value (risk-adj)', USD)
    total_gross = g.define('valueTotalGross', hc_gross + eff_gross + err_gross + tool_gross, 'Total value (gross)', USD)
    g.define('valueTotalRiskAdjusted', total_gross * risk, 'Total value (risk-adj)', USD)
    g.define('perEmployeeGain', enh_ra / team, 'Per-employee gain (year 1)', USD)

    g.section('Annual Savings')
    gross = g.define('grossAnnualSavings', current * ap, 'Gross annual savings', USD)
    risk_adj = g.define('riskAdjustedSavings', gross * risk, 'Risk-adjusted savings', USD)
    g.define('netAnnualSavings', risk_adj - base_ong, 'Net annual savings', USD)

    g.section('Threshold Analysis')
    rate = _i('discountRate')
    pv = g.define('pvFactor', SUM([_sched('adoptionRamp', y) / (1 + rate) ** y for y in YEARS]), 'Ramp-weighted PV factor', '0.000')
    has_savings = GT(gross, 0)
    breakeven = g.define('breakevenRiskMultiplier', IF(has_savings, (upfront / pv + base_ong) / gross, None), 'Breakeven risk multiplier', PCT)
    g.define('riskMargin', IF(has_savings, risk - breakeven, None), 'Risk margin', PCT)
    g.define('isViable', IF(has_savings, GT(risk, breakeven), False), 'Viable at current risk', '@')
    max_ong = g.define('maxOngoingCost', risk_adj - upfront / pv, 'Max tolerable ongoing cost', USD)
    g.define('ongoingCostMargin', max_ong - base_ong, 'Ongoing cost margin', USD)

    g.section('Vendor Lock-In & Confidence')
    g.define('vendorLockInLevel', IF(AND(GT(impl, 500000), EQ(process, 'Workflow Automation')), 'High',
                                     IF(GT(impl, 250000), 'Medium', 'Low')), 'Vendor lock-in level', '@')
    g.define('year5OngoingCost', base_ong * _sched('cumulativeEscalation', 5), 'Year-5 ongoing cost', USD)
    g.define('totalOngoing5Year', base_ong * SUM([_sched('cumulativeEscalation', y) for y in YEARS]), '5-year ongoing cost', USD)
    avg_ready = g.define('avgReadiness', (_i('changeReadiness') + data_ready) / 2, 'Average readiness', '0.0')
    g.define('confidenceLevel', IF(AND(GE(avg_ready, 4), sponsor), 'High', IF(GE(avg_ready, 3), 'Moderate', 'Conservative')),
             'Confidence level', '@')
    return g


@lru_cache(maxsize=None)
def build_projection_graph(ramp='adoptionRamp'):
    """5-year cash flows for one scenario. Reads `scenarioMultiplier` plus
    core outputs; netCashFlow0..5 form the IRR series. `ramp` names the
    yearSchedule column driving enhancement adoption."""
    g = Graph('projection')
    m = _i('scenarioMultiplier')
    upfront = _i('upfrontInvestment')
    rate = _i('discountRate')

    g.section('Cash Flows')
    ncf = {0: g.define('netCashFlow0', -upfront, 'Net cash flow', USD, metric='netCashFlow', year=0)}
    cum = {0: g.define('netCumulative0', ncf[0], 'Cumulative net', USD, metric='netCumulative', year=0)}
    for y in YEARS:
        wg = g.define(f'wageGrowth{y}', (1 + C('wageInflationRate')) ** (y - 1), 'Wage growth factor', '0.000', metric='wageGrowth', year=y)
        enh = g.define(f'enhancementSavings{y}', _i('enhancementRiskAdjusted') * _sched(ramp, y) * m * wg,
                       'Enhancement savings', USD, metric='enhancementSavings', year=y)
        red = g.define(f'cumulativeReduction{y}', _sched('cumulativeHRReduction', y), 'Cumulative HR reduction', PCT,
                       metric='cumulativeReduction', year=y)
        hc = g.define(f'headcountSavings{y}', _i('headcountRiskAdjusted') * red * m * wg, 'Headcount savings', USD,
                      metric='headcountSavings', year=y)
        gross = g.define(f'grossSavings{y}', enh + hc, 'Gross savings', USD, metric='grossSavings', year=y)
        sep = g.define(f'separationCost{y}', _i('totalSeparationCost') * _sched('hrReduction', y), 'Separation cost', USD,
                       metric='separationCost', year=y)
        ong = g.define(f'ongoingCost{y}', _i('baseOngoingCost') * _sched('cumulativeEscalation', y), 'Ongoing AI cost', USD,
                       metric='ongoingCost', year=y)
        ncf[y] = g.define(f'netCashFlow{y}', gross - sep - ong, 'Net cash flow', USD, metric='netCashFlow', year=y)
        cum[y] = g.define(f'netCumulative{y}', cum[y - 1] + ncf[y], 'Cumulative net', USD, metric='netCumulative', year=y)

    g.section('Metrics')
    g.define('npv', ncf[0] + SUM([ncf[y] / (1 + rate) ** y for y in YEARS]), 'NPV', USD)
    total = g.define('totalNetReturn', SUM([ncf[y] for y in YEARS]), 'Total net return (years 1-5)', USD)
    total_inv = _i('totalInvestment')
    raw = g.define('rawRoic', IF(GT(total_inv, 0), (total - upfront) / total_inv, 0), 'ROIC (uncapped)', PCT)
    roic = g.define('roic', MAX(-C('maxRoic'), MIN(C('maxRoic'), raw)), 'ROIC', PCT)
    g.define('roicCapped', NE(roic, raw), 'ROIC capped', '@')
    g.define('avgNetSavings', total / 5, 'Average annual net', USD)

    # First month the cumulative position reaches zero, interpolated inside the crossing year.
    payback = 61
    for y in reversed(YEARS):
        crossing = 12 * (y - 1) + 12 * -cum[y - 1] / ncf[y]
        payback = IF(GE(cum[y], 0), crossing, payback)
    pb = g.define('paybackMonths', IF(GE(cum[0], 0), 0, payback), 'Payback (months)', '0.0')
    g.define('noBreakEven', GT(pb, 60), 'No break-even within 60 months', '@')
    return g


@lru_cache(maxsize=None)
def build_inaction_graph():
    g = Graph('inaction')
    labor, tools = _i('annualLaborCost'), _i('currentToolCosts')
    current, net = _i('totalCurrentCost'), _i('netAnnualSavings')

    g.section('Cost of Inaction')
    totals = {}
    for y in YEARS:
        wage = g.define(f'wageInflation{y}', labor * ((1 + C('wageInflationRate')) ** y - 1), 'Wage inflation', USD,
                        metric='wageInflation', year=y)
        creep = g.define(f'legacyCreep{y}', tools * ((1 + C('legacyMaintenanceCreep')) ** y - 1), 'Legacy maintenance creep', USD,
                         metric='legacyCreep', year=y)
        forgone = g.define(f'forgoneSavings{y}', net * _sched('adoptionRamp', y), 'Forgone net savings', USD,
                           metric='forgoneSavings', year=y)
        compet = g.define(f'competitiveLoss{y}', current * ((1 + _i('competitivePenaltyRate')) ** y - 1), 'Competitive loss', USD,
                          metric='competitiveLoss', year=y)
        compl = g.define(f'complianceRisk{y}', current * ((1 + _i('complianceRiskRate')) ** y - 1), 'Compliance risk', USD,
                         metric='complianceRisk', year=y)
        totals[y] = g.define(f'inactionTotal{y}', wage + creep + forgone + compet + compl, 'Total', USD,
                             metric='inactionTotal', year=y)

    g.section('Totals')
    g.define('costOfWaiting12Months', totals[1], 'Cost of waiting 12 months', USD)
    g.define('costOfWaiting24Months', totals[1] + totals[2], 'Cost of waiting 24 months', USD)
    g.define('inactionTotal5Year', SUM([totals[y] for y in YEARS]), '5-year cost of inaction', USD)
    return g


@lru_cache(maxsize=None)
def build_revenue_scale_graph():
    g = Graph('revenueScale')
    impl, current, risk = _i('realisticImplCost'), _i('totalCurrentCost'), _i('riskMultiplier')
    industry = _i('industry')

    g.section('R&D Tax Credit (informational)')
    eligible = g.define('rdEligible', EQ(LEFT(_i('teamLocation'), 2), 'US'), 'US-based team', '@')
    qualified = g.define('rdQualifiedExpenses', impl * C('rdQualificationRate'), 'Qualified expenses', USD)
    g.define('rdFederalRate', C('federalRdRate'), 'Federal credit rate', PCT)
    federal = g.define('rdFederalCredit', IF(eligible, qualified * C('federalRdRate'), 0), 'Federal credit', USD)
    state_rate = g.define('rdStateRate', Lookup('stateRdCredit', [_i('companyState')]), 'State credit rate', PCT)
    state = g.define('rdStateCredit', IF(eligible, qualified * state_rate, 0), 'State credit', USD)
    g.define('rdTotalCredit', federal + state, 'Total R&D credit', USD)

    g.section('Revenue Enablement (informational)')
    rev_ok = g.define('revenueEligible', Member('revenueEligibleProcesses', _i('processType')), 'Revenue-eligible process', '@')
    proxy = g.define('revenueProxy', current * C('revenueProxyMultiple'), 'Revenue proxy', USD)
    parts = []
    for field, label in (('timeToMarket', 'Time-to-market'), ('customerExperience', 'Customer experience'),
                         ('newCapability', 'New capability')):
        uplift = Lookup('industries', [industry], 'revenueUplift', field)
        parts.append(g.define(f'revenue{field[0].upper()}{field[1:]}',
                              IF(rev_ok, proxy * uplift * C('revenueRiskDiscount') * risk, 0), label, USD))
    g.define('revenueTotalAnnual', SUM(parts), 'Total annual revenue', USD)

    g.section('Scalability Premium')
    ongoing = _i('baseOngoingCost')
    for label, volume in (('2x', 2), ('3x', 3)):
        trad = g.define(f'scale{label}TraditionalCost', current * volume, f'{label} traditional cost', USD)
        ai = g.define(f'scale{label}AiCost', ongoing * (1 + Lookup('scaleFactors', [label])), f'{label} AI cost', USD)
        saved = g.define(f'scale{label}Savings', trad - ai, f'{label} savings', USD)
        g.define(f'scale{label}SavingsPercent', IF(GT(trad, 0), saved / trad, 0), f'{label} savings %', PCT)
    return g


@lru_cache(maxsize=None)
def build_summary_graph():
    """Cross-scenario results. Reads npv<Scenario>, roic<Scenario>,
    baseRawRoic, baseTotalNetReturn and baseNetCashFlow3."""
    g = Graph('summary')
    g.section('Expected Value')
    g.define('expectedNPV', SUM([C(s['weight']) * _i('npv' + k.capitalize()) for k, s in SCENARIOS.items()]), 'Expected NPV', USD)
    g.define('expectedROIC', SUM([C(s['weight']) * _i('roic' + k.capitalize()) for k, s in SCENARIOS.items()]), 'Expected ROIC', PCT)

    g.section('Peer Comparison')
    roic = _i('baseRawRoic')
    peer = [_i('industry'), _i('companySize')]
    med = g.define('peerMedian', Lookup('peerBenchmarks', peer, 'medianROIC'), 'Peer median ROIC', PCT)
    p25 = g.define('peerP25', Lookup('peerBenchmarks', peer, 'p25'), 'Peer 25th percentile', PCT)
    p75 = g.define('peerP75', Lookup('peerBenchmarks', peer, 'p75'), 'Peer 75th percentile', PCT)
    rank = IF(LE(roic, p25), MAX(5, roic / p25 * 25),
              IF(LE(roic, med), 25 + (roic - p25) / (med - p25) * 25,
                 IF(LE(roic, p75), 50 + (roic - med) / (p75 - med) * 25,
                    MIN(95, 75 + (roic - p75) / (p75 * 0.5) * 20))))
    g.define('percentileRank', ROUND(rank, 0), 'Percentile rank', '0')
    g.define('vsMedian', roic - med, 'ROIC vs peer median', PCT)

    g.section('Capital Efficiency')
    wacc = g.define('wacc', _i('discountRate'), 'WACC', PCT)
    nopat = g.define('nopat', _i('baseTotalNetReturn') / 5 * (1 - C('effectiveTaxRate')), 'NOPAT (annualized)', USD)
    total_inv = _i('totalInvestment')
    g.define('eva', nopat - total_inv * wacc, 'Economic value added', USD)
    g.define('cashOnCash', IF(GT(total_inv, 0), _i('baseNetCashFlow3') / total_inv, 0), 'Cash-on-cash (year 3)', PCT)
    g.define('roicWaccSpread', roic - wacc, 'ROIC - WACC spread', PCT)
    g.define('createsValue', GT(roic, wacc), 'Creates value', '@')
    return g
