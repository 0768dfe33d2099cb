"""
ROI Navigator - Recommendation Engine
Verdict from the scenario NPVs, plus risk mitigations from readiness inputs.
"""
import math

VERDICTS = {
    'STRONG': {
        'headline': 'Strong case to proceed',
        'summary': 'Even under worst-case assumptions, this investment generates positive returns. '
                   'The economics support moving forward.',
        'steps': [
            None,  # sponsor step, filled in per result
            'Begin vendor evaluation with clear selection criteria',
            'Allocate change management budget (minimum 15% of implementation cost)',
            'Define 90-day pilot scope with measurable success criteria',
            'Establish measurement framework before implementation begins',
        ],
    },
    'MODERATE': {
        'headline': 'Favorable case with manageable risk',
        'summary': 'Base case projections are positive, but downside scenarios show risk. '
                   'A phased approach is recommended.',
        'steps': [
            'Run a limited pilot with a focused team and constrained budget',
            'Address data readiness gaps before scaling',
            'Build a change management plan with clear milestones',
            'Re-evaluate after 90-day pilot with actual performance data',
            'Plan for scale only after pilot validates assumptions',
        ],
    },
    'CAUTIOUS': {
        'headline': 'Proceed with caution',
        'summary': 'Only the optimistic scenario shows positive returns. Consider a smaller pilot '
                   'to validate assumptions before committing full budget.',
        'steps': [
            'Consider alternative approaches or reduced scope',
            'Invest in data readiness and process standardization first',
            'Build executive buy-in through education and small wins',
            'Run a minimal pilot ($25K-$50K) to gather real performance data',
            'Revisit the full business case after 90 days of pilot data',
        ],
    },
    'WEAK': {
        'headline': 'Current economics do not support this investment',
        'summary': 'At this scale and readiness level, the investment is unlikely to generate positive '
                   'returns. Consider foundational improvements first.',
        'steps': [
            'Consider alternative approaches to process improvement',
            'Invest in data readiness and infrastructure first',
            'Build executive buy-in with education about AI capabilities',
            'Address change management fundamentals before technology investment',
            'Revisit in 6-12 months after foundational improvements',
        ],
    },
}

MITIGATIONS = {
    'changeReadiness': {
        'risk': 'Low change readiness',
        'impact': 'High - reduces realized value by 45-60%',
        'mitigation': 'Invest in change management before technology. Communicate the "why" clearly, '
                      'identify champions, and create quick wins.',
    },
    'dataReadiness': {
        'risk': 'Poor data readiness',
        'impact': 'High - adds 25-40% to timeline and 20-30% to costs',
        'mitigation': 'Prioritize data cleanup and standardization. Consider this a prerequisite '
                      'investment, not part of the AI budget.',
    },
    'execSponsor': {
        'risk': 'No executive sponsor',
        'impact': 'Critical - projects without sponsorship fail 2x more often',
        'mitigation': 'Use this analysis to build the executive case. Focus on risk-adjusted ROI '
                      'and the cost of inaction.',
    },
    'errorRate': {
        'risk': 'High current error rate',
        'impact': 'Medium - AI can help but may inherit process flaws',
        'mitigation': 'Standardize the process before automating. AI amplifies existing processes, '
                      'good or bad.',
    },
}

HIGH_ERROR_RATE = 0.225


def format_compact(value):
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return '$0'
    v = abs(value)
    if v >= 1_000_000:
        return f"${v / 1_000_000:.1f}M"
    if v >= 1_000:
        return f"${v / 1_000:.0f}K"
    return f"${v:.0f}"


def get_recommendation(results):
    scenarios = results['scenarios']
    if scenarios['conservative']['npv'] > 0:
        verdict = 'STRONG'
    elif scenarios['base']['npv'] > 0:
        verdict = 'MODERATE'
    elif scenarios['optimistic']['npv'] > 0:
        verdict = 'CAUTIOUS'
    else:
        verdict = 'WEAK'

    entry = VERDICTS[verdict]
    summary = entry['summary']
    steps = list(entry['steps'])
    if verdict == 'STRONG':
        opp = results.get('opportunityCost')
        if opp:
            summary += (f" Delaying 12 months would cost an estimated {format_compact(opp['costOfWaiting12Months'])}"
                        f" in forgone savings, wage inflation, and competitive erosion.")
        if results['riskAdjustments']['sponsorAdjustment'] < 1:
            steps[0] = 'Secure executive sponsorship - this is the single biggest risk factor'
        else:
            steps[0] = 'Confirm executive sponsor commitment and governance structure'

    return {'verdict': verdict, 'headline': entry['headline'], 'summary': summary, 'steps': steps}


def get_risk_mitigations(normalized):
    """Mitigations for a normalized input vector (see normalize_inputs)."""
    out = []
    if normalized['changeReadiness'] <= 2:
        out.append(dict(MITIGATIONS['changeReadiness']))
    if normalized['dataReadiness'] <= 2:
        out.append(dict(MITIGATIONS['dataReadiness']))
    if not normalized['execSponsor']:
        out.append(dict(MITIGATIONS['execSponsor']))
    if normalized['errorRate'] >= HIGH_ERROR_RATE:
        out.append(dict(MITIGATIONS['errorRate']))
    return out
