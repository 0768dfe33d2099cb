"""
ROI Navigator - Archetype Input Registry
Twelve project archetypes, each with 8 bounded operational inputs and a set of
computed mappings that translate those inputs into overrides for the generic
calculation inputs (automation potential, error rate, weekly hours, ...).

Each mapping is one formula-graph expression: evaluated here for the engine,
rendered with {inputKey} placeholders for display, and emitted with cell
references in the workbook Inputs tab.
"""
import logging
import math

from engines.formulas import Ref, Scope, NameRefs, MIN, MAX, ROUND, IF, GT

# Mapping targets that feed the engine directly; the rest are informational.
ENGINE_TARGETS = ('automationPotential', 'errorRate', 'hoursPerWeek', 'toolReplacementRate')
INFO_TARGETS = ('revenueImpact', 'riskReduction')


def num_input(key, label, default, min=0, max=10000000, format='#,##0', note=''):
    return {'key': key, 'label': label, 'type': 'number', 'default': default,
            'min': min, 'max': max, 'format': format, 'note': note}


def pct_input(key, label, default, min=0, max=1, format='0.0%', note=''):
    return {'key': key, 'label': label, 'type': 'percent', 'default': default,
            'min': min, 'max': max, 'format': format, 'note': note}


def scale_input(key, label, default=3, note='1=Low, 5=High'):
    return {'key': key, 'label': label, 'type': 'scale', 'default': default,
            'min': 1, 'max': 5, 'format': '0', 'note': note}


# ── Mapping constructors: the [0,1] and >0 guarantees are part of the formula ──

def automation(cap, expr):
    return {'mapsTo': 'automationPotential', 'expr': MAX(0, MIN(cap, expr))}


def hours(expr):
    return {'mapsTo': 'hoursPerWeek', 'expr': MAX(1, ROUND(expr, 0))}


def maps(target, expr, note=''):
    return {'mapsTo': target, 'expr': expr, 'note': note}


i = Ref

# ══════════════════════════════════════════════════════════════
#  ARCHETYPE SCHEMAS
# ══════════════════════════════════════════════════════════════
ARCHETYPE_SCHEMAS = [
    {
        'id': 'internal-process-automation', 'label': 'Internal Process Automation',
        'processType': 'Workflow Automation',
        'description': 'Automate internal workflows, document handling, and back-office operations',
        'inputs': [
            num_input('processVolume', 'Process volume (transactions/month)', 5000, max=1000000, note='Monthly volume of transactions processed'),
            num_input('handlingTimeMin', 'Avg handling time (minutes)', 15, min=1, max=480, note='Minutes per transaction currently'),
            pct_input('errorRate', 'Current error/rework rate', 0.08, note='Fraction requiring rework or correction'),
            num_input('costPerError', 'Cost per error ($)', 150, max=50000, format='$#,##0', note='Avg cost to fix one error'),
            pct_input('pctAutomatable', '% of steps automatable', 0.65, note='Fraction of process steps AI can handle'),
            scale_input('integrationComplexity', 'Integration complexity (1-5)', note='1=Single system, 5=Many legacy integrations'),
            pct_input('humanInLoopPct', 'Human-in-the-loop %', 0.20, note='Fraction of cases requiring human review'),
            scale_input('processCriticality', 'Process criticality (1-5)', note='1=Nice-to-have, 5=Mission-critical'),
        ],
        'mappings': [
            automation(0.85, i('pctAutomatable') * (1 - i('humanInLoopPct')) * (1 - (i('integrationComplexity') - 1) * 0.05)),
            maps('errorRate', i('errorRate')),
            hours(i('processVolume') * i('handlingTimeMin') / 60 / 4.33),
        ],
    },
    {
        'id': 'customer-facing-ai', 'label': 'Customer-Facing AI',
        'processType': 'Customer Communication',
        'description': 'AI-powered customer interactions, support, and personalized experiences',
        'inputs': [
            num_input('ticketsPerMonth', 'Support tickets/month', 8000, max=5000000, note='Total inbound support volume'),
            num_input('resolutionTimeMin', 'Avg resolution time (minutes)', 25, min=1, max=480, note='Time to resolve a ticket'),
            num_input('csatScore', 'Current CSAT (1-100)', 72, min=1, max=100, format='0', note='Customer satisfaction score'),
            pct_input('churnRate', 'Annual churn rate', 0.12, note='Customer attrition rate'),
            num_input('revenuePerUser', 'Revenue per user/month ($)', 150, max=100000, format='$#,##0', note='Monthly ARPU'),
            pct_input('deflectionTarget', 'AI deflection rate target', 0.40, note='Target % of tickets fully handled by AI'),
            pct_input('responseTimeImprovement', 'Response time improvement %', 0.60, note='Expected reduction in first-response time'),
            scale_input('brandRisk', 'Brand risk sensitivity (1-5)', note='1=Low-stakes, 5=High-profile brand'),
        ],
        'mappings': [
            automation(0.80, i('deflectionTarget') * (1 - (i('brandRisk') - 1) * 0.05)),
            hours(i('ticketsPerMonth') * i('resolutionTimeMin') / 60 / 4.33),
            maps('revenueImpact', ROUND(i('ticketsPerMonth') * 12 * i('revenuePerUser') * i('churnRate') * i('responseTimeImprovement') * 0.10, 0),
                 'Annual churn-reduction revenue from faster resolution'),
        ],
    },
    {
        'id': 'data-analytics-automation', 'label': 'Data & Analytics Automation',
        'processType': 'Data Analysis & Reporting',
        'description': 'Automate reporting, forecasting, and data-driven decision making',
        'inputs': [
            num_input('reportsPerMonth', 'Reports generated/month', 40, max=10000, note='Number of reports produced monthly'),
            num_input('hoursPerReport', 'Hours per report', 6, min=0.5, max=200, format='0.0', note='Analyst hours to produce one report'),
            num_input('dataSources', 'Number of data sources', 8, min=1, max=500, format='0', note='Distinct data feeds/systems'),
            pct_input('accuracyRate', 'Current accuracy rate', 0.92, min=0.50, note='Fraction of reports without material errors'),
            pct_input('manualDataPrepPct', 'Manual data prep %', 0.55, note='Fraction of time spent on data wrangling vs. analysis'),
            num_input('forecastFrequency', 'Forecast frequency (per month)', 4, min=1, max=365, format='0', note='How often forecasts are updated'),
            pct_input('analystUtilization', 'Analyst utilization rate', 0.85, note='Fraction of analyst time on this process'),
            num_input('reportConsumers', 'Report consumers (people)', 25, min=1, max=100000, format='0', note='Number of stakeholders consuming reports'),
        ],
        'mappings': [
            automation(0.80, i('manualDataPrepPct') * 0.85 + (1 - i('accuracyRate')) * 0.5),
            hours(i('reportsPerMonth') * i('hoursPerReport') * i('analystUtilization') / 4.33),
            maps('errorRate', 1 - i('accuracyRate')),
        ],
    },
    {
        'id': 'revenue-growth-ai', 'label': 'Revenue & Growth AI',
        'processType': 'Customer Communication',
        'description': 'Drive revenue through AI-enhanced sales, marketing, and market intelligence',
        'inputs': [
            num_input('pipelineVolume', 'Monthly pipeline volume ($)', 2000000, max=1000000000, format='$#,##0', note='Total monthly pipeline value'),
            pct_input('closeRate', 'Current close rate', 0.22, note='Win rate on qualified pipeline'),
            num_input('avgDealSize', 'Average deal size ($)', 45000, max=50000000, format='$#,##0', note='Revenue per closed deal'),
            num_input('marketingSpendMonthly', 'Monthly marketing spend ($)', 50000, max=10000000, format='$#,##0', note='Total monthly marketing budget'),
            pct_input('leadQualRate', 'Lead qualification rate', 0.15, note='Fraction of leads that become qualified opportunities'),
            pct_input('closeRateImprovementTarget', 'Close rate improvement target', 0.15, note='Expected % increase in close rate from AI'),
            num_input('cac', 'Customer acquisition cost ($)', 8000, max=500000, format='$#,##0', note='Cost to acquire one customer'),
            num_input('timeToImpactMonths', 'Time to revenue impact (months)', 6, min=1, max=36, format='0', note='Months before AI drives measurable revenue'),
        ],
        'mappings': [
            automation(0.70, i('leadQualRate') * 2 + i('closeRateImprovementTarget')),
            maps('revenueImpact', ROUND(i('pipelineVolume') * 12 * i('closeRate') * i('closeRateImprovementTarget'), 0),
                 'Incremental annual revenue from improved close rate'),
            hours(i('pipelineVolume') / i('avgDealSize') * 2 / 4.33),
        ],
    },
    {
        'id': 'risk-compliance-ai', 'label': 'Risk & Compliance AI',
        'processType': 'Quality & Compliance',
        'description': 'Reduce compliance risk, improve audit quality, and automate regulatory processes',
        'inputs': [
            num_input('reviewsPerMonth', 'Reviews/audits per month', 200, max=100000, note='Monthly compliance review volume'),
            num_input('hoursPerReview', 'Hours per review', 4, min=0.25, max=100, format='0.0', note='Staff hours per review/audit'),
            num_input('findingsPerYear', 'Annual findings/violations', 15, max=10000, format='0', note='Number of compliance findings per year'),
            num_input('fineExposure', 'Avg fine exposure per finding ($)', 250000, max=100000000, format='$#,##0', note='Potential penalty per finding'),
            pct_input('falsePositiveRate', 'False positive rate', 0.30, note='Fraction of flagged items that are false alarms'),
            num_input('auditPrepHoursPerYear', 'Audit prep hours/year', 800, max=50000, note='Total staff hours for annual audit preparation'),
            num_input('regulatoryBodies', 'Number of regulatory bodies', 3, min=1, max=50, format='0', note='Distinct regulators with oversight'),
            pct_input('monitoringCoverage', 'Current monitoring coverage', 0.65, note='Fraction of transactions/activities monitored'),
        ],
        'mappings': [
            automation(0.75, (1 - i('monitoringCoverage')) * 0.5 + i('falsePositiveRate') * 0.4 + 0.15),
            maps('errorRate', i('falsePositiveRate') * 0.5, 'False positives translate to wasted review effort'),
            hours(i('reviewsPerMonth') * i('hoursPerReview') / 4.33),
            maps('riskReduction', ROUND(i('findingsPerYear') * i('fineExposure') * 0.40, 0),
                 'Estimated annual risk reduction (40% finding prevention)'),
        ],
    },
    {
        'id': 'software-engineering-ai', 'label': 'Software Engineering AI',
        'processType': 'Workflow Automation',
        'description': 'AI-assisted coding, code review, testing, and release engineering',
        'inputs': [
            num_input('prsPerWeek', 'Pull requests per week', 40, max=5000, format='0', note='Team-wide PRs merged weekly'),
            num_input('reviewTimeHours', 'Avg review time (hours)', 2, min=0.25, max=40, format='0.0', note='Hours per code review'),
            pct_input('bugRate', 'Bug escape rate', 0.08, note='Fraction of releases with production bugs'),
            pct_input('testCoverage', 'Current test coverage', 0.65, note='Automated test coverage percentage'),
            num_input('deployFrequency', 'Deployments per week', 3, min=0.1, max=100, format='0.0', note='DORA deployment frequency'),
            pct_input('codeAssistTarget', 'Code assist adoption target', 0.70, note='Target % of devs using AI coding tools'),
            num_input('techDebtHoursPerSprint', 'Tech debt hours/sprint', 20, max=500, note='Sprint hours spent on tech debt'),
            num_input('releaseCycleDays', 'Release cycle (days)', 14, min=1, max=180, format='0', note='Days between releases'),
        ],
        'mappings': [
            automation(0.75, i('codeAssistTarget') * 0.6 + (1 - i('testCoverage')) * 0.3),
            maps('errorRate', i('bugRate')),
            hours(i('prsPerWeek') * i('reviewTimeHours') + i('techDebtHoursPerSprint') / 2),
        ],
    },
    {
        'id': 'hr-talent-ai', 'label': 'HR & Talent AI',
        'processType': 'Document Processing',
        'description': 'Screening, onboarding, and talent workflows',
        'inputs': [
            num_input('hiresPerYear', 'Hires per year', 150, max=100000, format='0', note='Annual new hires'),
            num_input('timeToFillDays', 'Time-to-fill (days)', 45, min=1, max=365, format='0', note='Average days to fill a position'),
            num_input('appsPerRole', 'Applications per role', 200, max=10000, format='0', note='Applications received per open position'),
            num_input('screeningHoursPerRole', 'Screening hours per role', 12, min=1, max=200, format='0', note='HR hours to screen candidates per role'),
            num_input('onboardingHours', 'Onboarding hours per hire', 40, max=500, note='Total hours for onboarding process'),
            pct_input('turnoverRate', 'Annual turnover rate', 0.18, note='Voluntary + involuntary turnover'),
            num_input('costPerHire', 'Cost per hire ($)', 5000, max=100000, format='$#,##0', note='Direct recruiting cost per hire'),
            pct_input('internalMobilityRate', 'Internal mobility rate', 0.15, note='Fraction of roles filled internally'),
        ],
        'mappings': [
            automation(0.70, 0.30 + (i('appsPerRole') / 500) * 0.2 + (1 - i('internalMobilityRate')) * 0.15),
            hours((i('hiresPerYear') * (i('screeningHoursPerRole') + i('onboardingHours'))) / 52),
            maps('errorRate', MIN(0.30, i('turnoverRate') * 0.5), 'High turnover suggests poor hiring quality'),
        ],
    },
    {
        'id': 'supply-chain-ai', 'label': 'Supply Chain AI',
        'processType': 'Data Analysis & Reporting',
        'description': 'Demand forecasting, inventory planning, and supplier coordination',
        'inputs': [
            num_input('skuCount', 'Active SKUs', 5000, max=10000000, note='Number of active products/SKUs'),
            pct_input('forecastAccuracy', 'Current forecast accuracy', 0.72, min=0.20, note='MAPE-based accuracy rate'),
            pct_input('stockoutRate', 'Stockout rate', 0.05, note='Fraction of orders affected by stockouts'),
            num_input('avgLeadTimeDays', 'Avg lead time (days)', 21, min=1, max=365, format='0', note='Average supplier lead time'),
            pct_input('demandVariability', 'Demand variability (CV)', 0.35, min=0.05, max=2.0, note='Coefficient of variation of demand'),
            num_input('supplierCount', 'Active suppliers', 120, max=100000, format='0', note='Number of active suppliers'),
            num_input('warehouseCostMonthly', 'Warehouse cost/month ($)', 150000, max=50000000, format='$#,##0', note='Monthly warehousing/logistics cost'),
            pct_input('onTimeDelivery', 'On-time delivery %', 0.88, min=0.50, note='Fraction of orders delivered on time'),
        ],
        'mappings': [
            automation(0.70, (1 - i('forecastAccuracy')) * 1.5 + i('stockoutRate') * 2),
            maps('errorRate', i('stockoutRate') + (1 - i('onTimeDelivery')) * 0.5),
            hours(i('skuCount') * 0.02 + i('supplierCount') * 0.5),
            maps('revenueImpact', ROUND(i('warehouseCostMonthly') * 12 * i('stockoutRate') * 3, 0),
                 'Annual lost revenue from stockouts (3x carrying cost)'),
        ],
    },
    {
        'id': 'knowledge-management-ai', 'label': 'Knowledge Management AI',
        'processType': 'Research & Intelligence',
        'description': 'Enterprise search, documentation, and knowledge reuse',
        'inputs': [
            num_input('articleCount', 'Knowledge articles', 2000, max=10000000, note='Total articles/docs in knowledge base'),
            num_input('searchQueriesPerDay', 'Search queries per day', 500, max=1000000, note='Daily internal search volume'),
            num_input('timeToFindMin', 'Avg time to find info (min)', 12, min=1, max=120, format='0', note='Minutes to find the right document'),
            num_input('docCreationHoursPerMonth', 'Doc creation hours/month', 80, max=10000, note='Monthly hours spent creating/updating docs'),
            pct_input('knowledgeReuseRate', 'Knowledge reuse rate', 0.25, note='Fraction of knowledge that gets reused vs. recreated'),
            num_input('onboardingTimeDays', 'New hire onboarding (days)', 30, min=1, max=180, format='0', note='Days for new hire to reach productivity'),
            pct_input('searchSuccessRate', 'Search success rate', 0.55, note='Fraction of searches that return useful results'),
            pct_input('duplicateWorkRate', 'Duplicate work rate', 0.15, note='Fraction of work unknowingly duplicated'),
        ],
        'mappings': [
            automation(0.75, (1 - i('searchSuccessRate')) * 0.6 + i('duplicateWorkRate') * 1.0 + (1 - i('knowledgeReuseRate')) * 0.15),
            hours(i('searchQueriesPerDay') * 5 * i('timeToFindMin') / 60 + i('docCreationHoursPerMonth') / 4.33),
            maps('errorRate', i('duplicateWorkRate')),
        ],
    },
    {
        'id': 'finance-accounting-ai', 'label': 'Finance & Accounting AI',
        'processType': 'Document Processing',
        'description': 'Invoice processing, reconciliation, and close automation',
        'inputs': [
            num_input('invoicesPerMonth', 'Invoices per month', 3000, max=5000000, note='AP + AR invoices processed monthly'),
            num_input('reconciliationItems', 'Reconciliation items/month', 1500, max=1000000, note='Monthly line items requiring reconciliation'),
            num_input('closeCycleDays', 'Close cycle (days)', 12, min=1, max=60, format='0', note='Days to complete monthly/quarterly close'),
            pct_input('errorRateFinance', 'Transaction error rate', 0.04, note='Fraction of transactions with errors'),
            num_input('manualJournalsPerMonth', 'Manual journal entries/month', 200, max=50000, format='0', note='Number of manual journal entries'),
            num_input('apArAgingDays', 'AP/AR aging (days)', 45, min=1, max=180, format='0', note='Average days outstanding'),
            num_input('auditPrepHours', 'Audit prep hours/year', 600, max=20000, note='Staff hours for annual audit preparation'),
            pct_input('exceptionRate', 'Exception/escalation rate', 0.12, note='Fraction of transactions requiring manual exception handling'),
        ],
        'mappings': [
            automation(0.75, 0.25 + i('exceptionRate') * 1.5 + i('errorRateFinance') * 2),
            maps('errorRate', i('errorRateFinance')),
            hours((i('invoicesPerMonth') * 0.1 + i('reconciliationItems') * 0.15 + i('manualJournalsPerMonth') * 0.25) / 4.33),
        ],
    },
    {
        'id': 'legal-contract-ai', 'label': 'Legal & Contract AI',
        'processType': 'Document Processing',
        'description': 'Contract review, clause extraction, and renewal tracking',
        'inputs': [
            num_input('contractsPerMonth', 'Contracts per month', 80, max=50000, format='0', note='Monthly contract volume (new + amendments)'),
            num_input('hoursPerContract', 'Hours per contract', 6, min=0.5, max=100, format='0.0', note='Attorney/paralegal hours per contract'),
            num_input('clauseTypes', 'Unique clause types tracked', 25, min=5, max=500, format='0', note='Clause taxonomy size'),
            pct_input('amendmentRate', 'Amendment/redline rate', 0.35, note='Fraction of contracts requiring amendments'),
            num_input('outsideCounselSpend', 'Annual outside counsel spend ($)', 500000, max=100000000, format='$#,##0', note='Annual external legal spend'),
            pct_input('renewalLeakage', 'Renewal leakage %', 0.08, note='Revenue lost from missed renewals/unfavorable auto-renewals'),
            num_input('approvalChainSteps', 'Approval chain steps', 4, min=1, max=20, format='0', note='Number of approval steps per contract'),
            num_input('riskClausesPerContract', 'Risk clauses per contract', 6, min=0, max=100, format='0', note='Avg high-risk clauses requiring review'),
        ],
        'mappings': [
            automation(0.70, 0.20 + i('amendmentRate') * 0.5 + (i('riskClausesPerContract') / 20) * 0.3),
            hours(i('contractsPerMonth') * i('hoursPerContract') / 4.33),
            maps('toolReplacementRate', MIN(0.60, IF(GT(i('outsideCounselSpend'), 200000), 0.30, 0.15)),
                 'Outside counsel replaced by AI contract review'),
        ],
    },
    {
        'id': 'it-operations-aiops', 'label': 'IT Operations (AIOps)',
        'processType': 'Workflow Automation',
        'description': 'Incident triage, alert noise reduction, and auto-remediation',
        'inputs': [
            num_input('incidentsPerMonth', 'Incidents per month', 400, max=100000, format='0', note='Total IT incidents/alerts per month'),
            num_input('mttrMinutes', 'MTTR (minutes)', 45, min=1, max=1440, format='0', note='Mean time to resolve in minutes'),
            num_input('changeRequestsPerMonth', 'Change requests/month', 150, max=50000, format='0', note='Monthly change/deployment requests'),
            num_input('falseAlertsPerDay', 'False alerts per day', 30, max=10000, format='0', note='Daily false positive alerts'),
            num_input('infraNodes', 'Infrastructure nodes', 500, max=1000000, note='Servers, containers, endpoints managed'),
            pct_input('uptimeTarget', 'Uptime target %', 0.999, min=0.90, max=0.99999, format='0.000%', note='SLA uptime target'),
            pct_input('automatedRemediationPct', 'Auto-remediation %', 0.15, note='Fraction of incidents auto-remediated today'),
            num_input('alertToTicketRatio', 'Alert-to-ticket ratio', 5, min=1, max=100, format='0.0', note='Alerts generated per actionable ticket'),
        ],
        'mappings': [
            automation(0.80, (1 - i('automatedRemediationPct')) * 0.5 + (1 - 1 / i('alertToTicketRatio')) * 0.3),
            maps('errorRate', MIN(0.40, i('falseAlertsPerDay') / (i('incidentsPerMonth') / 30 + i('falseAlertsPerDay')))),
            hours(i('incidentsPerMonth') * i('mttrMinutes') / 60 / 4.33 + i('changeRequestsPerMonth') * 0.5 / 4.33),
            maps('riskReduction', ROUND((1 - i('uptimeTarget')) * 8760 * i('infraNodes') * 50 * 0.40, 0),
                 'Risk reduction from improved MTTR and auto-remediation'),
        ],
    },
]

ARCHETYPES = {s['id']: s for s in ARCHETYPE_SCHEMAS}
PLACEHOLDERS = NameRefs('{{{name}}}')


def get_archetype(archetype_id):
    return ARCHETYPES.get(archetype_id)


def list_archetypes():
    return [{'id': s['id'], 'label': s['label'], 'description': s['description'],
             'processType': s['processType'], 'inputCount': len(s['inputs']),
             'mapsTo': [m['mapsTo'] for m in s['mappings']]} for s in ARCHETYPE_SCHEMAS]


def get_archetype_input_defaults(archetype_id):
    schema = ARCHETYPES.get(archetype_id)
    if not schema:
        return {}
    return {inp['key']: inp['default'] for inp in schema['inputs']}


def _is_number(val):
    """Finite int or float. Ints too large for a float do not qualify."""
    if isinstance(val, bool) or not isinstance(val, (int, float)):
        return False
    try:
        return math.isfinite(val)
    except OverflowError:
        return False


def validate_archetype_inputs(archetype_id, values):
    """Partial validation: only fields present (and not None) are checked.
    Returns a list of {field, message}; never raises."""
    schema = ARCHETYPES.get(archetype_id)
    if not schema:
        return [{'field': '_schema', 'message': f'Unknown archetype: {archetype_id}'}]
    values = values or {}
    errors = []
    for inp in schema['inputs']:
        val = values.get(inp['key'])
        if val is None:
            continue
        if not _is_number(val):
            errors.append({'field': inp['key'], 'message': f"{inp['label']}: must be a number"})
            continue
        if val < inp['min']:
            errors.append({'field': inp['key'], 'message': f"{inp['label']}: minimum is {inp['min']}"})
        if val > inp['max']:
            errors.append({'field': inp['key'], 'message': f"{inp['label']}: maximum is {inp['max']}"})
    return errors


def map_archetype_inputs(archetype_id, values):
    """Evaluate every computed mapping over defaults merged with `values`.
    A mapping that fails or yields a non-finite value is dropped on its own."""
    schema = ARCHETYPES.get(archetype_id)
    if not schema:
        return {}
    merged = get_archetype_input_defaults(archetype_id)
    merged.update({k: v for k, v in (values or {}).items() if v is not None})
    scope = Scope(merged, None)
    overrides = {}
    for m in schema['mappings']:
        try:
            value = m['expr'].evaluate(scope)
            if not _is_number(value):
                raise ValueError(f"non-finite result {value!r}")
        except (ArithmeticError, TypeError, ValueError, KeyError) as e:
            logging.warning(f"[{archetype_id}] mapping '{m['mapsTo']}' dropped: {e}")
            continue
        overrides[m['mapsTo']] = value
    return overrides


def archetype_formulas(archetype_id):
    """Symbolic form of each mapping, inputs shown as {inputKey}."""
    schema = ARCHETYPES.get(archetype_id)
    if not schema:
        return []
    return [{'mapsTo': m['mapsTo'], 'formula': m['expr'].emit(PLACEHOLDERS), 'note': m.get('note', '')}
            for m in schema['mappings']]
