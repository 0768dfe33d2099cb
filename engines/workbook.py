"""
ROI Navigator - Spreadsheet Mirror
Writes the model as a live-formula openpyxl workbook. Every calculated cell is
emitted from the same formula-graph node the engine evaluates; the Inputs tab
holds the only literals and the Lookups tab holds the benchmark tables.

Tabs: Lookups, Inputs, Calc Engine, 5-Year DCF, Scenarios, Opportunity Cost,
Revenue & Scale, Dashboard, Sources.
"""
import logging
from collections.abc import Mapping

import openpyxl
from openpyxl.styles import Font, PatternFill, Alignment, Border, Side
from openpyxl.utils import get_column_letter

from engines.archetypes import ARCHETYPES, PLACEHOLDERS, get_archetype_input_defaults
from engines.benchmarks import DEFAULT_BENCHMARKS
from engines.calculations import normalize_inputs, active_overrides
from engines.formulas import Const, Ref, CLAMP
from engines.model import (
    YEARS, SCENARIOS, clamp_input,
    build_core_graph, build_projection_graph, build_inaction_graph,
    build_revenue_scale_graph, build_summary_graph,
)

SHEETS = ['Lookups', 'Inputs', 'Calc Engine', '5-Year DCF', 'Scenarios',
          'Opportunity Cost', 'Revenue & Scale', 'Dashboard', 'Sources']

HEADER_FONT = Font(bold=True, color='FFFFFF', size=11)
HEADER_FILL = PatternFill(start_color='2E2E38', end_color='2E2E38', fill_type='solid')
SECTION_FONT = Font(bold=True, size=12)
INPUT_FILL = PatternFill(start_color='FFF2CC', end_color='FFF2CC', fill_type='solid')
THIN = Border(left=Side(style='thin'), right=Side(style='thin'),
              top=Side(style='thin'), bottom=Side(style='thin'))

INPUT_FIELDS = [
    ('industry', 'Industry', '@'),
    ('companySize', 'Company size', '@'),
    ('teamLocation', 'AI team location', '@'),
    ('companyState', 'Company state (R&D credit)', '@'),
    ('processType', 'Process type', '@'),
    ('teamSize', 'Team size (FTE)', '#,##0'),
    ('avgSalary', 'Average fully-loaded salary', '$#,##0'),
    ('hoursPerWeek', 'Hours per week on process', '0.0'),
    ('errorRate', 'Error / rework rate', '0.0%'),
    ('currentToolCosts', 'Current annual tool costs', '$#,##0'),
    ('changeReadiness', 'Change readiness (1-5)', '0'),
    ('dataReadiness', 'Data readiness (1-5)', '0'),
    ('execSponsor', 'Executive sponsor', '@'),
    ('implementationBudget', 'Stated implementation budget', '$#,##0'),
    ('expectedTimeline', 'Expected timeline (months)', '0.0'),
    ('ongoingAnnualCost', 'Stated ongoing annual cost', '$#,##0'),
    ('vendorsReplaced', 'Vendors replaced', '0'),
    ('vendorTerminationCost', 'Vendor termination cost', '$#,##0'),
]

# Lookup tables written as keyed rows: (table, title, key headers)
ROW_TABLES = [
    ('industries', 'Industry Benchmarks', ['Industry']),
    ('companySizes', 'Company Size Master', ['Company Size']),
    ('readiness', 'Readiness Multipliers', ['Level']),
    ('processTypes', 'Process Type Master', ['Process Type']),
    ('aiTeamSalary', 'AI Team Salary (loaded)', ['Location']),
    ('stateRdCredit', 'State R&D Credit Rates', ['State']),
    ('scaleFactors', 'AI Cost Scale Factors', ['Volume']),
    ('yearSchedule', 'Year Schedule', ['Year']),
    ('peerBenchmarks', 'Peer ROIC Benchmarks', ['Industry', 'Company Size']),
]


def sheet_ref(title):
    return title if title.isalnum() else "'" + title.replace("'", "''") + "'"


def cell_addr(title, col, row):
    return f"{sheet_ref(title)}!${col}${row}"


def ws_write(ws, headers, rows, start_row=1):
    for c, h in enumerate(headers, 1):
        cell = ws.cell(row=start_row, column=c, value=h)
        cell.font = HEADER_FONT; cell.fill = HEADER_FILL; cell.alignment = Alignment(horizontal='center'); cell.border = THIN
    for r, row in enumerate(rows, start_row + 1):
        for c, val in enumerate(row, 1):
            cell = ws.cell(row=r, column=c, value=val); cell.border = THIN
    return start_row + len(rows) + 1


def _autosize(ws):
    for col in ws.columns:
        ml = max(len(str(cell.value or '')) for cell in col)
        ws.column_dimensions[col[0].column_letter].width = min(ml + 2, 40)


def _section(ws, row, title):
    ws.cell(row=row, column=1, value=title).font = SECTION_FONT


def _leaf_paths(record, prefix=()):
    if isinstance(record, Mapping):
        for k, v in record.items():
            yield from _leaf_paths(v, prefix + (k,))
    else:
        yield prefix, record


def _keyed_rows(table, depth):
    if depth == 0:
        yield (), table
        return
    for k, v in table.items():
        for keys, record in _keyed_rows(v, depth - 1):
            yield (k,) + keys, record


# ══════════════════════════════════════════════════════════════
#  LOOKUPS TAB
# ══════════════════════════════════════════════════════════════

class LookupSheet:
    """Writes the benchmark bundle and resolves lookups to INDEX/MATCH formulas
    (or a direct cell when every key is a literal)."""

    def __init__(self, ws, benchmarks):
        self.ws, self.bm = ws, benchmarks
        self.title = ws.title
        self.row = 1
        self.tables = {}
        self.constants = {}
        self._write_constants()
        self._write_matrix('automationPotential', 'Automation Potential (industry x process type)')
        for name, title, key_headers in ROW_TABLES:
            self._write_rows(name, title, key_headers)
        self._link_year_schedule()
        self._write_list('revenueEligibleProcesses', 'Revenue-Eligible Process Types')
        _autosize(ws)

    def _abs(self, col, row):
        return cell_addr(self.title, col, row)

    def _range(self, col, first, last):
        return f"{sheet_ref(self.title)}!${col}${first}:${col}${last}"

    def _write_constants(self):
        constants = self.bm.table('constants')
        _section(self.ws, self.row, 'Constants')
        first = self.row + 2
        self.row = ws_write(self.ws, ['Name', 'Value'], [[k, v] for k, v in constants.items()], self.row + 1)
        for i, name in enumerate(constants):
            self.constants[name] = self._abs('B', first + i)
        self.row += 1

    def _write_matrix(self, name, title):
        table = self.bm.table(name)
        row_keys = list(table)
        col_keys = list(table[row_keys[0]])
        _section(self.ws, self.row, title)
        header = self.row + 1
        rows = [[rk] + [table[rk][ck] for ck in col_keys] for rk in row_keys]
        self.row = ws_write(self.ws, [''] + col_keys, rows, header)
        self.tables[name] = {'kind': 'matrix', 'rowKeys': row_keys, 'colKeys': col_keys,
                             'header': header, 'first': header + 1, 'last': self.row - 1,
                             'lastCol': get_column_letter(len(col_keys) + 1)}
        self.row += 1

    def _write_rows(self, name, title, key_headers):
        depth = len(key_headers)
        records = list(_keyed_rows(self.bm.table(name), depth))
        paths = [p for p, _ in _leaf_paths(records[0][1])]
        composite = depth > 1
        offset = 1 if composite else 0
        headers = (['Lookup Key'] if composite else []) + key_headers + ['.'.join(map(str, p)) or 'Value' for p in paths]
        _section(self.ws, self.row, title)
        header = self.row + 1
        first = header + 1
        rows = []
        for i, (keys, record) in enumerate(records):
            r = first + i
            values = [dict(_leaf_paths(record))[p] for p in paths]
            if composite:
                joined = '&"|"&'.join(f"{get_column_letter(offset + j + 1)}{r}" for j in range(depth))
                rows.append(['=' + joined] + list(keys) + values)
            else:
                rows.append(list(keys) + values)
        self.row = ws_write(self.ws, headers, rows, header)
        self.tables[name] = {
            'kind': 'rows', 'keys': [keys for keys, _ in records], 'first': first, 'last': self.row - 1,
            'keyCol': 'A',
            'columns': {p: get_column_letter(offset + depth + j + 1) for j, p in enumerate(paths)},
        }
        self.row += 1

    def _link_year_schedule(self):
        """Cumulative schedule columns become running formulas over the per-year columns."""
        t = self.tables['yearSchedule']
        cols = t['columns']
        hr, cum_hr = cols[('hrReduction',)], cols[('cumulativeHRReduction',)]
        esc, cum_esc = cols[('costEscalation',)], cols[('cumulativeEscalation',)]
        for r in range(t['first'], t['last'] + 1):
            self.ws[f"{cum_hr}{r}"] = f"=SUM(${hr}${t['first']}:{hr}{r})"
            if r == t['first']:
                self.ws[f"{cum_esc}{r}"] = f"=1+{esc}{r}"
            else:
                self.ws[f"{cum_esc}{r}"] = f"={cum_esc}{r - 1}*(1+{esc}{r})"

    def _write_list(self, name, title):
        values = list(self.bm.table(name))
        _section(self.ws, self.row, title)
        header = self.row + 1
        self.row = ws_write(self.ws, ['Value'], [[v] for v in values], header)
        self.tables[name] = {'kind': 'list', 'first': header + 1, 'last': self.row - 1}
        self.row += 1

    # ── Emitter hooks ──

    def constant(self, name):
        try:
            return self.constants[name]
        except KeyError:
            raise LookupError(f"Unknown constant '{name}'") from None

    def lookup(self, table, keys, path, refs):
        t = self.tables[table]
        literal = all(isinstance(k, Const) for k in keys)
        if t['kind'] == 'matrix':
            if literal:
                r = t['first'] + t['rowKeys'].index(keys[0].value)
                c = get_column_letter(2 + t['colKeys'].index(keys[1].value))
                return self._abs(c, r)
            data = f"{sheet_ref(self.title)}!$B${t['first']}:${t['lastCol']}${t['last']}"
            rows = self._range('A', t['first'], t['last'])
            cols = f"{sheet_ref(self.title)}!$B${t['header']}:${t['lastCol']}${t['header']}"
            return f"INDEX({data},MATCH({keys[0].emit(refs)},{rows},0),MATCH({keys[1].emit(refs)},{cols},0))"
        col = t['columns'][tuple(path)]
        if literal:
            idx = t['keys'].index(tuple(k.value for k in keys))
            return self._abs(col, t['first'] + idx)
        key = '&"|"&'.join(k.emit(refs) for k in keys)
        return f"INDEX({self._range(col, t['first'], t['last'])},MATCH({key},{self._range(t['keyCol'], t['first'], t['last'])},0))"

    def member(self, table, formula):
        t = self.tables[table]
        return f"COUNTIF({self._range('A', t['first'], t['last'])},{formula})>0"


class CellRefs:
    """Name -> cell address resolver. Child namespaces (one per scenario block)
    shadow names and fall back to their parent."""

    def __init__(self, lookups, parent=None):
        self.lookups, self.parent = lookups, parent
        self.cells = {}

    def bind(self, name, address):
        self.cells[name] = address

    def ref(self, name):
        if name in self.cells:
            return self.cells[name]
        if self.parent is not None:
            return self.parent.ref(name)
        raise KeyError(f"No cell bound for '{name}'")

    def constant(self, name):
        return self.lookups.constant(name)

    def lookup(self, table, keys, path):
        return self.lookups.lookup(table, keys, path, self)

    def member(self, table, formula):
        return self.lookups.member(table, formula)


# ══════════════════════════════════════════════════════════════
#  WORKBOOK BUILDER
# ══════════════════════════════════════════════════════════════

class _MirrorBuilder:

    def __init__(self, inputs, benchmarks):
        self.bm = benchmarks
        self.raw = dict(inputs or {})
        self.n = normalize_inputs(inputs, benchmarks)
        self.overrides = active_overrides(self.n)
        self.formulas = {}

        self.wb = openpyxl.Workbook()
        first = self.wb.active
        first.title = SHEETS[0]
        self.ws = {SHEETS[0]: first}
        for title in SHEETS[1:]:
            self.ws[title] = self.wb.create_sheet(title)

        self.lookups = LookupSheet(self.ws['Lookups'], benchmarks)
        self.refs = CellRefs(self.lookups)
        self.blocks = {}

    def build(self):
        self._write_inputs()
        self._write_list(self.ws['Calc Engine'], build_core_graph(self.overrides), self.refs, 'core', 'Calculation Engine')
        self._write_projection(self.ws['5-Year DCF'], 'base', 1)
        row = 1
        for key in ('conservative', 'optimistic'):
            row = self._write_projection(self.ws['Scenarios'], key, row) + 1
        self._write_scenario_summary(self.ws['Scenarios'], row)
        self._write_opportunity_cost()
        self._write_list(self.ws['Revenue & Scale'], build_revenue_scale_graph(), self.refs, 'revenueScale',
                         'Revenue Enablement, R&D Credit & Scalability (informational)')
        self._write_dashboard()
        self._write_sources()
        for title in SHEETS[1:]:
            _autosize(self.ws[title])
        logging.info(f"Workbook built: {sum(len(f) for f in self.formulas.values())} formula cells")
        return self.wb

    # ── Inputs ──

    def _write_inputs(self):
        ws = self.ws['Inputs']
        row = 1
        linked = {}
        archetype_id = self.n['projectArchetype']
        if archetype_id:
            schema = ARCHETYPES[archetype_id]
            values = get_archetype_input_defaults(archetype_id)
            values.update({k: v for k, v in (self.raw.get('archetypeInputs') or {}).items() if v is not None})
            arch_refs = CellRefs(self.lookups)
            _section(ws, row, f"Archetype Inputs: {schema['label']}")
            row = ws_write(ws, ['Input', 'Value', 'Key'], [
                [inp['label'], values.get(inp['key']), inp['key']] for inp in schema['inputs']
            ], row + 1)
            for i, inp in enumerate(schema['inputs']):
                r = row - len(schema['inputs']) + i
                cell = ws.cell(row=r, column=2)
                cell.fill = INPUT_FILL; cell.number_format = inp['format']
                arch_refs.bind(inp['key'], cell_addr(ws.title, 'B', r))

            row += 1
            _section(ws, row, 'Computed Mappings')
            mapped = [m for m in schema['mappings'] if m['mapsTo'] in self.n['archetypeOverrides']]
            start = row + 1
            row = ws_write(ws, ['Maps To', 'Value', 'Formula'], [
                [m['mapsTo'], '=' + m['expr'].emit(arch_refs), m['expr'].emit(PLACEHOLDERS)] for m in mapped
            ], start)
            self.formulas['archetype'] = {}
            for i, m in enumerate(mapped):
                addr = cell_addr(ws.title, 'B', start + 1 + i)
                linked[m['mapsTo']] = addr
                self.refs.bind('mapped.' + m['mapsTo'], addr)
                self.formulas['archetype'][m['mapsTo']] = ws.cell(row=start + 1 + i, column=2).value
            row += 1

        _section(ws, row, 'Model Inputs')
        fields = list(INPUT_FIELDS)
        for name, label in (('automationPotential', 'Automation potential (archetype)'),
                            ('toolReplacementRate', 'Tool replacement rate (archetype)')):
            if name in self.overrides:
                fields.append((name + 'Override', label, '0.0%'))
        start = row + 1
        rows = []
        for name, label, fmt in fields:
            source = name[:-len('Override')] if name.endswith('Override') else name
            if source in linked:
                if name in ('hoursPerWeek', 'errorRate'):
                    expr = clamp_input(name, Ref('mapped.' + source))
                else:
                    expr = CLAMP(Ref('mapped.' + source), 0, 1)
                rows.append([label, '=' + expr.emit(self.refs), name])
            else:
                rows.append([label, self.n[name], name])
        ws_write(ws, ['Input', 'Value', 'Key'], rows, start)
        for i, (name, _, fmt) in enumerate(fields):
            r = start + 1 + i
            cell = ws.cell(row=r, column=2)
            cell.number_format = fmt
            if not isinstance(cell.value, str) or not cell.value.startswith('='):
                cell.fill = INPUT_FILL
            self.refs.bind(name, cell_addr(ws.title, 'B', r))

    # ── Graph layouts ──

    def _write_list(self, ws, graph, refs, key, title, start_row=1, col=2):
        """One node per row: label, formula. Returns the next free row."""
        letter = get_column_letter(col)
        _section(ws, start_row, title)
        row = start_row + 1
        placed, section = [], object()
        for node in graph.nodes:
            if node.section != section:
                section = node.section
                row += 1
                if section:
                    ws.cell(row=row, column=1, value=section).font = Font(bold=True)
                    row += 1
            refs.bind(node.key, cell_addr(ws.title, letter, row))
            placed.append((node, row))
            row += 1
        self._emit(ws, placed, refs, key, letter)
        return row

    def _emit(self, ws, placed, refs, key, letter):
        out = self.formulas.setdefault(key, {})
        for node, row in placed:
            formula = '=' + node.expr.emit(refs)
            ws.cell(row=row, column=1, value=node.label)
            cell = ws[f"{letter}{row}"]
            cell.value = formula
            cell.number_format = node.fmt
            cell.border = THIN
            out[node.key] = formula

    def _write_grid(self, ws, graph, refs, key, start_row, years):
        """Year-indexed nodes as metric rows x year columns; the rest listed below."""
        metrics, labels = [], {}
        for node in graph.nodes:
            if node.year is not None and node.metric not in metrics:
                metrics.append(node.metric)
                labels[node.metric] = node.label
        year_col = {y: get_column_letter(2 + i) for i, y in enumerate(years)}
        ws_write(ws, ['Metric'] + [f"Year {y}" for y in years], [[labels[m]] for m in metrics], start_row)
        metric_row = {m: start_row + 1 + i for i, m in enumerate(metrics)}

        grid, scalars = [], []
        row = start_row + len(metrics) + 2
        for node in graph.nodes:
            if node.year is not None:
                col, r = year_col[node.year], metric_row[node.metric]
                refs.bind(node.key, cell_addr(ws.title, col, r))
                grid.append((node, col, r))
            else:
                refs.bind(node.key, cell_addr(ws.title, 'B', row))
                scalars.append((node, row))
                row += 1

        out = self.formulas.setdefault(key, {})
        for node, col, r in grid:
            cell = ws[f"{col}{r}"]
            cell.value = out[node.key] = '=' + node.expr.emit(refs)
            cell.number_format = node.fmt
            cell.border = THIN
        self._emit(ws, scalars, refs, key, 'B')
        return row, metric_row, year_col

    def _write_projection(self, ws, scenario, start_row):
        cfg = SCENARIOS[scenario]
        refs = CellRefs(self.lookups, parent=self.refs)
        self.blocks[scenario] = refs
        key = f"projection.{scenario}"

        _section(ws, start_row, f"{cfg['label']} - 5-Year Cash Flow")
        mult_row = start_row + 1
        ws.cell(row=mult_row, column=1, value='Scenario multiplier')
        formula = '=' + self.lookups.constant(cfg['multiplier'])
        ws.cell(row=mult_row, column=2, value=formula).number_format = '0.00'
        refs.bind('scenarioMultiplier', cell_addr(ws.title, 'B', mult_row))
        self.formulas.setdefault(key, {})['scenarioMultiplier'] = formula

        years = [0] + YEARS
        row, metric_row, year_col = self._write_grid(ws, build_projection_graph(), refs, key, mult_row + 2, years)

        ncf = metric_row['netCashFlow']
        flows = f"{sheet_ref(ws.title)}!${year_col[0]}${ncf}:${year_col[YEARS[-1]]}${ncf}"
        max_irr = self.lookups.constant('maxIrr')
        irr = f'=IFERROR(MIN(MAX(IRR({flows}),-{max_irr}),{max_irr}),"N/A")'
        ws.cell(row=row, column=1, value='IRR')
        ws.cell(row=row, column=2, value=irr).number_format = '0.0%'
        refs.bind('irr', cell_addr(ws.title, 'B', row))
        self.formulas[key]['irr'] = irr
        return row + 1

    def _write_scenario_summary(self, ws, row):
        _section(ws, row, 'Scenario Comparison')
        fields = [('npv', '$#,##0'), ('irr', '0.0%'), ('roic', '0.0%'), ('paybackMonths', '0.0'), ('noBreakEven', '@')]
        rows = [[SCENARIOS[k]['label']] + ['=' + self.blocks[k].ref(f) for f, _ in fields] for k in SCENARIOS]
        ws_write(ws, ['Scenario', 'NPV', 'IRR', 'ROIC', 'Payback (months)', 'No break-even'], rows, row + 1)
        for i in range(len(rows)):
            for j, (_, fmt) in enumerate(fields):
                ws.cell(row=row + 2 + i, column=2 + j).number_format = fmt

        for k in SCENARIOS:
            self.refs.bind('npv' + k.capitalize(), self.blocks[k].ref('npv'))
            self.refs.bind('roic' + k.capitalize(), self.blocks[k].ref('roic'))
        base = self.blocks['base']
        self.refs.bind('baseRawRoic', base.ref('rawRoic'))
        self.refs.bind('baseTotalNetReturn', base.ref('totalNetReturn'))
        self.refs.bind('baseNetCashFlow3', base.ref('netCashFlow3'))

    def _write_opportunity_cost(self):
        ws = self.ws['Opportunity Cost']
        _section(ws, 1, 'Cost of Inaction (compounding)')
        self._write_grid(ws, build_inaction_graph(), self.refs, 'inaction', 3, YEARS)

    def _write_dashboard(self):
        ws = self.ws['Dashboard']
        row = self._write_list(ws, build_summary_graph(), self.refs, 'summary', 'Dashboard')
        _section(ws, row + 1, 'Key Figures')
        figures = [
            ('Upfront investment', 'upfrontInvestment', '$#,##0'),
            ('Total investment', 'totalInvestment', '$#,##0'),
            ('Net annual savings', 'netAnnualSavings', '$#,##0'),
            ('Base case NPV', 'npvBase', '$#,##0'),
            ('Cost of waiting 12 months', 'costOfWaiting12Months', '$#,##0'),
            ('Total R&D credit', 'rdTotalCredit', '$#,##0'),
            ('Vendor lock-in', 'vendorLockInLevel', '@'),
            ('Confidence level', 'confidenceLevel', '@'),
        ]
        start = row + 2
        ws_write(ws, ['Figure', 'Value'], [[label, '=' + self.refs.ref(name)] for label, name, _ in figures], start)
        for i, (_, _, fmt) in enumerate(figures):
            ws.cell(row=start + 1 + i, column=2).number_format = fmt

    def _write_sources(self):
        ws = self.ws['Sources']
        ws_write(ws, ['#', 'Source', 'Citation'], [[s['id'], s['short'], s['full']] for s in self.bm.table('sources')])


def build_workbook(inputs, benchmarks=DEFAULT_BENCHMARKS):
    """Live-formula workbook for one input profile."""
    return _MirrorBuilder(inputs, benchmarks).build()


def emit_formulas(inputs=None, benchmarks=DEFAULT_BENCHMARKS):
    """Formulas written by build_workbook, grouped by graph: {'core': {node: '=...'}, ...}."""
    builder = _MirrorBuilder(inputs, benchmarks)
    builder.build()
    return builder.formulas
