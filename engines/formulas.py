"""
ROI Navigator - Formula Graph
Each derived quantity of the model is declared once as an expression tree.
The calculation engine evaluates the tree against an input scope; the workbook
export emits the same tree as a spreadsheet formula with cell references.

Spreadsheet semantics reproduced by the evaluator:
  ROUND        half away from zero, decimal-exact on the shortest float repr
  CEILING/FLOOR  quotient snapped to 9 decimals first (absorbs 0.1*3 noise)
  IF           lazy, only the taken branch is evaluated
  ^            power, always parenthesised explicitly on emit
"""
import math
from decimal import Decimal, ROUND_HALF_UP

PRECEDENCE = {'+': 1, '-': 1, '*': 2, '/': 2, '^': 3}
COMPARE_OPS = {
    '<': lambda a, b: a < b, '<=': lambda a, b: a <= b,
    '>': lambda a, b: a > b, '>=': lambda a, b: a >= b,
    '=': lambda a, b: a == b, '<>': lambda a, b: a != b,
}


# ── Spreadsheet function semantics ──

def round_half_up(x, digits=0):
    if x is None or isinstance(x, bool) or not math.isfinite(x):
        return x
    q = Decimal(1).scaleb(-int(digits))
    return float(Decimal(repr(float(x))).quantize(q, rounding=ROUND_HALF_UP))


def ceiling(x, significance=1):
    return math.ceil(round(x / significance, 9)) * significance


def floor_to(x, significance=1):
    return math.floor(round(x / significance, 9)) * significance


FUNCTIONS = {
    'MIN': min,
    'MAX': max,
    'ROUND': round_half_up,
    'CEILING': ceiling,
    'FLOOR': floor_to,
    'ABS': abs,
    'LEFT': lambda s, n=1: str(s)[:int(n)],
}


def _wrap(value):
    return value if isinstance(value, Expr) else Const(value)


def _fmt_number(v):
    if isinstance(v, int):
        return str(v)
    if float(v).is_integer() and abs(v) < 1e15:
        return str(int(v))
    return repr(float(v))


# ══════════════════════════════════════════════════════════════
#  EXPRESSION NODES
# ══════════════════════════════════════════════════════════════

class Expr:
    """Base node. Arithmetic operators build BinOp trees."""
    precedence = 9

    def __add__(self, o): return BinOp('+', self, _wrap(o))
    def __radd__(self, o): return BinOp('+', _wrap(o), self)
    def __sub__(self, o): return BinOp('-', self, _wrap(o))
    def __rsub__(self, o): return BinOp('-', _wrap(o), self)
    def __mul__(self, o): return BinOp('*', self, _wrap(o))
    def __rmul__(self, o): return BinOp('*', _wrap(o), self)
    def __truediv__(self, o): return BinOp('/', self, _wrap(o))
    def __rtruediv__(self, o): return BinOp('/', _wrap(o), self)
    def __pow__(self, o): return BinOp('^', self, _wrap(o))
    def __rpow__(self, o): return BinOp('^', _wrap(o), self)
    def __neg__(self): return Neg(self)

    def evaluate(self, scope):
        raise NotImplementedError

    def emit(self, refs):
        raise NotImplementedError

    def names(self):
        """Names of every Ref this expression reads."""
        out = set()
        for child in self.children():
            out |= child.names()
        return out

    def children(self):
        return ()


class Const(Expr):
    def __init__(self, value):
        self.value = value

    @property
    def precedence(self):
        if isinstance(self.value, (int, float)) and not isinstance(self.value, bool) and self.value < 0:
            return 0
        return 9

    def evaluate(self, scope):
        return self.value

    def emit(self, refs):
        v = self.value
        if v is None:
            return '""'
        if isinstance(v, bool):
            return 'TRUE' if v else 'FALSE'
        if isinstance(v, str):
            return '"' + v.replace('"', '""') + '"'
        return _fmt_number(v)

    def __repr__(self):
        return f"Const({self.value!r})"


class Ref(Expr):
    """Reference to an input or to a previously defined node."""

    def __init__(self, name):
        self.name = name

    def evaluate(self, scope):
        return scope[self.name]

    def emit(self, refs):
        return refs.ref(self.name)

    def names(self):
        return {self.name}

    def __repr__(self):
        return f"Ref({self.name!r})"


class Constant(Expr):
    """Named scalar from the benchmark constants table."""

    def __init__(self, name):
        self.name = name

    def evaluate(self, scope):
        return scope.benchmarks.constant(self.name)

    def emit(self, refs):
        return refs.constant(self.name)


class BinOp(Expr):
    _apply = {
        '+': lambda a, b: a + b, '-': lambda a, b: a - b,
        '*': lambda a, b: a * b, '/': lambda a, b: a / b,
        '^': lambda a, b: a ** b,
    }

    def __init__(self, op, left, right):
        self.op, self.left, self.right = op, left, right

    @property
    def precedence(self):
        return PRECEDENCE[self.op]

    def children(self):
        return (self.left, self.right)

    def evaluate(self, scope):
        return self._apply[self.op](self.left.evaluate(scope), self.right.evaluate(scope))

    def emit(self, refs):
        p = self.precedence
        left = self.left.emit(refs)
        if self.left.precedence < p:
            left = f"({left})"
        right = self.right.emit(refs)
        rp = self.right.precedence
        if rp < p or (rp == p and self.op in ('-', '/', '^')):
            right = f"({right})"
        return f"{left}{self.op}{right}"


class Neg(Expr):
    precedence = 0

    def __init__(self, operand):
        self.operand = operand

    def children(self):
        return (self.operand,)

    def evaluate(self, scope):
        return -self.operand.evaluate(scope)

    def emit(self, refs):
        inner = self.operand.emit(refs)
        if isinstance(self.operand, (BinOp, Neg, Compare)):
            inner = f"({inner})"
        return f"-{inner}"


class Compare(Expr):
    precedence = 0

    def __init__(self, op, left, right):
        self.op, self.left, self.right = op, _wrap(left), _wrap(right)

    def children(self):
        return (self.left, self.right)

    def evaluate(self, scope):
        return COMPARE_OPS[self.op](self.left.evaluate(scope), self.right.evaluate(scope))

    def emit(self, refs):
        return f"{self.left.emit(refs)}{self.op}{self.right.emit(refs)}"


class Call(Expr):
    def __init__(self, fn, *args):
        self.fn = fn
        self.args = [_wrap(a) for a in args]

    def children(self):
        return tuple(self.args)

    def evaluate(self, scope):
        return FUNCTIONS[self.fn](*[a.evaluate(scope) for a in self.args])

    def emit(self, refs):
        return f"{self.fn}({','.join(a.emit(refs) for a in self.args)})"


class If(Expr):
    def __init__(self, cond, then, otherwise):
        self.cond, self.then, self.otherwise = _wrap(cond), _wrap(then), _wrap(otherwise)

    def children(self):
        return (self.cond, self.then, self.otherwise)

    def evaluate(self, scope):
        if self.cond.evaluate(scope):
            return self.then.evaluate(scope)
        return self.otherwise.evaluate(scope)

    def emit(self, refs):
        return f"IF({self.cond.emit(refs)},{self.then.emit(refs)},{self.otherwise.emit(refs)})"


class And(Expr):
    def __init__(self, *terms):
        self.terms = [_wrap(t) for t in terms]

    def children(self):
        return tuple(self.terms)

    def evaluate(self, scope):
        return all(t.evaluate(scope) for t in self.terms)

    def emit(self, refs):
        return f"AND({','.join(t.emit(refs) for t in self.terms)})"


class Lookup(Expr):
    """Benchmark table read: table[key1][key2]...[path...]."""

    def __init__(self, table, keys, *path):
        self.table = table
        self.keys = [_wrap(k) for k in keys]
        self.path = path

    def children(self):
        return tuple(self.keys)

    def evaluate(self, scope):
        keys = [k.evaluate(scope) for k in self.keys]
        return scope.benchmarks.lookup(self.table, *keys, *self.path)

    def emit(self, refs):
        return refs.lookup(self.table, self.keys, self.path)


class Member(Expr):
    """True when the value appears in a benchmark list table."""
    precedence = 0

    def __init__(self, table, value):
        self.table, self.value = table, _wrap(value)

    def children(self):
        return (self.value,)

    def evaluate(self, scope):
        return self.value.evaluate(scope) in scope.benchmarks.table(self.table)

    def emit(self, refs):
        return refs.member(self.table, self.value.emit(refs))


# ── Spreadsheet-named constructors ──

def MIN(*args): return Call('MIN', *args)
def MAX(*args): return Call('MAX', *args)
def ROUND(x, digits=0): return Call('ROUND', x, digits)
def CEILING(x, significance=1): return Call('CEILING', x, significance)
def FLOOR(x, significance=1): return Call('FLOOR', x, significance)
def ABS(x): return Call('ABS', x)
def LEFT(x, n): return Call('LEFT', x, n)
def IF(cond, then, otherwise): return If(cond, then, otherwise)
def AND(*terms): return And(*terms)
def EQ(a, b): return Compare('=', a, b)
def NE(a, b): return Compare('<>', a, b)
def LT(a, b): return Compare('<', a, b)
def LE(a, b): return Compare('<=', a, b)
def GT(a, b): return Compare('>', a, b)
def GE(a, b): return Compare('>=', a, b)
def C(name): return Constant(name)


def SUM(terms):
    terms = [_wrap(t) for t in terms]
    total = terms[0]
    for t in terms[1:]:
        total = total + t
    return total


def CLAMP(x, lo, hi):
    return MAX(lo, MIN(x, hi))


# ══════════════════════════════════════════════════════════════
#  GRAPH
# ══════════════════════════════════════════════════════════════

class Scope(dict):
    """Evaluation scope: input and node values plus the benchmark bundle."""

    def __init__(self, values, benchmarks):
        super().__init__(values)
        self.benchmarks = benchmarks


class Node:
    __slots__ = ('key', 'expr', 'label', 'fmt', 'section', 'metric', 'year')

    def __init__(self, key, expr, label, fmt, section, metric=None, year=None):
        self.key, self.expr, self.label, self.fmt = key, expr, label, fmt
        self.section, self.metric, self.year = section, metric, year


class Graph:
    """Ordered list of named nodes; later nodes may reference earlier ones."""

    def __init__(self, name):
        self.name = name
        self.nodes = []
        self._index = {}
        self._section = None

    def section(self, title):
        self._section = title

    def define(self, key, expr, label=None, fmt='#,##0', metric=None, year=None):
        if key in self._index:
            raise ValueError(f"{self.name}: node '{key}' defined twice")
        node = Node(key, _wrap(expr), label or key, fmt, self._section, metric, year)
        self._index[key] = node
        self.nodes.append(node)
        return Ref(key)

    def __getitem__(self, key):
        return self._index[key]

    def __contains__(self, key):
        return key in self._index

    def keys(self):
        return [n.key for n in self.nodes]

    def inputs(self):
        """Names read by the graph that it does not define itself."""
        read = set()
        for n in self.nodes:
            read |= n.expr.names()
        return read - set(self._index)

    def evaluate(self, env, benchmarks):
        scope = Scope(env, benchmarks)
        out = {}
        for n in self.nodes:
            scope[n.key] = out[n.key] = n.expr.evaluate(scope)
        return out

    def emit(self, refs):
        return {n.key: '=' + n.expr.emit(refs) for n in self.nodes}


class NameRefs:
    """Minimal emitter context that renders references as bare names.

    Used to show archetype mapping formulas with {placeholders} and in tests.
    """

    def __init__(self, template='{name}'):
        self.template = template

    def ref(self, name):
        return self.template.format(name=name)

    def constant(self, name):
        return name

    def lookup(self, table, keys, path):
        args = ','.join([table] + [k.emit(self) for k in keys] + list(path))
        return f"LOOKUP({args})"

    def member(self, table, formula):
        return f"MEMBER({table},{formula})"
