'''
Names an expression may refer to: constants, functions, operators.

All tables are built once, at import, and never mutated.
'''

import math
import sys

from .number import Float, Width
from .unit import Unit
from .value import Value


class Unary:
    '''
    Operation of one Value.
    '''
    arity = 1

    def __init__(self, name, fn):
        self.name = name
        self.fn = fn

    def __call__(self, operand):
        return self.fn(operand)

    def __repr__(self):
        return '{}({!r})'.format(type(self).__name__, self.name)


class Binary(Unary):
    '''
    Operation of two Values, left first.
    '''
    arity = 2

    def __call__(self, left, right):
        return self.fn(left, right)


def _signed(value):
    '''
    Reinterpret integers as signed, so subtraction and negation go negative.
    '''
    if value.is_integer():
        return value.to_signed()
    return value


def _float_function(f):
    '''
    Lift a float -> float function onto Values, keeping the unit.

    Out-of-domain arguments give NaN and overflows infinity, as IEEE 754
    would, instead of raising.
    '''
    def wrapped(value):
        x = float(value.number)
        try:
            result = f(x)
        except ValueError:
            result = math.nan
        except OverflowError:
            result = math.inf
        return Value(Float(result), value.unit)
    wrapped.__doc__ = f.__doc__
    wrapped.__name__ = getattr(f, '__name__', 'function')
    return wrapped


def _integral(f):
    '''
    floor, ceil, and friends, which pass infinities and NaN through.
    '''
    def wrapped(x):
        if not math.isfinite(x):
            return x
        return float(f(x))
    wrapped.__name__ = f.__name__
    return wrapped


def _round(x):
    '''
    Round half away from zero.
    '''
    return math.copysign(math.floor(abs(x) + 0.5), x)


def _logarithm(f):
    # log(0) is -inf rather than a domain error.
    def wrapped(x):
        if x == 0:
            return -math.inf
        return f(x)
    wrapped.__name__ = f.__name__
    return wrapped


def _odd(f):
    '''
    Odd functions, such as sinh, overflow toward the argument's sign.
    '''
    def wrapped(x):
        try:
            return f(x)
        except OverflowError:
            return math.copysign(math.inf, x)
    wrapped.__name__ = f.__name__
    return wrapped


def _cast(width):
    def cast(value):
        return Value.raw(value.number.to_width(width))
    cast.__name__ = str(width)
    return cast


def _to_float(value):
    return Value.raw(value.number.to_float())


def _to_unit(unit):
    '''
    Unit function: normalize a raw number into unit, or convert a unitted one.
    '''
    def convert(value):
        if value.is_raw():
            return Value.new(value.number, unit)
        return value.convert(unit)
    convert.__name__ = unit.canonical
    return convert


def _compare(symbol):
    return lambda a, b: a.compare(symbol, b)


CONSTANTS = {
    'PI': lambda: Value.double(math.pi),
    'E': lambda: Value.double(math.e),
    'TAU': lambda: Value.double(math.tau),
    'NAN': lambda: Value.double(math.nan),
    'INF': lambda: Value.double(math.inf),
    'NEG_INF': lambda: Value.double(-math.inf),
    'F64_MIN': lambda: Value.double(-sys.float_info.max),
    'F64_MAX': lambda: Value.double(sys.float_info.max),
}
# U8_MIN, U8_MAX, ..., I64_MAX
for _width in Width:
    CONSTANTS[_width.name + '_MIN'] = (
        lambda width=_width: Value.integer(width.min, width))
    CONSTANTS[_width.name + '_MAX'] = (
        lambda width=_width: Value.integer(width.max, width))
del _width


OPERATORS = {
    '+u': Unary('+u', lambda v: v),
    '-u': Unary('-u', lambda v: -_signed(v)),
    '!u': Unary('!u', lambda v: v.logical_not()),
    '~u': Unary('~u', lambda v: ~v),

    '+': Binary('+', lambda a, b: a + b),
    '-': Binary('-', lambda a, b: _signed(a) - _signed(b)),
    '*': Binary('*', lambda a, b: a * b),
    '/': Binary('/', lambda a, b: a / b),
    '%': Binary('%', lambda a, b: a % b),

    '&': Binary('&', lambda a, b: a & b),
    '|': Binary('|', lambda a, b: a | b),
    '^': Binary('^', lambda a, b: a ^ b),
    '<<': Binary('<<', lambda a, b: a << b),
    '>>': Binary('>>', lambda a, b: a >> b),

    '&&': Binary('&&', lambda a, b: Value.boolean(a and b)),
    '||': Binary('||', lambda a, b: Value.boolean(a or b)),
}
for _symbol in ('<', '>', '<=', '>=', '==', '!='):
    OPERATORS[_symbol] = Binary(_symbol, _compare(_symbol))
del _symbol


MATH = {
    'sin': math.sin,
    'cos': math.cos,
    'tan': math.tan,
    'asin': math.asin,
    'acos': math.acos,
    'atan': math.atan,
    'sinh': _odd(math.sinh),
    'cosh': math.cosh,
    'tanh': math.tanh,
    'floor': _integral(math.floor),
    'ceil': _integral(math.ceil),
    'round': _integral(_round),
    'trunc': _integral(math.trunc),
    'sqrt': math.sqrt,
    'cbrt': lambda x: math.copysign(abs(x) ** (1 / 3), x),
    'exp': math.exp,
    'ln': _logarithm(math.log),
    'log2': _logarithm(math.log2),
    'log10': _logarithm(math.log10),
    'deg': math.degrees,
    'rad': math.radians,
}

FUNCTIONS = dict(OPERATORS)
FUNCTIONS.update({name: Unary(name, _float_function(f))
                  for name, f
                  in MATH.items()})
FUNCTIONS['abs'] = Unary('abs', abs)
FUNCTIONS.update({str(width): Unary(str(width), _cast(width))
                  for width
                  in Width})
FUNCTIONS['f64'] = Unary('f64', _to_float)
FUNCTIONS.update({unit.canonical: Unary(unit.canonical, _to_unit(unit))
                  for unit
                  in Unit
                  if not unit.is_raw()})


# Alternate spellings, one hop to a canonical name.
ALIASES = {
    'B': 'byte',
    'K': 'kilobyte',
    'KB': 'kilobyte',
    'KiB': 'kilobyte',
    'M': 'megabyte',
    'MB': 'megabyte',
    'MiB': 'megabyte',
    'G': 'gigabyte',
    'GB': 'gigabyte',
    'GiB': 'gigabyte',
    'T': 'terabyte',
    'TB': 'terabyte',
    'TiB': 'terabyte',
    'P': 'petabyte',
    'PB': 'petabyte',
    'PiB': 'petabyte',
    'C': 'celsius',
    'degC': 'celsius',
    'F': 'fahrenheit',
    'degF': 'fahrenheit',
    'degK': 'kelvin',
    'float': 'f64',
}

assert not ALIASES.keys() & ALIASES.values()
assert not ALIASES.keys() & (FUNCTIONS.keys() | CONSTANTS.keys())
assert set(ALIASES.values()) <= FUNCTIONS.keys() | CONSTANTS.keys()


LEFT = 'left'
RIGHT = 'right'

# Operator: (precedence, associativity). Higher binds tighter.
PRECEDENCE = {
    '+u': (11, RIGHT),
    '-u': (11, RIGHT),
    '!u': (11, RIGHT),
    '~u': (11, RIGHT),

    '*': (10, LEFT),
    '/': (10, LEFT),
    '%': (10, LEFT),

    '+': (9, LEFT),
    '-': (9, LEFT),

    '<<': (8, LEFT),
    '>>': (8, LEFT),

    '>': (7, LEFT),
    '<': (7, LEFT),
    '>=': (7, LEFT),
    '<=': (7, LEFT),

    '==': (6, LEFT),
    '!=': (6, LEFT),

    '&': (5, LEFT),
    '^': (4, LEFT),
    '|': (3, LEFT),

    '&&': (2, LEFT),
    '||': (2, LEFT),

    # Never popped by precedence, only by a closing parenthesis.
    '(': (0, RIGHT),
}

assert OPERATORS.keys() < PRECEDENCE.keys()


def resolve_alias(name):
    return ALIASES.get(name, name)


def lookup_constant(name):
    '''
    Return Value of constant with name (or alias), or None.
    '''
    producer = CONSTANTS.get(resolve_alias(name))
    if producer is None:
        return None
    return producer()


def lookup_function(name):
    '''
    Return Unary or Binary operation with name (or alias), or None.
    '''
    return FUNCTIONS.get(resolve_alias(name))


def precedence(symbol):
    '''
    Return (precedence, associativity) of operator symbol.
    '''
    return PRECEDENCE[symbol]
