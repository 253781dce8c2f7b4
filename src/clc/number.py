'''
Fixed-width integers and doubles.

Number is a closed sum of exactly two variants, Integer and Float. Every
operation handles both explicitly rather than leaning on Python's numeric
promotion, so each arithmetic and cast path can be followed (and tested) on
its own.

Mixed operands: the left operand decides. An Integer on the left narrows a
Float right operand (truncating toward zero, saturating at the width's range)
and re-reads an Integer right operand in its own width. A Float on the left
widens an Integer right operand.
'''

from enum import Enum
import operator
import math
import sys

from .util import DivisionByZero, NegativeShift


# Equality involving a float is approximate: absolute epsilon, or within a few
# units in the last place.
EPSILON = sys.float_info.epsilon
ULPS = 4


class Width(Enum):
    '''
    Bit-length and signedness of an Integer.
    '''
    U8 = (8, False)
    U16 = (16, False)
    U32 = (32, False)
    U64 = (64, False)
    I8 = (8, True)
    I16 = (16, True)
    I32 = (32, True)
    I64 = (64, True)

    def __init__(self, bits, signed):
        self.bits = bits
        self.signed = signed

    def __str__(self):
        return self.name.lower()

    @classmethod
    def from_name(cls, name):
        '''
        Return width for display name (e.g., u32), or None.
        '''
        return {str(width): width for width in cls}.get(name)

    @classmethod
    def of(cls, bits, signed):
        for width in cls:
            if width.bits == bits and width.signed == signed:
                return width
        raise ValueError('No {}signed {}-bit width'.format('' if signed else 'un',
                                                            bits))

    @property
    def bitmask(self):
        return (1 << self.bits) - 1

    @property
    def min(self):
        return -(1 << (self.bits - 1)) if self.signed else 0

    @property
    def max(self):
        if self.signed:
            return (1 << (self.bits - 1)) - 1
        return self.bitmask

    def mask(self, x):
        '''
        Truncate (two's complement) x to this width's bit-length.
        '''
        return x & self.bitmask

    def interpret(self, bits):
        '''
        Read masked bits as a Python int under this width's signedness.
        '''
        if self.signed and bits >> (self.bits - 1):
            return bits - (1 << self.bits)
        return bits

    def to_signed(self):
        return type(self).of(self.bits, True)

    def to_unsigned(self):
        return type(self).of(self.bits, False)


def _truncate(value, width):
    '''
    Float to int, toward zero, saturating at width's range. NaN is zero.
    '''
    if math.isnan(value):
        return 0
    if value >= width.max:
        return width.max
    if value <= width.min:
        return width.min
    return math.trunc(value)


def approx_equal(a, b):
    '''
    Tolerant float equality. NaN is never equal, infinities only to
    themselves.
    '''
    if a == b:
        return True
    if not (math.isfinite(a) and math.isfinite(b)):
        return False
    difference = abs(a - b)
    if difference <= EPSILON:
        return True
    return difference <= ULPS * math.ulp(max(abs(a), abs(b)))


def _format_float(value):
    if value.is_integer():
        return '{:.0f}'.format(value)
    return repr(value)


# C semantics: quotient truncates toward zero, remainder follows the dividend.
def _int_div(a, b):
    if b == 0:
        raise DivisionByZero('Integer division by zero')
    quotient = abs(a) // abs(b)
    return -quotient if (a < 0) != (b < 0) else quotient


def _int_rem(a, b):
    if b == 0:
        raise DivisionByZero('Integer remainder by zero')
    return a - b * _int_div(a, b)


def _float_div(a, b):
    if b == 0:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def _float_rem(a, b):
    try:
        return math.fmod(a, b)
    except ValueError:
        # fmod(x, 0) and fmod(inf, x)
        return math.nan


def _shift_left(a, count, width):
    return a << min(count, width.bits)


def _shift_right(a, count, width):
    return a >> min(count, width.bits)


# symbol: (integer implementation, float implementation)
ARITHMETIC = {
    '+': (operator.add, operator.add),
    '-': (operator.sub, operator.sub),
    '*': (operator.mul, operator.mul),
    '/': (_int_div, _float_div),
    '%': (_int_rem, _float_rem),
}

BITWISE = {
    '&': operator.and_,
    '|': operator.or_,
    '^': operator.xor,
}

SHIFTS = {
    '<<': _shift_left,
    '>>': _shift_right,
}


class Number:
    '''
    Either an Integer or a Float. Never instantiated directly.

    Python operators map onto arithmetic() and bitwise(), which each variant
    implements for both kinds of right operand.
    '''

    def is_integer(self):
        return isinstance(self, Integer)

    def is_float(self):
        return isinstance(self, Float)

    def __add__(self, other):
        return self.arithmetic('+', other)

    def __sub__(self, other):
        return self.arithmetic('-', other)

    def __mul__(self, other):
        return self.arithmetic('*', other)

    def __truediv__(self, other):
        return self.arithmetic('/', other)

    def __mod__(self, other):
        return self.arithmetic('%', other)

    def __and__(self, other):
        return self.bitwise('&', other)

    def __or__(self, other):
        return self.bitwise('|', other)

    def __xor__(self, other):
        return self.bitwise('^', other)

    def __lshift__(self, other):
        return self.bitwise('<<', other)

    def __rshift__(self, other):
        return self.bitwise('>>', other)

    def __eq__(self, other):
        if not isinstance(other, Number):
            return NotImplemented
        a, b, inexact = self._comparable(other)
        if inexact:
            return approx_equal(a, b)
        return a == b

    def __ne__(self, other):
        equal = self.__eq__(other)
        if equal is NotImplemented:
            return equal
        return not equal

    # Ordering is exact, even when a float is involved.
    def __lt__(self, other):
        a, b, _ = self._comparable(other)
        return a < b

    def __le__(self, other):
        a, b, _ = self._comparable(other)
        return a <= b

    def __gt__(self, other):
        a, b, _ = self._comparable(other)
        return a > b

    def __ge__(self, other):
        a, b, _ = self._comparable(other)
        return a >= b

    __hash__ = None

    def __str__(self):
        return self.as_string()


class Integer(Number):
    '''
    Integer of a fixed Width.

    bits holds the masked (two's complement) pattern, value its reading
    under the width's signedness.
    '''

    def __init__(self, value, width=Width.U64):
        self.width = width
        self.bits = width.mask(int(value))

    @property
    def value(self):
        return self.width.interpret(self.bits)

    def _rhs(self, other):
        if isinstance(other, Integer):
            return other.to_width(self.width).value
        elif isinstance(other, Float):
            return _truncate(other.value, self.width)
        raise TypeError('Not a Number: {!r}'.format(other))

    def arithmetic(self, symbol, other):
        integer_op, _ = ARITHMETIC[symbol]
        return Integer(integer_op(self.value, self._rhs(other)), self.width)

    def bitwise(self, symbol, other):
        if isinstance(other, Float):
            return Float(math.nan)
        if symbol in SHIFTS:
            # The count is read as is, not in the shifted operand's width.
            count = other.value
            if count < 0:
                raise NegativeShift('Negative shift count {}'.format(count))
            return Integer(SHIFTS[symbol](self.value, count, self.width),
                           self.width)
        rhs = self._rhs(other)
        return Integer(BITWISE[symbol](self.bits, self.width.mask(rhs)),
                       self.width)

    def _comparable(self, other):
        if isinstance(other, Integer):
            return self.value, other.to_width(self.width).value, False
        return float(self.value), other.value, True

    def __neg__(self):
        return Integer(-self.value, self.width)

    def __invert__(self):
        return Integer(~self.bits, self.width)

    def __abs__(self):
        # abs(I8_MIN) wraps back to I8_MIN.
        return Integer(abs(self.value), self.width)

    def __bool__(self):
        return self.bits != 0

    def __float__(self):
        return float(self.value)

    def __int__(self):
        return self.value

    def to_width(self, width):
        return Integer(self.value, width)

    def to_signed(self):
        return Integer(self.bits, self.width.to_signed())

    def to_unsigned(self):
        return Integer(self.bits, self.width.to_unsigned())

    def to_float(self):
        return Float(float(self.value))

    def as_string(self):
        return str(self.value)

    as_pretty_string = as_string

    def as_hex(self):
        return '{:#x}'.format(self.bits)

    def as_octal(self):
        return '{:#o}'.format(self.bits)

    def as_binary(self):
        return '{:#b}'.format(self.bits)

    def as_typed_string(self):
        return '{} {}'.format(self.width, self.value)

    def __repr__(self):
        return 'Integer({}, {})'.format(self.value, self.width)


class Float(Number):
    '''
    IEEE 754 double.
    '''

    def __init__(self, value):
        self.value = float(value)

    def _rhs(self, other):
        if isinstance(other, Integer):
            return float(other.value)
        elif isinstance(other, Float):
            return other.value
        raise TypeError('Not a Number: {!r}'.format(other))

    def arithmetic(self, symbol, other):
        _, float_op = ARITHMETIC[symbol]
        return Float(float_op(self.value, self._rhs(other)))

    def bitwise(self, symbol, other):
        # No bit pattern to speak of.
        return Float(math.nan)

    def _comparable(self, other):
        return self.value, self._rhs(other), True

    def __neg__(self):
        return Float(-self.value)

    def __invert__(self):
        return Float(math.nan)

    def __abs__(self):
        return Float(abs(self.value))

    def __bool__(self):
        return self.value != 0

    def __float__(self):
        return self.value

    def __int__(self):
        return _truncate(self.value, Width.I64)

    def to_width(self, width):
        return Integer(_truncate(self.value, width), width)

    def to_signed(self):
        return self.to_width(Width.I64)

    def to_unsigned(self):
        return self.to_width(Width.U64)

    def to_float(self):
        return Float(self.value)

    def as_string(self):
        return _format_float(self.value)

    def as_pretty_string(self):
        if self.value.is_integer():
            return '{:.0f}'.format(self.value)
        return '{:.2f}'.format(self.value)

    # No hex, octal or binary for floats.
    as_hex = as_octal = as_binary = as_string

    def as_typed_string(self):
        return 'f64 {!r}'.format(self.value)

    def __repr__(self):
        return 'Float({!r})'.format(self.value)
