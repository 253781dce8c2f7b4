'''
A Number with a Unit.

Unitted numbers are stored in their group's base scale (bytes for sizes) and
only specialized back into the unit for display.
'''

import operator

import regex

from .number import Float, Integer, Width
from .unit import Unit


# Comparisons yield raw u8 booleans.
COMPARISONS = {
    '<': operator.lt,
    '>': operator.gt,
    '<=': operator.le,
    '>=': operator.ge,
    '==': operator.eq,
    '!=': operator.ne,
}

MODES = ('plain', 'hex', 'octal', 'binary', 'all')

# How a Value is written to, and read back from, the history file.
TYPED = regex.compile(r'''
                      ^
                      (?<type>[iu](?:8|16|32|64)|f64)
                      \x20
                      (?<value>\S+)
                      (?:
                          \x20
                          (?<unit>[a-z]+)
                      )?
                      $
                      ''', flags=regex.VERBOSE | regex.VERSION1)


class Value:
    '''
    Result of evaluating an expression: number plus unit.

    The constructor stores the number as given. Use new() to have it
    normalized into the unit's base scale.
    '''

    def __init__(self, number, unit=Unit.RAW):
        self.number = number
        self.unit = unit

    @classmethod
    def new(cls, number, unit):
        '''
        Value of number expressed in unit, e.g. new(3, KILOBYTE) holds 3072.
        '''
        return cls(unit.normalize(number), unit)

    @classmethod
    def raw(cls, number):
        return cls(number, Unit.RAW)

    @classmethod
    def integer(cls, value, width=Width.U64):
        return cls(Integer(value, width))

    @classmethod
    def double(cls, value):
        return cls(Float(value))

    @classmethod
    def boolean(cls, value):
        return cls(Integer(bool(value), Width.U8))

    @classmethod
    def zero(cls):
        '''
        What empty expressions and missing history entries evaluate to.
        '''
        return cls(Integer(0, Width.U64))

    def is_integer(self):
        return self.number.is_integer()

    def is_raw(self):
        return self.unit.is_raw()

    def convert(self, unit):
        '''
        Same quantity in another unit. Raises IncompatibleUnits.
        '''
        if unit.is_raw():
            return type(self).raw(self.unit.specialize(self.number))
        return type(self)(Unit.convert(self.number, self.unit, unit), unit)

    def _align(self, other):
        '''
        Return other's number expressed in the unit of the result, and that
        unit.

        Raw operands are plain scalars; two unitted operands meet in the left
        one's unit.
        '''
        if self.unit.is_raw():
            return other.number, other.unit
        elif other.unit.is_raw():
            return other.number, self.unit
        return Unit.convert(other.number, other.unit, self.unit), self.unit

    def _binary(self, op, other):
        number, unit = self._align(other)
        return type(self)(op(self.number, number), unit)

    def __add__(self, other):
        return self._binary(operator.add, other)

    def __sub__(self, other):
        return self._binary(operator.sub, other)

    def __mul__(self, other):
        return self._binary(operator.mul, other)

    def __truediv__(self, other):
        return self._binary(operator.truediv, other)

    def __mod__(self, other):
        return self._binary(operator.mod, other)

    def __and__(self, other):
        return self._binary(operator.and_, other)

    def __or__(self, other):
        return self._binary(operator.or_, other)

    def __xor__(self, other):
        return self._binary(operator.xor, other)

    def __lshift__(self, other):
        return self._binary(operator.lshift, other)

    def __rshift__(self, other):
        return self._binary(operator.rshift, other)

    def __neg__(self):
        return type(self)(-self.number, self.unit)

    def __invert__(self):
        return type(self)(~self.number, self.unit)

    def __abs__(self):
        return type(self)(abs(self.number), self.unit)

    def __bool__(self):
        return bool(self.number)

    def logical_not(self):
        return type(self).boolean(not self)

    def compare(self, symbol, other):
        '''
        Compare with other using symbol (e.g., <=), giving a raw u8 0 or 1.
        '''
        number, _ = self._align(other)
        return type(self).boolean(COMPARISONS[symbol](self.number, number))

    def __eq__(self, other):
        if not isinstance(other, Value):
            return NotImplemented
        return self.unit is other.unit and self.number == other.number

    __hash__ = None

    def to_signed(self):
        return type(self)(self.number.to_signed(), self.unit)

    def render(self, mode='plain'):
        '''
        Display string in one of MODES, suffixed by the unit symbol.

        Floats have no hex, octal, or binary form and render plain.
        '''
        if mode not in MODES:
            raise ValueError('Unknown mode {!r}'.format(mode))
        number = self.unit.specialize(self.number)
        if mode == 'all':
            if not number.is_integer():
                return self.render()
            return '\n'.join(self.render(each)
                             for each
                             in MODES
                             if each != 'all')
        formatter = {
            'plain': number.as_string,
            'hex': number.as_hex,
            'octal': number.as_octal,
            'binary': number.as_binary,
        }[mode]
        return formatter() + self.unit.symbol

    def pretty(self):
        '''
        Summary form: floats to two decimals unless integral.
        '''
        number = self.unit.specialize(self.number)
        return number.as_pretty_string() + self.unit.symbol

    def __str__(self):
        return self.render()

    def __repr__(self):
        if self.unit.is_raw():
            return 'Value({!r})'.format(self.number)
        return 'Value({!r}, {})'.format(self.number, self.unit.name)

    def as_typed_string(self):
        '''
        E.g., u64 42, f64 0.5, u64 3072 kilobyte.
        '''
        typed = self.number.as_typed_string()
        if self.unit.is_raw():
            return typed
        return '{} {}'.format(typed, self.unit.canonical)

    @classmethod
    def from_typed_string(cls, line):
        '''
        Parse as_typed_string() output. None if it doesn't parse.
        '''
        match = TYPED.match(line.strip())
        if match is None:
            return None
        unit = Unit.RAW
        if match.group('unit'):
            unit = Unit.from_name(match.group('unit'))
            if unit is None:
                return None
        try:
            if match.group('type') == 'f64':
                number = Float(float(match.group('value')))
            else:
                width = Width.from_name(match.group('type'))
                value = int(match.group('value'))
                if not width.min <= value <= width.max:
                    return None
                number = Integer(value, width)
        except ValueError:
            return None
        return cls(number, unit)
