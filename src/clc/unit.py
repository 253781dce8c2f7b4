'''
Physical units a Value may carry.

Size units share bytes as a base, so once normalized any two of them hold the
same number and only display differs. Temperatures have no common base and
convert pairwise with affine formulas.
'''

from enum import Enum

from .number import Float, Integer, Width
from .util import IncompatibleUnits


RAW_GROUP = 'raw'
SIZE_GROUP = 'size'
TEMPERATURE_GROUP = 'temperature'


class Unit(Enum):
    '''
    A unit: its group, display symbol, and, for sizes, its power of 1024.
    '''
    RAW = ('raw', RAW_GROUP, '', None)

    BYTE = ('byte', SIZE_GROUP, 'B', 0)
    KILOBYTE = ('kilobyte', SIZE_GROUP, 'K', 1)
    MEGABYTE = ('megabyte', SIZE_GROUP, 'M', 2)
    GIGABYTE = ('gigabyte', SIZE_GROUP, 'G', 3)
    TERABYTE = ('terabyte', SIZE_GROUP, 'T', 4)
    PETABYTE = ('petabyte', SIZE_GROUP, 'P', 5)

    CELSIUS = ('celsius', TEMPERATURE_GROUP, '°C', None)
    FAHRENHEIT = ('fahrenheit', TEMPERATURE_GROUP, '°F', None)
    KELVIN = ('kelvin', TEMPERATURE_GROUP, '°K', None)

    def __init__(self, canonical, group, symbol, power):
        self.canonical = canonical
        self.group = group
        self.symbol = symbol
        self.power = power

    def __str__(self):
        return self.symbol

    def is_raw(self):
        return self is Unit.RAW

    def is_size(self):
        return self.group == SIZE_GROUP

    def is_temperature(self):
        return self.group == TEMPERATURE_GROUP

    @property
    def scale(self):
        '''
        Bytes per one of this unit. Only defined for sizes.
        '''
        return 1024 ** self.power

    @classmethod
    def group_members(cls, group):
        return [unit for unit in cls if unit.group == group]

    @classmethod
    def from_symbol(cls, symbol):
        '''
        Unit for display symbol (e.g., K, °F), or None. Bare ° is Celsius.
        '''
        if symbol == '°':
            return cls.CELSIUS
        return {unit.symbol: unit for unit in cls}.get(symbol)

    @classmethod
    def from_name(cls, name):
        return {unit.canonical: unit for unit in cls}.get(name)

    def normalize(self, number):
        '''
        Bring a number expressed in this unit into the group's base scale.

        1 kilobyte becomes 1024 (bytes, unsigned). Temperatures have no base,
        they only become floats.
        '''
        if self.is_size():
            return (number * Integer(self.scale, Width.U64)).to_unsigned()
        elif self.is_temperature():
            return number.to_float()
        return number

    def specialize(self, number):
        '''
        Express a base-scale number in this unit, for display.

        1024 (bytes) becomes 1.0 kilobyte.
        '''
        if self is Unit.BYTE:
            return number.to_unsigned()
        elif self.is_size():
            return number.to_float() / Float(self.scale)
        return number

    @staticmethod
    def convert(number, source, target):
        '''
        Convert a stored number from source to target unit.

        Raises IncompatibleUnits across groups.
        '''
        if source is target:
            return number
        elif source.is_raw():
            return target.normalize(number)
        elif target.is_raw():
            return source.normalize(number)
        elif source.is_size() and target.is_size():
            return number
        elif (source, target) in _TEMPERATURES:
            return Float(_TEMPERATURES[source, target](float(number)))
        raise IncompatibleUnits('Cannot convert {} ({}) to {} ({})'.format(
            source.canonical, source.group, target.canonical, target.group))


def _celsius_to_fahrenheit(c):
    return c * 9 / 5 + 32


def _fahrenheit_to_celsius(f):
    return (f - 32) * 5 / 9


def _celsius_to_kelvin(c):
    return c + 273.15


def _kelvin_to_celsius(k):
    return k - 273.15


_TEMPERATURES = {
    (Unit.CELSIUS, Unit.FAHRENHEIT): _celsius_to_fahrenheit,
    (Unit.CELSIUS, Unit.KELVIN): _celsius_to_kelvin,
    (Unit.FAHRENHEIT, Unit.CELSIUS): _fahrenheit_to_celsius,
    (Unit.FAHRENHEIT, Unit.KELVIN):
        lambda f: _celsius_to_kelvin(_fahrenheit_to_celsius(f)),
    (Unit.KELVIN, Unit.CELSIUS): _kelvin_to_celsius,
    (Unit.KELVIN, Unit.FAHRENHEIT):
        lambda k: _celsius_to_fahrenheit(_kelvin_to_celsius(k)),
}
