'''
Values: rendering, comparisons, typed strings
'''

import math

from clc.number import Float, Integer, Width
from clc.unit import Unit
from clc.value import Value

from pytest import mark, raises


def test_render_modes():
    value = Value.integer(255)
    assert value.render() == '255'
    assert value.render('hex') == '0xff'
    assert value.render('octal') == '0o377'
    assert value.render('binary') == '0b11111111'
    assert value.render('all') == '255\n0xff\n0o377\n0b11111111'


def test_render_float_ignores_base():
    value = Value.double(0.25)
    assert value.render('hex') == '0.25'
    assert value.render('all') == '0.25'


def test_render_unknown_mode():
    with raises(ValueError):
        Value.zero().render('roman')


def test_render_unit():
    assert Value.new(Integer(2048), Unit.BYTE).render('hex') == '0x800B'
    assert Value.new(Integer(100), Unit.CELSIUS).render() == '100°C'


def test_pretty():
    assert Value.double(1 / 3).pretty() == '0.33'
    assert Value.double(3.0).pretty() == '3'
    assert Value.integer(7).pretty() == '7'


def test_boolean():
    assert Value.boolean(True) == Value.integer(1, Width.U8)
    assert Value.boolean(0) == Value.integer(0, Width.U8)
    assert Value.zero().logical_not() == Value.boolean(True)


def test_compare():
    assert Value.integer(1).compare('<', Value.integer(2)) == \
        Value.boolean(True)
    assert Value.integer(1).compare('==', Value.double(1.0)) == \
        Value.boolean(True)
    assert Value.double(math.nan).compare('==', Value.double(math.nan)) == \
        Value.boolean(False)


def test_compare_across_units():
    kilobyte = Value.new(Integer(1), Unit.KILOBYTE)
    assert kilobyte.compare('==', Value.new(Integer(1024), Unit.BYTE)) == \
        Value.boolean(True)


def test_equality_needs_same_unit():
    assert Value.new(Integer(1), Unit.BYTE) != Value.integer(1)
    assert Value.integer(1) == Value.integer(1)


def test_arithmetic_units():
    kilobyte = Value.new(Integer(1), Unit.KILOBYTE)
    total = kilobyte + Value.new(Integer(512), Unit.BYTE)
    assert total.unit is Unit.KILOBYTE
    assert total.render() == '1.5K'
    # Raw operands are scalars.
    assert (kilobyte * Value.integer(2)).render() == '2K'
    assert (Value.integer(2) * kilobyte).unit is Unit.KILOBYTE


@mark.parametrize('value', [
    Value.integer(42),
    Value.integer(-5, Width.I8),
    Value.integer(65535, Width.U16),
    Value.double(0.5),
    Value.double(-1e-300),
    Value.new(Integer(3), Unit.KILOBYTE),
    Value.new(Float(21.5), Unit.CELSIUS),
])
def test_typed_strings(value):
    line = value.as_typed_string()
    assert Value.from_typed_string(line) == value


def test_typed_string_forms():
    assert Value.integer(42).as_typed_string() == 'u64 42'
    assert Value.new(Integer(3), Unit.KILOBYTE).as_typed_string() == \
        'u64 3072 kilobyte'
    assert math.isnan(Value.from_typed_string('f64 nan').number.value)


@mark.parametrize('line', [
    '',
    '42',
    'u7 1',
    'u8 300',
    'i8 -129',
    'u64 1.5',
    'f64 x',
    'u64 1 parsec',
    'u64  1',
])
def test_bad_typed_strings(line):
    assert Value.from_typed_string(line) is None
