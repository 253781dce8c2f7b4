'''
Alfred script filter JSON
'''

import json

from clc import evaluate
from clc.alfred import MAX_UNIT_ITEMS, alfred_error, alfred_result, \
    candidates


def titles(text):
    return [item['title'] for item in json.loads(text)['items']]


def test_integer_bases():
    assert candidates(evaluate('255')) == ['255', '0xff', '0o377',
                                           '0b11111111']


def test_float_pretty():
    assert candidates(evaluate('1.0 / 3')) == ['0.33']


def test_size_candidates():
    offered = candidates(evaluate('kilobyte(1)'))
    assert len(offered) == MAX_UNIT_ITEMS
    assert offered[:2] == ['1024B', '1K']
    assert offered[2] == '0.00M'


def test_temperature_candidates():
    assert candidates(evaluate('celsius(100)')) == ['100°C', '212°F',
                                                    '373.15°K']


def test_result_items():
    items = json.loads(alfred_result(evaluate('8')))['items']
    assert len(items) == 4
    item = items[1]
    assert item['arg'] == item['title'] == item['autocomplete'] == '0x8'
    assert item['valid'] is True
    assert item['subtitle'] == 'copy+paste as "0x8"'


def test_non_ascii_kept():
    assert '°C' in alfred_result(evaluate('celsius(1)'))


def test_error_item():
    [item] = json.loads(alfred_error('Unknown name \'x\''))['items']
    assert item['valid'] is False
    assert item['title'] == "Unknown name 'x'"
    assert titles(alfred_error('oops')) == ['oops']
