'''
History of results
'''

import logging

from clc.history import History
from clc.number import Float, Integer, Width
from clc.unit import Unit
from clc.value import Value

from pytest import raises


def test_newest_first():
    history = History(capacity=3)
    for i in range(1, 5):
        history.push(Value.integer(i))
    assert len(history) == 3
    assert history.capacity == 3
    assert history.get(1) == Value.integer(4)
    assert history.get(3) == Value.integer(2)
    assert [value.number.value for value in history] == [4, 3, 2]


def test_out_of_range_is_zero():
    history = History()
    assert history.get(1) == Value.zero()
    history.push(Value.integer(5))
    assert history.get(0) == Value.zero()
    assert history.get(2) == Value.zero()


def test_capacity_positive():
    with raises(ValueError):
        History(capacity=0)


def test_save_and_load(tmp_path):
    filename = str(tmp_path / 'history')
    history = History(filename)
    values = [Value.integer(-5, Width.I8),
              Value.double(0.5),
              Value.new(Integer(3), Unit.KILOBYTE),
              Value.new(Float(-40), Unit.FAHRENHEIT)]
    for value in values:
        history.push(value)
    history.save()
    with open(filename, encoding='utf-8') as fp:
        assert fp.readline() == 'f64 -40.0 fahrenheit\n'
    loaded = History(filename).load()
    assert list(loaded) == list(history)


def test_load_respects_capacity(tmp_path):
    filename = tmp_path / 'history'
    filename.write_text('u64 1\nu64 2\nu64 3\n', encoding='utf-8')
    history = History(str(filename), capacity=2).load()
    assert [value.number.value for value in history] == [1, 2]


def test_load_missing_file(tmp_path):
    history = History(str(tmp_path / 'nope')).load()
    assert len(history) == 0


def test_load_skips_bad_lines(tmp_path, caplog):
    filename = tmp_path / 'history'
    filename.write_text('u64 1\ngarbage\n\nu8 999\ni8 -2\n', encoding='utf-8')
    with caplog.at_level(logging.WARNING, logger='clc.history'):
        history = History(str(filename)).load()
    assert list(history) == [Value.integer(1), Value.integer(-2, Width.I8)]
    assert 'garbage' in caplog.text
    assert 'u8 999' in caplog.text


def test_load_skips_undecodable_lines(tmp_path, caplog):
    filename = tmp_path / 'history'
    filename.write_bytes(b'u64 1\n\xff\xfe\nu64 2\n')
    with caplog.at_level(logging.WARNING, logger='clc.history'):
        history = History(str(filename)).load()
    assert list(history) == [Value.integer(1), Value.integer(2)]
    assert 'skipping unreadable history entry' in caplog.text


def test_save_failure_logged(tmp_path, caplog):
    history = History(str(tmp_path / 'missing' / 'history'))
    history.push(Value.integer(1))
    with caplog.at_level(logging.WARNING, logger='clc.history'):
        history.save()
    assert 'Failed to save history' in caplog.text


def test_save_without_file():
    history = History()
    history.push(Value.integer(1))
    history.save()
