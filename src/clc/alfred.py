'''
Alfred script filter output.

Alfred shows each item as a candidate the user can copy or paste.
'''

import json

from .unit import Unit


# Most candidates offered for a unitted value.
MAX_UNIT_ITEMS = 4


def _item(text, valid=True, title=None, subtitle=None):
    if subtitle is None:
        subtitle = 'copy+paste as "{}"'.format(text)
    return {
        'arg': text,
        'valid': valid,
        'autocomplete': text,
        'type': 'default',
        'title': text if title is None else title,
        'subtitle': subtitle,
    }


def candidates(value):
    '''
    Return display strings offered for value.

    Raw integers in each base, raw floats once (pretty), unitted values in
    the first few units of their group.
    '''
    if value.is_raw():
        if value.is_integer():
            return [value.render(mode)
                    for mode
                    in ('plain', 'hex', 'octal', 'binary')]
        return [value.pretty()]
    units = Unit.group_members(value.unit.group)[:MAX_UNIT_ITEMS]
    return [value.convert(unit).pretty()
            for unit
            in units]


def alfred_result(value):
    return json.dumps({'items': [_item(text)
                                 for text
                                 in candidates(value)]},
                      ensure_ascii=False)


def alfred_error(message):
    return json.dumps({'items': [_item('...', valid=False, title=str(message),
                                       subtitle='...')]},
                      ensure_ascii=False)
