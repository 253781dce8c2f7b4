'''
Command line calculator.

Evaluates infix expressions with C-style operators, function calls, and
constants, e.g.:

    (1 + 2) * 3
    u8(250) + 10
    sqrt(2) * kilobyte(3)
    celsius(fahrenheit(100))
    $1 >> 4

Integers have an explicit width (u8 through i64) and wrap like registers do.
Values may carry a unit (digital size, temperature) that conversions respect.

Why another calculator?

- Wanted the bit widths of a programmer's calculator and the units of a
  desktop one, at a prompt, in one line.
- bc and dc have no notion of width, and no hex output worth the name.
- Python's REPL does arbitrary precision, which is exactly wrong for
  register arithmetic.
'''

# TODO: Thousands separator formatting.
# TODO: Currency and time units.

from .cli import CLI
from .history import History
from .lexer import Lexer, Token, tokenize
from .number import Float, Integer, Number, Width
from .parser import parse_and_evaluate
from .unit import Unit
from .util import ClcError
from .value import Value


def evaluate(text, history=None):
    '''
    Tokenize, parse, and evaluate text. Return the last line's Value.
    '''
    return parse_and_evaluate(tokenize(text), history)


__all__ = ('CLI', 'ClcError', 'Float', 'History', 'Integer', 'Lexer',
           'Number', 'Token', 'Unit', 'Value', 'Width', 'evaluate',
           'parse_and_evaluate', 'tokenize')
