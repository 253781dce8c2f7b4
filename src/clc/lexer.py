from functools import reduce
import operator

import regex

from .number import Float, Integer, Width
from .util import InvalidCharacter, MalformedLiteral, UnterminatedLiteral
from .value import Value


# Token kinds
NUMBER = 'number'
REFERENCE = 'reference'
IDENTIFIER = 'identifier'
OPERATOR = 'operator'
LPAREN = 'lparen'
RPAREN = 'rparen'
NEWLINE = 'newline'

# Operator lexemes. Unary forms get a 'u' suffix once lexed.
OPERATORS = ['==', '!=', '>=', '<=', '<<', '>>', '&&', '||',
             '=', '>', '<', '&', '|', '^', '~', '!', '+', '-', '*', '/', '%']
ALWAYS_UNARY = {'!', '~'}
MAYBE_UNARY = {'+', '-'}


class Token:
    '''
    A lexeme, its kind, and where it started.

    Numbers carry their parsed Value, references the history index.
    '''

    def __init__(self, kind, lexeme, position=0, value=None):
        self.kind = kind
        self.lexeme = lexeme
        self.position = position
        self.value = value

    def __eq__(self, other):
        if not isinstance(other, Token):
            return NotImplemented
        return (self.kind, self.lexeme) == (other.kind, other.lexeme)

    __hash__ = None

    def __repr__(self):
        return 'Token({!r}, {!r})'.format(self.kind, self.lexeme)


def is_unary_position(previous):
    '''
    Return True if a + or - following previous (None at start of input) is
    a sign rather than an addition or subtraction.
    '''
    return previous is None or previous.kind in {OPERATOR, LPAREN, NEWLINE}


def classify_operator(symbol, previous):
    '''
    Return symbol, suffixed with 'u' if it is a unary operator here.
    '''
    if symbol in ALWAYS_UNARY or \
       symbol in MAYBE_UNARY and is_unary_position(previous):
        return symbol + 'u'
    return symbol


class Lexer:
    '''
    Lexer for the calculator's *regular* grammar.

    Holds no state between calls; instantiate once and reuse.
    '''
    # 0x1f, 0o17, 0b101
    PREFIXED = r'''
                0
                (?:
                    [xX][0-9A-Fa-f]+
                    |
                    [oO][0-7]+
                    |
                    [bB][01]+
                )
                '''
    # 31, 2., .5, 3.25. Float if and only if there's a dot.
    DECIMAL = r'''
               (?:
                   [0-9]+
                   (?:
                       \.
                       [0-9]*
                   )?
               )|(?:
                   \.
                   [0-9]+
               )
               '''
    # A prefix or $ with nothing usable after it.
    UNTERMINATED = r'''
                    (?:
                        0[xXoObB]
                        |
                        \$
                    )
                    (?![0-9A-Za-z_])
                    '''
    # $1, $2, ... Leading zeros are rejected after matching.
    REFERENCE = r'\$[0-9]+'
    IDENTIFIER = r'[A-Za-z][A-Za-z0-9_]*'
    # Longest first, so << isn't lexed as two <.
    OPERATOR = r'(?:' + r'|'.join(map(regex.escape,
                                      sorted(OPERATORS,
                                             key=len,
                                             reverse=True))) + r')'
    SPACE = r'[\x20\t]+'

    # All possible lexemes, in priority order.
    LEXEME = r'(?<prefixed>' + PREFIXED + r')|' \
             r'(?<unterminated>' + UNTERMINATED + r')|' \
             r'(?<decimal>' + DECIMAL + r')|' \
             r'(?<reference>' + REFERENCE + r')|' \
             r'(?<identifier>' + IDENTIFIER + r')|' \
             r'(?<operator>' + OPERATOR + r')|' \
             r'(?<lparen>\()|' \
             r'(?<rparen>\))|' \
             r'(?<newline>\r?\n)|' \
             r'(?<space>' + SPACE + r')'
    # Default regex flags for matching lexemes
    FLAGS = reduce(operator.__or__,
                   {regex.VERSION1,
                    regex.VERBOSE},
                   0)
    # Characters that may not directly follow a numeric literal.
    TRAILING = regex.compile(r'[0-9A-Za-z_.]+')

    def __init__(self):
        self.pattern = regex.compile(type(self).LEXEME, flags=type(self).FLAGS)

    def lex(self, text):
        '''
        Yield tokens for text.

        Whitespace is dropped. Raises a LexError on the first bad lexeme.
        '''
        previous = None
        position = 0
        while position < len(text):
            match = self.pattern.match(text, position)
            if match is None:
                raise InvalidCharacter(
                    'Unexpected character {!r}'.format(text[position]),
                    text[position], position)
            position = match.end()
            kind, lexeme = self.matchedgroup(match)
            if kind == 'space':
                continue
            elif kind == 'unterminated':
                raise UnterminatedLiteral(
                    'Expected digits after {!r}'.format(lexeme),
                    lexeme, match.start())
            elif kind in {'prefixed', 'decimal'}:
                self._check_trailing(text, match)
                token = Token(NUMBER, lexeme, match.start(),
                              self._number(lexeme, match.start()))
            elif kind == REFERENCE:
                self._check_trailing(text, match)
                token = Token(REFERENCE, lexeme, match.start(),
                              self._reference(lexeme, match.start()))
            elif kind == OPERATOR:
                token = Token(OPERATOR,
                              classify_operator(lexeme, previous),
                              match.start())
            else:
                token = Token(kind, lexeme, match.start())
            yield token
            previous = token

    def matchedgroup(self, match):
        '''
        Return (name, text) of the one lexeme group that matched.
        '''
        groups = {key: value
                  for key, value
                  in match.groupdict().items()
                  if value is not None}
        assert len(groups) == 1, groups
        return groups.popitem()

    def _check_trailing(self, text, match):
        '''
        Reject literals running straight into letters, digits or dots (0x1g,
        12ab, 1.2.3).
        '''
        trailing = type(self).TRAILING.match(text, match.end())
        if trailing is not None:
            bad = text[match.start():trailing.end()]
            raise MalformedLiteral('Malformed literal {!r}'.format(bad),
                                   bad, match.start())

    def _number(self, lexeme, position):
        if lexeme[:2].lower() in {'0x', '0o', '0b'}:
            base = {'x': 16, 'o': 8, 'b': 2}[lexeme[1].lower()]
            value = int(lexeme[2:], base)
        elif '.' in lexeme:
            return Value(Float(float(lexeme)))
        else:
            value = int(lexeme)
        if value > Width.U64.max:
            raise MalformedLiteral(
                'Integer literal {} does not fit in 64 bits'.format(lexeme),
                lexeme, position)
        return Value(Integer(value, Width.U64))

    def _reference(self, lexeme, position):
        digits = lexeme[1:]
        if digits.startswith('0'):
            raise MalformedLiteral(
                'History references start at $1, not {}'.format(lexeme),
                lexeme, position)
        return int(digits)


_lexer = Lexer()


def tokenize(text):
    '''
    Return list of tokens for text. Raises LexError.
    '''
    return list(_lexer.lex(text))
