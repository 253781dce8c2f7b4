'''
Lexer tests
'''

import regex

from clc.lexer import Token, tokenize, is_unary_position, classify_operator, \
    NUMBER, REFERENCE, IDENTIFIER, OPERATOR, LPAREN, RPAREN, NEWLINE
from clc.number import Width
from clc.util import InvalidCharacter, LexError, MalformedLiteral, \
    UnterminatedLiteral

from pytest import mark, raises


def kinds(text):
    return [token.kind for token in tokenize(text)]


def lexemes(text):
    return [token.lexeme for token in tokenize(text)]


@mark.parametrize('text', ['0x1F', '0o37', '0b11111', '31'])
def test_integer_bases(text):
    tokens = tokenize(text)
    assert len(tokens) == 1
    assert tokens[0].kind == NUMBER
    number = tokens[0].value.number
    assert number.is_integer()
    assert number.value == 31
    assert number.width is Width.U64


@mark.parametrize('text, expected', [
    ('2.', 2.0),
    ('.5', 0.5),
    ('3.25', 3.25),
])
def test_floats(text, expected):
    [token] = tokenize(text)
    assert token.value.number.is_float()
    assert token.value.number.value == expected


def test_largest_literal():
    [token] = tokenize('18446744073709551615')
    assert token.value.number.value == Width.U64.max


def test_identifiers():
    assert lexemes('log10(u32 KiB_2)') == ['log10', '(', 'u32', 'KiB_2', ')']
    assert kinds('log10(u32 KiB_2)') == [IDENTIFIER, LPAREN, IDENTIFIER,
                                         IDENTIFIER, RPAREN]


def test_longest_operator():
    assert lexemes('1<<2') == ['1', '<<', '2']
    assert lexemes('1 <= 2 != 3 && 4') == ['1', '<=', '2', '!=', '3', '&&',
                                           '4']
    assert kinds('1<<2') == [NUMBER, OPERATOR, NUMBER]


def test_whitespace_and_newlines():
    assert kinds('\t1 \t+ 2\n3') == [NUMBER, OPERATOR, NUMBER, NEWLINE,
                                     NUMBER]


def test_reference():
    [token] = tokenize('$3')
    assert token.kind == REFERENCE
    assert token.value == 3


@mark.parametrize('text, operator', [
    ('-1', '-u'),
    ('1-1', '-'),
    ('1 - -1', '-'),
    ('(-1)', '-u'),
    ('1*-1', '*'),
    ('1\n-1', '-u'),
    ('(1)-1', '-'),
    ('a-1', '-'),
    ('$1-1', '-'),
    ('+1', '+u'),
    ('!1', '!u'),
    ('~1', '~u'),
    ('1 != 2', '!='),
])
def test_first_operator(text, operator):
    assert [token.lexeme
            for token
            in tokenize(text)
            if token.kind == OPERATOR][0] == operator


def test_unary_after_operator():
    assert lexemes('1*-1') == ['1', '*', '-u', '1']
    assert lexemes('- - 3') == ['-u', '-u', '3']


def test_unary_position():
    assert is_unary_position(None)
    assert is_unary_position(Token(OPERATOR, '*'))
    assert is_unary_position(Token(LPAREN, '('))
    assert is_unary_position(Token(NEWLINE, '\n'))
    assert not is_unary_position(Token(RPAREN, ')'))
    assert not is_unary_position(Token(NUMBER, '1'))
    assert not is_unary_position(Token(IDENTIFIER, 'PI'))
    assert not is_unary_position(Token(REFERENCE, '$1'))


def test_always_unary():
    assert classify_operator('!', Token(NUMBER, '1')) == '!u'
    assert classify_operator('~', Token(RPAREN, ')')) == '~u'
    assert classify_operator('*', None) == '*'


def test_invalid_character():
    with raises(InvalidCharacter, match=regex.escape("Unexpected character '#'")) as info:
        tokenize('1 # 2')
    assert info.value.slice == '#'
    assert info.value.position == 2


def test_lone_dot():
    with raises(InvalidCharacter):
        tokenize('1 + .')


@mark.parametrize('text, bad', [
    ('0x1g', '0x1g'),
    ('12ab', '12ab'),
    ('1.2.3', '1.2.3'),
    ('0b102', '0b102'),
    ('2.x', '2.x'),
    ('$0', '$0'),
    ('$01', '$01'),
    ('$1a', '$1a'),
])
def test_malformed_literal(text, bad):
    with raises(MalformedLiteral) as info:
        tokenize(text)
    assert info.value.slice == bad


def test_literal_too_large():
    with raises(MalformedLiteral, match='64 bits'):
        tokenize('18446744073709551616')


@mark.parametrize('text, bad', [
    ('0x', '0x'),
    ('1 + 0b', '0b'),
    ('0o + 1', '0o'),
    ('$', '$'),
])
def test_unterminated_literal(text, bad):
    with raises(UnterminatedLiteral) as info:
        tokenize(text)
    assert info.value.slice == bad


def test_lex_errors_share_base():
    for text in ['@', '0x', '1a']:
        with raises(LexError):
            tokenize(text)
