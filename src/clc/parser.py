'''
From tokens to a Value.

Each line goes through three separate stages: resolve names, reorder infix
to postfix (shunting-yard), then run the postfix on a value stack.
'''

import logging

from . import functions
from .lexer import IDENTIFIER, LPAREN, NEWLINE, NUMBER, OPERATOR, REFERENCE
from .util import ArityMismatch, ExpressionError, ResolutionError, \
    UnmatchedParen
from .value import Value


logger = logging.getLogger(__name__)


class Paren:
    def __init__(self, lexeme):
        self.lexeme = lexeme

    def __repr__(self):
        return self.lexeme


OPEN = Paren('(')
CLOSE = Paren(')')


class Operator:
    '''
    Operator symbol bound to its operation and precedence.
    '''

    def __init__(self, symbol, operation):
        self.name = symbol
        self.operation = operation
        self.precedence, self.associativity = functions.precedence(symbol)

    def __repr__(self):
        return self.name


class Call:
    '''
    Named function, applied once its parenthesized argument is complete.
    '''

    def __init__(self, name, operation):
        self.name = name
        self.operation = operation

    def __repr__(self):
        return self.name


def split_lines(tokens):
    '''
    Yield token lists of the non-empty lines.
    '''
    line = []
    for token in tokens:
        if token.kind == NEWLINE:
            if line:
                yield line
            line = []
        else:
            line.append(token)
    if line:
        yield line


def resolve(tokens, history=None):
    '''
    Replace literals, references, and constants by Values; bind operators and
    functions to their operations.

    Raises ResolutionError for unknown names.
    '''
    items = []
    for token in tokens:
        if token.kind == NUMBER:
            items.append(token.value)
        elif token.kind == REFERENCE:
            if history is None:
                items.append(Value.zero())
            else:
                items.append(history.get(token.value))
        elif token.kind == IDENTIFIER:
            constant = functions.lookup_constant(token.lexeme)
            if constant is not None:
                items.append(constant)
                continue
            operation = functions.lookup_function(token.lexeme)
            if operation is None:
                raise ResolutionError('Unknown name {!r}'.format(token.lexeme))
            items.append(Call(token.lexeme, operation))
        elif token.kind == OPERATOR:
            operation = functions.OPERATORS.get(token.lexeme)
            if operation is None:
                raise ResolutionError(
                    'Unsupported operator {!r}'.format(token.lexeme))
            items.append(Operator(token.lexeme, operation))
        elif token.kind == LPAREN:
            items.append(OPEN)
        else:
            items.append(CLOSE)
    return items


def to_postfix(items):
    '''
    Shunting-yard: reorder resolved infix items into postfix.

    Raises UnmatchedParen.
    '''
    output = []
    stack = []
    for item in items:
        if isinstance(item, Value):
            output.append(item)
        elif isinstance(item, Call):
            stack.append(item)
        elif isinstance(item, Operator):
            if item.associativity == functions.LEFT:
                while stack and \
                        isinstance(stack[-1], Operator) and \
                        stack[-1].precedence >= item.precedence:
                    output.append(stack.pop())
            stack.append(item)
        elif item is OPEN:
            stack.append(item)
        else:
            while stack and stack[-1] is not OPEN:
                output.append(stack.pop())
            if not stack:
                raise UnmatchedParen("Encountered ')' without matching '('")
            stack.pop()
            # f(x) + 1 is f applied to x, not to x + 1.
            if stack and isinstance(stack[-1], Call):
                output.append(stack.pop())
    while stack:
        item = stack.pop()
        if item is OPEN:
            raise UnmatchedParen("Unmatched '('")
        output.append(item)
    return output


def _pop(stack, n, name):
    '''
    Pop n operands, leftmost first.
    '''
    if len(stack) < n:
        raise ArityMismatch('Expected {} argument(s) to {}, found {}'.format(
            n, name, len(stack)))
    operands = [stack.pop() for _ in range(n)]
    # Reverse, or 8 - 2 would become 2 - 8.
    return reversed(operands)


def evaluate_postfix(postfix):
    '''
    Run postfix items on a value stack and return the one remaining Value.

    An empty expression is zero. Raises ArityMismatch when an operation is
    short of operands and ExpressionError when values are left over.
    '''
    stack = []
    for item in postfix:
        if isinstance(item, Value):
            stack.append(item)
            continue
        operation = item.operation
        stack.append(operation(*_pop(stack, operation.arity, item.name)))
    if not stack:
        return Value.zero()
    if len(stack) != 1:
        raise ExpressionError(
            'Expected one result, found {}; missing operator?'.format(
                len(stack)))
    return stack.pop()


def format_postfix(postfix):
    return ' '.join(repr(item) if not isinstance(item, Value) else str(item)
                    for item
                    in postfix)


def evaluate_line(tokens, history=None):
    postfix = to_postfix(resolve(tokens, history))
    logger.debug('postfix: %s', format_postfix(postfix))
    return evaluate_postfix(postfix)


def parse_and_evaluate(tokens, history=None):
    '''
    Evaluate every line of tokens and return the last line's Value.

    Each result is pushed to history, if given, so later lines can refer to
    earlier ones as $1. No lines at all is zero.
    '''
    result = Value.zero()
    for line in split_lines(tokens):
        result = evaluate_line(line, history)
        logger.debug('result: %r', result)
        if history is not None:
            history.push(result)
    return result
