from functools import wraps


class ClcError(Exception):
    '''
    Base of every error a user can cause.

    The message is always the first argument.
    '''
    pass


class LexError(ClcError):
    '''
    Input text could not be split into tokens.

    :param message: Human readable description.
    :param slice: The offending piece of input.
    :param position: Offset of the slice in the input.
    '''
    def __init__(self, message, slice, position):
        super().__init__(message, slice, position)
        self.slice = slice
        self.position = position


class InvalidCharacter(LexError):
    pass


class MalformedLiteral(LexError):
    pass


class UnterminatedLiteral(LexError):
    pass


class ResolutionError(ClcError):
    '''
    Identifier that is neither a constant, a function nor an alias.
    '''
    pass


class ArityMismatch(ClcError):
    pass


class ExpressionError(ClcError):
    '''
    Token sequence that doesn't form a single expression.
    '''
    pass


class UnmatchedParen(ExpressionError):
    pass


class MathError(ClcError):
    pass


class DivisionByZero(MathError):
    pass


class NegativeShift(MathError):
    pass


class UnitError(ClcError):
    pass


class IncompatibleUnits(UnitError):
    pass


def wrap_user_errors(fmt):
    '''
    Decorator that converts unexpected exceptions to ClcErrors.

    Passes through ClcErrors. The format string is filled in with the
    wrapped function's arguments.
    '''
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except ClcError:
                raise
            except Exception as e:
                raise ClcError(fmt.format(*args, **kwargs), e) from e
        return wrapper
    return decorator
