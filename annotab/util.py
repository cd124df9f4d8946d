import io
import os
from contextlib import contextmanager

DEFAULT_ENCODING = 'utf-8'
"""str: Encoding used when a path or binary stream is read or written."""

MISSING = '*'
"""str: Placeholder written for absent positional fields."""

DEFAULT_MAPQ = 255
"""int: SAM mapping quality when none is available."""


class AnnotabError(Exception):
    """
    Base class for all parse and construction errors.
    Carries the 1-based line number and offending token when they are known.
    """

    def __init__(self, message, line_number=None, token=None):
        super().__init__(message)
        self.message = message
        self.line_number = line_number
        self.token = token

    def at(self, line_number, token=None):
        """
        Attach diagnostic context, keeping anything already recorded.
        :param line_number: 1-based line number of the failing line.
        :param token: The offending token or line.
        :return: self, for re-raising.
        """
        if self.line_number is None:
            self.line_number = line_number
        if self.token is None:
            self.token = token
        return self

    def __str__(self):
        message = self.message
        if self.token is not None:
            message += " (token {!r})".format(self.token)
        if self.line_number is not None:
            message = "line {}: {}".format(self.line_number, message)
        return message


class FormatError(AnnotabError, ValueError):
    """
    Exception to indicate malformed line or field syntax.
    """
    pass


class TypeMismatchError(AnnotabError, TypeError):
    """
    Exception to indicate a typed accessor was used on a field of another type.
    """
    pass


class ArityError(AnnotabError, ValueError):
    """
    Exception to indicate the wrong number of values for a field.
    """
    pass


class MissingKeyError(AnnotabError, KeyError):
    """
    Exception to indicate a required tag or attribute is absent.
    """
    pass


class ConstraintViolation(AnnotabError, ValueError):
    """
    Exception to indicate a structural invariant was violated at construction.
    """
    pass


class AnnotabWarning(UserWarning):
    pass


class UnexpectedHeaderWarning(AnnotabWarning):
    """
    Warning to indicate a header line was found after the first data record.
    """
    pass


def parse_int(token, name='value'):
    """
    Parse a decimal integer column.
    :param token: String to parse.
    :param name: Column name used in the error message.
    :return: int value of token.
    """
    try:
        return int(token)
    except (TypeError, ValueError):
        raise FormatError("{} must be an integer".format(name), token=token) from None


def parse_float(token, name='value'):
    """
    Parse a floating point column.
    :param token: String to parse.
    :param name: Column name used in the error message.
    :return: float value of token.
    """
    try:
        return float(token)
    except (TypeError, ValueError):
        raise FormatError("{} must be a number".format(name), token=token) from None


def check_non_negative(value, name):
    if value < 0:
        raise ConstraintViolation("{} must be at least zero, was {}".format(name, value))
    return value


def split_line(line, minimum, name):
    """
    Split a tab delimited line, enforcing a minimum number of tokens.
    :param line: Line to split, trailing newline is ignored.
    :param minimum: Minimum number of tokens required.
    :param name: Record name used in the error message.
    :return: List of tokens.
    """
    tokens = line.rstrip('\r\n').split('\t')
    if len(tokens) < minimum:
        raise FormatError("{} must have at least {} tokens, was {}".format(name, minimum, len(tokens)), token=line)
    return tokens


def or_missing(value):
    return MISSING if value is None else str(value)


def none_if_missing(token):
    return None if token == MISSING else token


def is_binary(stream):
    return isinstance(stream, (io.RawIOBase, io.BufferedIOBase))


@contextmanager
def open_input(input, encoding=DEFAULT_ENCODING):
    """
    Open input for line oriented reading.
    Paths are opened here and closed on every exit path.
    Binary streams are wrapped for text decoding and detached afterwards so the caller keeps ownership.
    Text streams are used as is.
    :param input: Path, binary stream or text stream.
    :param encoding: Encoding for paths and binary streams.
    :return: Context manager yielding a text stream.
    """
    if isinstance(input, (str, bytes, os.PathLike)):
        with open(input, 'r', encoding=encoding, newline='') as handle:
            yield handle
    elif is_binary(input):
        wrapper = io.TextIOWrapper(input, encoding=encoding, newline='')
        try:
            yield wrapper
        finally:
            wrapper.detach()
    else:
        yield input


@contextmanager
def open_output(output, encoding=DEFAULT_ENCODING):
    """
    Open output for line oriented writing.
    :param output: Path, binary stream or text stream.
    :param encoding: Encoding for paths and binary streams.
    :return: Context manager yielding a text stream.
    """
    if isinstance(output, (str, bytes, os.PathLike)):
        with open(output, 'w', encoding=encoding, newline='') as handle:
            yield handle
    elif is_binary(output):
        wrapper = io.TextIOWrapper(output, encoding=encoding, newline='', write_through=True)
        try:
            yield wrapper
        finally:
            wrapper.flush()
            wrapper.detach()
    else:
        yield output
