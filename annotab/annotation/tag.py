import ctypes as C
import re
from collections.abc import Iterable
from enum import Enum

from ..util import ArityError, FormatError, TypeMismatchError

TAG_RE = re.compile(r"[A-Za-z][A-Za-z0-9]")
"""Pattern: Two character tag name."""


class TagType(Enum):
    """Enum of optional field type codes."""
    CHARACTER = 'A'
    INTEGER = 'i'
    FLOAT = 'f'
    STRING = 'Z'
    BYTE_ARRAY = 'H'
    ARRAY = 'B'


class ArrayType(Enum):
    """Enum of B type array element codes."""
    INT8 = 'c'
    UINT8 = 'C'
    INT16 = 's'
    UINT16 = 'S'
    INT32 = 'i'
    UINT32 = 'I'
    FLOAT = 'f'

    @property
    def ctype(self):
        return BTAG_TYPES[self.value]

    @property
    def is_integer(self):
        return self is not ArrayType.FLOAT


BTAG_TYPES = {'c': C.c_int8, 'C': C.c_uint8, 's': C.c_int16, 'S': C.c_uint16, 'i': C.c_int32, 'I': C.c_uint32, 'f': C.c_float}

_VALUE_RE = {
    TagType.CHARACTER: re.compile(r"[!-~]"),
    TagType.INTEGER: re.compile(r"[-+]?[0-9]+"),
    TagType.FLOAT: re.compile(r"[-+]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][-+]?[0-9]+)?"),
    TagType.STRING: re.compile(r"[ !-~]*"),
    TagType.BYTE_ARRAY: re.compile(r"(?:[0-9A-Fa-f][0-9A-Fa-f])*"),
}


def to_tag_type(code) -> TagType:
    """
    Convert a type code to a TagType.
    :param code: TagType instance or single character code.
    :return: TagType instance.
    """
    if isinstance(code, TagType):
        return code
    try:
        return TagType(code)
    except ValueError:
        raise FormatError("unrecognized type code", token=code) from None


def to_array_type(code) -> ArrayType:
    """
    Convert an array element code to an ArrayType.
    :param code: ArrayType instance or single character code.
    :return: ArrayType instance.
    """
    if isinstance(code, ArrayType):
        return code
    try:
        return ArrayType(code)
    except ValueError:
        raise FormatError("unrecognized array type code", token=code) from None


def to_integer(value):
    if not _VALUE_RE[TagType.INTEGER].fullmatch(value):
        raise FormatError("Type=i value not an integer", token=value)
    return int(value)


def to_float(value):
    if not _VALUE_RE[TagType.FLOAT].fullmatch(value):
        raise FormatError("Type=f value not a float", token=value)
    return float(value)


def to_bytes(value):
    if not _VALUE_RE[TagType.BYTE_ARRAY].fullmatch(value):
        raise FormatError("could not decode Type=H hex value", token=value)
    return bytes.fromhex(value)


def to_ranged_integer(value, element):
    """
    Convert an integer array element, checking it fits its array type.
    :param value: String to convert.
    :param element: ArrayType of the array.
    :return: int value.
    """
    number = to_integer(value)
    if element.ctype(number).value != number:
        raise FormatError("value out of range for array type {}".format(element.value), token=value)
    return number


def check_length(name, length, count):
    if length is None:
        return
    if length < 1:
        raise ValueError("length must be at least one")
    if count != length:
        raise ArityError("expected {} values for key {}, found {}".format(length, name, count))


class Annotation:
    """
    Represents a single TAG:TYPE:VALUE optional field.
    Values are kept as the strings they were parsed from so formatting reproduces the input exactly.
    """
    __slots__ = '_name', '_type', '_array_type', '_values'

    def __init__(self, name: str, type, values, array_type=None):
        """
        Constructor.
        :param name: Two character tag name.
        :param type: TagType or type code.
        :param values: Single value for scalar types, or iterable of values.
        :param array_type: ArrayType or element code, required for B type fields.
        """
        if not isinstance(name, str) or not TAG_RE.fullmatch(name):
            raise FormatError("tag name must match [A-Za-z][A-Za-z0-9]", token=name)
        type = to_tag_type(type)
        if isinstance(values, str) or not isinstance(values, Iterable):
            values = (values,)
        values = tuple(str(value) for value in values)

        if type is TagType.ARRAY:
            if array_type is None:
                raise FormatError("Type=B field {} requires an array type".format(name))
            array_type = to_array_type(array_type)
            pattern = _VALUE_RE[TagType.INTEGER if array_type.is_integer else TagType.FLOAT]
            for value in values:
                if not pattern.fullmatch(value):
                    raise FormatError("invalid Type=B first letter {} value".format(array_type.value), token=value)
        else:
            if array_type is not None:
                raise FormatError("Type={} field {} can not have an array type".format(type.value, name))
            if len(values) != 1:
                raise ArityError("Type={} field {} must have exactly one value, found {}".format(type.value, name, len(values)))
            value = values[0]
            if not _VALUE_RE[type].fullmatch(value):
                raise FormatError("invalid Type={} value".format(type.value), token=value)

        self._name = name
        self._type = type
        self._array_type = array_type
        self._values = values

    @property
    def name(self):
        return self._name

    @property
    def type(self) -> TagType:
        return self._type

    @property
    def array_type(self):
        return self._array_type

    @property
    def values(self) -> tuple:
        return self._values

    @property
    def value(self) -> str:
        """
        Raw value exactly as written after the second colon.
        """
        if self._type is TagType.ARRAY:
            return self._array_type.value + ''.join(',' + value for value in self._values)
        return self._values[0]

    def is_array(self):
        return self._type is TagType.ARRAY

    def __len__(self):
        """
        Number of values stored.
        :return: Number of elements in B type fields, 1 for all others.
        """
        return len(self._values)

    @staticmethod
    def parse(value: str) -> 'Annotation':
        """
        Parse a TAG:TYPE:VALUE formatted field.
        :param value: String containing the field.
        :return: Instance of Annotation representing the field.
        """
        tokens = value.split(':', 2)
        if len(tokens) < 3:
            raise FormatError("annotation must have at least three tokens, was {}".format(len(tokens)), token=value)
        name, type, raw = tokens
        type = to_tag_type(type)
        if type is TagType.ARRAY:
            if not raw:
                raise FormatError("Type=B value missing array type", token=value)
            element, rest = raw[0], raw[1:]
            if rest and not rest.startswith(','):
                raise FormatError("Type=B values must be comma separated", token=value)
            return Annotation(name, type, rest[1:].split(',') if rest else (), element)
        return Annotation(name, type, raw)

    def format(self) -> str:
        return str(self)

    def __str__(self):
        return "{}:{}:{}".format(self._name, self._type.value, self.value)

    def __repr__(self):
        return "Annotation({!r})".format(str(self))

    def __eq__(self, other):
        if not isinstance(other, Annotation):
            return NotImplemented
        return (self._name, self._type, self._array_type, self._values) == (other._name, other._type, other._array_type, other._values)

    def __hash__(self):
        return hash((self._name, self._type, self._array_type, self._values))

    # --- Typed getters ---
    def _check_scalar(self, expected):
        if self._type is TagType.ARRAY:
            element = TagType.FLOAT if self._array_type is ArrayType.FLOAT else TagType.INTEGER
            if element is expected:
                raise ArityError("{} is an array field, use the array accessor".format(self._name))
        if self._type is not expected:
            raise TypeMismatchError("{} is Type={}, not Type={}".format(self._name, self._type.value, expected.value))
        return self._values[0]

    def _check_array(self, integer):
        if self._type is TagType.ARRAY:
            if self._array_type.is_integer != integer:
                raise TypeMismatchError("{} is Type=B first letter {}, not an {} array".format(
                    self._name, self._array_type.value, 'integer' if integer else 'float'))
            return self._values
        if self._type is (TagType.INTEGER if integer else TagType.FLOAT):
            raise ArityError("{} is a scalar field, use the scalar accessor".format(self._name))
        raise TypeMismatchError("{} is Type={}, not Type=B".format(self._name, self._type.value))

    def as_character(self) -> str:
        return self._check_scalar(TagType.CHARACTER)

    def as_integer(self) -> int:
        return to_integer(self._check_scalar(TagType.INTEGER))

    def as_float(self) -> float:
        return to_float(self._check_scalar(TagType.FLOAT))

    def as_string(self) -> str:
        return self._check_scalar(TagType.STRING)

    def as_byte_array(self) -> bytes:
        return to_bytes(self._check_scalar(TagType.BYTE_ARRAY))

    def as_integers(self, length=None) -> list:
        """
        Values of a B type field with integer elements.
        :param length: If provided, the exact number of values expected.
        :return: List of int.
        """
        values = self._check_array(True)
        check_length(self._name, length, len(values))
        return [to_ranged_integer(value, self._array_type) for value in values]

    def as_floats(self, length=None) -> list:
        """
        Values of a B type field with float elements.
        :param length: If provided, the exact number of values expected.
        :return: List of float.
        """
        values = self._check_array(False)
        check_length(self._name, length, len(values))
        return [to_float(value) for value in values]
