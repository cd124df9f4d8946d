from enum import Enum
from operator import attrgetter

from ..annotation import Annotated, EMPTY
from ..util import FormatError, split_line


class Orientation(Enum):
    """Enum of segment orientations."""
    FORWARD = '+'
    REVERSE = '-'

    def flip(self) -> 'Orientation':
        return Orientation.REVERSE if self is Orientation.FORWARD else Orientation.FORWARD

    @staticmethod
    def parse(symbol) -> 'Orientation':
        if isinstance(symbol, Orientation):
            return symbol
        try:
            return Orientation(symbol)
        except ValueError:
            raise FormatError("orientation must be one of + or -", token=symbol) from None


class Reference:
    """
    Represents an oriented reference to a segment by identifier.
    """
    __slots__ = '_id', '_orientation'

    def __init__(self, id: str, orientation=Orientation.FORWARD):
        if not id:
            raise FormatError("reference id must not be empty", token=id)
        self._id = id
        self._orientation = Orientation.parse(orientation)

    id = property(attrgetter('_id'))
    orientation = property(attrgetter('_orientation'))

    def is_forward(self):
        return self._orientation is Orientation.FORWARD

    def is_reverse(self):
        return self._orientation is Orientation.REVERSE

    def flip(self) -> 'Reference':
        return Reference(self._id, self._orientation.flip())

    @staticmethod
    def parse(value: str) -> 'Reference':
        """
        Parse a reference with a trailing orientation symbol, e.g. 'id+'.
        :param value: String to parse.
        :return: Reference instance.
        """
        if len(value) < 2:
            raise FormatError("reference must have an id and an orientation", token=value)
        return Reference(value[:-1], Orientation.parse(value[-1]))

    @staticmethod
    def parse_split(id: str, orientation: str) -> 'Reference':
        """
        Parse a reference written as separate id and orientation columns.
        :param id: Segment identifier.
        :param orientation: Orientation symbol.
        :return: Reference instance.
        """
        return Reference(id, Orientation.parse(orientation))

    def split_str(self) -> str:
        return "{}\t{}".format(self._id, self._orientation.value)

    def __eq__(self, other):
        if not isinstance(other, Reference):
            return NotImplemented
        return self._id == other._id and self._orientation is other._orientation

    def __hash__(self):
        return hash((self._id, self._orientation))

    def __str__(self):
        return self._id + self._orientation.value

    def __repr__(self):
        return "Reference({!r})".format(str(self))


class GfaRecord(Annotated):
    """
    Base for GFA records. Subclasses set record_type and implement _columns() returning the positional
    column strings following the record type.
    """
    __slots__ = '_annotations', '_line_number'
    record_type = None

    def __init__(self, annotations=EMPTY, line_number=-1):
        self._annotations = annotations
        self._line_number = line_number

    annotations = property(attrgetter('_annotations'))
    line_number = property(attrgetter('_line_number'))

    @classmethod
    def _tokens(cls, line, minimum, prefixes=None):
        """
        Split a line, checking its record type and minimum number of tokens.
        :return: List of tokens including the record type.
        """
        tokens = split_line(line, minimum, cls.__name__)
        if tokens[0] not in (prefixes or (cls.record_type,)):
            raise FormatError("{} must start with {}".format(cls.__name__, cls.record_type), token=line.rstrip('\r\n'))
        return tokens

    def _columns(self):
        raise NotImplementedError()

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self._columns() == other._columns() and self._annotations == other._annotations

    def __hash__(self):
        return hash((self.record_type,) + tuple(self._columns()))

    def __str__(self):
        return '\t'.join((self.record_type,) + tuple(self._columns())) + self._annotation_suffix()

    def __repr__(self):
        return "{}({!r})".format(type(self).__name__, str(self))
