"""
GFA 2.0 records.
Segment references carry their orientation as a trailing + or -, and '*' marks an absent identifier or alignment.
"""
import re
from operator import attrgetter

from ..annotation import AnnotatedRecord, EMPTY
from ..util import FormatError, check_non_negative, none_if_missing, or_missing, parse_int
from .reference import GfaRecord, Reference

cigar_re = re.compile(r"([0-9]+[MDIP])+")


class Position:
    """
    Represents a position, optionally marked with $ as the terminal position of a segment.
    """
    __slots__ = '_position', '_terminal'

    def __init__(self, position: int, terminal=False):
        self._position = check_non_negative(position, 'position')
        self._terminal = terminal

    position = property(attrgetter('_position'))
    terminal = property(attrgetter('_terminal'))

    def is_terminal(self):
        return self._terminal

    @staticmethod
    def parse(value: str) -> 'Position':
        if value.endswith('$'):
            return Position(parse_int(value[:-1], 'position'), True)
        return Position(parse_int(value, 'position'))

    def __eq__(self, other):
        if not isinstance(other, Position):
            return NotImplemented
        return self._position == other._position and self._terminal == other._terminal

    def __hash__(self):
        return hash((self._position, self._terminal))

    def __int__(self):
        return self._position

    def __str__(self):
        return str(self._position) + ('$' if self._terminal else '')

    def __repr__(self):
        return "Position({!r})".format(str(self))


class Alignment:
    """
    Represents an alignment, either a CIGAR string or a trace of comma separated integers.
    """
    __slots__ = '_cigar', '_trace'

    def __init__(self, cigar=None, trace=None):
        if (cigar is None) == (trace is None):
            raise ValueError("alignment must have exactly one of cigar or trace")
        if cigar is not None and not cigar_re.fullmatch(cigar):
            raise FormatError("invalid alignment CIGAR", token=cigar)
        self._cigar = cigar
        self._trace = tuple(trace) if trace is not None else None

    cigar = property(attrgetter('_cigar'))
    trace = property(attrgetter('_trace'))

    def has_cigar(self):
        return self._cigar is not None

    def has_trace(self):
        return self._trace is not None

    @staticmethod
    def parse(value: str):
        """
        Parse an alignment column.
        :param value: CIGAR, comma separated trace, or '*'.
        :return: Alignment instance, or None for '*'.
        """
        if value == '*':
            return None
        if cigar_re.fullmatch(value):
            return Alignment(cigar=value)
        return Alignment(trace=[parse_int(v, 'trace') for v in value.split(',')])

    def __eq__(self, other):
        if not isinstance(other, Alignment):
            return NotImplemented
        return self._cigar == other._cigar and self._trace == other._trace

    def __hash__(self):
        return hash((self._cigar, self._trace))

    def __str__(self):
        return self._cigar if self._cigar is not None else ','.join(str(v) for v in self._trace)

    def __repr__(self):
        return "Alignment({!r})".format(str(self))


class Header(GfaRecord):
    """
    Represents an H line.
    """
    __slots__ = ()
    record_type = 'H'

    @property
    def version(self):
        return self._annotations.get_field_string_opt('VN')

    @staticmethod
    def parse(line: str, line_number=-1) -> 'Header':
        tokens = Header._tokens(line, 1)
        return Header(AnnotatedRecord.parse(tokens[1:]), line_number)

    def _columns(self):
        return ()


class Segment(GfaRecord):
    """
    Represents an S line.
    """
    __slots__ = '_id', '_length', '_sequence'
    record_type = 'S'

    def __init__(self, id: str, length: int, sequence=None, annotations=EMPTY, line_number=-1):
        super().__init__(annotations, line_number)
        self._id = id
        self._length = check_non_negative(length, 'length')
        self._sequence = sequence

    id = property(attrgetter('_id'))
    length = property(attrgetter('_length'))
    sequence = property(attrgetter('_sequence'))

    def has_sequence(self):
        return self._sequence is not None

    @staticmethod
    def parse(line: str, line_number=-1) -> 'Segment':
        tokens = Segment._tokens(line, 4)
        return Segment(tokens[1], parse_int(tokens[2], 'length'), none_if_missing(tokens[3]), AnnotatedRecord.parse(tokens[4:]),
                       line_number)

    def _columns(self):
        return self._id, str(self._length), or_missing(self._sequence)


class Fragment(GfaRecord):
    """
    Represents an F line, a segment aligned to an external sequence.
    """
    __slots__ = '_segment_id', '_external', '_segment_start', '_segment_end', '_fragment_start', '_fragment_end', '_alignment'
    record_type = 'F'

    def __init__(self, segment_id: str, external: Reference, segment_start: Position, segment_end: Position,
                 fragment_start: Position, fragment_end: Position, alignment=None, annotations=EMPTY, line_number=-1):
        super().__init__(annotations, line_number)
        self._segment_id = segment_id
        self._external = external
        self._segment_start = segment_start
        self._segment_end = segment_end
        self._fragment_start = fragment_start
        self._fragment_end = fragment_end
        self._alignment = alignment

    segment_id = property(attrgetter('_segment_id'))
    external = property(attrgetter('_external'))
    segment_start = property(attrgetter('_segment_start'))
    segment_end = property(attrgetter('_segment_end'))
    fragment_start = property(attrgetter('_fragment_start'))
    fragment_end = property(attrgetter('_fragment_end'))
    alignment = property(attrgetter('_alignment'))

    @staticmethod
    def parse(line: str, line_number=-1) -> 'Fragment':
        tokens = Fragment._tokens(line, 8)
        return Fragment(tokens[1], Reference.parse(tokens[2]), *(Position.parse(token) for token in tokens[3:7]),
                        alignment=Alignment.parse(tokens[7]), annotations=AnnotatedRecord.parse(tokens[8:]),
                        line_number=line_number)

    def _columns(self):
        return (self._segment_id, str(self._external), str(self._segment_start), str(self._segment_end),
                str(self._fragment_start), str(self._fragment_end), or_missing(self._alignment))


class Edge(GfaRecord):
    """
    Represents an E line.
    """
    __slots__ = '_id', '_source', '_target', '_source_start', '_source_end', '_target_start', '_target_end', '_alignment'
    record_type = 'E'

    def __init__(self, id, source: Reference, target: Reference, source_start: Position, source_end: Position,
                 target_start: Position, target_end: Position, alignment=None, annotations=EMPTY, line_number=-1):
        super().__init__(annotations, line_number)
        self._id = id
        self._source = source
        self._target = target
        self._source_start = source_start
        self._source_end = source_end
        self._target_start = target_start
        self._target_end = target_end
        self._alignment = alignment

    id = property(attrgetter('_id'))
    source = property(attrgetter('_source'))
    target = property(attrgetter('_target'))
    source_start = property(attrgetter('_source_start'))
    source_end = property(attrgetter('_source_end'))
    target_start = property(attrgetter('_target_start'))
    target_end = property(attrgetter('_target_end'))
    alignment = property(attrgetter('_alignment'))

    @staticmethod
    def parse(line: str, line_number=-1) -> 'Edge':
        tokens = Edge._tokens(line, 9)
        return Edge(none_if_missing(tokens[1]), Reference.parse(tokens[2]), Reference.parse(tokens[3]),
                    *(Position.parse(token) for token in tokens[4:8]), alignment=Alignment.parse(tokens[8]),
                    annotations=AnnotatedRecord.parse(tokens[9:]), line_number=line_number)

    def _columns(self):
        return (or_missing(self._id), str(self._source), str(self._target), str(self._source_start), str(self._source_end),
                str(self._target_start), str(self._target_end), or_missing(self._alignment))


class Gap(GfaRecord):
    """
    Represents a G line, an estimated distance between two segments.
    """
    __slots__ = '_id', '_source', '_target', '_distance', '_variance'
    record_type = 'G'

    def __init__(self, id, source: Reference, target: Reference, distance: int, variance=None, annotations=EMPTY,
                 line_number=-1):
        super().__init__(annotations, line_number)
        self._id = id
        self._source = source
        self._target = target
        self._distance = check_non_negative(distance, 'distance')
        self._variance = variance

    id = property(attrgetter('_id'))
    source = property(attrgetter('_source'))
    target = property(attrgetter('_target'))
    distance = property(attrgetter('_distance'))
    variance = property(attrgetter('_variance'))

    @staticmethod
    def parse(line: str, line_number=-1) -> 'Gap':
        tokens = Gap._tokens(line, 6)
        variance = None if tokens[5] == '*' else parse_int(tokens[5], 'variance')
        return Gap(none_if_missing(tokens[1]), Reference.parse(tokens[2]), Reference.parse(tokens[3]),
                   parse_int(tokens[4], 'distance'), variance, AnnotatedRecord.parse(tokens[6:]), line_number)

    def _columns(self):
        return (or_missing(self._id), str(self._source), str(self._target), str(self._distance),
                or_missing(self._variance))


class Path(GfaRecord):
    """
    Represents an O line, an ordered group of oriented references.
    """
    __slots__ = '_id', '_references'
    record_type = 'O'

    def __init__(self, id, references, annotations=EMPTY, line_number=-1):
        super().__init__(annotations, line_number)
        self._id = id
        self._references = tuple(references)

    id = property(attrgetter('_id'))
    references = property(attrgetter('_references'))

    @staticmethod
    def parse(line: str, line_number=-1) -> 'Path':
        tokens = Path._tokens(line, 3)
        references = [Reference.parse(value) for value in tokens[2].split(' ') if value]
        return Path(none_if_missing(tokens[1]), references, AnnotatedRecord.parse(tokens[3:]), line_number)

    def _columns(self):
        return or_missing(self._id), ' '.join(str(reference) for reference in self._references)


class Set(GfaRecord):
    """
    Represents a U line, an unordered group of identifiers. Repeated identifiers are kept once.
    """
    __slots__ = '_id', '_ids'
    record_type = 'U'

    def __init__(self, id, ids, annotations=EMPTY, line_number=-1):
        super().__init__(annotations, line_number)
        self._id = id
        self._ids = tuple(dict.fromkeys(ids))

    id = property(attrgetter('_id'))
    ids = property(attrgetter('_ids'))

    @staticmethod
    def parse(line: str, line_number=-1) -> 'Set':
        tokens = Set._tokens(line, 3)
        return Set(none_if_missing(tokens[1]), [value for value in tokens[2].split(' ') if value],
                   AnnotatedRecord.parse(tokens[3:]), line_number)

    def _columns(self):
        return or_missing(self._id), ' '.join(self._ids)


RECORD_TYPES = {cls.record_type: cls for cls in (Header, Segment, Fragment, Edge, Gap, Path, Set)}
"""dict: GFA 2.0 record class indexed by record type code."""


def identifier(record):
    """
    Identifier a record declares, or None.
    :param record: GFA 2.0 record.
    :return: Identifier string or None for anonymous records, fragments and headers.
    """
    if isinstance(record, (Segment, Edge, Gap, Path, Set)):
        return record.id
    return None


def parse_record(line: str, line_number=-1):
    """
    Parse a GFA 2.0 line, dispatching on its record type code.
    :param line: String to parse.
    :param line_number: 1-based line number, or -1 if unknown.
    :return: Record instance, or None if the record type is not recognized.
    """
    cls = RECORD_TYPES.get(line.split('\t', 1)[0].rstrip('\r\n'))
    return None if cls is None else cls.parse(line, line_number)
