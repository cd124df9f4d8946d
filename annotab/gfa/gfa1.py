"""
GFA 1.0 records.
Positional columns are tab separated, '*' marks an absent overlap or sequence.
"""
from operator import attrgetter

from ..annotation import AnnotatedRecord, EMPTY
from ..util import ConstraintViolation, check_non_negative, none_if_missing, or_missing, parse_int
from .reference import GfaRecord, Reference


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
    Represents an S line. When an LN tag and a sequence are both present they must agree.
    """
    __slots__ = '_id', '_sequence'
    record_type = 'S'

    def __init__(self, id: str, sequence=None, annotations=EMPTY, line_number=-1):
        super().__init__(annotations, line_number)
        self._id = id
        self._sequence = sequence
        if sequence is not None and 'LN' in annotations:
            length = annotations.get_field_integer('LN')
            if length != len(sequence):
                raise ConstraintViolation("segment {} LN:i:{} does not match sequence length {}".format(id, length, len(sequence)))

    id = property(attrgetter('_id'))
    sequence = property(attrgetter('_sequence'))

    def has_sequence(self):
        return self._sequence is not None

    @property
    def length(self):
        """
        Segment length from the LN tag, else from the sequence, else None.
        """
        length = self._annotations.get_field_integer_opt('LN')
        if length is None and self._sequence is not None:
            length = len(self._sequence)
        return length

    @staticmethod
    def parse(line: str, line_number=-1) -> 'Segment':
        tokens = Segment._tokens(line, 3)
        return Segment(tokens[1], none_if_missing(tokens[2]), AnnotatedRecord.parse(tokens[3:]), line_number)

    def _columns(self):
        return self._id, or_missing(self._sequence)


class Link(GfaRecord):
    """
    Represents an L line.
    """
    __slots__ = '_source', '_target', '_overlap'
    record_type = 'L'

    def __init__(self, source: Reference, target: Reference, overlap=None, annotations=EMPTY, line_number=-1):
        super().__init__(annotations, line_number)
        self._source = source
        self._target = target
        self._overlap = overlap

    source = property(attrgetter('_source'))
    target = property(attrgetter('_target'))
    overlap = property(attrgetter('_overlap'))

    def has_overlap(self):
        return self._overlap is not None

    @staticmethod
    def parse(line: str, line_number=-1) -> 'Link':
        tokens = Link._tokens(line, 6)
        return Link(Reference.parse_split(tokens[1], tokens[2]), Reference.parse_split(tokens[3], tokens[4]),
                    none_if_missing(tokens[5]), AnnotatedRecord.parse(tokens[6:]), line_number)

    def _columns(self):
        return self._source.split_str(), self._target.split_str(), or_missing(self._overlap)


class Containment(GfaRecord):
    """
    Represents a C line.
    """
    __slots__ = '_container', '_contained', '_position', '_overlap'
    record_type = 'C'

    def __init__(self, container: Reference, contained: Reference, position: int, overlap=None, annotations=EMPTY,
                 line_number=-1):
        super().__init__(annotations, line_number)
        self._container = container
        self._contained = contained
        self._position = check_non_negative(position, 'position')
        self._overlap = overlap

    container = property(attrgetter('_container'))
    contained = property(attrgetter('_contained'))
    position = property(attrgetter('_position'))
    overlap = property(attrgetter('_overlap'))

    def has_overlap(self):
        return self._overlap is not None

    @staticmethod
    def parse(line: str, line_number=-1) -> 'Containment':
        tokens = Containment._tokens(line, 7)
        return Containment(Reference.parse_split(tokens[1], tokens[2]), Reference.parse_split(tokens[3], tokens[4]),
                           parse_int(tokens[5], 'position'), none_if_missing(tokens[6]), AnnotatedRecord.parse(tokens[7:]),
                           line_number)

    def _columns(self):
        return self._container.split_str(), self._contained.split_str(), str(self._position), or_missing(self._overlap)


class Path(GfaRecord):
    """
    Represents a P line. When overlaps are present there is one fewer than there are segments.
    """
    __slots__ = '_name', '_segments', '_overlaps'
    record_type = 'P'

    def __init__(self, name: str, segments=(), overlaps=None, annotations=EMPTY, line_number=-1):
        super().__init__(annotations, line_number)
        segments = tuple(segments)
        overlaps = tuple(overlaps) if overlaps else None
        if overlaps is not None and len(overlaps) != len(segments) - 1:
            raise ConstraintViolation("path {} has {} segments so must have {} overlaps, found {}".format(
                name, len(segments), max(len(segments) - 1, 0), len(overlaps)))
        self._name = name
        self._segments = segments
        self._overlaps = overlaps

    name = property(attrgetter('_name'))
    segments = property(attrgetter('_segments'))
    overlaps = property(attrgetter('_overlaps'))

    def has_overlaps(self):
        return self._overlaps is not None

    @staticmethod
    def parse(line: str, line_number=-1) -> 'Path':
        tokens = Path._tokens(line, 4)
        segments = [] if tokens[2] == '*' else [Reference.parse(value) for value in tokens[2].split(',')]
        overlaps = None if tokens[3] == '*' else tokens[3].split(',')
        return Path(tokens[1], segments, overlaps, AnnotatedRecord.parse(tokens[4:]), line_number)

    def _columns(self):
        return (self._name,
                ','.join(str(segment) for segment in self._segments) or '*',
                ','.join(self._overlaps) if self._overlaps else '*')


class Traversal(GfaRecord):
    """
    Represents a T line, one step of a path between two segments.
    Lines starting with lowercase t are accepted when parsing.
    """
    __slots__ = '_path_name', '_ordinal', '_source', '_target', '_overlap'
    record_type = 'T'

    def __init__(self, path_name: str, ordinal: int, source: Reference, target: Reference, overlap=None, annotations=EMPTY,
                 line_number=-1):
        super().__init__(annotations, line_number)
        self._path_name = path_name
        self._ordinal = check_non_negative(ordinal, 'ordinal')
        self._source = source
        self._target = target
        self._overlap = overlap

    path_name = property(attrgetter('_path_name'))
    ordinal = property(attrgetter('_ordinal'))
    source = property(attrgetter('_source'))
    target = property(attrgetter('_target'))
    overlap = property(attrgetter('_overlap'))

    def has_overlap(self):
        return self._overlap is not None

    @staticmethod
    def parse(line: str, line_number=-1) -> 'Traversal':
        tokens = Traversal._tokens(line, 7, ('T', 't'))
        return Traversal(tokens[1], parse_int(tokens[2], 'ordinal'), Reference.parse_split(tokens[3], tokens[4]),
                         Reference.parse_split(tokens[5], tokens[6]), none_if_missing(tokens[7]) if len(tokens) > 7 else None,
                         AnnotatedRecord.parse(tokens[8:]), line_number)

    def _columns(self):
        return (self._path_name, str(self._ordinal), self._source.split_str(), self._target.split_str(),
                or_missing(self._overlap))


RECORD_TYPES = {cls.record_type: cls for cls in (Header, Segment, Link, Containment, Path, Traversal)}
"""dict: GFA 1.0 record class indexed by record type code."""
RECORD_TYPES['t'] = Traversal


def parse_record(line: str, line_number=-1):
    """
    Parse a GFA 1.0 line, dispatching on its record type code.
    :param line: String to parse.
    :param line_number: 1-based line number, or -1 if unknown.
    :return: Record instance, or None if the record type is not recognized.
    """
    cls = RECORD_TYPES.get(line.split('\t', 1)[0].rstrip('\r\n'))
    return None if cls is None else cls.parse(line, line_number)
