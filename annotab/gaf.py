"""
GAF (graph alignment format) records.
Columns follow PAF with the target replaced by a path through a sequence graph.

Classes:
    GafRecord: Represents one GAF line, twelve positional columns followed by optional fields.
    GafRecordBuilder: Mutable builder for GafRecord, also available as GafRecord.Builder.
    Step: Represents one oriented segment or stable interval of a path.

Functions:
    parse_path: Split a path column into steps.
"""
import re
from operator import attrgetter

from .annotation import AnnotatedBuilder, Annotation, EMPTY, MultimapAnnotated
from .gfa import Orientation
from .util import ConstraintViolation, FormatError, check_non_negative, none_if_missing, or_missing, parse_int, split_line

STRANDS = '+', '-'

COLUMNS = 'query_name', 'query_length', 'query_start', 'query_end', 'strand', 'path_name', 'path_length', 'path_start', \
          'path_end', 'matches', 'alignment_block_length', 'mapping_quality'
"""tuple: Names of the twelve mandatory GAF columns in order."""

SYMBOLS = {'>': Orientation.FORWARD, '<': Orientation.REVERSE}
"""dict: Orientation indexed by path step symbol."""

_PATH_RE = re.compile(r"(?:[<>][^<>]+)+")
_STEP_RE = re.compile(r"[<>][^<>]+")
_INTERVAL_RE = re.compile(r"(.+):([0-9]+)-([0-9]+)")


class Step:
    """
    Represents one step of a GAF path, a segment id or a stable id interval, with an orientation.
    """
    __slots__ = '_id', '_orientation', '_start', '_end'

    def __init__(self, id: str, orientation=Orientation.FORWARD, start=None, end=None):
        if not id:
            raise FormatError("path step id must not be empty", token=id)
        if (start is None) != (end is None):
            raise FormatError("path step interval needs both start and end", token=id)
        if start is not None:
            check_non_negative(start, 'start')
            check_non_negative(end, 'end')
            if start > end:
                raise ConstraintViolation("path step {} starts after it ends".format(id), token=id)
        self._id = id
        self._orientation = Orientation.parse(orientation)
        self._start = start
        self._end = end

    id = property(attrgetter('_id'))
    orientation = property(attrgetter('_orientation'))
    start = property(attrgetter('_start'))
    end = property(attrgetter('_end'))

    def is_interval(self):
        return self._start is not None

    def is_reverse(self):
        return self._orientation is Orientation.REVERSE

    @staticmethod
    def parse(value: str) -> 'Step':
        """
        Parse an oriented step, e.g. '>s1' or '<chr1:5-8'.
        :param value: String to parse.
        :return: Step instance.
        """
        try:
            orientation = SYMBOLS[value[:1]]
        except KeyError:
            raise FormatError("path step must start with > or <", token=value) from None
        match = _INTERVAL_RE.fullmatch(value[1:])
        if match:
            return Step(match.group(1), orientation, int(match.group(2)), int(match.group(3)))
        return Step(value[1:], orientation)

    def __eq__(self, other):
        if not isinstance(other, Step):
            return NotImplemented
        return (self._id, self._orientation, self._start, self._end) == \
               (other._id, other._orientation, other._start, other._end)

    def __hash__(self):
        return hash((self._id, self._orientation, self._start, self._end))

    def __str__(self):
        symbol = '<' if self.is_reverse() else '>'
        if self.is_interval():
            return "{}{}:{}-{}".format(symbol, self._id, self._start, self._end)
        return symbol + self._id

    def __repr__(self):
        return "Step({!r})".format(str(self))


def parse_path(value: str) -> tuple:
    """
    Split a GAF path column into steps.
    A path without a leading > or < is a stable id, returned as a single forward step.
    :param value: Path column, e.g. '>s1<s2', '>chr1:5-8>foo:8-16' or 'chr1'.
    :return: Tuple of Step.
    """
    if not value:
        raise FormatError("path must not be empty", token=value)
    if value[0] not in SYMBOLS:
        if '<' in value or '>' in value:
            raise FormatError("stable id path must not contain > or <", token=value)
        return (Step(value),)
    if not _PATH_RE.fullmatch(value):
        raise FormatError("path steps must be > or < followed by an id", token=value)
    return tuple(Step.parse(step) for step in _STEP_RE.findall(value))


class GafRecord(MultimapAnnotated):
    """
    Represents a GAF line.
    Absent names ('*') are None. Optional fields repeated on one line accumulate as in SAM.
    """
    __slots__ = '_query_name', '_query_length', '_query_start', '_query_end', '_strand', '_path_name', '_path', \
                '_path_length', '_path_start', '_path_end', '_matches', '_alignment_block_length', '_mapping_quality', \
                '_annotations', '_line_number'

    def __init__(self, query_name, query_length, query_start, query_end, strand, path_name, path_length, path_start,
                 path_end, matches, alignment_block_length, mapping_quality, annotations=EMPTY, line_number=-1):
        if strand not in STRANDS:
            raise FormatError("strand must be one of + or -", token=strand)
        self._query_name = query_name
        self._query_length = check_non_negative(query_length, 'query_length')
        self._query_start = check_non_negative(query_start, 'query_start')
        self._query_end = check_non_negative(query_end, 'query_end')
        self._strand = strand
        self._path_name = path_name
        self._path = () if path_name is None else parse_path(path_name)
        self._path_length = check_non_negative(path_length, 'path_length')
        self._path_start = check_non_negative(path_start, 'path_start')
        self._path_end = check_non_negative(path_end, 'path_end')
        self._matches = check_non_negative(matches, 'matches')
        self._alignment_block_length = check_non_negative(alignment_block_length, 'alignment_block_length')
        self._mapping_quality = check_non_negative(mapping_quality, 'mapping_quality')
        self._annotations = annotations
        self._line_number = line_number

    query_name = property(attrgetter('_query_name'))
    query_length = property(attrgetter('_query_length'))
    query_start = property(attrgetter('_query_start'))
    query_end = property(attrgetter('_query_end'))
    strand = property(attrgetter('_strand'))
    path_name = property(attrgetter('_path_name'))
    path = property(attrgetter('_path'))
    path_length = property(attrgetter('_path_length'))
    path_start = property(attrgetter('_path_start'))
    path_end = property(attrgetter('_path_end'))
    matches = property(attrgetter('_matches'))
    alignment_block_length = property(attrgetter('_alignment_block_length'))
    mapping_quality = property(attrgetter('_mapping_quality'))
    annotations = property(attrgetter('_annotations'))
    line_number = property(attrgetter('_line_number'))

    def is_stable(self):
        """
        :return: True if the path is a single stable id rather than oriented steps.
        """
        return self._path_name is not None and self._path_name[0] not in SYMBOLS

    @staticmethod
    def builder(record=None) -> 'GafRecordBuilder':
        builder = GafRecordBuilder()
        if record is not None:
            builder.with_record(record)
        return builder

    @staticmethod
    def parse(line: str, line_number=-1) -> 'GafRecord':
        """
        Parse GAF record.
        :param line: String containing the record, trailing newline is ignored.
        :param line_number: 1-based line number, or -1 if unknown.
        :return: GafRecord instance.
        """
        tokens = split_line(line, 12, 'GAF record')
        builder = GafRecordBuilder().with_line_number(line_number)
        builder.with_query_name(none_if_missing(tokens[0]))
        builder.with_strand(tokens[4])
        builder.with_path_name(none_if_missing(tokens[5]))
        for index in (1, 2, 3, 6, 7, 8, 9, 10, 11):
            getattr(builder, 'with_' + COLUMNS[index])(parse_int(tokens[index], COLUMNS[index]))
        for tag in tokens[12:]:
            if tag:
                builder.with_annotation(Annotation.parse(tag))
        return builder.build()

    def _columns(self):
        return tuple(getattr(self, column) for column in COLUMNS)

    def __eq__(self, other):
        if not isinstance(other, GafRecord):
            return NotImplemented
        return self._columns() == other._columns() and self._annotations == other._annotations

    def __hash__(self):
        return hash(self._columns())

    def __str__(self):
        return '\t'.join(str(or_missing(value)) for value in self._columns()) + self._annotation_suffix()

    def __repr__(self):
        return "GafRecord({!r})".format(str(self))


class GafRecordBuilder(AnnotatedBuilder):
    """
    Mutable builder for GafRecord. Every positional column must be set before build().
    """

    def __init__(self):
        super().__init__()
        self.reset()

    def __getattr__(self, item):
        if item.startswith('with_') and item[5:] in COLUMNS:
            column = item[5:]

            def setter(value):
                self._columns[column] = value
                return self
            return setter
        raise AttributeError("'{}' object has no attribute '{}'".format(type(self).__name__, item))

    def with_line_number(self, line_number) -> 'GafRecordBuilder':
        self._line_number = line_number
        return self

    def with_record(self, record: GafRecord) -> 'GafRecordBuilder':
        for column in COLUMNS:
            self._columns[column] = getattr(record, column)
        self._line_number = record.line_number
        return self.with_annotations(record.annotations)

    def reset(self) -> 'GafRecordBuilder':
        super().reset()
        self._columns = {}
        self._line_number = -1
        return self

    def build(self) -> GafRecord:
        missing = [column for column in COLUMNS if column not in self._columns]
        if missing:
            raise ValueError("GAF record columns not set: {}".format(', '.join(missing)))
        return GafRecord(*(self._columns[column] for column in COLUMNS), annotations=self._fields.build(),
                         line_number=self._line_number)


GafRecord.Builder = GafRecordBuilder
