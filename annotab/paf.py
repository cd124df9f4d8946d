"""
PAF (pairwise mapping format) records.

Classes:
    PafRecord: Represents one PAF line, twelve positional columns followed by optional fields.
    PafRecordBuilder: Mutable builder for PafRecord, also available as PafRecord.Builder.
"""
from operator import attrgetter

from .annotation import Annotated, AnnotatedBuilder, AnnotatedRecord, EMPTY
from .util import FormatError, check_non_negative, parse_int, split_line

STRANDS = '+', '-'

COLUMNS = 'query_name', 'query_length', 'query_start', 'query_end', 'strand', 'target_name', 'target_length', 'target_start', \
          'target_end', 'matches', 'alignment_block_length', 'mapping_quality'
"""tuple: Names of the twelve mandatory PAF columns in order."""


class PafRecord(Annotated):
    """
    Represents a PAF line.
    """
    __slots__ = '_query_name', '_query_length', '_query_start', '_query_end', '_strand', '_target_name', '_target_length', \
                '_target_start', '_target_end', '_matches', '_alignment_block_length', '_mapping_quality', '_annotations', \
                '_line_number'

    def __init__(self, query_name, query_length, query_start, query_end, strand, target_name, target_length, target_start,
                 target_end, matches, alignment_block_length, mapping_quality, annotations=EMPTY, line_number=-1):
        if strand not in STRANDS:
            raise FormatError("strand must be one of + or -", token=strand)
        self._query_name = query_name
        self._query_length = check_non_negative(query_length, 'query_length')
        self._query_start = check_non_negative(query_start, 'query_start')
        self._query_end = check_non_negative(query_end, 'query_end')
        self._strand = strand
        self._target_name = target_name
        self._target_length = check_non_negative(target_length, 'target_length')
        self._target_start = check_non_negative(target_start, 'target_start')
        self._target_end = check_non_negative(target_end, 'target_end')
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
    target_name = property(attrgetter('_target_name'))
    target_length = property(attrgetter('_target_length'))
    target_start = property(attrgetter('_target_start'))
    target_end = property(attrgetter('_target_end'))
    matches = property(attrgetter('_matches'))
    alignment_block_length = property(attrgetter('_alignment_block_length'))
    mapping_quality = property(attrgetter('_mapping_quality'))
    annotations = property(attrgetter('_annotations'))
    line_number = property(attrgetter('_line_number'))

    @staticmethod
    def builder(record=None) -> 'PafRecordBuilder':
        builder = PafRecordBuilder()
        if record is not None:
            builder.with_record(record)
        return builder

    @staticmethod
    def parse(line: str, line_number=-1) -> 'PafRecord':
        """
        Parse PAF record.
        Repeated B tags of the same array type are merged into one field.
        :param line: String containing the record, trailing newline is ignored.
        :param line_number: 1-based line number, or -1 if unknown.
        :return: PafRecord instance.
        """
        tokens = split_line(line, 12, 'PAF record')
        return PafRecord(
            tokens[0],
            parse_int(tokens[1], 'query_length'),
            parse_int(tokens[2], 'query_start'),
            parse_int(tokens[3], 'query_end'),
            tokens[4],
            tokens[5],
            parse_int(tokens[6], 'target_length'),
            parse_int(tokens[7], 'target_start'),
            parse_int(tokens[8], 'target_end'),
            parse_int(tokens[9], 'matches'),
            parse_int(tokens[10], 'alignment_block_length'),
            parse_int(tokens[11], 'mapping_quality'),
            AnnotatedRecord.parse(tokens[12:], merge_arrays=True),
            line_number,
        )

    def _columns(self):
        return tuple(getattr(self, column) for column in COLUMNS)

    def __eq__(self, other):
        if not isinstance(other, PafRecord):
            return NotImplemented
        return self._columns() == other._columns() and self._annotations == other._annotations

    def __hash__(self):
        return hash(self._columns())

    def __str__(self):
        return '\t'.join(str(value) for value in self._columns()) + self._annotation_suffix()

    def __repr__(self):
        return "PafRecord({!r})".format(str(self))


class PafRecordBuilder(AnnotatedBuilder):
    """
    Mutable builder for PafRecord. Every positional column must be set before build().
    """

    def __init__(self):
        super().__init__()
        self.reset()

    def __getattr__(self, item):
        # with_<column> setters for each positional column
        if item.startswith('with_') and item[5:] in COLUMNS:
            column = item[5:]

            def setter(value):
                self._columns[column] = value
                return self
            return setter
        raise AttributeError("'{}' object has no attribute '{}'".format(type(self).__name__, item))

    def with_line_number(self, line_number) -> 'PafRecordBuilder':
        self._line_number = line_number
        return self

    def with_record(self, record: PafRecord) -> 'PafRecordBuilder':
        for column in COLUMNS:
            self._columns[column] = getattr(record, column)
        self._line_number = record.line_number
        return self.with_annotations(record.annotations)

    def reset(self) -> 'PafRecordBuilder':
        super().reset()
        self._columns = {}
        self._line_number = -1
        return self

    def build(self) -> PafRecord:
        missing = [column for column in COLUMNS if column not in self._columns]
        if missing:
            raise ValueError("PAF record columns not set: {}".format(', '.join(missing)))
        return PafRecord(*(self._columns[column] for column in COLUMNS), annotations=self._fields.build(),
                         line_number=self._line_number)


PafRecord.Builder = PafRecordBuilder
