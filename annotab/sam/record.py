from enum import IntFlag
from operator import attrgetter

from ..annotation import AnnotatedBuilder, Annotation, EMPTY, MultimapAnnotated
from ..util import ConstraintViolation, DEFAULT_MAPQ, check_non_negative, none_if_missing, or_missing, parse_int, \
    split_line


class RecordFlags(IntFlag):
    """
    Represents flag bit values. Can be OR'd (|) together or AND (&) to determine flag setting.
    """
    MULTISEG = 1 << 0  # template having multiple segments in sequencing
    ALIGNED = 1 << 1  # each segment properly aligned according to the aligner
    UNMAPPED = 1 << 2  # segment unmapped
    MATE_UNMAPPED = 1 << 3  # next segment in the template unmapped
    REVERSE_COMPLIMENTED = 1 << 4  # SEQ being reverse complemented
    MATE_REVERSED = 1 << 5  # SEQ of the next segment in the template being reversed
    READ1 = 1 << 6  # the first segment in the template
    READ2 = 1 << 7  # the last segment in the template
    SECONDARY = 1 << 8  # secondary alignment
    QCFAIL = 1 << 9  # not passing quality controls
    DUPLICATE = 1 << 10  # PCR or optical duplicate
    SUPPLEMENTARY = 1 << 11  # supplementary alignment


COLUMNS = 'qname', 'flag', 'rname', 'pos', 'mapq', 'cigar', 'rnext', 'pnext', 'tlen', 'seq', 'qual'
"""tuple: Names of the eleven mandatory SAM columns in order."""


def _check_mapq(mapq):
    if not 0 <= mapq <= 255:
        raise ConstraintViolation("mapq must be between 0 and 255, was {}".format(mapq))
    return mapq


class SamRecord(MultimapAnnotated):
    """
    Represents a SAM alignment line.
    Absent string columns ('*') are None.
    Optional fields repeated on one line accumulate, so a B tag may be spread across several tokens.
    """
    __slots__ = '_qname', '_flag', '_rname', '_pos', '_mapq', '_cigar', '_rnext', '_pnext', '_tlen', '_seq', '_qual', \
                '_line_number', '_annotations'

    def __init__(self, qname=None, flag=0, rname=None, pos=0, mapq=DEFAULT_MAPQ, cigar=None, rnext=None, pnext=0, tlen=0,
                 seq=None, qual=None, annotations=EMPTY, line_number=-1):
        self._qname = qname
        self._flag = RecordFlags(check_non_negative(flag, 'flag'))
        self._rname = rname
        self._pos = check_non_negative(pos, 'pos')
        self._mapq = _check_mapq(mapq)
        self._cigar = cigar
        self._rnext = rnext
        self._pnext = check_non_negative(pnext, 'pnext')
        self._tlen = tlen
        self._seq = seq
        self._qual = qual
        self._annotations = annotations
        self._line_number = line_number

    qname = property(attrgetter('_qname'))
    flag = property(attrgetter('_flag'))
    rname = property(attrgetter('_rname'))
    pos = property(attrgetter('_pos'))
    mapq = property(attrgetter('_mapq'))
    cigar = property(attrgetter('_cigar'))
    rnext = property(attrgetter('_rnext'))
    pnext = property(attrgetter('_pnext'))
    tlen = property(attrgetter('_tlen'))
    seq = property(attrgetter('_seq'))
    qual = property(attrgetter('_qual'))
    line_number = property(attrgetter('_line_number'))
    annotations = property(attrgetter('_annotations'))

    @staticmethod
    def builder(record=None) -> 'SamRecordBuilder':
        """
        Create a builder.
        :param record: If provided, the builder is populated from this record.
        :return: SamRecordBuilder instance.
        """
        builder = SamRecordBuilder()
        if record is not None:
            builder.with_record(record)
        return builder

    @staticmethod
    def parse(line: str, line_number=-1) -> 'SamRecord':
        """
        Parse SAM record.
        :param line: String containing the record, trailing newline is ignored.
        :param line_number: 1-based line number, or -1 if unknown.
        :return: A SamRecord instance representing the record data.
        """
        qname, flag, rname, pos, mapq, cigar, rnext, pnext, tlen, seq, qual, *tags = split_line(line, 11, 'SAM record')
        builder = SamRecordBuilder()
        builder.with_qname(none_if_missing(qname))
        builder.with_flag(parse_int(flag, 'flag'))
        builder.with_rname(none_if_missing(rname))
        builder.with_pos(parse_int(pos, 'pos'))
        builder.with_mapq(parse_int(mapq, 'mapq'))
        builder.with_cigar(none_if_missing(cigar))
        builder.with_rnext(none_if_missing(rnext))
        builder.with_pnext(parse_int(pnext, 'pnext'))
        builder.with_tlen(parse_int(tlen, 'tlen'))
        builder.with_seq(none_if_missing(seq))
        builder.with_qual(none_if_missing(qual))
        builder.with_line_number(line_number)
        for tag in tags:
            if tag:
                builder.with_annotation(Annotation.parse(tag))
        return builder.build()

    def _columns(self):
        return (self._qname, self._flag, self._rname, self._pos, self._mapq, self._cigar, self._rnext, self._pnext, self._tlen,
                self._seq, self._qual)

    def __eq__(self, other):
        if not isinstance(other, SamRecord):
            return NotImplemented
        return self._columns() == other._columns() and self._annotations == other._annotations

    def __hash__(self):
        return hash(self._columns())

    def __str__(self):
        return "{qname}\t{flag}\t{rname}\t{pos}\t{mapq}\t{cigar}\t{rnext}\t{pnext}\t{tlen}\t{seq}\t{qual}".format(
            qname=or_missing(self._qname),
            flag=int(self._flag),
            rname=or_missing(self._rname),
            pos=self._pos,
            mapq=self._mapq,
            cigar=or_missing(self._cigar),
            rnext=or_missing(self._rnext),
            pnext=self._pnext,
            tlen=self._tlen,
            seq=or_missing(self._seq),
            qual=or_missing(self._qual),
        ) + self._annotation_suffix()

    def __repr__(self):
        return "SamRecord({!r})".format(str(self))


class SamRecordBuilder(AnnotatedBuilder):
    """
    Mutable builder for SamRecord.
    """

    def __init__(self):
        super().__init__()
        self.reset()

    def with_qname(self, qname) -> 'SamRecordBuilder':
        self._qname = qname
        return self

    def with_flag(self, flag) -> 'SamRecordBuilder':
        self._flag = flag
        return self

    def with_rname(self, rname) -> 'SamRecordBuilder':
        self._rname = rname
        return self

    def with_pos(self, pos) -> 'SamRecordBuilder':
        self._pos = pos
        return self

    def with_mapq(self, mapq) -> 'SamRecordBuilder':
        self._mapq = mapq
        return self

    def with_cigar(self, cigar) -> 'SamRecordBuilder':
        self._cigar = cigar
        return self

    def with_rnext(self, rnext) -> 'SamRecordBuilder':
        self._rnext = rnext
        return self

    def with_pnext(self, pnext) -> 'SamRecordBuilder':
        self._pnext = pnext
        return self

    def with_tlen(self, tlen) -> 'SamRecordBuilder':
        self._tlen = tlen
        return self

    def with_seq(self, seq) -> 'SamRecordBuilder':
        self._seq = seq
        return self

    def with_qual(self, qual) -> 'SamRecordBuilder':
        self._qual = qual
        return self

    def with_line_number(self, line_number) -> 'SamRecordBuilder':
        self._line_number = line_number
        return self

    def with_record(self, record: SamRecord) -> 'SamRecordBuilder':
        """
        Copy every column and optional field of record into this builder.
        :param record: SamRecord to copy.
        :return: self
        """
        for column in COLUMNS:
            setattr(self, '_' + column, getattr(record, column))
        self._line_number = record.line_number
        return self.with_annotations(record.annotations)

    def reset(self) -> 'SamRecordBuilder':
        """
        Restore SAM defaults: flag, pos, pnext and tlen 0, mapq 255, absent string columns and no optional fields.
        :return: self
        """
        super().reset()
        self._qname = None
        self._flag = 0
        self._rname = None
        self._pos = 0
        self._mapq = DEFAULT_MAPQ
        self._cigar = None
        self._rnext = None
        self._pnext = 0
        self._tlen = 0
        self._seq = None
        self._qual = None
        self._line_number = -1
        return self

    def build(self) -> SamRecord:
        return SamRecord(self._qname, self._flag, self._rname, self._pos, self._mapq, self._cigar, self._rnext, self._pnext,
                         self._tlen, self._seq, self._qual, self._fields.build(), self._line_number)


SamRecord.Builder = SamRecordBuilder
