"""
Provides convenience interface for reading annotated tab-delimited records.
"""

import logging
import re
import warnings
from itertools import chain

from . import gfa, vcf
from .gaf import GafRecord
from .paf import PafRecord
from .sam import SamHeader, SamRecord, parse_header_line
from .util import AnnotabError, ConstraintViolation, DEFAULT_ENCODING, FormatError, UnexpectedHeaderWarning, is_binary, \
    open_input

logger = logging.getLogger(__name__)

SAM = 'sam'
PAF = 'paf'
GAF = 'gaf'
GFA1 = 'gfa1'
GFA2 = 'gfa2'
VCF = 'vcf'

GFA1_ONLY = frozenset('LCPTt')
GFA2_ONLY = frozenset('EFGOU')

TAG_TOKEN_RE = re.compile(r"[A-Za-z][A-Za-z0-9]:[AifZHB]:")


def _is_int(token):
    return token.lstrip('-+').isdigit()


def discover_stream(line: str):
    """
    Determines the format of a stream from its first non-blank line.
    :param line: The first non-blank line of the stream.
    :return: One of SAM, PAF, GAF, GFA1, GFA2 or VCF, or None if the format is not recognized.
    """
    line = line.rstrip('\r\n')
    if line.startswith('##'):
        return VCF
    if line.startswith('@'):
        return SAM
    tokens = line.split('\t')
    record_type = tokens[0]
    if record_type in GFA1_ONLY:
        return GFA1
    if record_type in GFA2_ONLY:
        return GFA2
    if record_type == 'H':
        return GFA2 if any(token.startswith('VN:Z:2') for token in tokens[1:]) else GFA1
    if record_type == 'S':
        # GFA 2.0 segments carry a length before the sequence
        if len(tokens) > 3 and _is_int(tokens[2]) and not TAG_TOKEN_RE.match(tokens[3]):
            return GFA2
        return GFA1
    if len(tokens) >= 12 and tokens[4] in ('+', '-') and _is_int(tokens[1]):
        # oriented GAF path, a stable id path is read as PAF
        return GAF if tokens[5][:1] in ('>', '<') else PAF
    if len(tokens) >= 11 and _is_int(tokens[1]):
        return SAM
    return None


def _lines(input, encoding):
    if is_binary(input):
        return (line.decode(encoding) for line in input)
    return iter(input)


def Reader(input, format=None, encoding=DEFAULT_ENCODING):
    """
    Convenience interface for reading records from SAM, PAF, GAF, GFA 1.0, GFA 2.0 or VCF header data.
    The caller keeps ownership of input, see stream() and read() to read from a path.
    :param input: Text stream, binary stream or iterable of lines.
    :param format: One of SAM, PAF, GAF, GFA1, GFA2 or VCF. If None the format is discovered from the first non-blank line.
    :param encoding: Encoding used to decode binary streams.
    :return: Iterable that emits record instances.
    """
    lines = _lines(input, encoding)
    if format is None:
        peeked = []
        for line in lines:
            peeked.append(line)
            # GFA comment lines start with a single #
            if line.strip() and (line.startswith('##') or not line.startswith('#')):
                format = discover_stream(line)
                if format is None:
                    raise FormatError("could not determine format", line_number=len(peeked), token=line.rstrip('\r\n'))
                break
        else:
            # no records, the GFA 1.0 reader skips any comment lines
            format = GFA1
        logger.debug("detected %s input", format)
        lines = chain(peeked, lines)
    try:
        cls = READERS[format]
    except KeyError:
        raise ValueError("unknown format {!r}".format(format)) from None
    return cls(lines)


class _Reader:
    """
    Base class for the line oriented readers.
    Provides Iterable interface to read in records, skipping blank lines.
    """

    def __init__(self, input):
        self._input = iter(input)
        self.line_number = 0

    def __iter__(self):
        return self

    def _next_line(self):
        for line in self._input:
            self.line_number += 1
            if line.strip():
                return line
            logger.debug("skipping blank line %d", self.line_number)
        return None

    def _parse(self, line):
        raise NotImplementedError()

    def __next__(self):
        while True:
            line = self._next_line()
            if line is None:
                raise StopIteration()
            try:
                record = self._parse(line)
            except AnnotabError as e:
                raise e.at(self.line_number, line.rstrip('\r\n'))
            if record is not None:
                return record
            logger.debug("skipping unrecognized line %d", self.line_number)


class SAMReader(_Reader):
    """
    Reads SAM text, parsing the leading header lines into header before emitting SamRecord instances.
    """

    def __init__(self, input):
        super().__init__(input)
        self._header_lines = []
        self._pending = None
        while True:
            line = self._next_line()
            if line is None or not line.startswith('@'):
                self._pending = line
                break
            self._add_header_line(line)
        self._build_header()

    def _add_header_line(self, line):
        try:
            self._header_lines.append(parse_header_line(line))
        except AnnotabError as e:
            raise e.at(self.line_number, line.rstrip('\r\n'))

    def _build_header(self):
        builder = SamHeader.builder()
        try:
            for header_line in self._header_lines:
                builder.with_line(header_line)
            self.header = builder.build()
        except AnnotabError as e:
            raise e.at(self.line_number)

    def _next_line(self):
        if self._pending is not None:
            line, self._pending = self._pending, None
            return line
        return super()._next_line()

    def _parse(self, line):
        if line.startswith('@'):
            warnings.warn("SAM header line found after alignment records at line {}".format(self.line_number),
                          UnexpectedHeaderWarning)
            self._add_header_line(line)
            self._build_header()
            return None
        return SamRecord.parse(line, self.line_number)


class PAFReader(_Reader):
    """
    Reads PAF text, emitting PafRecord instances.
    """

    def _parse(self, line):
        return PafRecord.parse(line, self.line_number)


class GAFReader(_Reader):
    """
    Reads GAF text, emitting GafRecord instances.
    """

    def _parse(self, line):
        return GafRecord.parse(line, self.line_number)


class GFA1Reader(_Reader):
    """
    Reads GFA 1.0 text, emitting gfa1 record instances. Unrecognized record types are skipped.
    """

    def _parse(self, line):
        return gfa.gfa1.parse_record(line, self.line_number)


class GFA2Reader(_Reader):
    """
    Reads GFA 2.0 text, emitting gfa2 record instances. Unrecognized record types are skipped.
    Identifiers must be unique across segments, edges, gaps, paths and sets.
    """

    def __init__(self, input):
        super().__init__(input)
        self._identifiers = set()

    def _parse(self, line):
        record = gfa.gfa2.parse_record(line, self.line_number)
        identifier = gfa.gfa2.identifier(record)
        if identifier is not None:
            if identifier in self._identifiers:
                raise ConstraintViolation("duplicate identifier {}".format(identifier), token=identifier)
            self._identifiers.add(identifier)
        return record


class VCFHeaderReader(_Reader):
    """
    Reads VCF meta-information lines, stopping at the #CHROM column header line.
    """

    def __init__(self, input):
        super().__init__(input)
        self._done = False

    def __next__(self):
        line = None if self._done else self._next_line()
        if line is None or not line.startswith('##'):
            self._done = True
            raise StopIteration()
        try:
            return vcf.parse_header_line(line)
        except AnnotabError as e:
            raise e.at(self.line_number, line.rstrip('\r\n'))


READERS = {SAM: SAMReader, PAF: PAFReader, GAF: GAFReader, GFA1: GFA1Reader, GFA2: GFA2Reader, VCF: VCFHeaderReader}
"""dict: Reader class indexed by format name."""


def stream(input, listener, format=None, encoding=DEFAULT_ENCODING):
    """
    Read records one at a time, passing each to listener.
    :param input: Path, binary stream or text stream. Paths are closed before returning, including on error.
    :param listener: Callable receiving each record. Returning False stops reading early.
    :param format: One of SAM, PAF, GAF, GFA1, GFA2 or VCF, or None to discover it.
    :param encoding: Encoding for paths and binary streams.
    :return: None
    """
    with open_input(input, encoding) as handle:
        for record in Reader(handle, format):
            if listener(record) is False:
                logger.debug("listener stopped reading")
                break


def read(input, format=None, types=None, encoding=DEFAULT_ENCODING) -> list:
    """
    Read all records into a list. The whole input is held in memory.
    :param input: Path, binary stream or text stream.
    :param format: One of SAM, PAF, GAF, GFA1, GFA2 or VCF, or None to discover it.
    :param types: If provided, a class or tuple of classes. Only records of these types are returned.
    :param encoding: Encoding for paths and binary streams.
    :return: List of records.
    """
    records = []

    def collect(record):
        if types is None or isinstance(record, types):
            records.append(record)

    stream(input, collect, format, encoding)
    return records
