import re

from ..util import ArityError, ConstraintViolation, FormatError, MissingKeyError, check_non_negative, parse_int

header_re = re.compile(r"([A-Za-z][A-Za-z0-9]):([ -~]*)")


class SamHeaderLine:
    """
    Represents a @HD header line, or the base of the other typed header lines.
    Fields are kept in input order so str() reproduces the line.
    """
    __slots__ = '_fields',
    record_type = 'HD'
    required = 'VN',

    def __init__(self, fields):
        """
        Constructor.
        :param fields: Mapping or iterable of (tag, value) pairs.
        """
        if hasattr(fields, 'items'):
            fields = fields.items()
        self._fields = {}
        for tag, value in fields:
            if tag in self._fields:
                raise ArityError("@{} field {} present more than once".format(self.record_type, tag), token=tag)
            self._fields[tag] = value
        for tag in self.required:
            if tag not in self._fields:
                raise MissingKeyError("@{} requires field {}".format(self.record_type, tag), token=tag)

    @property
    def fields(self) -> dict:
        return dict(self._fields)

    def get(self, tag, default=None):
        return self._fields.get(tag, default)

    def __getitem__(self, tag):
        try:
            return self._fields[tag]
        except KeyError:
            raise MissingKeyError("@{} has no field {}".format(self.record_type, tag), token=tag) from None

    def __contains__(self, tag):
        return tag in self._fields

    @property
    def version(self):
        return self._fields.get('VN')

    @property
    def sort_order(self):
        return self._fields.get('SO')

    @property
    def group_order(self):
        return self._fields.get('GO')

    @classmethod
    def parse(cls, line: str) -> 'SamHeaderLine':
        """
        Parse a header line of this record type.
        :param line: String starting with '@' and the two character record type.
        :return: Instance of cls.
        """
        line = line.rstrip('\r\n')
        prefix = '@' + cls.record_type
        tokens = line.split('\t')
        if tokens[0] != prefix:
            raise FormatError("header line must start with {}".format(prefix), token=line)
        fields = []
        for token in tokens[1:]:
            match = header_re.fullmatch(token)
            if match is None:
                raise FormatError("invalid @{} field".format(cls.record_type), token=token)
            fields.append(match.groups())
        return cls(fields)

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return list(self._fields.items()) == list(other._fields.items())

    def __hash__(self):
        return hash(tuple(self._fields.items()))

    def __str__(self):
        return '@' + self.record_type + ''.join('\t{}:{}'.format(tag, value) for tag, value in self._fields.items())

    def __repr__(self):
        return "{}({!r})".format(type(self).__name__, str(self))


class SamSequenceHeaderLine(SamHeaderLine):
    """
    Represents a @SQ reference sequence dictionary line.
    """
    __slots__ = ()
    record_type = 'SQ'
    required = 'SN', 'LN'

    def __init__(self, fields):
        super().__init__(fields)
        check_non_negative(parse_int(self._fields['LN'], 'LN'), 'LN')

    @property
    def name(self) -> str:
        return self._fields['SN']

    @property
    def length(self) -> int:
        return int(self._fields['LN'])

    @property
    def md5(self):
        return self._fields.get('M5')

    @property
    def uri(self):
        return self._fields.get('UR')


class SamReadGroupHeaderLine(SamHeaderLine):
    """
    Represents a @RG read group line.
    """
    __slots__ = ()
    record_type = 'RG'
    required = 'ID',

    @property
    def id(self) -> str:
        return self._fields['ID']

    @property
    def sample(self):
        return self._fields.get('SM')

    @property
    def platform(self):
        return self._fields.get('PL')


class SamProgramHeaderLine(SamHeaderLine):
    """
    Represents a @PG program line.
    """
    __slots__ = ()
    record_type = 'PG'
    required = 'ID',

    @property
    def id(self) -> str:
        return self._fields['ID']

    @property
    def name(self):
        return self._fields.get('PN')

    @property
    def command_line(self):
        return self._fields.get('CL')

    @property
    def previous_id(self):
        return self._fields.get('PP')


class SamCommentHeaderLine:
    """
    Represents a @CO free text comment line.
    """
    __slots__ = 'comment',
    record_type = 'CO'

    def __init__(self, comment: str):
        self.comment = comment

    @classmethod
    def parse(cls, line: str) -> 'SamCommentHeaderLine':
        line = line.rstrip('\r\n')
        if not line.startswith('@CO\t'):
            raise FormatError("header line must start with @CO", token=line)
        return cls(line[4:])

    def __eq__(self, other):
        if not isinstance(other, SamCommentHeaderLine):
            return NotImplemented
        return self.comment == other.comment

    def __hash__(self):
        return hash(self.comment)

    def __str__(self):
        return '@CO\t' + self.comment

    def __repr__(self):
        return "SamCommentHeaderLine({!r})".format(self.comment)


HEADER_LINE_TYPES = {cls.record_type: cls for cls in (SamHeaderLine, SamSequenceHeaderLine, SamReadGroupHeaderLine,
                                                       SamProgramHeaderLine, SamCommentHeaderLine)}
"""dict: Header line class indexed by record type code."""


def parse_header_line(line: str):
    """
    Parse any SAM header line, dispatching on the record type code.
    :param line: String starting with '@'.
    :return: Instance of the matching header line class.
    """
    cls = HEADER_LINE_TYPES.get(line[1:3]) if line.startswith('@') else None
    if cls is None:
        raise FormatError("unrecognized SAM header record type", token=line.rstrip('\r\n'))
    return cls.parse(line)


class SamHeader:
    """
    Represents the collection of header lines preceding SAM alignment records.
    """
    __slots__ = '_header_line', '_sequence_header_lines', '_read_group_header_lines', '_program_header_lines', \
                '_comment_header_lines'

    def __init__(self, header_line=None, sequence_header_lines=(), read_group_header_lines=(), program_header_lines=(),
                 comment_header_lines=()):
        self._header_line = header_line
        self._sequence_header_lines = tuple(sequence_header_lines)
        self._read_group_header_lines = tuple(read_group_header_lines)
        self._program_header_lines = tuple(program_header_lines)
        self._comment_header_lines = tuple(comment_header_lines)

    @property
    def header_line(self):
        return self._header_line

    @property
    def sequence_header_lines(self) -> tuple:
        return self._sequence_header_lines

    @property
    def read_group_header_lines(self) -> tuple:
        return self._read_group_header_lines

    @property
    def program_header_lines(self) -> tuple:
        return self._program_header_lines

    @property
    def comment_header_lines(self) -> tuple:
        return self._comment_header_lines

    def _lines(self):
        yield from self._sequence_header_lines
        yield from self._read_group_header_lines
        yield from self._program_header_lines
        yield from self._comment_header_lines

    def __iter__(self):
        """
        Iterate all header lines, @HD first.
        """
        if self._header_line is not None:
            yield self._header_line
        yield from self._lines()

    def __len__(self):
        return sum(1 for _ in self)

    @staticmethod
    def builder() -> 'SamHeaderBuilder':
        return SamHeaderBuilder()

    @staticmethod
    def parse(lines) -> 'SamHeader':
        """
        Parse header lines.
        :param lines: Iterable of header line strings.
        :return: SamHeader instance.
        """
        builder = SamHeaderBuilder()
        for line in lines:
            if line.strip():
                builder.with_line(parse_header_line(line))
        return builder.build()

    def __eq__(self, other):
        if not isinstance(other, SamHeader):
            return NotImplemented
        return list(self) == list(other)

    def __str__(self):
        return '\n'.join(str(line) for line in self)

    def __repr__(self):
        return "SamHeader({!r})".format(str(self))


class SamHeaderBuilder:
    """
    Mutable builder for SamHeader.
    """

    def __init__(self):
        self.reset()

    def with_header_line(self, header_line: SamHeaderLine) -> 'SamHeaderBuilder':
        self._header_line = header_line
        return self

    def with_sequence_header_line(self, line: SamSequenceHeaderLine) -> 'SamHeaderBuilder':
        self._sequence_header_lines.append(line)
        return self

    def with_read_group_header_line(self, line: SamReadGroupHeaderLine) -> 'SamHeaderBuilder':
        self._read_group_header_lines.append(line)
        return self

    def with_program_header_line(self, line: SamProgramHeaderLine) -> 'SamHeaderBuilder':
        self._program_header_lines.append(line)
        return self

    def with_comment_header_line(self, line: SamCommentHeaderLine) -> 'SamHeaderBuilder':
        self._comment_header_lines.append(line)
        return self

    def with_line(self, line) -> 'SamHeaderBuilder':
        """
        Add any header line, dispatching on its record type.
        :param line: Header line instance.
        :return: self
        """
        if line.record_type == 'HD':
            if self._header_line is not None:
                raise ConstraintViolation("SAM header has more than one @HD header line")
            return self.with_header_line(line)
        return {
            'SQ': self.with_sequence_header_line,
            'RG': self.with_read_group_header_line,
            'PG': self.with_program_header_line,
            'CO': self.with_comment_header_line,
        }[line.record_type](line)

    def replace_sequence_header_lines(self, lines) -> 'SamHeaderBuilder':
        self._sequence_header_lines = list(lines)
        return self

    def replace_read_group_header_lines(self, lines) -> 'SamHeaderBuilder':
        self._read_group_header_lines = list(lines)
        return self

    def replace_program_header_lines(self, lines) -> 'SamHeaderBuilder':
        self._program_header_lines = list(lines)
        return self

    def replace_comment_header_lines(self, lines) -> 'SamHeaderBuilder':
        self._comment_header_lines = list(lines)
        return self

    def reset(self) -> 'SamHeaderBuilder':
        self._header_line = None
        self._sequence_header_lines = []
        self._read_group_header_lines = []
        self._program_header_lines = []
        self._comment_header_lines = []
        return self

    def build(self) -> SamHeader:
        return SamHeader(self._header_line, self._sequence_header_lines, self._read_group_header_lines,
                         self._program_header_lines, self._comment_header_lines)


SamHeader.Builder = SamHeaderBuilder
