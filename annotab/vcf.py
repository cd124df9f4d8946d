"""
VCF meta-information header lines, both unstructured ##KEY=value lines and structured ##KEY=<ID=...,...> lines.

Classes:
    VcfHeaderLine: Unstructured ##KEY=value line.
    VcfStructuredHeaderLine: Structured line with an ID, and the base of the typed structured lines.
    VcfInfoHeaderLine, VcfFormatHeaderLine, VcfFilterHeaderLine, VcfAltHeaderLine, VcfContigHeaderLine,
    VcfMetaHeaderLine, VcfSampleHeaderLine, VcfPedigreeHeaderLine: Typed structured lines.
    VcfHeaderLineNumber: Number attribute, A, R, G, . or a non-negative integer.
    VcfHeaderLineType: Enum of Type attribute values.

Functions:
    parse_entries: Quote aware split of a structured value into a multimap of attributes.
    parse_header_line: Parse any meta-information line, dispatching on its key.

Lines are written in canonical form: known attributes in a fixed order followed by any other attributes, quoted.
"""
import re
from collections import namedtuple
from enum import Enum
from operator import attrgetter

from .util import ArityError, FormatError, MissingKeyError, parse_float, parse_int

STRUCTURED = re.compile(r"^##[a-zA-Z0-9_-]+=<.*ID=.+>$")
"""Pattern: Structured header line with an ID attribute."""

KEY_RE = re.compile(r"##([a-zA-Z0-9_.-]+)=")


class VcfHeaderLineType(Enum):
    """Enum of Type attribute values."""
    INTEGER = 'Integer'
    FLOAT = 'Float'
    FLAG = 'Flag'
    CHARACTER = 'Character'
    STRING = 'String'

    @staticmethod
    def parse(value) -> 'VcfHeaderLineType':
        if isinstance(value, VcfHeaderLineType):
            return value
        try:
            return VcfHeaderLineType(value)
        except ValueError:
            raise FormatError("Type must be one of Integer, Float, Flag, Character or String", token=value) from None

    def __str__(self):
        return self.value


class VcfHeaderLineNumber:
    """
    Represents a Number attribute: A (one per alternate allele), R (one per allele), G (one per genotype),
    . (unknown) or a fixed non-negative count.
    """
    __slots__ = '_name', '_value'
    SYMBOLS = 'A', 'R', 'G', '.'

    def __init__(self, value):
        if isinstance(value, int):
            if value < 0:
                raise FormatError("Number must be at least zero", token=str(value))
            self._name, self._value = 'N', value
        elif value in self.SYMBOLS:
            self._name, self._value = value, None
        else:
            raise FormatError("Number must be one of A, R, G, . or an integer", token=value)

    name = property(attrgetter('_name'))
    value = property(attrgetter('_value'))

    def is_numeric(self):
        return self._value is not None

    @staticmethod
    def parse(value: str) -> 'VcfHeaderLineNumber':
        if isinstance(value, (VcfHeaderLineNumber, int)):
            return value if isinstance(value, VcfHeaderLineNumber) else VcfHeaderLineNumber(value)
        if value in VcfHeaderLineNumber.SYMBOLS:
            return VcfHeaderLineNumber(value)
        if not value.isdigit():
            raise FormatError("Number must be one of A, R, G, . or an integer", token=value)
        return VcfHeaderLineNumber(int(value))

    def __eq__(self, other):
        if not isinstance(other, VcfHeaderLineNumber):
            return NotImplemented
        return self._name == other._name and self._value == other._value

    def __hash__(self):
        return hash((self._name, self._value))

    def __str__(self):
        return self._name if self._value is None else str(self._value)

    def __repr__(self):
        return "VcfHeaderLineNumber({!r})".format(str(self))


def parse_entries(value: str) -> dict:
    """
    Split the <...> value of a structured line into attributes.
    Commas and equals signs within double quotes are literal, \\" and \\\\ are unescaped within quotes.
    :param value: String starting with '<' and ending with '>'.
    :return: Dict of attribute name to list of values in input order.
    """
    entries = {}
    key = None
    chars = []
    in_quote = False
    escape = False
    last = len(value) - 1
    for index, c in enumerate(value):
        if in_quote:
            if escape:
                if c not in '"\\':
                    chars.append('\\')
                chars.append(c)
                escape = False
            elif c == '\\':
                escape = True
            elif c == '"':
                in_quote = False
            else:
                chars.append(c)
        elif c == '"':
            in_quote = True
        elif c == '<' and index == 0:
            continue
        elif c == '>' and index == last:
            if key is not None or chars:
                entries.setdefault(key or '', []).append(''.join(chars))
        elif c == '=' and key is None:
            key = ''.join(chars).strip()
            chars = []
        elif c == ',':
            entries.setdefault(key or '', []).append(''.join(chars))
            key = None
            chars = []
        else:
            chars.append(c)
    if in_quote:
        raise FormatError("unclosed quote in header line value", token=value)
    return entries


def required_string(key, entries) -> str:
    values = entries.get(key)
    if not values:
        raise MissingKeyError("required key {} not found".format(key), token=key)
    if len(values) > 1:
        raise ArityError("found more than one value for required key {}".format(key), token=key)
    return values[0]


def optional_string(key, entries):
    values = entries.get(key)
    if not values:
        return None
    if len(values) > 1:
        raise ArityError("found more than one value for optional key {}".format(key), token=key)
    return values[0]


def _flag(value):
    return value.lower() == 'true'


_CONVERTERS = {
    'string': str,
    'integer': lambda value: parse_int(value, 'integer attribute'),
    'float': lambda value: parse_float(value, 'float attribute'),
    'flag': _flag,
    'number': VcfHeaderLineNumber.parse,
    'type': VcfHeaderLineType.parse,
}


def _required(kind):
    def required(key, entries):
        return _CONVERTERS[kind](required_string(key, entries))
    return required


def _optional(kind):
    def optional(key, entries):
        value = optional_string(key, entries)
        return None if value is None else _CONVERTERS[kind](value)
    return optional


required_integer, required_float, required_flag, required_number, required_type = \
    (_required(kind) for kind in ('integer', 'float', 'flag', 'number', 'type'))
optional_integer, optional_float, optional_flag, optional_number, optional_type = \
    (_optional(kind) for kind in ('integer', 'float', 'flag', 'number', 'type'))


def quote(value) -> str:
    return '"' + str(value).replace('\\', '\\\\').replace('"', '\\"') + '"'


class VcfHeaderLine:
    """
    Represents an unstructured ##KEY=value line. The value is kept verbatim.
    """
    __slots__ = '_key', '_value'

    def __init__(self, key: str, value: str):
        self._key = key
        self._value = value

    key = property(attrgetter('_key'))
    value = property(attrgetter('_value'))

    @staticmethod
    def parse(line: str) -> 'VcfHeaderLine':
        line = line.rstrip('\r\n')
        match = KEY_RE.match(line)
        if match is None:
            raise FormatError("header line must start with ##KEY=", token=line)
        return VcfHeaderLine(match.group(1), line[match.end():])

    def __eq__(self, other):
        if type(other) is not VcfHeaderLine:
            return NotImplemented
        return self._key == other._key and self._value == other._value

    def __hash__(self):
        return hash((self._key, self._value))

    def __str__(self):
        return "##{}={}".format(self._key, self._value)

    def __repr__(self):
        return "VcfHeaderLine({!r})".format(str(self))


Attribute = namedtuple('Attribute', 'name field kind required quoted')
"""Known attribute of a structured line: VCF name, constructor argument, value kind, required, written quoted."""


class VcfStructuredHeaderLine:
    """
    Represents a structured ##KEY=<ID=...,...> line. Attributes other than ID are kept in input order.
    Subclasses fix the key and declare their known attributes in schema.
    """
    __slots__ = '_key', '_id', '_values', '_attributes'
    key_name = None
    schema = ()

    def __init__(self, key: str, id: str, attributes=(), **values):
        """
        Constructor.
        :param key: Line key, e.g. INFO.
        :param id: Value of the ID attribute.
        :param attributes: Iterable of (name, value) pairs, or mapping of name to list of values, for other attributes.
        :param values: Known attribute values keyed by field name.
        """
        if not id:
            raise FormatError("structured header line requires ID", token=key)
        self._key = key
        self._id = id
        self._values = {}
        for attribute in self.schema:
            value = values.pop(attribute.field, None)
            if value is None and attribute.required:
                raise MissingKeyError("{} header line requires {}".format(key, attribute.name), token=attribute.name)
            if value is not None and attribute.kind in ('number', 'type'):
                value = _CONVERTERS[attribute.kind](value)
            self._values[attribute.name] = value
        if values:
            raise TypeError("unexpected arguments: {}".format(', '.join(values)))
        if hasattr(attributes, 'items'):
            attributes = [(name, value) for name, values in attributes.items() for value in values]
        self._attributes = tuple((name, str(value)) for name, value in attributes)

    key = property(attrgetter('_key'))
    id = property(attrgetter('_id'))

    @property
    def attributes(self) -> dict:
        """
        Attributes other than ID and the known attributes, as a dict of name to list of values.
        """
        attributes = {}
        for name, value in self._attributes:
            attributes.setdefault(name, []).append(value)
        return attributes

    @classmethod
    def _split(cls, line, key=None):
        line = line.rstrip('\r\n')
        match = KEY_RE.match(line)
        if match is None or (key is not None and match.group(1) != key):
            raise FormatError("header line must start with ##{}=".format(key or 'KEY'), token=line)
        value = line[match.end():]
        if not (value.startswith('<') and value.endswith('>')):
            raise FormatError("structured header line value must be enclosed in <>", token=line)
        return match.group(1), parse_entries(value)

    @classmethod
    def parse(cls, line: str):
        """
        Parse a structured line with this class's key, or any key for VcfStructuredHeaderLine itself.
        :param line: String to parse.
        :return: Instance of cls.
        """
        key, entries = cls._split(line, cls.key_name)
        if 'ID' not in entries:
            raise FormatError("structured header line requires ID", token=line.rstrip('\r\n'))
        id = required_string('ID', entries)
        known = {'ID'}
        values = {}
        for attribute in cls.schema:
            known.add(attribute.name)
            convert = _required(attribute.kind) if attribute.required else _optional(attribute.kind)
            values[attribute.field] = convert(attribute.name, entries)
        attributes = [(name, value) for name, values_ in entries.items() if name not in known for value in values_]
        if cls.key_name is None:
            return cls(key, id, attributes)
        return cls(id, attributes=attributes, **values)

    def _entries(self):
        yield 'ID=' + self._id
        for attribute in self.schema:
            value = self._values[attribute.name]
            if value is not None:
                yield '{}={}'.format(attribute.name, quote(value) if attribute.quoted else value)
        for name, value in self._attributes:
            yield '{}={}'.format(name, quote(value))

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return (self._key, self._id, self._values, self._attributes) == (other._key, other._id, other._values, other._attributes)

    def __hash__(self):
        return hash((self._key, self._id, self._attributes))

    def __str__(self):
        return "##{}=<{}>".format(self._key, ','.join(self._entries()))

    def __repr__(self):
        return "{}({!r})".format(type(self).__name__, str(self))


def _value(name):
    return property(lambda self: self._values[name])


class VcfInfoHeaderLine(VcfStructuredHeaderLine):
    __slots__ = ()
    key_name = 'INFO'
    schema = (
        Attribute('Number', 'number', 'number', True, False),
        Attribute('Type', 'type', 'type', True, False),
        Attribute('Description', 'description', 'string', True, True),
        Attribute('Source', 'source', 'string', False, True),
        Attribute('Version', 'version', 'string', False, True),
    )

    def __init__(self, id, number=None, type=None, description=None, source=None, version=None, attributes=()):
        super().__init__(self.key_name, id, attributes, number=number, type=type, description=description, source=source,
                         version=version)

    number = _value('Number')
    type = _value('Type')
    description = _value('Description')
    source = _value('Source')
    version = _value('Version')


class VcfFormatHeaderLine(VcfStructuredHeaderLine):
    __slots__ = ()
    key_name = 'FORMAT'
    schema = (
        Attribute('Number', 'number', 'number', True, False),
        Attribute('Type', 'type', 'type', True, False),
        Attribute('Description', 'description', 'string', True, True),
    )

    def __init__(self, id, number=None, type=None, description=None, attributes=()):
        super().__init__(self.key_name, id, attributes, number=number, type=type, description=description)

    number = _value('Number')
    type = _value('Type')
    description = _value('Description')


class VcfFilterHeaderLine(VcfStructuredHeaderLine):
    __slots__ = ()
    key_name = 'FILTER'
    schema = Attribute('Description', 'description', 'string', True, True),

    def __init__(self, id, description=None, attributes=()):
        super().__init__(self.key_name, id, attributes, description=description)

    description = _value('Description')


class VcfAltHeaderLine(VcfStructuredHeaderLine):
    __slots__ = ()
    key_name = 'ALT'
    schema = Attribute('Description', 'description', 'string', True, True),

    def __init__(self, id, description=None, attributes=()):
        super().__init__(self.key_name, id, attributes, description=description)

    description = _value('Description')


class VcfContigHeaderLine(VcfStructuredHeaderLine):
    __slots__ = ()
    key_name = 'contig'
    schema = (
        Attribute('length', 'length', 'integer', False, False),
        Attribute('MD5', 'md5', 'string', False, True),
        Attribute('URL', 'url', 'string', False, True),
    )

    def __init__(self, id, length=None, md5=None, url=None, attributes=()):
        super().__init__(self.key_name, id, attributes, length=length, md5=md5, url=url)

    length = _value('length')
    md5 = _value('MD5')
    url = _value('URL')


class VcfMetaHeaderLine(VcfStructuredHeaderLine):
    __slots__ = ()
    key_name = 'META'
    schema = (
        Attribute('Number', 'number', 'number', False, False),
        Attribute('Type', 'type', 'type', False, False),
    )

    def __init__(self, id, number=None, type=None, attributes=()):
        super().__init__(self.key_name, id, attributes, number=number, type=type)

    number = _value('Number')
    type = _value('Type')


class VcfSampleHeaderLine(VcfStructuredHeaderLine):
    __slots__ = ()
    key_name = 'SAMPLE'

    def __init__(self, id, attributes=()):
        super().__init__(self.key_name, id, attributes)


class VcfPedigreeHeaderLine:
    """
    Represents a ##PEDIGREE=<...> line, which has no required attributes.
    """
    __slots__ = '_attributes',
    key = 'PEDIGREE'

    def __init__(self, attributes=()):
        if hasattr(attributes, 'items'):
            attributes = [(name, value) for name, values in attributes.items() for value in values]
        self._attributes = tuple((name, str(value)) for name, value in attributes)

    @property
    def attributes(self) -> dict:
        attributes = {}
        for name, value in self._attributes:
            attributes.setdefault(name, []).append(value)
        return attributes

    @staticmethod
    def parse(line: str) -> 'VcfPedigreeHeaderLine':
        _, entries = VcfStructuredHeaderLine._split(line, VcfPedigreeHeaderLine.key)
        return VcfPedigreeHeaderLine(entries)

    def __eq__(self, other):
        if not isinstance(other, VcfPedigreeHeaderLine):
            return NotImplemented
        return self._attributes == other._attributes

    def __hash__(self):
        return hash(self._attributes)

    def __str__(self):
        return "##PEDIGREE=<{}>".format(','.join('{}={}'.format(name, quote(value)) for name, value in self._attributes))

    def __repr__(self):
        return "VcfPedigreeHeaderLine({!r})".format(str(self))


HEADER_LINE_TYPES = {cls.key_name: cls for cls in (VcfInfoHeaderLine, VcfFormatHeaderLine, VcfFilterHeaderLine, VcfAltHeaderLine,
                                                    VcfContigHeaderLine, VcfMetaHeaderLine, VcfSampleHeaderLine)}
"""dict: Structured header line class indexed by key."""
HEADER_LINE_TYPES[VcfPedigreeHeaderLine.key] = VcfPedigreeHeaderLine


def parse_header_line(line: str):
    """
    Parse a ##KEY=... meta-information line, dispatching on its key.
    Structured lines with other keys and an ID are VcfStructuredHeaderLine, anything else is VcfHeaderLine.
    :param line: String to parse.
    :return: Header line instance.
    """
    line = line.rstrip('\r\n')
    match = KEY_RE.match(line)
    if match is None:
        raise FormatError("header line must start with ##KEY=", token=line)
    cls = HEADER_LINE_TYPES.get(match.group(1))
    if cls is not None:
        return cls.parse(line)
    if STRUCTURED.match(line):
        return VcfStructuredHeaderLine.parse(line)
    return VcfHeaderLine.parse(line)
