"""
Typed parsing of optional fields held in a multimap of tag to raw value strings.
A tag repeated across tokens accumulates values, which is how array fields are built one token at a time.
"""
from collections.abc import Mapping

from ..util import ArityError, FormatError, MissingKeyError, TypeMismatchError
from .record import Annotated, AnnotatedRecord
from .tag import Annotation, TagType, check_length, to_array_type, to_bytes, to_float, to_integer, \
    to_ranged_integer, to_tag_type


def _check_type(key, types, expected):
    if types is None or key not in types:
        return
    actual = to_tag_type(types[key])
    if actual is not expected:
        raise TypeMismatchError("{} is Type={}, not Type={}".format(key, actual.value, expected.value), token=key)


def _single(key, fields, types, expected):
    if key not in fields:
        raise MissingKeyError("missing key {}".format(key), token=key)
    _check_type(key, types, expected)
    values = fields[key]
    if len(values) != 1:
        raise ArityError("expected exactly one value for key {}, found {}".format(key, len(values)), token=key)
    return values[0]


def _array(key, fields, length, types, array_types, integer):
    if length is not None and length < 1:
        raise ValueError("length must be at least one")
    _check_type(key, types, TagType.ARRAY)
    element = None
    if array_types is not None and key in array_types:
        element = to_array_type(array_types[key])
        if element.is_integer != integer:
            raise TypeMismatchError("{} is Type=B first letter {}, not an {} array".format(
                key, element.value, 'integer' if integer else 'float'), token=key)
    values = fields.get(key, ())
    check_length(key, length, len(values))
    return values, element


def parse_character(key, fields, types=None) -> str:
    """
    Parse a Type=A field.
    :param key: Tag name.
    :param fields: Multimap of tag to list of raw values.
    :param types: Optional mapping of tag to type code.
    :return: Single character string.
    """
    value = _single(key, fields, types, TagType.CHARACTER)
    if len(value) != 1:
        raise FormatError("Type=A value for key {} not one character".format(key), token=value)
    return value


def parse_integer(key, fields, types=None) -> int:
    return to_integer(_single(key, fields, types, TagType.INTEGER))


def parse_float(key, fields, types=None) -> float:
    return to_float(_single(key, fields, types, TagType.FLOAT))


def parse_string(key, fields, types=None) -> str:
    return _single(key, fields, types, TagType.STRING)


def parse_byte_array(key, fields, types=None) -> bytes:
    return to_bytes(_single(key, fields, types, TagType.BYTE_ARRAY))


def parse_integers(key, fields, length=None, types=None, array_types=None) -> list:
    """
    Parse all values of an integer array field.
    :param key: Tag name.
    :param fields: Multimap of tag to list of raw values.
    :param length: If provided, the exact number of values expected.
    :param types: Optional mapping of tag to type code.
    :param array_types: Optional mapping of tag to array element code.
    :return: List of int, empty if the tag is absent and no length is requested.
    """
    values, element = _array(key, fields, length, types, array_types, True)
    if element is None:
        return [to_integer(value) for value in values]
    return [to_ranged_integer(value, element) for value in values]


def parse_floats(key, fields, length=None, types=None, array_types=None) -> list:
    """
    Parse all values of a float array field.
    :param key: Tag name.
    :param fields: Multimap of tag to list of raw values.
    :param length: If provided, the exact number of values expected.
    :param types: Optional mapping of tag to type code.
    :param array_types: Optional mapping of tag to array element code.
    :return: List of float, empty if the tag is absent and no length is requested.
    """
    values, _ = _array(key, fields, length, types, array_types, False)
    return [to_float(value) for value in values]


class FieldsBuilder:
    """
    Mutable accumulator of optional fields, frozen into an AnnotatedRecord by build().
    with_* methods append. replace_* methods drop prior values for the tag by rebuilding the backing maps,
    which costs a copy of every field.
    """
    __slots__ = '_fields', '_types', '_array_types'

    def __init__(self):
        self._fields = {}
        self._types = {}
        self._array_types = {}

    @property
    def fields(self):
        return {tag: list(values) for tag, values in self._fields.items()}

    @property
    def types(self):
        return {tag: type.value for tag, type in self._types.items()}

    @property
    def array_types(self):
        return {tag: element.value for tag, element in self._array_types.items()}

    def _declare(self, tag, type, element=None):
        previous = self._types.get(tag)
        if previous is not None and (previous is not type or self._array_types.get(tag) is not element):
            raise FormatError("conflicting types for tag {}".format(tag), token=tag)
        self._types[tag] = type
        if element is not None:
            self._array_types[tag] = element

    def with_field(self, tag, type, value) -> 'FieldsBuilder':
        """
        Append a scalar value.
        :param tag: Tag name.
        :param type: TagType or type code, not B.
        :param value: Value, converted with str().
        :return: self
        """
        type = to_tag_type(type)
        if type is TagType.ARRAY:
            raise ValueError("use with_array_field for Type=B field {}".format(tag))
        self._declare(tag, type)
        self._fields.setdefault(tag, []).append(str(value))
        return self

    def with_array_field(self, tag, array_type, *values) -> 'FieldsBuilder':
        """
        Append values to a B type field.
        :param tag: Tag name.
        :param array_type: ArrayType or element code.
        :param values: Values, converted with str().
        :return: self
        """
        self._declare(tag, TagType.ARRAY, to_array_type(array_type))
        self._fields.setdefault(tag, []).extend(str(value) for value in values)
        return self

    def with_annotation(self, annotation: Annotation) -> 'FieldsBuilder':
        if annotation.type is TagType.ARRAY:
            return self.with_array_field(annotation.name, annotation.array_type, *annotation.values)
        return self.with_field(annotation.name, annotation.type, annotation.value)

    def with_fields(self, fields, types, array_types=None) -> 'FieldsBuilder':
        """
        Append every value of a multimap.
        :param fields: Multimap of tag to list of raw values.
        :param types: Mapping of tag to type code, required for every tag.
        :param array_types: Mapping of tag to array element code, required for B tags.
        :return: self
        """
        array_types = array_types or {}
        for tag, values in fields.items():
            if tag not in types:
                raise FormatError("no type for tag {}".format(tag), token=tag)
            if to_tag_type(types[tag]) is TagType.ARRAY:
                if tag not in array_types:
                    raise FormatError("no array type for tag {}".format(tag), token=tag)
                self.with_array_field(tag, array_types[tag], *values)
            else:
                for value in values:
                    self.with_field(tag, types[tag], value)
        return self

    def _without(self, tags):
        self._fields = {tag: values for tag, values in self._fields.items() if tag not in tags}
        self._types = {tag: type for tag, type in self._types.items() if tag not in tags}
        self._array_types = {tag: element for tag, element in self._array_types.items() if tag not in tags}

    def replace_field(self, tag, type, value) -> 'FieldsBuilder':
        self._without((tag,))
        return self.with_field(tag, type, value)

    def replace_array_field(self, tag, array_type, *values) -> 'FieldsBuilder':
        self._without((tag,))
        return self.with_array_field(tag, array_type, *values)

    def replace_fields(self, fields, types, array_types=None) -> 'FieldsBuilder':
        self.reset()
        return self.with_fields(fields, types, array_types)

    def reset(self) -> 'FieldsBuilder':
        self._fields = {}
        self._types = {}
        self._array_types = {}
        return self

    def build(self) -> AnnotatedRecord:
        """
        Freeze the accumulated fields.
        :return: AnnotatedRecord with one Annotation per tag, in first insertion order.
        """
        annotations = []
        for tag, values in self._fields.items():
            type = self._types[tag]
            if type is TagType.ARRAY:
                annotations.append(Annotation(tag, type, values, self._array_types[tag]))
            elif len(values) != 1:
                raise ArityError("expected exactly one value for key {}, found {}".format(tag, len(values)), token=tag)
            else:
                annotations.append(Annotation(tag, type, values[0]))
        return AnnotatedRecord(annotations)


def to_multimap(annotations):
    """
    Split an AnnotatedRecord into the multimap form used by the parse functions.
    :param annotations: AnnotatedRecord or mapping of tag to Annotation.
    :return: Tuple of fields, types and array_types mappings.
    """
    fields, types, array_types = {}, {}, {}
    for tag, annotation in annotations.items():
        fields[tag] = list(annotation.values)
        types[tag] = annotation.type.value
        if annotation.array_type is not None:
            array_types[tag] = annotation.array_type.value
    return fields, types, array_types


class MultimapAnnotated(Annotated):
    """
    Base for records whose optional fields may be repeated on one line, such as SAM and GAF.
    Exposes the fields as a multimap and reads typed values through the parse functions.
    """
    __slots__ = ()

    @property
    def fields(self) -> dict:
        """
        Optional fields as a multimap of tag to list of raw values.
        """
        return to_multimap(self.annotations)[0]

    @property
    def field_types(self) -> dict:
        return to_multimap(self.annotations)[1]

    @property
    def field_array_types(self) -> dict:
        return to_multimap(self.annotations)[2]

    def contains_key(self, tag):
        return tag in self.annotations

    def get_field_character(self, tag):
        fields, types, _ = to_multimap(self.annotations)
        return parse_character(tag, fields, types)

    def get_field_integer(self, tag):
        fields, types, _ = to_multimap(self.annotations)
        return parse_integer(tag, fields, types)

    def get_field_float(self, tag):
        fields, types, _ = to_multimap(self.annotations)
        return parse_float(tag, fields, types)

    def get_field_string(self, tag):
        fields, types, _ = to_multimap(self.annotations)
        return parse_string(tag, fields, types)

    def get_field_byte_array(self, tag):
        fields, types, _ = to_multimap(self.annotations)
        return parse_byte_array(tag, fields, types)

    def get_field_integers(self, tag, length=None):
        fields, types, array_types = to_multimap(self.annotations)
        return parse_integers(tag, fields, length, types, array_types)

    def get_field_floats(self, tag, length=None):
        fields, types, array_types = to_multimap(self.annotations)
        return parse_floats(tag, fields, length, types, array_types)

    def get_field_character_opt(self, tag):
        return self.get_field_character(tag) if tag in self.annotations else None

    def get_field_integer_opt(self, tag):
        return self.get_field_integer(tag) if tag in self.annotations else None

    def get_field_float_opt(self, tag):
        return self.get_field_float(tag) if tag in self.annotations else None

    def get_field_string_opt(self, tag):
        return self.get_field_string(tag) if tag in self.annotations else None

    def get_field_byte_array_opt(self, tag):
        return self.get_field_byte_array(tag) if tag in self.annotations else None

    def get_field_integers_opt(self, tag, length=None):
        return self.get_field_integers(tag, length) if tag in self.annotations else None

    def get_field_floats_opt(self, tag, length=None):
        return self.get_field_floats(tag, length) if tag in self.annotations else None


class AnnotatedBuilder:
    """
    Base for record builders, forwarding optional field operations to a FieldsBuilder.
    """

    def __init__(self):
        self._fields = FieldsBuilder()

    def with_annotations(self, annotations) -> 'AnnotatedBuilder':
        """
        Append every field of an AnnotatedRecord.
        :param annotations: AnnotatedRecord or iterable of Annotation.
        :return: self
        """
        if isinstance(annotations, Mapping):
            annotations = annotations.values()
        for annotation in annotations:
            self._fields.with_annotation(annotation)
        return self

    def with_annotation(self, annotation) -> 'AnnotatedBuilder':
        self._fields.with_annotation(annotation)
        return self

    def with_field(self, tag, type, value) -> 'AnnotatedBuilder':
        self._fields.with_field(tag, type, value)
        return self

    def with_array_field(self, tag, array_type, *values) -> 'AnnotatedBuilder':
        self._fields.with_array_field(tag, array_type, *values)
        return self

    def with_fields(self, fields, types, array_types=None) -> 'AnnotatedBuilder':
        self._fields.with_fields(fields, types, array_types)
        return self

    def replace_field(self, tag, type, value) -> 'AnnotatedBuilder':
        self._fields.replace_field(tag, type, value)
        return self

    def replace_array_field(self, tag, array_type, *values) -> 'AnnotatedBuilder':
        self._fields.replace_array_field(tag, array_type, *values)
        return self

    def replace_fields(self, fields, types, array_types=None) -> 'AnnotatedBuilder':
        self._fields.replace_fields(fields, types, array_types)
        return self

    def reset(self) -> 'AnnotatedBuilder':
        self._fields.reset()
        return self
