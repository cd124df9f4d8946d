from collections.abc import Mapping

from ..util import FormatError, MissingKeyError
from .tag import Annotation, TagType

DELEGATED = frozenset((
    'contains_key',
    'get_field_character', 'get_field_integer', 'get_field_float', 'get_field_string', 'get_field_byte_array',
    'get_field_integers', 'get_field_floats',
    'get_field_character_opt', 'get_field_integer_opt', 'get_field_float_opt', 'get_field_string_opt',
    'get_field_byte_array_opt', 'get_field_integers_opt', 'get_field_floats_opt',
))
"""Names of AnnotatedRecord accessors exposed on every record type."""


class AnnotatedRecord(Mapping):
    """
    Immutable insertion ordered mapping of tag name to Annotation.
    """
    __slots__ = '_annotations',

    def __init__(self, annotations=()):
        """
        Constructor.
        :param annotations: Mapping of tag to Annotation, or iterable of Annotation with unique names.
        """
        if isinstance(annotations, Mapping):
            annotations = annotations.values()
        self._annotations = {}
        for annotation in annotations:
            if not isinstance(annotation, Annotation):
                raise TypeError("expected Annotation, got {}".format(type(annotation).__name__))
            if annotation.name in self._annotations:
                raise FormatError("duplicate tag {}".format(annotation.name), token=str(annotation))
            self._annotations[annotation.name] = annotation

    @staticmethod
    def parse(tokens, merge_arrays=False) -> 'AnnotatedRecord':
        """
        Build from the trailing TAG:TYPE:VALUE tokens of a line.
        :param tokens: Iterable of strings, empty strings are ignored.
        :param merge_arrays: Concatenate repeated B tags of the same array type rather than failing.
        :return: Instance of AnnotatedRecord.
        """
        annotations = {}
        for token in tokens:
            if not token:
                continue
            annotation = Annotation.parse(token)
            previous = annotations.get(annotation.name)
            if previous is None:
                annotations[annotation.name] = annotation
            elif merge_arrays and annotation.type is TagType.ARRAY and previous.type is TagType.ARRAY \
                    and annotation.array_type is previous.array_type:
                annotations[annotation.name] = Annotation(annotation.name, TagType.ARRAY,
                                                          previous.values + annotation.values, annotation.array_type)
            else:
                raise FormatError("duplicate tag {}".format(annotation.name), token=token)
        return AnnotatedRecord(annotations)

    def __getitem__(self, tag) -> Annotation:
        try:
            return self._annotations[tag]
        except KeyError:
            raise MissingKeyError("missing tag {}".format(tag), token=tag) from None

    def __iter__(self):
        return iter(self._annotations)

    def __len__(self):
        return len(self._annotations)

    def __contains__(self, tag):
        return tag in self._annotations

    def contains_key(self, tag) -> bool:
        return tag in self._annotations

    def __str__(self):
        return '\t'.join(str(annotation) for annotation in self._annotations.values())

    def __repr__(self):
        return "AnnotatedRecord({!r})".format(list(self._annotations.values()))

    def get_field_character(self, tag) -> str:
        return self[tag].as_character()

    def get_field_integer(self, tag) -> int:
        return self[tag].as_integer()

    def get_field_float(self, tag) -> float:
        return self[tag].as_float()

    def get_field_string(self, tag) -> str:
        return self[tag].as_string()

    def get_field_byte_array(self, tag) -> bytes:
        return self[tag].as_byte_array()

    def get_field_integers(self, tag, length=None) -> list:
        return self[tag].as_integers(length)

    def get_field_floats(self, tag, length=None) -> list:
        return self[tag].as_floats(length)

    def get_field_character_opt(self, tag):
        return self.get_field_character(tag) if tag in self._annotations else None

    def get_field_integer_opt(self, tag):
        return self.get_field_integer(tag) if tag in self._annotations else None

    def get_field_float_opt(self, tag):
        return self.get_field_float(tag) if tag in self._annotations else None

    def get_field_string_opt(self, tag):
        return self.get_field_string(tag) if tag in self._annotations else None

    def get_field_byte_array_opt(self, tag):
        return self.get_field_byte_array(tag) if tag in self._annotations else None

    def get_field_integers_opt(self, tag, length=None):
        return self.get_field_integers(tag, length) if tag in self._annotations else None

    def get_field_floats_opt(self, tag, length=None):
        return self.get_field_floats(tag, length) if tag in self._annotations else None


EMPTY = AnnotatedRecord()


class Annotated:
    """
    Base for records holding an AnnotatedRecord in their annotations attribute.
    Typed accessors are looked up on the annotations.
    """
    __slots__ = ()

    def __getattr__(self, item):
        if item in DELEGATED:
            return getattr(self.annotations, item)
        raise AttributeError("'{}' object has no attribute '{}'".format(type(self).__name__, item))

    def _annotation_suffix(self):
        return '\t' + str(self.annotations) if len(self.annotations) else ''
