"""
This subpackage contains the TAG:TYPE:VALUE optional field model shared by the SAM, PAF and GFA formats.

Classes:
    Annotation: Represents a single optional field.
    AnnotatedRecord: Immutable ordered mapping of tag name to Annotation with typed accessors.
    FieldsBuilder: Mutable accumulator of optional fields.
    MultimapAnnotated: Base for records whose typed accessors read the fields multimap.
    TagType: Enum of optional field type codes.
    ArrayType: Enum of B type array element codes.

Functions:
    parse_character, parse_integer, parse_float, parse_string, parse_byte_array, parse_integers, parse_floats:
        Typed parsing of a multimap of tag to raw value strings.

Constants:
    BTAG_TYPES (dict): ctypes element type indexed by array element code.

For more:
    >> help(annotab.annotation.tag) for more information on the Annotation object.
    >> help(annotab.annotation.record) for more information on the AnnotatedRecord object.
    >> help(annotab.annotation.fields) for more information on multimap parsing and the FieldsBuilder object.
"""

from .fields import AnnotatedBuilder, FieldsBuilder, MultimapAnnotated, parse_byte_array, parse_character, parse_float, \
    parse_floats, parse_integer, parse_integers, parse_string, to_multimap
from .record import Annotated, AnnotatedRecord, EMPTY
from .tag import Annotation, ArrayType, BTAG_TYPES, TagType
