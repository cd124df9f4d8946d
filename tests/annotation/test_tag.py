from unittest import TestCase

from annotab.annotation import Annotation, ArrayType, TagType
from annotab.util import ArityError, FormatError, TypeMismatchError


class TestAnnotation(TestCase):
    def test_parse_scalar(self):
        annotation = Annotation.parse("NM:i:3")
        self.assertEqual(annotation.name, "NM")
        self.assertIs(annotation.type, TagType.INTEGER)
        self.assertEqual(annotation.as_integer(), 3)
        self.assertEqual(str(annotation), "NM:i:3", "Formatting must reproduce the input")

        # Values may contain colons
        annotation = Annotation.parse("XZ:Z:a:b:c")
        self.assertEqual(annotation.as_string(), "a:b:c")
        self.assertEqual(annotation.value, "a:b:c")

    def test_parse_array(self):
        annotation = Annotation.parse("ZB:B:c,-1,2,127")
        self.assertTrue(annotation.is_array())
        self.assertIs(annotation.array_type, ArrayType.INT8)
        self.assertEqual(len(annotation), 3)
        self.assertEqual(annotation.as_integers(), [-1, 2, 127])
        self.assertEqual(str(annotation), "ZB:B:c,-1,2,127")

        # Empty array
        annotation = Annotation.parse("ZE:B:f")
        self.assertEqual(annotation.as_floats(), [])
        self.assertEqual(str(annotation), "ZE:B:f")

    def test_parse_invalid(self):
        for value in ("NM", "NM:i", "N:i:1", "NM:q:1", "NM:i:1.5", "XH:H:ABC", "ZB:B:x,1", "ZB:B:i1,2", "ZB:B:i,a"):
            with self.assertRaises(FormatError, msg=value):
                Annotation.parse(value)

    def test_typed_getters(self):
        self.assertEqual(Annotation.parse("XA:A:c").as_character(), "c")
        self.assertAlmostEqual(Annotation.parse("XF:f:-1.5e3").as_float(), -1500.0)
        self.assertEqual(Annotation.parse("XH:H:1AE3").as_byte_array(), b'\x1a\xe3')
        self.assertEqual(Annotation.parse("XF:B:f,0.5,2").as_floats(2), [0.5, 2.0])

    def test_type_mismatch(self):
        with self.assertRaises(TypeMismatchError):
            Annotation.parse("NM:i:1").as_string()
        with self.assertRaises(TypeMismatchError):
            Annotation.parse("XF:B:f,1.0").as_integers()
        with self.assertRaises(ArityError, msg="Scalar accessor on an array of the same kind"):
            Annotation.parse("ZB:B:i,1,2").as_integer()
        with self.assertRaises(ArityError, msg="Array accessor on a scalar of the same kind"):
            Annotation.parse("NM:i:1").as_integers()

    def test_lengths(self):
        annotation = Annotation.parse("ZB:B:S,1,2,3")
        with self.assertRaises(ArityError):
            annotation.as_integers(2)
        with self.assertRaises(ValueError):
            annotation.as_integers(0)

    def test_ranges(self):
        self.assertEqual(Annotation.parse("ZB:B:C,255").as_integers(), [255])
        with self.assertRaises(FormatError):
            Annotation.parse("ZB:B:C,256").as_integers()
        with self.assertRaises(FormatError):
            Annotation.parse("ZB:B:s,-32769").as_integers()

    def test_construct(self):
        annotation = Annotation("ZB", 'B', (1, 2), 'I')
        self.assertEqual(str(annotation), "ZB:B:I,1,2")
        self.assertEqual(annotation, Annotation.parse("ZB:B:I,1,2"))
        with self.assertRaises(FormatError):
            Annotation("ZB", TagType.ARRAY, (1, 2))
        with self.assertRaises(ArityError):
            Annotation("NM", TagType.INTEGER, ("1", "2"))

    def test_construct_scalar_value(self):
        self.assertEqual(Annotation('NM', 'i', 5).as_integer(), 5)
        self.assertEqual(str(Annotation('NM', TagType.INTEGER, 5)), "NM:i:5")
        self.assertEqual(Annotation('XF', 'f', 1.5).as_float(), 1.5)
        self.assertEqual(Annotation('ZB', 'B', 7, 'c').values, ("7",), "A single array element")
        with self.assertRaises(FormatError):
            Annotation('NM', 'i', 1.5)
