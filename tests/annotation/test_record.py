from unittest import TestCase

from annotab.annotation import AnnotatedRecord, Annotation, EMPTY
from annotab.util import FormatError, MissingKeyError, TypeMismatchError


class TestAnnotatedRecord(TestCase):
    def test_parse(self):
        record = AnnotatedRecord.parse(["NM:i:0", "", "XS:Z:text", "ZB:B:i,1,2"])
        self.assertEqual(list(record), ["NM", "XS", "ZB"], "Insertion order must be kept")
        self.assertEqual(len(record), 3)
        self.assertTrue(record.contains_key("XS"))
        self.assertFalse(record.contains_key("AS"))
        self.assertEqual(str(record), "NM:i:0\tXS:Z:text\tZB:B:i,1,2")

    def test_duplicates(self):
        with self.assertRaises(FormatError):
            AnnotatedRecord.parse(["NM:i:0", "NM:i:1"])
        with self.assertRaises(FormatError):
            AnnotatedRecord([Annotation.parse("NM:i:0"), Annotation.parse("NM:i:1")])

        record = AnnotatedRecord.parse(["ZT:B:f,1.5", "ZT:B:f,2.5"], merge_arrays=True)
        self.assertEqual(record.get_field_floats("ZT"), [1.5, 2.5])
        with self.assertRaises(FormatError, msg="Arrays of different types are never merged"):
            AnnotatedRecord.parse(["ZT:B:f,1.5", "ZT:B:i,2"], merge_arrays=True)

    def test_getters(self):
        record = AnnotatedRecord.parse(["tp:A:P", "cm:i:80", "dv:f:0.01", "XH:H:FF", "ZI:B:i,1,2"])
        self.assertEqual(record.get_field_character("tp"), "P")
        self.assertEqual(record.get_field_integer("cm"), 80)
        self.assertAlmostEqual(record.get_field_float("dv"), 0.01)
        self.assertEqual(record.get_field_byte_array("XH"), b'\xff')
        self.assertEqual(record.get_field_integers("ZI", 2), [1, 2])
        with self.assertRaises(TypeMismatchError):
            record.get_field_float("cm")

    def test_missing(self):
        record = AnnotatedRecord.parse(["cm:i:80"])
        with self.assertRaises(MissingKeyError):
            record.get_field_integer("NM")
        with self.assertRaises(KeyError, msg="MissingKeyError is a KeyError"):
            record["NM"]
        self.assertIsNone(record.get_field_integer_opt("NM"))
        self.assertIsNone(record.get_field_floats_opt("ZT"))
        self.assertEqual(record.get_field_integer_opt("cm"), 80)

    def test_empty(self):
        self.assertEqual(len(EMPTY), 0)
        self.assertEqual(str(EMPTY), "")
        self.assertEqual(AnnotatedRecord.parse([]), EMPTY)
