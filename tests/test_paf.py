from unittest import TestCase

from annotab.paf import PafRecord
from annotab.util import ConstraintViolation, FormatError

from .data import PAF_RECORD


class TestPafRecord(TestCase):
    def test_parse(self):
        record = PafRecord.parse(PAF_RECORD + "\n", 3)
        self.assertEqual(record.query_name, "q1")
        self.assertEqual(record.query_length, 1000)
        self.assertEqual(record.query_start, 10)
        self.assertEqual(record.query_end, 990)
        self.assertEqual(record.strand, "+")
        self.assertEqual(record.target_name, "t1")
        self.assertEqual(record.target_length, 5000)
        self.assertEqual(record.target_start, 100)
        self.assertEqual(record.target_end, 1080)
        self.assertEqual(record.matches, 950)
        self.assertEqual(record.alignment_block_length, 980)
        self.assertEqual(record.mapping_quality, 60)
        self.assertEqual(record.line_number, 3)
        self.assertEqual(record.get_field_character("tp"), "P")
        self.assertEqual(record.get_field_integer("cm"), 80)
        self.assertEqual(record.get_field_floats("ZT"), [0.5, 1.5])
        self.assertIsNone(record.get_field_string_opt("cg"))
        self.assertEqual(str(record), PAF_RECORD)

    def test_merge_arrays(self):
        record = PafRecord.parse(PAF_RECORD + "\tZT:B:f,2.5")
        self.assertEqual(record.get_field_floats("ZT", 3), [0.5, 1.5, 2.5])

    def test_invalid(self):
        with self.assertRaises(FormatError):
            PafRecord.parse("q1\t1000\t10\t990\t+\tt1\t5000\t100\t1080\t950\t980")
        with self.assertRaises(FormatError):
            PafRecord.parse(PAF_RECORD.replace("\t+\t", "\t.\t"))
        with self.assertRaises(FormatError):
            PafRecord.parse(PAF_RECORD.replace("\t1000\t", "\tlong\t"))
        with self.assertRaises(ConstraintViolation):
            PafRecord.parse(PAF_RECORD.replace("\t1000\t", "\t-1000\t"))
        with self.assertRaises(FormatError, msg="Repeated scalar tags"):
            PafRecord.parse(PAF_RECORD + "\tcm:i:81")

    def test_builder(self):
        builder = PafRecord.builder()
        for column, value in zip(('query_name', 'query_length', 'query_start', 'query_end', 'strand', 'target_name',
                                  'target_length', 'target_start', 'target_end', 'matches', 'alignment_block_length',
                                  'mapping_quality'), ("q2", 10, 0, 10, "-", "t2", 20, 5, 15, 10, 10, 255)):
            getattr(builder, 'with_' + column)(value)
        record = builder.with_field("tp", "A", "S").build()
        self.assertEqual(str(record), "q2\t10\t0\t10\t-\tt2\t20\t5\t15\t10\t10\t255\ttp:A:S")

        parsed = PafRecord.parse(PAF_RECORD)
        self.assertEqual(PafRecord.Builder().with_record(parsed).build(), parsed)
        changed = PafRecord.builder(parsed).with_strand("-").replace_field("cm", "i", 5).build()
        self.assertEqual(changed.strand, "-")
        self.assertEqual(changed.get_field_integer("cm"), 5)

        with self.assertRaises(ValueError):
            PafRecord.builder().with_query_name("q3").build()

    def test_reverse_strand(self):
        line = "query\t100\t10\t20\t-\ttarget\t200\t20\t30\t42\t10\t32"
        record = PafRecord.parse(line)
        self.assertEqual(record.strand, "-")
        self.assertEqual(record.matches, 42)
        self.assertEqual(len(record.annotations), 0)
        self.assertEqual(str(record), line)
