from unittest import TestCase, mock

from annotab.annotation import parse_floats, parse_integers, to_multimap
from annotab.sam import RecordFlags, SamRecord
from annotab.util import ArityError, ConstraintViolation, FormatError, MissingKeyError

from ..data import SAM_RECORD


class TestSamRecord(TestCase):
    def test_parse(self):
        record = SamRecord.parse(SAM_RECORD, 6)
        self.assertEqual(record.qname, "read1")
        self.assertEqual(record.flag, 99)
        self.assertTrue(record.flag & RecordFlags.MULTISEG)
        self.assertTrue(record.flag & RecordFlags.READ1)
        self.assertEqual(record.rname, "chr1")
        self.assertEqual(record.pos, 100)
        self.assertEqual(record.mapq, 60)
        self.assertEqual(record.cigar, "8M")
        self.assertEqual(record.rnext, "=")
        self.assertEqual(record.pnext, 300)
        self.assertEqual(record.tlen, 208)
        self.assertEqual(record.seq, "ACGTACGT")
        self.assertEqual(record.qual, "IIIIIIII")
        self.assertEqual(record.line_number, 6)
        self.assertEqual(record.get_field_integer("NM"), 0)
        self.assertEqual(record.get_field_integers("ZB"), [1, 2, 3])
        self.assertEqual(str(record), SAM_RECORD, "Formatting must reproduce the input")

    def test_missing_columns(self):
        record = SamRecord.parse("*\t4\t*\t0\t255\t*\t*\t0\t-10\t*\t*\n")
        self.assertIsNone(record.qname)
        self.assertIsNone(record.rname)
        self.assertIsNone(record.cigar)
        self.assertIsNone(record.seq)
        self.assertEqual(record.tlen, -10)
        self.assertEqual(len(record.annotations), 0)
        self.assertEqual(str(record), "*\t4\t*\t0\t255\t*\t*\t0\t-10\t*\t*")

    def test_repeated_tags(self):
        record = SamRecord.parse(SAM_RECORD + "\tZB:B:i,4")
        self.assertEqual(record.get_field_integers("ZB"), [1, 2, 3, 4], "Repeated array tags accumulate")
        self.assertEqual(record.fields["ZB"], ['1', '2', '3', '4'])
        self.assertEqual(record.field_types["ZB"], 'B')
        self.assertEqual(record.field_array_types["ZB"], 'i')
        with self.assertRaises(ArityError):
            SamRecord.parse(SAM_RECORD + "\tNM:i:1")

    def test_invalid(self):
        with self.assertRaises(FormatError):
            SamRecord.parse("read1\t0\tchr1\t100")
        with self.assertRaises(FormatError):
            SamRecord.parse("read1\tzero\tchr1\t100\t60\t8M\t*\t0\t0\t*\t*")
        with self.assertRaises(ConstraintViolation):
            SamRecord.parse("read1\t0\tchr1\t100\t256\t8M\t*\t0\t0\t*\t*")
        with self.assertRaises(ConstraintViolation):
            SamRecord.parse("read1\t0\tchr1\t-1\t60\t8M\t*\t0\t0\t*\t*")

    def test_accessors(self):
        record = SamRecord.parse(SAM_RECORD)
        with self.assertRaises(MissingKeyError):
            record.get_field_string("XS")
        self.assertIsNone(record.get_field_string_opt("XS"))
        self.assertIsNone(record.get_field_floats_opt("ZF"))
        self.assertTrue(record.contains_key("NM"))

    def test_accessor_reads_multimap_once(self):
        record = SamRecord.parse(SAM_RECORD)
        with mock.patch('annotab.annotation.fields.to_multimap', wraps=to_multimap) as split:
            self.assertEqual(record.get_field_integer("NM"), 0)
        self.assertEqual(split.call_count, 1)
        with mock.patch('annotab.annotation.fields.to_multimap', wraps=to_multimap) as split:
            self.assertIsNone(record.get_field_float_opt("XF"))
        self.assertEqual(split.call_count, 0, "Absent optional tags are not parsed")

    def test_builder(self):
        record = SamRecord.builder().with_qname("read3").with_flag(RecordFlags.UNMAPPED).with_seq("ACGT") \
            .with_field("RG", "Z", "rg1").with_array_field("ZB", "C", 1, 2).build()
        self.assertEqual(str(record), "read3\t4\t*\t0\t255\t*\t*\t0\t0\tACGT\t*\tRG:Z:rg1\tZB:B:C,1,2")

        copy = SamRecord.builder(record).build()
        self.assertEqual(copy, record)
        self.assertEqual(hash(copy), hash(record))

        changed = SamRecord.Builder().with_record(record).with_mapq(30).replace_field("RG", "Z", "rg2").build()
        self.assertEqual(changed.mapq, 30)
        self.assertEqual(changed.get_field_string("RG"), "rg2")
        self.assertNotEqual(changed, record)

        builder = SamRecord.builder(record).reset()
        self.assertEqual(str(builder.build()), "*\t0\t*\t0\t255\t*\t*\t0\t0\t*\t*")

    def test_array_fields(self):
        record = SamRecord.parse("read1\t0\t*\t0\t255\t*\t*\t0\t0\t*\t*\tZB:B:i,1,2\tZT:B:f,3.4,4.5")
        fields = record.fields
        self.assertEqual(parse_integers("ZB", fields), [1, 2])
        self.assertEqual(parse_floats("ZT", fields), [3.4, 4.5])
