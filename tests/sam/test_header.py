from unittest import TestCase

from annotab.sam import SamCommentHeaderLine, SamHeader, SamHeaderLine, SamReadGroupHeaderLine, SamSequenceHeaderLine, \
    parse_header_line
from annotab.util import ArityError, ConstraintViolation, FormatError, MissingKeyError

from ..data import SAM_HEADER


class TestSamHeaderLine(TestCase):
    def test_parse(self):
        line = parse_header_line("@HD\tVN:1.6\tSO:coordinate\n")
        self.assertIsInstance(line, SamHeaderLine)
        self.assertEqual(line.version, "1.6")
        self.assertEqual(line.sort_order, "coordinate")
        self.assertIsNone(line.group_order)
        self.assertEqual(str(line), "@HD\tVN:1.6\tSO:coordinate")

        line = parse_header_line("@SQ\tSN:chr1\tLN:1000\tM5:abc")
        self.assertIsInstance(line, SamSequenceHeaderLine)
        self.assertEqual(line.name, "chr1")
        self.assertEqual(line.length, 1000)
        self.assertEqual(line.md5, "abc")
        self.assertIsNone(line.uri)

        line = parse_header_line("@RG\tID:rg1\tSM:sample1")
        self.assertIsInstance(line, SamReadGroupHeaderLine)
        self.assertEqual(line.id, "rg1")
        self.assertEqual(line.sample, "sample1")

        line = parse_header_line("@CO\tfree\ttext")
        self.assertIsInstance(line, SamCommentHeaderLine)
        self.assertEqual(line.comment, "free\ttext")

    def test_invalid(self):
        with self.assertRaises(MissingKeyError):
            parse_header_line("@HD\tSO:coordinate")
        with self.assertRaises(MissingKeyError):
            parse_header_line("@SQ\tSN:chr1")
        with self.assertRaises(ArityError):
            parse_header_line("@RG\tID:rg1\tID:rg2")
        with self.assertRaises(FormatError):
            parse_header_line("@SQ\tSN:chr1\tLN:long")
        with self.assertRaises(FormatError):
            parse_header_line("@HD\tVN1.6")
        with self.assertRaises(FormatError):
            parse_header_line("@XX\tVN:1.6")


class TestSamHeader(TestCase):
    def test_parse(self):
        header = SamHeader.parse(SAM_HEADER.splitlines())
        self.assertEqual(header.header_line.version, "1.6")
        self.assertEqual(len(header.sequence_header_lines), 1)
        self.assertEqual(len(header.read_group_header_lines), 1)
        self.assertEqual(len(header.program_header_lines), 1)
        self.assertEqual(len(header.comment_header_lines), 1)
        self.assertEqual(len(header), 5)
        self.assertEqual(str(header) + "\n", SAM_HEADER)

    def test_constraints(self):
        with self.assertRaises(ConstraintViolation, msg="More than one @HD"):
            SamHeader.parse(["@HD\tVN:1.6", "@HD\tVN:1.5"])
        self.assertEqual(len(SamHeader()), 0)

    def test_without_header_line(self):
        header = SamHeader.parse(["@SQ\tSN:chr1\tLN:10", "@CO\tno @HD line"])
        self.assertIsNone(header.header_line, "@HD is optional")
        self.assertEqual(len(header.sequence_header_lines), 1)
        self.assertEqual(len(header), 2)
        self.assertEqual(str(header), "@SQ\tSN:chr1\tLN:10\n@CO\tno @HD line")

    def test_builder(self):
        header = SamHeader.builder() \
            .with_header_line(SamHeaderLine([('VN', '1.6')])) \
            .with_sequence_header_line(SamSequenceHeaderLine({'SN': 'chr2', 'LN': '20'})) \
            .with_comment_header_line(SamCommentHeaderLine("note")) \
            .build()
        self.assertEqual(str(header), "@HD\tVN:1.6\n@SQ\tSN:chr2\tLN:20\n@CO\tnote")

        builder = SamHeader.Builder().with_line(header.header_line)
        builder.replace_sequence_header_lines([SamSequenceHeaderLine({'SN': 'chr3', 'LN': '30'})])
        self.assertEqual([line.name for line in builder.build().sequence_header_lines], ["chr3"])
        self.assertEqual(header, SamHeader.parse(str(header).split("\n")))
