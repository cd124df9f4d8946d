from unittest import TestCase, mock
import io
import os
import tempfile

from annotab import GFA1, GFA2, PAF, SAM, VCF, Reader, discover_stream, read, stream
from annotab.gfa import gfa1, gfa2
from annotab.paf import PafRecord
from annotab.sam import SamRecord
from annotab.util import ConstraintViolation, FormatError, UnexpectedHeaderWarning, open_input
from annotab import vcf

from .data import GFA1 as GFA1_DATA, GFA2 as GFA2_DATA, PAF as PAF_DATA, PAF_RECORD, SAM as SAM_DATA, SAM_RECORD, \
    VCF as VCF_DATA


class TestDiscoverStream(TestCase):
    def test_formats(self):
        self.assertEqual(discover_stream("@HD\tVN:1.6"), SAM)
        self.assertEqual(discover_stream(SAM_RECORD), SAM)
        self.assertEqual(discover_stream(PAF_RECORD), PAF)
        self.assertEqual(discover_stream("##fileformat=VCFv4.3"), VCF)
        self.assertEqual(discover_stream("H\tVN:Z:1.0"), GFA1)
        self.assertEqual(discover_stream("H\tVN:Z:2.0"), GFA2)
        self.assertEqual(discover_stream("S\t1\tACGT"), GFA1)
        self.assertEqual(discover_stream("S\t1\tACGT\tLN:i:4"), GFA1)
        self.assertEqual(discover_stream("S\ts1\t4\tACGT"), GFA2)
        self.assertEqual(discover_stream("L\t1\t+\t2\t-\t*"), GFA1)
        self.assertEqual(discover_stream("E\t*\ts1+\ts2-\t0\t1\t0\t1\t*"), GFA2)
        self.assertIsNone(discover_stream("unrecognized"))


class TestReader(TestCase):
    def test_sam(self):
        reader = Reader(io.StringIO(SAM_DATA))
        self.assertEqual(len(reader.header), 5)
        records = list(reader)
        self.assertEqual(len(records), 2)
        self.assertIsInstance(records[0], SamRecord)
        self.assertEqual(records[0].line_number, 6)
        self.assertEqual(str(records[0]), SAM_RECORD)
        self.assertIsNone(records[1].rname)

    def test_paf(self):
        records = list(Reader(io.StringIO(PAF_DATA)))
        self.assertEqual([type(record) for record in records], [PafRecord, PafRecord])
        self.assertEqual(records[1].strand, "-")

    def test_gfa(self):
        records = list(Reader(io.StringIO("# comment\n" + GFA1_DATA + "X\tcustom\n")))
        self.assertEqual(len(records), 7, "Comment and unrecognized lines are skipped")
        self.assertIsInstance(records[1], gfa1.Segment)
        self.assertEqual(records[1].line_number, 3)

        records = list(Reader(io.StringIO(GFA2_DATA), GFA2))
        self.assertEqual(len(records), 8)
        self.assertIsInstance(records[-1], gfa2.Set)

    def test_vcf(self):
        records = list(Reader(io.StringIO(VCF_DATA)))
        self.assertEqual(len(records), 5, "Reading stops at the column header line")
        self.assertIsInstance(records[0], vcf.VcfHeaderLine)
        self.assertIsInstance(records[1], vcf.VcfInfoHeaderLine)
        self.assertEqual(records[1].description, "Total depth, all samples")
        self.assertIsInstance(records[4], vcf.VcfContigHeaderLine)

    def test_binary(self):
        records = list(Reader(io.BytesIO(PAF_DATA.encode('utf-8'))))
        self.assertEqual(len(records), 2)

    def test_blank_lines(self):
        records = list(Reader(io.StringIO("\n" + PAF_RECORD + "\n\n\n" + PAF_RECORD + "\n")))
        self.assertEqual([record.line_number for record in records], [2, 5])

    def test_empty(self):
        self.assertEqual(list(Reader(io.StringIO(""))), [])
        self.assertEqual(list(Reader(io.StringIO("# only a comment\n"))), [])

    def test_errors(self):
        with self.assertRaises(FormatError) as context:
            list(Reader(io.StringIO(PAF_RECORD + "\n" + PAF_RECORD.replace("\t1000\t", "\tlong\t") + "\n")))
        self.assertEqual(context.exception.line_number, 2)
        self.assertEqual(context.exception.token, "long")
        self.assertIn("line 2", str(context.exception))

        with self.assertRaises(FormatError) as context:
            Reader(io.StringIO("unrecognized\n"))
        self.assertEqual(context.exception.line_number, 1)

        with self.assertRaises(ValueError):
            Reader(io.StringIO(PAF_DATA), 'bam')

        with self.assertRaises(ConstraintViolation) as context:
            list(Reader(io.StringIO("S\ts1\t4\t*\nS\ts1\t5\t*\n"), GFA2))
        self.assertEqual(context.exception.line_number, 2)

        with self.assertRaises(FormatError) as context:
            Reader(io.StringIO("@HD\tVN:1.6\n@SQ\tSN:chr1\tLN:x\n"))
        self.assertEqual(context.exception.line_number, 2)

    def test_late_header(self):
        reader = Reader(io.StringIO(SAM_DATA + "@CO\tlate comment\n" + SAM_RECORD + "\n"))
        with self.assertWarns(UnexpectedHeaderWarning):
            records = list(reader)
        self.assertEqual(len(records), 3)
        self.assertEqual(reader.header.comment_header_lines[-1].comment, "late comment")


class TestStream(TestCase):
    def test_listener(self):
        records = []
        stream(io.StringIO(PAF_DATA), records.append)
        self.assertEqual(len(records), 2)

    def test_stop(self):
        records = []

        def listener(record):
            records.append(record)
            return False

        stream(io.StringIO(PAF_DATA), listener)
        self.assertEqual(len(records), 1, "Returning False stops reading")

    def test_path(self):
        handle, path = tempfile.mkstemp(suffix='.gfa')
        try:
            with os.fdopen(handle, 'w') as out:
                out.write(GFA1_DATA)
            self.assertEqual(len(read(path)), 7)
            self.assertEqual([record.id for record in read(path, types=gfa1.Segment)], ["1", "2"])
            self.assertEqual(len(read(path, GFA1, (gfa1.Link, gfa1.Path))), 2)
        finally:
            os.remove(path)

    def test_path_closed_on_error(self):
        handle, path = tempfile.mkstemp(suffix='.paf')
        opened = []

        def spy(*args, **kwargs):
            opened.append(io.open(*args, **kwargs))
            return opened[-1]

        try:
            with os.fdopen(handle, 'w') as out:
                out.write(PAF_RECORD + "\n" + PAF_RECORD.replace("\t1000\t", "\tlong\t") + "\n")
            with mock.patch('annotab.util.open', spy, create=True):
                with self.assertRaises(FormatError) as context:
                    read(path)
            self.assertEqual(context.exception.line_number, 2)
            self.assertEqual(len(opened), 1)
            self.assertTrue(opened[0].closed, "Paths are closed when reading fails")

            with self.assertRaises(FormatError):
                with open_input(path) as stream_in:
                    list(Reader(stream_in))
            self.assertTrue(stream_in.closed)
        finally:
            os.remove(path)

    def test_sam_without_header_line(self):
        records = read(io.StringIO("@SQ\tSN:chr1\tLN:1000\nread1\t0\tchr1\t1\t60\t4M\t*\t0\t0\tACGT\tIIII\n"))
        self.assertEqual(len(records), 1)
        self.assertEqual(records[0].rname, "chr1")

        reader = Reader(io.StringIO("@SQ\tSN:chr1\tLN:1000\n"))
        self.assertIsNone(reader.header.header_line)
        self.assertEqual(reader.header.sequence_header_lines[0].name, "chr1")

    def test_binary(self):
        data = io.BytesIO(SAM_DATA.encode('utf-8'))
        records = read(data)
        self.assertEqual(len(records), 2)
        self.assertFalse(data.closed, "Caller keeps ownership of streams")
