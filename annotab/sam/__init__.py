"""
This subpackage contains all of the code required to work with SAM formatted text.

Classes:
    SamRecord: Represents an alignment line with its optional fields.
    SamRecordBuilder: Mutable builder for SamRecord, also available as SamRecord.Builder.
    RecordFlags: Enum of FLAG column bits.
    SamHeader: Collection of header lines, with SamHeaderBuilder.
    SamHeaderLine, SamSequenceHeaderLine, SamReadGroupHeaderLine, SamProgramHeaderLine, SamCommentHeaderLine:
        Typed @HD, @SQ, @RG, @PG and @CO header lines.

Functions:
    parse_header_line: Parse any header line, dispatching on the record type code.

For more:
    >> help(annotab.sam.record) for more information on the SamRecord object.
    >> help(annotab.sam.header) for more information on header lines.
"""

from .header import HEADER_LINE_TYPES, SamCommentHeaderLine, SamHeader, SamHeaderBuilder, SamHeaderLine, SamProgramHeaderLine, \
    SamReadGroupHeaderLine, SamSequenceHeaderLine, parse_header_line
from .record import COLUMNS, RecordFlags, SamRecord, SamRecordBuilder
