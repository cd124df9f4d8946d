"""
Parsers and writers for annotated tab-delimited bioinformatics formats: SAM, PAF, GAF, GFA 1.0, GFA 2.0 and VCF header lines.
Every record keeps its TAG:TYPE:VALUE optional fields in an AnnotatedRecord with typed accessors.

Classes:
    Annotation: Represents a single TAG:TYPE:VALUE optional field.
    AnnotatedRecord: Immutable ordered mapping of tag name to Annotation.
    SamRecord: Represents a SAM alignment line.
    SamHeader: Represents the SAM header lines.
    PafRecord: Represents a PAF line.
    GafRecord: Represents a GAF line, a PAF-like alignment to a path through a graph.
    Writer: Convenience interface for writing records.

Functions:
    Reader: Convenience interface for reading records, discovering the format if not given.
    discover_stream: Used to determine the format of a stream from its first line.
    stream: Pass each record of an input to a listener.
    read: Read every record of an input into a list.
    write: Write records to an output.

Constants:
    SAM, PAF, GAF, GFA1, GFA2, VCF (str): Format names accepted by Reader, stream and read.

Example 1:
    from annotab import Reader
    with open("alignments.sam") as stream_in:
        reader = Reader(stream_in)
        for record in reader:
            ***Your logic here***

Example 2:
    from annotab import read, write
    from annotab.gfa import gfa1

    segments = read("assembly.gfa", types=gfa1.Segment)
    write((s for s in segments if s.length and s.length > 1000), "long.gfa")

For more:
    >> help(annotab.annotation) for more information on optional fields.
    >> help(annotab.sam) for more information on working with SAM formatted text.
    >> help(annotab.paf) for more information on working with PAF formatted text.
    >> help(annotab.gaf) for more information on working with GAF formatted text.
    >> help(annotab.gfa) for more information on working with GFA formatted text.
    >> help(annotab.vcf) for more information on working with VCF header lines.
    >> help(annotab.reader) for more information on reading records.
    >> help(annotab.writer) for more information on writing records.
    >> help(annotab.util) for more information on errors and defaults.
"""

from .__version import __version__
from .annotation import AnnotatedRecord, Annotation
from .gaf import GafRecord
from .paf import PafRecord
from .reader import GAF, GFA1, GFA2, PAF, Reader, SAM, VCF, discover_stream, read, stream
from .sam import SamHeader, SamRecord
from .util import AnnotabError, ArityError, ConstraintViolation, FormatError, MissingKeyError, TypeMismatchError
from .writer import Writer, write
