"""
This subpackage contains the GFA 1.0 and GFA 2.0 record models.

Modules:
    gfa1: Header, Segment, Link, Containment, Path and Traversal records.
    gfa2: Header, Segment, Fragment, Edge, Gap, Path (ordered group) and Set (unordered group) records.

Classes:
    Orientation: Enum of segment orientations.
    Reference: Oriented reference to a segment by identifier.
    GfaRecord: Base of every GFA record, holding its optional fields.

For more:
    >> help(annotab.gfa.gfa1) for more information on GFA 1.0 records.
    >> help(annotab.gfa.gfa2) for more information on GFA 2.0 records.
"""

from . import gfa1, gfa2
from .reference import GfaRecord, Orientation, Reference
