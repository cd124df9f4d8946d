"""
Provides convenience interface for writing annotated tab-delimited records.
"""

import logging

from .util import DEFAULT_ENCODING, is_binary, open_output

logger = logging.getLogger(__name__)


class Writer:
    """
    Callable that writes one record per line, usable as a stream() listener.
    """

    def __init__(self, output, encoding=DEFAULT_ENCODING):
        """
        Constructor.
        :param output: Text or binary stream. The caller keeps ownership.
        :param encoding: Encoding used when output is a binary stream.
        """
        self._output = output
        self._encoding = encoding if is_binary(output) else None
        self.count = 0

    @staticmethod
    def sam(output, header=None, encoding=DEFAULT_ENCODING) -> 'Writer':
        """
        Write a SAM header and return a writer for the alignment records that follow.
        :param output: Text or binary stream.
        :param header: SamHeader instance or iterable of header lines to write first.
        :param encoding: Encoding used when output is a binary stream.
        :return: Instance of Writer.
        """
        writer = Writer(output, encoding)
        if header is not None:
            for line in header:
                writer._write(str(line))
        return writer

    def _write(self, line):
        line += '\n'
        self._output.write(line if self._encoding is None else line.encode(self._encoding))

    def __call__(self, record):
        self._write(str(record))
        self.count += 1


def write(records, output, header=None, encoding=DEFAULT_ENCODING) -> int:
    """
    Write records to output.
    :param records: Iterable of records.
    :param output: Path, binary stream or text stream. Paths are closed before returning.
    :param header: If provided, header lines written before the records.
    :param encoding: Encoding for paths and binary streams.
    :return: Number of records written.
    """
    with open_output(output, encoding) as handle:
        writer = Writer.sam(handle, header)
        for record in records:
            writer(record)
    logger.debug("wrote %d records", writer.count)
    return writer.count
