"""Module for reading and writing tab-delimited alignment records."""

import gzip
import logging
from pathlib import Path

import pysam

from pytnseq.model import AlignmentRecord

MIN_FIELDS = 10

SCORE_TAG = 'AS:i:'


class MalformedRecord(ValueError):
    """Raised when an alignment line lacks the required fields."""
    pass


def parse_record(line):
    """Parses a single (non-header) alignment line into a record.

    Parameters
    ----------
    line : str
        Tab-delimited alignment line, as found in the body of a SAM file.

    Returns
    -------
    AlignmentRecord
        The parsed record. The position is None if the position field
        does not contain an integer.

    Raises
    ------
    MalformedRecord
        If the line has fewer than 10 fields or a non-numeric flag.

    """

    fields = tuple(line.rstrip('\r\n').split('\t'))

    if len(fields) < MIN_FIELDS:
        raise MalformedRecord('Expected at least {} fields, found {}'
                              .format(MIN_FIELDS, len(fields)))

    if not fields[1].isdigit():
        raise MalformedRecord('Invalid flag {!r} for read {}'
                              .format(fields[1], fields[0]))

    return AlignmentRecord(
        read_id=fields[0],
        flag=int(fields[1]),
        reference=fields[2],
        position=_parse_int(fields[3]),
        score=_parse_score(fields),
        sequence=fields[9],
        fields=fields)


def _parse_int(value):
    try:
        return int(value)
    except ValueError:
        return None


def _parse_score(fields):
    """Returns alignment score, falling back to the mapq field."""

    for tag in fields[MIN_FIELDS + 1:]:
        if tag.startswith(SCORE_TAG):
            score = _parse_int(tag[len(SCORE_TAG):])
            return score if score is not None else 0

    score = _parse_int(fields[4])
    return score if score is not None else 0


class RecordParser(object):
    """Parses alignment lines into records.

    Header lines (starting with '@') and blank lines are ignored. Lines
    that cannot be parsed are skipped and counted, unless the parser is
    strict, in which case the MalformedRecord error is propagated.

    Parameters
    ----------
    strict : bool
        Whether to raise on malformed lines.

    """

    def __init__(self, strict=False, logger=None):
        self._strict = strict
        self._logger = logger or logging.getLogger(__name__)
        self.n_malformed = 0

    def parse(self, lines):
        """Yields records for the given lines."""

        for line_num, line in enumerate(lines, start=1):
            if not line.strip() or line.startswith('@'):
                continue

            try:
                yield parse_record(line)
            except MalformedRecord as err:
                if self._strict:
                    raise

                self.n_malformed += 1
                self._logger.warning('Skipping line %d: %s', line_num, err)


def open_records(file_path, parser=None):
    """Reads records from a SAM (optionally gzipped) or BAM file."""

    file_path = Path(file_path)
    parser = parser or RecordParser()

    if file_path.suffix == '.bam':
        bam_file = pysam.AlignmentFile(str(file_path), 'rb')

        try:
            lines = (aln.to_string() for aln in bam_file)
            yield from parser.parse(lines)
        finally:
            bam_file.close()
    else:
        open_ = gzip.open if file_path.suffix == '.gz' else open

        with open_(str(file_path), 'rt') as file_:
            yield from parser.parse(file_)


def write_records(records, file_path):
    """Writes records to a (headerless) SAM file, returning the count."""

    n_written = 0

    with open(str(file_path), 'w') as file_:
        for record in records:
            file_.write('\t'.join(record.fields) + '\n')
            n_written += 1

    return n_written


def extract_mapped(records, policy, unique=True):
    """Selects mapped records.

    Parameters
    ----------
    records : iterable[AlignmentRecord]
        Records to filter.
    policy : FlagPolicy
        Policy deciding which flags denote mapped alignments.
    unique : bool
        Whether to keep only the first record of each read id. Used for
        aligner output that reports multiple alignments per read.

    """

    seen = set()

    for record in records:
        if not policy.is_mapped(record.flag):
            continue

        if unique:
            if record.read_id in seen:
                continue
            seen.add(record.read_id)

        yield record
