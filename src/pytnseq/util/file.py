"""Utility functions for working with read files."""

import pysam


def count_reads(file_path):
    """Counts the number of entries in a fasta/fastq file."""

    with pysam.FastxFile(str(file_path)) as reads:
        return sum(1 for _ in reads)


def extract_reads(file_path, read_names, output_path):
    """Writes entries from file_path whose names are in read_names.

    Returns the number of entries written.
    """

    read_names = set(read_names)
    n_written = 0

    with pysam.FastxFile(str(file_path)) as reads, \
            open(str(output_path), 'w') as out_file:
        for read in reads:
            if read.name in read_names:
                out_file.write(str(read) + '\n')
                n_written += 1

    return n_written
