"""Module with functions for calling bowtie2."""

from pathlib import Path

import toolz

from . import util as shell


def bowtie2(read_path, index_path, output_path, log_path=None,
            extra_options=None):
    """
    Aligns single-end reads to a reference genome using Bowtie2.

    Parameters
    ----------
    read_path : Path
        Path to the input file containing reads.
    index_path : Path
        Path to the bowtie2 index of the reference genome.
    output_path : Path
        Output path for the (SAM) alignment file.
    log_path : Path
        Optional path to which the bowtie2 alignment summary (stderr)
        is written.
    extra_options : dict
        Dict of extra options to pass to Bowtie2. Should conform to the
        format expected by flatten_arguments.

    """

    # Assemble options.
    input_options = {
        '-x': str(index_path),
        '-U': str(read_path),
        '-S': str(output_path)
    }

    if any(ext in Path(read_path).suffixes for ext in {'.fa', '.fna'}):
        input_options['-f'] = True

    options = toolz.merge(extra_options or {}, input_options)

    # Build arguments and run.
    bowtie_args = ['bowtie2'] + shell.flatten_arguments(options)
    shell.run(bowtie_args, stderr=log_path)
