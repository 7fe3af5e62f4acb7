"""Module providing aligners used to map fragments to a reference genome."""

import abc
from collections import namedtuple
from pathlib import Path

from pytnseq.external.bowtie2 import bowtie2

AlignmentRun = namedtuple('AlignmentRun', ['output_path', 'log'])

DEFAULT_BOWTIE_OPTIONS = {
    '--end-to-end': True,
    '--very-sensitive': True,
    '-R': 6,
    '-a': True
}


class Aligner(abc.ABC):
    """Base aligner class.

    Aligners map reads to a reference genome, producing an alignment file
    containing tab-delimited alignment records (SAM).
    """

    @abc.abstractmethod
    def align(self, read_path, output_path):
        """Aligns reads, writing alignment records to output_path.

        Returns
        -------
        AlignmentRun
            Path to the alignment output, together with the log
            (summary) produced by the aligner.

        """


class Bowtie2Aligner(Aligner):
    """Aligns reads using bowtie2.

    Parameters
    ----------
    index_path : Path
        Path to the bowtie2 index of the reference genome.
    options : Dict[str, Any]
        Bowtie2 options. Defaults to end-to-end, very sensitive alignment
        reporting all alignments of each read.
    threads : int
        Number of threads to use.

    """

    def __init__(self, index_path, options=None, threads=1):
        super().__init__()

        self._index_path = index_path
        self._options = dict(DEFAULT_BOWTIE_OPTIONS
                             if options is None else options)
        self._threads = threads

    @property
    def index_path(self):
        """Path to the bowtie2 index."""
        return self._index_path

    @property
    def options(self):
        """Options passed to bowtie2 (including threads)."""
        return dict(self._options, **{'-p': self._threads})

    def align(self, read_path, output_path):
        output_path = Path(output_path)
        log_path = output_path.with_suffix('.log')

        bowtie2(
            read_path=read_path,
            index_path=self._index_path,
            output_path=output_path,
            log_path=log_path,
            extra_options=self.options)

        return AlignmentRun(output_path=output_path,
                            log=log_path.read_text())
