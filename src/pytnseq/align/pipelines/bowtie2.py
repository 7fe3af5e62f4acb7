"""Pipeline aligning fragment reads with bowtie2 before deriving sites."""

import logging
from pathlib import Path

from pytnseq.util.file import count_reads, extract_reads
from pytnseq.util.path import shorten_path
from pytnseq.external.util import flatten_arguments

from ..aligners import Bowtie2Aligner
from .base import Pipeline, register_pipeline, sample_name


class Bowtie2Pipeline(Pipeline):
    """Aligns (trimmed) fragment reads and derives insertion sites.

    The reads are expected to have been trimmed and fragmented beforehand,
    optionally together with a fragment map that links each fragment to its
    parent read. After alignment, the pipeline proceeds as the SamPipeline.
    If ``realign`` is given, the reads of the fragments that were selected
    for each parent are aligned a second time, producing a separate
    alignment of the collapsed read set.

    Parameters
    ----------
    aligner : Aligner
        Aligner used to align the reads to the reference genome.
    realign : bool
        Whether to realign the collapsed read set.
    **kwargs
        Keyword arguments passed to Pipeline.

    """

    input_option = 'reads'

    def __init__(self, aligner, realign=False, **kwargs):
        super().__init__(**kwargs)

        self._aligner = aligner
        self._realign = realign

    @classmethod
    def configure_args(cls, parser):
        super().configure_args(parser)

        parser.add_argument('--bowtie_index', type=Path, required=True)
        parser.add_argument('--threads', type=int, default=1)
        parser.add_argument('--local', default=False, action='store_true')
        parser.add_argument('--realign', default=False, action='store_true')

    @classmethod
    def extract_args(cls, args):
        arg_dict = super().extract_args(args)

        options = None
        if args.local:
            options = {'--local': True, '--very-sensitive-local': True,
                       '-R': 6, '-a': True}

        arg_dict['aligner'] = Bowtie2Aligner(
            index_path=args.bowtie_index,
            options=options,
            threads=args.threads)
        arg_dict['realign'] = args.realign

        return arg_dict

    def run(self, input_path, output_dir, sample=None):
        logger = logging.getLogger()

        output_dir = Path(output_dir)
        output_dir.mkdir(exist_ok=True, parents=True)

        sample = sample or sample_name(input_path)
        logger.info('  %-18s: %s', 'Sample', sample)

        n_reads = count_reads(input_path)
        logger.info('  %-18s: %d', 'Reads', n_reads)

        # Align reads to genome.
        logger.info('Aligning to reference')
        self._log_aligner(logger)

        run = self._aligner.align(input_path, output_dir / (sample + '.sam'))
        aligner_logs = {'Alignment': run.log}

        result = self._process_alignments(
            run.output_path,
            output_dir,
            sample=sample,
            logger=logger,
            n_reads=n_reads,
            aligner_logs=aligner_logs)

        if self._realign and self._resolver is not None:
            self._realign_collapsed(input_path, output_dir, sample, logger)
        elif self._realign:
            logger.warning('No parent reads available, skipping realignment')

        return result

    def _log_aligner(self, logger):
        index_path = getattr(self._aligner, 'index_path', None)
        if index_path is not None:
            logger.info('  %-18s: %s', 'Reference', shorten_path(index_path))

        options = getattr(self._aligner, 'options', None)
        if options is not None:
            logger.info('  %-18s: %s', 'Bowtie options',
                        ' '.join(flatten_arguments(options)))

    def _realign_collapsed(self, reads_path, output_dir, sample, logger):
        read_ids_path = output_dir / (sample + '-best_reads.txt')

        logger.info('Realigning collapsed reads')

        with read_ids_path.open() as file_:
            read_ids = [line.strip() for line in file_]

        collapsed_path = output_dir / (sample + '-best.fastq')
        n_written = extract_reads(reads_path, read_ids, collapsed_path)
        logger.info('  %-18s: %d', 'Reads', n_written)

        run = self._aligner.align(
            collapsed_path, output_dir / (sample + '-collapsed.sam'))

        report_path = output_dir / (sample + '-TnSeq.txt')
        with report_path.open('a') as file_:
            file_.write('Realignment report:\n' + run.log.rstrip('\n') + '\n')

        return run


register_pipeline(name='bowtie2', pipeline=Bowtie2Pipeline)
