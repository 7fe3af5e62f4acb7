"""Pipeline deriving insertion sites from existing alignments."""

import logging

from .base import Pipeline, register_pipeline, sample_name


class SamPipeline(Pipeline):
    """Derives insertion sites from an existing SAM/BAM alignment file.

    Expects the alignments of the (fragmented) reads of a single sample,
    as produced by an external aligner.
    """

    input_option = 'alignments'

    def run(self, input_path, output_dir, sample=None):
        logger = logging.getLogger()

        sample = sample or sample_name(input_path)
        logger.info('  %-18s: %s', 'Sample', sample)

        return self._process_alignments(
            input_path, output_dir, sample=sample, logger=logger)


register_pipeline(name='sam', pipeline=SamPipeline)
