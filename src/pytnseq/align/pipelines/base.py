"""Module providing base functionality for insertion site pipelines."""

import abc
from collections import namedtuple
from pathlib import Path

from pytnseq.util.path import shorten_path

from ..coordinates import build_policy, get_policies, resolve_sites
from ..parents import build_resolver, get_resolvers
from ..records import (RecordParser, open_records, extract_mapped,
                       write_records)
from ..report import summarize_run, write_report
from ..selection import select_best_fragments, write_read_ids
from ..sites import build_site_tables

_registry = {}


def register_pipeline(name, pipeline):
    _registry[name] = pipeline


def get_pipelines():
    return dict(_registry)


PipelineResult = namedtuple('PipelineResult', [
    'summary', 'directional_sites', 'sites', 'collapsed_directional_sites',
    'collapsed_sites'
])


class Pipeline(abc.ABC):
    """Base pipeline class.

    Pipelines derive transposon insertion sites from fragment alignments.
    Mapped alignments are resolved to insertion coordinates, which are
    counted into a directional (coordinate + flag) and a position-only site
    table. If a parent resolver is available, fragment alignments are first
    collapsed to a single (best scoring) alignment per parent read, producing
    an extra set of collapsed site tables.

    Each pipeline writes its outputs into the given output directory, using
    the sample name as prefix, and should also provide implementations for
    the ``configure_args`` and ``extract_args`` methods, which are used to
    instantiate pipelines from command line arguments.

    Parameters
    ----------
    parent_strategy : str
        Name of the strategy used to derive parent reads ('map', 'token' or
        'prefix'). If None, the 'map' strategy is used when a fragment map
        is given, otherwise fragments are not collapsed.
    fragment_map : Path
        Path to the fragment -> parent map (for the 'map' strategy).
    delimiter : str
        Delimiter used by the 'prefix' strategy.
    flag_policy : str
        Name of the policy used to interpret alignment flags.
    unique_reads : bool
        Whether to keep only the first alignment of each read.
    strict : bool
        Whether to raise an error on malformed alignment records.

    """

    input_option = 'input'

    def __init__(self,
                 parent_strategy=None,
                 fragment_map=None,
                 delimiter='_',
                 flag_policy='text',
                 unique_reads=True,
                 strict=False):
        super().__init__()

        if parent_strategy is None and fragment_map is not None:
            parent_strategy = 'map'

        self._parent_strategy = parent_strategy

        if parent_strategy is not None:
            self._resolver = build_resolver(
                parent_strategy, fragment_map=fragment_map,
                delimiter=delimiter)
        else:
            self._resolver = None

        self._flag_policy = flag_policy
        self._policy = build_policy(flag_policy)

        self._unique_reads = unique_reads
        self._strict = strict

    @classmethod
    def configure_args(cls, parser):
        """Configures argument parser for the pipeline."""

        parser.add_argument(
            '--' + cls.input_option, type=Path, required=True)
        parser.add_argument('--output_dir', type=Path, required=True)
        parser.add_argument(
            '--sample',
            default=None,
            help='Sample name, used as prefix for outputs. Defaults to '
            'the name of the input file up to its first dot.')

        parser.add_argument(
            '--parent_strategy',
            choices=sorted(get_resolvers().keys()),
            default=None,
            help='Strategy for deriving parent reads from fragments.')
        parser.add_argument(
            '--fragment_map',
            type=Path,
            default=None,
            help='Tab-delimited fragment -> parent map. Defaults to '
            '<sample>.fragment_map.tsv next to the input, if present.')
        parser.add_argument('--delimiter', default='_')

        parser.add_argument(
            '--flag_policy',
            choices=sorted(get_policies().keys()),
            default='text')
        parser.add_argument(
            '--all_alignments',
            default=False,
            action='store_true',
            help='Use all alignments of a read, instead of the first.')
        parser.add_argument('--strict', default=False, action='store_true')

    @classmethod
    def from_args(cls, args):
        """Builds a pipeline instance from the given arguments."""
        return cls(**cls.extract_args(args))

    @classmethod
    def extract_args(cls, args):
        """Extract arguments from args for from_args."""

        fragment_map = args.fragment_map

        if fragment_map is None:
            input_path = getattr(args, cls.input_option)
            sample = args.sample or sample_name(input_path)

            default_map = input_path.parent / (sample + '.fragment_map.tsv')
            if default_map.exists():
                fragment_map = default_map

        return dict(
            parent_strategy=args.parent_strategy,
            fragment_map=fragment_map,
            delimiter=args.delimiter,
            flag_policy=args.flag_policy,
            unique_reads=not args.all_alignments,
            strict=args.strict)

    @abc.abstractmethod
    def run(self, input_path, output_dir, sample=None):
        """Runs the pipeline with the given input.

        Returns
        -------
        PipelineResult
            Summary and site tables of the run.

        """

    def _process_alignments(self,
                            alignment_path,
                            output_dir,
                            sample,
                            logger,
                            n_reads=None,
                            aligner_logs=None):
        """Derives insertion sites from the given alignment file."""

        output_dir = Path(output_dir)
        output_dir.mkdir(exist_ok=True, parents=True)

        def _out_path(suffix):
            return output_dir / (sample + suffix)

        # Read alignments.
        logger.info('Reading alignments')
        logger.info('  %-18s: %s', 'Alignments', shorten_path(alignment_path))
        logger.info('  %-18s: %s', 'Flag policy', self._flag_policy)

        parser = RecordParser(strict=self._strict, logger=logger)
        records = list(open_records(alignment_path, parser=parser))

        if not records:
            logger.warning('No alignment records found in %s',
                           shorten_path(alignment_path))

        mapped = list(extract_mapped(
            records, self._policy, unique=self._unique_reads))
        write_records(mapped, _out_path('-mapped.sam'))

        logger.info('  %-18s: %d', 'Records', len(records))
        logger.info('  %-18s: %d', 'Mapped', len(mapped))

        # Count sites over all mapped alignments.
        logger.info('Tallying insertion sites')

        keys, skipped = resolve_sites(mapped, self._policy)
        directional, sites = build_site_tables(keys)

        directional.to_table(_out_path('-directional-sites.txt'))
        sites.to_table(_out_path('-sites.txt'))

        logger.info('  %-18s: %d', 'Sites', len(sites))

        # Collapse to parent reads and count again.
        if self._resolver is not None:
            logger.info('Collapsing fragments to parent reads')
            logger.info('  %-18s: %s', 'Parent strategy',
                        self._parent_strategy)

            selection = select_best_fragments(mapped, self._resolver)
            best = list(selection.best.values())

            write_records(best, _out_path('-best.sam'))
            write_read_ids(best, _out_path('-best_reads.txt'))

            logger.info('  %-18s: %d', 'Parents', len(best))

            if selection.n_missing > 0:
                logger.warning('%d mapped fragments without parent read',
                               selection.n_missing)

            c_keys, c_skipped = resolve_sites(best, self._policy)
            c_directional, c_sites = build_site_tables(c_keys)

            c_directional.to_table(
                _out_path('-collapsed-directional-sites.txt'))
            c_sites.to_table(_out_path('-collapsed-sites.txt'))

            logger.info('  %-18s: %d', 'Collapsed sites', len(c_sites))
        else:
            logger.warning('No fragment map or parent strategy given, '
                           'skipping parent deduplication')
            selection = None
            c_skipped, c_directional, c_sites = None, None, None

        # Summarize.
        summary = summarize_run(
            sample=sample,
            n_records=len(records),
            n_malformed=parser.n_malformed,
            n_mapped=len(mapped),
            sites=sites,
            skipped=skipped,
            selection=selection,
            collapsed_sites=c_sites,
            collapsed_skipped=c_skipped,
            n_reads=n_reads)

        write_report(summary, _out_path('-TnSeq.txt'),
                     aligner_logs=aligner_logs)

        return PipelineResult(
            summary=summary,
            directional_sites=directional,
            sites=sites,
            collapsed_directional_sites=c_directional,
            collapsed_sites=c_sites)


def sample_name(file_path):
    """Derives a sample name from the given input file path."""
    return Path(file_path).name.split('.')[0]
