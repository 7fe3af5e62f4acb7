"""Functions for summarizing pipeline runs."""

from frozendict import frozendict

TOP_SITES = 10


def summarize_run(sample,
                  n_records,
                  n_malformed,
                  n_mapped,
                  sites,
                  skipped,
                  selection=None,
                  collapsed_sites=None,
                  collapsed_skipped=None,
                  n_reads=None):
    """Summarizes the counts of a pipeline run.

    Parameters
    ----------
    sample : str
        Name of the sample.
    n_records : int
        Number of parsed alignment records.
    n_malformed : int
        Number of skipped (malformed) alignment lines.
    n_mapped : int
        Number of mapped records.
    sites : SiteSet
        Position-only sites derived from all mapped records.
    skipped : Counter
        Counts of mapped records skipped during site resolution.
    selection : FragmentSelection
        Result of collapsing fragments to parents (if performed).
    collapsed_sites : SiteSet
        Position-only sites derived from the collapsed records.
    collapsed_skipped : Counter
        Counts of collapsed records skipped during site resolution.
    n_reads : int
        Number of input reads (if known).

    Returns
    -------
    frozendict
        Immutable summary of the run.

    """

    summary = {
        'sample': sample,
        'total_reads': n_reads,
        'total_records': n_records,
        'malformed_records': n_malformed,
        'mapped_records': n_mapped,
        'excluded_records': skipped['excluded'],
        'undetermined_records': skipped['undetermined'],
        'sites': len(sites),
        'top_sites': tuple(sites.top(TOP_SITES).to_tuples())
    }

    if selection is not None:
        collapsed_skipped = collapsed_skipped or {}

        summary.update({
            'parents': len(selection.best),
            'missing_parents': selection.n_missing,
            'surviving_records': len(selection.best),
            'collapsed_excluded_records': collapsed_skipped.get('excluded', 0),
            'collapsed_undetermined_records':
                collapsed_skipped.get('undetermined', 0),
            'collapsed_sites': len(collapsed_sites),
            'collapsed_top_sites':
                tuple(collapsed_sites.top(TOP_SITES).to_tuples())
        })

    return frozendict(summary)


def format_report(summary, aligner_logs=None):
    """Formats a run summary as a plain text report."""

    lines = ['TnSeq processing stats for {}'.format(summary['sample'])]

    if summary['total_reads'] is not None:
        lines += ['Total sequences:', str(summary['total_reads'])]

    for name, log in (aligner_logs or {}).items():
        lines += ['{} report:'.format(name), log.rstrip('\n')]

    lines += [
        'Number of alignment records:', str(summary['total_records']),
        'Number of malformed records (skipped):',
        str(summary['malformed_records']),
        'Number of reads mapping at high enough score:',
        str(summary['mapped_records'])
    ]

    if 'parents' in summary:
        lines += [
            'Number of parent reads with mapped fragments:',
            str(summary['parents']),
            'Number of mapped fragments without parent:',
            str(summary['missing_parents'])
        ]
    else:
        lines += ['WARNING: No parent mapping given. '
                  'Skipped parent deduplication.']

    lines += [
        'Number of excluded alignments:', str(summary['excluded_records']),
        'Number of alignments without coordinate:',
        str(summary['undetermined_records']),
        'Number of insertion sites identified:', str(summary['sites']),
        'Most frequent sites:'
    ]
    lines += _format_sites(summary['top_sites'])

    if 'parents' in summary:
        lines += [
            'Number of insertion sites identified (collapsed):',
            str(summary['collapsed_sites']),
            'Most frequent sites (collapsed):'
        ]
        lines += _format_sites(summary['collapsed_top_sites'])

    return '\n'.join(lines) + '\n'


def _format_sites(sites):
    return ['{} {}'.format(site.count, site.position) for site in sites]


def write_report(summary, file_path, aligner_logs=None):
    """Writes a plain text report of the run summary."""

    with open(str(file_path), 'w') as file_:
        file_.write(format_report(summary, aligner_logs=aligner_logs))
