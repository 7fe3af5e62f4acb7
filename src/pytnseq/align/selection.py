"""Functions for collapsing fragment alignments to their parent reads."""

from collections import namedtuple
import operator

import toolz

from .parents import MissingParentMapping

FragmentSelection = namedtuple('FragmentSelection',
                               ['best', 'n_records', 'n_missing'])


def group_by_parent(records, resolver):
    """Groups records by the parent of their read.

    Parameters
    ----------
    records : iterable[AlignmentRecord]
        Fragment alignment records.
    resolver : ParentResolver
        Resolver used to derive parent ids from read ids.

    Returns
    -------
    Tuple[Dict[str, List[AlignmentRecord]], int]
        Dict mapping parent ids (in order of first occurrence) to their
        records (in input order), together with the number of records
        for which no parent could be determined.

    """

    # Records without a parent are grouped under None and split off below.
    groups = toolz.groupby(lambda rec: _resolve_or_none(resolver, rec),
                           records)

    orphans = groups.pop(None, [])

    return groups, len(orphans)


def _resolve_or_none(resolver, record):
    try:
        return resolver.resolve(record.read_id)
    except MissingParentMapping:
        return None


def select_best(group):
    """Returns the highest scoring record, the first one winning ties."""
    return max(group, key=operator.attrgetter('score'))


def select_best_fragments(records, resolver):
    """Selects the best scoring fragment alignment for each parent read.

    Returns a FragmentSelection, whose ``best`` attribute maps each parent
    id with at least one record to its selected record.
    """

    records = list(records)

    groups, n_missing = group_by_parent(records, resolver)
    best = toolz.valmap(select_best, groups)

    return FragmentSelection(
        best=best, n_records=len(records), n_missing=n_missing)


def write_read_ids(records, file_path):
    """Writes the read ids of the given records, one per line."""

    with open(str(file_path), 'w') as file_:
        for record in records:
            file_.write(record.read_id + '\n')
