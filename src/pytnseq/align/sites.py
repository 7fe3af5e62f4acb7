"""Functions for counting and ranking insertion sites."""

from collections import Counter
import operator

import toolz

from pytnseq.model import (Site, SiteSet, DirectionalSite,
                           DirectionalSiteSet)


def count_sites(keys, counts=None):
    """Counts occurrences of site keys.

    Parameters
    ----------
    keys : iterable
        Site keys to count.
    counts : Counter
        Optional existing counts to add to. This counter is not modified.

    Returns
    -------
    Counter
        New counter containing the (updated) counts per key, ordered
        by first occurrence of each key.

    """

    counts = Counter() if counts is None else Counter(counts)
    counts.update(keys)
    return counts


def merge_counts(*counts):
    """Merges site counts, summing counts of identical keys."""
    return Counter(toolz.merge_with(sum, *counts))


def rank_sites(counts):
    """Returns (count, key) pairs ordered by descending count.

    Keys with equal counts are kept in their order of first occurrence.
    """

    ranked = sorted(counts.items(), key=operator.itemgetter(1), reverse=True)
    return [(count, key) for key, count in ranked]


def build_site_tables(keys):
    """Builds directional and position-only site tables.

    Parameters
    ----------
    keys : list[SiteKey]
        Resolved site keys, as returned by ``resolve_sites``.

    Returns
    -------
    Tuple[DirectionalSiteSet, SiteSet]
        Tables with counts per (coordinate, flag) and per coordinate,
        ranked by descending count.

    """

    keys = list(keys)

    directional = rank_sites(count_sites(keys))
    positional = rank_sites(count_sites(key.position for key in keys))

    directional_set = DirectionalSiteSet.from_tuples(
        DirectionalSite(count=count, position=key.position, flag=key.flag)
        for count, key in directional)

    position_set = SiteSet.from_tuples(
        Site(count=count, position=position)
        for count, position in positional)

    return directional_set, position_set
