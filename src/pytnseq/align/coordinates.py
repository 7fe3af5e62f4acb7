"""Functions for deriving insertion coordinates from alignment records.

The flag of an alignment determines whether an alignment is used at all
and on which strand it lies. Forward strand alignments start at the
insertion site, whereas reverse strand alignments end at the insertion
site. For the latter, the coordinate is derived from the leftmost position
and the read length, subtracting the two bases of the TA target site
duplication.

Flags are interpreted by a FlagPolicy. The default FlagTextPolicy matches
substrings of the decimal flag text, which is compatible with earlier
versions of the pipeline. Note that this is not the same as testing the
flag bits: flag 16 (reverse strand) is treated as forward, whilst flags such
as 210 are treated as reverse. Flag 116 contains neither "10" nor "100" and
is treated as forward. The FlagBitPolicy tests the actual flag bits.
"""

import abc
from collections import Counter

from pytnseq.model import SiteKey

JUNCTION_OFFSET = 2

_registry = {}


def register_policy(name, policy):
    _registry[name] = policy


def get_policies():
    return dict(_registry)


class FlagPolicy(abc.ABC):
    """Base policy for interpreting alignment flags."""

    @abc.abstractmethod
    def is_mapped(self, flag):
        """Whether the flag denotes a mapped alignment."""

    @abc.abstractmethod
    def is_excluded(self, flag):
        """Whether the alignment should be excluded from site counts."""

    @abc.abstractmethod
    def is_reverse(self, flag):
        """Whether the alignment lies on the reverse strand."""


class FlagTextPolicy(FlagPolicy):
    """Interprets flags by matching substrings of their decimal text."""

    def is_mapped(self, flag):
        return '4' not in str(flag)

    def is_excluded(self, flag):
        return '100' in str(flag)

    def is_reverse(self, flag):
        return '10' in str(flag)


register_policy('text', FlagTextPolicy)


class FlagBitPolicy(FlagPolicy):
    """Interprets flags using the SAM flag bits."""

    UNMAPPED = 0x4
    REVERSE = 0x10
    SECONDARY = 0x100
    SUPPLEMENTARY = 0x800

    def is_mapped(self, flag):
        return not flag & self.UNMAPPED

    def is_excluded(self, flag):
        return bool(flag & (self.SECONDARY | self.SUPPLEMENTARY))

    def is_reverse(self, flag):
        return bool(flag & self.REVERSE)


register_policy('bits', FlagBitPolicy)


def build_policy(name='text'):
    """Builds the named flag policy."""

    policies = get_policies()

    try:
        return policies[name]()
    except KeyError:
        raise ValueError('Unknown flag policy {!r} (available: {})'
                         .format(name, ', '.join(sorted(policies))))


def resolve_coordinate(record, policy=None):
    """Returns the insertion coordinate for the given record.

    Returns None if the record is excluded by the policy, or if its
    coordinate cannot be determined (i.e. if it has no valid position).
    """

    policy = policy or FlagTextPolicy()

    if policy.is_excluded(record.flag) or record.position is None:
        return None

    if policy.is_reverse(record.flag):
        return record.position + len(record.sequence) - JUNCTION_OFFSET

    return record.position


def resolve_sites(records, policy=None):
    """Resolves site keys for the given records.

    Parameters
    ----------
    records : iterable[AlignmentRecord]
        Records to resolve.
    policy : FlagPolicy
        Policy used to interpret flags. Defaults to FlagTextPolicy.

    Returns
    -------
    Tuple[List[SiteKey], Counter]
        Site keys (coordinate, flag) in record order, together with a
        counter of skipped records by reason ('excluded'/'undetermined').

    """

    policy = policy or FlagTextPolicy()

    keys = []
    skipped = Counter()

    for record in records:
        if policy.is_excluded(record.flag):
            skipped['excluded'] += 1
            continue

        coordinate = resolve_coordinate(record, policy)

        if coordinate is None:
            skipped['undetermined'] += 1
        else:
            keys.append(SiteKey(position=coordinate, flag=record.flag))

    return keys, skipped
