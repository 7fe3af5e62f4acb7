from collections import namedtuple

import pandas as pd

AlignmentRecord = namedtuple('AlignmentRecord', [
    'read_id', 'flag', 'reference', 'position', 'score', 'sequence', 'fields'
])

SiteKey = namedtuple('SiteKey', ['position', 'flag'])

Site = namedtuple('Site', ['count', 'position'])

DirectionalSite = namedtuple('DirectionalSite', ['count', 'position', 'flag'])


class RecordSet(object):
    """Base class that provides functionality for serializing and
       deserializing namedtuple records into a DataFrame format.

    Subclasses should override the ``_tuple_class`` method to
    return the namedtuple class that should be used as a record.
    """

    def __init__(self, values: pd.DataFrame) -> None:
        self._values = self._check_frame(values)

    @classmethod
    def _check_frame(cls, values):
        fields = cls._tuple_fields()

        for field in fields:
            if field not in values.columns:
                raise ValueError('Missing required column {}'.format(field))

        return values.reindex(columns=fields)

    @classmethod
    def _tuple_class(cls):
        """Returns namedtuple class used to instantiate records."""
        raise NotImplementedError()

    @classmethod
    def _tuple_fields(cls):
        """Returns the fields in the named tuple class."""
        return cls._tuple_class()._fields

    def __getitem__(self, item):
        return self._values[item]

    def __len__(self):
        return len(self._values)

    @classmethod
    def from_tuples(cls, tuples):
        """Builds a record set instance from the given tuples."""
        records = [tuple(tup) for tup in tuples]
        return cls(pd.DataFrame.from_records(
            records, columns=cls._tuple_fields()))

    def to_tuples(self):
        """Converts the record set into an iterable of tuples."""

        tuple_class = self._tuple_class()

        for row in self._values.itertuples(index=False):
            yield tuple_class(*row)


class SiteSet(RecordSet):
    """Ranked table of insertion sites, keyed by coordinate.

    Rows are kept in the order in which they were given, which for
    tables built by ``pytnseq.align.sites`` is by descending count.
    """

    @classmethod
    def _tuple_class(cls):
        return Site

    @property
    def total_count(self):
        """Total number of records supporting the sites in the set."""
        return int(self._values['count'].sum())

    def top(self, n=10):
        """Returns a set containing the n highest ranked sites."""
        return self.__class__(self._values.head(n))

    @classmethod
    def from_table(cls, file_path):
        """Reads a space-delimited site table (without header)."""
        values = pd.read_csv(
            file_path, sep=' ', header=None, names=cls._tuple_fields())
        return cls(values)

    def to_table(self, file_path):
        """Writes sites as space-delimited '<count> <coordinate> ..' lines."""
        self._values.to_csv(file_path, sep=' ', header=False, index=False)


class DirectionalSiteSet(SiteSet):
    """Ranked table of insertion sites, keyed by coordinate and flag."""

    @classmethod
    def _tuple_class(cls):
        return DirectionalSite
