"""Strategies for deriving parent read ids from fragment read ids.

Fragments are short sub-sequences of a longer (parent) read, which are
aligned independently. Depending on how the fragments were generated, their
parent can be derived from the fragment read id itself or needs to be looked
up in a fragment map produced alongside the fragments.
"""

import abc
import csv
import logging

import pandas as pd

_registry = {}


def register_resolver(name, resolver):
    _registry[name] = resolver


def get_resolvers():
    return dict(_registry)


class MissingParentMapping(KeyError):
    """Raised when no parent can be derived for a fragment."""
    pass


class ParentResolver(abc.ABC):
    """Base parent resolver class."""

    @abc.abstractmethod
    def resolve(self, read_id):
        """Returns the parent id for the given fragment read id.

        Raises MissingParentMapping if no parent can be determined.
        """


class MappedParentResolver(ParentResolver):
    """Looks up parents in a fragment -> parent mapping.

    Parameters
    ----------
    mapping : Dict[str, str]
        Dictionary mapping fragment ids to parent ids.

    """

    def __init__(self, mapping):
        super().__init__()
        self._mapping = dict(mapping)

    def __len__(self):
        return len(self._mapping)

    @classmethod
    def from_path(cls, file_path):
        """Reads mapping from a tab-delimited fragment/parent file.

        Ids are read verbatim (no NA conversion). If a fragment is listed
        more than once, its last parent is used.
        """

        try:
            map_df = pd.read_csv(
                str(file_path),
                sep='\t',
                header=None,
                names=['fragment', 'parent'],
                usecols=[0, 1],
                dtype=str,
                keep_default_na=False,
                na_filter=False,
                quoting=csv.QUOTE_NONE)
        except pd.errors.EmptyDataError:
            return cls({})

        duplicates = map_df['fragment'][map_df['fragment'].duplicated()]
        if len(duplicates) > 0:
            logging.warning('Fragment map %s lists %d fragment(s) more than '
                            'once (e.g. %s), keeping their last parent',
                            file_path, duplicates.nunique(),
                            duplicates.iloc[0])

        return cls(dict(zip(map_df['fragment'], map_df['parent'])))

    def resolve(self, read_id):
        try:
            return self._mapping[read_id]
        except KeyError:
            raise MissingParentMapping(read_id)


register_resolver('map', MappedParentResolver)


class TokenParentResolver(ParentResolver):
    """Derives parents from colon-delimited read ids.

    The third colon-delimited token of the read id is truncated at its
    first underscore, after which the tokens are joined again. Read ids
    with less than three tokens are returned unchanged.
    """

    def resolve(self, read_id):
        tokens = read_id.split(':')

        if len(tokens) > 2:
            tokens[2] = tokens[2].split('_', 1)[0]

        return ':'.join(tokens)


register_resolver('token', TokenParentResolver)


class PrefixParentResolver(ParentResolver):
    """Takes the part of the read id before the first delimiter as parent."""

    def __init__(self, delimiter='_'):
        super().__init__()

        if not delimiter:
            raise ValueError('Delimiter should be a non-empty string')

        self._delimiter = delimiter

    def resolve(self, read_id):
        return read_id.split(self._delimiter, 1)[0]


register_resolver('prefix', PrefixParentResolver)


def build_resolver(strategy, fragment_map=None, delimiter='_'):
    """Builds a parent resolver for the named strategy."""

    resolvers = get_resolvers()

    if strategy not in resolvers:
        raise ValueError('Unknown parent strategy {!r} (available: {})'
                         .format(strategy, ', '.join(sorted(resolvers))))

    if strategy == 'map':
        if fragment_map is None:
            raise ValueError('A fragment map is required for the '
                             '\'map\' parent strategy')
        return MappedParentResolver.from_path(fragment_map)
    elif strategy == 'prefix':
        return PrefixParentResolver(delimiter=delimiter)

    return resolvers[strategy]()
