import os
from pathlib import Path

import pytest


@pytest.helpers.register
def data_path(relative_path, relative_to=__file__):
    """Returns the path to a test data file."""
    return Path(os.path.dirname(relative_to)) / 'data' / relative_path


@pytest.fixture
def sam_path():
    """Path to example fragment alignments."""
    return pytest.helpers.data_path('fragments.sam')


@pytest.fixture
def fragment_map_path():
    """Path to example fragment -> parent map."""
    return pytest.helpers.data_path('fragments.fragment_map.tsv')


@pytest.fixture
def reads_path():
    """Path to example fragment reads."""
    return pytest.helpers.data_path('reads.fastq')
