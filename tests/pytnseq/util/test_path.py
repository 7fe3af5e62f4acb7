from pytnseq.util.path import shorten_path


def test_shorten_path():
    """Tests shortening of long file names."""

    assert shorten_path('/path/to/reads.fastq') == 'reads.fastq'
    assert shorten_path('/path/to/' + 'a' * 50 + '.sam', limit=20) == \
        'aaa~' + 'a' * 13 + '.sam'
