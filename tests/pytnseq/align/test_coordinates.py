import pytest

from pytnseq.align import coordinates
from pytnseq.model import AlignmentRecord, SiteKey


def _record(flag, position, length, read_id='R1'):
    sequence = 'A' * length
    fields = (read_id, str(flag), 'chr1', str(position), '42',
              '{}M'.format(length), '*', '0', '0', sequence, 'I' * length)
    return AlignmentRecord(
        read_id=read_id,
        flag=flag,
        reference='chr1',
        position=position,
        score=0,
        sequence=sequence,
        fields=fields)


class TestFlagTextPolicy(object):
    """Tests for the FlagTextPolicy class."""

    @pytest.fixture
    def policy(self):
        return coordinates.FlagTextPolicy()

    @pytest.mark.parametrize('flag,expected', [
        (0, False), (16, False), (116, False), (10, True), (210, True),
        (1010, True)
    ])
    def test_is_reverse(self, policy, flag, expected):
        """Tests reverse strand check on flag text."""
        assert policy.is_reverse(flag) == expected

    @pytest.mark.parametrize('flag,expected', [
        (0, False), (256, False), (100, True), (1100, True), (116, False)
    ])
    def test_is_excluded(self, policy, flag, expected):
        """Tests exclusion check on flag text."""
        assert policy.is_excluded(flag) == expected

    @pytest.mark.parametrize('flag,expected', [
        (0, True), (16, True), (4, False), (24, False), (2048, False)
    ])
    def test_is_mapped(self, policy, flag, expected):
        """Tests mapped check on flag text."""
        assert policy.is_mapped(flag) == expected


class TestFlagBitPolicy(object):
    """Tests for the FlagBitPolicy class."""

    @pytest.fixture
    def policy(self):
        return coordinates.FlagBitPolicy()

    def test_is_reverse(self, policy):
        """Tests reverse strand bit."""

        assert policy.is_reverse(16)
        assert policy.is_reverse(272)
        assert not policy.is_reverse(0)
        assert not policy.is_reverse(10)

    def test_is_excluded(self, policy):
        """Tests secondary/supplementary bits."""

        assert policy.is_excluded(256)
        assert policy.is_excluded(2064)
        assert not policy.is_excluded(100)
        assert not policy.is_excluded(16)

    def test_is_mapped(self, policy):
        """Tests unmapped bit."""

        assert policy.is_mapped(16)
        assert not policy.is_mapped(4)
        assert not policy.is_mapped(20)


def test_build_policy():
    """Tests building policies by name."""

    assert isinstance(coordinates.build_policy(),
                      coordinates.FlagTextPolicy)
    assert isinstance(coordinates.build_policy('bits'),
                      coordinates.FlagBitPolicy)

    with pytest.raises(ValueError):
        coordinates.build_policy('unknown')


class TestResolveCoordinate(object):
    """Tests for the resolve_coordinate function."""

    def test_forward(self):
        """Tests forward alignments resolving to their position."""

        record = _record(flag=0, position=150, length=20)
        assert coordinates.resolve_coordinate(record) == 150

    def test_flag_16_is_forward(self):
        """Tests that flag 16 is treated as forward by the text policy."""

        record = _record(flag=16, position=500, length=30)
        assert coordinates.resolve_coordinate(record) == 500

    def test_flag_116_is_forward(self):
        """Tests that flag 116 (without "10") is treated as forward."""

        record = _record(flag=116, position=200, length=25)
        assert coordinates.resolve_coordinate(record) == 200

    def test_flag_210_is_reverse(self):
        """Tests that flag 210 is treated as reverse by the text policy."""

        record = _record(flag=210, position=200, length=25)
        assert coordinates.resolve_coordinate(record) == 223

    def test_flag_100_is_excluded(self):
        """Tests that flag 100 is excluded by the text policy."""

        record = _record(flag=100, position=200, length=25)
        assert coordinates.resolve_coordinate(record) is None

    def test_bits_reverse(self):
        """Tests reverse alignments using the bitwise policy."""

        record = _record(flag=16, position=500, length=30)
        policy = coordinates.FlagBitPolicy()

        assert coordinates.resolve_coordinate(record, policy) == 528

    def test_missing_position(self):
        """Tests records without valid position."""

        record = _record(flag=0, position=None, length=20)
        assert coordinates.resolve_coordinate(record) is None

    def test_pure(self):
        """Tests repeated resolution giving the same coordinate."""

        record = _record(flag=10, position=42, length=12)
        results = {coordinates.resolve_coordinate(record) for _ in range(5)}

        assert results == {52}


class TestResolveSites(object):
    """Tests for the resolve_sites function."""

    def test_example(self):
        """Tests resolution of mixed records."""

        records = [
            _record(flag=0, position=150, length=20),
            _record(flag=210, position=200, length=25),
            _record(flag=100, position=300, length=20),
            _record(flag=0, position=None, length=20),
            _record(flag=16, position=500, length=30)
        ]

        keys, skipped = coordinates.resolve_sites(records)

        assert keys == [SiteKey(150, 0), SiteKey(223, 210), SiteKey(500, 16)]
        assert skipped['excluded'] == 1
        assert skipped['undetermined'] == 1

    def test_empty(self):
        """Tests empty input."""

        keys, skipped = coordinates.resolve_sites([])

        assert keys == []
        assert sum(skipped.values()) == 0
