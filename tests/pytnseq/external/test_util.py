import subprocess

import pytest

from pytnseq.external import util


def test_flatten_arguments():
    """Tests flattening of option dicts."""

    options = {
        '-x': 'index',
        '-a': True,
        '--local': False,
        '-R': 6,
        '--trim': (3, 5),
        '-U': None
    }

    assert util.flatten_arguments(options) == [
        '--trim', '3', '5', '-R', '6', '-a', '-x', 'index']


class TestRun(object):
    """Tests for the run function."""

    def test_stderr_to_file(self, mocker, tmpdir):
        """Tests redirection of stderr to a file."""

        process = mocker.Mock(returncode=0)
        mock_popen = mocker.patch.object(
            subprocess, 'Popen', return_value=process)

        log_path = tmpdir / 'log.txt'
        util.run(['bowtie2', '--version'], stderr=str(log_path))

        _, kwargs = mock_popen.call_args
        assert kwargs['stdout'] == subprocess.DEVNULL
        assert str(kwargs['stderr'].name) == str(log_path)
        assert kwargs['stderr'].closed

    def test_failure(self, mocker):
        """Tests non-zero exit codes raising an error."""

        process = mocker.Mock(returncode=1)
        mocker.patch.object(subprocess, 'Popen', return_value=process)

        with pytest.raises(ValueError):
            util.run(['bowtie2'])

    def test_failure_unchecked(self, mocker):
        """Tests ignoring non-zero exit codes."""

        process = mocker.Mock(returncode=1)
        mocker.patch.object(subprocess, 'Popen', return_value=process)

        assert util.run(['bowtie2'], check=False) is process
