from pathlib import Path

import pytest

from pytnseq.external.bowtie2 import bowtie2, shell

# pylint: disable=redefined-outer-name


@pytest.fixture
def bowtie_args():
    """Basic arguments for bowtie2 function."""

    return {
        'read_path': Path('/path/to/reads.trim.fastq'),
        'output_path': Path('/path/to/output.sam'),
        'index_path': Path('/path/to/index'),
        'log_path': Path('/path/to/output.log'),
        'extra_options': {'-p': 16, '--end-to-end': True, '-a': True},
    }


def test_single(mocker, bowtie_args):
    """Tests single-end invocation of bowtie2."""

    mock = mocker.patch.object(shell, 'run')
    bowtie2(**bowtie_args)

    expected = ['bowtie2', '--end-to-end', '-S',
                str(bowtie_args['output_path']), '-U',
                str(bowtie_args['read_path']), '-a', '-p', '16', '-x',
                str(bowtie_args['index_path'])]

    mock.assert_called_with(expected, stderr=bowtie_args['log_path'])


def test_single_fa(mocker, bowtie_args):
    """Tests single-end invocation of bowtie2 with fasta file."""

    bowtie_args['read_path'] = bowtie_args['read_path'].with_suffix('.fa')
    bowtie_args['extra_options'] = None

    mock = mocker.patch.object(shell, 'run')
    bowtie2(**bowtie_args)

    expected = ['bowtie2', '-S', str(bowtie_args['output_path']), '-U',
                str(bowtie_args['read_path']), '-f', '-x',
                str(bowtie_args['index_path'])]

    mock.assert_called_with(expected, stderr=bowtie_args['log_path'])
