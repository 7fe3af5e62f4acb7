"""Helpers for running external command line tools."""

import subprocess
from pathlib import Path


def run(arguments, stdout=None, stderr=None, check=True):
    """Runs the given command, optionally redirecting output to files."""

    stdout_ = _open_stdstream(stdout)
    stderr_ = _open_stdstream(stderr)

    try:
        process = subprocess.Popen(arguments, stdout=stdout_, stderr=stderr_)
        process.wait()
    finally:
        for std in [stdout_, stderr_]:
            _close_stdstream(std)

    # Check return code.
    if check and process.returncode != 0:
        raise ValueError('Process terminated with errorcode {}'
                         .format(process.returncode))

    return process


def _open_stdstream(file_path, mode='w'):
    if file_path is None:
        return subprocess.DEVNULL
    else:
        return Path(file_path).open(mode)


def _close_stdstream(stdstream):
    if stdstream != subprocess.DEVNULL:
        stdstream.close()


def flatten_arguments(option_dict):
    """Flattens a dict of options into an argument list."""

    # Iterate over keys in lexical order, so that we have a
    # reproducible order of iteration (useful for tests).
    opt_names = sorted(option_dict.keys())

    # Flatten values.
    options = []
    for opt_name in opt_names:
        opt_value = option_dict[opt_name]

        if isinstance(opt_value, (tuple, list)):
            options += [opt_name] + [str(v) for v in opt_value]
        elif opt_value is True:
            options += [opt_name]
        elif not (opt_value is False or opt_value is None):
            options += [opt_name, str(opt_value)]

    return options
