"""Utility functions for manipulating paths."""

import os


def shorten_path(file_name, limit=40):
    """Shorten path for str to limit for logging."""

    name = os.path.split(str(file_name))[1]

    if len(name) > limit:
        return "%s~%s" % (name[:3], name[-(limit - 3):])
    else:
        return name
