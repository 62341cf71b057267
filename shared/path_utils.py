"""
shared/path_utils.py
--------------------

Path helpers for the file operations.

Features:
- Extension splitting that keeps the separator and original casing
- Directory creation
- Path normalization
- Copy / move primitives that overwrite an existing destination
"""

import errno
import os
import shutil


def get_extension(filename):
    """
    Returns everything from the last '.' of the filename, dot included,
    with the original casing. Returns '' when the name has no dot.

    Example:
        get_extension('report.TXT') -> '.TXT'
        get_extension('archive.tar.gz') -> '.gz'
        get_extension('.profile') -> '.profile'
        get_extension('README') -> ''
    """
    name = os.path.basename(str(filename))
    dot = name.rfind(".")
    if dot < 0:
        return ""
    return name[dot:]


def ensure_directory(path):
    """
    Create the directory (and parents) if it does not exist yet.
    """
    if path and not os.path.isdir(path):
        os.makedirs(path, exist_ok=True)


def normalize_path(path):
    """
    Normalize path separators, expand '~' and strip whitespace.
    """
    return os.path.normpath(os.path.expanduser(str(path).strip()))


def copy_overwrite(src, dst):
    """
    Copy src to dst, replacing dst if it already exists.
    The source is left untouched.

    dst is always the target file name: an existing directory there is an
    error, never a folder to copy into.
    """
    shutil.copyfile(src, dst)
    shutil.copystat(src, dst)
    return dst


def move_overwrite(src, dst):
    """
    Move src to dst, replacing dst if it already exists.

    Uses os.replace on the same filesystem. Across devices the file is
    copied first and the source removed only once the copy succeeded, so
    a failed move never loses the source.
    """
    try:
        os.replace(src, dst)
    except OSError as e:
        if e.errno != errno.EXDEV:
            raise
        copy_overwrite(src, dst)
        os.remove(src)
    return dst
