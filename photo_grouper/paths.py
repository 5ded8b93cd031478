"""
Path arithmetic shared by the planner, the executor and the dry-run output.
"""
from pathlib import Path, PurePath

from .exceptions import NonUtf8PathError
from .models import CommonPrefix


def common_prefix(path1: PurePath, path2: PurePath) -> CommonPrefix:
    """
    Splits two paths into their shared leading components and the two
    remainders. Components are compared literally; '..' is not resolved.
    """
    a = PurePath(path1).parts
    b = PurePath(path2).parts

    n = 0
    while n < len(a) and n < len(b) and a[n] == b[n]:
        n += 1

    return CommonPrefix(
        prefix=Path(*a[:n]),
        suffix1=Path(*a[n:]),
        suffix2=Path(*b[n:]),
    )


def _display(p: PurePath) -> str:
    # Path() renders as '.', an empty remainder should render as nothing
    return str(p) if p.parts else ""


def format_rename(src: PurePath, dest: PurePath) -> str:
    """'dir/{old => new}' style diff of two paths."""
    c = common_prefix(src, dest)
    return f"{_display(c.prefix)}/{{{_display(c.suffix1)} => {_display(c.suffix2)}}}"


def path_text(path: PurePath) -> str:
    """Returns path as str, or raises NonUtf8PathError for undecodable names."""
    text = str(path)
    try:
        text.encode("utf-8")
    except UnicodeEncodeError:
        raise NonUtf8PathError(Path(path)) from None
    return text


def reference_text(file: PurePath, referenced_image: PurePath) -> str:
    """
    Value for the DerivedFrom tag of `file`: the name of `referenced_image`
    relative to the directory both of them live in.
    """
    c = common_prefix(file, referenced_image)
    if len(c.suffix1.parts) != 1 or len(c.suffix2.parts) != 1:
        raise AssertionError(
            f"{file} and {referenced_image} must be in the same directory")
    return path_text(c.suffix2)
