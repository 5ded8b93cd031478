import logging
import os
from pathlib import Path
from typing import List

from ..exceptions import FileOperationError


def collect_files(directory: Path) -> List[Path]:
    """
    Regular files directly inside `directory`, sorted by path.
    Subdirectories (including a previous output folder) are not descended into.
    """
    try:
        with os.scandir(directory) as it:
            entries = list(it)
    except OSError as e:
        raise FileOperationError(f"Cannot list {directory}: {e}") from e

    files = sorted(Path(e.path) for e in entries if e.is_file(follow_symlinks=False))
    logging.debug(f"Found {len(files)} files in {directory}")
    return files
