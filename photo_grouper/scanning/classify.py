from pathlib import Path
from typing import Callable, Iterable, List, Optional

from .. import config
from ..models import ClassifiedFile

DerivedFromLookup = Callable[[Path], Optional[Path]]


def is_media_file(path: Path) -> bool:
    """True if the (last) extension of path is one we organize. No extension -> False."""
    return path.suffix.lower() in config.MEDIA_EXTS


def classify_files(paths: Iterable[Path], lookup_derived_from: DerivedFromLookup) -> List[ClassifiedFile]:
    """
    Drops non-media paths and tags the rest as source or derived.

    lookup_derived_from is called exactly once per media file, in input order.
    """
    return [
        ClassifiedFile(path=path, derived_from=lookup_derived_from(path))
        for path in paths
        if is_media_file(path)
    ]
