import logging
from pathlib import Path
from typing import Dict, Iterable, List

from ..exceptions import MissingSourceError
from ..models import ClassifiedFile, Photo


def group_photo_files(files: Iterable[ClassifiedFile]) -> List[Photo]:
    """
    Builds one Photo per source file and attaches every derived file to the
    source named by its DerivedFrom tag.

    1.) index a Photo for each source file by its path
    2.) append derived files to the indexed Photo, in input order
    3.) return the Photos sorted by source path

    Raises MissingSourceError if a derived file points at a path that is
    not one of the source files.
    """
    files = list(files)
    photos: Dict[Path, Photo] = {}

    for f in files:
        if f.is_source:
            photos[f.path] = Photo(source=f.path)

    for f in files:
        if f.is_source:
            continue
        photo = photos.get(f.derived_from)
        if photo is None:
            raise MissingSourceError(f.path, f.derived_from)
        photo.derived.append(f.path)

    linked = sum(len(p.derived) for p in photos.values())
    logging.info(f"Grouped {len(files)} files into {len(photos)} photos ({linked} derived files linked).")

    return sorted(photos.values(), key=lambda p: p.source)
