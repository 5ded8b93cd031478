from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Union


@dataclass(frozen=True)
class ClassifiedFile:
    """
    A media file found in the input directory.
    derived_from is None for source files (RAW, standalone JPEG/MOV).
    """
    path: Path
    derived_from: Optional[Path] = None

    @property
    def is_source(self) -> bool:
        return self.derived_from is None


@dataclass
class Photo:
    """
    A single source file (e.g. a RAW file) together with every file whose
    DerivedFrom tag points at it (XMP sidecars, JPEG previews).
    """
    source: Path
    derived: List[Path] = field(default_factory=list)


@dataclass(frozen=True)
class AnnotatedPhoto:
    photo: Photo
    captured_at: Optional[datetime] = None


@dataclass(frozen=True)
class CommonPrefix:
    prefix: Path
    suffix1: Path
    suffix2: Path


# --- Planned filesystem commands ---

@dataclass(frozen=True)
class CreateDirectory:
    path: Path


@dataclass(frozen=True)
class Rename:
    src: Path
    dest: Path


@dataclass(frozen=True)
class AdjustReference:
    file: Path
    referenced_image: Path  # final (post-rename) path of the source


Command = Union[CreateDirectory, Rename, AdjustReference]
