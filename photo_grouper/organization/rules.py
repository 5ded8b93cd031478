import logging
from pathlib import Path
from datetime import datetime
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from .. import config
from ..exceptions import NoBasenameError
from ..grouping import group_by_fn
from ..metadata.linking import group_photo_files
from ..models import AnnotatedPhoto, Photo, Command, CreateDirectory, Rename, AdjustReference
from ..paths import path_text
from ..scanning.classify import classify_files, DerivedFromLookup

CaptureDateLookup = Callable[[Path], Optional[datetime]]


def make_new_filename(file_name: str, old: str, new: str) -> str:
    """
    Replaces `old` with `new` in the stem of `file_name` and lowercases the
    extension(s). The stem ends at the *first* dot, so "IMG_1.CR2.xmp" has
    the extension ".cr2.xmp". An empty `old` (dotfiles) replaces nothing.
    """
    stem, dot, ext = file_name.partition(".")
    if old:
        stem = stem.replace(old, new)
    if not dot:
        return stem
    return stem + (dot + ext).lower()


def _file_name(path: Path) -> str:
    if not path.name:
        raise NoBasenameError(path)
    return path_text(Path(path.name))


def create_move_commands(photo: Photo, new_stem: str, out_dir: Path) -> List[Command]:
    """
    Commands that move one Photo into out_dir under new_stem.

    The source is renamed first. Each derived file is then renamed and its
    DerivedFrom tag pointed at the renamed source; the Rename comes first
    because the tag is written at the file's new location.
    """
    source_name = _file_name(photo.source)
    # same first-dot split as make_new_filename ("1.MP.jpg" -> "1")
    source_stem = source_name.partition(".")[0]

    new_source = out_dir / make_new_filename(source_name, source_stem, new_stem)
    cmds: List[Command] = [Rename(photo.source, new_source)]

    for derived in photo.derived:
        new_derived = out_dir / make_new_filename(_file_name(derived), source_stem, new_stem)
        cmds.append(Rename(derived, new_derived))
        cmds.append(AdjustReference(new_derived, new_source))

    return cmds


def date_photo_files(photos: Iterable[Photo], capture_date: CaptureDateLookup) -> List[AnnotatedPhoto]:
    return [AnnotatedPhoto(photo=p, captured_at=capture_date(p.source)) for p in photos]


def sort_key(item: AnnotatedPhoto) -> Tuple[bool, datetime]:
    """Undated photos first, then ascending by capture time."""
    if item.captured_at is None:
        return (False, datetime.min)
    return (True, item.captured_at)


def same_day(a: AnnotatedPhoto, b: AnnotatedPhoto) -> bool:
    if a.captured_at is None or b.captured_at is None:
        return a.captured_at is None and b.captured_at is None
    return a.captured_at.date() == b.captured_at.date()


def group_name(item: AnnotatedPhoto) -> str:
    if item.captured_at is None:
        return config.NO_DATE_GROUP
    return item.captured_at.strftime(config.GROUP_DATE_FORMAT)


class DestinationPlanner:
    """
    Plans how a flat directory of photos is sorted into one folder per
    capture day.

    Both lookups are injected so planning itself never touches the disk;
    the resulting command list can be printed (dry run) or executed.
    """

    def __init__(self, lookup_derived_from: DerivedFromLookup, capture_date: CaptureDateLookup):
        self.lookup_derived_from = lookup_derived_from
        self.capture_date = capture_date

    def plan_all(self, input_files: Sequence[Path], out_dir: Path) -> List[Command]:
        """
        Main entry point.
        1. Classify & link files into Photos
        2. Annotate with capture date and sort (undated first)
        3. One CreateDirectory per day, then the renames for each Photo,
           numbered 0000, 0001, ... in capture order
        """
        classified = classify_files(input_files, self.lookup_derived_from)
        photos = group_photo_files(classified)

        dated = sorted(date_photo_files(photos, self.capture_date), key=sort_key)

        cmds: List[Command] = []
        for group in group_by_fn(dated, same_day):
            name = group_name(group[0])
            group_dir = out_dir / name
            cmds.append(CreateDirectory(group_dir))

            for i, item in enumerate(group):
                new_stem = config.STEM_PATTERN.format(index=i, group=name)
                cmds.extend(create_move_commands(item.photo, new_stem, group_dir))

            logging.info(f"Planned {len(group)} photos for {name}")

        return cmds
