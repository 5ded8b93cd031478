import pytest
from pathlib import Path

from photo_grouper.exceptions import FileOperationError
from photo_grouper.models import AdjustReference, CreateDirectory, Rename
from photo_grouper.organization.mover import CommandExecutor


class RecordingWriter:
    def __init__(self):
        self.calls = []

    def __call__(self, path, reference):
        self.calls.append((path, reference))


def plan_for(tmp_path):
    src = tmp_path / "in"
    src.mkdir()
    (src / "IMG_1.CR2").write_bytes(b"raw")
    (src / "IMG_1.CR2.xmp").write_text("<xmp/>")

    day = tmp_path / "out" / "2017-05-01"
    return src, day, [
        CreateDirectory(day),
        Rename(src / "IMG_1.CR2", day / "0000_2017-05-01.cr2"),
        Rename(src / "IMG_1.CR2.xmp", day / "0000_2017-05-01.cr2.xmp"),
        AdjustReference(day / "0000_2017-05-01.cr2.xmp", day / "0000_2017-05-01.cr2"),
    ]


def test_execute_copies_and_adjusts(tmp_path):
    src, day, cmds = plan_for(tmp_path)
    writer = RecordingWriter()

    CommandExecutor(writer).execute(cmds)

    assert (day / "0000_2017-05-01.cr2").read_bytes() == b"raw"
    assert (day / "0000_2017-05-01.cr2.xmp").read_text() == "<xmp/>"
    # copy keeps the originals
    assert (src / "IMG_1.CR2").exists()
    assert writer.calls == [(day / "0000_2017-05-01.cr2.xmp", "0000_2017-05-01.cr2")]


def test_execute_move_mode(tmp_path):
    src, day, cmds = plan_for(tmp_path)

    CommandExecutor(RecordingWriter(), move_mode=True).execute(cmds)

    assert (day / "0000_2017-05-01.cr2").exists()
    assert not (src / "IMG_1.CR2").exists()


def test_dry_run_touches_nothing(tmp_path):
    src, day, cmds = plan_for(tmp_path)
    writer = RecordingWriter()

    CommandExecutor(writer).execute(cmds, dry_run=True)

    assert not day.exists()
    assert writer.calls == []


def test_existing_directory_is_fatal(tmp_path):
    src, day, cmds = plan_for(tmp_path)
    day.mkdir(parents=True)

    with pytest.raises(FileOperationError):
        CommandExecutor(RecordingWriter()).execute(cmds)

    assert not (day / "0000_2017-05-01.cr2").exists()


def test_stops_at_first_failure_without_rollback(tmp_path):
    src, day, cmds = plan_for(tmp_path)
    (src / "IMG_1.CR2.xmp").unlink()
    writer = RecordingWriter()

    with pytest.raises(FileOperationError):
        CommandExecutor(writer).execute(cmds)

    # the raw file was already copied and stays there
    assert (day / "0000_2017-05-01.cr2").exists()
    assert writer.calls == []
