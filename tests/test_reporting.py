import csv
from pathlib import Path

from photo_grouper.models import AdjustReference, CreateDirectory, Rename
from photo_grouper.reporting import describe_command, write_plan_csv

DAY = Path("/in/grouped/2017-05-01")
CMDS = [
    CreateDirectory(DAY),
    Rename(Path("/in/IMG_1.CR2"), DAY / "0000_2017-05-01.cr2"),
    Rename(Path("/in/IMG_1.JPG"), DAY / "0000_2017-05-01.jpg"),
    AdjustReference(DAY / "0000_2017-05-01.jpg", DAY / "0000_2017-05-01.cr2"),
]


def test_describe_command():
    lines = [describe_command(c) for c in CMDS]
    assert lines == [
        "create dir /in/grouped/2017-05-01",
        "rename     /in/{IMG_1.CR2 => grouped/2017-05-01/0000_2017-05-01.cr2}",
        "rename     /in/{IMG_1.JPG => grouped/2017-05-01/0000_2017-05-01.jpg}",
        "adjust ref /in/grouped/2017-05-01/0000_2017-05-01.jpg --> 0000_2017-05-01.cr2",
    ]


def test_write_plan_csv(tmp_path):
    out = tmp_path / "plan.csv"
    assert write_plan_csv(CMDS, out) == 4

    with open(out, newline="", encoding="utf-8") as f:
        rows = list(csv.DictReader(f))

    assert [r["Action"] for r in rows] == ["create_dir", "rename", "rename", "adjust_ref"]
    assert rows[1]["Path"] == "/in/IMG_1.CR2"
    assert rows[1]["Target"] == str(DAY / "0000_2017-05-01.cr2")
    assert rows[3]["Reference"] == "0000_2017-05-01.cr2"
