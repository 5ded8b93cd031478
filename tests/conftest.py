import pytest
from datetime import datetime
from pathlib import Path


class FakeMetadata:
    """
    Stands in for MetadataExtractor: DerivedFrom and capture dates come
    from dicts instead of exiftool/exifread.
    """
    def __init__(self, derived=None, dates=None):
        self.derived = {Path(k): Path(v) for k, v in (derived or {}).items()}
        self.dates = {Path(k): v for k, v in (dates or {}).items()}
        self.derived_calls = []
        self.written = []

    def derived_from(self, path):
        self.derived_calls.append(path)
        return self.derived.get(path)

    def capture_datetime(self, path):
        return self.dates.get(path)

    def write_derived_from(self, path, reference):
        self.written.append((path, reference))


@pytest.fixture
def fake_metadata_factory():
    """Builds a FakeMetadata from path -> DerivedFrom and path -> date dicts."""
    return FakeMetadata


@pytest.fixture
def fake_metadata(fake_metadata_factory):
    return fake_metadata_factory(
        derived={
            "/in/IMG_1.CR2.xmp": "/in/IMG_1.CR2",
            "/in/IMG_1.JPG": "/in/IMG_1.CR2",
            "/in/IMG_2.jpg": "/in/IMG_2.cr2",
        },
        dates={
            "/in/IMG_1.CR2": datetime(2017, 5, 1, 14, 0, 0),
            "/in/IMG_2.cr2": datetime(2017, 5, 1, 9, 30, 0),
            "/in/IMG_3.CR2": datetime(2017, 5, 2, 8, 0, 0),
            # MVI_4.MOV has no date
        },
    )
