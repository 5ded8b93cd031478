"""
Configuration constants for the photo grouper.
"""

# --- File Type Definitions ---
# Only these extensions take part in grouping; everything else is ignored.
MEDIA_EXTS = {'.cr2', '.jpg', '.jpeg', '.mov', '.xmp'}

# Capture date is read with 'exifread' for these
EXIFREAD_EXTS = {'.jpg', '.jpeg', '.cr2'}
# ... and with pymediainfo -> exiftool for these. Anything else goes to exiftool.
VIDEO_EXTS = {'.mov'}

# --- Metadata Parsing ---
DATE_TAGS = [
    'EXIF DateTimeOriginal',
    'EXIF DateTimeDigitized',
    'Image DateTime',
]

EXIFTOOL_DATE_FIELDS = ["DateTimeOriginal", "CreateDate", "CreationDate", "MediaCreateDate"]

MEDIAINFO_DATE_FIELDS = [
    "recorded_date",
    "encoded_date",
    "tagged_date",
]

# Back-reference from a sidecar/preview to the file it was rendered from
DERIVED_FROM_TAG = "XMP-xmpMM:DerivedFrom"

EXIFTOOL_TIMEOUT = 30  # seconds

# --- Organization ---
NO_DATE_GROUP = "no-date"
GROUP_DATE_FORMAT = "%Y-%m-%d"
STEM_PATTERN = "{index:04d}_{group}"
DEFAULT_OUTPUT_DIRNAME = "grouped"

LOG_FILENAME = "grouper.log"
