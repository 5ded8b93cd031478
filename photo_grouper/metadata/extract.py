import logging
import subprocess
import json
from pathlib import Path
from datetime import datetime
from typing import Optional, Dict, Any, List

import exifread
from pymediainfo import MediaInfo

from .. import config
from ..exceptions import MetadataError
from ..paths import path_text


class MetadataExtractor:
    """
    Reads and writes the embedded metadata the grouper relies on.

    Strategies:
      - DerivedFrom (read/write): 'exiftool' (handles XMP sidecars and embedded XMP).
      - Capture date, images: 'exifread' (fast, Python-native).
      - Capture date, video: 'pymediainfo' -> falls back to 'exiftool'.

    Read failures are logged and reported as None, so a file whose metadata
    cannot be read is treated as an undated source with no back-reference.
    """

    def __init__(self):
        self._exiftool_missing_warned = False

    def derived_from(self, path: Path) -> Optional[Path]:
        """
        Path of the file `path` was derived from, resolved against the
        directory of `path`, or None if the tag is absent.
        """
        try:
            tags = self._run_exiftool(["-" + config.DERIVED_FROM_TAG, str(path)])
        except FileNotFoundError as e:
            if not self._exiftool_missing_warned:
                logging.warning(f"exiftool not found, sidecars cannot be linked to their sources: {e}")
                self._exiftool_missing_warned = True
            return None
        except Exception as e:
            logging.debug(f"No DerivedFrom for {path}: {e}")
            return None

        value = tags.get("DerivedFrom")
        if isinstance(value, (int, float)):
            # exiftool -j turns numeric-looking names into numbers
            value = str(value)
        if not isinstance(value, str) or not value.strip():
            return None
        return path.parent / value.strip()

    def capture_datetime(self, path: Path) -> Optional[datetime]:
        """Capture time of `path`, routed to a reader by file extension."""
        ext = path.suffix.lower()
        if ext in config.EXIFREAD_EXTS:
            return self.get_image_datetime(path)
        if ext in config.VIDEO_EXTS:
            return self.get_video_datetime(path)

        try:
            return self._exiftool_datetime(path)
        except Exception as e:
            logging.warning(f"ExifTool failed for {path}: {e}")
            return None

    def write_derived_from(self, path: Path, reference: str):
        """Sets the DerivedFrom tag of `path` to `reference`, in place."""
        cmd = [
            "exiftool",
            "-overwrite_original",
            f"-{config.DERIVED_FROM_TAG}={reference}",
            path_text(path),
        ]
        try:
            subprocess.run(cmd, check=True, capture_output=True, text=True,
                           timeout=config.EXIFTOOL_TIMEOUT)
        except subprocess.CalledProcessError as e:
            raise MetadataError(f"exiftool could not write DerivedFrom to {path}: {e.stderr.strip()}") from e
        except (OSError, subprocess.TimeoutExpired) as e:
            raise MetadataError(f"exiftool could not be run for {path}: {e}") from e
        logging.debug(f"Wrote DerivedFrom={reference} to {path}")

    def get_image_datetime(self, path: Path) -> Optional[datetime]:
        try:
            with path.open('rb') as f:
                # details=False speeds up processing significantly
                tags = exifread.process_file(f, details=False)
            return self._parse_exif_date(tags)
        except Exception as e:
            logging.warning(f"ExifRead failed for {path}: {e}")
            return None

    def get_video_datetime(self, path: Path) -> Optional[datetime]:
        # Strategy 1: MediaInfo
        try:
            dt = self._mediainfo_datetime(path)
            if dt:
                return dt
        except Exception as e:
            logging.debug(f"MediaInfo failed for {path}: {e}")

        # Strategy 2: ExifTool (requires system install)
        try:
            return self._exiftool_datetime(path)
        except Exception as e:
            logging.warning(f"ExifTool failed for {path}: {e}")
            return None

    # --- Internal Extraction Helpers ---

    def _run_exiftool(self, args: List[str]) -> Dict[str, Any]:
        """
        Runs 'exiftool -j' and returns the tag dict of the first file.
        Must be installed and on the system PATH.
        """
        cmd = ["exiftool", "-j"] + args
        out = subprocess.check_output(cmd, stderr=subprocess.DEVNULL, text=True,
                                      timeout=config.EXIFTOOL_TIMEOUT)
        data_list = json.loads(out)
        return data_list[0] if data_list else {}

    def _exiftool_datetime(self, path: Path) -> Optional[datetime]:
        tags = self._run_exiftool([f"-{field}" for field in config.EXIFTOOL_DATE_FIELDS] + [str(path)])
        for field in config.EXIFTOOL_DATE_FIELDS:
            if tags.get(field):
                dt = self._parse_flexible_date(str(tags[field]))
                if dt:
                    return dt
        return None

    def _mediainfo_datetime(self, path: Path) -> Optional[datetime]:
        mi = MediaInfo.parse(str(path))
        for track in mi.tracks:
            if track.track_type != "General":
                continue
            for field in config.MEDIAINFO_DATE_FIELDS:
                val = getattr(track, field, None)
                if val:
                    dt = self._parse_flexible_date(val)
                    if dt:
                        return dt
        return None

    def _parse_exif_date(self, tags) -> Optional[datetime]:
        """Helper to parse standard EXIF date strings from exifread."""
        for tag in config.DATE_TAGS:
            if tag in tags:
                try:
                    # EXIF format is "YYYY:MM:DD HH:MM:SS"
                    dt_str = str(tags[tag]).replace(':', '-', 2)
                    return datetime.strptime(dt_str, "%Y-%m-%d %H:%M:%S")
                except ValueError:
                    continue
        return None

    def _parse_flexible_date(self, dt_str: str) -> Optional[datetime]:
        """
        Handles various date formats (ISO, UTC prefixes, Exiftool quirks).
        Returns a naive datetime object.
        """
        if not dt_str:
            return None

        clean = dt_str.replace("UTC", "").strip()

        # 1. ISO format (e.g. 2020-01-01T12:00:00)
        try:
            return datetime.fromisoformat(clean).replace(tzinfo=None)
        except ValueError:
            pass

        # 2. EXIF style "YYYY:MM:DD HH:MM:SS[.fff][+hh:mm]"
        try:
            clean_exif = clean.replace(":", "-", 2)[:19]
            return datetime.strptime(clean_exif, "%Y-%m-%d %H:%M:%S")
        except ValueError:
            pass

        return None
