import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from . import config
from .core import PhotoGrouperApp
from .exceptions import PhotoGrouperError


def setup_logging(log_dir: Optional[Path], verbose: bool):
    """Logs to the console, and to a file in log_dir if given."""
    log_level = logging.DEBUG if verbose else logging.INFO

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_dir / config.LOG_FILENAME, encoding='utf-8'))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=handlers
    )

    # Silence chatty libraries
    logging.getLogger("exifread").setLevel(logging.ERROR)


def parse_args(argv: Optional[List[str]] = None):
    p = argparse.ArgumentParser(
        description="Command line file management for (raw) photos and associated sidecar files")

    p.add_argument("-n", "--dry-run", action="store_true", help="Only print which commands would be executed")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    sub = p.add_subparsers(dest="command", required=True)

    g = sub.add_parser("group", help="Sort photos into one folder per capture date")
    g.add_argument("directory", type=Path, help="Directory containing the photos to be grouped")
    g.add_argument("--out", type=Path, default=None,
                   help=f"Destination root (default: DIRECTORY/{config.DEFAULT_OUTPUT_DIRNAME})")
    g.add_argument("--move", action="store_true", help="Move files instead of copying")
    g.add_argument("--plan-csv", type=Path, default=None, help="Also write the planned commands to this CSV file")

    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    src_dir = args.directory.resolve()
    dest_dir = (args.out or src_dir / config.DEFAULT_OUTPUT_DIRNAME).resolve()

    # A dry run must not create anything, not even the log file
    setup_logging(None if args.dry_run else dest_dir, args.verbose)

    logging.info("=== Photo Grouper Started ===")
    logging.info(f"Source: {src_dir}")
    logging.info(f"Dest:   {dest_dir}")

    app = PhotoGrouperApp()
    try:
        app.group(
            src_dir=src_dir,
            dest_dir=dest_dir,
            dry_run=args.dry_run,
            move=args.move,
            plan_csv=args.plan_csv,
        )
    except KeyboardInterrupt:
        logging.warning("Operation cancelled by user.")
        return 1
    except PhotoGrouperError as e:
        logging.error(str(e))
        return 1
    except Exception:
        logging.exception("Fatal error during grouping.")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
