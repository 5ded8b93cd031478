import logging
from pathlib import Path
from typing import List, Optional

from .metadata.extract import MetadataExtractor
from .models import Command
from .organization.rules import DestinationPlanner
from .organization.mover import CommandExecutor
from .reporting import write_plan_csv
from .scanning.filesystem import collect_files


class PhotoGrouperApp:
    def __init__(self, extractor: Optional[MetadataExtractor] = None):
        self.extractor = extractor or MetadataExtractor()

    def plan(self, src_dir: Path, dest_dir: Path) -> List[Command]:
        logging.info(f"Scanning {src_dir}...")
        files = collect_files(src_dir)

        planner = DestinationPlanner(
            lookup_derived_from=self.extractor.derived_from,
            capture_date=self.extractor.capture_datetime,
        )
        return planner.plan_all(files, dest_dir)

    def group(self,
              src_dir: Path,
              dest_dir: Path,
              dry_run: bool = False,
              move: bool = False,
              plan_csv: Optional[Path] = None) -> List[Command]:
        """
        Sorts the photos in src_dir into per-day folders below dest_dir.
        1. Collect & plan (no disk changes)
        2. Optionally export the plan as CSV
        3. Execute (Copy/Move, fix DerivedFrom tags)
        """
        commands = self.plan(src_dir, dest_dir)

        if plan_csv:
            write_plan_csv(commands, plan_csv)

        executor = CommandExecutor(writer=self.extractor.write_derived_from, move_mode=move)
        executor.execute(commands, dry_run=dry_run)

        logging.info("Grouping complete.")
        return commands
