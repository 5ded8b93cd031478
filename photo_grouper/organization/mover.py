import shutil
import logging
from pathlib import Path
from typing import Callable, Iterable

from tqdm import tqdm

from ..exceptions import FileOperationError
from ..models import Command, CreateDirectory, Rename, AdjustReference
from ..paths import reference_text
from ..reporting import describe_command

ReferenceWriter = Callable[[Path, str], None]


class CommandExecutor:
    """
    Applies a planned command list to disk.

    Stops at the first failing command and re-raises its error; commands
    that already ran are left in place.
    """

    def __init__(self, writer: ReferenceWriter, move_mode: bool = False):
        self.writer = writer
        self.move_mode = move_mode

    def execute(self, commands: Iterable[Command], dry_run: bool = False):
        commands = list(commands)
        if not commands:
            logging.info("Nothing to do.")
            return

        logging.info(f"Processing {len(commands)} commands (Move={self.move_mode}, DryRun={dry_run})...")

        if dry_run:
            for cmd in commands:
                logging.info(f"[DRY RUN] {describe_command(cmd)}")
            return

        for cmd in tqdm(commands, desc="Grouping"):
            logging.debug(describe_command(cmd))
            self.apply(cmd)

    def apply(self, cmd: Command):
        if isinstance(cmd, CreateDirectory):
            self._create_directory(cmd.path)
        elif isinstance(cmd, Rename):
            self._transfer(cmd.src, cmd.dest)
        elif isinstance(cmd, AdjustReference):
            self.writer(cmd.file, reference_text(cmd.file, cmd.referenced_image))
        else:
            raise TypeError(f"Unknown command: {cmd!r}")

    def _create_directory(self, path: Path):
        # An existing folder would mix this run's files with an earlier one
        if path.exists():
            raise FileOperationError(f"Destination {path} already exists")
        try:
            path.mkdir(parents=True)
        except OSError as e:
            raise FileOperationError(f"Failed to create {path}: {e}") from e

    def _transfer(self, src: Path, dest: Path):
        try:
            if self.move_mode:
                shutil.move(str(src), str(dest))
            else:
                shutil.copy2(str(src), str(dest))
        except OSError as e:
            raise FileOperationError(f"Failed to process {src} -> {dest}: {e}") from e
