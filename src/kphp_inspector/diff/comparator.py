"""
Comparison of two KPHP outputs: folders with .cpp/.h files generated from PHP.

Useful for compiler development: generate the site with the stable compiler,
change the compiler, generate again and compare, to make sure there is no
diff or there is exactly the expected one. Files are not compared in full:
the generator writes checksums at the start of every file, so comparing the
first bytes is enough. For every differing file its name is printed and a
unified diff plus copies of both versions are written to the diff folder.
"""

import os
import re
import shutil
import subprocess
import time
from pathlib import Path
from typing import Iterator, List, Optional
import logging

from pydantic import BaseModel, Field
from rich.console import Console
from rich.text import Text

from ..models.config import DiffConfig
from ..ui.console import console as default_console


logger = logging.getLogger(__name__)

CPP_EXTENSIONS = ('.cpp', '.h')
VARS_FILE_RE = re.compile(r'vars\d+\.cpp')
LIB_VERSION_SUFFIX = '_lib_version.h'
DIFF_COMMAND = ['diff', '-u', '-I', '// .*', '-I', '//.*']


class FileDifference(BaseModel):
    """
    A generated file that differs between the two trees.

    Attributes:
        relative_path: Path relative to the tree roots
        diff_name: Flat file name used in the diff folder
        only_comments: Code checksums are equal, only comments changed
        dest_missing: The file does not exist in the compared tree
        important: The difference is worth looking at
    """

    relative_path: str
    diff_name: str
    only_comments: bool = False
    dest_missing: bool = False
    important: bool = True


class DiffSummary(BaseModel):
    """Counters reported when the comparison is done."""

    total_count: int = Field(0, ge=0, description="Compared .cpp/.h files")
    inessential_diff_count: int = Field(0, ge=0, description="Known differences (vars.cpp, etc)")
    important_diff_count: int = Field(0, ge=0, description="Important differences")
    duration_ms: int = Field(0, ge=0, description="Comparison time in milliseconds")


def read_head(path: Path, size: int) -> bytes:
    """Read the first bytes of a file; a missing file reads as empty."""
    try:
        with open(path, 'rb') as f:
            return f.read(size)
    except OSError:
        return b''


def is_cpp_source_file(path: Path) -> bool:
    return path.name.endswith(CPP_EXTENSIONS)


def walk_files(root: Path) -> Iterator[Path]:
    """Yield all files under root, one at a time."""
    for current_dir, subdirs, files in os.walk(root):
        for filename in files:
            yield Path(current_dir) / filename


class DiffInvoker:
    """
    Writes a unified diff and copies of both versions of a file.

    diff processes are started without waiting for them; wait() collects
    them before the program exits.
    """

    def __init__(self):
        self._processes: List[subprocess.Popen] = []

    def invoke(self, master_file: Path, cmp_file: Path, diff_root: Path, diff_name: str) -> None:
        try:
            with open(diff_root / diff_name, 'w', encoding='utf-8') as out:
                self._processes.append(subprocess.Popen(
                    DIFF_COMMAND + [str(master_file), str(cmp_file)],
                    stdout=out,
                    stderr=subprocess.STDOUT,
                ))
        except OSError as e:
            logger.error(f"Cannot run diff for {diff_name}: {e}")

        shutil.copyfile(master_file, diff_root / f"master_{diff_name}")
        if cmp_file.exists():
            shutil.copyfile(cmp_file, diff_root / f"cmp_{diff_name}")

    def wait(self) -> None:
        for process in self._processes:
            process.wait()
        self._processes = []


class TreeComparator:
    """
    Recursively compares the master tree against the compared tree.

    Files are read one at a time, not to open many descriptors at once.
    """

    def __init__(self, config: DiffConfig, invoker: Optional[DiffInvoker] = None,
                 console: Optional[Console] = None):
        self.config = config
        self.invoker = invoker or DiffInvoker()
        self.console = console or default_console
        self.master_root = Path(config.master_root)
        self.cmp_root = Path(config.cmp_root)
        self.diff_root = Path(config.diff_root)

    def compare_file(self, master_file: Path) -> Optional[FileDifference]:
        """
        Compare one master file with its counterpart.

        Args:
            master_file: File under the master root

        Returns:
            FileDifference, or None if the files have equal heads
        """
        relative_path = master_file.relative_to(self.master_root).as_posix()
        cmp_file = self.cmp_root / relative_path

        master_head = read_head(master_file, self.config.header_bytes)
        cmp_head = read_head(cmp_file, self.config.header_bytes)
        if master_head == cmp_head:
            return None

        # the code checksum comes first, the checksum with comments after it
        size = self.config.comment_free_bytes
        only_comments = master_head[:size] == cmp_head[:size]
        important = (
            not VARS_FILE_RE.search(master_file.name)
            and not master_file.name.endswith(LIB_VERSION_SUFFIX)
            and not only_comments
        )

        return FileDifference(
            relative_path=relative_path,
            diff_name=relative_path.replace('/', '_'),
            only_comments=only_comments,
            dest_missing=len(cmp_head) == 0,
            important=important,
        )

    def report(self, difference: FileDifference) -> None:
        """Print a difference and write its detailed diff."""
        line = f"diff: {difference.diff_name}"
        if difference.only_comments:
            line += " (comments only)"
        if difference.dest_missing:
            line += " (doesnt exist)"
        self.console.print(Text(line))

        self.invoker.invoke(
            self.master_root / difference.relative_path,
            self.cmp_root / difference.relative_path,
            self.diff_root,
            difference.diff_name,
        )

    def run(self) -> DiffSummary:
        """
        Compare both trees.

        Returns:
            DiffSummary with counters and duration
        """
        start = time.monotonic()
        summary = DiffSummary()

        for master_file in walk_files(self.master_root):
            if not is_cpp_source_file(master_file):
                continue
            summary.total_count += 1

            difference = self.compare_file(master_file)
            if difference is None:
                continue

            if difference.important:
                summary.important_diff_count += 1
            else:
                summary.inessential_diff_count += 1

            if difference.important or (difference.only_comments and not self.config.skip_comments):
                self.report(difference)

        self.invoker.wait()
        summary.duration_ms = int((time.monotonic() - start) * 1000)
        logger.debug(f"Compared {summary.total_count} files in {summary.duration_ms} msec")
        return summary

    def print_summary(self, summary: DiffSummary) -> None:
        self.console.print()
        self.console.print(f"finished {summary.total_count} cpp/h files in {summary.duration_ms} msec")
        self.console.print(f"{summary.inessential_diff_count} known differences (vars.cpp, etc)")
        self.console.print(f"{summary.important_diff_count} important differences")
