"""File discovery and content reads for validation runs."""

from __future__ import annotations

import asyncio
import glob
import logging
from collections.abc import Iterable
from fnmatch import fnmatch
from pathlib import Path

logger = logging.getLogger("mcp_devkit.validation.discovery")


def is_excluded(relative_path: str, patterns: Iterable[str]) -> bool:
    """Match a root-relative POSIX path against glob-style exclude patterns.

    A leading ``**/`` also matches at the root, so ``**/drafts/*`` excludes
    ``drafts/a.md`` as well as ``docs/drafts/a.md``.
    """
    for pattern in patterns:
        if fnmatch(relative_path, pattern):
            return True
        if pattern.startswith("**/") and fnmatch(relative_path, pattern[3:]):
            return True
    return False


def resolve_files(
    pattern: str, project_root: str | Path, exclude: Iterable[str] = ()
) -> list[Path]:
    """Resolve *pattern* to a sorted list of absolute file paths.

    Relative patterns are anchored at *project_root*; ``**`` recurses.
    Directories are dropped.
    """
    root = Path(project_root).resolve()
    exclude = list(exclude)
    if not Path(pattern).is_absolute():
        pattern = str(Path(glob.escape(str(root))) / pattern)

    files: list[Path] = []
    for match in sorted(glob.glob(pattern, recursive=True)):
        path = Path(match)
        if not path.is_file():
            continue
        try:
            relative = path.resolve().relative_to(root).as_posix()
        except ValueError:
            relative = path.as_posix()
        if exclude and is_excluded(relative, exclude):
            logger.debug(f"Excluded from validation: {relative}")
            continue
        files.append(path.resolve())
    return files


async def read_text(path: str | Path) -> str:
    """Read a UTF-8 file without blocking the event loop.

    Undecodable bytes become U+FFFD so one bad file cannot abort a run.
    ``FileNotFoundError`` and ``PermissionError`` propagate to the caller.
    """
    return await asyncio.to_thread(Path(path).read_text, encoding="utf-8", errors="replace")
