"""Project status -- which context documents exist and what comes next."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from mcp_devkit.config import get_settings

logger = logging.getLogger("mcp_devkit.status")

# key -> (display name, file name inside the metadata directory)
CONTEXT_FILES: dict[str, tuple[str, str]] = {
    "prd": ("Requirements (PRD)", "context_prd.md"),
    "architecture": ("Architecture", "context_architecture.md"),
    "tasklist": ("Task List", "context_tasklist.md"),
    "metadata": ("Metadata", "metadata.json"),
}


@dataclass
class ProjectStatus:
    """Snapshot of a project's context documents."""

    has_project: bool
    project_path: str
    phase: str
    progress: str
    next_steps: list[str]
    files: dict[str, bool] = field(default_factory=dict)
    last_updated: str | None = None
    current_task: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def check_project_status(directory: str | Path = ".") -> ProjectStatus:
    """Inspect *directory* for an initialized project."""
    project_path = Path(directory).resolve()
    mcp_dir = get_settings().mcp_devkit_dir
    mcp_path = project_path / mcp_dir

    if not mcp_path.is_dir():
        return ProjectStatus(
            has_project=False,
            project_path=str(project_path),
            phase="none",
            progress="0%",
            next_steps=["Run `mcp-devkit init` to initialize project"],
            files={key: False for key in CONTEXT_FILES},
        )

    files = {key: (mcp_path / name).is_file() for key, (_, name) in CONTEXT_FILES.items()}
    metadata = _read_metadata(mcp_path / "metadata.json") if files["metadata"] else {}
    last_updated = metadata.get("lastModified") or metadata.get("lastUpdated") or metadata.get(
        "created"
    )

    progress = f"{round(sum(files.values()) / len(files) * 100)}%"
    phase, current_task, next_steps = _phase_and_next_steps(files, metadata, mcp_dir)

    return ProjectStatus(
        has_project=True,
        project_path=str(project_path),
        phase=phase,
        progress=progress,
        next_steps=next_steps,
        files=files,
        last_updated=last_updated,
        current_task=current_task,
    )


def render_status(status: ProjectStatus, verbose: bool = False) -> str:
    lines = ["Project Status Report", ""]

    if not status.has_project:
        lines += ["No mcp-devkit project found", f"  Checked: {status.project_path}"]
        lines += ["", "Next Steps:"]
        lines += [f"  {i}. {step}" for i, step in enumerate(status.next_steps, 1)]
        return "\n".join(lines)

    lines += [
        f"Project: {Path(status.project_path).name}",
        f"Phase: {status.phase}",
        f"Progress: {status.progress}",
    ]
    if status.last_updated:
        lines.append(f"Last Updated: {status.last_updated}")
    if status.current_task:
        lines += ["", f"Current Task: {status.current_task}"]

    mcp_dir = get_settings().mcp_devkit_dir
    lines += ["", "Project Files:"]
    for key, (label, name) in CONTEXT_FILES.items():
        present = status.files.get(key, False)
        mark = "✓" if present else "✗"
        lines.append(f"  {mark} {label}: {'Complete' if present else 'Pending'}")
        if verbose:
            lines.append(f"     {mcp_dir}/{name}")

    lines += ["", "Next Steps:"]
    lines += [f"  {i}. {step}" for i, step in enumerate(status.next_steps, 1)]
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _read_metadata(path: Path) -> dict[str, Any]:
    """Load metadata.json; unreadable or malformed metadata counts as empty."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        logger.warning(f"Ignoring unreadable metadata {path}: {e}")
        return {}
    return data if isinstance(data, dict) else {}


def _phase_and_next_steps(
    files: dict[str, bool], metadata: dict[str, Any], mcp_dir: str
) -> tuple[str, str, list[str]]:
    if not files["prd"]:
        return (
            "initialization",
            "Complete project requirements",
            [
                f"Edit {mcp_dir}/context_prd.md to define project requirements",
                "Specify the problem your project solves",
                "Define target audience and key features",
            ],
        )
    if not files["architecture"]:
        return (
            "planning",
            "Design system architecture",
            [
                f"Edit {mcp_dir}/context_architecture.md to define system design",
                "Choose technology stack",
                "Plan component structure and data flow",
            ],
        )
    if not files["tasklist"]:
        return (
            "planning",
            "Break down development tasks",
            [
                f"Edit {mcp_dir}/context_tasklist.md to create task breakdown",
                "Prioritize features by importance",
                "Estimate time for each development phase",
            ],
        )
    return (
        metadata.get("phase") or "implementation",
        metadata.get("currentTask") or "Begin implementation",
        [
            "Start implementing core features",
            f"Follow the development plan in {mcp_dir}/context_tasklist.md",
            "Run `mcp-devkit validate` to check the context documents",
        ],
    )
