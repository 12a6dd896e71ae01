"""Tests for mcp_devkit.status -- project detection, progress, next steps."""

from __future__ import annotations

import json
import logging

from mcp_devkit.status import check_project_status, render_status

PRD = ".mcp/context_prd.md"
ARCH = ".mcp/context_architecture.md"
TASKS = ".mcp/context_tasklist.md"
META = ".mcp/metadata.json"


class TestCheckProjectStatus:
    def test_no_project(self, tmp_path):
        status = check_project_status(tmp_path)
        assert status.has_project is False
        assert status.phase == "none"
        assert status.progress == "0%"
        assert status.next_steps == ["Run `mcp-devkit init` to initialize project"]
        assert not any(status.files.values())

    def test_defaults_to_cwd(self, project):
        project({PRD: "# PRD\n"})
        status = check_project_status()
        assert status.has_project is True
        assert status.files["prd"] is True

    def test_initialization_phase(self, project):
        root = project({META: json.dumps({"created": "2026-01-01"})})
        status = check_project_status(root)
        assert status.phase == "initialization"
        assert status.progress == "25%"
        assert status.last_updated == "2026-01-01"
        assert "context_prd.md" in status.next_steps[0]

    def test_planning_phases(self, project):
        root = project({PRD: "x"})
        status = check_project_status(root)
        assert status.phase == "planning"
        assert status.current_task == "Design system architecture"

        project({ARCH: "x"})
        status = check_project_status(root)
        assert status.phase == "planning"
        assert status.current_task == "Break down development tasks"
        assert status.progress == "50%"

    def test_complete_project_uses_metadata(self, project):
        meta = {"phase": "testing", "currentTask": "Write e2e tests", "lastModified": "today"}
        root = project({PRD: "x", ARCH: "x", TASKS: "x", META: json.dumps(meta)})
        status = check_project_status(root)
        assert status.progress == "100%"
        assert status.phase == "testing"
        assert status.current_task == "Write e2e tests"
        assert status.last_updated == "today"

    def test_complete_project_without_metadata(self, project):
        root = project({PRD: "x", ARCH: "x", TASKS: "x"})
        status = check_project_status(root)
        assert status.progress == "75%"
        assert status.phase == "implementation"
        assert status.current_task == "Begin implementation"

    def test_malformed_metadata_logged_and_ignored(self, project, caplog):
        root = project({PRD: "x", ARCH: "x", TASKS: "x", META: "{not json"})
        with caplog.at_level(logging.WARNING, logger="mcp_devkit.status"):
            status = check_project_status(root)
        assert status.phase == "implementation"
        assert "Ignoring unreadable metadata" in caplog.text

    def test_to_dict(self, tmp_path):
        data = check_project_status(tmp_path).to_dict()
        assert data["has_project"] is False
        assert set(data["files"]) == {"prd", "architecture", "tasklist", "metadata"}


class TestRenderStatus:
    def test_no_project(self, tmp_path):
        output = render_status(check_project_status(tmp_path))
        assert "No mcp-devkit project found" in output
        assert "1. Run `mcp-devkit init` to initialize project" in output

    def test_project(self, project):
        root = project({PRD: "x"})
        output = render_status(check_project_status(root))
        assert "Phase: planning" in output
        assert "✓ Requirements (PRD): Complete" in output
        assert "✗ Architecture: Pending" in output
        assert ".mcp/context_prd.md" not in output.split("Next Steps:")[0]

    def test_verbose_shows_paths(self, project):
        root = project({PRD: "x"})
        output = render_status(check_project_status(root), verbose=True)
        assert "     .mcp/context_prd.md" in output
