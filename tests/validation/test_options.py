"""Tests for ValidationOptions and the project options file."""

from __future__ import annotations

import pydantic
import pytest

from mcp_devkit.validation.options import ConfigError, ValidationOptions, load_project_options


class TestValidationOptions:
    def test_defaults(self):
        options = ValidationOptions()
        assert options.strict is False
        assert options.rules is None
        assert options.exclude == []
        assert options.parallel is True
        assert options.fix is False
        assert options.rule_timeout is None

    def test_frozen(self):
        options = ValidationOptions()
        with pytest.raises(pydantic.ValidationError):
            options.strict = True

    def test_unknown_key_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            ValidationOptions(verbose=True)

    def test_merged_ignores_none(self):
        base = ValidationOptions(strict=True, rules=["markdown"])
        merged = base.merged(strict=None, parallel=False, rules=None)
        assert merged.strict is True
        assert merged.rules == ["markdown"]
        assert merged.parallel is False
        assert base.parallel is True


class TestLoadProjectOptions:
    def test_absent_file_gives_defaults(self, tmp_path):
        assert load_project_options(tmp_path) == ValidationOptions()

    def test_reads_yaml(self, project):
        root = project(
            {".mcp/validation.yaml": "strict: true\nrules: [markdown]\nexclude: ['**/drafts/*']\n"}
        )
        options = load_project_options(root)
        assert options.strict is True
        assert options.rules == ["markdown"]
        assert options.exclude == ["**/drafts/*"]

    def test_custom_dir(self, project):
        root = project({"context/validation.yaml": "parallel: false\n"})
        assert load_project_options(root, mcp_dir="context").parallel is False

    def test_empty_file(self, project):
        root = project({".mcp/validation.yaml": ""})
        assert load_project_options(root) == ValidationOptions()

    def test_invalid_yaml(self, project):
        root = project({".mcp/validation.yaml": "strict: [unclosed\n"})
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_project_options(root)

    def test_non_mapping(self, project):
        root = project({".mcp/validation.yaml": "- a\n- b\n"})
        with pytest.raises(ConfigError, match="must contain a mapping"):
            load_project_options(root)

    def test_unknown_key(self, project):
        root = project({".mcp/validation.yaml": "colour: blue\n"})
        with pytest.raises(ConfigError, match="Invalid validation options"):
            load_project_options(root)
