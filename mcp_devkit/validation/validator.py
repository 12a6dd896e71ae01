"""Validator -- runs registered rules over project files.

Files are validated concurrently on one event loop, at most
``MAX_CONCURRENCY`` at a time (one when ``parallel`` is off). Rules for a
single file run sequentially in registry order, and reports come back in
file-discovery order regardless of completion order.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import os
import re
import time
from collections.abc import Sequence
from pathlib import Path

from mcp_devkit.config import get_settings
from mcp_devkit.types.validation import (
    ValidationContext,
    ValidationIssue,
    ValidationReport,
    ValidationRule,
    ValidationSeverity,
    ValidationSummary,
)
from mcp_devkit.validation.discovery import read_text, resolve_files
from mcp_devkit.validation.options import ValidationOptions
from mcp_devkit.validation.registry import ValidatorRegistry, validator_registry

logger = logging.getLogger("mcp_devkit.validation")

MAX_CONCURRENCY = 5


def rule_matches(rule_name: str, qualified_name: str, patterns: Sequence[str]) -> bool:
    """Whether a rule is selected by any allow-list pattern.

    A pattern selects a rule when it equals the bare name or the qualified
    ``plugin/rule`` key, when the key ends with ``/<pattern>``, or when it
    contains ``*`` and, read as a wildcard, occurs anywhere in the bare name.
    """
    for pattern in patterns:
        if pattern in (rule_name, qualified_name) or qualified_name.endswith(f"/{pattern}"):
            return True
        if "*" in pattern:
            regex = ".*".join(re.escape(part) for part in pattern.split("*"))
            if re.search(regex, rule_name):
                return True
    return False


def relative_path(file_path: Path, project_root: str | Path) -> str:
    root = Path(project_root).resolve()
    try:
        return file_path.resolve().relative_to(root).as_posix()
    except ValueError:
        return Path(os.path.relpath(file_path, root)).as_posix()


class Validator:
    """Validates files against the rules of a registry.

    The options snapshot is fixed at construction; the registry is only
    read, never modified, during a run.
    """

    def __init__(
        self,
        options: ValidationOptions | None = None,
        registry: ValidatorRegistry | None = None,
    ) -> None:
        self.options = options or ValidationOptions()
        self.registry = registry if registry is not None else validator_registry
        self._warned_no_rules = False

    def selected_rules(self) -> list[ValidationRule]:
        """Rules to run, in registry order, after the ``rules`` allow-list."""
        patterns = self.options.rules
        if not patterns:
            return self.registry.get_all_rules()
        selected = [
            rule
            for key, rule in self.registry.items()
            if rule_matches(rule.name, key, patterns)
        ]
        if not selected and not self._warned_no_rules:
            self._warned_no_rules = True
            logger.warning(
                f"No registered rules match {', '.join(patterns)}; "
                f"available: {', '.join(self.registry.get_all_rule_names()) or 'none'}"
            )
        return selected

    async def validate_file(
        self, file_path: str | Path, project_root: str | Path
    ) -> ValidationReport:
        """Run every selected rule over one file.

        Relative paths are taken relative to *project_root*. Read errors
        propagate; a failing rule becomes an error issue instead.
        """
        start = time.monotonic()
        path = Path(file_path)
        if not path.is_absolute():
            path = Path(project_root) / path

        content = await read_text(path)
        context = ValidationContext(
            file_path=str(path),
            project_root=str(project_root),
            content=content,
            options=self.options.model_dump(),
        )

        issues: list[ValidationIssue] = []
        for rule in self.selected_rules():
            issues.extend(await self._run_rule(rule, context))

        has_errors = any(i.severity == ValidationSeverity.ERROR for i in issues)
        elapsed_ms = (time.monotonic() - start) * 1000
        return ValidationReport(
            file_path=relative_path(path, project_root),
            valid=not has_errors and (not self.options.strict or not issues),
            issues=tuple(issues),
            execution_time=elapsed_ms,
        )

    async def validate_files(
        self, pattern: str, project_root: str | Path
    ) -> ValidationSummary:
        """Validate every file matching *pattern* under *project_root*.

        Raises ``FileNotFoundError`` when *project_root* is not a directory.
        A pattern matching nothing gives an empty summary.
        """
        if not Path(project_root).is_dir():
            raise FileNotFoundError(f"Project root does not exist: {project_root}")

        start = time.monotonic()
        files = await asyncio.to_thread(
            resolve_files, pattern, project_root, self.options.exclude
        )
        if not files:
            logger.warning(f"No files found matching pattern: {pattern}")
            return ValidationSummary.empty()

        limit = asyncio.Semaphore(MAX_CONCURRENCY if self.options.parallel else 1)

        async def _bounded(path: Path) -> ValidationReport:
            async with limit:
                return await self.validate_file(path, project_root)

        logger.debug(f"Validating {len(files)} file(s) matching {pattern}")
        # gather keeps input order, so reports follow discovery order
        reports = await asyncio.gather(*(_bounded(path) for path in files))

        elapsed_ms = (time.monotonic() - start) * 1000
        return ValidationSummary.from_reports(reports, execution_time=elapsed_ms)

    async def validate_project(self, project_root: str | Path) -> ValidationSummary:
        """Validate all markdown documents under the project's ``.mcp`` dir."""
        pattern = f"{get_settings().mcp_devkit_dir}/**/*.md"
        return await self.validate_files(pattern, project_root)

    async def _run_rule(
        self, rule: ValidationRule, context: ValidationContext
    ) -> list[ValidationIssue]:
        timeout = self.options.rule_timeout
        try:
            result = rule.validate(context)
            if inspect.isawaitable(result):
                task = asyncio.ensure_future(result)
                done, _ = await asyncio.wait({task}, timeout=timeout)
                if not done:
                    task.cancel()
                    logger.warning(
                        "Rule %s timed out after %ss on %s",
                        rule.name,
                        timeout,
                        context.file_path,
                    )
                    return [
                        ValidationIssue(
                            severity=ValidationSeverity.ERROR,
                            message=f"Rule {rule.name} timed out after {timeout}s",
                            rule=rule.name,
                        )
                    ]
                result = task.result()
            return list(result.issues)
        except Exception as exc:
            logger.exception("Error running rule %s on %s", rule.name, context.file_path)
            return [
                ValidationIssue(
                    severity=ValidationSeverity.ERROR,
                    message=f"Rule {rule.name} failed: {exc}",
                    rule=rule.name,
                )
            ]


def run_validation(
    project_root: str | Path,
    options: ValidationOptions | None = None,
    registry: ValidatorRegistry | None = None,
    pattern: str | None = None,
) -> ValidationSummary:
    """Validate the project at *project_root* and return the summary.

    Synchronous entry point shared by the CLI and other callers. Without
    *pattern*, every markdown file under the metadata directory is checked.
    Raises ``FileNotFoundError`` when *project_root* does not exist.
    """
    validator = Validator(options=options, registry=registry)
    if pattern is None:
        return asyncio.run(validator.validate_project(project_root))
    return asyncio.run(validator.validate_files(pattern, project_root))
