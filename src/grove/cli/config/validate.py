"""
Grove config validate command.

SUMMARY: Validate settings and project configuration

Checks the user settings file against its schema, the resolved project
settings, and the hook entries in .grove.yaml. Every problem is reported
in one pass.
"""

from __future__ import annotations

import argparse
from typing import List, Optional

from grove.cli import OutputFormatter, add_directory_flag, add_json_flag, get_directory, load_state
from grove.core.config import FileConfig, FileConfigStore, UserSettings, ValidationIssue, validate_all
from grove.core.exceptions import ConfigParseError, ConfigValidationError

SUMMARY = "Validate settings and project configuration"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_directory_flag(parser)
    add_json_flag(parser)


def _parse_issue(exc: ConfigParseError) -> ValidationIssue:
    return ValidationIssue(exc.field or str(exc.path), None, exc.reason)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    directory = get_directory(args)
    issues: List[ValidationIssue] = []

    try:
        settings = UserSettings.load()
    except ConfigParseError as e:
        issues.append(_parse_issue(e))
        settings = UserSettings()

    settings_issues = settings.issues()
    issues.extend(settings_issues)
    if settings_issues:
        # Invalid values cannot drive the git store; resolve with defaults.
        settings = UserSettings()

    file_config: Optional[FileConfig]
    try:
        file_config = FileConfigStore().load(directory)
    except ConfigParseError as e:
        issues.append(_parse_issue(e))
        file_config = None

    state, _ = load_state(args, settings)

    try:
        validate_all(effective=state.config, file_config=file_config)
    except ConfigValidationError as e:
        issues.extend(e.issues)

    if issues:
        formatter.error(
            ConfigValidationError(issues),
            error_code="invalid_config",
            data={"issues": [issue.to_dict() for issue in issues]},
        )
        return 1

    formatter.success({"valid": True, "directory": str(directory)}, "Configuration is valid")
    return 0
