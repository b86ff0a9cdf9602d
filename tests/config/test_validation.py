from __future__ import annotations

import pytest

from grove.core.config.defaults import settings_defaults
from grove.core.config.file import FileConfig
from grove.core.config.state import EffectiveConfig
from grove.core.config.validation import (
    ValidationIssue,
    validate_all,
    validate_effective,
    validate_file_config,
    validate_settings,
)
from grove.core.exceptions import ConfigValidationError
from grove.core.utils.merge import deep_merge


def _settings(**sections) -> dict:
    return deep_merge(settings_defaults(), sections)


def test_bundled_defaults_are_valid() -> None:
    assert validate_settings(settings_defaults()) == []
    assert validate_effective(EffectiveConfig()) == []


def test_schema_violations_name_the_field() -> None:
    issues = validate_settings(_settings(general={"output_format": "xml"}, git={"timeout_seconds": 0}))

    fields = {issue.field for issue in issues}
    assert fields == {"general.output_format", "git.timeout_seconds"}


def test_unknown_sections_are_rejected() -> None:
    issues = validate_settings(_settings(colours={"enabled": True}))

    assert [issue.field for issue in issues] == ["<root>"]
    assert "colours" in issues[0].message


def test_min_greater_than_max_is_reported() -> None:
    issues = validate_settings(_settings(retry={"base_delay_seconds": 5, "max_delay_seconds": 1}))

    assert len(issues) == 1
    assert issues[0].field == "retry.base_delay_seconds"
    assert issues[0].value == 5


def test_effective_checks_duration_and_patterns() -> None:
    config = EffectiveConfig(stale_threshold="-1d", preserve_patterns=[".env", "  "])

    issues = validate_effective(config)

    assert {issue.field for issue in issues} == {"stale_threshold", "preserve_patterns[1]"}


def test_blank_hook_commands_are_reported() -> None:
    issues = validate_file_config(FileConfig(hooks_add=["npm install", ""], hooks_create=[" "]))

    assert [issue.field for issue in issues] == ["hooks.add[1]", "hooks.create[0]"]


def test_validate_all_aggregates_every_group() -> None:
    with pytest.raises(ConfigValidationError) as excinfo:
        validate_all(
            settings=_settings(retry={"max_attempts": 0}, logging={"level": "loud"}),
            effective=EffectiveConfig(stale_threshold="soon"),
            file_config=FileConfig(hooks_create=[""]),
        )

    fields = {issue.field for issue in excinfo.value.issues}
    assert fields == {"retry.max_attempts", "logging.level", "stale_threshold", "hooks.create[0]"}
    message = str(excinfo.value)
    assert message.startswith("configuration validation failed:")
    assert message.count("config validation error for field") == 4


def test_validate_all_passes_silently() -> None:
    validate_all(settings=settings_defaults(), effective=EffectiveConfig(), file_config=FileConfig())


def test_issue_rendering() -> None:
    issue = ValidationIssue("git.timeout_seconds", -1, "must be positive")

    assert str(issue) == "config validation error for field 'git.timeout_seconds': must be positive (value: -1)"
    assert issue.to_dict() == {"field": "git.timeout_seconds", "value": -1, "message": "must be positive"}


def test_error_context_is_json_ready() -> None:
    error = ConfigValidationError([ValidationIssue("a", 1, "bad")])

    payload = error.to_json_error()

    assert payload["code"] == "ConfigValidationError"
    assert payload["context"]["issues"] == [{"field": "a", "value": 1, "message": "bad"}]
