"""Validation of settings and project configuration.

Each ``validate_*`` function returns a list of ``ValidationIssue`` so callers
can collect problems from several groups before reporting. ``validate_all``
does that and raises one ``ConfigValidationError`` listing everything.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional

from jsonschema import Draft202012Validator

from grove.core.config.file import FileConfig
from grove.core.config.state import EffectiveConfig
from grove.core.exceptions import ConfigValidationError
from grove.core.utils.duration import parse_duration
from grove.data import read_yaml

SETTINGS_SCHEMA = "settings.schema.yaml"


@dataclass(frozen=True)
class ValidationIssue:
    field: str
    value: Any
    message: str

    def __str__(self) -> str:
        return f"config validation error for field '{self.field}': {self.message} (value: {self.value!r})"

    def to_dict(self) -> Dict[str, Any]:
        return {"field": self.field, "value": self.value, "message": self.message}


def _settings_validator() -> Draft202012Validator:
    return Draft202012Validator(read_yaml("schemas", SETTINGS_SCHEMA))


def validate_settings(settings: Mapping[str, Any]) -> List[ValidationIssue]:
    """Check merged tool settings against the bundled schema and semantic rules."""
    issues: List[ValidationIssue] = []
    validator = _settings_validator()
    for error in sorted(validator.iter_errors(dict(settings)), key=lambda e: [str(p) for p in e.absolute_path]):
        path = ".".join(str(part) for part in error.absolute_path) or "<root>"
        issues.append(ValidationIssue(path, error.instance, error.message))

    retry = settings.get("retry")
    if isinstance(retry, Mapping):
        base = retry.get("base_delay_seconds")
        ceiling = retry.get("max_delay_seconds")
        numeric = (int, float)
        if (
            isinstance(base, numeric)
            and isinstance(ceiling, numeric)
            and not isinstance(base, bool)
            and not isinstance(ceiling, bool)
            and base > ceiling
        ):
            issues.append(
                ValidationIssue(
                    "retry.base_delay_seconds",
                    base,
                    f"must not exceed retry.max_delay_seconds ({ceiling})",
                )
            )
    return issues


def _pattern_issues(name: str, patterns: Iterable[Any]) -> List[ValidationIssue]:
    issues: List[ValidationIssue] = []
    for index, pattern in enumerate(patterns):
        if not isinstance(pattern, str) or not pattern.strip():
            issues.append(ValidationIssue(f"{name}[{index}]", pattern, "must be a non-empty string"))
    return issues


def validate_effective(config: EffectiveConfig) -> List[ValidationIssue]:
    """Check resolved project settings."""
    issues: List[ValidationIssue] = []
    try:
        parse_duration(config.stale_threshold)
    except ValueError as exc:
        issues.append(ValidationIssue("stale_threshold", config.stale_threshold, str(exc)))

    issues.extend(_pattern_issues("preserve_patterns", config.preserve_patterns))
    issues.extend(_pattern_issues("preserve_exclude_patterns", config.preserve_exclude_patterns))
    issues.extend(_pattern_issues("autolock_patterns", config.autolock_patterns))
    return issues


def validate_file_config(cfg: FileConfig) -> List[ValidationIssue]:
    """Check hook commands declared in ``.grove.yaml``."""
    issues: List[ValidationIssue] = []
    for name, commands in (("hooks.add", cfg.hooks_add), ("hooks.create", cfg.hooks_create)):
        for index, command in enumerate(commands):
            if not command.strip():
                issues.append(ValidationIssue(f"{name}[{index}]", command, "hook command must not be blank"))
    return issues


def validate_all(
    *,
    settings: Optional[Mapping[str, Any]] = None,
    effective: Optional[EffectiveConfig] = None,
    file_config: Optional[FileConfig] = None,
) -> None:
    """Run every requested group and raise once with all issues.

    Raises:
        ConfigValidationError: When any group reports an issue.
    """
    issues: List[ValidationIssue] = []
    if settings is not None:
        issues.extend(validate_settings(settings))
    if effective is not None:
        issues.extend(validate_effective(effective))
    if file_config is not None:
        issues.extend(validate_file_config(file_config))
    if issues:
        raise ConfigValidationError(issues)


__all__ = [
    "ValidationIssue",
    "validate_settings",
    "validate_effective",
    "validate_file_config",
    "validate_all",
]
