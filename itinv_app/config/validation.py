"""Configuration validation utilities."""

import math
from dataclasses import dataclass, fields
from typing import Any

from .defaults import BudgetDefaults, IdentityParams, LoggingParams, ReportingParams

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

CONFIG_SECTIONS = {
    "budgets": BudgetDefaults,
    "reporting": ReportingParams,
    "identity": IdentityParams,
    "logging": LoggingParams,
}


@dataclass(frozen=True)
class ConfigIssue:
    """Represents a configuration validation problem."""
    field: str
    message: str
    value: Any


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_budget_defaults(params: dict[str, Any]) -> list[ConfigIssue]:
        """Validate default category budgets."""
        issues = []

        for field in ("device_category", "repair_category"):
            if field in params:
                value = params[field]
                if not _is_number(value) or value < 0:
                    issues.append(ConfigIssue(
                        field=f"budgets.{field}",
                        message="Must be a finite non-negative number",
                        value=value
                    ))

        return issues

    @staticmethod
    def validate_reporting_params(params: dict[str, Any]) -> list[ConfigIssue]:
        """Validate reporting parameters."""
        issues = []

        if "warranty_window_months" in params:
            value = params["warranty_window_months"]
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                issues.append(ConfigIssue(
                    field="reporting.warranty_window_months",
                    message="Must be a positive integer",
                    value=value
                ))

        for field in ("budget_warning_pct", "budget_critical_pct"):
            if field in params:
                value = params[field]
                if not _is_number(value) or value <= 0:
                    issues.append(ConfigIssue(
                        field=f"reporting.{field}",
                        message="Must be a positive number",
                        value=value
                    ))

        warning = params.get("budget_warning_pct")
        critical = params.get("budget_critical_pct")
        if _is_number(warning) and _is_number(critical) and warning > critical:
            issues.append(ConfigIssue(
                field="reporting.budget_warning_pct",
                message="Must not exceed budget_critical_pct",
                value=warning
            ))

        bounds = [params.get(f) for f in ("age_new_years", "age_mid_years", "age_old_years")]
        if all(b is not None for b in bounds):
            if not all(_is_number(b) and b > 0 for b in bounds):
                issues.append(ConfigIssue(
                    field="reporting.age_buckets",
                    message="Age bounds must be positive numbers",
                    value=bounds
                ))
            elif not bounds[0] < bounds[1] < bounds[2]:
                issues.append(ConfigIssue(
                    field="reporting.age_buckets",
                    message="Age bounds must be strictly increasing",
                    value=bounds
                ))

        return issues

    @staticmethod
    def validate_identity_params(params: dict[str, Any]) -> list[ConfigIssue]:
        """Validate id prefixes."""
        issues = []

        for field in ("device_prefix", "repair_prefix"):
            if field in params:
                value = params[field]
                if not isinstance(value, str) or not value.strip():
                    issues.append(ConfigIssue(
                        field=f"identity.{field}",
                        message="Must be a non-empty string",
                        value=value
                    ))

        if params.get("device_prefix") is not None and \
                params.get("device_prefix") == params.get("repair_prefix"):
            issues.append(ConfigIssue(
                field="identity.repair_prefix",
                message="Device and repair prefixes must differ",
                value=params.get("repair_prefix")
            ))

        return issues

    @staticmethod
    def validate_logging_params(params: dict[str, Any]) -> list[ConfigIssue]:
        """Validate logging parameters."""
        issues = []

        level = params.get("level")
        if level is not None and (not isinstance(level, str) or level.upper() not in VALID_LOG_LEVELS):
            issues.append(ConfigIssue(
                field="logging.level",
                message=f"Must be one of {', '.join(VALID_LOG_LEVELS)}",
                value=level
            ))

        if "format_json" in params and not isinstance(params["format_json"], bool):
            issues.append(ConfigIssue(
                field="logging.format_json",
                message="Must be a boolean",
                value=params["format_json"]
            ))

        return issues

    @staticmethod
    def validate_known_keys(config: dict[str, Any]) -> list[ConfigIssue]:
        """Report sections and keys that no configuration dataclass declares."""
        issues = []

        for section, params in config.items():
            params_cls = CONFIG_SECTIONS.get(section)
            if params_cls is None:
                issues.append(ConfigIssue(
                    field=str(section),
                    message="Unknown configuration section",
                    value=params
                ))
                continue

            if not isinstance(params, dict):
                issues.append(ConfigIssue(
                    field=section,
                    message="Must be a mapping",
                    value=params
                ))
                continue

            known = {f.name for f in fields(params_cls)}
            for key in params:
                if key not in known:
                    issues.append(ConfigIssue(
                        field=f"{section}.{key}",
                        message="Unknown configuration key",
                        value=params[key]
                    ))

        return issues

    @classmethod
    def validate_config(cls, config: dict[str, Any]) -> list[ConfigIssue]:
        """Validate a complete merged configuration."""
        issues = cls.validate_known_keys(config)

        section_validators = {
            "budgets": cls.validate_budget_defaults,
            "reporting": cls.validate_reporting_params,
            "identity": cls.validate_identity_params,
            "logging": cls.validate_logging_params,
        }
        for section, validate in section_validators.items():
            if isinstance(config.get(section), dict):
                issues.extend(validate(config[section]))

        return issues
