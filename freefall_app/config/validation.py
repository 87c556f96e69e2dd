"""Configuration validation utilities."""

from dataclasses import dataclass, fields
from typing import Any

from .defaults import SECTION_TYPES

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_non_empty_str(value: Any) -> bool:
    return isinstance(value, str) and value.strip() != ""


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_physics_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate physics parameters."""
        errors = []

        if "gravity" in params:
            value = params["gravity"]
            if not _is_number(value) or value <= 0:
                errors.append(ValidationError(
                    field="gravity",
                    message="Must be a positive number",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_timer_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate run timer parameters."""
        errors = []

        if "sample_interval_ms" in params:
            value = params["sample_interval_ms"]
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                errors.append(ValidationError(
                    field="sample_interval_ms",
                    message="Must be a positive integer",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_history_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate history parameters."""
        errors = []

        for name in ("slot_key", "default_name"):
            if name in params and not _is_non_empty_str(params[name]):
                errors.append(ValidationError(
                    field=name,
                    message="Must be a non-empty string",
                    value=params[name]
                ))

        return errors

    @staticmethod
    def validate_storage_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate storage parameters."""
        errors = []

        if "db_path" in params and not _is_non_empty_str(params["db_path"]):
            errors.append(ValidationError(
                field="db_path",
                message="Must be a non-empty string",
                value=params["db_path"]
            ))

        return errors

    @staticmethod
    def validate_chart_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate chart curve parameters."""
        errors = []

        if "duration_s" in params:
            value = params["duration_s"]
            if not _is_number(value) or value < 0:
                errors.append(ValidationError(
                    field="duration_s",
                    message="Must be a non-negative number",
                    value=value
                ))

        if "step_s" in params:
            value = params["step_s"]
            if not _is_number(value) or value <= 0:
                errors.append(ValidationError(
                    field="step_s",
                    message="Must be a positive number",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_logging_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate logging parameters."""
        errors = []

        if "level" in params:
            value = params["level"]
            if not isinstance(value, str) or value.upper() not in LOG_LEVELS:
                errors.append(ValidationError(
                    field="level",
                    message=f"Must be one of {', '.join(LOG_LEVELS)}",
                    value=value
                ))

        if "format_json" in params:
            value = params["format_json"]
            if not isinstance(value, bool):
                errors.append(ValidationError(
                    field="format_json",
                    message="Must be a boolean",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_structure(config: dict[str, Any]) -> list[ValidationError]:
        """Reject sections and parameters that AppConfig does not define."""
        errors = []
        for section, params in config.items():
            if section not in SECTION_TYPES:
                errors.append(ValidationError(
                    field=section,
                    message="Unknown configuration section",
                    value=params
                ))
                continue

            if not isinstance(params, dict):
                errors.append(ValidationError(
                    field=section,
                    message="Must be a mapping",
                    value=params
                ))
                continue

            known = {f.name for f in fields(SECTION_TYPES[section])}
            for name in params:
                if name not in known:
                    errors.append(ValidationError(
                        field=f"{section}.{name}",
                        message="Unknown parameter",
                        value=params[name]
                    ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = ConfigValidator.validate_structure(config)
        if errors:
            return errors

        if "physics" in config:
            errors.extend(ConfigValidator.validate_physics_params(config["physics"]))

        if "timer" in config:
            errors.extend(ConfigValidator.validate_timer_params(config["timer"]))

        if "history" in config:
            errors.extend(ConfigValidator.validate_history_params(config["history"]))

        if "storage" in config:
            errors.extend(ConfigValidator.validate_storage_params(config["storage"]))

        if "chart" in config:
            errors.extend(ConfigValidator.validate_chart_params(config["chart"]))

        if "logging" in config:
            errors.extend(ConfigValidator.validate_logging_params(config["logging"]))

        return errors
