"""Loading the workflow configuration from JSON or YAML files."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml  # type: ignore[import-untyped]
from pydantic import ValidationError as PydanticValidationError

from taskflow.core.errors.errors import ConfigurationError, ErrorContext
from taskflow.core.errors.models import ConfigurationErrorContext

from .models import WorkflowConfig

logger = logging.getLogger(__name__)

YAML_SUFFIXES = (".yaml", ".yml")


def _config_error(
    message: str,
    config_key: str,
    expected_type: str,
    actual_value: Any,
    operation: str,
    cause: Optional[Exception] = None,
) -> ConfigurationError:
    return ConfigurationError(
        message=message,
        context=ErrorContext.create(
            error_type="ConfigurationError",
            error_location=f"workflow.loader.{operation}",
            component="workflow_loader",
            operation=operation,
        ),
        config_context=ConfigurationErrorContext(
            config_key=config_key,
            config_section="workflow",
            expected_type=expected_type,
            actual_value=str(actual_value),
        ),
        cause=cause,
    )


def workflow_config_from_dict(data: Any) -> WorkflowConfig:
    """Build a WorkflowConfig from already parsed configuration data.

    The workflow may sit at the top level or under a ``workflow`` key.

    Raises:
        ConfigurationError: If the data is not a mapping or fails validation
    """
    if not isinstance(data, dict):
        raise _config_error(
            f"Workflow configuration must be an object, got {type(data).__name__}",
            config_key="workflow",
            expected_type="object",
            actual_value=type(data).__name__,
            operation="from_dict",
        )

    section: Dict[str, Any] = data["workflow"] if "workflow" in data else data
    if not isinstance(section, dict):
        raise _config_error(
            f"'workflow' section must be an object, got {type(section).__name__}",
            config_key="workflow",
            expected_type="object",
            actual_value=type(section).__name__,
            operation="from_dict",
        )

    try:
        return WorkflowConfig.model_validate(section)
    except PydanticValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first["loc"]) or "workflow"
        raise _config_error(
            f"Invalid workflow configuration: {first['msg']} (at {location})",
            config_key=location,
            expected_type=first["type"],
            actual_value=first.get("input", "<missing>"),
            operation="from_dict",
            cause=e,
        ) from e


def read_config_document(config_path: Union[str, Path]) -> Any:
    """Read a JSON or YAML configuration file without interpreting it.

    Args:
        config_path: JSON file, or YAML file with a .yaml/.yml suffix

    Raises:
        ConfigurationError: If the file is missing or unparsable
    """
    path = Path(config_path)
    if not path.is_file():
        logger.error(f"Configuration file not found at '{path}'")
        raise _config_error(
            f"Configuration file not found: {path}",
            config_key="path",
            expected_type="existing file",
            actual_value=path,
            operation="read",
        )

    try:
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix.lower() in YAML_SUFFIXES:
                return yaml.safe_load(f)
            return json.load(f)
    except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
        logger.error(f"Failed to read configuration '{path}': {e}")
        raise _config_error(
            f"Failed to parse configuration {path}: {e}",
            config_key="path",
            expected_type="JSON or YAML document",
            actual_value=path,
            operation="read",
            cause=e,
        ) from e


def load_workflow_config(config_path: Union[str, Path]) -> WorkflowConfig:
    """Load and validate the workflow configuration file.

    Returns:
        The validated WorkflowConfig

    Raises:
        ConfigurationError: If the file is missing, unparsable or invalid
    """
    config = workflow_config_from_dict(read_config_document(config_path))
    logger.info(
        f"Loaded workflow configuration from {config_path}: "
        f"{len(config.status_mapping)} statuses, {len(config.task_types)} task types"
    )
    return config
