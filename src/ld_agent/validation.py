"""
Structural validation of plugin metadata and exports.

Raw ``module_info`` and ``module_exports`` values are run through the pydantic
models in :mod:`ld_agent.interfaces`, which fill in every optional field.
"""

from typing import Any

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ld_agent.errors import ValidationError
from ld_agent.interfaces import ModuleExports, ModuleInfo
import logging

logger = logging.getLogger(__name__)


def _first_violation(section: str, exc: PydanticValidationError) -> ValidationError:
    """Build a ValidationError describing the first reported violation."""
    errors = exc.errors()
    if not errors:
        return ValidationError(f"{section}: invalid value", section)

    first = errors[0]
    location = ".".join(str(part) for part in (section, *first["loc"]))
    return ValidationError(f"{location}: {first['msg']}", location)


def _validate(model: type[BaseModel], section: str, raw: Any) -> Any:
    try:
        return model.model_validate(raw)
    except PydanticValidationError as e:
        error = _first_violation(section, e)
        logger.debug(f"Validation failed for {section}: {error}")
        raise error from e


def validate_module_info(raw: Any) -> ModuleInfo:
    """Validate and default-fill plugin metadata.

    Args:
        raw: Mapping or ModuleInfo instance declared by the plugin

    Returns:
        Fully populated ModuleInfo

    Raises:
        ValidationError: On the first structural violation
    """
    return _validate(ModuleInfo, "module_info", raw)


def validate_module_exports(raw: Any) -> ModuleExports:
    """Validate and default-fill plugin exports.

    Args:
        raw: Mapping or ModuleExports instance declared by the plugin

    Returns:
        Fully populated ModuleExports

    Raises:
        ValidationError: On the first structural violation
    """
    return _validate(ModuleExports, "module_exports", raw)


class SchemaValidator:
    """Validator for the two records every plugin declares."""

    def validate(self, raw_info: Any, raw_exports: Any) -> tuple[ModuleInfo, ModuleExports]:
        """Validate metadata then exports; nothing is returned on failure."""
        info = validate_module_info(raw_info)
        exports = validate_module_exports(raw_exports)
        return info, exports
