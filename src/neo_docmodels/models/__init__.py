"""Document models: schema declaration, validation, filters and persistence."""

from .schema import (
    SchemaProvider,
    ModelSchema,
    Rule,
    check_rule,
    VALIDATOR_KINDS,
    FILTER_KINDS,
)
from .validators import ValidatorRegistry, validate_field
from .filters import strip_tags, to_number, is_numeric, is_float
from .base import BaseModel, ModelState

__all__ = [
    "SchemaProvider",
    "ModelSchema",
    "Rule",
    "check_rule",
    "VALIDATOR_KINDS",
    "FILTER_KINDS",
    "ValidatorRegistry",
    "validate_field",
    "strip_tags",
    "to_number",
    "is_numeric",
    "is_float",
    "BaseModel",
    "ModelState",
]
