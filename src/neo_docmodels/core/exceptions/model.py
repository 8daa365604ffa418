"""Model declaration exceptions for neo-docmodels."""

from typing import Any

from .base import DocModelsError


class ConfigurationError(DocModelsError):
    """Base class for static configuration errors."""
    pass


class RuleDeclarationError(ConfigurationError):
    """Raised when a model declares a malformed validation rule."""

    def __init__(self, model_name: str, rule: Any, reason: str):
        self.model_name = model_name
        self.rule = rule
        self.reason = reason
        super().__init__(
            f"Model '{model_name}' has wrong validator rule {rule!r}: {reason}",
            details={"model": model_name, "rule": repr(rule), "reason": reason},
        )
