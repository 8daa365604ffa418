"""
Validator registry and field validation for document models.

The registry maps attribute names to ``{kind: params}`` dictionaries built
from the model's rule declarations. ``validate_field`` evaluates a single
``{kind: params}`` entry against a value and returns error messages.
"""
import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from ..core.exceptions import RuleDeclarationError
from .filters import is_float, is_numeric, to_number
from .schema import LENGTH, NUMERIC, REQUIRED, check_rule

logger = logging.getLogger(__name__)

BOUNDS = ("min", "max")


class ValidatorRegistry:
    """Per-instance mapping of attribute name to registered validators."""

    def __init__(self, attributes_list: Sequence[str]):
        self._attributes = list(attributes_list)
        self._validators: Dict[str, Dict[str, Dict[str, Any]]] = {}

    @property
    def validators(self) -> Dict[str, Dict[str, Dict[str, Any]]]:
        return self._validators

    def register_rules(self, rules: Iterable[Any], model_name: str) -> None:
        """Register every declared rule against the declared attributes.

        Raises:
            RuleDeclarationError: If a rule is not a (names, {kind: params}) pair
                or declares a non-numeric bound
        """
        for rule in rules:
            names, spec = check_rule(rule, model_name)
            _check_bounds(rule, spec, model_name)
            for name in names:
                if name in self._attributes:
                    self.add(name, spec)

    def add(self, name: str, spec: Mapping[str, Any]) -> None:
        """Merge a ``{kind: params}`` validator into an attribute's validators."""
        if name not in self._attributes or not spec:
            return

        for kind, params in spec.items():
            self._validators.setdefault(name, {})[kind] = dict(params) if isinstance(params, Mapping) else {}

    def remove(self, name: str, kind: Optional[str] = None) -> None:
        """Remove one validator kind, or all of them when kind is None."""
        if name not in self._validators:
            return

        if kind is None:
            del self._validators[name]
            return

        self._validators[name].pop(kind, None)
        if not self._validators[name]:
            del self._validators[name]

    def get(self, name: str) -> Optional[Dict[str, Dict[str, Any]]]:
        return self._validators.get(name)

    def __contains__(self, name: str) -> bool:
        return name in self._validators

    def __bool__(self) -> bool:
        return bool(self._validators)


def _check_bounds(rule: Any, spec: Mapping[str, Any], model_name: str) -> None:
    kind, params = next(iter(spec.items()))
    if kind not in (NUMERIC, LENGTH) or not params:
        return

    for bound in BOUNDS:
        if bound in params and to_number(params[bound]) is None:
            raise RuleDeclarationError(model_name, rule, f"{kind} {bound} must be a number")


def _bound(params: Mapping[str, Any], bound: str) -> Any:
    """Numeric value of a min/max bound, or None when absent or not a number."""
    if bound not in params:
        return None
    value = to_number(params[bound])
    if value is None:
        logger.debug(f"Ignoring non-numeric {bound} bound {params[bound]!r}")
    return value


def _param(params: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in params:
            return params[key]
    return None


def _has_param(params: Mapping[str, Any], *keys: str) -> bool:
    return any(key in params for key in keys)


def _validate_required(name: str, value: Any, params: Mapping[str, Any]) -> List[str]:
    if not value:
        return [f"Field {name} is required"]
    return []


def _validate_numeric(name: str, value: Any, params: Mapping[str, Any]) -> List[str]:
    if not is_numeric(value):
        return [f"Field {name} can be only numeric"]

    errors = []
    number = to_number(value)

    allow_float = _param(params, "allow_float", "allowFloat")
    if _has_param(params, "allow_float", "allowFloat") and not allow_float and is_float(value):
        errors.append(f"Field {name} can be only integer")

    maximum = _bound(params, "max")
    if maximum is not None and number > maximum:
        errors.append(f"Field {name} value can not be greater than {params['max']}")

    minimum = _bound(params, "min")
    if minimum is not None and number < minimum:
        errors.append(f"Field {name} value can not be less than {params['min']}")

    return errors


def _validate_length(name: str, value: Any, params: Mapping[str, Any]) -> List[str]:
    if value is None:
        return []

    length = len(value) if hasattr(value, "__len__") else len(str(value))
    errors = []

    maximum = _bound(params, "max")
    if maximum is not None and length > maximum:
        errors.append(f"Field {name} length can not be greater than {params['max']} symbols")

    minimum = _bound(params, "min")
    if minimum is not None and length < minimum:
        errors.append(f"Field {name} length can not be less than {params['min']} symbols")

    return errors


VALIDATORS = {
    REQUIRED: _validate_required,
    NUMERIC: _validate_numeric,
    LENGTH: _validate_length,
}


def validate_field(name: str, value: Any, spec: Mapping[str, Any]) -> List[str]:
    """Validate a value against a single ``{kind: params}`` validator.

    Args:
        name: Attribute name used in error messages
        value: Current attribute value
        spec: Single-key mapping of validator kind to its parameters

    Returns:
        Error messages in evaluation order; empty when the value is valid
        or the validator kind is unknown
    """
    if not spec:
        return []

    kind, params = next(iter(spec.items()))
    validator = VALIDATORS.get(kind)
    if validator is None:
        logger.debug(f"Skipping unknown validator '{kind}' for field {name}")
        return []

    return validator(name, value, params or {})
