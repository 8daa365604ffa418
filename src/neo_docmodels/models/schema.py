"""
Schema declaration for document models.

A model type describes its write surface, defaults, validation rules,
filters and unsafe attributes through a ``SchemaProvider``. ``ModelSchema``
is the immutable descriptor most models assign to their ``schema`` class
attribute.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Protocol, Sequence, Tuple, runtime_checkable

from ..core.exceptions import RuleDeclarationError

# (attribute names, {validator kind: params})
Rule = Tuple[Sequence[str], Mapping[str, Any]]

REQUIRED = "required"
NUMERIC = "numeric"
LENGTH = "length"
VALIDATOR_KINDS = (REQUIRED, NUMERIC, LENGTH)

STRIP_TAGS = "strip_tags"
NUMERIC_FILTER = "numeric"
FILTER_KINDS = (STRIP_TAGS, NUMERIC_FILTER)


@runtime_checkable
class SchemaProvider(Protocol):
    """Protocol for per-model-type schema declarations."""

    def attributes_list(self) -> List[str]:
        """Ordered list of permitted attribute names."""
        ...

    def default_values(self) -> Dict[str, Any]:
        """Default values applied before caller-supplied attributes."""
        ...

    def rules(self) -> List[Rule]:
        """Validation rules as (names, {kind: params}) pairs."""
        ...

    def unsafe_attributes_list(self) -> List[str]:
        """Attributes that may not change once the record exists."""
        ...

    def filters(self) -> Dict[str, List[str]]:
        """Filter kind to the attribute names it applies to."""
        ...


@dataclass(frozen=True)
class ModelSchema:
    """Static schema descriptor implementing ``SchemaProvider``.

    Example::

        class Realty(BaseModel):
            schema = ModelSchema(
                attributes=("realty_id", "title", "price"),
                defaults={"price": 0},
                validation_rules=(
                    (["title"], {"required": {}}),
                    (["price"], {"numeric": {"min": 0}}),
                ),
                unsafe=("realty_id",),
                attribute_filters={"strip_tags": ["title"]},
            )
    """

    attributes: Tuple[str, ...] = ()
    defaults: Mapping[str, Any] = field(default_factory=dict)
    validation_rules: Tuple[Rule, ...] = ()
    unsafe: Tuple[str, ...] = ()
    attribute_filters: Mapping[str, Sequence[str]] = field(default_factory=dict)

    def attributes_list(self) -> List[str]:
        return list(self.attributes)

    def default_values(self) -> Dict[str, Any]:
        return dict(self.defaults)

    def rules(self) -> List[Rule]:
        return list(self.validation_rules)

    def unsafe_attributes_list(self) -> List[str]:
        return list(self.unsafe)

    def filters(self) -> Dict[str, List[str]]:
        return {kind: list(names) for kind, names in self.attribute_filters.items()}


def _is_name_list(value: Any) -> bool:
    return isinstance(value, (list, tuple)) and all(isinstance(name, str) for name in value)


def check_rule(rule: Any, model_name: str) -> Rule:
    """Check the shape of a single rule declaration.

    A rule must be a two-element list or tuple: a list of attribute names
    and a mapping holding exactly one validator kind.

    Raises:
        RuleDeclarationError: If the rule is malformed
    """
    if not isinstance(rule, (list, tuple)):
        raise RuleDeclarationError(
            model_name, rule,
            "rules have to be pairs of an attribute list and a validator mapping"
        )
    if len(rule) != 2:
        raise RuleDeclarationError(model_name, rule, "rule must have exactly two elements")

    names, spec = rule
    if not _is_name_list(names):
        raise RuleDeclarationError(model_name, rule, "first element must be a list of attribute names")
    if not isinstance(spec, Mapping) or len(spec) != 1:
        raise RuleDeclarationError(model_name, rule, "second element must be a single-key validator mapping")

    params = next(iter(spec.values()))
    if params is not None and not isinstance(params, Mapping):
        raise RuleDeclarationError(model_name, rule, "validator parameters must be a mapping")

    return names, spec
