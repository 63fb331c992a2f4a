"""Pluggable translation of filter expressions into query parameters."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .exceptions import UnsupportedFilterError
from .operators import LOGICAL_OPERATORS, SpecificationOperator

if TYPE_CHECKING:
    from .specification import ISpecification

# Short names used inside the bracketed parameter, e.g. filter[age][gte]=18
_OP_ALIASES: dict[str, str] = {
    SpecificationOperator.NE.value: "ne",
    SpecificationOperator.GT.value: "gt",
    SpecificationOperator.GE.value: "gte",
    SpecificationOperator.LT.value: "lt",
    SpecificationOperator.LE.value: "lte",
    SpecificationOperator.IN.value: "in",
    SpecificationOperator.NOT_IN.value: "not_in",
    SpecificationOperator.BETWEEN.value: "between",
    SpecificationOperator.LIKE.value: "like",
    SpecificationOperator.CONTAINS.value: "contains",
    SpecificationOperator.ICONTAINS.value: "icontains",
    SpecificationOperator.STARTSWITH.value: "startswith",
    SpecificationOperator.ENDSWITH.value: "endswith",
    SpecificationOperator.IS_NULL.value: "is_null",
    SpecificationOperator.IS_NOT_NULL.value: "is_not_null",
}

_LOGICAL_VALUES: frozenset[str] = frozenset(op.value for op in LOGICAL_OPERATORS)


def format_value(value: Any) -> str:
    """
    Render a filter value as it appears in a query parameter.

    Booleans and ``None`` use the lower-case JSON spelling; sequences are
    comma-joined in order, sets in sorted order.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, set | frozenset):
        return ",".join(sorted(format_value(v) for v in value))
    if isinstance(value, list | tuple):
        return ",".join(format_value(v) for v in value)
    return str(value)


class FilterStrategy:
    """Base for filter translation strategies."""

    def __call__(self, filter: ISpecification) -> tuple[str, str]:
        """Translate *filter* into a single ``(name, value)`` query parameter."""
        raise NotImplementedError

    @property
    def supported_operators(self) -> list[str]:
        raise NotImplementedError

    def _leaf(self, filter: ISpecification) -> tuple[str, str, Any]:
        """Return ``(attr, op, val)`` for a leaf filter, or raise."""
        data = filter.to_dict()
        op = data.get("op")
        op_str = getattr(op, "value", op)
        attr = data.get("attr")
        if op_str in _LOGICAL_VALUES or not attr or not isinstance(op_str, str):
            raise UnsupportedFilterError(
                op_str if isinstance(op_str, str) else None,
                self.supported_operators,
                strategy=type(self).__name__,
            )
        return attr, op_str, data.get("val")


class EqualityFilterStrategy(FilterStrategy):
    """
    Default strategy: equality comparisons only.

    ``AttributeSpecification("author.name", "=", "Ward")`` becomes
    ``("filter[author.name]", "Ward")``. Any other operator, and any
    composite expression, raises :class:`UnsupportedFilterError`.
    """

    @property
    def supported_operators(self) -> list[str]:
        return [SpecificationOperator.EQ.value]

    def __call__(self, filter: ISpecification) -> tuple[str, str]:
        attr, op, val = self._leaf(filter)
        if op != SpecificationOperator.EQ.value:
            raise UnsupportedFilterError(
                op, self.supported_operators, strategy=type(self).__name__
            )
        return f"filter[{attr}]", format_value(val)


class OperatorFilterStrategy(EqualityFilterStrategy):
    """
    Equality as ``filter[field]``, other comparisons as ``filter[field][op]``.

    Example: ``AttributeSpecification("age", ">=", 18)`` becomes
    ``("filter[age][gte]", "18")``. Logical composites are still rejected,
    since a single parameter cannot carry them.
    """

    @property
    def supported_operators(self) -> list[str]:
        return [SpecificationOperator.EQ.value, *_OP_ALIASES]

    def __call__(self, filter: ISpecification) -> tuple[str, str]:
        attr, op, val = self._leaf(filter)
        if op == SpecificationOperator.EQ.value:
            return f"filter[{attr}]", format_value(val)
        alias = _OP_ALIASES.get(op)
        if alias is None:
            raise UnsupportedFilterError(
                op, self.supported_operators, strategy=type(self).__name__
            )
        return f"filter[{attr}][{alias}]", format_value(val)
