"""
Filter expressions consumed by the router.

A query filter is a small specification tree: ``AttributeSpecification``
leaves (``attr``, ``op``, ``val``) combined with ``&``, ``|`` and ``~``.
The router never evaluates them; filter strategies read them and turn
them into query parameters.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from .exceptions import OperatorNotFoundError
from .operators import SpecificationOperator

_VALID_OPERATORS: list[str] = [m.value for m in SpecificationOperator]


@runtime_checkable
class ISpecification(Protocol):
    """
    Protocol for filter expressions.

    Anything that can describe itself as a dictionary can be placed in a
    query; whether it can be turned into a URL is up to the filter strategy.
    """

    def to_dict(self) -> dict[str, Any]:
        """Return a dictionary representation of the expression."""
        ...


class BaseSpecification:
    """Base class for specifications with logic operator support."""

    def __and__(self, other: ISpecification) -> AndSpecification:
        return AndSpecification(self, other)

    def __or__(self, other: ISpecification) -> OrSpecification:
        return OrSpecification(self, other)

    def __invert__(self) -> NotSpecification:
        return NotSpecification(self)

    def to_dict(self) -> dict[str, Any]:
        raise NotImplementedError


class AttributeSpecification(BaseSpecification):
    """Comparison of a single field path against a constant value."""

    def __init__(
        self,
        attr: str,
        op: SpecificationOperator | str,
        val: Any = None,
    ) -> None:
        if not attr:
            raise ValueError("attr must be a non-empty field path")
        self.attr = attr
        self.op = _coerce_operator(op)
        self.val = val

    def to_dict(self) -> dict[str, Any]:
        return {
            "op": self.op.value,
            "attr": self.attr,
            "val": self.val,
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AttributeSpecification):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __hash__(self) -> int:
        return hash((self.attr, self.op, repr(self.val)))

    def __repr__(self) -> str:
        return f"AttributeSpecification({self.attr!r}, {self.op.value!r}, {self.val!r})"


class AndSpecification(BaseSpecification):
    """Logical AND composite specification."""

    op = SpecificationOperator.AND

    def __init__(self, *specifications: ISpecification) -> None:
        self.specifications = specifications

    def to_dict(self) -> dict[str, Any]:
        return {
            "op": "and",
            "conditions": [spec.to_dict() for spec in self.specifications],
        }


class OrSpecification(BaseSpecification):
    """Logical OR composite specification."""

    op = SpecificationOperator.OR

    def __init__(self, *specifications: ISpecification) -> None:
        self.specifications = specifications

    def to_dict(self) -> dict[str, Any]:
        return {
            "op": "or",
            "conditions": [spec.to_dict() for spec in self.specifications],
        }


class NotSpecification(BaseSpecification):
    """Logical NOT composite specification."""

    op = SpecificationOperator.NOT

    def __init__(self, specification: ISpecification) -> None:
        self.specification = specification

    def to_dict(self) -> dict[str, Any]:
        return {
            "op": "not",
            "conditions": [self.specification.to_dict()],
        }


def _coerce_operator(op: SpecificationOperator | str) -> SpecificationOperator:
    if isinstance(op, SpecificationOperator):
        return op
    try:
        return SpecificationOperator(op.lower())
    except ValueError:
        raise OperatorNotFoundError(op, _VALID_OPERATORS) from None
