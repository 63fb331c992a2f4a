"""
Router exception hierarchy.

Every failure the router raises is a caller contract violation: a missing
base address, a query with nothing to address, a resource without identity,
or a filter the active strategy cannot express. None of them is transient,
so none of them is retried. All exceptions inherit from ``RouterError`` and
provide ``to_dict()`` for API-friendly error responses.
"""

from __future__ import annotations

from difflib import get_close_matches
from typing import Any


class RouterError(Exception):
    """Base exception for all router errors."""

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "message": str(self),
        }


class ContractViolationError(RouterError):
    """The router was called in a way its contract does not allow."""


class ConfigurationError(ContractViolationError):
    """Base class for base-address configuration errors."""


class BaseURLNotConfiguredError(ConfigurationError):
    """Raised when a URL is requested before a base address was set."""

    def __init__(self) -> None:
        super().__init__(
            "Router has no base URL. Pass RouterSettings(base_url=...) "
            "or assign router.base_url before building URLs."
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "BASE_URL_NOT_CONFIGURED",
            "message": str(self),
        }


class InvalidBaseURLError(ConfigurationError):
    """Raised when the base address is not an absolute URL."""

    def __init__(self, url: object) -> None:
        self.url = url
        super().__init__(
            f"Base URL must be an absolute URL with scheme and host, got {url!r}"
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "INVALID_BASE_URL",
            "url": str(self.url),
            "message": str(self),
        }


class MalformedQueryError(ContractViolationError):
    """Raised when a query has neither a URL nor a resource type."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(
            message
            or "Cannot build URL for query: it has neither a URL nor a resource type."
        )


class UnaddressableResourceError(ContractViolationError):
    """Raised when a resource has neither a canonical URL nor an id."""

    def __init__(self, resource_type: str | None) -> None:
        self.resource_type = resource_type
        super().__init__(
            f"Cannot address resource of type {resource_type!r}: "
            "it has neither a URL nor an id."
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "UNADDRESSABLE_RESOURCE",
            "resource_type": self.resource_type,
            "message": str(self),
        }


class UnsupportedFilterError(ContractViolationError):
    """
    Filter expression the active filter strategy cannot translate.

    Supply a different strategy to the router to support more operators.
    """

    def __init__(
        self,
        operator: str | None,
        supported: list[str],
        strategy: str | None = None,
    ) -> None:
        self.operator = operator
        self.supported = supported
        self.strategy = strategy
        self.suggestions = (
            get_close_matches(operator, supported, n=3, cutoff=0.6) if operator else []
        )

        message = f"Unsupported filter operator: {operator!r}"
        if strategy:
            message += f" for {strategy}"
        message += f". Supported operators: {', '.join(supported)}."
        if self.suggestions:
            message += f" Did you mean: {', '.join(self.suggestions)}?"
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "UNSUPPORTED_FILTER",
            "operator": self.operator,
            "strategy": self.strategy,
            "supported": list(self.supported),
            "suggestions": self.suggestions,
        }


class OperatorNotFoundError(RouterError):
    """
    Unknown operator specified on a filter expression.

    Provides fuzzy-matched suggestions for likely intended operators.
    """

    def __init__(self, operator: str, valid_operators: list[str]) -> None:
        self.operator = operator
        self.valid_operators = valid_operators
        self.suggestions = get_close_matches(operator, valid_operators, n=3, cutoff=0.6)

        message = f"Unknown operator: '{operator}'."
        if self.suggestions:
            message += f" Did you mean: {', '.join(self.suggestions)}?"
        message += f" Valid operators: {', '.join(sorted(valid_operators)[:10])}..."
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "OPERATOR_NOT_FOUND",
            "operator": self.operator,
            "suggestions": self.suggestions,
            "valid_operators": sorted(self.valid_operators),
        }
