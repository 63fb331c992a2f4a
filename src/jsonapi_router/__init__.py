"""Build JSON:API request URLs for collections, relationships and queries."""

from __future__ import annotations

from .config import RouterSettings
from .exceptions import (
    BaseURLNotConfiguredError,
    ConfigurationError,
    ContractViolationError,
    InvalidBaseURLError,
    MalformedQueryError,
    OperatorNotFoundError,
    RouterError,
    UnaddressableResourceError,
    UnsupportedFilterError,
)
from .filters import (
    EqualityFilterStrategy,
    FilterStrategy,
    OperatorFilterStrategy,
    format_value,
)
from .operators import SpecificationOperator
from .parameters import QueryParameters
from .query import Query, SortDescriptor
from .resources import IRelationship, IResource, Relationship, ResourceIdentifier
from .router import IRouter, Router
from .specification import (
    AndSpecification,
    AttributeSpecification,
    BaseSpecification,
    ISpecification,
    NotSpecification,
    OrSpecification,
)

__all__ = [
    # Router
    "IRouter",
    "Router",
    "RouterSettings",
    # Query
    "Query",
    "SortDescriptor",
    "QueryParameters",
    # Resources
    "IResource",
    "IRelationship",
    "ResourceIdentifier",
    "Relationship",
    # Filters
    "SpecificationOperator",
    "ISpecification",
    "BaseSpecification",
    "AttributeSpecification",
    "AndSpecification",
    "OrSpecification",
    "NotSpecification",
    "FilterStrategy",
    "EqualityFilterStrategy",
    "OperatorFilterStrategy",
    "format_value",
    # Exceptions
    "RouterError",
    "ContractViolationError",
    "ConfigurationError",
    "BaseURLNotConfiguredError",
    "InvalidBaseURLError",
    "MalformedQueryError",
    "UnaddressableResourceError",
    "UnsupportedFilterError",
    "OperatorNotFoundError",
]
