"""
Query descriptor for collection and resource requests.

A ``Query`` says *what* to fetch: a resource type (or a pre-built URL),
optional ids, includes, filters, sparse fieldsets, ordering and paging.
The router turns it into a URL; it never modifies it.

Example::

    query = (
        Query.for_type("posts")
        .where("status", "=", "published")
        .include("author", "comments")
        .order_by("-created", "title")
        .paginate(page=2, page_size=20)
    )
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from .operators import SpecificationOperator
from .specification import AttributeSpecification

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .specification import ISpecification


@dataclass(frozen=True)
class SortDescriptor:
    """Ordering on a single field."""

    key: str
    ascending: bool = True

    @classmethod
    def parse(cls, value: str) -> SortDescriptor:
        """Parse ``"-created"`` / ``"+title"`` / ``"title"``."""
        if value.startswith("-"):
            return cls(value[1:], ascending=False)
        if value.startswith("+"):
            return cls(value[1:], ascending=True)
        return cls(value, ascending=True)

    def __str__(self) -> str:
        return f"{'+' if self.ascending else '-'}{self.key}"


@dataclass(frozen=True)
class Query:
    """
    Immutable description of a request.

    Attributes:
        url: Pre-built URL. When set, ``resource_type`` and ``resource_ids``
            are not used to build the path.
        resource_type: Collection to query; required when ``url`` is not set.
        resource_ids: Restrict results to these ids, in this order.
        includes: Relationship paths to include, in this order.
        filters: Filter expressions, translated one parameter each.
        fields: Sparse fieldsets, ``{resource_type: (field, ...)}``. Stored
            as a read-only mapping so queries stay hashable.
        sort_descriptors: Ordering, most significant first.
        page: Page number.
        page_size: Page size.
    """

    url: str | None = None
    resource_type: str | None = None
    resource_ids: tuple[str, ...] = ()
    includes: tuple[str, ...] = ()
    filters: tuple[ISpecification, ...] = ()
    fields: Mapping[str, tuple[str, ...]] = field(default_factory=dict)
    sort_descriptors: tuple[SortDescriptor, ...] = ()
    page: int | None = None
    page_size: int | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "resource_ids", tuple(self.resource_ids))
        object.__setattr__(self, "includes", tuple(self.includes))
        object.__setattr__(self, "filters", tuple(self.filters))
        object.__setattr__(self, "sort_descriptors", tuple(self.sort_descriptors))
        object.__setattr__(
            self,
            "fields",
            MappingProxyType({k: tuple(v) for k, v in self.fields.items()}),
        )

    def __hash__(self) -> int:
        return hash(
            (
                self.url,
                self.resource_type,
                self.resource_ids,
                self.includes,
                self.filters,
                tuple(self.fields.items()),
                self.sort_descriptors,
                self.page,
                self.page_size,
            )
        )

    # -- constructors --------------------------------------------------------

    @classmethod
    def for_type(cls, resource_type: str, *resource_ids: str) -> Query:
        """Query a collection, optionally restricted to some ids."""
        return cls(resource_type=resource_type, resource_ids=tuple(resource_ids))

    @classmethod
    def for_url(cls, url: str) -> Query:
        """Query a URL handed out by the server (e.g. a pagination link)."""
        return cls(url=url)

    # -- filtering -----------------------------------------------------------

    def where(
        self,
        attr: str,
        op: SpecificationOperator | str = SpecificationOperator.EQ,
        val: Any = None,
    ) -> Query:
        """Return a copy with an attribute filter appended."""
        return self.filter(AttributeSpecification(attr, op, val))

    def filter(self, spec: ISpecification) -> Query:
        """Return a copy with *spec* appended to the filters."""
        return replace(self, filters=(*self.filters, spec))

    def with_ids(self, *resource_ids: str) -> Query:
        """Return a copy restricted to *resource_ids*."""
        return replace(self, resource_ids=tuple(resource_ids))

    # -- shaping -------------------------------------------------------------

    def include(self, *paths: str) -> Query:
        """Return a copy that also includes the given relationship paths."""
        return replace(self, includes=(*self.includes, *paths))

    def restrict_fields(self, resource_type: str, *names: str) -> Query:
        """Return a copy with the sparse fieldset of *resource_type* replaced."""
        fields = dict(self.fields)
        fields[resource_type] = tuple(names)
        return replace(self, fields=fields)

    # -- ordering ------------------------------------------------------------

    def order_by(self, *keys: str) -> Query:
        """Return a copy with ordering appended; prefix a key with ``-`` for descending."""
        descriptors = tuple(SortDescriptor.parse(k) for k in keys)
        return replace(self, sort_descriptors=(*self.sort_descriptors, *descriptors))

    def add_ascending_order(self, key: str) -> Query:
        return replace(
            self, sort_descriptors=(*self.sort_descriptors, SortDescriptor(key, True))
        )

    def add_descending_order(self, key: str) -> Query:
        return replace(
            self, sort_descriptors=(*self.sort_descriptors, SortDescriptor(key, False))
        )

    # -- paging --------------------------------------------------------------

    def paginate(self, page: int | None = None, page_size: int | None = None) -> Query:
        """Return a copy with updated paging; ``None`` keeps the current value."""
        return replace(
            self,
            page=page if page is not None else self.page,
            page_size=page_size if page_size is not None else self.page_size,
        )
