"""Resource and relationship shapes the router needs to address them."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict


@runtime_checkable
class IResource(Protocol):
    """
    Anything that can be addressed as a single resource.

    ``url`` is the canonical URL the server handed out for the resource, if
    it is known; otherwise the router derives one from ``type`` and ``id``.
    """

    @property
    def type(self) -> str: ...

    @property
    def id(self) -> str | None: ...

    @property
    def url(self) -> str | None: ...


@runtime_checkable
class IRelationship(Protocol):
    """A named link owned by a resource."""

    @property
    def serialized_name(self) -> str: ...


class ResourceIdentifier(BaseModel):
    """Plain value object satisfying :class:`IResource`."""

    model_config = ConfigDict(frozen=True)

    type: str
    id: str | None = None
    url: str | None = None


class Relationship(BaseModel):
    """
    Value object satisfying :class:`IRelationship`.

    ``to_many`` is informational; link URLs are the same for both kinds.
    """

    model_config = ConfigDict(frozen=True)

    serialized_name: str
    to_many: bool = False
