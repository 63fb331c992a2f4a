"""
Router: builds JSON:API request URLs.

Three kinds of URL are produced, all resolved against one base address:

- collection URLs: ``<base>/<type>``
- relationship link URLs: ``<resource url>/links/<relationship>``
- query URLs: a collection, resource or pre-built URL plus the
  ``filter[...]``, ``include``, ``fields[...]``, ``sort``, ``page`` and
  ``page_size`` parameters described by a :class:`~jsonapi_router.query.Query`.

The base address is the router's only mutable state. Configure it once,
before the router is shared between threads; reassigning it while other
threads are building URLs is not supported.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Protocol, runtime_checkable
from urllib.parse import quote, urljoin, urlsplit, urlunsplit

from .config import RouterSettings, is_absolute_url
from .exceptions import (
    BaseURLNotConfiguredError,
    InvalidBaseURLError,
    MalformedQueryError,
    UnaddressableResourceError,
)
from .filters import EqualityFilterStrategy
from .parameters import QueryParameters

if TYPE_CHECKING:
    from .query import Query
    from .resources import IRelationship, IResource
    from .specification import ISpecification

logger = logging.getLogger("jsonapi_router.router")

FilterTranslator = Callable[["ISpecification"], tuple[str, str]]

# RFC 3986 pchar, minus the unreserved set quote() always keeps.
_SEGMENT_SAFE_CHARS = ":@!$&'()*+,;="
_PATH_SAFE_CHARS = "/" + _SEGMENT_SAFE_CHARS


@runtime_checkable
class IRouter(Protocol):
    """Protocol for objects that build request URLs."""

    @property
    def base_url(self) -> str | None: ...

    def collection_url(self, resource_type: str) -> str: ...

    def relationship_url(
        self, relationship: IRelationship, resource: IResource
    ) -> str: ...

    def query_url(self, query: Query) -> str: ...


class Router:
    """
    Build URLs following the JSON:API addressing convention.

    Parameters
    ----------
    settings:
        Root configuration. May be omitted and supplied later by assigning
        :attr:`base_url`; every build call fails until it is set.
    filter_strategy:
        Callable translating one filter expression into one
        ``(name, value)`` parameter. Defaults to
        :class:`~jsonapi_router.filters.EqualityFilterStrategy`.
    """

    def __init__(
        self,
        settings: RouterSettings | None = None,
        *,
        filter_strategy: FilterTranslator | None = None,
    ) -> None:
        self._base_url: str | None = settings.base_url if settings else None
        self._filter_strategy: FilterTranslator = (
            filter_strategy if filter_strategy is not None else EqualityFilterStrategy()
        )

    # -- configuration -------------------------------------------------------

    @property
    def base_url(self) -> str | None:
        return self._base_url

    @base_url.setter
    def base_url(self, url: str) -> None:
        if not isinstance(url, str) or not is_absolute_url(url.strip()):
            raise InvalidBaseURLError(url)
        self._base_url = url.strip()
        logger.debug("Router base URL set to %s", self._base_url)

    @property
    def filter_strategy(self) -> FilterTranslator:
        return self._filter_strategy

    # -- URL building --------------------------------------------------------

    def collection_url(self, resource_type: str) -> str:
        """Return the URL of the collection of *resource_type* resources."""
        if not resource_type or not resource_type.strip("/"):
            raise MalformedQueryError("resource_type must be a non-empty string")
        return _append_path(self._require_base_url(), resource_type)

    def relationship_url(self, relationship: IRelationship, resource: IResource) -> str:
        """
        Return the link URL of *relationship* on *resource*.

        A canonical ``resource.url`` wins over ``type``/``id``; a resource
        with neither a URL nor an id cannot be addressed.
        """
        if resource.url:
            resource_url = urljoin(_directory(self._require_base_url()), resource.url)
        elif resource.id:
            resource_url = _append_segment(
                self.collection_url(resource.type), str(resource.id)
            )
        else:
            raise UnaddressableResourceError(getattr(resource, "type", None))
        links_url = _append_path(resource_url, "links")
        return _append_segment(links_url, relationship.serialized_name)

    def query_url(self, query: Query) -> str:
        """Return the URL fetching the resources described by *query*."""
        base_url = self._require_base_url()

        if query.url:
            url = urljoin(_directory(base_url), query.url)
            pre_built = True
        elif query.resource_type:
            url = self.collection_url(query.resource_type)
            pre_built = False
        else:
            raise MalformedQueryError()

        scheme, netloc, path, query_string, fragment = urlsplit(url)
        params = QueryParameters.parse(query_string)

        if not pre_built:
            resource_ids = [str(i) for i in query.resource_ids]
            if len(resource_ids) == 1:
                path = _join_segment(path, resource_ids[0])
            elif len(resource_ids) > 1:
                params.set("filter[id]", ",".join(resource_ids))

        if query.includes:
            params.set("include", ",".join(query.includes))

        for spec in query.filters:
            name, value = self.filter_parameter(spec)
            params.set(name, value)

        for resource_type, names in query.fields.items():
            params.set(f"fields[{resource_type}]", ",".join(names))

        if query.sort_descriptors:
            params.set("sort", ",".join(str(d) for d in query.sort_descriptors))

        if query.page is not None:
            params.set("page", str(query.page))
        if query.page_size is not None:
            params.set("page_size", str(query.page_size))

        result = urlunsplit(
            (scheme, netloc, path, params.encode() if params else "", fragment)
        )
        logger.debug("Built query URL %s", result)
        return result

    def filter_parameter(self, filter: ISpecification) -> tuple[str, str]:
        """Translate one filter expression through the filter strategy."""
        return self._filter_strategy(filter)

    # -- internals -----------------------------------------------------------

    def _require_base_url(self) -> str:
        if not self._base_url:
            raise BaseURLNotConfiguredError()
        return self._base_url


def _directory(url: str) -> str:
    """Ensure *url* ends with ``/`` so relative references resolve beneath it."""
    scheme, netloc, path, query, fragment = urlsplit(url)
    if not path.endswith("/"):
        path += "/"
    return urlunsplit((scheme, netloc, path, query, fragment))


def _join_path(path: str, *segments: str) -> str:
    """Append *segments* to *path*, never producing empty or doubled slashes."""
    for segment in segments:
        segment = segment.strip("/")
        if segment:
            path = f"{path.rstrip('/')}/{quote(segment, safe=_PATH_SAFE_CHARS)}"
    return path


def _append_path(url: str, *segments: str) -> str:
    scheme, netloc, path, query, fragment = urlsplit(url)
    return urlunsplit((scheme, netloc, _join_path(path, *segments), query, fragment))


def _join_segment(path: str, segment: str) -> str:
    """Append *segment* as exactly one path segment; ``/`` inside it is escaped."""
    return f"{path.rstrip('/')}/{quote(segment, safe=_SEGMENT_SAFE_CHARS)}"


def _append_segment(url: str, segment: str) -> str:
    scheme, netloc, path, query, fragment = urlsplit(url)
    return urlunsplit((scheme, netloc, _join_segment(path, segment), query, fragment))
