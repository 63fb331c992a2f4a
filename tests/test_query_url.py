"""Tests for Router.query_url."""

from __future__ import annotations

import pytest

from jsonapi_router import (
    AttributeSpecification,
    BaseURLNotConfiguredError,
    MalformedQueryError,
    Query,
    Router,
    SortDescriptor,
    UnsupportedFilterError,
)

POSTS = "https://api.example.com/v1/posts"


# -- Path ---------------------------------------------------------------------


def test_type_only_query_is_collection_url(router: Router):
    assert router.query_url(Query.for_type("posts")) == router.collection_url("posts")


def test_single_id_is_appended_to_path(router: Router):
    assert router.query_url(Query.for_type("posts", "1")) == f"{POSTS}/1"


def test_multiple_ids_become_id_filter(router: Router):
    url = router.query_url(Query.for_type("posts", "3", "1", "2"))
    assert url == f"{POSTS}?filter[id]=3,1,2"


def test_integer_ids_are_rendered(router: Router):
    query = Query(resource_type="posts", resource_ids=(7,))  # type: ignore[arg-type]
    assert router.query_url(query) == f"{POSTS}/7"


def test_query_without_url_or_type(router: Router):
    with pytest.raises(MalformedQueryError):
        router.query_url(Query())


def test_query_requires_base_url():
    with pytest.raises(BaseURLNotConfiguredError):
        Router().query_url(Query.for_type("posts"))


# -- Includes / fields / sort / paging ----------------------------------------


def test_includes_keep_order(router: Router):
    url = router.query_url(Query.for_type("posts").include("author", "comments"))
    assert url == f"{POSTS}?include=author,comments"


def test_sparse_fieldsets(router: Router):
    query = (
        Query.for_type("posts")
        .restrict_fields("posts", "title", "body")
        .restrict_fields("people", "name")
    )
    assert (
        router.query_url(query)
        == f"{POSTS}?fields[posts]=title,body&fields[people]=name"
    )


def test_sort_signs(router: Router):
    query = Query(
        resource_type="posts",
        sort_descriptors=(
            SortDescriptor("created", ascending=False),
            SortDescriptor("title", ascending=True),
        ),
    )
    assert router.query_url(query) == f"{POSTS}?sort=-created,+title"


def test_page_and_page_size_are_independent(router: Router):
    assert (
        router.query_url(Query.for_type("posts").paginate(page=2, page_size=20))
        == f"{POSTS}?page=2&page_size=20"
    )
    assert router.query_url(Query.for_type("posts").paginate(page=2)) == (
        f"{POSTS}?page=2"
    )
    assert router.query_url(Query.for_type("posts").paginate(page_size=5)) == (
        f"{POSTS}?page_size=5"
    )


def test_parameter_order(router: Router):
    query = (
        Query.for_type("posts", "1", "2")
        .include("author")
        .where("status", "=", "published")
        .restrict_fields("posts", "title", "body")
        .order_by("-created")
        .paginate(page=2, page_size=20)
    )
    assert router.query_url(query) == (
        f"{POSTS}?filter[id]=1,2&include=author&filter[status]=published"
        "&fields[posts]=title,body&sort=-created&page=2&page_size=20"
    )


# -- Filters ------------------------------------------------------------------


def test_equality_filter(router: Router):
    query = Query.for_type("posts").where("author.name", "=", "ward")
    assert router.query_url(query) == f"{POSTS}?filter[author.name]=ward"


def test_later_filter_wins(router: Router):
    query = (
        Query.for_type("posts")
        .where("status", "=", "draft")
        .where("status", "=", "published")
    )
    url = router.query_url(query)
    assert url == f"{POSTS}?filter[status]=published"
    assert url.count("filter[status]") == 1


def test_overridden_filter_keeps_first_position(router: Router):
    query = (
        Query.for_type("posts")
        .where("a", "=", "1")
        .where("b", "=", "2")
        .where("a", "=", "3")
    )
    assert router.query_url(query) == f"{POSTS}?filter[a]=3&filter[b]=2"


def test_id_filter_overrides_id_restriction(router: Router):
    query = Query.for_type("posts", "1", "2").where("id", "=", "9")
    assert router.query_url(query) == f"{POSTS}?filter[id]=9"


def test_filter_values_are_percent_encoded(router: Router):
    query = Query.for_type("posts").where("title", "=", "fish & chips")
    assert router.query_url(query) == f"{POSTS}?filter[title]=fish%20%26%20chips"


def test_boolean_filter_value(router: Router):
    query = Query.for_type("posts").where("published", "=", True)
    assert router.query_url(query) == f"{POSTS}?filter[published]=true"


def test_non_equality_filter_is_rejected(router: Router):
    query = Query.for_type("posts").where("rating", ">", 3)
    with pytest.raises(UnsupportedFilterError):
        router.query_url(query)


def test_custom_filter_strategy(settings):
    def translate(spec: AttributeSpecification) -> tuple[str, str]:
        return f"q[{spec.attr}]", f"{spec.op.value}{spec.val}"

    router = Router(settings, filter_strategy=translate)
    query = Query.for_type("posts").where("rating", ">", 3)
    assert router.query_url(query) == f"{POSTS}?q[rating]=%3E3"
    assert router.filter_strategy is translate


# -- Pre-built URLs -----------------------------------------------------------


def test_absolute_prebuilt_url_passes_through(router: Router):
    url = "https://other.example.com/posts?page=1&sort=+title"
    assert router.query_url(Query.for_url(url)) == url


def test_prebuilt_url_ignores_ids_and_merges_parameters(router: Router):
    query = Query(
        url="https://other.example.com/posts?page=1&sort=+title",
        resource_type="comments",
        resource_ids=("5", "6"),
    ).paginate(page=3, page_size=10)
    assert (
        router.query_url(query)
        == "https://other.example.com/posts?page=3&sort=+title&page_size=10"
    )


def test_prebuilt_single_id_not_appended(router: Router):
    query = Query(url="posts", resource_ids=("5",))
    assert router.query_url(query) == POSTS


def test_relative_prebuilt_url_resolves_beneath_base(router: Router):
    query = Query.for_url("posts?page[cursor]=abc").include("author")
    assert router.query_url(query) == f"{POSTS}?page[cursor]=abc&include=author"


def test_host_relative_prebuilt_url(router: Router):
    assert (
        router.query_url(Query.for_url("/posts"))
        == "https://api.example.com/posts"
    )


# -- Purity -------------------------------------------------------------------


def test_query_is_not_modified(router: Router):
    query = (
        Query.for_type("posts", "1", "2")
        .include("author")
        .where("status", "=", "published")
        .restrict_fields("posts", "title")
    )
    snapshot = Query(
        resource_type=query.resource_type,
        resource_ids=query.resource_ids,
        includes=query.includes,
        filters=query.filters,
        fields=dict(query.fields),
    )
    first = router.query_url(query)
    second = router.query_url(query)
    assert first == second
    assert query == snapshot


def test_prebuilt_cursor_url_is_unchanged(router: Router):
    url = "https://api.example.com/v1/posts?page[cursor]=YWJj%2BZA%3D%3D&flag"
    assert router.query_url(Query.for_url(url)) == url


def test_prebuilt_cursor_url_merges_without_reencoding(router: Router):
    url = "https://api.example.com/v1/posts?page[cursor]=YWJj%2BZA%3D%3D&flag"
    query = Query.for_url(url).paginate(page_size=10)
    assert router.query_url(query) == f"{url}&page_size=10"


# -- Opaque identities --------------------------------------------------------


@pytest.mark.parametrize(
    ("resource_id", "segment"),
    [("a/b", "a%2Fb"), ("/leading", "%2Fleading"), ("v1.0 final", "v1.0%20final")],
)
def test_single_id_is_one_path_segment(router: Router, resource_id: str, segment: str):
    url = router.query_url(Query.for_type("files", resource_id))
    assert url == f"https://api.example.com/v1/files/{segment}"
