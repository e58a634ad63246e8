"""Filtered, sorted views over the resource list.

All functions here are pure: they never mutate the resources they are given.
"""

from typing import Iterable, Literal, Union

from pydantic import BaseModel

from mindvault.models import Resource, ResourceType

SortKey = Literal["createdAt_desc", "createdAt_asc"]
ALL = "ALL"


class ResourceQuery(BaseModel):
    """Filter parameters for the resource view.

    ``type`` and ``tag`` accept ``"ALL"`` to disable that filter.
    """

    type: Union[ResourceType, Literal["ALL"]] = ALL
    search: str = ""
    tag: str = ALL
    sort: SortKey = "createdAt_desc"


def _matches_search(resource: Resource, needle: str) -> bool:
    if not needle:
        return True
    haystacks = [
        resource.title,
        resource.summary,
        resource.user_notes,
        resource.platform,
        *resource.tags,
    ]
    return any(needle in h.lower() for h in haystacks if h)


def matches(resource: Resource, query: ResourceQuery) -> bool:
    """Return True if ``resource`` satisfies every active filter in ``query``."""
    if query.type != ALL and resource.type != query.type:
        return False
    if query.tag != ALL and query.tag not in resource.tags:
        return False
    return _matches_search(resource, query.search.strip().lower())


def filter_resources(
    resources: Iterable[Resource], query: ResourceQuery
) -> list[Resource]:
    """Filter resources and sort them by creation time.

    The sort is stable, so resources with equal timestamps keep their
    relative order.
    """
    selected = [r for r in resources if matches(r, query)]
    return sorted(
        selected,
        key=lambda r: r.created_at,
        reverse=query.sort == "createdAt_desc",
    )


def collect_tags(resources: Iterable[Resource]) -> list[str]:
    """Distinct tags across all resources, in first-seen order."""
    return list(dict.fromkeys(tag for r in resources for tag in r.tags))
