"""Shared response base and the page envelope used by all listing endpoints.

ApiModel:        camelCase JSON, readable from ORM rows and dataclasses.
PageResponse[T]: ``{items, totalCount, totalPages, page, pageSize}``.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base for every response schema.

    Fields are declared in snake_case and serialized in camelCase; FastAPI
    serializes ``response_model`` by alias. ``from_attributes`` lets
    ``model_validate`` read service-layer dataclasses and ORM rows directly.
    """

    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)


class PageResponse[T](ApiModel):
    """One page of a partitioned listing.

    Built from the service layer's ``PageResult`` dataclass::

        result = await list_items(store, criteria)
        return GrantPageResponse.model_validate(result)

    ``items`` can be shorter than ``page_size`` on a page that is not the last
    one when an amount filter is active; use ``total_pages`` to detect the end.
    """

    items: list[T]
    total_count: int
    total_pages: int
    page: int
    page_size: int
