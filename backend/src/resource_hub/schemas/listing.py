"""Listing response schemas.

One response model per listable kind, all sharing the listable fields.
"""

from datetime import date, datetime

from resource_hub.schemas.pagination import ApiModel, PageResponse


class ListableResponse(ApiModel):
    id: int
    name: str
    description: str
    tags: list[str]
    deadline: date | None
    amount: str | None
    amount_min: float | None
    amount_max: float | None
    url: str | None
    created_at: datetime
    updated_at: datetime


class GrantResponse(ListableResponse):
    grant_type: str
    funding_agency: str | None
    matching_required: bool


class ScholarshipResponse(ListableResponse):
    category: str
    source: str | None
    eligibility: list[str]


class ResourceResponse(ListableResponse):
    resource_type: str
    state: str | None


GrantPageResponse = PageResponse[GrantResponse]
ScholarshipPageResponse = PageResponse[ScholarshipResponse]
ResourcePageResponse = PageResponse[ResourceResponse]
