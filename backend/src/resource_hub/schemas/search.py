"""Search response schemas.

The same item schemas as the listing endpoints, whichever search mode ran.
"""

from resource_hub.schemas.listing import GrantResponse, ResourceResponse, ScholarshipResponse
from resource_hub.schemas.pagination import ApiModel


class SearchResponse(ApiModel):
    query: str
    grants: list[GrantResponse]
    scholarships: list[ScholarshipResponse]
    resources: list[ResourceResponse]


class SuggestionResponse(ApiModel):
    type: str
    text: str


class SuggestionListResponse(ApiModel):
    suggestions: list[SuggestionResponse]
