"""Grant, scholarship and resource listing endpoints.

Query parameters are taken as raw strings: a malformed filter never
produces a 422, it is normalized to the unfiltered default instead.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from resource_hub.dependencies import Store
from resource_hub.listing.criteria import parse_criteria
from resource_hub.listing.kinds import ListingKind
from resource_hub.schemas.listing import (
    GrantPageResponse,
    GrantResponse,
    ResourcePageResponse,
    ResourceResponse,
    ScholarshipPageResponse,
    ScholarshipResponse,
)
from resource_hub.services.listing import get_item, list_items

router = APIRouter()


def listing_params(
    page: str | None = None,
    sort: str | None = None,
    tags: str | None = Query(None, description="Comma-separated, matches any"),
    item_type: str | None = Query(None, alias="type"),
    amount: str | None = Query(None, description='"min-max"'),
    deadline: str | None = Query(None, description='"rolling" or "next-<days>"'),
) -> dict[str, str | None]:
    return {
        "page": page,
        "sort": sort,
        "tags": tags,
        "type": item_type,
        "amount": amount,
        "deadline": deadline,
    }


ListingParams = Annotated[dict[str, str | None], Depends(listing_params)]


@router.get("/grants", response_model=GrantPageResponse, status_code=200)
async def list_grants(store: Store, params: ListingParams) -> GrantPageResponse:
    """Grants with upcoming deadlines first, then rolling grants."""
    result = await list_items(store, parse_criteria(ListingKind.GRANT, params))
    return GrantPageResponse.model_validate(result)


@router.get("/grants/{grant_id}", response_model=GrantResponse)
async def read_grant(store: Store, grant_id: int) -> GrantResponse:
    return GrantResponse.model_validate(await get_item(store, ListingKind.GRANT, grant_id))


@router.get("/scholarships", response_model=ScholarshipPageResponse, status_code=200)
async def list_scholarships(store: Store, params: ListingParams) -> ScholarshipPageResponse:
    """Scholarships with upcoming deadlines first, then rolling scholarships."""
    result = await list_items(store, parse_criteria(ListingKind.SCHOLARSHIP, params))
    return ScholarshipPageResponse.model_validate(result)


@router.get("/scholarships/{scholarship_id}", response_model=ScholarshipResponse)
async def read_scholarship(store: Store, scholarship_id: int) -> ScholarshipResponse:
    item = await get_item(store, ListingKind.SCHOLARSHIP, scholarship_id)
    return ScholarshipResponse.model_validate(item)


@router.get("/resources", response_model=ResourcePageResponse, status_code=200)
async def list_resources(store: Store, params: ListingParams) -> ResourcePageResponse:
    """Resources, newest first by default; dated resources are listed ahead of undated ones."""
    result = await list_items(store, parse_criteria(ListingKind.RESOURCE, params))
    return ResourcePageResponse.model_validate(result)


@router.get("/resources/{resource_id}", response_model=ResourceResponse)
async def read_resource(store: Store, resource_id: int) -> ResourceResponse:
    item = await get_item(store, ListingKind.RESOURCE, resource_id)
    return ResourceResponse.model_validate(item)
