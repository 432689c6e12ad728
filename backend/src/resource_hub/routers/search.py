"""Search endpoints."""

from fastapi import APIRouter

from resource_hub.config import settings
from resource_hub.dependencies import Store
from resource_hub.schemas.search import SearchResponse, SuggestionListResponse
from resource_hub.services.search import get_suggestions, search_listings

router = APIRouter(prefix="/search")


@router.get("", response_model=SearchResponse, status_code=200)
async def search(store: Store, q: str = "") -> SearchResponse:
    """Search grants, scholarships and resources by name, description and tags."""
    results = await search_listings(store, q, limit=settings.search_result_limit)
    return SearchResponse.model_validate(results)


@router.get("/suggestions", response_model=SuggestionListResponse, status_code=200)
async def suggestions(store: Store, q: str = "") -> SuggestionListResponse:
    items = await get_suggestions(store, q)
    return SuggestionListResponse.model_validate({"suggestions": items})
