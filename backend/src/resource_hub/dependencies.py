"""Shared FastAPI dependencies.

Reusable type aliases and dependency functions that routers import.
Defined here (not in main.py) to avoid circular imports when routers
are registered in main.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from resource_hub.config import settings
from resource_hub.db.session import get_db
from resource_hub.listing.store import ListingStore
from resource_hub.repositories.listing import SqlAlchemyListingStore

DB = Annotated[AsyncSession, Depends(get_db)]


def get_store(db: DB) -> ListingStore:
    """Listing store bound to the request's database session."""
    return SqlAlchemyListingStore(db, ranked_search_enabled=settings.ranked_search_enabled)


Store = Annotated[ListingStore, Depends(get_store)]
