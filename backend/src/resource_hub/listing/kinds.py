"""Listable kinds and their per-kind listing defaults.

Grants, scholarships and resources are structurally identical for listing
purposes. They differ only in the category enum their ``type`` filter
accepts, their default sort, and their page size.
"""

from dataclasses import dataclass
from enum import StrEnum

from resource_hub.config import settings


class ListingKind(StrEnum):
    GRANT = "grant"
    SCHOLARSHIP = "scholarship"
    RESOURCE = "resource"


class GrantType(StrEnum):
    FEDERAL = "federal"
    STATE = "state"
    TRIBAL = "tribal"
    FOUNDATION = "foundation"
    CORPORATE = "corporate"


class ScholarshipCategory(StrEnum):
    UNDERGRADUATE = "undergraduate"
    GRADUATE = "graduate"
    STEM = "stem"
    HEALTH = "health"
    TRIBAL = "tribal"
    GENERAL = "general"


class ResourceType(StrEnum):
    FEDERAL = "federal"
    STATE = "state"
    TRIBAL = "tribal"
    SCHOLARSHIP = "scholarship"
    EMERGENCY = "emergency"


class SortKey(StrEnum):
    DEADLINE_ASC = "deadline-asc"
    AMOUNT_DESC = "amount-desc"
    AMOUNT_ASC = "amount-asc"
    NEWEST = "newest"
    NAME_ASC = "name-asc"
    NAME_DESC = "name-desc"


@dataclass(frozen=True)
class KindProfile:
    """Listing defaults for one kind."""

    kind: ListingKind
    label: str
    categories: type[StrEnum]
    default_sort: SortKey
    page_size: int


def get_profile(kind: ListingKind) -> KindProfile:
    """Return the listing defaults for ``kind``.

    Page sizes are read from settings on each call so tests can patch them.
    """
    if kind is ListingKind.GRANT:
        return KindProfile(
            kind, "Grant", GrantType, SortKey.DEADLINE_ASC, settings.grants_page_size
        )
    if kind is ListingKind.SCHOLARSHIP:
        return KindProfile(
            kind,
            "Scholarship",
            ScholarshipCategory,
            SortKey.DEADLINE_ASC,
            settings.scholarships_page_size,
        )
    return KindProfile(kind, "Resource", ResourceType, SortKey.NEWEST, settings.resources_page_size)
