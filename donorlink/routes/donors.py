# donorlink/routes/donors.py
from dataclasses import asdict

from fastapi import APIRouter, Depends

from donorlink.dependencies import get_donor_search_service
from donorlink.models.api.person_response import DonorStatsResponse, PersonResponse
from donorlink.models.domain.person_domain import BloodGroup
from donorlink.services.donor_search_service import DonorSearchService

router = APIRouter(prefix="/donors", tags=["donors"])


@router.get("/search", response_model=list[PersonResponse])
async def search_donors(
    viewer_id: str | None = None,
    blood_group: BloodGroup | None = None,
    city: str | None = None,
    country: str | None = None,
    search: DonorSearchService = Depends(get_donor_search_service),
):
    """Verified donors outside the donation cooldown, excluding the viewer."""
    donors = await search.search_donors(
        viewer_id, blood_group=blood_group, city=city, country=country
    )
    return [PersonResponse.public_view(d) for d in donors]


@router.get("/stats", response_model=DonorStatsResponse)
async def donor_stats(search: DonorSearchService = Depends(get_donor_search_service)):
    stats = await search.donor_stats()
    return DonorStatsResponse(**asdict(stats))
