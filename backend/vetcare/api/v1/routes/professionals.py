"""Module: professionals."""

from fastapi import APIRouter, Depends

from vetcare.api.v1.routes.deps import get_repository, parse_id
from vetcare.repositories.profiles import ProfileRepository
from vetcare.schemas.common import ApiResponse
from vetcare.schemas.professional import ProfessionalCreate, ProfessionalOut, ProfessionalUpdate
from vetcare.schemas.rating import RatingCreate, RatingResult
from vetcare.services.professional_builder import ProfessionalBuilder
from vetcare.services.professional_service import ProfessionalService
from vetcare.services.rating_aggregator import RatingAggregator

router = APIRouter()


# Endpoint: list professionals, optionally only those treating a species.
@router.get("", response_model=ApiResponse[list[ProfessionalOut]])
def list_professionals(species: str | None = None, repository: ProfileRepository = Depends(get_repository)):
    species_id = parse_id(species, "species") if species is not None else None
    professionals = ProfessionalService(repository).list_professionals(species_id=species_id)
    return {
        "message": "found matching professionals",
        "data": [ProfessionalOut.model_validate(p) for p in professionals],
    }


@router.post("", response_model=ApiResponse[ProfessionalOut], status_code=201)
def create_professional(payload: ProfessionalCreate, repository: ProfileRepository = Depends(get_repository)):
    professional = ProfessionalBuilder(repository).build(payload)
    return {"message": "Professional created", "data": ProfessionalOut.model_validate(professional)}


@router.get("/{professional_id}", response_model=ApiResponse[ProfessionalOut])
def get_professional(professional_id: str, repository: ProfileRepository = Depends(get_repository)):
    professional = ProfessionalService(repository).get(parse_id(professional_id, "professional_id"))
    return {"message": "found professional", "data": ProfessionalOut.model_validate(professional)}


@router.patch("/{professional_id}", response_model=ApiResponse[ProfessionalOut])
def update_professional(
    professional_id: str,
    payload: ProfessionalUpdate,
    repository: ProfileRepository = Depends(get_repository),
):
    fields = payload.model_dump(exclude_unset=True)
    professional = ProfessionalService(repository).update(parse_id(professional_id, "professional_id"), fields)
    return {"message": "professional updated", "data": ProfessionalOut.model_validate(professional)}


@router.delete("/{professional_id}", response_model=ApiResponse[None])
def delete_professional(professional_id: str, repository: ProfileRepository = Depends(get_repository)):
    ProfessionalService(repository).remove(parse_id(professional_id, "professional_id"))
    return {"message": "professional deleted", "data": None}


# Endpoint: rating submission; the aggregate is recomputed before responding.
@router.post("/{professional_id}/ratings", response_model=ApiResponse[RatingResult], status_code=201)
def rate_professional(
    professional_id: str,
    payload: RatingCreate,
    repository: ProfileRepository = Depends(get_repository),
):
    pid = parse_id(professional_id, "professional_id")
    aggregator = RatingAggregator(repository)
    rating = aggregator.record(pid, payload.score, author_id=payload.author_id)
    professional = ProfessionalService(repository).get(pid)
    return {
        "message": "rating recorded",
        "data": RatingResult(
            rating_id=rating.id,
            professional_id=pid,
            score=rating.score,
            rating=professional.rating,
        ),
    }
