"""Module: species."""

from fastapi import APIRouter, Depends
from sqlalchemy.exc import IntegrityError

from vetcare.api.v1.routes.deps import get_repository
from vetcare.core.errors import MalformedInput
from vetcare.db.models.species import Species
from vetcare.repositories.profiles import ProfileRepository
from vetcare.schemas.common import ApiResponse
from vetcare.schemas.professional import SpeciesCreate, SpeciesOut

router = APIRouter()


@router.get("", response_model=ApiResponse[list[SpeciesOut]])
def list_species(repository: ProfileRepository = Depends(get_repository)):
    return {
        "message": "found all species",
        "data": [SpeciesOut.model_validate(s) for s in repository.list_species()],
    }


@router.post("", response_model=ApiResponse[SpeciesOut], status_code=201)
def create_species(payload: SpeciesCreate, repository: ProfileRepository = Depends(get_repository)):
    name = payload.name.strip()
    if repository.find_species_by_name(name) is not None:
        raise MalformedInput(f"Species {name!r} already exists")

    try:
        species = repository.save(Species(name=name))
    except IntegrityError as exc:
        # Lost a race with a concurrent insert of the same name.
        raise MalformedInput(f"Species {name!r} already exists") from exc
    return {"message": "Species created", "data": SpeciesOut.model_validate(species)}
