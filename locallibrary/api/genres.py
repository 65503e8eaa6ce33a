"""Genre API routes."""
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from locallibrary.api.deps import FormFields, form_fields, get_genre_service
from locallibrary.api.responses import outcome_response
from locallibrary.schemas.common import FormDescription
from locallibrary.schemas.genre import GenreCreateResult
from locallibrary.services import GenreService
from locallibrary.validation.forms import GENRE_FORM

router = APIRouter(tags=["Genres"])


@router.get("/genres")
async def list_genres(
    service: GenreService = Depends(get_genre_service),
) -> JSONResponse:
    """List genres ordered by name."""
    return outcome_response(await service.list_genres())


@router.get("/genre/create")
async def get_genre_form() -> JSONResponse:
    return outcome_response(
        FormDescription(fields=[field.name for field in GENRE_FORM])
    )


@router.post("/genre/create")
async def create_genre(
    form: FormFields = Depends(form_fields),
    service: GenreService = Depends(get_genre_service),
) -> JSONResponse:
    """Create a genre; an existing genre with the same name is returned as is."""
    result = await service.create_genre(form)
    if isinstance(result, GenreCreateResult) and result.created:
        return outcome_response(result, status.HTTP_201_CREATED)
    return outcome_response(result)


@router.get("/genre/{genre_id}")
async def get_genre(
    genre_id: int,
    service: GenreService = Depends(get_genre_service),
) -> JSONResponse:
    """Get a genre with its books."""
    return outcome_response(await service.get_genre_detail(genre_id))


@router.get("/genre/{genre_id}/update")
async def get_genre_for_update(
    genre_id: int,
    service: GenreService = Depends(get_genre_service),
) -> JSONResponse:
    return outcome_response(await service.get_genre(genre_id))


@router.post("/genre/{genre_id}/update")
async def update_genre(
    genre_id: int,
    form: FormFields = Depends(form_fields),
    service: GenreService = Depends(get_genre_service),
) -> JSONResponse:
    """Rename a genre."""
    return outcome_response(await service.update_genre(genre_id, form))


@router.get("/genre/{genre_id}/delete")
async def get_genre_for_delete(
    genre_id: int,
    service: GenreService = Depends(get_genre_service),
) -> JSONResponse:
    return outcome_response(await service.get_genre_detail(genre_id))


@router.post("/genre/{genre_id}/delete")
async def delete_genre(
    genre_id: int,
    service: GenreService = Depends(get_genre_service),
) -> JSONResponse:
    """Delete a genre that has no books."""
    return outcome_response(await service.delete_genre(genre_id))
