"""Author API routes."""
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from locallibrary.api.deps import FormFields, form_fields, get_author_service
from locallibrary.api.responses import outcome_response
from locallibrary.schemas.common import FormDescription
from locallibrary.services import AuthorService
from locallibrary.validation.forms import AUTHOR_FORM

router = APIRouter(tags=["Authors"])


@router.get("/authors")
async def list_authors(
    service: AuthorService = Depends(get_author_service),
) -> JSONResponse:
    """List authors ordered by family name."""
    return outcome_response(await service.list_authors())


@router.get("/author/create")
async def get_author_form() -> JSONResponse:
    """Fields of the author create form."""
    return outcome_response(
        FormDescription(fields=[field.name for field in AUTHOR_FORM])
    )


@router.post("/author/create")
async def create_author(
    form: FormFields = Depends(form_fields),
    service: AuthorService = Depends(get_author_service),
) -> JSONResponse:
    """Create an author."""
    return outcome_response(
        await service.create_author(form), status.HTTP_201_CREATED
    )


@router.get("/author/{author_id}")
async def get_author(
    author_id: int,
    service: AuthorService = Depends(get_author_service),
) -> JSONResponse:
    """Get an author with their books."""
    return outcome_response(await service.get_author_detail(author_id))


@router.get("/author/{author_id}/update")
async def get_author_for_update(
    author_id: int,
    service: AuthorService = Depends(get_author_service),
) -> JSONResponse:
    """Get the current values for the author form."""
    return outcome_response(await service.get_author(author_id))


@router.post("/author/{author_id}/update")
async def update_author(
    author_id: int,
    form: FormFields = Depends(form_fields),
    service: AuthorService = Depends(get_author_service),
) -> JSONResponse:
    """Replace an author's fields."""
    return outcome_response(await service.update_author(author_id, form))


@router.get("/author/{author_id}/delete")
async def get_author_for_delete(
    author_id: int,
    service: AuthorService = Depends(get_author_service),
) -> JSONResponse:
    """Get an author and the books that would block deleting it."""
    return outcome_response(await service.get_author_detail(author_id))


@router.post("/author/{author_id}/delete")
async def delete_author(
    author_id: int,
    service: AuthorService = Depends(get_author_service),
) -> JSONResponse:
    """Delete an author that has no books."""
    return outcome_response(await service.delete_author(author_id))
