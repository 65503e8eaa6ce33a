"""Book instance API routes."""
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from locallibrary.api.deps import FormFields, form_fields, get_book_instance_service
from locallibrary.api.responses import outcome_response
from locallibrary.schemas.book_instance import BookInstanceWithBook
from locallibrary.services import BookInstanceService

router = APIRouter(tags=["Book instances"])


@router.get("/bookinstances")
async def list_book_instances(
    service: BookInstanceService = Depends(get_book_instance_service),
) -> JSONResponse:
    """List copies with their books."""
    return outcome_response(await service.list_book_instances())


@router.get("/bookinstance/create")
async def get_book_instance_form(
    service: BookInstanceService = Depends(get_book_instance_service),
) -> JSONResponse:
    """Books to choose from when creating a copy."""
    return outcome_response(await service.get_form_options())


@router.post("/bookinstance/create")
async def create_book_instance(
    form: FormFields = Depends(form_fields),
    service: BookInstanceService = Depends(get_book_instance_service),
) -> JSONResponse:
    """Create a copy of a book."""
    return outcome_response(
        await service.create_book_instance(form), status.HTTP_201_CREATED
    )


@router.get("/bookinstance/{instance_id}")
async def get_book_instance(
    instance_id: int,
    service: BookInstanceService = Depends(get_book_instance_service),
) -> JSONResponse:
    return outcome_response(await service.get_book_instance_detail(instance_id))


@router.get("/bookinstance/{instance_id}/update")
async def get_book_instance_for_update(
    instance_id: int,
    service: BookInstanceService = Depends(get_book_instance_service),
) -> JSONResponse:
    """Current copy plus the books to choose from."""
    detail = await service.get_book_instance_detail(instance_id)
    if not isinstance(detail, BookInstanceWithBook):
        return outcome_response(detail)
    options = await service.get_form_options()
    return JSONResponse(
        content={
            "bookinstance": detail.model_dump(mode="json"),
            **options.model_dump(mode="json"),
        }
    )


@router.post("/bookinstance/{instance_id}/update")
async def update_book_instance(
    instance_id: int,
    form: FormFields = Depends(form_fields),
    service: BookInstanceService = Depends(get_book_instance_service),
) -> JSONResponse:
    """Replace a copy's fields."""
    return outcome_response(await service.update_book_instance(instance_id, form))


@router.get("/bookinstance/{instance_id}/delete")
async def get_book_instance_for_delete(
    instance_id: int,
    service: BookInstanceService = Depends(get_book_instance_service),
) -> JSONResponse:
    return outcome_response(await service.get_book_instance_detail(instance_id))


@router.post("/bookinstance/{instance_id}/delete")
async def delete_book_instance(
    instance_id: int,
    service: BookInstanceService = Depends(get_book_instance_service),
) -> JSONResponse:
    """Delete a copy."""
    return outcome_response(await service.delete_book_instance(instance_id))
