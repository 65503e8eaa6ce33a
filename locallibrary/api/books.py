"""Book API routes."""
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from locallibrary.api.deps import FormFields, form_fields, get_book_service
from locallibrary.api.responses import outcome_response
from locallibrary.schemas.book import BookDetail, BookFormOptions
from locallibrary.services import BookService

router = APIRouter(tags=["Books"])


@router.get("/books")
async def list_books(
    service: BookService = Depends(get_book_service),
) -> JSONResponse:
    """List books with their authors."""
    return outcome_response(await service.list_books())


@router.get("/book/create")
async def get_book_form(
    service: BookService = Depends(get_book_service),
) -> JSONResponse:
    """Authors and genres to choose from when creating a book."""
    return outcome_response(await service.get_form_options())


@router.post("/book/create")
async def create_book(
    form: FormFields = Depends(form_fields),
    service: BookService = Depends(get_book_service),
) -> JSONResponse:
    """Create a book."""
    return outcome_response(await service.create_book(form), status.HTTP_201_CREATED)


@router.get("/book/{book_id}")
async def get_book(
    book_id: int,
    service: BookService = Depends(get_book_service),
) -> JSONResponse:
    """Get a book with its author, genres and copies."""
    return outcome_response(await service.get_book_detail(book_id))


@router.get("/book/{book_id}/update")
async def get_book_for_update(
    book_id: int,
    service: BookService = Depends(get_book_service),
) -> JSONResponse:
    """Current book plus form choices with its genres checked."""
    detail = await service.get_book_detail(book_id)
    if not isinstance(detail, BookDetail):
        return outcome_response(detail)
    options = await service.get_form_options(book_id)
    if not isinstance(options, BookFormOptions):
        return outcome_response(options)
    return JSONResponse(
        content={
            "book": detail.book.model_dump(mode="json"),
            **options.model_dump(mode="json"),
        }
    )


@router.post("/book/{book_id}/update")
async def update_book(
    book_id: int,
    form: FormFields = Depends(form_fields),
    service: BookService = Depends(get_book_service),
) -> JSONResponse:
    """Replace a book's fields and genres."""
    return outcome_response(await service.update_book(book_id, form))


@router.get("/book/{book_id}/delete")
async def get_book_for_delete(
    book_id: int,
    service: BookService = Depends(get_book_service),
) -> JSONResponse:
    """Get a book and the copies that would block deleting it."""
    return outcome_response(await service.get_book_detail(book_id))


@router.post("/book/{book_id}/delete")
async def delete_book(
    book_id: int,
    service: BookService = Depends(get_book_service),
) -> JSONResponse:
    """Delete a book that has no copies."""
    return outcome_response(await service.delete_book(book_id))
