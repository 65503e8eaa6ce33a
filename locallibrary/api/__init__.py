"""API routes."""
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from locallibrary.api import authors, book_instances, books, genres
from locallibrary.api.deps import get_catalog_service
from locallibrary.api.responses import outcome_response
from locallibrary.services import CatalogService

api_router = APIRouter(prefix="/catalog")


@api_router.get("", tags=["Catalog"])
async def catalog_home(
    service: CatalogService = Depends(get_catalog_service),
) -> JSONResponse:
    """Record counts for the catalog home page."""
    return outcome_response(await service.get_summary())


api_router.include_router(authors.router)
api_router.include_router(genres.router)
api_router.include_router(books.router)
api_router.include_router(book_instances.router)
