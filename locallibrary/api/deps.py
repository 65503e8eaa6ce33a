"""Request dependencies for the catalog routes."""
from typing import Union

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from locallibrary.database import Database, get_database, get_db
from locallibrary.services import (
    AuthorService,
    BookInstanceService,
    BookService,
    CatalogService,
    GenreService,
)

FormFields = dict[str, Union[str, list[str]]]


async def form_fields(request: Request) -> FormFields:
    """Decode a form body the way the catalog forms expect.

    A key submitted once maps to its string, a repeated key (checkbox
    groups) maps to the list of its values. File uploads are ignored.
    """
    form = await request.form()
    fields: FormFields = {}
    for key in form.keys():
        values = [value for value in form.getlist(key) if isinstance(value, str)]
        if values:
            fields[key] = values[0] if len(values) == 1 else values
    return fields


def get_author_service(
    db: AsyncSession = Depends(get_db),
    database: Database = Depends(get_database),
) -> AuthorService:
    return AuthorService(db, database.timeout)


def get_genre_service(
    db: AsyncSession = Depends(get_db),
    database: Database = Depends(get_database),
) -> GenreService:
    return GenreService(db, database.timeout)


def get_book_service(
    db: AsyncSession = Depends(get_db),
    database: Database = Depends(get_database),
) -> BookService:
    return BookService(db, database.timeout)


def get_book_instance_service(
    db: AsyncSession = Depends(get_db),
    database: Database = Depends(get_database),
) -> BookInstanceService:
    return BookInstanceService(db, database.timeout)


def get_catalog_service(
    database: Database = Depends(get_database),
) -> CatalogService:
    return CatalogService(database.sessionmaker, database.timeout)
