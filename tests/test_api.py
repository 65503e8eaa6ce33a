"""API tests."""
from httpx import AsyncClient


async def _create_author(client: AsyncClient, first="Isaac", family="Asimov") -> dict:
    response = await client.post(
        "/catalog/author/create",
        data={"first_name": first, "family_name": family, "date_of_birth": "1920-01-02"},
    )
    assert response.status_code == 201
    return response.json()


async def _create_genre(client: AsyncClient, name="Fantasy") -> dict:
    response = await client.post("/catalog/genre/create", data={"name": name})
    assert response.status_code in (200, 201)
    return response.json()["genre"]


async def _create_book(client: AsyncClient, author_id: int, genres=(), title="T") -> dict:
    response = await client.post(
        "/catalog/book/create",
        data={
            "title": title,
            "author": str(author_id),
            "summary": "Summary",
            "isbn": "123",
            "genre": [str(g) for g in genres],
        },
    )
    assert response.status_code == 201
    return response.json()


async def test_health_check(client: AsyncClient):
    """Test health check endpoint."""
    response = await client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"


async def test_root(client: AsyncClient):
    """Test root endpoint."""
    response = await client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert "name" in data
    assert "version" in data


async def test_create_author(client: AsyncClient):
    """Test author creation."""
    data = await _create_author(client)

    assert data["name"] == "Asimov, Isaac"
    assert data["lifespan"] == "Jan 2, 1920 - Present"
    assert data["date_of_birth"] == "1920-01-02"
    assert data["url"] == f"/catalog/author/{data['id']}"


async def test_create_author_validation_failure(client: AsyncClient):
    response = await client.post(
        "/catalog/author/create",
        data={"first_name": "<b>", "family_name": "", "date_of_birth": "yesterday"},
    )

    assert response.status_code == 422
    data = response.json()
    assert data["outcome"] == "validation_failure"
    assert [(e["field"], e["message"]) for e in data["errors"]] == [
        ("first_name", "First name has non-alphanumeric characters."),
        ("family_name", "Family name must be specified."),
        ("date_of_birth", "Invalid date of birth"),
    ]
    assert data["values"]["first_name"] == "&lt;b&gt;"


async def test_missing_author_is_404(client: AsyncClient):
    response = await client.get("/catalog/author/41")

    assert response.status_code == 404
    data = response.json()
    assert data["outcome"] == "not_found"
    assert data["detail"] == "Author not found"


async def test_author_update_replaces_whole_record(client: AsyncClient):
    author = await _create_author(client)

    response = await client.post(
        f"/catalog/author/{author['id']}/update",
        data={"first_name": "Isaac", "family_name": "Asimov"},
    )

    assert response.status_code == 200
    assert response.json()["date_of_birth"] is None
    current = await client.get(f"/catalog/author/{author['id']}/update")
    assert current.json()["lifespan"] == " - Present"


async def test_genre_scenario(client: AsyncClient):
    """Dedup on create, then delete guarded by the referencing book."""
    first = await client.post("/catalog/genre/create", data={"name": "Fantasy"})
    assert first.status_code == 201
    genre_id = first.json()["genre"]["id"]

    second = await client.post("/catalog/genre/create", data={"name": "Fantasy"})
    assert second.status_code == 200
    assert second.json() == {"genre": first.json()["genre"], "created": False}

    genres = (await client.get("/catalog/genres")).json()
    assert [g["id"] for g in genres] == [genre_id]

    author = await _create_author(client)
    book = await _create_book(client, author["id"], genres=[genre_id], title="T")
    assert book["genre_ids"] == [genre_id]

    blocked = await client.post(f"/catalog/genre/{genre_id}/delete")
    assert blocked.status_code == 409
    data = blocked.json()
    assert data["outcome"] == "reference_blocked"
    assert data["blocking"] == [{"id": book["id"], "label": "T", "url": book["url"]}]

    deleted_book = await client.post(f"/catalog/book/{book['id']}/delete")
    assert deleted_book.status_code == 200
    assert deleted_book.json()["outcome"] == "deleted"

    deleted_genre = await client.post(f"/catalog/genre/{genre_id}/delete")
    assert deleted_genre.status_code == 200
    assert (await client.get(f"/catalog/genre/{genre_id}")).status_code == 404


async def test_delete_author_with_books_is_refused(client: AsyncClient):
    author = await _create_author(client)
    book = await _create_book(client, author["id"])

    preview = await client.get(f"/catalog/author/{author['id']}/delete")
    assert [b["id"] for b in preview.json()["books"]] == [book["id"]]

    response = await client.post(f"/catalog/author/{author['id']}/delete")
    assert response.status_code == 409
    assert (await client.get(f"/catalog/author/{author['id']}")).status_code == 200
    assert (await client.get(f"/catalog/book/{book['id']}")).status_code == 200


async def test_book_update_with_no_genres_checked(client: AsyncClient):
    author = await _create_author(client)
    genre = await _create_genre(client)
    book = await _create_book(client, author["id"], genres=[genre["id"]])

    response = await client.post(
        f"/catalog/book/{book['id']}/update",
        data={"title": "T", "author": str(author["id"]), "summary": "S", "isbn": "1"},
    )

    assert response.status_code == 200
    assert response.json()["genre_ids"] == []

    form = (await client.get(f"/catalog/book/{book['id']}/update")).json()
    assert form["book"]["id"] == book["id"]
    assert [g["checked"] for g in form["genres"]] == [False]


async def test_book_list_and_form_options(client: AsyncClient):
    author = await _create_author(client)
    await _create_genre(client, "Horror")
    await _create_book(client, author["id"], title="Foundation")

    books = (await client.get("/catalog/books")).json()
    assert [(b["title"], b["author"]["name"]) for b in books] == [
        ("Foundation", "Asimov, Isaac"),
    ]

    options = (await client.get("/catalog/book/create")).json()
    assert [a["name"] for a in options["authors"]] == ["Asimov, Isaac"]
    assert [g["name"] for g in options["genres"]] == ["Horror"]


async def test_book_instance_lifecycle(client: AsyncClient):
    author = await _create_author(client)
    book = await _create_book(client, author["id"], title="Foundation")

    bad = await client.post(
        "/catalog/bookinstance/create",
        data={"book": str(book["id"]), "imprint": "Ace", "due_back": "13/45/2020"},
    )
    assert bad.status_code == 422
    assert [e["field"] for e in bad.json()["errors"]] == ["due_back"]
    assert bad.json()["values"]["imprint"] == "Ace"

    created = await client.post(
        "/catalog/bookinstance/create",
        data={
            "book": str(book["id"]),
            "imprint": "Ace",
            "status": "Available",
            "due_back": "2024-12-25",
        },
    )
    assert created.status_code == 201
    copy = created.json()
    assert copy["book"]["title"] == "Foundation"
    assert copy["due_back_formatted"] == "Dec 25, 2024"

    listed = (await client.get("/catalog/bookinstances")).json()
    assert [c["id"] for c in listed] == [copy["id"]]

    blocked = await client.post(f"/catalog/book/{book['id']}/delete")
    assert blocked.status_code == 409
    assert blocked.json()["blocked_by"] == "BookInstance"

    removed = await client.post(f"/catalog/bookinstance/{copy['id']}/delete")
    assert removed.status_code == 200
    assert (await client.get(f"/catalog/bookinstance/{copy['id']}")).status_code == 404


async def test_catalog_home_counts(client: AsyncClient):
    author = await _create_author(client)
    book = await _create_book(client, author["id"])
    await client.post(
        "/catalog/bookinstance/create",
        data={"book": str(book["id"]), "imprint": "Ace", "status": "Reserved"},
    )

    response = await client.get("/catalog")

    assert response.status_code == 200
    assert response.json() == {
        "book_count": 1,
        "book_instance_count": 1,
        "book_instance_available_count": 0,
        "author_count": 1,
        "genre_count": 0,
    }


async def test_author_and_genre_create_forms(client: AsyncClient):
    author_form = await client.get("/catalog/author/create")
    assert author_form.status_code == 200
    assert author_form.json() == {
        "fields": ["first_name", "family_name", "date_of_birth", "date_of_death"],
    }

    genre_form = await client.get("/catalog/genre/create")
    assert genre_form.status_code == 200
    assert genre_form.json() == {"fields": ["name"]}


async def test_genre_name_length_is_checked_before_escaping(client: AsyncClient):
    created = await client.post("/catalog/genre/create", data={"name": "&" * 100})
    assert created.status_code == 201
    genre = created.json()["genre"]
    assert genre["name"] == "&amp;" * 100

    stored = await client.get(f"/catalog/genre/{genre['id']}/update")
    assert stored.json()["name"] == "&amp;" * 100

    too_long = await client.post("/catalog/genre/create", data={"name": "&" * 101})
    assert too_long.status_code == 422
    assert too_long.json()["errors"][0]["message"] == (
        "Genre name must be at most 100 characters."
    )
