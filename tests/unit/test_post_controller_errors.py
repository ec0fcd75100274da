from httpx import AsyncClient
import pytest

from core.exceptions import DatabaseError, NotFoundError, ValidationError


@pytest.mark.unit
@pytest.mark.anyio
async def test_list_posts_database_error(unit_client: AsyncClient, monkeypatch):
    async def mock_list_posts(*args, **kwargs):
        raise DatabaseError("connection refused")

    monkeypatch.setattr("services.post_service.list_posts", mock_list_posts)

    response = await unit_client.get("/posts/")

    assert response.status_code == 500
    assert response.text == "Error fetching posts: connection refused"


@pytest.mark.unit
@pytest.mark.anyio
async def test_get_post_not_found(unit_client: AsyncClient, monkeypatch):
    async def mock_get_post(*args, **kwargs):
        raise NotFoundError("Post not found")

    monkeypatch.setattr("services.post_service.get_post", mock_get_post)

    response = await unit_client.get("/posts/abc")

    assert response.status_code == 404
    assert response.text == "Post not found"


@pytest.mark.unit
@pytest.mark.anyio
async def test_get_post_unexpected_error(unit_client: AsyncClient, monkeypatch):
    async def mock_get_post(*args, **kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr("services.post_service.get_post", mock_get_post)

    response = await unit_client.get("/posts/abc")

    assert response.status_code == 500
    assert response.text == "Error fetching post: boom"


@pytest.mark.unit
@pytest.mark.anyio
async def test_create_post_database_error_is_logged(unit_client: AsyncClient, monkeypatch, caplog):
    async def mock_create_post(*args, **kwargs):
        raise DatabaseError("disk full")

    monkeypatch.setattr("services.post_service.create_post", mock_create_post)

    with caplog.at_level("ERROR", logger="api.utils.failure_context"):
        response = await unit_client.post("/posts/new", data={"title": "Hello", "body": "World"})

    assert response.status_code == 500
    assert response.text == "Error creating post: disk full"
    assert any("Error creating post" in r.getMessage() for r in caplog.records)


@pytest.mark.unit
@pytest.mark.anyio
async def test_create_post_validation_error_skips_service(unit_client: AsyncClient, monkeypatch):
    async def mock_create_post(*args, **kwargs):
        raise AssertionError("service must not be called")

    monkeypatch.setattr("services.post_service.create_post", mock_create_post)

    response = await unit_client.post("/posts/new", data={"title": "", "body": ""})

    assert response.status_code == 400
    assert "Title is required." in response.text
    assert "Body is required." in response.text


@pytest.mark.unit
@pytest.mark.anyio
async def test_edit_form_not_found(unit_client: AsyncClient, monkeypatch):
    async def mock_get_post_form(*args, **kwargs):
        raise NotFoundError("Post not found")

    monkeypatch.setattr("services.post_service.get_post_form", mock_get_post_form)

    response = await unit_client.get("/posts/abc/edit")

    assert response.status_code == 404


@pytest.mark.unit
@pytest.mark.anyio
async def test_edit_form_unexpected_error(unit_client: AsyncClient, monkeypatch):
    async def mock_get_post_form(*args, **kwargs):
        raise DatabaseError("timeout")

    monkeypatch.setattr("services.post_service.get_post_form", mock_get_post_form)

    response = await unit_client.get("/posts/abc/edit")

    assert response.status_code == 500
    assert response.text == "Error: timeout"


@pytest.mark.unit
@pytest.mark.anyio
async def test_update_post_not_found(unit_client: AsyncClient, monkeypatch):
    async def mock_update_post(*args, **kwargs):
        raise NotFoundError("Post not found")

    monkeypatch.setattr("services.post_service.update_post", mock_update_post)

    response = await unit_client.post("/posts/abc/update", data={"title": "New", "body": "Text"})

    assert response.status_code == 404


@pytest.mark.unit
@pytest.mark.anyio
async def test_update_post_database_error(unit_client: AsyncClient, monkeypatch):
    async def mock_update_post(*args, **kwargs):
        raise DatabaseError("deadlock")

    monkeypatch.setattr("services.post_service.update_post", mock_update_post)

    response = await unit_client.post("/posts/abc/update", data={"title": "New", "body": "Text"})

    assert response.status_code == 500
    assert response.text == "Error updating post: deadlock"


@pytest.mark.unit
@pytest.mark.anyio
async def test_delete_post_not_found(unit_client: AsyncClient, monkeypatch):
    async def mock_delete_post(*args, **kwargs):
        raise NotFoundError("Post not found")

    monkeypatch.setattr("services.post_service.delete_post", mock_delete_post)

    response = await unit_client.post("/posts/abc/delete")

    assert response.status_code == 404


@pytest.mark.unit
@pytest.mark.anyio
async def test_delete_post_database_error(unit_client: AsyncClient, monkeypatch):
    async def mock_delete_post(*args, **kwargs):
        raise DatabaseError("read-only")

    monkeypatch.setattr("services.post_service.delete_post", mock_delete_post)

    response = await unit_client.post("/posts/abc/delete")

    assert response.status_code == 500
    assert response.text == "Error deleting post: read-only"


@pytest.mark.unit
@pytest.mark.anyio
async def test_render_failure_is_reported(unit_client: AsyncClient, monkeypatch):
    async def mock_list_posts(*args, **kwargs):
        return []

    def broken_render(*args, **kwargs):
        raise RuntimeError("template missing")

    monkeypatch.setattr("services.post_service.list_posts", mock_list_posts)
    monkeypatch.setattr("api.post_controller.render", broken_render)

    response = await unit_client.get("/posts/")

    assert response.status_code == 500
    assert response.text == "Error fetching posts: template missing"


@pytest.mark.unit
@pytest.mark.anyio
async def test_update_post_service_validation_error_stays_client_error(unit_client: AsyncClient, monkeypatch):
    async def mock_update_post(*args, **kwargs):
        raise ValidationError("Title is required.")

    monkeypatch.setattr("services.post_service.update_post", mock_update_post)

    response = await unit_client.post("/posts/abc/update", data={"title": "New", "body": "Text"})

    assert response.status_code == 400
    assert response.text == "Title is required."
