import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from pydantic import BaseModel

from agent_lab.errors import register_error_handlers
from agent_lab.services.common import InvalidInputError, coerce_uuid
from agent_lab.services.repository import DuplicateError, NotFoundError
from agent_lab.services.resources import InvalidSortError


class _Strict(BaseModel):
    count: int


@pytest.fixture()
def client():
    app = FastAPI()
    register_error_handlers(app)

    @app.get("/missing")
    def missing():
        raise NotFoundError("agent not found")

    @app.get("/duplicate")
    def duplicate():
        raise DuplicateError()

    @app.get("/bad-sort")
    def bad_sort():
        raise InvalidSortError("Unknown sort field(s): secret.")

    @app.get("/bad-id")
    def bad_id():
        coerce_uuid("nope")

    @app.get("/model-bug")
    def model_bug():
        _Strict(count="many")

    @app.get("/value-error")
    def value_error():
        raise ValueError("internal")

    return TestClient(app, raise_server_exceptions=False)


@pytest.mark.parametrize(
    ("path", "status_code"),
    [("/missing", 404), ("/duplicate", 409), ("/bad-sort", 400), ("/bad-id", 400)],
)
def test_service_errors_map_to_status(client, path, status_code):
    assert client.get(path).status_code == status_code


def test_error_body_carries_message(client):
    assert client.get("/bad-sort").json() == {"detail": "Unknown sort field(s): secret."}


@pytest.mark.parametrize("path", ["/model-bug", "/value-error"])
def test_internal_value_errors_are_server_errors(client, path):
    assert client.get(path).status_code == 500


def test_invalid_sort_is_invalid_input():
    assert issubclass(InvalidSortError, InvalidInputError)
    assert issubclass(InvalidInputError, ValueError)
