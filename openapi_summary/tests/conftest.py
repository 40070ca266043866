import pytest
from fastapi.testclient import TestClient

from openapi_summary.config import Settings, get_settings
from openapi_summary.main import app

PETSTORE_YAML = """\
openapi: 3.0.3
info:
  title: Petstore
  version: 1.0.0
paths:
  /pets:
    get:
      summary: List pets
      responses:
        '200':
          description: OK
    post:
      summary: Create a pet
      responses:
        '201':
          description: Created
"""

PETSTORE_JSON = """\
{
  "swagger": "2.0",
  "info": {"title": "Petstore", "version": "1.0.0"},
  "paths": {
    "/pets/{petId}": {
      "delete": {"parameters": [{"name": "petId", "in": "path", "required": true, "type": "string"}],
                 "responses": {"204": {"description": "Deleted"}}},
      "get": {"parameters": [{"name": "petId", "in": "path", "required": true, "type": "string"}],
              "responses": {"200": {"description": "OK"}}}
    },
    "/pets": {
      "put": {"responses": {"200": {"description": "OK"}}}
    }
  }
}
"""


@pytest.fixture
def scratch_dir(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture
def settings(scratch_dir):
    return Settings(SCRATCH_DIR=scratch_dir)


@pytest.fixture
def client(settings):
    app.dependency_overrides[get_settings] = lambda: settings
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_settings, None)
