import pytest
from fastapi.testclient import TestClient
from shopform.api import create_app
from shopform.domain import shopform
from shopform.media import reset_image_store, set_image_store
from shopform.media.store import ImageStore


@pytest.fixture()
def image_store(tmp_path):
    store = ImageStore(directory=tmp_path / "uploads", max_bytes=1024)
    set_image_store(store)
    yield store
    reset_image_store()


@pytest.fixture()
def client(image_store):
    return TestClient(create_app(shopform))
