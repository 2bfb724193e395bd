import os

# main.py builds its Settings at import time
os.environ.setdefault("STRIPE_SECRET_KEY", "sk_test_dummy")

import pytest
from fastapi.testclient import TestClient

from ebook_payments.config import Settings
from ebook_payments.main import create_app

EBOOK_BYTES = b"%PDF-1.4 fake ebook content"


@pytest.fixture
def ebook_file(tmp_path):
    path = tmp_path / "ebooks" / "um-presente.pdf"
    path.parent.mkdir()
    path.write_bytes(EBOOK_BYTES)
    return path


@pytest.fixture
def settings(ebook_file):
    return Settings(stripe_secret_key="sk_test_123", ebook_path=ebook_file)


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as c:
        yield c
