"""
Pytest configuration and fixtures.
"""

import pytest
from app import create_app
from app.extensions import db
from app.services.auth_service import AuthService

BOOK = {
    "title": "Dune",
    "author": "Frank Herbert",
    "isbn": "9780441013593",
    "category": "Science Fiction",
    "publishedYear": 1965,
    "quantity": 5,
}


@pytest.fixture
def app(tmp_path):
    """Create a test Flask application backed by a per-test SQLite file."""
    app = create_app({
        "TESTING": True,
        "SQLALCHEMY_DATABASE_URI": f"sqlite:///{tmp_path / 'catalog.db'}",
        "JWT_SECRET_KEY": "test-jwt-secret-key-that-is-long-enough",
    })
    yield app
    with app.app_context():
        db.session.remove()
        db.engine.dispose()


@pytest.fixture
def client(app):
    """Create a test client."""
    return app.test_client()


@pytest.fixture
def ctx(app):
    """Push an app context for service/repository level tests."""
    with app.app_context():
        yield
        db.session.remove()


@pytest.fixture
def principal_id(ctx):
    _token, user = AuthService.register("librarian", "librarian@example.com", "secret")
    return user.id


@pytest.fixture
def auth_headers(client):
    resp = client.post("/auth/register", json={
        "username": "alice",
        "email": "alice@example.com",
        "password": "wonderland",
        "fullName": "Alice Liddell",
    })
    token = resp.get_json()["data"]["token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def book_payload():
    return dict(BOOK)
