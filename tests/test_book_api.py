from datetime import timedelta

import pytest
from flask_jwt_extended import create_access_token
from sqlalchemy.exc import OperationalError

from app.extensions import db


def _post_book(client, headers, payload, **overrides):
    return client.post("/books", json={**payload, **overrides}, headers=headers)


@pytest.mark.parametrize("method,path", [
    ("get", "/books"),
    ("get", "/books/1"),
    ("post", "/books"),
    ("put", "/books/1"),
    ("delete", "/books/1"),
])
def test_routes_require_token(client, method, path):
    resp = getattr(client, method)(path, json={})

    assert resp.status_code == 401
    body = resp.get_json()
    assert body["success"] is False
    assert body["message"]


def test_invalid_token_is_rejected(client):
    resp = client.get("/books", headers={"Authorization": "Bearer not-a-jwt"})

    assert resp.status_code == 401
    assert resp.get_json() == {"success": False, "message": "Not authorized, token failed"}


def test_expired_token_is_rejected(app, client, auth_headers):
    with app.app_context():
        token = create_access_token(identity="1", expires_delta=timedelta(seconds=-1))

    resp = client.get("/books", headers={"Authorization": f"Bearer {token}"})

    assert resp.status_code == 401
    assert "expired" in resp.get_json()["message"]


def test_token_for_unknown_user_is_rejected(app, client):
    with app.app_context():
        token = create_access_token(identity="4242")

    resp = client.get("/books", headers={"Authorization": f"Bearer {token}"})

    assert resp.status_code == 401
    assert resp.get_json()["success"] is False


def test_list_empty(client, auth_headers):
    resp = client.get("/books", headers=auth_headers)

    assert resp.status_code == 200
    assert resp.get_json() == {"success": True, "count": 0, "data": []}


def test_create_and_get_book(client, auth_headers, book_payload):
    resp = _post_book(client, auth_headers, book_payload)

    assert resp.status_code == 201
    body = resp.get_json()
    assert body["success"] is True
    book = body["data"]
    assert book["quantity"] == 5
    assert book["available"] == 5
    assert book["publishedYear"] == 1965
    assert book["addedBy"]["username"] == "alice"
    assert book["addedBy"]["fullName"] == "Alice Liddell"
    assert book["createdAt"]

    got = client.get(f"/books/{book['id']}", headers=auth_headers)
    assert got.status_code == 200
    assert got.get_json()["data"] == book


def test_collection_accepts_trailing_slash(client, auth_headers, book_payload):
    assert client.post("/books/", json=book_payload, headers=auth_headers).status_code == 201
    assert client.get("/books/", headers=auth_headers).get_json()["count"] == 1


def test_list_counts_and_orders_newest_first(client, auth_headers, book_payload):
    _post_book(client, auth_headers, book_payload, isbn="isbn-1", title="First")
    _post_book(client, auth_headers, book_payload, isbn="isbn-2", title="Second")

    body = client.get("/books", headers=auth_headers).get_json()

    assert body["count"] == 2
    assert [b["title"] for b in body["data"]] == ["Second", "First"]


def test_duplicate_isbn_is_400(client, auth_headers, book_payload):
    _post_book(client, auth_headers, book_payload)

    resp = _post_book(client, auth_headers, book_payload)

    assert resp.status_code == 400
    assert resp.get_json() == {"success": False, "message": "Book with this ISBN already exists"}
    assert client.get("/books", headers=auth_headers).get_json()["count"] == 1


def test_missing_field_is_400(client, auth_headers, book_payload):
    del book_payload["category"]

    resp = _post_book(client, auth_headers, book_payload)

    assert resp.status_code == 400
    assert "category" in resp.get_json()["message"]


def test_non_object_body_is_400(client, auth_headers):
    resp = client.post("/books", json=["not", "an", "object"], headers=auth_headers)

    assert resp.status_code == 400


def test_get_unknown_book_is_404(client, auth_headers):
    resp = client.get("/books/999", headers=auth_headers)

    assert resp.status_code == 404
    assert resp.get_json() == {"success": False, "message": "Book not found"}


def test_non_numeric_id_is_404_envelope(client, auth_headers):
    resp = client.get("/books/abc", headers=auth_headers)

    assert resp.status_code == 404
    assert resp.get_json()["success"] is False


def test_update_book(client, auth_headers, book_payload):
    book_id = _post_book(client, auth_headers, book_payload).get_json()["data"]["id"]

    resp = client.put(f"/books/{book_id}", json={"available": 2, "addedBy": 99}, headers=auth_headers)

    assert resp.status_code == 200
    data = resp.get_json()["data"]
    assert data["available"] == 2
    assert data["quantity"] == 5
    assert data["addedBy"]["username"] == "alice"


def test_update_breaking_counters_is_400(client, auth_headers, book_payload):
    book_id = _post_book(client, auth_headers, book_payload).get_json()["data"]["id"]

    resp = client.put(f"/books/{book_id}", json={"quantity": 2}, headers=auth_headers)

    assert resp.status_code == 400
    stored = client.get(f"/books/{book_id}", headers=auth_headers).get_json()["data"]
    assert (stored["quantity"], stored["available"]) == (5, 5)


def test_update_unknown_book_is_404(client, auth_headers):
    resp = client.put("/books/999", json={"title": "x"}, headers=auth_headers)

    assert resp.status_code == 404


def test_delete_book(client, auth_headers, book_payload):
    book_id = _post_book(client, auth_headers, book_payload).get_json()["data"]["id"]

    resp = client.delete(f"/books/{book_id}", headers=auth_headers)

    assert resp.status_code == 200
    assert resp.get_json()["success"] is True
    assert client.get(f"/books/{book_id}", headers=auth_headers).status_code == 404
    assert client.delete(f"/books/{book_id}", headers=auth_headers).status_code == 404


def test_store_failure_is_500_envelope(client, auth_headers, book_payload, monkeypatch):
    def locked(*args, **kwargs):
        raise OperationalError("INSERT INTO books", {}, Exception("database is locked"))

    monkeypatch.setattr(type(db.session), "commit", locked)

    resp = _post_book(client, auth_headers, book_payload)

    assert resp.status_code == 500
    body = resp.get_json()
    assert body == {"success": False, "message": "Catalog store is unavailable"}


def test_health(client):
    resp = client.get("/health")

    assert resp.status_code == 200
    assert resp.get_json() == {"success": True, "status": "ok", "database": True}


def test_huge_quantity_is_400(client, auth_headers, book_payload):
    resp = _post_book(client, auth_headers, book_payload, quantity=10 ** 30)

    assert resp.status_code == 400
    assert "quantity is out of range" in resp.get_json()["message"]
    assert client.get("/books", headers=auth_headers).get_json()["count"] == 0


def test_huge_published_year_on_update_is_400(client, auth_headers, book_payload):
    book_id = _post_book(client, auth_headers, book_payload).get_json()["data"]["id"]

    resp = client.put(f"/books/{book_id}", json={"publishedYear": 10 ** 30}, headers=auth_headers)

    assert resp.status_code == 400
    assert resp.get_json()["success"] is False


def test_malformed_json_update_is_400(client, auth_headers, book_payload):
    book_id = _post_book(client, auth_headers, book_payload).get_json()["data"]["id"]

    resp = client.put(
        f"/books/{book_id}",
        data='{"quantity": 2,',
        headers={**auth_headers, "Content-Type": "application/json"},
    )

    assert resp.status_code == 400
    assert resp.get_json() == {"success": False, "message": "Malformed JSON body"}
    stored = client.get(f"/books/{book_id}", headers=auth_headers).get_json()["data"]
    assert stored["quantity"] == 5


def test_malformed_json_create_is_400(client, auth_headers):
    resp = client.post(
        "/books",
        data="{not json",
        headers={**auth_headers, "Content-Type": "application/json"},
    )

    assert resp.status_code == 400
    assert resp.get_json()["message"] == "Malformed JSON body"
