# app/controllers/book_controller.py

from flask import Blueprint, request, jsonify, g
from app.errors import ValidationError
from app.services.book_service import BookService
from app.utils.decorators import principal_required

book_bp = Blueprint("books", __name__)


def _json_body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        if request.get_data():
            raise ValidationError("Malformed JSON body")
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


@book_bp.get("", endpoint="list_books")
@book_bp.get("/", endpoint="list_books")
@principal_required
def list_books():
    books = BookService.list_books()
    return jsonify({
        "success": True,
        "count": len(books),
        "data": [b.to_dict() for b in books],
    })


@book_bp.get("/<int:book_id>")
@principal_required
def get_book(book_id: int):
    b = BookService.get_book(book_id)
    return jsonify({"success": True, "data": b.to_dict()})


@book_bp.post("", endpoint="create_book")
@book_bp.post("/", endpoint="create_book")
@principal_required
def create_book():
    b = BookService.create_book(g.principal_id, _json_body())
    return jsonify({
        "success": True,
        "message": "Book added successfully",
        "data": b.to_dict(),
    }), 201


@book_bp.put("/<int:book_id>")
@principal_required
def update_book(book_id: int):
    b = BookService.update_book(book_id, _json_body())
    return jsonify({
        "success": True,
        "message": "Book updated successfully",
        "data": b.to_dict(),
    })


@book_bp.delete("/<int:book_id>")
@principal_required
def delete_book(book_id: int):
    BookService.delete_book(book_id)
    return jsonify({"success": True, "message": "Book deleted successfully"})
