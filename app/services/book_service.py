from datetime import datetime

from flask import current_app

from app.errors import ConflictError, NotFound, ValidationError
from app.models.book import Book
from app.repositories.book_repo import BookRepo
from app.utils.validators import BookValidator


class BookService:
    @staticmethod
    def list_books():
        return BookRepo.list_all_ordered_by_created_desc()

    @staticmethod
    def get_book(book_id: int):
        book = BookRepo.find_by_id(book_id)
        if not book:
            raise NotFound()
        return book

    @staticmethod
    def _ensure_isbn_free(isbn: str, book_id: int | None = None):
        existing = BookRepo.find_by_isbn(isbn)
        if existing and existing.id != book_id:
            raise ConflictError()

    @staticmethod
    def create_book(principal_id: int, data: dict):
        fields, errors = BookValidator.validate_create(data)
        if errors:
            current_app.logger.warning(f"[BookService] create rejected: {errors}")
            raise ValidationError("; ".join(errors))

        # pre-check gives a clean message; the unique index still
        # decides when two inserts race past it
        BookService._ensure_isbn_free(fields["isbn"])

        book = Book(
            **fields,
            available=fields["quantity"],
            added_by=principal_id,
            created_at=datetime.utcnow(),
        )
        BookRepo.insert(book)
        current_app.logger.info(f"[BookService] book {book.id} ({book.isbn}) added by user {principal_id}")
        return book

    @staticmethod
    def update_book(book_id: int, data: dict):
        book = BookService.get_book(book_id)

        changes, errors = BookValidator.validate_update(data)
        if errors:
            current_app.logger.warning(f"[BookService] update of {book_id} rejected: {errors}")
            raise ValidationError("; ".join(errors))

        # merge-then-validate: the resulting record must hold the invariant
        quantity = changes.get("quantity", book.quantity)
        available = changes.get("available", book.available)
        if available > quantity:
            raise ValidationError(
                f"Available copies ({available}) cannot exceed quantity ({quantity})"
            )

        if "isbn" in changes and changes["isbn"] != book.isbn:
            BookService._ensure_isbn_free(changes["isbn"], book_id=book.id)

        if not changes:
            return book

        book = BookRepo.update(book_id, changes)
        current_app.logger.info(f"[BookService] book {book_id} updated: {sorted(changes)}")
        return book

    @staticmethod
    def delete_book(book_id: int):
        BookRepo.delete(book_id)
        current_app.logger.info(f"[BookService] book {book_id} deleted")
