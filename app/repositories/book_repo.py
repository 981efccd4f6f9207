from contextlib import contextmanager

from flask import current_app
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from app.errors import ConflictError, NotFound, Unavailable, ValidationError
from app.extensions import db
from app.models.book import Book


def _is_unique_violation(err: IntegrityError) -> bool:
    text = str(err.orig).lower()
    return "unique" in text or "duplicate" in text


@contextmanager
def _store_call(action: str):
    """
    Classifies SQLAlchemy failures into the catalog error taxonomy.
    The session is rolled back before anything is raised.
    """
    try:
        yield
    except IntegrityError as e:
        db.session.rollback()
        if _is_unique_violation(e):
            current_app.logger.warning(f"[BookRepo] {action}: isbn unique index hit")
            raise ConflictError(detail=str(e.orig)) from e
        current_app.logger.warning(f"[BookRepo] {action}: constraint failed: {e.orig}")
        if "ck_books_" in str(e.orig):
            message = "Available copies must be between 0 and quantity"
        else:
            message = "Book record violates a store constraint"
        raise ValidationError(message, detail=str(e.orig)) from e
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f"[BookRepo] {action} failed: {e}")
        raise Unavailable(detail=str(e)) from e


class BookRepo:
    @staticmethod
    def find_by_id(book_id: int):
        with _store_call("find_by_id"):
            return db.session.get(Book, book_id)

    @staticmethod
    def find_by_isbn(isbn: str):
        with _store_call("find_by_isbn"):
            return Book.query.filter_by(isbn=isbn).first()

    @staticmethod
    def list_all_ordered_by_created_desc():
        with _store_call("list_all"):
            return Book.query.order_by(Book.created_at.desc(), Book.id.desc()).all()

    @staticmethod
    def insert(book: Book):
        with _store_call("insert"):
            db.session.add(book)
            db.session.commit()
        return book

    @staticmethod
    def update(book_id: int, fields: dict):
        book = BookRepo.find_by_id(book_id)
        if not book:
            raise NotFound()

        with _store_call("update"):
            for k, v in fields.items():
                setattr(book, k, v)
            db.session.commit()
        return book

    @staticmethod
    def delete(book_id: int):
        book = BookRepo.find_by_id(book_id)
        if not book:
            raise NotFound()

        with _store_call("delete"):
            db.session.delete(book)
            db.session.commit()
