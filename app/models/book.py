from datetime import datetime
from app.extensions import db

class Book(db.Model):
    __tablename__ = "books"
    __table_args__ = (
        # counters are validated in BookService too; the db is the last line
        db.CheckConstraint("quantity >= 0", name="ck_books_quantity_non_negative"),
        db.CheckConstraint("available >= 0 AND available <= quantity", name="ck_books_available_range"),
    )

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False, index=True)
    author = db.Column(db.String(200), nullable=False)
    # unique index: concurrent inserts with the same isbn -> IntegrityError
    isbn = db.Column(db.String(64), unique=True, nullable=False, index=True)
    category = db.Column(db.String(100), nullable=False)
    published_year = db.Column(db.Integer, nullable=False)

    quantity = db.Column(db.Integer, nullable=False, default=1)
    available = db.Column(db.Integer, nullable=False, default=1)

    added_by = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, index=True)

    creator = db.relationship("User", lazy="joined")

    def to_dict(self):
        creator = self.creator
        return {
            "id": self.id,
            "title": self.title,
            "author": self.author,
            "isbn": self.isbn,
            "category": self.category,
            "publishedYear": self.published_year,
            "quantity": self.quantity,
            "available": self.available,
            "addedBy": {
                "id": self.added_by,
                "username": creator.username if creator else None,
                "fullName": creator.full_name if creator else None,
            },
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
