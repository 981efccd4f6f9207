from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from app.errors import ConflictError, Unavailable
from app.models.user import User
from app.extensions import db

class UserRepo:
    @staticmethod
    def get_by_username(username: str):
        return User.query.filter_by(username=username).first()

    @staticmethod
    def get_by_email(email: str):
        return User.query.filter_by(email=email).first()

    @staticmethod
    def get_by_username_or_email(value: str):
        return User.query.filter(or_(User.username == value, User.email == value)).first()

    @staticmethod
    def get_by_id(user_id: int):
        return db.session.get(User, user_id)

    @staticmethod
    def create(user: User):
        try:
            db.session.add(user)
            db.session.commit()
        except IntegrityError as e:
            db.session.rollback()
            raise ConflictError("Username or email already registered", detail=str(e.orig)) from e
        except SQLAlchemyError as e:
            db.session.rollback()
            raise Unavailable(detail=str(e)) from e
        return user
