from werkzeug.security import generate_password_hash, check_password_hash
from flask import current_app
from flask_jwt_extended import create_access_token
from app.errors import ConflictError, Unauthenticated
from app.models.user import User
from app.repositories.user_repo import UserRepo

class AuthService:
    @staticmethod
    def register(username: str, email: str, password: str, full_name: str | None = None):
        if UserRepo.get_by_username(username) or UserRepo.get_by_email(email):
            raise ConflictError("Username or email already registered")

        user = User(
            username=username,
            email=email,
            full_name=full_name or None,
            password_hash=generate_password_hash(password),
        )
        UserRepo.create(user)
        current_app.logger.info(f"[AuthService] user {user.id} registered")
        return AuthService.issue_token(user), user

    @staticmethod
    def login(username_or_email: str, password: str):
        user = UserRepo.get_by_username_or_email(username_or_email)
        if not user or not check_password_hash(user.password_hash, password):
            raise Unauthenticated("Invalid credentials")
        return AuthService.issue_token(user), user

    @staticmethod
    def issue_token(user: User) -> str:
        return create_access_token(
            identity=str(user.id),
            additional_claims={"username": user.username}
        )

    @staticmethod
    def verify(identity) -> int:
        """
        Resolves a verified token identity to a principal id.
        A token whose user no longer exists is treated as invalid.
        """
        try:
            user_id = int(identity)
        except (TypeError, ValueError):
            raise Unauthenticated()
        if not UserRepo.get_by_id(user_id):
            raise Unauthenticated("User not found")
        return user_id
