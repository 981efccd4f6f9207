from functools import wraps
from flask import g
from flask_jwt_extended import verify_jwt_in_request, get_jwt_identity
from app.services.auth_service import AuthService

def principal_required(fn):
    """
    Bearer token -> g.principal_id.
    Missing/invalid/expired tokens are answered by the jwt loaders (401)
    before the view runs.
    """
    @wraps(fn)
    def wrapper(*args, **kwargs):
        verify_jwt_in_request()
        g.principal_id = AuthService.verify(get_jwt_identity())
        return fn(*args, **kwargs)
    return wrapper
