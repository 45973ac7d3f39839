"""Identity extraction and authorization decorators."""
from dataclasses import dataclass
from functools import wraps
from flask import current_app
from flask_jwt_extended import get_jwt, get_jwt_identity, verify_jwt_in_request
from flask_limiter.util import get_remote_address
from schoolhub.models.user import UserRole
from schoolhub.utils.exceptions import ForbiddenError
from schoolhub.utils.helpers import error_response

@dataclass(frozen=True)
class Identity:
    """Authenticated caller, passed explicitly into every service operation."""
    user_id: int
    role: UserRole

    def require(self, *roles: UserRole) -> None:
        """Raise ForbiddenError unless the caller holds one of the roles."""
        if self.role not in roles:
            allowed = ', '.join(role.value for role in roles)
            raise ForbiddenError(f"This action requires role: {allowed}")

def current_identity() -> Identity:
    """Build the caller identity from the verified JWT."""
    claims = get_jwt()
    role_claim = current_app.config.get('JWT_ROLE_CLAIM', 'role')
    return Identity(
        user_id=int(get_jwt_identity()),
        role=UserRole(claims[role_claim])
    )

def identity_required(f):
    """Decorator that verifies the JWT and injects ``identity`` into the view."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        verify_jwt_in_request()

        try:
            identity = current_identity()
        except (KeyError, TypeError, ValueError):
            return error_response("Token does not carry a valid identity", 401)

        return f(*args, identity=identity, **kwargs)
    return decorated_function

def identity_or_remote_address() -> str:
    """Rate limit key: the token subject when present, else the client address."""
    verify_jwt_in_request(optional=True)
    return get_jwt_identity() or get_remote_address()
