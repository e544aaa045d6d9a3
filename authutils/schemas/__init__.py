from authutils.schemas.auth import (
    AuthenticationResult,
    AuthError,
    AuthFailure,
    AuthorizationRequest,
    AuthSuccess,
    AuthToken,
    JWTPayload,
    KeycloakToken,
    PKCEChallenge,
    RoleAccess,
    User,
    parse_authentication_result,
)

__all__ = [
    "AuthenticationResult",
    "AuthError",
    "AuthFailure",
    "AuthorizationRequest",
    "AuthSuccess",
    "AuthToken",
    "JWTPayload",
    "KeycloakToken",
    "PKCEChallenge",
    "RoleAccess",
    "User",
    "parse_authentication_result",
]
