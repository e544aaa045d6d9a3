from collections.abc import Mapping
from datetime import datetime
from typing import Any, Literal
from urllib.parse import urlencode

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    JsonValue,
    TypeAdapter,
    field_validator,
    model_validator,
)

from authutils.core.datetime_utils import from_epoch, get_expiry, is_expired, utc_now
from authutils.services.email_validation import ValidationResult, normalize, validate

CodeChallengeMethod = Literal["S256", "plain"]


class User(BaseModel):
    """Authenticated user account."""

    id: str
    email: str
    first_name: str
    last_name: str
    roles: list[str] = Field(default_factory=list)
    is_active: bool = True
    created_at: datetime = Field(default_factory=utc_now)
    last_login_at: datetime | None = None

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        result = validate(v)
        if not result.is_valid:
            raise ValueError(result.errors[0])
        return normalize(v)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def has_role(self, role: str) -> bool:
        return role in self.roles


class AuthToken(BaseModel):
    """OAuth token set as returned by the token endpoint."""

    access_token: str
    refresh_token: str | None = None
    token_type: Literal["Bearer", "Basic"] = "Bearer"
    expires_in: int = Field(ge=0)
    expires_at: datetime
    scope: list[str] | None = None

    @classmethod
    def from_token_response(cls, data: Mapping[str, Any]) -> "AuthToken":
        """
        Build from a raw token endpoint response.

        Token endpoints send ``token_type`` in any case and ``scope`` as a
        space-separated string; ``expires_at`` is computed from ``expires_in``.
        """
        expires_in = int(data.get("expires_in", 0))
        scope = data.get("scope")
        if isinstance(scope, str):
            scope = scope.split()

        return cls(
            access_token=data["access_token"],
            refresh_token=data.get("refresh_token"),
            token_type=str(data.get("token_type", "Bearer")).capitalize(),
            expires_in=expires_in,
            expires_at=get_expiry(seconds=expires_in),
            scope=scope,
        )

    def is_expired(self) -> bool:
        return is_expired(self.expires_at)

    def authorization_header(self) -> str:
        return f"{self.token_type} {self.access_token}"


class JWTPayload(BaseModel):
    """
    JWT claim set.

    Registered claims are typed fields. Any other claim is kept in
    ``additional_claims`` rather than as a dynamic attribute.
    """

    model_config = ConfigDict(extra="forbid")

    sub: str
    iss: str
    aud: str | list[str]
    exp: int
    iat: int
    nbf: int | None = None
    jti: str | None = None
    additional_claims: dict[str, JsonValue] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def collect_additional_claims(cls, data: Any) -> Any:
        """Move unknown claims into additional_claims."""
        if not isinstance(data, Mapping):
            return data

        known = set(cls.model_fields)
        extra = {key: value for key, value in data.items() if key not in known}
        if not extra:
            return data

        claims = {key: value for key, value in data.items() if key in known}
        claims["additional_claims"] = {**(data.get("additional_claims") or {}), **extra}
        return claims

    def audiences(self) -> list[str]:
        return [self.aud] if isinstance(self.aud, str) else list(self.aud)

    def expires_at(self) -> datetime:
        return from_epoch(self.exp)

    def is_expired(self) -> bool:
        return is_expired(self.expires_at())

    def get_claim(self, name: str, default: JsonValue = None) -> JsonValue:
        """Look up a non-registered claim."""
        return self.additional_claims.get(name, default)

    def to_claims(self) -> dict[str, Any]:
        """Flatten back into a single claim dict (registered claims win)."""
        registered = self.model_dump(exclude={"additional_claims"}, exclude_none=True)
        return {**self.additional_claims, **registered}


class RoleAccess(BaseModel):
    roles: list[str] = Field(default_factory=list)


class KeycloakToken(JWTPayload):
    """Keycloak access/ID token claims."""

    preferred_username: str
    email: str | None = None
    email_verified: bool | None = None
    name: str | None = None
    given_name: str | None = None
    family_name: str | None = None
    realm_access: RoleAccess | None = None
    resource_access: dict[str, RoleAccess] | None = None

    def has_realm_role(self, role: str) -> bool:
        return self.realm_access is not None and role in self.realm_access.roles

    def client_roles(self, client: str) -> list[str]:
        if not self.resource_access or client not in self.resource_access:
            return []
        return list(self.resource_access[client].roles)


class AuthError(BaseModel):
    """Authentication failure surfaced to callers."""

    code: str
    message: str
    details: dict[str, JsonValue] = Field(default_factory=dict)
    timestamp: datetime = Field(default_factory=utc_now)

    @classmethod
    def from_validation_result(cls, result: ValidationResult) -> "AuthError":
        """Error for an email rejected by the validation engine."""
        return cls(
            code="invalid_email",
            message=result.errors[0] if result.errors else "Invalid email",
            details={
                "errors": list(result.errors),
                "error_codes": [code.value for code in result.error_codes],
            },
        )


class PKCEChallenge(BaseModel):
    """RFC 7636 verifier/challenge pair."""

    model_config = ConfigDict(frozen=True)

    code_verifier: str
    code_challenge: str
    code_challenge_method: CodeChallengeMethod = "S256"


class AuthorizationRequest(BaseModel):
    """Authorization code request with PKCE."""

    client_id: str
    redirect_uri: str
    scope: list[str]
    state: str
    code_challenge: str
    code_challenge_method: CodeChallengeMethod = "S256"
    response_type: Literal["code"] = "code"

    def to_query_params(self) -> dict[str, str]:
        return {
            "client_id": self.client_id,
            "redirect_uri": self.redirect_uri,
            "response_type": self.response_type,
            "scope": " ".join(self.scope),
            "state": self.state,
            "code_challenge": self.code_challenge,
            "code_challenge_method": self.code_challenge_method,
        }

    def build_url(self, authorization_endpoint: str) -> str:
        separator = "&" if "?" in authorization_endpoint else "?"
        return f"{authorization_endpoint}{separator}{urlencode(self.to_query_params())}"


class AuthSuccess(BaseModel):
    success: Literal[True] = True
    user: User
    tokens: AuthToken


class AuthFailure(BaseModel):
    success: Literal[False] = False
    error: AuthError


AuthenticationResult = AuthSuccess | AuthFailure

_authentication_result_adapter: TypeAdapter[AuthenticationResult] = TypeAdapter(
    AuthenticationResult
)


def parse_authentication_result(data: Mapping[str, Any]) -> AuthenticationResult:
    """Parse a raw dict into AuthSuccess or AuthFailure based on ``success``."""
    return _authentication_result_adapter.validate_python(dict(data))
