import base64
import hashlib
import secrets
import string

from authutils.config import OAuthConfig
from authutils.schemas.auth import AuthorizationRequest, CodeChallengeMethod, PKCEChallenge

# RFC 7636 section 4.1
CODE_VERIFIER_MIN_LENGTH = 43
CODE_VERIFIER_MAX_LENGTH = 128
_VERIFIER_ALPHABET = string.ascii_letters + string.digits + "-._~"


def generate_token() -> str:
    """Generate a cryptographically secure random token."""
    return secrets.token_urlsafe(32)


def hash_token(token: str) -> str:
    """Hash a token for storage using SHA-256."""
    return hashlib.sha256(token.encode()).hexdigest()


def generate_state() -> str:
    """Generate an OAuth ``state`` value for CSRF protection."""
    return secrets.token_urlsafe(16)


def generate_code_verifier(length: int = 64) -> str:
    """Generate a PKCE code verifier of unreserved characters."""
    if not CODE_VERIFIER_MIN_LENGTH <= length <= CODE_VERIFIER_MAX_LENGTH:
        raise ValueError(
            f"Code verifier length must be between {CODE_VERIFIER_MIN_LENGTH} "
            f"and {CODE_VERIFIER_MAX_LENGTH}, got {length}"
        )
    return "".join(secrets.choice(_VERIFIER_ALPHABET) for _ in range(length))


def compute_code_challenge(code_verifier: str, method: CodeChallengeMethod = "S256") -> str:
    """Derive the code challenge sent with the authorization request."""
    if method == "plain":
        return code_verifier
    if method != "S256":
        raise ValueError(f"Unsupported code challenge method: {method}")

    digest = hashlib.sha256(code_verifier.encode("ascii")).digest()
    return base64.urlsafe_b64encode(digest).rstrip(b"=").decode("ascii")


def generate_pkce_challenge(method: CodeChallengeMethod = "S256") -> PKCEChallenge:
    """Generate a fresh verifier/challenge pair."""
    verifier = generate_code_verifier()
    return PKCEChallenge(
        code_verifier=verifier,
        code_challenge=compute_code_challenge(verifier, method),
        code_challenge_method=method,
    )


def build_authorization_request(
    oauth: OAuthConfig,
    state: str | None = None,
    pkce: PKCEChallenge | None = None,
) -> AuthorizationRequest:
    """Build an authorization code request for the configured client."""
    pkce = pkce or generate_pkce_challenge()
    return AuthorizationRequest(
        client_id=oauth.client_id,
        redirect_uri=oauth.redirect_url,
        scope=list(oauth.scopes),
        state=state or generate_state(),
        code_challenge=pkce.code_challenge,
        code_challenge_method=pkce.code_challenge_method,
    )
