"""Session token generation and hashing."""
import hashlib
import secrets

# 32 bytes = 256 bits of entropy, well above the 128-bit minimum for session ids
SESSION_TOKEN_BYTES = 32


def generate_session_token() -> str:
    """
    Generate a new raw session token.

    Uses the operating system CSPRNG via `secrets`. The token is URL-safe base64
    text so it can be stored in a cookie without further encoding.

    Returns:
        The raw token. It is handed to the client once and never persisted.
    """
    return secrets.token_urlsafe(SESSION_TOKEN_BYTES)


def hash_session_token(token: str) -> str:
    """
    Derive the session id (SHA-256 hex digest) for a raw token.

    Deterministic, so the id can be recomputed from the cookie on every request,
    and one-way, so the stored id cannot be turned back into a usable cookie.
    """
    return hashlib.sha256(token.encode()).hexdigest()
