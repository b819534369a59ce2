"""Request-scoped identity attached by the authentication gate."""
from dataclasses import dataclass

from models.session import Session
from models.user import User


@dataclass(frozen=True)
class RequestIdentity:
    """
    Who is making the request.

    Both fields are None for anonymous requests. Stored on `request.state.identity`
    and used by every handler as the single source of truth for authorization.
    """

    user: User | None = None
    session: Session | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None


ANONYMOUS = RequestIdentity()
