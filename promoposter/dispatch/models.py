from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from promoposter.dispatch.exceptions import DispatchError


class DispatchState(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    TOKEN_ACQUIRED = "token_acquired"
    SENT = "sent"
    FAILED = "failed"


@dataclass(frozen=True)
class Recipient:
    phone_number: str
    name: str | None = None
    substitution_token: str | None = None

    def to_target(self) -> dict[str, str]:
        return {
            "to": self.phone_number,
            "name": self.name or "",
            "changeWord": self.substitution_token or "",
        }


@dataclass(frozen=True)
class DispatchRequest:
    sender: str
    recipients: tuple[Recipient, ...]
    message: str
    poster_path: Path


@dataclass
class DispatchResult:
    state: DispatchState = DispatchState.UNAUTHENTICATED
    message_key: str | None = None
    error: DispatchError | None = field(default=None, repr=False)

    @property
    def succeeded(self) -> bool:
        return self.state is DispatchState.SENT
