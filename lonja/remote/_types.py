"""
Remote types — errors surfaced by a RemoteStore.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class RemoteErrorKind(Enum):
    """Kinds of remote store failures."""

    TRANSPORT = auto()  # Connection refused, DNS, reset
    TIMEOUT = auto()  # No answer within request_timeout
    REJECTED = auto()  # 4xx: server-side validation, unknown id, stock race
    SERVER = auto()  # 5xx
    MALFORMED = auto()  # Body is not the expected shape


@dataclass(frozen=True, slots=True)
class RemoteError(Exception):
    """
    Remote store failure.

    Also an Exception so graph nodes can raise it and callers catch it
    at the compose boundary.
    """

    kind: RemoteErrorKind
    message: str
    status: int | None = None

    def __str__(self) -> str:
        if self.status is None:
            return f"{self.kind.name}: {self.message}"
        return f"{self.kind.name} ({self.status}): {self.message}"

    @property
    def is_unreachable(self) -> bool:
        return self.kind in (RemoteErrorKind.TRANSPORT, RemoteErrorKind.TIMEOUT)


__all__ = ("RemoteErrorKind", "RemoteError")
