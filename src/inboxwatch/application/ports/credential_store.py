from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Protocol


@dataclass(frozen=True)
class CredentialPair:
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None


class CredentialStore(Protocol):
    def get(self) -> CredentialPair: ...
    def set_access_token(self, token: Optional[str]) -> None: ...
    def set_refresh_token(self, token: Optional[str]) -> None: ...
    def clear(self) -> None: ...
