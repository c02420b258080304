from dataclasses import dataclass
from typing import Optional

@dataclass(frozen=True)
class Credentials:
    login: str
    password: str

    def is_empty(self) -> bool:
        return not self.login or not self.password

@dataclass(frozen=True)
class CallRequest:
    phone_number: str
    credentials: Credentials
    callback_url: str = ""

@dataclass(frozen=True)
class CallResult:
    success: bool
    remote_identifier: Optional[str] = None
    error: Optional[str] = None

@dataclass
class CallBody:
    phone_number: str
    callback_url: Optional[str] = ""
