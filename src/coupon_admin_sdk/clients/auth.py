from __future__ import annotations

from dataclasses import dataclass

from ..models import ChangePasswordRequest, Identity, LoginRequest, LoginResponse
from .base import BaseClient


@dataclass
class AuthClient(BaseClient):
    module = "auth"

    def login(self, phone: str, password: str) -> LoginResponse:
        payload = LoginRequest(phone=phone, password=password).model_dump()
        data = self._request("POST", "/auth/login", operation="login", json_body=payload)
        return LoginResponse.model_validate(data)

    def me(self) -> Identity:
        data = self._request("GET", "/auth/me", operation="me")
        return Identity.model_validate(data)

    def logout(self) -> None:
        self._request("POST", "/auth/logout", operation="logout")

    def change_password(self, old_password: str, new_password: str) -> None:
        payload = ChangePasswordRequest(old_password=old_password, new_password=new_password).model_dump(by_alias=True)
        self._request("POST", "/auth/change-password", operation="change_password", json_body=payload)
