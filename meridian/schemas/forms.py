"""Form Schemas - login and signup input validated before any request is sent.

Invariants:
    - Text fields stripped; blank fields rejected in form order
    - Login password: non-empty, at least 8 characters
    - Signup password: at least 8 characters with a lowercase letter, an
      uppercase letter and a special character
    - first_form_error() maps a pydantic ValidationError to FormValidationError
      carrying the first failing field

Design Decisions:
    - field_validator over Field(min_length): the page shows the validator's
      message as-is, one error at a time
"""

import re

from pydantic import BaseModel, ValidationError, field_validator

from meridian.core.errors import FormValidationError

MIN_PASSWORD_LENGTH = 8
_SIGNUP_PASSWORD = re.compile(
    r"^(?=.*[a-z])(?=.*[A-Z])(?=.*[!@#$%^&*()_+\-=\[\]{};':\"\\|,.<>/?]).{8,}$"
)


def _required(v: str, label: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError(f"Please enter {label}")
    return v


class LoginForm(BaseModel):
    username: str
    password: str

    @field_validator("username")
    @classmethod
    def check_username(cls, v: str) -> str:
        return _required(v, "your username")

    @field_validator("password")
    @classmethod
    def check_password(cls, v: str) -> str:
        if not v:
            raise ValueError("Please enter your password")
        if len(v) < MIN_PASSWORD_LENGTH:
            raise ValueError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters",
            )
        return v


class SignupForm(BaseModel):
    first_name: str
    last_name: str
    username: str
    password: str

    @field_validator("first_name")
    @classmethod
    def check_first_name(cls, v: str) -> str:
        return _required(v, "your first name")

    @field_validator("last_name")
    @classmethod
    def check_last_name(cls, v: str) -> str:
        return _required(v, "your last name")

    @field_validator("username")
    @classmethod
    def check_username(cls, v: str) -> str:
        return _required(v, "a username")

    @field_validator("password")
    @classmethod
    def check_password(cls, v: str) -> str:
        if not v:
            raise ValueError("Please enter a password")
        if not _SIGNUP_PASSWORD.match(v):
            raise ValueError(
                "Password must be at least 8 characters and contain a lowercase "
                "letter, an uppercase letter, and a special character",
            )
        return v

    def to_user_payload(self) -> dict:
        """Backend user shape for POST /users."""
        return {
            "firstName": self.first_name,
            "lastName": self.last_name,
            "username": self.username,
            "password": self.password,
        }


def first_form_error(exc: ValidationError) -> FormValidationError:
    err = exc.errors()[0]
    field = str(err["loc"][0]) if err["loc"] else ""
    cause = (err.get("ctx") or {}).get("error")
    return FormValidationError(str(cause) if cause else err["msg"], field)
