from __future__ import annotations

from typing import Any, ClassVar


class AppError(Exception):
    message: ClassVar[str] = "App exception"

    def __init__(
        self,
        message: str | None = None,
        code: str | None = None,
    ) -> None:
        self.content: dict[str, Any] = {"message": message or self.message}
        if code:
            self.content["code"] = code
        super().__init__(self.content["message"])

    def as_dict(self) -> dict[str, Any]:
        return {"content": self.content.copy()}

    def __repr__(self) -> str:
        content = ", ".join(f"{key}={value!r}" for key, value in self.as_dict().items())
        return f"{type(self).__name__}({content})"


class DetailedError(AppError):
    def __init__(
        self,
        message: str | None = None,
        code: str | None = None,
        **context: Any,
    ) -> None:
        super().__init__(message=message, code=code)
        self.content = {**self.content, **context}

    def __str__(self) -> str:
        return f"{type(self).__name__}: {self.content!r}"


class KeysetError(DetailedError):
    message: ClassVar[str] = "Keyset pagination error"


class ConfigurationError(KeysetError):
    message: ClassVar[str] = "Invalid keyset configuration"


class MissingReferenceValueError(KeysetError):
    message: ClassVar[str] = "Reference is missing a value for a keyset column"


class TypeConversionError(KeysetError):
    message: ClassVar[str] = "Reference value cannot be converted to the column type"


class UnsupportedTypeError(KeysetError):
    message: ClassVar[str] = "Column type has no comparison support"


class InvalidCursorError(KeysetError):
    message: ClassVar[str] = "Invalid cursor"


class NullValueError(KeysetError):
    message: ClassVar[str] = "Keyset column holds NULL, which has no order outside the store"
