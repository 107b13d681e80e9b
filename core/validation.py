"""
core/validation.py -- Translated structural validation on top of Pydantic.

A SchemaValidator pairs a Pydantic model (the structure) with a
MessageResolver (the wording). validate() never raises: it returns a
ValidationResult holding either the parsed model or a list of Issues, each
carrying the field path as sent on the wire and a localized message.

Messages are chosen per field: the last string component of an error's
location (e.g. "stockId" in ("availableData", 0, "stockId")) names the
message id, with optional (field, pydantic error type) overrides for fields
that report different problems differently (tax id length vs. digits).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, Optional, TypeVar, Union

from pydantic import BaseModel, ValidationError

from core.i18n import MessageResolver

ModelT = TypeVar("ModelT", bound=BaseModel)

_DEFAULT_MESSAGE = "invalidValue"


@dataclass(frozen=True)
class Issue:
    path: tuple[Union[str, int], ...]
    message: str
    code: str

    def as_dict(self) -> dict:
        return {"path": list(self.path), "message": self.message, "code": self.code}


@dataclass
class ValidationResult(Generic[ModelT]):
    data: Optional[ModelT] = None
    issues: list[Issue] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.issues


class SchemaValidator(Generic[ModelT]):
    def __init__(
        self,
        model: type[ModelT],
        t: MessageResolver,
        messages: dict[str, str],
        overrides: Optional[dict[tuple[str, str], str]] = None,
    ) -> None:
        self.model = model
        self._t = t
        self._messages = messages
        self._overrides = overrides or {}

    def validate(self, data: Any) -> ValidationResult[ModelT]:
        try:
            parsed = self.model.model_validate(data)
        except ValidationError as exc:
            return ValidationResult(issues=[self._issue(err) for err in exc.errors()])
        return ValidationResult(data=parsed)

    def _issue(self, error: dict) -> Issue:
        loc = tuple(error.get("loc", ()))
        name = next((part for part in reversed(loc) if isinstance(part, str)), "")
        message_id = self._overrides.get((name, error["type"])) or self._messages.get(name, _DEFAULT_MESSAGE)
        return Issue(path=loc, message=self._t(message_id), code=error["type"])
