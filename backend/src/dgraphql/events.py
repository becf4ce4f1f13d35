"""Pydantic model for API Gateway proxy events."""

from __future__ import annotations

from typing import Any
from typing import Mapping

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import ValidationError as PydanticValidationError
from pydantic import field_validator
from pydantic import model_validator

from dgraphql.exceptions import ValidationError


class InboundEvent(BaseModel):
    """The parts of an API Gateway proxy event the responder reads.

    Header names are lower-cased at ingestion so every downstream lookup
    is case-insensitive.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    http_method: str = Field(default="", alias="httpMethod")
    query_string_parameters: dict[str, Any] = Field(
        default_factory=dict, alias="queryStringParameters"
    )
    body: str = ""
    is_base64_encoded: bool = Field(default=False, alias="isBase64Encoded")
    headers: dict[str, str] = Field(default_factory=dict)
    request_id: str = ""

    @model_validator(mode="before")
    @classmethod
    def _pull_request_id(cls, data: Any) -> Any:
        if isinstance(data, Mapping) and "request_id" not in data:
            request_context = data.get("requestContext") or {}
            if isinstance(request_context, Mapping):
                data = {**data, "request_id": str(request_context.get("requestId") or "")}
        return data

    @field_validator("http_method", "body", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("query_string_parameters", mode="before")
    @classmethod
    def _none_as_empty_mapping(cls, value: Any) -> Any:
        return {} if value is None else value

    @field_validator("headers", mode="before")
    @classmethod
    def _lower_header_names(cls, value: Any) -> Any:
        if value is None:
            return {}
        if not isinstance(value, Mapping):
            return value
        return {
            str(key).lower(): str(item)
            for key, item in value.items()
            if item is not None
        }

    @classmethod
    def from_event(cls, event: Any) -> "InboundEvent":
        """Validate a raw Lambda event.

        Args:
            event: The event passed to the Lambda handler.

        Returns:
            The validated event.

        Raises:
            ValidationError: If the event is not a usable proxy event.
        """
        if isinstance(event, cls):
            return event
        if not isinstance(event, Mapping):
            raise ValidationError("Lambda event must be a mapping", field="event")
        try:
            return cls.model_validate(dict(event))
        except PydanticValidationError as exc:
            raise ValidationError(
                "Lambda event is not an API Gateway proxy event",
                field=".".join(str(part) for part in exc.errors()[0]["loc"]),
            ) from exc

    def header(self, name: str, default: str = "") -> str:
        """Return a header value by case-insensitive name."""
        return self.headers.get(name.lower(), default)
