"""Error envelope returned by the API."""

from dataclasses import dataclass
from typing import Any

import httpx


def _text(value: Any) -> str | None:
    # Non-string members are treated as absent
    return value if isinstance(value, str) else None


@dataclass
class ErrorPayload:
    """Parsed ``{"error": {...}}`` envelope.

    See: https://stripe.com/docs/api/errors
    """

    type: str | None = None  # card_error, invalid_request_error, ...
    code: str | None = None  # card_declined, resource_missing, ...
    message: str | None = None
    param: str | None = None  # offending parameter, e.g. "line_items[0][price]"
    decline_code: str | None = None
    doc_url: str | None = None

    # Any other members of the error object
    extensions: dict[str, Any] | None = None

    @classmethod
    def from_body(cls, body: Any) -> "ErrorPayload | None":
        """Build from an already parsed body, or None if it has no error object."""
        if not isinstance(body, dict):
            return None

        error = body.get("error")

        # OAuth endpoints use a flat {"error": "...", "error_description": "..."}
        if isinstance(error, str):
            return cls(code=error, message=_text(body.get("error_description")))

        if not isinstance(error, dict):
            return None

        known_fields = {"type", "code", "message", "param", "decline_code", "doc_url"}
        extensions = {k: v for k, v in error.items() if k not in known_fields}

        return cls(
            type=_text(error.get("type")),
            code=_text(error.get("code")),
            message=_text(error.get("message")),
            param=_text(error.get("param")),
            decline_code=_text(error.get("decline_code")),
            doc_url=_text(error.get("doc_url")),
            extensions=extensions if extensions else None,
        )

    @classmethod
    def from_response(cls, response: httpx.Response) -> "ErrorPayload | None":
        """Parse the error envelope from an HTTP response.

        Returns:
            ErrorPayload, or None when the body is not JSON or lacks an error object
        """
        try:
            body = response.json()
        except (ValueError, TypeError, AttributeError):
            return None
        return cls.from_body(body)

    def to_exception_message(self) -> str:
        """Convert the payload to an exception message."""
        if self.message:
            return self.message
        if self.code:
            return f"Request failed with code {self.code}"
        if self.type:
            return f"Request failed with {self.type}"
        return "Unknown API error"
