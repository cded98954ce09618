"""RFC 7807 Problem Details schema for error responses."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ProblemDetails(BaseModel):
    """RFC 7807 Problem Details for HTTP APIs.

    See: https://datatracker.ietf.org/doc/html/rfc7807

    Extension members (``errors``, ``error``, context from the raising
    exception) are allowed and serialized alongside the standard fields.
    """

    type: str = Field(
        default="about:blank",
        min_length=1,
        max_length=200,
        description="URI reference identifying the problem type",
    )
    title: str = Field(
        min_length=1, max_length=200, description="Short, human-readable summary of the problem"
    )
    status: int = Field(ge=100, le=599, description="HTTP status code")
    detail: str | None = Field(
        default=None,
        max_length=2000,
        description="Human-readable explanation specific to this occurrence",
    )
    instance: str | None = Field(
        default=None,
        max_length=500,
        description="URI reference identifying the specific occurrence",
    )

    model_config = ConfigDict(
        extra="allow",
        json_schema_extra={
            "example": {
                "type": "not-found",
                "title": "Not Found",
                "status": 404,
                "detail": "Task not found with id=UUID('...')",
                "instance": "/api/v1/tasks/7a1c...",
            }
        },
        str_strip_whitespace=True,
    )

    def to_response_content(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)
