# This project was developed with assistance from AI tools.
"""RFC 7807 Problem Details error body returned by the JSON endpoints."""

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Problem Details (https://datatracker.ietf.org/doc/html/rfc7807)."""

    type: str = Field(
        default="about:blank",
        description="URI reference identifying the problem type.",
    )
    title: str = Field(description="Short summary, e.g. 'Not Found'.")
    status: int = Field(description="HTTP status code.")
    detail: str = Field(
        default="",
        description="What went wrong for this request.",
    )
    request_id: str = Field(
        default="",
        description="Correlation ID echoed from X-Request-ID or generated.",
    )
