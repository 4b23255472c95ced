"""
ProjectHub Backend — Shared Schemas
=====================================

What:  Envelope models used by every resource: paginated lists, errors,
       health status.
"""

from typing import Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field

ItemT = TypeVar("ItemT")


class PaginatedResponse(BaseModel, Generic[ItemT]):
    """
    What:  Body of every list endpoint.

    Example (GET /users?limit=2&offset=0, 5 users):
        {
            "total": 5, "limit": 2, "offset": 0,
            "data": [{...}, {...}],
            "links": {
                "self": "http://host/users?limit=2&offset=0",
                "first": "http://host/users?limit=2&offset=0",
                "last": "http://host/users?limit=2&offset=4",
                "next": "http://host/users?limit=2&offset=2"
            }
        }
    """
    total: int = Field(description="Number of rows matching the filters")
    limit: int = Field(description="Effective page size")
    offset: int = Field(description="Effective offset")
    data: List[ItemT] = Field(description="The current page")
    links: Dict[str, str] = Field(
        description="HATEOAS links: self, first, last, and next/prev when they exist"
    )


class ErrorResponse(BaseModel):
    """
    What:  Standardized error response format for all API errors.

    Fields:
        error: Machine-readable error code (e.g., "validation_error", "not_found")
        message: Human-readable description
        details: Optional extra context (e.g., which field failed validation)
        request_id: Correlation ID for tracing this error in server logs
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Returned by GET /health for monitoring and load balancer health checks."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
