from __future__ import annotations


class ApiError(RuntimeError):
    """Base class for everything the API client raises."""


class NetworkUnreachable(ApiError):
    """Connection failure, timeout, or a non-2xx answer. Triggers fallback."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class Cancelled(ApiError):
    """The caller cancelled the request. No cache or status change happened."""


class NotFound(ApiError):
    def __init__(self, org_id: str):
        super().__init__(f"Organization {org_id} not found")
        self.org_id = org_id


class DuplicateId(ApiError):
    def __init__(self, org_id: str):
        super().__init__(f"Organization with id {org_id} already exists")
        self.org_id = org_id


class MissingPeriod(ApiError, ValueError):
    def __init__(self):
        super().__init__("Report period is not set")


class InvalidRange(ApiError, ValueError):
    def __init__(self, start, end):
        super().__init__(f"End date {end} is before start date {start}")
        self.start = start
        self.end = end


class InvalidResponseShape(ApiError):
    def __init__(self, payload):
        super().__init__(f"Unexpected response shape: {type(payload).__name__}")
        self.payload = payload
