"""
Exception types for the community pulse backend
"""


class PulseError(Exception):
    """Base exception for all community pulse errors"""
    pass


class ConfigurationError(PulseError):
    """Raised when settings are missing or out of range"""
    pass


class UpstreamError(PulseError):
    """Base exception for failures talking to the community API"""

    def __init__(self, detail: str, status_code: int | None = None):
        self.detail = detail
        self.status_code = status_code
        super().__init__(self.detail)


class NetworkFailure(UpstreamError):
    """Request was rejected, timed out or answered with an error status"""
    pass


class MalformedResponse(UpstreamError):
    """Response body could not be decoded or lacks a required field"""
    pass


class PartialDegradation(UpstreamError):
    """One sub-fetch of a joint operation failed"""

    def __init__(self, detail: str, failed_part: str):
        self.failed_part = failed_part
        super().__init__(detail)


# HTTP status messages shown to operators instead of raw upstream detail
STATUS_MESSAGES = {
    401: "Authentication required",
    403: "Access denied",
    404: "Resource not found",
    422: "Validation error",
    429: "Too many requests. Please try again later.",
    500: "Internal server error",
    503: "Service temporarily unavailable",
}

NON_RETRYABLE_STATUS = {400, 401, 403, 404, 422}
