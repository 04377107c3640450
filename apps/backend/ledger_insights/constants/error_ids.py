"""Stable error identifiers attached to log records for alerting and search."""


class ErrorIds:
    """Error identifiers used in structured log events."""

    GATEWAY_UNAVAILABLE = "LEDGER_GATEWAY_UNAVAILABLE"
    INVALID_PERIOD = "REPORT_INVALID_PERIOD"
    REPORT_GENERATION_FAILED = "REPORT_GENERATION_FAILED"
    UNHANDLED_REQUEST_ERROR = "HTTP_UNHANDLED_ERROR"
