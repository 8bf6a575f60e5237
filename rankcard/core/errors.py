"""Error Hierarchy — typed, categorized exceptions for every rank card failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Request errors (400/405) are raised before any outbound call is made
    - to_response() always produces the flat envelope {"error": message}

Design Decisions:
    - Single hierarchy with RankCardError base: one FastAPI handler catches all
    - Codes and categories are for logs only; clients see the message alone
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    PROTOCOL = "protocol"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Extra context attached to an error for log output."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    field_name: str | None = None
    upstream_status: int | None = None
    debug_info: dict[str, Any] | None = None


class RankCardError(Exception):
    """Base exception for all rank card errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to the REST error envelope."""
        return {"error": self.message}

    def log_extra(self) -> dict:
        """Fields surfaced by the JSON log formatter."""
        extra: dict[str, Any] = {
            "error_code": self.code,
            "status_code": self.http_status,
            "category": self.category.value,
            "severity": self.severity.value,
            "raised_at": self.context.timestamp.isoformat(),
        }
        if self.context.field_name:
            extra["field"] = self.context.field_name
        if self.context.upstream_status is not None:
            extra["upstream_status"] = self.context.upstream_status
        if self.context.debug_info:
            extra["debug_info"] = self.context.debug_info
        return extra


# ─── Request Errors (400-level) ─────────────────────────────────

class MethodNotAllowedError(RankCardError):
    """Inbound method is not POST."""
    def __init__(self, method: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext(debug_info={"method": method})
        super().__init__(
            "Method not allowed", "METHOD_NOT_ALLOWED", ErrorCategory.PROTOCOL,
            ErrorSeverity.WARNING, ctx, 405,
        )
        self.method = method


class MissingFieldError(RankCardError):
    """A required field is absent or empty-like."""
    def __init__(self, field: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.field_name = field
        super().__init__(
            f"Missing required field: {field}", "MISSING_FIELD",
            ErrorCategory.VALIDATION, ErrorSeverity.WARNING, ctx, 400,
        )
        self.field = field


class InvalidNumericError(RankCardError):
    """rank, max_xp or xp does not parse as a number."""
    def __init__(self, field: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.field_name = field
        super().__init__(
            "Rank, max_xp, and xp must be numbers", "INVALID_NUMERIC",
            ErrorCategory.VALIDATION, ErrorSeverity.WARNING, ctx, 400,
        )
        self.field = field


class XpExceedsMaxError(RankCardError):
    """xp is greater than max_xp."""
    def __init__(self, xp: int, max_xp: int, context: ErrorContext | None = None):
        ctx = context or ErrorContext(debug_info={"xp": xp, "max_xp": max_xp})
        super().__init__(
            "xp cannot be greater than max_xp", "XP_EXCEEDS_MAX",
            ErrorCategory.VALIDATION, ErrorSeverity.WARNING, ctx, 400,
        )
        self.xp = xp
        self.max_xp = max_xp


# ─── Pipeline Errors (500-level) ────────────────────────────────

class RenderFailedError(RankCardError):
    """Rendering service answered with a non-success status."""
    def __init__(self, upstream_status: int | None = None, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.upstream_status = upstream_status
        super().__init__(
            "Failed to generate image", "RENDER_FAILED",
            ErrorCategory.EXTERNAL_API, ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.upstream_status = upstream_status


class UnhandledPipelineError(RankCardError):
    """Any other failure while handling a card request (parse, network, bug)."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INTERNAL_ERROR", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )
