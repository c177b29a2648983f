"""Error Hierarchy — typed, categorized exceptions for miniasset failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Build errors (400-level) are client-visible; storage/config errors are 500-level
    - to_response() produces the REST envelope used by the JSON API
    - Routing misses (path not under prefix, unknown build) are never errors
"""

from dataclasses import dataclass, field
from enum import Enum
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    CONFIGURATION = "configuration"
    COMPILATION = "compilation"
    STORAGE = "storage"
    RESOURCE_NOT_FOUND = "resource_not_found"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context attached to an error for logs and responses."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    build_name: str | None = None
    path: str | None = None


class MiniAssetError(Exception):
    """Base exception for all miniasset errors."""

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
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "build_name": self.context.build_name,
                    "path": self.context.path,
                },
            }
        }


# ─── Build Errors (400-level) ───────────────────────────────────

class CompileError(MiniAssetError):
    """A build's sources could not be read or transformed."""
    def __init__(self, message: str, build_name: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.build_name = build_name
        super().__init__(
            message, "COMPILE_ERROR", ErrorCategory.COMPILATION,
            ErrorSeverity.ERROR, ctx, 400,
        )
        self.build_name = build_name


class ResourceNotFoundError(MiniAssetError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class CacheStorageError(MiniAssetError):
    """Reading or writing a cache entry failed."""
    def __init__(
        self, message: str, operation: str, build_name: str,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.build_name = build_name
        super().__init__(
            f"Cache {operation} failed for '{build_name}': {message}",
            "CACHE_STORAGE_ERROR", ErrorCategory.STORAGE,
            ErrorSeverity.CRITICAL, ctx, 503,
        )
        self.operation = operation
        self.build_name = build_name


class AssetConfigError(MiniAssetError):
    """Asset definitions could not be loaded."""
    def __init__(self, message: str, source: str, context: ErrorContext | None = None):
        super().__init__(
            f"Invalid asset configuration in {source}: {message}",
            "ASSET_CONFIG_ERROR", ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.source = source
