"""API error types and the FastAPI handler that renders them."""

from deps import Any, Dict, JSONResponse, Optional, Request, datetime, logging, timezone

logger = logging.getLogger(__name__)


class AuditError(Exception):
    """Base error carrying an API error type and HTTP status."""

    error_type = "INTERNAL_ERROR"
    status_code = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": False,
            "error": {
                "type": self.error_type,
                "message": self.message,
                "details": self.details,
                "timestamp": self.timestamp,
            },
        }


class RequestValidationFailed(AuditError):
    error_type = "VALIDATION_ERROR"
    status_code = 400


class ScannerError(AuditError):
    """A scanner collaborator failed; the analysis cannot be merged."""

    error_type = "EXTERNAL_API_ERROR"
    status_code = 502

    def __init__(self, tool: str, cause: BaseException):
        super().__init__(f"{tool} scan failed: {cause}", {"tool": tool})
        self.tool = tool


class AnalysisError(AuditError):
    error_type = "INTERNAL_ERROR"
    status_code = 500


async def audit_error_handler(request: Request, exc: AuditError) -> JSONResponse:
    log = logger.error if exc.status_code >= 500 else logger.warning
    log("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())
