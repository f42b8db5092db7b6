"""
Application Exception Handling

Single AppException class for all application errors with FastAPI integration.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse


class AppException(Exception):
    """
    Unified application exception for all error scenarios.

    Provides consistent error response format across the entire API.

    Usage:
        raise AppException("Invalid credentials", "INVALID_CREDENTIALS", 401)
        raise AppException("Product not found", "PRODUCT_NOT_FOUND", 404, {"product_id": "abc"})

    Error Codes:
        Authentication:
            - INVALID_CREDENTIALS (401)
            - TOKEN_EXPIRED (401)
            - TOKEN_INVALID (401)
            - ACCOUNT_DISABLED (403)
            - REGISTRATION_DISABLED (403)

        Operator:
            - OPERATOR_NOT_FOUND (404)
            - EMAIL_EXISTS (409)

        Catalog:
            - PRODUCT_NOT_FOUND (404)
            - IMAGE_REQUIRED (400)
            - INVALID_IMAGE (400)
            - INVALID_PRODUCT (400)

        Orders:
            - ORDER_NOT_FOUND (404)
            - EMPTY_STATUS_UPDATE (400)

        Feedback & Settings:
            - EMPTY_SUGGESTION (400)
            - INVALID_ADVERTISEMENT (400)
            - INVALID_PREFERENCE (400)

        General:
            - INTERNAL_ERROR (500)
    """

    def __init__(
        self,
        message: str,
        code: str,
        status_code: int = 400,
        details: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize application exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code (e.g., "PRODUCT_NOT_FOUND")
            status_code: HTTP status code (default: 400)
            details: Additional error context (optional)
        """
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for JSON response."""
        error_dict = {
            "success": False,
            "error": {
                "code": self.code,
                "message": self.message,
                "timestamp": self.timestamp
            }
        }

        if self.details:
            error_dict["error"]["details"] = self.details

        return error_dict


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Convert AppException to a consistent JSON error response."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register all exception handlers with FastAPI app.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(AppException, app_exception_handler)


# ============================================
# CONVENIENCE FACTORY FUNCTIONS
# ============================================

def invalid_credentials() -> AppException:
    return AppException("Invalid email or password", "INVALID_CREDENTIALS", 401)


def token_expired() -> AppException:
    return AppException("Token has expired", "TOKEN_EXPIRED", 401)


def token_invalid() -> AppException:
    return AppException("Invalid or malformed token", "TOKEN_INVALID", 401)


def account_disabled() -> AppException:
    return AppException("Account has been disabled", "ACCOUNT_DISABLED", 403)


def registration_disabled() -> AppException:
    return AppException("Operator registration is disabled", "REGISTRATION_DISABLED", 403)


def operator_not_found(operator_id: Optional[str] = None) -> AppException:
    details = {"operator_id": operator_id} if operator_id else {}
    return AppException("Operator not found", "OPERATOR_NOT_FOUND", 404, details)


def email_exists(email: str) -> AppException:
    return AppException(
        f"An account already exists for '{email}'",
        "EMAIL_EXISTS",
        409,
        {"email": email}
    )


def product_not_found(product_id: Optional[str] = None) -> AppException:
    details = {"product_id": product_id} if product_id else {}
    return AppException("Product not found", "PRODUCT_NOT_FOUND", 404, details)


def image_required() -> AppException:
    return AppException(
        "An image upload is required to add a product",
        "IMAGE_REQUIRED",
        400
    )


def invalid_image(reason: str) -> AppException:
    return AppException(
        f"Invalid image upload: {reason}",
        "INVALID_IMAGE",
        400,
        {"reason": reason}
    )


def invalid_product(reason: str, field: Optional[str] = None) -> AppException:
    details = {"reason": reason}
    if field:
        details["field"] = field
    return AppException(f"Invalid product: {reason}", "INVALID_PRODUCT", 400, details)


def order_not_found(order_id: Optional[str] = None) -> AppException:
    details = {"order_id": order_id} if order_id else {}
    return AppException("Order not found", "ORDER_NOT_FOUND", 404, details)


def empty_status_update() -> AppException:
    return AppException(
        "At least one order flag must be supplied",
        "EMPTY_STATUS_UPDATE",
        400
    )


def empty_suggestion() -> AppException:
    return AppException("Suggestion text cannot be empty", "EMPTY_SUGGESTION", 400)


def invalid_advertisement(reason: str) -> AppException:
    return AppException(
        f"Invalid advertisement: {reason}",
        "INVALID_ADVERTISEMENT",
        400,
        {"reason": reason}
    )


def invalid_preference(name: str) -> AppException:
    return AppException(
        f"Unknown or non-toggleable preference: {name}",
        "INVALID_PREFERENCE",
        400,
        {"preference": name}
    )


def internal_error(message: str = "Internal server error") -> AppException:
    return AppException(message, "INTERNAL_ERROR", 500)
