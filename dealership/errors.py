# dealership/errors.py
"""Typed errors raised by the services.

Each error carries the HTTP status code it maps to; the web layer turns it
into the response envelope without inspecting the message.
"""


class AppError(Exception):
    status_code = 500

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class NotFoundError(AppError):
    status_code = 404


class ConflictError(AppError):
    status_code = 409


class UnauthorizedError(AppError):
    status_code = 401


class ForbiddenError(AppError):
    status_code = 403


class BadRequestError(AppError):
    status_code = 400


class RequestValidationError(AppError):
    status_code = 422


class PaymentFailedError(BadRequestError):
    """The payment processor declined an attempt"""
