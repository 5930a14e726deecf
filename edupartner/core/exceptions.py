"""
Custom exceptions for the EduPartner API.
Provides consistent error handling across the application.
"""
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse


class EduPartnerException(Exception):
    """Base exception for EduPartner"""
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str = "An error occurred"):
        self.message = message
        super().__init__(self.message)


class NotFoundError(EduPartnerException):
    """Resource not found"""
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, resource: str = "Resource", resource_id: str = None):
        message = f"{resource} not found"
        if resource_id:
            message = f"{resource} with id '{resource_id}' not found"
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(message)


class AlreadyExistsError(EduPartnerException):
    """Resource already exists"""
    status_code = status.HTTP_409_CONFLICT

    def __init__(self, resource: str = "Resource", field: str = None, value: str = None):
        if field and value:
            message = f"{resource} with {field} '{value}' already exists"
        else:
            message = f"{resource} already exists"
        super().__init__(message)


class InvalidStateTransitionError(EduPartnerException):
    """Status change not allowed from the current status"""
    status_code = status.HTTP_409_CONFLICT

    def __init__(self, resource: str, current: str, target: str):
        self.current = current
        self.target = target
        super().__init__(f"Cannot move {resource} from '{current}' to '{target}'")


class InvalidCriteriaError(EduPartnerException):
    """Segmentation criteria are malformed"""
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY

    def __init__(self, message: str = "Invalid segmentation criteria"):
        super().__init__(message)


class ValidationError(EduPartnerException):
    """Validation failed"""
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY

    def __init__(self, message: str = "Validation failed", field: str = None):
        if field:
            message = f"Validation failed for field '{field}': {message}"
        super().__init__(message)


class DeliveryError(EduPartnerException):
    """Delivery collaborator could not hand off a message"""
    status_code = status.HTTP_502_BAD_GATEWAY

    def __init__(self, channel: str = "delivery", message: str = None):
        msg = f"{channel} delivery failed"
        if message:
            msg = f"{msg}: {message}"
        super().__init__(msg)


# HTTP Exception helpers
def raise_not_found(resource: str = "Resource", resource_id: str = None):
    """Raise 404 HTTPException"""
    err = NotFoundError(resource, resource_id)
    raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=err.message)


def raise_already_exists(resource: str = "Resource", field: str = None, value: str = None):
    """Raise 409 HTTPException for duplicate"""
    err = AlreadyExistsError(resource, field, value)
    raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=err.message)


def raise_validation_error(message: str = "Validation failed", field: str = None):
    """Raise 422 HTTPException"""
    err = ValidationError(message, field)
    raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=err.message)


async def edupartner_exception_handler(request: Request, exc: EduPartnerException):
    """Render domain errors raised below the API layer."""
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


def register_exception_handlers(app: FastAPI):
    app.add_exception_handler(EduPartnerException, edupartner_exception_handler)
