from enum import Enum
import logging
from typing import Any
from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ResourceType(str, Enum):
    TASK = "Task"


# Exceptions
class ResourceNotFoundException(Exception):
    def __init__(self, resource_type: ResourceType, identifier: int | str):
        self.resource_type = resource_type.value
        self.identifier = identifier
        super().__init__(f"{self.resource_type} '{identifier}' not found")


class InvalidInputException(Exception):
    def __init__(self, message: str):
        super().__init__(message)


class StoreUnavailableException(Exception):
    def __init__(self, message: str = "Task store is unavailable"):
        super().__init__(message)


GENERIC_ERROR_MESSAGE = "An unexpected error occurred"


# Exception handlers
def resource_not_found_handler(request: Request, exc: ResourceNotFoundException):
    logger.error(exc)
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"error": str(exc)},
    )


def invalid_input_handler(request: Request, exc: InvalidInputException):
    logger.error(exc)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": str(exc)},
    )


def store_unavailable_handler(request: Request, exc: StoreUnavailableException):
    logger.error(f"Task store unavailable: {exc!r} (caused by {exc.__cause__!r})")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": GENERIC_ERROR_MESSAGE},
    )


def unexpected_exception_handler(request: Request, exc: Exception):
    logger.exception(
        f"Unhandled error on {request.method} {request.url.path}", exc_info=exc
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": GENERIC_ERROR_MESSAGE},
    )


def validation_exception_handler(request: Request, exc: RequestValidationError):
    def loc_to_dot_sep(loc: tuple[Any, ...]) -> str:
        """Convert a tuple of location parts to a dot-separated string"""
        path = ""
        for i, x in enumerate(loc):
            if isinstance(x, str):
                if i > 0:
                    path += "."
                path += x
            elif isinstance(x, int):
                path += f"[{x}]"
            else:
                raise TypeError("Unexpected type")
        return path

    def describe_error(error: dict[str, Any]) -> str:
        if error["type"] == "json_invalid":
            return "Request body is not valid JSON"

        message = error["msg"].removeprefix("Value error, ")
        location = loc_to_dot_sep(tuple(error["loc"]))
        if error["type"] == "missing":
            if location == "body":
                return "Request body is required"
            return f"Field '{location.removeprefix('body.')}' is required"
        if location in ("body", ""):
            return message
        return f"{location.removeprefix('body.')}: {message}"

    errors = exc.errors()
    message = describe_error(errors[0]) if errors else "Invalid request"
    logger.error(f"Rejected request to {request.url.path}: {message}")

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": message},
    )


# Response definitions for OpenAPI documentation
ResponseDict = dict[int | str, dict[str, Any]]


def resource_not_found_response(
    resource_type: ResourceType,
) -> ResponseDict:
    return {
        404: {
            "description": f"{resource_type.value} not found",
            "content": {
                "application/json": {
                    "example": {"error": f"{resource_type.value} '1' not found"}
                }
            },
        }
    }


invalid_input_response: ResponseDict = {
    400: {
        "description": "Invalid input",
        "content": {
            "application/json": {"example": {"error": "title: Title must not be empty"}}
        },
    }
}

internal_error_response: ResponseDict = {
    500: {
        "description": "Internal server error",
        "content": {"application/json": {"example": {"error": GENERIC_ERROR_MESSAGE}}},
    }
}
