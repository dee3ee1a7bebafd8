from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

class APIException(HTTPException):
    def __init__(self, status_code: int, detail: str):
        super().__init__(status_code=status_code, detail=detail)

class ValidationError(APIException):
    """Input that is malformed or breaks a booking rule."""
    def __init__(self, detail: str):
        super().__init__(status_code=400, detail=detail)

class NotFoundError(APIException):
    """A referenced doctor, patient, room, specialization or visit does not exist."""
    def __init__(self, detail: str):
        super().__init__(status_code=404, detail=detail)

class ConflictError(APIException):
    """The doctor or the room is already booked for the requested slot."""
    def __init__(self, detail: str):
        super().__init__(status_code=409, detail=detail)

class StorageError(APIException):
    """The database could not be read or written."""
    def __init__(self, detail: str = "Storage is unavailable"):
        super().__init__(status_code=503, detail=detail)

def create_error_response(error_message: str, status_code: int = 400) -> dict:
    """Create a standardized error response"""
    return {
        "success": False,
        "data": None,
        "error": error_message
    }

async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Custom exception handler for HTTPException"""
    return JSONResponse(
        status_code=exc.status_code,
        content=create_error_response(exc.detail, exc.status_code)
    )

async def request_validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render malformed request bodies and query strings as 400"""
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{location}: {first.get('msg')}" if location else str(first.get("msg"))
    else:
        message = "Invalid request"
    return JSONResponse(
        status_code=400,
        content=create_error_response(message, 400)
    )
