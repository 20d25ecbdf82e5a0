import logging

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from starlette.responses import JSONResponse

from app.helpers.error_codes import ErrorCode, GeneralErrorCode

logger = logging.getLogger(__name__)


class CustomException(Exception):
    http_code: int
    code: str
    message: str

    def __init__(self, http_code: int = None, code: str = None, message: str = None):
        self.http_code = http_code if http_code else 500
        self.code = code if code else str(self.http_code)
        self.message = message
        super().__init__(message)


class BusinessException(CustomException):

    def __init__(self, error_code: ErrorCode, message: str = None):
        super().__init__(
            http_code=error_code.http_code,
            code=error_code.code,
            message=message or error_code.message
        )
        self.error_code = error_code


def _error_content(code: str, message: str) -> dict:
    return jsonable_encoder({
        'success': False,
        'code': code,
        'message': message,
        'data': None
    })


async def http_exception_handler(request: Request, exc: CustomException):
    return JSONResponse(
        status_code=exc.http_code,
        content=_error_content(exc.code, exc.message)
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.info(f"Request validation failed on {request.url.path}: {exc.errors()}")
    error_code = GeneralErrorCode.INVALID_INPUT_VALUE
    return JSONResponse(
        status_code=error_code.http_code,
        content=_error_content(error_code.code, error_code.message)
    )
