from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.logger import logger
from domain.exceptions import AppError, CycleError, NotFoundError, StoreError, ValidationError

# ========== ДОМЕННЫЕ ОШИБКИ -> HTTP ==========
STATUS_BY_ERROR: dict[type[AppError], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    CycleError: status.HTTP_409_CONFLICT,
    StoreError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={'error': message})


def _describe_validation_error(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = '.'.join(str(p) for p in err.get('loc', ()) if p != 'body')
        parts.append(f'{loc}: {err.get("msg")}' if loc else str(err.get('msg')))
    return '; '.join(parts) or 'Некорректный запрос'


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    status_code = next(
        (code for cls, code in STATUS_BY_ERROR.items() if isinstance(exc, cls)),
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
    if status_code >= 500:
        logger.error(f'{request.method} {request.url.path}: {exc.message}')
    return error_response(status_code, exc.message)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return error_response(status.HTTP_400_BAD_REQUEST, _describe_validation_error(exc))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(exc.status_code, str(exc.detail))


async def store_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error(f'{request.method} {request.url.path}: ошибка БД: {exc}', exc_info=exc)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, 'Ошибка базы данных')


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f'{request.method} {request.url.path}: необработанная ошибка: {exc}', exc_info=exc)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, 'Внутренняя ошибка сервера')


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(SQLAlchemyError, store_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
