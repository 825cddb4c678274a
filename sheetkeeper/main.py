import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from sheetkeeper.api.endpoints import api_router
from sheetkeeper.core.config import settings
from sheetkeeper.core.error import DomainErrorCode, SheetDomainError
from sheetkeeper.db.session import close_db, init_db
from sheetkeeper.schemas.common import BaseResponse

logger = logging.getLogger(__name__)

app = FastAPI(
    title="sheetkeeper",
    description="Character sheet store shared by the terminal app and FoundryVTT",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["GET", "POST"],
    allow_headers=["Content-Type"],
)

app.include_router(api_router, prefix=settings.API_PREFIX)


@app.on_event("startup")
async def on_startup() -> None:
    await init_db()


@app.on_event("shutdown")
async def on_shutdown() -> None:
    await close_db()


@app.get("/health", status_code=status.HTTP_200_OK)
async def health_check() -> BaseResponse:
    return BaseResponse(message="healthy")


domain_error_code_mapper = {
    DomainErrorCode.VALIDATION_FAILED: status.HTTP_400_BAD_REQUEST,
    DomainErrorCode.DUPLICATE_KEY: status.HTTP_409_CONFLICT,
    DomainErrorCode.FOREIGN_KEY_VIOLATION: status.HTTP_400_BAD_REQUEST,
    DomainErrorCode.CHARACTER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    DomainErrorCode.OBJECT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    DomainErrorCode.DOCUMENT_TOO_LARGE: status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
    DomainErrorCode.CORRUPT_PAYLOAD: status.HTTP_500_INTERNAL_SERVER_ERROR,
    DomainErrorCode.STORAGE_UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
}


@app.exception_handler(SheetDomainError)
async def sheet_domain_error_handler(
    _request: Request,
    exc: SheetDomainError,
) -> JSONResponse:
    status_code = domain_error_code_mapper.get(
        exc.code,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
    if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error(f"{exc.code.value}: {exc.message} {exc.details}")

    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(
            {
                "success": False,
                "error": exc.message,
                "code": exc.code,
                "error_details": exc.details,
            }
        ),
    )


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(
    _request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=jsonable_encoder(
            {
                "success": False,
                "error": "Invalid request body",
                "code": DomainErrorCode.VALIDATION_FAILED,
                "error_details": {"errors": exc.errors()},
            }
        ),
    )
