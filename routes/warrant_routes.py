from __future__ import annotations

from fastapi import APIRouter, File, Request, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse, Response

from schemas.warrant import ErrorResponse, ExportRequest, ParseResponse
from services.errors import ParseFailure, WarrantError
from services.excel_export import XLSX_MEDIA_TYPE, content_disposition
from services.warrant_service import WarrantService


router = APIRouter(prefix="/api", tags=["warrants"])

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Missing or invalid upload"},
    413: {"model": ErrorResponse, "description": "Upload too large"},
    422: {"model": ErrorResponse, "description": "Text could not be extracted or parsed"},
}


def get_warrant_service(request: Request) -> WarrantService:
    service = getattr(request.app.state, "warrant_service", None)
    if service is None:
        service = WarrantService()
        request.app.state.warrant_service = service
    return service


async def warrant_error_handler(request: Request, exc: WarrantError) -> JSONResponse:
    body = {"success": False, "error": exc.message}
    if isinstance(exc, ParseFailure) and exc.preview:
        body["debug"] = exc.preview
    return JSONResponse(status_code=exc.status_code, content=body)


@router.post(
    "/parse",
    response_model=ParseResponse,
    response_model_by_alias=True,
    responses=ERROR_RESPONSES,
)
async def parse_warrant(request: Request, file: UploadFile | None = File(default=None)):
    """Accept a warrant PDF and return its payment records."""
    service = get_warrant_service(request)
    return await service.parse_upload(file)


@router.post("/export")
async def export_warrant(request: Request, body: ExportRequest) -> Response:
    service = get_warrant_service(request)
    content, filename = await run_in_threadpool(service.export, body)
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": content_disposition(filename)},
    )
