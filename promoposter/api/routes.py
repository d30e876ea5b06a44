from pathlib import Path, PurePosixPath
from typing import Annotated
from urllib.parse import urlparse

from fastapi import APIRouter, Depends, File, Form, UploadFile

from promoposter.api.deps import get_service
from promoposter.api.schemas import (
    ComposeRequest,
    ComposeResponse,
    CreateRequest,
    CreateResponse,
    ErrorResponse,
    SendMmsRequest,
    SendMmsResponse,
    UploadImageResponse,
    UploadResponse,
)
from promoposter.dispatch.exceptions import DispatchError
from promoposter.dispatch.models import DispatchRequest, Recipient
from promoposter.errors import InvalidRequestError
from promoposter.generation.models import SummaryStatus
from promoposter.logging.logger import Log
from promoposter.processor.service import PosterService

router = APIRouter()

Service = Annotated[PosterService, Depends(get_service)]

_ERRORS = {
    400: {"model": ErrorResponse, "description": "Invalid input."},
    500: {"model": ErrorResponse, "description": "Unexpected server error."},
    502: {"model": ErrorResponse, "description": "Upstream provider failed."},
}


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


@router.post("/upload", response_model=UploadResponse, responses=_ERRORS)
async def upload_document(
    service: Service,
    file: Annotated[UploadFile, File()],
    userText: Annotated[str, Form()] = "",
) -> UploadResponse:
    data = await file.read()
    path = service.save_upload(data, file.filename or "")
    Log.info(f"Received document {file.filename} stored as {path.name}")

    result = await service.summarize_upload(path, userText)
    if result.status is SummaryStatus.FAILED and result.error is not None:
        raise result.error
    return UploadResponse(
        success=True,
        filename=path.name,
        summary=result.text,
        summaryStatus=result.status.value,
    )


@router.post("/create", response_model=CreateResponse, responses=_ERRORS)
async def create_images(request: CreateRequest, service: Service) -> CreateResponse:
    result = await service.create_images(request.text)
    return CreateResponse(
        success=True,
        imageUrls=",".join(result.image_urls),
        summary=result.poster_text,
    )


@router.post("/upload-image", response_model=UploadImageResponse, responses=_ERRORS)
async def upload_edited_image(
    service: Service,
    image: Annotated[UploadFile | None, File()] = None,
    summarizedText: Annotated[str, Form()] = "",
) -> UploadImageResponse:
    if image is None:
        raise InvalidRequestError("No image file was uploaded")
    if not summarizedText.strip():
        raise InvalidRequestError("summarizedText is required")

    result = await service.store_edited_image(await image.read(), summarizedText)
    return UploadImageResponse(
        message="File uploaded",
        filePath=result.file_path,
        promotionText=result.promotion_text,
    )


@router.post("/compose", response_model=ComposeResponse, responses=_ERRORS)
async def compose_poster(request: ComposeRequest, service: Service) -> ComposeResponse:
    background = _resolve_background(service, request)
    poster = await service.compose_poster(background, request.text, request.layout)
    return ComposeResponse(
        success=True,
        filePath=f"/posters/{poster.name}",
        fileName=poster.name,
        url=poster.url,
    )


@router.post("/send-mms", response_model=SendMmsResponse, responses=_ERRORS)
async def send_mms(request: SendMmsRequest, service: Service) -> SendMmsResponse:
    if not request.sender or not request.recipients:
        raise InvalidRequestError("Sender and recipients are required")
    if not request.fileUrl or not request.fileName:
        raise InvalidRequestError("fileUrl and fileName are required")

    try:
        poster_path = service.store.resolve("edit-images", request.fileName)
    except ValueError as exc:
        raise InvalidRequestError(str(exc)) from exc

    dispatch_request = DispatchRequest(
        sender=request.sender,
        recipients=tuple(
            Recipient(phone_number=r.to, name=r.name, substitution_token=r.changeWord)
            for r in request.recipients
        ),
        message=request.messageContent,
        poster_path=poster_path,
    )
    result = await service.dispatch(dispatch_request)
    if not result.succeeded or result.message_key is None:
        if result.error is not None:
            raise result.error
        raise DispatchError("Dispatch did not complete")
    return SendMmsResponse(messageKey=result.message_key)


def _resolve_background(service: PosterService, request: ComposeRequest) -> Path:
    """Find the stored background named by ``fileName`` or ``imageUrl``."""
    if request.fileName:
        category, name = "images", request.fileName
    elif request.imageUrl:
        parts = PurePosixPath(urlparse(request.imageUrl).path).parts
        if len(parts) < 3 or parts[-2] not in service.store.CATEGORIES:
            raise InvalidRequestError("imageUrl does not point at a stored image")
        category, name = parts[-2], parts[-1]
    else:
        raise InvalidRequestError("fileName or imageUrl is required")

    try:
        path = service.store.resolve(category, name)
    except ValueError as exc:
        raise InvalidRequestError(str(exc)) from exc
    if not path.is_file():
        raise InvalidRequestError(f"Background image {name} was not found")
    return path
