from pydantic import BaseModel, Field

from promoposter.imaging.style import LayoutVariant


class UploadResponse(BaseModel):
    success: bool
    filename: str
    summary: str
    summaryStatus: str


class CreateRequest(BaseModel):
    text: str = ""


class CreateResponse(BaseModel):
    success: bool
    imageUrls: str
    summary: str


class UploadImageResponse(BaseModel):
    message: str
    filePath: str
    promotionText: str


class ComposeRequest(BaseModel):
    text: str = ""
    fileName: str | None = None
    imageUrl: str | None = None
    layout: LayoutVariant | None = None


class ComposeResponse(BaseModel):
    success: bool
    filePath: str
    fileName: str
    url: str


class RecipientIn(BaseModel):
    to: str
    name: str | None = None
    changeWord: str | None = None


class SendMmsRequest(BaseModel):
    messageContent: str = ""
    sender: str | None = None
    recipients: list[RecipientIn] | None = Field(default=None)
    fileUrl: str | None = None
    fileName: str | None = None


class SendMmsResponse(BaseModel):
    messageKey: str


class ErrorResponse(BaseModel):
    error: str
    code: str
