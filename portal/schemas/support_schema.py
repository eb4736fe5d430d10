from datetime import datetime

from pydantic import BaseModel, Field


class SupportChatRequest(BaseModel):
    message: str = Field(min_length=1)


class SupportChatResponse(BaseModel):
    reply: str
    timestamp: datetime


class UploadLinkResponse(BaseModel):
    upload_url: str
    file_url: str
