from typing import Optional

from pydantic import BaseModel, Field


class MessageRequest(BaseModel):
    receiver_id: Optional[int] = None  # omit to broadcast
    content: str = Field(min_length=1)
