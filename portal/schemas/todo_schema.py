from pydantic import BaseModel, Field


class TodoRequest(BaseModel):
    text: str = Field(min_length=1)
    completed: bool = False
