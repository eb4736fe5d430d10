from pydantic import BaseModel


class SubmissionRequest(BaseModel):
    assignment_id: int
