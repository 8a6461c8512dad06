from pydantic import BaseModel


class ChatRequest(BaseModel):
    user_id: str | None = None
    message: str | None = None


class ChatResponse(BaseModel):
    success: bool
    message: str
    user_id: str
