from pydantic import BaseModel, Field


class ChatRequest(BaseModel):
    # Optional so an absent field reaches the handler and yields a 400
    message: str | None = Field(default=None)


class ChatResponse(BaseModel):
    text: str


class ErrorResponse(BaseModel):
    error: str
