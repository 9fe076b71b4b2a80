from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field


class GenerateBody(BaseModel):
    """
    Generation request from the browser client:
    - sys: system prompt
    - userMsg: user message
    - maxTokens: optional token budget (defaults to 900)
    """
    model_config = ConfigDict(populate_by_name=True)

    sys: Optional[str] = None
    user_msg: Optional[str] = Field(default=None, alias="userMsg")
    max_tokens: Optional[int] = Field(default=None, alias="maxTokens")


class GenerateResponse(BaseModel):
    text: str
    provider: str


class AttemptOut(BaseModel):
    provider: str
    message: str


class ErrorResponse(BaseModel):
    error: str
    attempts: Optional[List[AttemptOut]] = None


class HealthResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    status: str = "ok"
    providers: Dict[str, bool]
    pin_hash: Optional[str] = Field(default=None, alias="pinHash")
