import hashlib
from typing import Optional

from fastapi import APIRouter, Depends, Request

from ..config import Settings
from ..logic.dispatcher import ProviderDispatcher, build_request
from ..schemas.relay import GenerateBody, GenerateResponse, HealthResponse

router = APIRouter(prefix="/api")


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_dispatcher(request: Request) -> ProviderDispatcher:
    return request.app.state.dispatcher


def pin_hash(pin: Optional[str]) -> Optional[str]:
    if not pin:
        return None
    return hashlib.sha256(pin.encode("utf-8")).hexdigest()


@router.post("/generate", response_model=GenerateResponse)
async def generate(body: GenerateBody, dispatcher: ProviderDispatcher = Depends(get_dispatcher)):
    # InvalidRequest / NoProvidersConfigured / AllProvidersFailed are mapped by the app's handlers
    req = build_request(body.sys, body.user_msg, body.max_tokens)
    result = await dispatcher.dispatch(req)
    return GenerateResponse(text=result.text, provider=result.provider)


@router.get("/health", response_model=HealthResponse, response_model_by_alias=True)
def health(settings: Settings = Depends(get_settings), dispatcher: ProviderDispatcher = Depends(get_dispatcher)):
    return HealthResponse(
        providers={p.name: settings.is_configured(p.name) for p in dispatcher.providers},
        pin_hash=pin_hash(settings.app_pin),
    )
