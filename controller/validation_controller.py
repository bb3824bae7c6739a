# controller/validation_controller.py
from fastapi import APIRouter, Depends
from fastapi_limiter.depends import RateLimiter
from config.settings import settings
from controller.controller_dependencies import get_api_key_validation_service
from model.api import ValidateKeyRequest, ValidateKeyResponse
from service.api_key_validation_service import ApiKeyValidationService
from util.constants import InternalURIs

validation_router = APIRouter()


@validation_router.post(
    InternalURIs.VALIDATE_API_KEY,
    response_model=ValidateKeyResponse,
    dependencies=[
        Depends(
            RateLimiter(
                times=max(1, settings.RATE_LIMIT_TIMES // 4),
                seconds=settings.RATE_LIMIT_SECONDS,
            )
        )
    ],
)
async def validate_api_key(
    payload: ValidateKeyRequest,
    service: ApiKeyValidationService = Depends(get_api_key_validation_service),
) -> ValidateKeyResponse:
    warning = await service.validate_key(payload.apiKey)
    return ValidateKeyResponse(ok=True, warning=warning)
