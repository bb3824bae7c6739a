# controller/fact_check_controller.py
from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse
from fastapi_limiter.depends import RateLimiter
from config.settings import settings
from service.fact_check_service import FactCheckService
from model.api import ExtractClaimsResponse, FactCheckResponse, TextRequest
from util.constants import InternalURIs
from controller.controller_dependencies import get_fact_check_service

fact_check_router = APIRouter(
    dependencies=[
        Depends(
            RateLimiter(
                times=settings.RATE_LIMIT_TIMES, seconds=settings.RATE_LIMIT_SECONDS
            )
        )
    ]
)


@fact_check_router.post(InternalURIs.EXTRACT_CLAIMS, response_model=ExtractClaimsResponse)
async def extract_claims(
    payload: TextRequest,
    service: FactCheckService = Depends(get_fact_check_service),
) -> ExtractClaimsResponse:
    return await service.extract_claims(payload.text, payload.apiKey)


@fact_check_router.post(InternalURIs.FACT_CHECK, response_model=FactCheckResponse)
async def fact_check(
    payload: TextRequest,
    service: FactCheckService = Depends(get_fact_check_service),
) -> FactCheckResponse:
    return await service.fact_check(payload.text, payload.apiKey)


@fact_check_router.post(InternalURIs.STREAM_FACT_CHECK)
async def stream_fact_check(
    payload: TextRequest,
    service: FactCheckService = Depends(get_fact_check_service),
):
    generator = service.stream_fact_check(payload.text, payload.apiKey)
    return StreamingResponse(generator, media_type="application/x-ndjson")
