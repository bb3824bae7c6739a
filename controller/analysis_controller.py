# controller/analysis_controller.py
from fastapi import APIRouter, Depends
from fastapi_limiter.depends import RateLimiter
from config.settings import settings
from controller.controller_dependencies import get_analysis_service
from model.api import AnalyzeRequest, AnalyzeResponse
from service.analysis_service import AnalysisService
from util.constants import InternalURIs

analysis_router = APIRouter(
    dependencies=[
        Depends(
            RateLimiter(
                times=settings.RATE_LIMIT_TIMES, seconds=settings.RATE_LIMIT_SECONDS
            )
        )
    ]
)


@analysis_router.post(InternalURIs.ANALYZE, response_model=AnalyzeResponse)
async def analyze(
    payload: AnalyzeRequest,
    service: AnalysisService = Depends(get_analysis_service),
) -> AnalyzeResponse:
    return await service.analyze(payload.text, payload.mode, payload.apiKey)
