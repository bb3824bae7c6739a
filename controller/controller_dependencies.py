# controller/controller_dependencies.py
from functools import lru_cache
from core.exa_client import ExaClient
from core.scheduler import KeyedLocks
from repository.analysis_repository import AnalysisRepository
from repository.verification_cache import RedisVerificationCache
from service.analysis_service import AnalysisService
from service.api_key_validation_service import ApiKeyValidationService
from service.fact_check_service import FactCheckService


@lru_cache(maxsize=1)
def _inflight() -> KeyedLocks:
    # process-wide, so concurrent requests for the same text share one extraction
    return KeyedLocks()


def get_fact_check_service() -> FactCheckService:
    _cache = RedisVerificationCache()
    _search = ExaClient()
    _service = FactCheckService(_cache, _search, _inflight())
    return _service


def get_analysis_service() -> AnalysisService:
    return AnalysisService(AnalysisRepository())


def get_api_key_validation_service() -> ApiKeyValidationService:
    return ApiKeyValidationService()
