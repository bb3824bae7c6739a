# main.py
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi_limiter import FastAPILimiter
from redis.exceptions import RedisError
from starlette.middleware.cors import CORSMiddleware
import routes
from config.cache import close_redis, get_redis, redis_ok
from config.settings import settings
from util.enums import Color, Environment
from util.logger import init_logger

logger = logging.getLogger(__name__)


def client_ip(request: Request) -> str:
    if settings.TRUST_PROXY:
        fwd = request.headers.get("x-forwarded-for")
        if fwd:
            return fwd.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


async def _limiter_identifier(request: Request) -> str:
    # bucket per caller and per route
    return f"{client_ip(request)}:{request.scope['path']}"


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_logger()
    print(f"{Color.GREEN}Starting fact-check service ({settings.APP_ENV}){Color.RESET}")
    logger.info(
        "startup model=%s conc=%d pacing=%.2fs cache_ttl=%ds",
        settings.ANTHROPIC_MODEL,
        settings.VERIFY_CONCURRENCY,
        settings.VERIFY_PACING_SECONDS,
        settings.CACHE_DURATION_SECONDS,
    )
    if not settings.ANTHROPIC_API_KEY:
        logger.warning("startup.no_default_key requests must carry apiKey")
    if not settings.EXA_API_KEY:
        logger.warning("startup.no_exa_key claims will be judged without sources")

    try:
        # claim cache, analysis cache and the rate limiter share this connection
        await FastAPILimiter.init(await get_redis(), identifier=_limiter_identifier)
    except (RedisError, OSError):
        logger.critical("startup.redis.unavailable url=%s", settings.REDIS_URL, exc_info=True)
        raise
    print(f"{Color.BLUE}Server Started{Color.RESET}")

    try:
        yield
    finally:
        try:
            await close_redis()
        except RedisError:
            logger.error("shutdown.redis.close_failed", exc_info=True)
        print(f"{Color.RED}Server Shutdown{Color.RESET}")


app: FastAPI = FastAPI(title="factcheck", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.ALLOWED_ORIGIN],
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["Content-Type", "Accept"],
)


@app.get("/healthz")
async def healthz():
    return {
        "ok": True,
        "redis": await redis_ok(),
        "model": settings.ANTHROPIC_MODEL,
        "defaultKey": bool(settings.ANTHROPIC_API_KEY),
    }


@app.exception_handler(status.HTTP_429_TOO_MANY_REQUESTS)
async def rate_limited(request: Request, exc):
    seconds = settings.RATE_LIMIT_SECONDS
    return JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content={
            "ok": False,
            "error": "rate_limited",
            "message": f"Too many requests. Try again in {seconds}s.",
        },
        headers={"Retry-After": str(seconds)},
    )


@app.exception_handler(RedisError)
async def redis_unavailable(request: Request, exc: RedisError):
    logger.error("redis.error path=%s err=%s", request.url.path, type(exc).__name__)
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"ok": False, "error": "cache_unavailable", "message": "Cache backend unavailable."},
    )


routes.register_routes(app)

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="127.0.0.1",
        port=8000,
        reload=settings.APP_ENV == Environment.DEV,
    )
