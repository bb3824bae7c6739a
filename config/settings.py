# config/settings.py
import os
import sys
from dotenv import load_dotenv
from pydantic import ValidationError, Field
from pydantic_settings import BaseSettings
from util.constants import ExternalURIs
from util.enums import Environment
import logging


if os.getenv("APP_ENV", Environment.DEV) == Environment.DEV:
    load_dotenv()

_log = logging.getLogger("config.settings")


class Settings(BaseSettings):
    # App
    APP_ENV: str = Field(..., validation_alias="APP_ENV")
    REDIS_URL: str = Field(..., validation_alias="REDIS_URL")
    CACHE_DURATION_SECONDS: int = Field(
        default=3600, validation_alias="CACHE_DURATION_SECONDS"
    )

    # CORS & Limits
    ALLOWED_ORIGIN: str = Field(..., validation_alias="ALLOWED_ORIGIN")
    RATE_LIMIT_TIMES: int = Field(default=20, validation_alias="RATE_LIMIT_TIMES")
    RATE_LIMIT_SECONDS: int = Field(default=60, validation_alias="RATE_LIMIT_SECONDS")
    TRUST_PROXY: bool = Field(default=False, validation_alias="TRUST_PROXY")
    MAX_TEXT_LENGTH: int = Field(default=5000, validation_alias="MAX_TEXT_LENGTH")

    # Anthropic Settings
    ANTHROPIC_API_URL: str = Field(
        default=ExternalURIs.ANTHROPIC_MESSAGES, validation_alias="ANTHROPIC_API_URL"
    )
    ANTHROPIC_MODEL: str = Field(
        default="claude-3-5-sonnet-20240620", validation_alias="ANTHROPIC_MODEL"
    )
    ANTHROPIC_VERSION: str = Field(
        default="2023-06-01", validation_alias="ANTHROPIC_VERSION"
    )
    ANTHROPIC_API_KEY: str = Field(default="", validation_alias="ANTHROPIC_API_KEY")
    ANTHROPIC_TIMEOUT_SECONDS: float = 45.0

    # Exa Settings
    EXA_SEARCH_URL: str = Field(
        default=ExternalURIs.EXA_SEARCH, validation_alias="EXA_SEARCH_URL"
    )
    EXA_API_KEY: str = Field(default="", validation_alias="EXA_API_KEY")
    EXA_TIMEOUT_SECONDS: float = 20.0
    SEARCH_NUM_RESULTS: int = Field(default=5, validation_alias="SEARCH_NUM_RESULTS")

    # Pipeline pacing
    EXTRACT_MAX_ATTEMPTS: int = Field(default=3, validation_alias="EXTRACT_MAX_ATTEMPTS")
    EXTRACT_RETRY_DELAY_SECONDS: float = Field(
        default=1.0, validation_alias="EXTRACT_RETRY_DELAY_SECONDS"
    )
    VERIFY_CONCURRENCY: int = Field(default=1, validation_alias="VERIFY_CONCURRENCY")
    VERIFY_PACING_SECONDS: float = Field(
        default=0.5, validation_alias="VERIFY_PACING_SECONDS"
    )

    # Logging knobs
    LOGGER_NAME: str = "factcheck"
    LOG_LEVEL: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    LOG_TO_FILE: bool = Field(default=False, validation_alias="LOG_TO_FILE")
    LOG_DIR: str = Field(default="logs", validation_alias="LOG_DIR")
    LOG_FILE_NAME: str = Field(default="app.log", validation_alias="LOG_FILE_NAME")
    LOG_MAX_BYTES: int = Field(
        default=50 * 1024 * 1024, validation_alias="LOG_MAX_BYTES"
    )
    LOG_BACKUP_COUNT: int = Field(default=5, validation_alias="LOG_BACKUP_COUNT")

    # Prompts
    EXTRACT_SYSTEM_PROMPT: str = (
        "You are a claim extraction system. Your response must be ONLY a JSON array with no other text.\n"
        "\n"
        "Rules:\n"
        "- Each claim must be a complete sentence with subject, verb, and object\n"
        "- Include names, numbers, and specific details in the claim\n"
        "- Each claim should stand alone without needing external context\n"
        "- Focus on statements that can be fact-checked\n"
        "\n"
        "Required JSON structure:\n"
        '[{"claim": "complete sentence here.", "original_text": "source text", "type": "category"}]\n'
        "\n"
        "Valid types: statistical, historical, scientific, technological, general\n"
        "\n"
        'Example input: "Ford CEO Jim Farley said AI will eliminate 50% of white-collar jobs by 2030."\n'
        'Example output: [{"claim": "Ford CEO Jim Farley said AI will eliminate 50% of white-collar jobs by 2030.", '
        '"original_text": "Ford CEO Jim Farley said AI will eliminate 50% of white-collar jobs by 2030.", '
        '"type": "statistical"}]\n'
        "\n"
        "CRITICAL: Output ONLY the JSON array. No explanations, no markdown, just the array.\n"
    )

    VERIFY_SYSTEM_PROMPT: str = (
        "You are a JSON-only fact-checking system. You MUST respond with ONLY a JSON object, no other text.\n"
        "\n"
        "Required JSON format:\n"
        '{"assessment": "true|false|partially_true|unverifiable|needs_context", "confidence": 0-100, '
        '"summary": "One sentence", "supporting_sources": [1,2,3]}\n'
        "\n"
        "Example response:\n"
        '{"assessment": "true", "confidence": 85, "summary": "The claim is supported by source 1 and 2.", '
        '"supporting_sources": [1, 2]}\n'
        "\n"
        "CRITICAL RULES:\n"
        "1. Start your response with { and end with }\n"
        "2. No text before or after the JSON\n"
        "3. No explanations, no markdown, ONLY JSON\n"
        "4. assessment must be one of: true, false, partially_true, unverifiable, needs_context\n"
        "5. confidence must be a number 0-100\n"
        "6. summary must be one concise sentence\n"
        "7. supporting_sources must be an array of source numbers\n"
        "\n"
        "DO NOT write any other text. Begin with { and end with }.\n"
    )

    ANALYSIS_SYSTEM_PROMPT: str = (
        "You are a helpful AI assistant. Be concise and direct. "
        "Avoid lengthy explanations. Get straight to the point."
    )


try:
    settings = Settings()
except ValidationError as e:
    print("❌ Missing/invalid environment variables:", file=sys.stderr)
    for err in e.errors():
        loc = ".".join(str(x) for x in err.get("loc", []))
        msg = err.get("msg", "")
        print(f" - {loc}: {msg}", file=sys.stderr)
    sys.exit(1)
except Exception as e:
    print(f"❌ Settings initialization failed: {e}", file=sys.stderr)
    sys.exit(1)
