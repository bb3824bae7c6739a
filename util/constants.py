class InternalURIs:
    API = "/api"
    V1 = API + "/v1"
    VALIDATE_API_KEY = V1 + "/validate-api-key"
    EXTRACT_CLAIMS = V1 + "/extract-claims"
    FACT_CHECK = V1 + "/fact-check"
    STREAM_FACT_CHECK = V1 + "/stream-fact-check"
    ANALYZE = V1 + "/analyze"


class ExternalURIs:
    ANTHROPIC_MESSAGES = "https://api.anthropic.com/v1/messages"
    EXA_SEARCH = "https://api.exa.ai/search"
