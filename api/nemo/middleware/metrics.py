from prometheus_client import Counter, Histogram
from prometheus_fastapi_instrumentator import Instrumentator

LLM_REQUESTS = Counter(
    "nemo_llm_requests_total",
    "Chat requests answered by a backend",
    ["model"],
)

LLM_FALLBACK = Counter(
    "nemo_llm_fallback_total",
    "Chat requests answered with a canned reply",
    ["model", "reason"],
)

VALIDATION_ERRORS = Counter(
    "nemo_validation_errors_total",
    "Chat requests rejected before any backend call",
    ["code"],
)

QUICK_REQUESTS = Counter(
    "nemo_quick_requests_total",
    "Quick-reply lookups",
    ["known"],
)

BACKEND_LATENCY = Histogram(
    "nemo_backend_latency_seconds",
    "Backend round trip duration",
    ["model", "outcome"],
    buckets=[0.25, 0.5, 1.0, 2.0, 5.0, 10.0, 20.0, 30.0, 60.0],
)


def setup_metrics(app):
    Instrumentator(
        should_group_status_codes=True,
        should_ignore_untemplated=True,
        excluded_handlers=["/metrics", "/docs", "/openapi.json"],
    ).instrument(app).expose(app, endpoint="/metrics")
