from fastapi import FastAPI
from .settings import settings
from .logging_config import configure_logging
from .routers import payment_endpoints, provider_webhooks

configure_logging(settings.LOG_LEVEL, format_as_json=settings.LOG_JSON)

app = FastAPI(title=settings.APP_NAME)

app.include_router(payment_endpoints.router, tags=["Payments"])
app.include_router(provider_webhooks.router, tags=["Provider Webhooks"])

@app.get("/health", tags=["Ops"])
async def health():
    return {"status": "ok"}
