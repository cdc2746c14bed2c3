from fastapi import FastAPI

from app.api.admin import router as admin_router
from app.api.public import router as public_router
from app.api.webhooks import router as webhooks_router
from app.core.config import settings
from app.core.logging_config import configure_logging

configure_logging(settings.LOG_LEVEL)

app = FastAPI(title=f"{settings.STUDIO_NAME} Booking", version="1.0.0")

app.include_router(public_router, tags=["booking"])
app.include_router(webhooks_router, tags=["webhooks"])
app.include_router(admin_router, tags=["admin"])


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
