import logging

from fastapi import FastAPI

from shiftengine.core.config import settings
from shiftengine.api.routes import payroll, shift_ai

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

app = FastAPI(title="Shift Engine API", version="0.1.0")

app.include_router(shift_ai.router, prefix="/api/v1")
app.include_router(payroll.router, prefix="/api/v1")


@app.get("/health")
def health_check():
    return {"status": "ok"}
