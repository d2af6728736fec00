import logging
from fastapi import FastAPI
from app.api.summary import router as summary_router
from app.core.config import LOG_LEVEL

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

app = FastAPI(
    title="Component Definition Summarizer",
    version="1.0.0",
)

app.include_router(summary_router, prefix="/api", tags=["Summary"])

# health check
@app.get("/")
def root():
    return {"message": "Definition Summarizer Backend is running"}
