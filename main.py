import logging
from fastapi import FastAPI
from config import settings
from routers import calls

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Call2FA")
app.include_router(calls.router, prefix="/calls", tags=["calls"])

logger.info("Starting application with configuration:")
logger.info(f"CALL2FA_BASE_URL: {settings.CALL2FA_BASE_URL}")
logger.info(f"CALL2FA_API_VERSION: {settings.CALL2FA_API_VERSION}")

@app.get("/")
def root():
    """Health check"""
    return {"status": "ok"}

if __name__ == "__main__":
    import uvicorn
    logger.info("Starting Uvicorn server")
    uvicorn.run(app, host="0.0.0.0", port=8000, log_config=None)
