"""Invoicing API entry point

Run with `python api.py` for local development, or point an ASGI server
at `api:app`. The overdue sweep runs as a separate process
(`python -m src.worker.overdue_sweeper`).
"""

import uvicorn
from config import ApplicationConfig
from src.api.app import create_app

app = create_app(ApplicationConfig)

if __name__ == "__main__":
    uvicorn.run(
        "api:app",
        host=ApplicationConfig.API_HOST,
        port=ApplicationConfig.API_PORT,
        reload=ApplicationConfig.API_RELOAD,
        workers=None if ApplicationConfig.API_RELOAD else ApplicationConfig.API_WORKERS,
        log_level=ApplicationConfig.LOG_LEVEL.lower(),
        access_log=not ApplicationConfig.ENABLE_LOGGING_MIDDLEWARE,
    )
