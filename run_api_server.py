"""
FastAPI Server Startup Script
Run this to start the Invoice Dashboard API server
"""

import uvicorn

from dashboard_api.config import load_settings
from dashboard_api.logs import logger, set_level

log = logger("server")

def main():
    """Start the FastAPI server"""
    settings = load_settings()
    set_level(settings.log_level)

    log.info("Starting Invoice Dashboard API Server on http://%s:%s", settings.api_host, settings.api_port)
    log.info("API Documentation: http://%s:%s/docs", settings.api_host, settings.api_port)

    uvicorn.run(
        "dashboard_api.main:create_app",
        factory=True,
        host=settings.api_host,
        port=settings.api_port,
        reload=True,
        log_level=settings.log_level.lower(),
        access_log=True
    )

if __name__ == "__main__":
    main()
