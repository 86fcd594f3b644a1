from typing import Optional
from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from datetime import date
from .config import load_settings
from .database import DatabaseClient, SupabaseDatabaseClient
from .errors import DataAccessError, InvoiceValidationError
from .logs import logger, set_level
from .models import ErrorResponse
from .revalidation import ViewRevalidator, revalidator_from_settings
from .routers.customers import router as customers_router
from .routers.dashboard import router as dashboard_router
from .routers.invoices import router as invoices_router

log = logger(__name__)

def create_app(db: Optional[DatabaseClient] = None, revalidator: Optional[ViewRevalidator] = None) -> FastAPI:
    """
    Build the API around the given store and revalidator.

    Whatever is not passed in is built from the environment, so a missing
    SUPABASE_URL/SUPABASE_KEY stops startup with a ConfigurationError.
    """
    if db is None or revalidator is None:
        settings = load_settings()
        set_level(settings.log_level)
        db = db or SupabaseDatabaseClient.from_settings(settings)
        revalidator = revalidator or revalidator_from_settings(settings)

    app = FastAPI(
        title="Invoice Dashboard API",
        description="Data access and invoice mutations for the invoicing dashboard",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc"
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.db = db
    app.state.revalidator = revalidator

    app.include_router(dashboard_router)
    app.include_router(invoices_router)
    app.include_router(customers_router)

    @app.get("/")
    async def root():
        """Health check endpoint"""
        return {"message": "Invoice Dashboard API is running", "status": "healthy"}

    @app.get("/api/health")
    def health_check(request: Request):
        """Detailed health check with database connectivity"""
        try:
            total_invoices = request.app.state.db.count_invoices()
            return {
                "status": "healthy",
                "database": "connected",
                "total_invoices": total_invoices,
                "timestamp": date.today().isoformat()
            }
        except Exception as e:
            raise HTTPException(
                status_code=503,
                detail=f"Service unavailable: {str(e)}"
            )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request, exc):
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(
                success=False,
                error=exc.detail,
                details=f"Status Code: {exc.status_code}"
            ).model_dump()
        )

    @app.exception_handler(InvoiceValidationError)
    async def validation_exception_handler(request, exc):
        return JSONResponse(
            status_code=422,
            content=ErrorResponse(
                success=False,
                error=exc.message,
                errors=exc.errors
            ).model_dump()
        )

    @app.exception_handler(DataAccessError)
    async def data_access_exception_handler(request, exc):
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(
                success=False,
                error="Failed to load data",
                details=str(exc)
            ).model_dump()
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request, exc):
        log.exception("Unhandled error on %s", request.url.path)
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(
                success=False,
                error="Internal server error",
                details=str(exc)
            ).model_dump()
        )

    return app
