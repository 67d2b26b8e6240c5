from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from appointment_widget.core.config import Settings, settings as default_settings
from appointment_widget.core.exceptions import BookingError, BookingValidationError
from appointment_widget.api import bookings
from appointment_widget.core.logger import setup_logging, logger
from appointment_widget.services.store import BookingStore, build_store
from contextlib import asynccontextmanager
from datetime import datetime


def create_app(settings: Settings = None, store: BookingStore = None) -> FastAPI:
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        logger.info(f"🚀 Starting {settings.PROJECT_NAME} ({settings.ENVIRONMENT})")
        app.state.store = store or build_store(settings)
        await app.state.store.open()
        yield
        # Shutdown
        await app.state.store.close()
        logger.info("🛑 Shutting down backend")

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version="0.1.0",
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["GET", "POST", "DELETE"],
        allow_headers=["*"],
    )

    @app.exception_handler(BookingError)
    async def booking_error_handler(request: Request, exc: BookingError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    # Malformed body / path params answer like a failed booking validation
    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = {}
        for err in exc.errors():
            loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
            errors.setdefault(".".join(loc) or "body", err.get("msg", "Invalid value"))
        error = BookingValidationError(errors)
        return JSONResponse(status_code=error.status_code, content=error.to_dict())

    # Global Exception Handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.opt(exception=exc).error(f"🔥 UNHANDLED ERROR: {str(exc)}")
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error"}
        )

    app.include_router(bookings.router, prefix=settings.API_V1_STR, tags=["Bookings"])

    @app.get("/")
    async def health_check():
        return {'status': 'active', 'time': datetime.now().isoformat()}

    @app.get("/health")
    async def health_check_std():
        return {"status": "ok", "environment": settings.ENVIRONMENT, "timestamp": datetime.now().isoformat()}

    return app


setup_logging()
app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("appointment_widget.main:app", host="0.0.0.0", port=default_settings.PORT, reload=True)
