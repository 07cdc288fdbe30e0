# social_events/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from pymongo.database import Database

from social_events.routes import events, participation
from social_events.services import db
from social_events.services.dependencies import build_components
from social_events.services.errors import ServiceError

logger = logging.getLogger(__name__)


def create_app(database: Database = None) -> FastAPI:
    """Build the application.

    With a database handle the components are wired immediately; otherwise
    the client is opened on startup from the environment and closed on
    shutdown.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        client = None
        if database is None:
            client = db.connect()
            app.state.event_store, app.state.ledger = build_components(client[db.DB_NAME])
        try:
            yield
        finally:
            if client is not None:
                client.close()
                logger.info("[DB] Connection closed")

    app = FastAPI(title="Social Development Events API", lifespan=lifespan)

    if database is not None:
        app.state.event_store, app.state.ledger = build_components(database)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError):
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "message": exc.message},
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        fields = ", ".join(str(e["loc"][-1]) for e in errors if e.get("loc"))
        message = f"Invalid request: {fields}" if fields else "Invalid request."
        return JSONResponse(status_code=400, content={"success": False, "message": message})

    @app.get("/", response_class=PlainTextResponse)
    def read_root():
        return "Social Development Events Server is Running!"

    # Events routes
    app.include_router(events.router, prefix="/api", tags=["Events"])

    # Join routes
    app.include_router(participation.router, prefix="/api", tags=["Participation"])

    return app


app = create_app()
