import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from eventually.config import CORS_ORIGINS, HOST, LOG_LEVEL, PORT
from eventually.database import init_db
from eventually.errors import AppError, InvalidInput
from eventually.routes.category_routes import router as category_router
from eventually.routes.task_routes import router as task_router

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)


def create_app(bind=None) -> FastAPI:
    """Build the API. `bind` overrides the engine the schema is created on."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # A broken store is fatal: let the exception stop startup.
        init_db(bind)
        logger.info("eventually backend ready.")
        yield

    app = FastAPI(title="eventually", lifespan=lifespan)

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        err = InvalidInput("; ".join(str(e.get("msg")) for e in exc.errors()) or "Malformed request")
        return JSONResponse(status_code=err.status_code, content=err.to_dict())

    @app.get("/api/v1/health-check")
    def health():
        return {"status": "ok"}

    # The desktop shell's webview is a different origin.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(category_router)
    app.include_router(task_router)
    return app


app = create_app()


def run():
    import uvicorn
    uvicorn.run("eventually.main:app", host=HOST, port=PORT)


if __name__ == "__main__":
    run()
