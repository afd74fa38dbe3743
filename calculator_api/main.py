import logging
import time
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import APP_TITLE, APP_VERSION, CORS_HEADERS, CORS_METHODS, Settings, setup_logging
from .errors import CalculatorError
from .schemas import (
    EvaluateResponse,
    ExpressionRequest,
    HistoryResponse,
    StateResponse,
    StateWithInfoResponse,
)
from .service import CalculatorService

logger = logging.getLogger(__name__)

API_PREFIX = "/api/calculator"


def get_service(request: Request) -> CalculatorService:
    return request.app.state.calculator


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    app = FastAPI(title=APP_TITLE, version=APP_VERSION)
    app.state.settings = settings
    app.state.calculator = CalculatorService()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=CORS_METHODS,
        allow_headers=CORS_HEADERS,
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed = (time.perf_counter() - start) * 1000
        logger.info("%s %s %d %.1fms", request.method, request.url.path,
                    response.status_code, elapsed)
        return response

    @app.exception_handler(CalculatorError)
    async def calculator_error_handler(request: Request, exc: CalculatorError):
        logger.info("rejected %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.get("/")
    def index():
        return {
            "message": "Calculator API with undo/redo",
            "version": APP_VERSION,
            "endpoints": {
                "evaluate": f"POST {API_PREFIX}/evaluate",
                "clear": f"POST {API_PREFIX}/clear",
                "undo": f"POST {API_PREFIX}/undo",
                "redo": f"POST {API_PREFIX}/redo",
                "state": f"GET {API_PREFIX}/state",
                "history": f"GET {API_PREFIX}/history",
            },
        }

    @app.get("/health")
    def health():
        return {"status": "UP"}

    @app.post(f"{API_PREFIX}/evaluate", response_model=EvaluateResponse)
    def evaluate(payload: ExpressionRequest,
                 service: CalculatorService = Depends(get_service)):
        return service.evaluate(payload.expression)

    @app.post(f"{API_PREFIX}/clear", response_model=StateResponse)
    def clear(service: CalculatorService = Depends(get_service)):
        return service.clear()

    @app.post(f"{API_PREFIX}/undo", response_model=StateResponse)
    def undo(service: CalculatorService = Depends(get_service)):
        return service.undo()

    @app.post(f"{API_PREFIX}/redo", response_model=StateResponse)
    def redo(service: CalculatorService = Depends(get_service)):
        return service.redo()

    @app.get(f"{API_PREFIX}/state", response_model=StateWithInfoResponse)
    def get_state(service: CalculatorService = Depends(get_service)):
        return service.get_state()

    @app.get(f"{API_PREFIX}/history", response_model=HistoryResponse)
    def get_history(service: CalculatorService = Depends(get_service)):
        return service.get_history()

    return app


def run() -> None:
    import uvicorn

    settings = Settings.from_env()
    setup_logging(settings.log_level)
    logger.info("starting %s %s on %s:%d", APP_TITLE, APP_VERSION,
                settings.host, settings.port)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port,
                log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
