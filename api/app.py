"""
FastAPI application for the quote service.
Main application entry point for the API server.
"""

from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response

from store.quote_store import QuoteStore, create_default_store
from utils import (
    api_logger, config_manager, QuoteNotFoundError, QuoteRangeError, create_error_response
)

from .models import HealthResponse
from .routes import router, JSON_MEDIA_TYPE
from .middleware import setup_middleware

API_VERSION = "1.0.0"

NOT_FOUND_BODY = "Quote Not Found"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """应用生命周期管理"""
    api_logger.info(f"[API] Starting Quote Service API with {app.state.quote_store.count()} quotes...")
    yield
    api_logger.info("[API] Shutting down Quote Service API...")


async def quote_not_found_handler(request: Request, exc: QuoteNotFoundError):
    """报价不存在：按约定返回 400 和纯文本主体"""
    api_logger.warning(f"[API] {request.method} {request.url.path} - {exc}")
    return Response(content=NOT_FOUND_BODY, status_code=400, media_type=JSON_MEDIA_TYPE)


async def quote_range_handler(request: Request, exc: QuoteRangeError):
    """分页越界视为服务端错误"""
    api_logger.error(f"[API] {request.method} {request.url} - {exc}")
    return JSONResponse(status_code=500, content=create_error_response(exc))


def create_app(quote_store: Optional[QuoteStore] = None) -> FastAPI:
    """创建应用，每个应用持有一个报价存储"""
    app = FastAPI(
        title="Quote Service API",
        description="CRUD operations over an in-memory collection of quotes",
        version=API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan
    )
    app.state.quote_store = quote_store if quote_store is not None else create_default_store()

    setup_middleware(app)

    app.add_exception_handler(QuoteNotFoundError, quote_not_found_handler)
    app.add_exception_handler(QuoteRangeError, quote_range_handler)

    app.include_router(router)

    @app.get("/health", response_model=HealthResponse, tags=["System"])
    async def health_check(request: Request):
        """健康检查端点"""
        return HealthResponse(
            status="healthy",
            timestamp=datetime.now().isoformat(),
            version=API_VERSION,
            total_quotes=request.app.state.quote_store.count()
        )

    return app


app = create_app()


if __name__ == "__main__":
    api_config = config_manager.get_api_config()

    api_logger.info(f"[API] Starting server on {api_config.host}:{api_config.port}")

    if api_config.reload:
        uvicorn.run(
            "api.app:app",
            host=api_config.host,
            port=api_config.port,
            reload=True,
            log_level="info"
        )
    else:
        uvicorn.run(
            app,
            host=api_config.host,
            port=api_config.port,
            log_level="info"
        )
