import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from crypto_ledger import __version__
from crypto_ledger.config.state import load_config
from crypto_ledger.infrastructure.observability import get_api_logger, setup_logging
from crypto_ledger.ingestion.config.value_objects import HttpClientConfig
from crypto_ledger.ingestion.connectors.aiohttp_client import AiohttpClient
from crypto_ledger_api.health import router as health_router
from crypto_ledger_api.routes import router as api_router

logger = get_api_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    config = load_config(os.environ.get("LEDGER_CONFIG"))
    setup_logging(level=config.logging.level, json_logs=config.logging.json_logs)
    app.state.config = config
    app.state.http_client = AiohttpClient(
        HttpClientConfig(
            timeout=config.http.timeout, user_agent=config.http.user_agent
        )
    )
    logger.info("api_started", env=config.env)
    try:
        yield
    finally:
        await app.state.http_client.close()
        logger.info("api_stopped")


def create_app() -> FastAPI:
    app = FastAPI(title="Crypto Ledger API", version=__version__, lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )
    app.include_router(health_router, prefix="")  # /health directly
    app.include_router(api_router)

    @app.get("/")
    async def root():
        return {"message": "Crypto Ledger API is running"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
