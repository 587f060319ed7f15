import structlog
import uvicorn

from app.core.config import Settings, settings

log = structlog.get_logger()


def main(config: Settings = settings) -> None:
    """Serve the API with uvicorn; auto-reload in local development."""
    reload = config.ENVIRONMENT == "local"
    log.info(
        "server.starting",
        host=config.HOST,
        port=config.PORT,
        environment=config.ENVIRONMENT or "unset",
        reload=reload,
    )
    uvicorn.run(
        "app.main:app",
        host=config.HOST,
        port=config.PORT,
        reload=reload,
        log_config=None,
        proxy_headers=config.is_production,
    )


if __name__ == "__main__":
    main()
