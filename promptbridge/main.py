"""FastAPI application for the prompt bridge."""

from fastapi import FastAPI

from .api.routes import translate_messages
from .config_loader import ProxyConfig, load_proxy_config
from .core.registry import set_config
from .logging import setup_logging

logger = setup_logging()


def create_app(config: ProxyConfig | None = None) -> FastAPI:
    """Factory function to create the FastAPI application.

    Args:
        config: Resolved settings. Loaded from the config file when omitted.

    Returns:
        The configured FastAPI application instance.
    """
    if config is None:
        config = load_proxy_config()
    set_config(config)

    app = FastAPI(title="promptbridge")
    app.post("/v1/messages/translate")(translate_messages)

    logger.info("promptbridge application created")
    if config.upstream_model_override:
        logger.info(f"All requests will target upstream model {config.upstream_model_override}")
    if config.trigger_signal:
        logger.info("Using fixed trigger signal from configuration")
    return app


def main() -> None:
    """Serve the application with uvicorn."""
    import uvicorn

    config = load_proxy_config()
    logger.info(f"Configured bind address {config.host}:{config.port}")
    uvicorn.run(create_app(config), host=config.host, port=config.port)


if __name__ == "__main__":
    main()
