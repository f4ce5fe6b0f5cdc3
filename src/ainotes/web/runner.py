import uvicorn

from ainotes.app import App
from ainotes.config import Config
from ainotes.web.server import create_fastapi_app


def run_server(app: App, config: Config) -> None:
    """Serve the API with uvicorn.

    uvicorn's own logging setup is skipped (`log_config=None`), so its error
    and access records go through the handlers `setup_logging` installed.
    """
    uvicorn.run(
        create_fastapi_app(app, config),
        host=config.host,
        port=config.port,
        log_config=None,
        log_level="debug" if config.debug else "info",
        access_log=config.access_log,
    )
