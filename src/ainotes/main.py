"""Application entry point for the AI Notes backend server."""

from ainotes.app import App
from ainotes.config import Config
from ainotes.logging import setup_logging
from ainotes.web.runner import run_server


def main() -> None:
    config = Config()
    setup_logging(config)
    app = App(config)
    run_server(app, config)


if __name__ == "__main__":
    main()
