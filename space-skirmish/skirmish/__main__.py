import uvicorn

from .config import CONFIG, configure_logging


def main() -> None:
    configure_logging()
    uvicorn.run("skirmish.app:app", host=CONFIG.host, port=CONFIG.port, log_level=CONFIG.log_level.lower())


if __name__ == "__main__":
    main()
