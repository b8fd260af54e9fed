import logging

import uvicorn

from taskboard.config import Settings


def run() -> None:
    settings = Settings.from_env()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run("taskboard.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
