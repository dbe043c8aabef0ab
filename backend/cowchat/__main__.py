"""Run the CowChat API with uvicorn: `python -m cowchat` or the `cowchat` script."""

import uvicorn

from cowchat.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "cowchat.main:app",
        host=settings.host,
        port=settings.port,
        workers=settings.workers,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
