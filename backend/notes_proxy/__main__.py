"""Run the standalone server: python -m notes_proxy"""

import uvicorn

from notes_proxy.config import settings


def main() -> None:
    uvicorn.run(
        "notes_proxy.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
