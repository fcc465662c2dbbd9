from __future__ import annotations

import uvicorn

from .config import configure_logging, settings


def main() -> None:
    configure_logging()
    uvicorn.run("att_report.main:app", host=settings.host, port=settings.port, reload=False)


if __name__ == "__main__":
    main()
