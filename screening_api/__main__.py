"""Run the API with uvicorn: ``python -m screening_api``."""

import uvicorn

from screening_api.core.config import settings


def main() -> None:
    uvicorn.run(
        "screening_api.main:app",
        host="0.0.0.0",
        port=settings.app_port,
        reload=settings.is_development,
        log_level="info",
    )


if __name__ == "__main__":
    main()
