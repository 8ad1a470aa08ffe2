"""Run the API server: ``python -m dataset_query``."""

import uvicorn

from dataset_query.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "dataset_query.api.app:create_app",
        factory=True,
        host=settings.API_HOST,
        port=settings.API_PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
