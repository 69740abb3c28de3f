"""Run the API with uvicorn on the configured port."""

import uvicorn

from city_wellbeing.config import Settings


def main() -> None:
    """Start the HTTP server."""
    settings = Settings()
    uvicorn.run(
        "city_wellbeing.api.asgi:app",
        host="0.0.0.0",  # noqa: S104
        port=settings.port,
    )


if __name__ == "__main__":
    main()
