"""Run the API with uvicorn: `python -m spa_booking` (or the `spa-booking` script)."""

import uvicorn

from spa_booking.config import settings


def main() -> None:
    uvicorn.run(
        "spa_booking.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        reload=False,
    )


if __name__ == "__main__":
    main()
