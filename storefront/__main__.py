# storefront/__main__.py
import uvicorn

from storefront.core.settings import settings


def main() -> None:
    uvicorn.run(
        "storefront.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
