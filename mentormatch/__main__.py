import uvicorn

from mentormatch.config import settings


def main() -> None:
    uvicorn.run(
        "mentormatch.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
