import uvicorn

from alphatrive.config.settings import get_settings


def main():
    settings = get_settings()
    uvicorn.run("alphatrive.main:app", host=settings.host, port=settings.port,
                log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
