import uvicorn

from user_service.config.settings import get_settings
from user_service.main import create_app


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        create_app(settings),
        host=settings.HOST,
        port=settings.PORT,
        log_config=None,  # keep the dictConfig installed by create_app
    )


if __name__ == "__main__":
    main()
