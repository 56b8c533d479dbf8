import uvicorn

from .config import get_settings


def main():
    settings = get_settings()
    print(f"Starting cookbook API on http://{settings.host}:{settings.port}")
    uvicorn.run("cookbook.app:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
