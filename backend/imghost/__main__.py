"""
Run the local upload API: python -m imghost
"""
import uvicorn

from imghost.config import settings


def main():
    uvicorn.run(
        "imghost.main:app",
        host=settings.host,
        port=settings.port,
        log_config=None,  # structured logging is configured in the app lifespan
    )


if __name__ == "__main__":
    main()
