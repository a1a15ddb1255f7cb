"""Run the Squadz server with uvicorn."""

import uvicorn

from squadz.config import Settings


def main() -> None:
    """Serve the ASGI app on the configured host and port."""
    settings = Settings()
    uvicorn.run("squadz.api.asgi:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
