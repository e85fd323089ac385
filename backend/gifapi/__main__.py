"""Run the API with uvicorn: python -m gifapi"""

import sys

import uvicorn

from gifapi.core.errors import StartupError
from gifapi.main import load_settings


def main() -> None:
    try:
        settings = load_settings()
    except StartupError as e:
        sys.exit(f"gif-api failed to start: {e}")
    uvicorn.run("gifapi.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
