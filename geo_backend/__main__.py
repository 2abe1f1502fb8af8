"""Run the API with uvicorn.

Usage:
    python -m geo_backend
"""
import uvicorn

from geo_backend.core import config


def main() -> None:
    uvicorn.run('geo_backend.main:app', host=config.HOST, port=config.PORT)


if __name__ == "__main__":
    main()
