"""ASGI entry point: ``uvicorn reservas.api.app:app``."""

from reservas.api.factory import create_app

app = create_app()
