"""ASGI entrypoint (`uvicorn app.main:app`). No business logic; only wiring."""

from dotenv import load_dotenv

load_dotenv()

from app.application import create_app
from app.core.config import get_settings
from app.core.logging_config import configure_logging

configure_logging(get_settings())

app = create_app(get_settings())
