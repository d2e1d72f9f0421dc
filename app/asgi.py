"""
ASGI entrypoint:

  uvicorn app.asgi:app
"""

from dotenv import load_dotenv

load_dotenv()

from app.main import create_app  # noqa: E402

app = create_app()
