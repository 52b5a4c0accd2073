"""
Name: ASGI Entrypoint (sharespace.main)

Responsibilities:
  - Re-export the FastAPI app for ASGI servers and tooling
  - Keep this module side-effect free beyond importing sharespace.api.main

Notes/Constraints:
  - uvicorn sharespace.main:app
"""

from sharespace.api.main import app

__all__ = ["app"]
