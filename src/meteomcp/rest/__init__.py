"""REST front end: FastAPI routes over the weather operation set."""

from meteomcp.rest.app import create_app

__all__ = ["create_app"]
