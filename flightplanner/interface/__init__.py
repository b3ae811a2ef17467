"""Mini README: Outer interfaces of the flight planner.

Exposes the FastAPI factory used by uvicorn together with the edit helpers
shared with the command-line tool.
"""

from .edits import apply_edits, summarise
from .web_app import create_application

__all__ = ["apply_edits", "create_application", "summarise"]
