"""
Web adapter - HTML pages rendered with Jinja2.
"""

from .routes import router

__all__ = ["router"]
