"""Views module - server-rendered list pages."""

from todolist.views.router import router

__all__ = ["router"]
