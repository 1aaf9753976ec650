"""Playwright 공용 브라우저."""

from .browser import BrowserManager, build_launch_args
from .pages import configure_page

__all__ = ["BrowserManager", "build_launch_args", "configure_page"]
