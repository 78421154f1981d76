# flakeproof/api/__init__.py
"""
flakeproof user-facing API

- ToolEngine: register tools and call them by name
- Advanced/Core API lives in the core package for integrators
"""

from .engine import ToolEngine

__all__ = [
    "ToolEngine",
]
