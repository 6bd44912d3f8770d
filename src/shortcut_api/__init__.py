"""Shortcut API client.

Thin asynchronous wrapper over the Shortcut REST API (v3).
"""

from shortcut_api.client import ShortcutAPIError, ShortcutClient

__all__ = [
    "ShortcutAPIError",
    "ShortcutClient",
]
