"""
store/
------
Persistence for user preferences.

    from store import SessionStore
"""

from store.session import SessionStore, DEFAULT_PREFERENCES, RECENT_LIMIT

__all__ = ["SessionStore", "DEFAULT_PREFERENCES", "RECENT_LIMIT"]
