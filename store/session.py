"""
session.py — User Preferences Store
====================================
Durable home of the single user blob:

    {
        "name": "Ada",
        "email": "ada@example.com",            # optional
        "preferences": {
            "theme": "light" | "dark",
            "recentStructures": ["quick-sort", …],   # most recent first, max 5
            "preferredLanguage": "python" | "javascript" | "java",
            "animationSpeed": 50,              # optional
            "sound": true,                     # optional
            "highContrast": false,             # optional
        },
    }

The blob lives under one key of a JSON file.  No key means logged out.
Every change is written through to disk immediately.

Lifecycle:
    store = SessionStore(path, key)
    store.init()       # read the file (if any)
    …                  # load / login / save / clear / record_recent
    store.teardown()   # drop in-memory state

Calling anything between teardown() and the next init() is a bug and
raises RuntimeError.
"""

import copy
import json
import logging
import os
import threading
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

RECENT_LIMIT = 5

DEFAULT_PREFERENCES: Dict[str, Any] = {
    "theme":             "light",
    "recentStructures":  [],
    "preferredLanguage": "javascript",
}


class SessionStore:
    """
    Attributes:
        path : JSON file backing the store.
        key  : Name of the single durable entry.
    """

    def __init__(self, path: str, key: str = "codeweave-user"):
        self.path = path
        self.key  = key
        self._data: Optional[Dict[str, Any]] = None
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def init(self) -> "SessionStore":
        with self._lock:
            self._data = self._read()
        logger.debug("Session store opened at %s", self.path)
        return self

    def teardown(self) -> None:
        with self._lock:
            self._data = None

    @property
    def is_open(self) -> bool:
        return self._data is not None

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    def load(self) -> Optional[Dict[str, Any]]:
        """The user blob, or None when logged out."""
        with self._lock:
            blob = self._open_data().get(self.key)
            return copy.deepcopy(blob) if blob is not None else None

    def login(self, name: str, email: Optional[str] = None) -> Dict[str, Any]:
        """Store a user with default preferences, replacing any previous one."""
        user: Dict[str, Any] = {"name": name, "preferences": copy.deepcopy(DEFAULT_PREFERENCES)}
        if email:
            user["email"] = email
        with self._lock:
            self._open_data()[self.key] = user
            self._write()
        logger.info("User %r logged in", name)
        return copy.deepcopy(user)

    def save(self, partial: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Merge `partial` into the stored preferences.  No-op when logged out."""
        with self._lock:
            data = self._open_data()
            user = data.get(self.key)
            if user is None:
                return None
            prefs = dict(user.get("preferences") or {})
            prefs.update(partial)
            user["preferences"] = prefs
            self._write()
            return copy.deepcopy(user)

    def clear(self) -> None:
        """Log out: remove the durable key."""
        with self._lock:
            data = self._open_data()
            if data.pop(self.key, None) is not None:
                self._write()
        logger.info("User logged out")

    def record_recent(self, kind: str) -> Optional[Dict[str, Any]]:
        """Move `kind` to the front of recentStructures (de-duplicated, capped)."""
        user = self.load()
        if user is None:
            return None
        recent = [k for k in user["preferences"].get("recentStructures", []) if k != kind]
        return self.save({"recentStructures": ([kind] + recent)[:RECENT_LIMIT]})

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _open_data(self) -> Dict[str, Any]:
        if self._data is None:
            raise RuntimeError("Session store used outside init()/teardown()")
        return self._data

    def _read(self) -> Dict[str, Any]:
        if not os.path.exists(self.path):
            return {}
        with open(self.path, encoding="utf-8") as fh:
            try:
                data = json.load(fh)
            except json.JSONDecodeError:
                logger.warning("Session store %s is not valid JSON; starting empty", self.path)
                return {}
        return data if isinstance(data, dict) else {}

    def _write(self) -> None:
        folder = os.path.dirname(self.path)
        if folder:
            os.makedirs(folder, exist_ok=True)
        tmp = f"{self.path}.tmp"
        with open(tmp, "w", encoding="utf-8") as fh:
            json.dump(self._data, fh, indent=2)
        os.replace(tmp, self.path)
