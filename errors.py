"""
errors.py — Visualizer Error Types
===================================
Two kinds of failure exist in the visualizer:

  • ValidationError       – bad user input (dataset text, size, target).
                            Recovered locally and shown to the user; the
                            current run is never touched.
  • StateTransitionError  – a playback command that is illegal in the
                            current state (e.g. resume() while IDLE).
                            A caller bug, raised before anything mutates.
"""

from typing import Optional


class VisualizerError(Exception):
    """Base class for every error the visualizer raises on purpose."""


class ValidationError(VisualizerError):
    """
    Attributes:
        token : The offending input token, when a single token is to blame.
    """

    def __init__(self, message: str, token: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.token   = token

    def to_dict(self) -> dict:
        data = {"error": self.message}
        if self.token is not None:
            data["token"] = self.token
        return data


class StateTransitionError(VisualizerError):
    def __init__(self, action: str, state: str):
        super().__init__(f"Cannot {action}() while {state}")
        self.action = action
        self.state  = state
