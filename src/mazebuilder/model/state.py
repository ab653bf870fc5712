"""
Request State
=============
Data carried through one maze request.

RequestState is owned and mutated only by the MazeRequestController; views
read it through the controller's `state_changed` signal.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class RequestState(Enum):
    """Stages of a single maze request."""
    IDLE = "idle"
    VALIDATING = "validating"  # transient, inside submit()
    LOADING = "loading"
    SUCCESS = "success"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (RequestState.SUCCESS, RequestState.FAILED)


@dataclass(frozen=True)
class MazeRequest:
    """A validated request handed to the generator worker."""
    request_id: int
    width: int
    height: int
