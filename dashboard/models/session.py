"""Session and view-state models owned by the dashboard controller."""
from enum import Enum
from itertools import count
from typing import Any, Iterator, Optional

from attrs import define, field

from dashboard.models.location import Coordinate


class SessionPhase(str, Enum):
    """Lifecycle of one location session."""

    IDLE = "idle"
    LOCATING = "locating"
    FETCHING = "fetching"
    RENDERED = "rendered"
    FAILED = "failed"


class SessionTrigger(str, Enum):
    """What started a session."""

    LOAD = "load"
    RECENTER = "recenter"
    MAP_CLICK = "map_click"


@define
class MapMarker:
    """The single marker shown on the map."""

    coordinate: Coordinate
    popup: str


@define
class Session:
    """One location-driven fetch-and-render cycle."""

    session_id: int
    trigger: SessionTrigger
    phase: SessionPhase = SessionPhase.IDLE
    coordinate: Optional[Coordinate] = None


@define
class ViewState:
    """
    Mutable view state shared by all sessions.

    Only the session whose id equals ``current_session_id`` may mutate the
    marker, chart or document. Responses for older sessions are dropped.
    """

    current_session_id: int = 0
    session: Optional[Session] = None
    marker: Optional[MapMarker] = None
    chart: Optional[Any] = None
    fullscreen: bool = False
    _ids: Iterator[int] = field(factory=lambda: count(1), repr=False)

    def begin(self, trigger: SessionTrigger) -> Session:
        """Start a new session, making every earlier one stale."""
        session = Session(session_id=next(self._ids), trigger=trigger)
        self.current_session_id = session.session_id
        self.session = session
        return session

    def is_current(self, session: Session) -> bool:
        return session.session_id == self.current_session_id

    @property
    def phase(self) -> SessionPhase:
        return self.session.phase if self.session else SessionPhase.IDLE
