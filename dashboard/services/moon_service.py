"""Service projecting the next full moon."""
from datetime import date, timedelta
from typing import Optional

from astral import moon

from dashboard.config import SYNODIC_MONTH_DAYS

# astral reports lunar age on a 0-28 scale; 14 is full
_ASTRAL_CYCLE = 28.0
_ASTRAL_FULL = 14.0


class MoonService:
    """
    Projects the next full moon on the synodic cycle.

    Today's lunar age comes from astral; the remaining fraction of the
    cycle up to full is scaled to a 29.53-day month.
    """

    def days_until_full(self, today: date) -> float:
        """Days from today to the next full moon, in [0, 29.53)."""
        age = moon.phase(today)
        fraction = ((_ASTRAL_FULL - age) % _ASTRAL_CYCLE) / _ASTRAL_CYCLE
        return fraction * SYNODIC_MONTH_DAYS

    def next_full_moon(self, phase_label: str, today: Optional[date] = None) -> str:
        """Return "Today" during a full moon, otherwise the projected date ("Mon Jan 13 2025")."""
        if "full" in (phase_label or "").lower():
            return "Today"
        today = today or date.today()
        days = max(1, round(self.days_until_full(today)))
        projected = today + timedelta(days=days)
        return projected.strftime("%a %b %d %Y")
