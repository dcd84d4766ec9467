from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import time
from typing import Optional


class HoursCalculator(ABC):
    """Calculator interface (Strategy Pattern for worked-hours)."""

    @abstractmethod
    def worked_hours(self, first_in: Optional[time], last_out: Optional[time]) -> float:
        raise NotImplementedError
