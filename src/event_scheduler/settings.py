from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta


@dataclass
class Settings:
    data_file:             str = "events.dat"
    poll_interval_seconds: int = 60
    lookahead_minutes:     int = 60
    log_level:             str = "INFO"

    @property
    def lookahead(self) -> timedelta:
        return timedelta(minutes=self.lookahead_minutes)

    def validate(self) -> None:
        if not self.data_file:
            raise ValueError("data_file must not be empty")
        if self.poll_interval_seconds < 1:
            raise ValueError("poll_interval_seconds must be >= 1")
        if self.lookahead_minutes < 1:
            raise ValueError("lookahead_minutes must be >= 1")
