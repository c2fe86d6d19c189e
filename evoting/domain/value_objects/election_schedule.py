"""Election schedule value object."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class ElectionSchedule:
    """The four ordered boundaries of an election timeline.

    A valid schedule satisfies
    ``whitelist_start < whitelist_end < vote_start < vote_end``.
    """

    whitelist_start: datetime
    whitelist_end: datetime
    vote_start: datetime
    vote_end: datetime

    BOUNDARIES = ("whitelist_start", "whitelist_end", "vote_start", "vote_end")

    def as_dict(self) -> dict[str, datetime]:
        return {name: getattr(self, name) for name in self.BOUNDARIES}
