"""Session types and the persisted session record."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class SessionType(str, Enum):
	WORK = "work"
	SHORT_BREAK = "shortBreak"
	LONG_BREAK = "longBreak"

	@property
	def display_name(self) -> str:
		return _DISPLAY_NAMES[self]

	@property
	def emoji(self) -> str:
		return _EMOJI[self]

	@property
	def is_break(self) -> bool:
		return self is not SessionType.WORK


_DISPLAY_NAMES = {
	SessionType.WORK: "Work",
	SessionType.SHORT_BREAK: "Short Break",
	SessionType.LONG_BREAK: "Long Break",
}

_EMOJI = {
	SessionType.WORK: "\U0001F345",  # tomato
	SessionType.SHORT_BREAK: "☕",  # coffee
	SessionType.LONG_BREAK: "\U0001F31F",  # star
}


@dataclass(frozen=True)
class PersistedSession:
	start_time: datetime
	end_time: datetime
	duration_seconds: float
	session_type: SessionType
	completed: bool = True
	id: str = field(default_factory=lambda: uuid.uuid4().hex)

	def to_row(self) -> dict:
		return {
			"id": self.id,
			"start_time": self.start_time.isoformat(),
			"end_time": self.end_time.isoformat(),
			"duration_sec": float(self.duration_seconds),
			"session_type": self.session_type.value,
			"completed": 1 if self.completed else 0,
		}

	@classmethod
	def from_row(cls, row) -> "PersistedSession":
		return cls(
			id=row["id"],
			start_time=datetime.fromisoformat(row["start_time"]),
			end_time=datetime.fromisoformat(row["end_time"]),
			duration_seconds=float(row["duration_sec"] or 0),
			session_type=SessionType(row["session_type"]),
			completed=bool(row["completed"]),
		)
