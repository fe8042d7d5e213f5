"""User settings record.

Settings are immutable; a change produces a new object that replaces the old
one wholesale (see SessionCycleController.configure). Stored as a flat JSON
object whose keys are the camelCase names in FIELD_KEYS.
"""

import logging
from dataclasses import dataclass, field, fields, replace
from enum import Enum

logger = logging.getLogger(__name__)


class ShortcutAction(str, Enum):
	START_PAUSE = "startPause"
	RESET = "reset"
	SHOW_STATISTICS = "showStatistics"

	@property
	def display_name(self) -> str:
		return {
			ShortcutAction.START_PAUSE: "Start/Pause Timer",
			ShortcutAction.RESET: "Reset Timer",
			ShortcutAction.SHOW_STATISTICS: "Show Statistics",
		}[self]

	@property
	def default_key(self) -> str:
		return {
			ShortcutAction.START_PAUSE: "P",
			ShortcutAction.RESET: "R",
			ShortcutAction.SHOW_STATISTICS: "S",
		}[self]


_MODIFIER_SYMBOLS = (("cmd", "⌘"), ("shift", "⇧"), ("option", "⌥"), ("control", "⌃"))
_MODIFIER_QT = (("control", "Meta"), ("cmd", "Ctrl"), ("option", "Alt"), ("shift", "Shift"))


@dataclass(frozen=True)
class KeyboardShortcut:
	action: ShortcutAction
	key: str
	modifiers: tuple = ("cmd", "shift")
	enabled: bool = True

	@property
	def display_string(self) -> str:
		symbols = "".join(sym for name, sym in _MODIFIER_SYMBOLS if name in self.modifiers)
		return symbols + self.key.upper()

	@property
	def qt_sequence(self) -> str:
		"""Key sequence in QKeySequence portable text form, e.g. Ctrl+Shift+P."""
		parts = [qt for name, qt in _MODIFIER_QT if name in self.modifiers]
		parts.append(self.key.upper())
		return "+".join(parts)

	def to_dict(self) -> dict:
		return {
			"action": self.action.value,
			"modifiers": list(self.modifiers),
			"key": self.key,
			"isEnabled": self.enabled,
		}

	@classmethod
	def from_dict(cls, data: dict) -> "KeyboardShortcut":
		return cls(
			action=ShortcutAction(data["action"]),
			key=str(data["key"]),
			modifiers=tuple(data.get("modifiers", ("cmd", "shift"))),
			enabled=bool(data.get("isEnabled", True)),
		)


def default_shortcuts() -> tuple:
	return tuple(KeyboardShortcut(action=a, key=a.default_key) for a in ShortcutAction)


# attribute name -> persisted key
FIELD_KEYS = {
	"work_minutes": "workMinutes",
	"short_break_minutes": "shortBreakMinutes",
	"long_break_minutes": "longBreakMinutes",
	"long_break_interval": "longBreakInterval",
	"sound_enabled": "soundEnabled",
	"notifications_enabled": "notificationsEnabled",
	"daily_goal": "dailyGoal",
	"full_cycle_mode": "fullCycleMode",
	"auto_start_next": "autoStartNext",
}

_INT_FIELDS = ("work_minutes", "short_break_minutes", "long_break_minutes", "long_break_interval", "daily_goal")


@dataclass(frozen=True)
class Settings:
	work_minutes: int = 25
	short_break_minutes: int = 5
	long_break_minutes: int = 15
	long_break_interval: int = 4
	sound_enabled: bool = True
	notifications_enabled: bool = True
	daily_goal: int = 8
	full_cycle_mode: bool = False
	auto_start_next: bool = True
	keyboard_shortcuts: tuple = field(default_factory=default_shortcuts)

	def clamped(self) -> "Settings":
		"""Return a copy with every integer field raised to at least 1."""
		changes = {}
		for name in _INT_FIELDS:
			value = _to_int(getattr(self, name), getattr(DEFAULTS, name))
			if value < 1:
				logger.warning("Setting %s=%r is below 1, clamping", name, value)
				value = 1
			if value != getattr(self, name):
				changes[name] = value
		return replace(self, **changes) if changes else self

	def shortcut_for(self, action: ShortcutAction):
		for shortcut in self.keyboard_shortcuts:
			if shortcut.action == action:
				return shortcut
		return None

	def with_shortcut(self, shortcut: KeyboardShortcut) -> "Settings":
		kept = tuple(s for s in self.keyboard_shortcuts if s.action != shortcut.action)
		ordered = sorted(kept + (shortcut,), key=lambda s: list(ShortcutAction).index(s.action))
		return replace(self, keyboard_shortcuts=tuple(ordered))

	def to_dict(self) -> dict:
		data = {key: getattr(self, name) for name, key in FIELD_KEYS.items()}
		data["keyboardShortcuts"] = [s.to_dict() for s in self.keyboard_shortcuts]
		return data

	@classmethod
	def from_dict(cls, data: dict) -> "Settings":
		"""Build settings from a persisted dict; missing keys take defaults."""
		kwargs = {}
		for f in fields(cls):
			key = FIELD_KEYS.get(f.name)
			if key is None or key not in data:
				continue
			if f.name in _INT_FIELDS:
				kwargs[f.name] = _to_int(data[key], getattr(DEFAULTS, f.name))
			else:
				kwargs[f.name] = _to_bool(data[key], getattr(DEFAULTS, f.name))
		shortcuts = []
		for item in data.get("keyboardShortcuts") or []:
			try:
				shortcuts.append(KeyboardShortcut.from_dict(item))
			except (KeyError, ValueError, TypeError):
				logger.warning("Ignoring malformed shortcut entry: %r", item)
		settings = cls(**kwargs)
		for shortcut in shortcuts:
			settings = settings.with_shortcut(shortcut)
		return settings.clamped()


def _to_int(value, fallback):
	try:
		return int(value)
	except (TypeError, ValueError):
		logger.warning("Unparsable integer setting %r, using %r", value, fallback)
		return fallback


def _to_bool(value, fallback):
	if isinstance(value, bool):
		return value
	logger.warning("Non-boolean setting %r, using %r", value, fallback)
	return fallback


DEFAULTS = Settings()
