from dataclasses import dataclass

from BackEnd.core.models import SessionType

TITLE = "\U0001F345 Pomodoro Timer"


@dataclass(frozen=True)
class Notice:
	title: str
	body: str
	play_sound: bool


def compose(completed, next_type, settings):
	"""Build the message shown when a phase ends, or None if notifications are off."""
	if settings is not None and not settings.notifications_enabled:
		return None
	play_sound = settings.sound_enabled if settings is not None else True
	full_cycle = settings is not None and settings.full_cycle_mode

	if completed == SessionType.WORK:
		if not full_cycle:
			body = "Time's up! Take a break."
		elif next_type == SessionType.LONG_BREAK:
			body = f"{SessionType.LONG_BREAK.emoji} Great work! Time for a long break."
		else:
			body = f"{SessionType.SHORT_BREAK.emoji} Time for a short break!"
	else:
		body = f"{completed.display_name} over. Ready to focus?"
	return Notice(TITLE, body, play_sound)
