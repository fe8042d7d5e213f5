import time
from datetime import datetime

def wall_seconds():
	"""Return wall-clock seconds. Default clock for the timer engine."""
	return time.time()

def local_now():
	"""Return current local time as a naive datetime (no microseconds)."""
	return datetime.now().replace(microsecond=0)

def start_of_day(moment):
	"""Return midnight of the calendar day containing `moment`."""
	return moment.replace(hour=0, minute=0, second=0, microsecond=0)

def fmt_mmss(seconds: int) -> str:
	"""Format seconds as MM:SS (minutes may exceed 59)."""
	seconds = max(0, int(seconds))
	return f"{seconds // 60:02}:{seconds % 60:02}"
