"""Statistics over the persisted session log.

Every function takes an immutable snapshot of the log plus "now" and has no
side effects, so the statistics window can call them as often as it likes.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass
from datetime import date, datetime, timedelta

from BackEnd.core.clock import start_of_day
from BackEnd.core.models import SessionType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TodayStats:
	completed: int
	focus_seconds: float


@dataclass(frozen=True)
class WeeklyStats:
	total: int
	average_per_day: float
	streak: int


@dataclass(frozen=True)
class GoalProgress:
	completed: int
	goal: int
	progress: float


@dataclass(frozen=True)
class DayBreakdown:
	date: date
	day_name: str
	work_sessions: int
	short_breaks: int
	long_breaks: int
	focus_seconds: float
	is_today: bool


def snapshot(store):
	"""Read the whole log once. A failing store yields an empty snapshot."""
	try:
		return tuple(store.query_all())
	except Exception as e:  # collaborator failure; statistics degrade to empty
		logger.warning("Session history unavailable: %s", e)
		return ()


def _completed_work(sessions):
	return [s for s in sessions if s.completed and s.session_type == SessionType.WORK]


def todays_stats(sessions, now: datetime) -> TodayStats:
	day_start = start_of_day(now)
	day_end = day_start + timedelta(days=1)
	today = [s for s in _completed_work(sessions) if day_start <= s.start_time < day_end]
	return TodayStats(len(today), sum(s.duration_seconds for s in today))


def streak(sessions, now: datetime) -> int:
	"""Consecutive days, ending today, with at least one completed Work session.

	Today counts only once it has a session; an empty today yields 0.
	"""
	days = {s.start_time.date() for s in _completed_work(sessions)}
	count = 0
	day = now.date()
	while day in days:
		count += 1
		day -= timedelta(days=1)
	return count


def weekly_stats(sessions, now: datetime) -> WeeklyStats:
	week_ago = now - timedelta(days=7)
	total = len([s for s in _completed_work(sessions) if s.start_time >= week_ago])
	return WeeklyStats(total, total / 7.0, streak(sessions, now))


def daily_goal_progress(sessions, now: datetime, daily_goal: int) -> GoalProgress:
	completed = todays_stats(sessions, now).completed
	if daily_goal <= 0:
		return GoalProgress(completed, daily_goal, 0.0)
	return GoalProgress(completed, daily_goal, min(1.0, completed / daily_goal))


def weekly_breakdown(sessions, now: datetime):
	"""Per-day counts for the last 7 days including today, oldest first."""
	buckets = defaultdict(lambda: defaultdict(list))
	for s in sessions:
		if s.completed:
			buckets[s.start_time.date()][s.session_type].append(s)

	today = now.date()
	days = []
	for offset in range(6, -1, -1):
		day = today - timedelta(days=offset)
		by_type = buckets.get(day, {})
		work = by_type.get(SessionType.WORK, [])
		days.append(DayBreakdown(
			date=day,
			day_name=day.strftime("%a"),
			work_sessions=len(work),
			short_breaks=len(by_type.get(SessionType.SHORT_BREAK, [])),
			long_breaks=len(by_type.get(SessionType.LONG_BREAK, [])),
			focus_seconds=sum(s.duration_seconds for s in work),
			is_today=day == today,
		))
	return days


def history(sessions, now: datetime):
	"""Completed sessions from the last 7 days grouped by day, newest day first.

	Returns a list of (date, [sessions]) pairs; sessions within a day are
	newest first as well.
	"""
	week_ago = now - timedelta(days=7)
	grouped = defaultdict(list)
	for s in sessions:
		if s.completed and s.start_time >= week_ago:
			grouped[s.start_time.date()].append(s)
	return [
		(day, sorted(grouped[day], key=lambda s: s.start_time, reverse=True))
		for day in sorted(grouped, reverse=True)
	]


def format_duration(seconds) -> str:
	seconds = int(seconds)
	hours = seconds // 3600
	minutes = (seconds % 3600) // 60
	if hours > 0:
		return f"{hours}h {minutes}m"
	return f"{minutes}m"
