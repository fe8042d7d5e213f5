"""Pomodoro phase cycling on top of a TimerEngine.

Work -> Short Break -> Work -> ... -> Long Break, advanced only when the
engine reports a finished phase. In simple mode (full_cycle_mode off) every
phase is Work and a completion just stops the timer.
"""

import logging

from PySide6.QtCore import QObject, Signal

from BackEnd.core.clock import local_now
from BackEnd.core.models import PersistedSession, SessionType

logger = logging.getLogger(__name__)

AUTO_START_DELAY_MS = 1000


class SessionCycleController(QObject):
	phase_completed = Signal(object)  # session type that just finished
	session_recorded = Signal(object)  # PersistedSession
	phase_changed = Signal(object)  # new session type
	notify = Signal(object, object)  # finished type, next type

	def __init__(self, engine, store=None, settings=None, scheduler=None, now=None, parent=None):
		super().__init__(parent)
		if scheduler is None:
			from BackEnd.services.scheduler import QtScheduler
			scheduler = QtScheduler(self)
		self._engine = engine
		self._store = store
		self._scheduler = scheduler
		self._now = now or local_now
		self._settings = None
		self._session_type = SessionType.WORK
		self._cycle_position = 1
		self._work_sessions_completed = 0
		self._phase_started_at = None
		self._auto_start = None

		engine.on_complete = self._on_engine_complete
		engine.set_session_type(self._session_type)
		if settings is not None:
			self.configure(settings)

	# ---- Read-only properties ----

	@property
	def engine(self):
		return self._engine

	@property
	def settings(self):
		return self._settings

	@property
	def session_type(self):
		return self._session_type

	@property
	def cycle_position(self):
		return self._cycle_position

	@property
	def work_sessions_completed(self):
		return self._work_sessions_completed

	@property
	def auto_start_pending(self):
		return self._auto_start is not None and self._auto_start.active

	def session_info(self):
		interval = self._settings.long_break_interval if self._settings else 4
		return self._session_type, self._cycle_position, interval

	# ---- Configuration ----

	def configure(self, settings):
		"""Replace the settings wholesale and retarget the current phase.

		None means no configuration is available: the engine keeps its last
		duration and completions no longer advance the phase.
		"""
		if settings is None:
			logger.warning("No settings available, running as a plain countdown")
			self._settings = None
			return
		self._settings = settings.clamped()
		self._cycle_position = min(self._cycle_position, self._settings.long_break_interval)
		if not self._settings.full_cycle_mode and self._session_type.is_break and self._engine.is_idle:
			self._cycle_position = 1
			self._enter_phase(SessionType.WORK)
			return
		self._engine.set_duration(self._minutes_for(self._session_type))

	def set_custom_duration(self, minutes):
		"""Override the current phase length until the next phase or settings change."""
		self._engine.set_duration(minutes)

	# ---- User commands ----

	def start(self):
		if self._engine.is_running:
			return
		if self._phase_started_at is None:
			self._phase_started_at = self._now()
		self._engine.start()

	def pause(self):
		self._cancel_auto_start()
		self._engine.pause()

	def toggle(self):
		if self._engine.is_running:
			self.pause()
		else:
			self.start()

	def stop(self):
		self._cancel_auto_start()
		self._engine.stop()

	def reset(self):
		self._cancel_auto_start()
		self._engine.reset()
		self._phase_started_at = None

	def reset_cycle(self):
		"""Abandon the current cycle and go back to the first Work session."""
		self._cancel_auto_start()
		self._cycle_position = 1
		self._enter_phase(SessionType.WORK)

	# ---- Host signals ----

	def on_suspend(self):
		self._engine.on_suspend()

	def on_resume(self):
		self._engine.on_resume()

	# ---- Completion handling ----

	def _on_engine_complete(self, completed):
		ended_at = self._now()
		duration = self._engine.elapsed_seconds
		self.phase_completed.emit(completed)

		if completed == SessionType.WORK:
			self._work_sessions_completed += 1
			self._record(completed, ended_at, duration)

		if self._settings is None:
			self._engine.reset()
			self._phase_started_at = None
			self.notify.emit(completed, self._session_type)
			self._release_completion()
			return

		next_type = self._next_phase(completed)
		self._enter_phase(next_type)
		self.notify.emit(completed, next_type)
		self._release_completion()

		if self._settings.auto_start_next and completed == SessionType.WORK and next_type.is_break:
			self._cancel_auto_start()
			self._auto_start = self._scheduler.call_later(AUTO_START_DELAY_MS, self._auto_start_phase)

	def _next_phase(self, completed):
		if not self._settings.full_cycle_mode:
			return SessionType.WORK
		if completed != SessionType.WORK:
			return SessionType.WORK
		self._cycle_position += 1
		if self._cycle_position > self._settings.long_break_interval:
			self._cycle_position = 1
			return SessionType.LONG_BREAK
		return SessionType.SHORT_BREAK

	def _enter_phase(self, session_type):
		changed = session_type != self._session_type
		self._session_type = session_type
		self._engine.stop()
		self._engine.set_session_type(session_type)
		if self._settings is not None:
			self._engine.set_duration(self._minutes_for(session_type))
		self._engine.reset()
		self._phase_started_at = None
		if changed:
			self.phase_changed.emit(session_type)

	def _record(self, completed, ended_at, duration):
		started_at = self._phase_started_at or ended_at
		record = PersistedSession(
			start_time=started_at,
			end_time=ended_at,
			duration_seconds=float(duration),
			session_type=completed,
			completed=True,
		)
		if self._store is not None:
			try:
				self._store.append(record)
			except Exception as e:  # storage must never stop the timer
				logger.warning("Could not save finished session: %s", e)
		self.session_recorded.emit(record)

	def _release_completion(self):
		self._scheduler.call_later(0, self._engine.clear_completion)

	def _auto_start_phase(self):
		self._auto_start = None
		engine = self._engine
		if engine.is_running or engine.is_paused or engine.completion_in_flight:
			return
		logger.info("Auto-starting %s", self._session_type.display_name)
		self.start()

	def _cancel_auto_start(self):
		if self._auto_start is not None:
			self._auto_start.cancel()
			self._auto_start = None

	def _minutes_for(self, session_type):
		s = self._settings
		if session_type == SessionType.SHORT_BREAK:
			return s.short_break_minutes
		if session_type == SessionType.LONG_BREAK:
			return s.long_break_minutes
		return s.work_minutes
