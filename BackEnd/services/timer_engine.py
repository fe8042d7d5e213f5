"""Single countdown with anchored elapsed-time tracking.

Remaining time is never decremented. Every poll recomputes it from the anchor:

	remaining = max(0, total - floor(now - anchor - paused_total))

Pausing accumulates into paused_total; a system sleep shifts the anchor
forward by the sleep interval, so neither counts as elapsed time.
"""

import logging
import math

from PySide6.QtCore import QObject, Signal

from BackEnd.core.clock import wall_seconds
from BackEnd.core.models import SessionType

logger = logging.getLogger(__name__)

POLL_INTERVAL_MS = 100


class TimerEngine(QObject):
	tick = Signal(int, object)  # remaining seconds, session type
	session_type_changed = Signal(object)
	state_changed = Signal(str)  # 'idle', 'running', 'paused'

	def __init__(self, minutes=25, clock=None, scheduler=None, parent=None):
		super().__init__(parent)
		if scheduler is None:
			from BackEnd.services.scheduler import QtScheduler
			scheduler = QtScheduler(self)
		self._clock = clock or wall_seconds
		self._scheduler = scheduler
		self._poll = None

		self._total = max(1, int(minutes)) * 60
		self._remaining = self._total
		self._anchor = None
		self._paused_total = 0.0
		self._paused_at = None
		self._suspend_began_at = None
		self._duration_shift = 0
		self._running = False
		self._paused = False
		self._completion_in_flight = False
		self._session_type = SessionType.WORK

		# Called with the session type that just finished. The receiver must
		# call clear_completion() before the engine will start again.
		self.on_complete = None

	# ---- Read-only properties ----

	@property
	def remaining_seconds(self):
		return self._remaining

	@property
	def total_seconds(self):
		return self._total

	@property
	def elapsed_seconds(self):
		"""Seconds actually counted down, across any mid-run duration changes."""
		return self._total - self._remaining - self._duration_shift

	@property
	def is_running(self):
		return self._running

	@property
	def is_paused(self):
		return self._paused

	@property
	def is_idle(self):
		return not self._running and not self._paused

	@property
	def completion_in_flight(self):
		return self._completion_in_flight

	@property
	def session_type(self):
		return self._session_type

	# ---- Commands ----

	def start(self):
		if self._running:
			return
		if self._completion_in_flight:
			logger.debug("start() ignored while a completion is being handled")
			return
		now = self._clock()
		if self._anchor is None:
			# Fresh run: back-date the anchor so any remaining time left by a
			# previous stop() carries over.
			self._anchor = now - (self._total - self._remaining)
			self._paused_total = 0.0
		elif self._paused_at is not None:
			self._paused_total += max(0.0, now - self._paused_at)
		self._paused_at = None
		self._running = True
		self._paused = False
		self._poll = self._scheduler.call_every(POLL_INTERVAL_MS, self._on_poll)
		self.state_changed.emit('running')
		self.tick.emit(self._remaining, self._session_type)

	def pause(self):
		if not self._running:
			return
		now = self._clock()
		if self._suspend_began_at is not None:
			# Paused before the resume signal arrived.
			self._anchor += max(0.0, now - self._suspend_began_at)
			self._suspend_began_at = None
		self._recompute(now)
		self._cancel_poll()
		self._paused_at = now
		self._running = False
		self._paused = True
		self.state_changed.emit('paused')
		self.tick.emit(self._remaining, self._session_type)

	def stop(self):
		"""Drop run state; remaining time is left as is."""
		was_active = not self.is_idle
		self._cancel_poll()
		self._anchor = None
		self._paused_total = 0.0
		self._paused_at = None
		self._suspend_began_at = None
		self._running = False
		self._paused = False
		if was_active:
			self.state_changed.emit('idle')

	def reset(self):
		self.stop()
		self._remaining = self._total
		self._duration_shift = 0
		self.tick.emit(self._remaining, self._session_type)

	def set_duration(self, minutes):
		self.set_duration_seconds(max(1, int(minutes)) * 60)

	def set_duration_seconds(self, seconds):
		seconds = max(1, int(seconds))
		delta = seconds - self._total
		self._total = seconds
		if self.is_idle:
			self._remaining = seconds
			self._duration_shift = 0
		elif self._anchor is not None:
			# Keep the in-flight countdown where it is.
			self._anchor -= delta
			self._duration_shift += delta
		self.tick.emit(self._remaining, self._session_type)

	def set_session_type(self, session_type):
		if session_type == self._session_type:
			return
		self._session_type = session_type
		self.session_type_changed.emit(session_type)

	def clear_completion(self):
		self._completion_in_flight = False

	# ---- Host signals ----

	def on_suspend(self):
		if self._running:
			self._suspend_began_at = self._clock()
			logger.info("System suspending with %ss remaining", self._remaining)

	def on_resume(self):
		if self._running and self._suspend_began_at is not None:
			slept = max(0.0, self._clock() - self._suspend_began_at)
			self._anchor += slept
			logger.info("System resumed after %.1fs asleep", slept)
		self._suspend_began_at = None

	# ---- Internals ----

	def _recompute(self, now):
		elapsed = now - self._anchor - self._paused_total
		self._remaining = max(0, self._total - math.floor(elapsed))

	def _on_poll(self):
		if not self._running or self._anchor is None:
			return
		if self._suspend_began_at is not None:
			return
		self._recompute(self._clock())
		self.tick.emit(self._remaining, self._session_type)
		if self._remaining <= 0:
			self._complete()

	def _complete(self):
		if self._completion_in_flight:
			return
		self._completion_in_flight = True
		finished = self._session_type
		self.stop()
		logger.info("%s phase finished", finished.display_name)
		if self.on_complete is None:
			self._completion_in_flight = False
			return
		self.on_complete(finished)

	def _cancel_poll(self):
		if self._poll is not None:
			self._poll.cancel()
			self._poll = None
