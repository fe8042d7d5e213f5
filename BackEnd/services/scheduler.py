"""Cancellable timers on the Qt event loop.

TimerEngine and SessionCycleController only ever talk to this interface, so
tests can swap in a scheduler that advances a fake clock by hand.
"""

from PySide6.QtCore import QObject, QTimer


class QtTimerHandle:
	def __init__(self, timer):
		self._timer = timer

	@property
	def active(self):
		return self._timer is not None and self._timer.isActive()

	def cancel(self):
		if self._timer is not None:
			self._timer.stop()
			self._timer.deleteLater()
			self._timer = None


class QtScheduler(QObject):
	"""Schedules callbacks on the thread that owns this object."""

	def call_every(self, interval_ms, callback):
		timer = QTimer(self)
		timer.setInterval(int(interval_ms))
		timer.timeout.connect(callback)
		timer.start()
		return QtTimerHandle(timer)

	def call_later(self, delay_ms, callback):
		timer = QTimer(self)
		timer.setSingleShot(True)
		timer.setInterval(int(delay_ms))
		handle = QtTimerHandle(timer)

		def fire():
			handle.cancel()
			callback()

		timer.timeout.connect(fire)
		timer.start()
		return handle
