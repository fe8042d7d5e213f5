"""Feeds OS sleep/wake notifications into HostEvents.

On Linux, logind broadcasts PrepareForSleep(true) before suspending and
PrepareForSleep(false) after waking. Other platforms have no watcher yet and
the countdown will count a sleep as elapsed time.
"""

import logging
import sys

from PySide6.QtCore import QObject, SLOT, Slot

logger = logging.getLogger(__name__)

LOGIND_SERVICE = "org.freedesktop.login1"
LOGIND_PATH = "/org/freedesktop/login1"
LOGIND_INTERFACE = "org.freedesktop.login1.Manager"


class LogindSleepWatcher(QObject):
	def __init__(self, events, bus=None, parent=None):
		super().__init__(parent)
		self._events = events
		self._bus = bus

	def start(self):
		"""Subscribe to PrepareForSleep. Returns False when nothing was hooked up."""
		bus = self._bus
		if bus is None:
			if not sys.platform.startswith("linux"):
				logger.info("No sleep watcher for %s; sleep time will count as elapsed", sys.platform)
				return False
			from PySide6.QtDBus import QDBusConnection
			bus = self._bus = QDBusConnection.systemBus()
		if not bus.isConnected():
			logger.warning("System D-Bus unavailable; sleep/wake will not pause the timer")
			return False
		ok = bus.connect(LOGIND_SERVICE, LOGIND_PATH, LOGIND_INTERFACE, "PrepareForSleep",
		                 self, SLOT("prepare_for_sleep(bool)"))
		if not ok:
			logger.warning("Could not subscribe to logind PrepareForSleep")
		return ok

	@Slot(bool)
	def prepare_for_sleep(self, going_down):
		if going_down:
			logger.debug("logind: preparing for sleep")
			self._events.system_will_suspend.emit()
		else:
			logger.debug("logind: resumed")
			self._events.system_did_resume.emit()
