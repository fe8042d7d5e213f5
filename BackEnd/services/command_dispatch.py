"""Routes host events (hotkeys, sleep/wake) onto the controller.

OS callbacks may arrive on any thread. They only ever emit HostEvents
signals; the queued connections made in CommandDispatcher deliver them on the
thread that owns the dispatcher, which is the thread that owns the timer.
"""

import logging

from PySide6.QtCore import QObject, Qt, Signal

from BackEnd.core.settings import ShortcutAction

logger = logging.getLogger(__name__)


class HostEvents(QObject):
	action_requested = Signal(str)
	system_will_suspend = Signal()
	system_did_resume = Signal()


class CommandDispatcher(QObject):
	def __init__(self, controller, events=None, show_statistics=None, parent=None):
		super().__init__(parent)
		self._controller = controller
		self.show_statistics = show_statistics
		self.events = events or HostEvents()
		self.events.action_requested.connect(self.dispatch, Qt.ConnectionType.QueuedConnection)
		self.events.system_will_suspend.connect(controller.on_suspend, Qt.ConnectionType.QueuedConnection)
		self.events.system_did_resume.connect(controller.on_resume, Qt.ConnectionType.QueuedConnection)

	def dispatch(self, action):
		"""Run one abstract action. Returns False for unknown actions."""
		try:
			action = ShortcutAction(action)
		except ValueError:
			logger.warning("Ignoring unknown action %r", action)
			return False
		if action == ShortcutAction.START_PAUSE:
			self._controller.toggle()
		elif action == ShortcutAction.RESET:
			self._controller.reset()
		elif action == ShortcutAction.SHOW_STATISTICS:
			if self.show_statistics is not None:
				self.show_statistics()
		return True
