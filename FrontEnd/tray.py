import logging
from dataclasses import replace

from PySide6.QtCore import QObject, Qt
from PySide6.QtGui import QAction, QActionGroup, QColor, QIcon, QKeySequence, QPainter, QPixmap
from PySide6.QtWidgets import QApplication, QMenu, QSystemTrayIcon

from BackEnd.core.clock import fmt_mmss
from BackEnd.core.models import SessionType
from BackEnd.core.settings import ShortcutAction
from BackEnd.services import notifier
from FrontEnd.settings_dialog import SettingsDialog
from FrontEnd.stats_window import StatisticsWindow

logger = logging.getLogger(__name__)

DURATION_PRESETS = (5, 10, 15, 25, 45, 60)

PHASE_COLORS = {
	SessionType.WORK: "#E0674F",
	SessionType.SHORT_BREAK: "#5EA1FF",
	SessionType.LONG_BREAK: "#4CAF7A",
}


def phase_icon(session_type, active):
	"""Round tray icon in the phase colour; hollow while idle."""
	pixmap = QPixmap(64, 64)
	pixmap.fill(Qt.transparent)
	painter = QPainter(pixmap)
	painter.setRenderHint(QPainter.Antialiasing)
	color = QColor(PHASE_COLORS[session_type])
	painter.setPen(color)
	if active:
		painter.setBrush(color)
	painter.drawEllipse(6, 6, 52, 52)
	painter.end()
	return QIcon(pixmap)


class TrayApp(QObject):
	"""Menu-bar host: renders engine state and forwards menu clicks."""

	def __init__(self, controller, dispatcher, store, settings_repo, parent=None):
		super().__init__(parent)
		self.controller = controller
		self.engine = controller.engine
		self.dispatcher = dispatcher
		self.settings_repo = settings_repo
		self.stats_window = StatisticsWindow(store, lambda: self.controller.settings or self.settings_repo.load_config())
		self.settings_dialog = SettingsDialog()
		self.settings_dialog.accepted.connect(lambda: self.apply_settings(self.settings_dialog.to_settings()))

		self.tray = QSystemTrayIcon(self)
		self._icon_key = None
		self.menu = QMenu()
		self.start_pause_action = QAction("Start Timer", self)
		self.start_pause_action.triggered.connect(lambda: self.dispatcher.dispatch(ShortcutAction.START_PAUSE.value))
		self.reset_action = QAction("Reset Timer", self)
		self.reset_action.triggered.connect(lambda: self.dispatcher.dispatch(ShortcutAction.RESET.value))
		self.reset_cycle_action = QAction("Reset Cycle", self)
		self.reset_cycle_action.triggered.connect(self.controller.reset_cycle)
		self.stats_action = QAction("Statistics…", self)
		self.stats_action.triggered.connect(lambda: self.dispatcher.dispatch(ShortcutAction.SHOW_STATISTICS.value))
		self.full_cycle_action = QAction("Full Pomodoro Cycle", self, checkable=True)
		self.full_cycle_action.toggled.connect(self._toggle_full_cycle)
		self.auto_start_action = QAction("Auto-start Breaks", self, checkable=True)
		self.auto_start_action.toggled.connect(self._toggle_auto_start)
		settings_action = QAction("Settings…", self)
		settings_action.triggered.connect(self.show_settings)
		quit_action = QAction("Quit", self)
		quit_action.triggered.connect(self.quit)

		self.menu.addAction(self.start_pause_action)
		self.menu.addAction(self.reset_action)
		self.menu.addAction(self.reset_cycle_action)
		self.menu.addSeparator()
		durations = self.menu.addMenu("Timer Duration")
		self._duration_group = QActionGroup(self)
		self._duration_group.setExclusionPolicy(QActionGroup.ExclusionPolicy.ExclusiveOptional)
		self._checked_total = None
		for minutes in DURATION_PRESETS:
			act = QAction(f"{minutes} minutes", self, checkable=True)
			act.setData(minutes)
			act.triggered.connect(lambda checked=False, m=minutes: self.controller.set_custom_duration(m))
			self._duration_group.addAction(act)
			durations.addAction(act)
		self.menu.addSeparator()
		self.menu.addAction(self.full_cycle_action)
		self.menu.addAction(self.auto_start_action)
		self.menu.addAction(self.stats_action)
		self.menu.addAction(settings_action)
		self.menu.addSeparator()
		self.menu.addAction(quit_action)
		self.tray.setContextMenu(self.menu)
		self.tray.activated.connect(self._on_activated)

		self.engine.tick.connect(self._on_tick)
		self.engine.state_changed.connect(self._on_state)
		self.engine.session_type_changed.connect(lambda _t: self._refresh_title())
		self.controller.notify.connect(self._on_notify)
		self.controller.session_recorded.connect(self._on_session_recorded)

		self._sync_settings_actions()
		self._refresh_title()
		self.tray.show()

	def _sync_settings_actions(self):
		self._sync_duration_checks()
		settings = self.controller.settings
		if settings is None:
			return
		for action, qaction in ((ShortcutAction.START_PAUSE, self.start_pause_action),
		                        (ShortcutAction.RESET, self.reset_action),
		                        (ShortcutAction.SHOW_STATISTICS, self.stats_action)):
			shortcut = settings.shortcut_for(action)
			if shortcut is not None and shortcut.enabled:
				qaction.setShortcut(QKeySequence(shortcut.qt_sequence))
			else:
				qaction.setShortcut(QKeySequence())
		self.full_cycle_action.blockSignals(True)
		self.full_cycle_action.setChecked(settings.full_cycle_mode)
		self.full_cycle_action.blockSignals(False)
		self.auto_start_action.blockSignals(True)
		self.auto_start_action.setChecked(settings.auto_start_next)
		self.auto_start_action.blockSignals(False)

	def _sync_duration_checks(self):
		"""Check the preset matching the current phase length, if any."""
		total = self.engine.total_seconds
		if total == self._checked_total:
			return
		self._checked_total = total
		for act in self._duration_group.actions():
			act.setChecked(act.data() * 60 == total)

	def apply_settings(self, settings):
		"""Persist new settings and hand them to the controller."""
		self.settings_repo.save_config(settings)
		self.controller.configure(settings)
		self._sync_settings_actions()

	def _toggle_full_cycle(self, checked):
		self.apply_settings(replace(self.controller.settings or self.settings_repo.load_config(), full_cycle_mode=checked))

	def _toggle_auto_start(self, checked):
		self.apply_settings(replace(self.controller.settings or self.settings_repo.load_config(), auto_start_next=checked))

	def _on_activated(self, reason):
		if reason == QSystemTrayIcon.ActivationReason.Trigger:
			self.dispatcher.dispatch(ShortcutAction.START_PAUSE.value)

	def _on_tick(self, remaining, session_type):
		self._sync_duration_checks()
		self._refresh_title()

	def _on_state(self, state):
		self.start_pause_action.setText("Pause Timer" if state == "running" else "Start Timer")
		self._refresh_title()

	def _refresh_title(self):
		session_type, position, interval = self.controller.session_info()
		active = not self.engine.is_idle
		if self._icon_key != (session_type, active):
			self._icon_key = (session_type, active)
			self.tray.setIcon(phase_icon(session_type, active))
		if active:
			text = f"{session_type.emoji} {fmt_mmss(self.engine.remaining_seconds)}"
		else:
			text = session_type.emoji
		if self.controller.settings is not None and self.controller.settings.full_cycle_mode:
			text += f"  {session_type.display_name} ({position}/{interval})"
		self.tray.setToolTip(text)

	def _on_notify(self, completed, next_type):
		notice = notifier.compose(completed, next_type, self.controller.settings)
		if notice is None:
			return
		if notice.play_sound:
			QApplication.beep()
		if QSystemTrayIcon.supportsMessages():
			self.tray.showMessage(notice.title, notice.body, QSystemTrayIcon.MessageIcon.Information)
		else:
			logger.info("%s: %s", notice.title, notice.body)

	def _on_session_recorded(self, record):
		if self.stats_window.isVisible():
			self.stats_window.refresh()

	def show_settings(self):
		self.settings_dialog.load(self.controller.settings or self.settings_repo.load_config())
		self.settings_dialog.show()
		self.settings_dialog.raise_()
		self.settings_dialog.activateWindow()

	def show_statistics(self):
		self.stats_window.show()
		self.stats_window.raise_()
		self.stats_window.activateWindow()

	def quit(self):
		self.controller.stop()
		self.tray.hide()
		QApplication.quit()
