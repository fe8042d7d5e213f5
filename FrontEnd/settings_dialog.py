from dataclasses import replace

from PySide6.QtWidgets import (
	QCheckBox, QDialog, QDialogButtonBox, QFormLayout, QGroupBox, QSpinBox, QVBoxLayout
)

from BackEnd.core.settings import DEFAULTS


def _minutes_spin(maximum=120):
	spin = QSpinBox()
	spin.setRange(1, maximum)
	spin.setSuffix(" min")
	return spin


class SettingsDialog(QDialog):
	"""Edits durations, cycle length, daily goal and alert toggles.

	Shortcuts and the two menu toggles are carried over untouched from the
	settings passed to load().
	"""

	def __init__(self, parent=None):
		super().__init__(parent)
		self.setWindowTitle("Pomodoro Settings")
		self._base = DEFAULTS

		layout = QVBoxLayout(self)

		# --- Timer ---
		timer_box = QGroupBox("Timer")
		form = QFormLayout(timer_box)
		self.work_spin = _minutes_spin()
		self.short_break_spin = _minutes_spin(60)
		self.long_break_spin = _minutes_spin(60)
		self.interval_spin = QSpinBox()
		self.interval_spin.setRange(1, 12)
		form.addRow("Work", self.work_spin)
		form.addRow("Short break", self.short_break_spin)
		form.addRow("Long break", self.long_break_spin)
		form.addRow("Sessions before long break", self.interval_spin)
		layout.addWidget(timer_box)

		# --- Goals and alerts ---
		goal_box = QGroupBox("Goals and Alerts")
		form = QFormLayout(goal_box)
		self.goal_spin = QSpinBox()
		self.goal_spin.setRange(1, 50)
		self.goal_spin.setSuffix(" pomodoros")
		form.addRow("Daily goal", self.goal_spin)
		self.sound_check = QCheckBox("Play sound")
		self.notifications_check = QCheckBox("Show notifications")
		form.addRow(self.sound_check)
		form.addRow(self.notifications_check)
		layout.addWidget(goal_box)

		buttons = QDialogButtonBox(QDialogButtonBox.StandardButton.Save | QDialogButtonBox.StandardButton.Cancel)
		buttons.accepted.connect(self.accept)
		buttons.rejected.connect(self.reject)
		layout.addWidget(buttons)

	def load(self, settings):
		self._base = settings
		self.work_spin.setValue(settings.work_minutes)
		self.short_break_spin.setValue(settings.short_break_minutes)
		self.long_break_spin.setValue(settings.long_break_minutes)
		self.interval_spin.setValue(settings.long_break_interval)
		self.goal_spin.setValue(settings.daily_goal)
		self.sound_check.setChecked(settings.sound_enabled)
		self.notifications_check.setChecked(settings.notifications_enabled)

	def to_settings(self):
		return replace(
			self._base,
			work_minutes=self.work_spin.value(),
			short_break_minutes=self.short_break_spin.value(),
			long_break_minutes=self.long_break_spin.value(),
			long_break_interval=self.interval_spin.value(),
			daily_goal=self.goal_spin.value(),
			sound_enabled=self.sound_check.isChecked(),
			notifications_enabled=self.notifications_check.isChecked(),
		)
