from PySide6.QtWidgets import (
	QWidget, QVBoxLayout, QHBoxLayout, QLabel, QGroupBox, QTableWidget, QTableWidgetItem, QHeaderView
)
from matplotlib.backends.backend_qtagg import FigureCanvasQTAgg as FigureCanvas
from matplotlib.figure import Figure

from BackEnd.core.clock import local_now
from BackEnd.services import stats_service
from FrontEnd.components.footer_today import FooterToday
from FrontEnd.stats_chart import draw_weekly_chart
from FrontEnd.styles.design_tokens import COLORS, FONTS


class StatisticsWindow(QWidget):
	"""Today / week summary, weekly chart and 7-day history.

	Reads the session log on every refresh; never writes to it.
	"""

	def __init__(self, store, settings_provider, now=None, parent=None):
		super().__init__(parent)
		self.setWindowTitle("Pomodoro Statistics")
		self.resize(640, 720)
		self._store = store
		self._settings_provider = settings_provider
		self._now = now or local_now

		layout = QVBoxLayout(self)

		# --- Today ---
		today_box = QGroupBox("Today")
		today_layout = QVBoxLayout(today_box)
		row = QHBoxLayout()
		self.today_count = self._big_label()
		self.today_focus = self._big_label()
		row.addWidget(self._captioned("Completed Pomodoros", self.today_count))
		row.addStretch()
		row.addWidget(self._captioned("Focus Time", self.today_focus))
		today_layout.addLayout(row)
		self.footer_today = FooterToday()
		today_layout.addWidget(self.footer_today)
		layout.addWidget(today_box)

		# --- This week ---
		week_box = QGroupBox("This Week")
		week_layout = QVBoxLayout(week_box)
		row = QHBoxLayout()
		self.week_total = self._big_label()
		self.week_average = self._big_label()
		row.addWidget(self._captioned("Total Pomodoros", self.week_total))
		row.addStretch()
		row.addWidget(self._captioned("Average/Day", self.week_average))
		week_layout.addLayout(row)
		self.streak_label = QLabel()
		week_layout.addWidget(self.streak_label)
		layout.addWidget(week_box)

		# Bar chart (matplotlib)
		self.figure = Figure(figsize=(5, 2.5))
		self.canvas = FigureCanvas(self.figure)
		layout.addWidget(self.canvas)

		# --- History ---
		self.history_table = QTableWidget(0, 4)
		self.history_table.setHorizontalHeaderLabels(["Date", "Start", "Type", "Duration"])
		self.history_table.horizontalHeader().setSectionResizeMode(QHeaderView.ResizeMode.Stretch)
		self.history_table.verticalHeader().setVisible(False)
		layout.addWidget(self.history_table)

	def _big_label(self):
		label = QLabel("0")
		label.setStyleSheet(f"font-size: {FONTS['big_number']}px; font-weight: bold; color: {COLORS['text_strong']};")
		return label

	def _captioned(self, caption, value_label):
		box = QWidget()
		col = QVBoxLayout(box)
		cap = QLabel(caption)
		cap.setStyleSheet(f"color: {COLORS['text']}; font-size: 12px;")
		col.addWidget(cap)
		col.addWidget(value_label)
		return box

	def showEvent(self, event):
		self.refresh()
		super().showEvent(event)

	def refresh(self):
		sessions = stats_service.snapshot(self._store)
		now = self._now()
		settings = self._settings_provider()

		today = stats_service.todays_stats(sessions, now)
		self.today_count.setText(str(today.completed))
		self.today_focus.setText(stats_service.format_duration(today.focus_seconds))
		self.footer_today.set_progress(stats_service.daily_goal_progress(sessions, now, settings.daily_goal))

		week = stats_service.weekly_stats(sessions, now)
		self.week_total.setText(str(week.total))
		self.week_average.setText(f"{week.average_per_day:.1f}")
		if week.streak > 0:
			self.streak_label.setText(f"\U0001F525 {week.streak} day streak")
			self.streak_label.setStyleSheet(f"background: {COLORS['streak_bg']}; border-radius: 8px; padding: 4px 8px;")
		else:
			self.streak_label.setText("Start your streak today!")
			self.streak_label.setStyleSheet(f"color: {COLORS['text']};")

		draw_weekly_chart(self.figure, stats_service.weekly_breakdown(sessions, now))
		self.canvas.draw()
		self._refresh_history(stats_service.history(sessions, now))

	def _refresh_history(self, groups):
		rows = [(day, s) for day, day_sessions in groups for s in day_sessions]
		self.history_table.setRowCount(len(rows))
		for i, (day, sess) in enumerate(rows):
			self.history_table.setItem(i, 0, QTableWidgetItem(day.strftime("%a %b %d")))
			self.history_table.setItem(i, 1, QTableWidgetItem(sess.start_time.strftime("%H:%M")))
			self.history_table.setItem(i, 2, QTableWidgetItem(f"{sess.session_type.emoji} {sess.session_type.display_name}"))
			self.history_table.setItem(i, 3, QTableWidgetItem(stats_service.format_duration(sess.duration_seconds)))
