from PySide6.QtWidgets import QWidget, QHBoxLayout, QLabel, QProgressBar
from FrontEnd.styles.design_tokens import COLORS

class FooterToday(QWidget):
    """Today's goal progress strip shown under the statistics summary."""

    def __init__(self, goal_progress=None):
        super().__init__()
        layout = QHBoxLayout()
        self.label = QLabel()
        self.label.setObjectName("TodayLabel")
        self.bar = QProgressBar()
        self.bar.setRange(0, 100)
        self.bar.setTextVisible(False)
        layout.addWidget(self.label)
        layout.addWidget(self.bar, 1)
        self.setLayout(layout)
        self.setStyleSheet(f"background: {COLORS['footer_bg']}; border-radius: 16px; padding: 8px 24px; color: {COLORS['footer_text']}; font-size: 14px; font-weight: 500;")
        if goal_progress is not None:
            self.set_progress(goal_progress)

    def set_progress(self, goal_progress):
        self.label.setText(f"Daily Goal Progress ({goal_progress.completed}/{goal_progress.goal})")
        self.bar.setValue(int(round(goal_progress.progress * 100)))
