from PySide6.QtWidgets import QWidget, QHBoxLayout, QLabel
from FrontEnd.styles.design_tokens import COLORS


class FooterToday(QWidget):
    """Bottom-right badge with today's focus minutes and finished sessions."""

    def __init__(self):
        super().__init__()
        layout = QHBoxLayout()
        layout.addStretch()
        self.label = QLabel()
        self.label.setObjectName("TodayLabel")
        layout.addWidget(self.label)
        self.setLayout(layout)
        self.setStyleSheet(f"background: {COLORS['footer_bg']}; border-radius: 16px; padding: 8px 24px; margin: 0 32px 32px 0; color: {COLORS['footer_text']}; font-size: 16px; font-weight: 500;")
        self.set_today(0, 0)

    def set_today(self, focus_seconds, completed_sessions):
        self.label.setText(f"Today: {focus_seconds // 60}m · {completed_sessions} sessions")
