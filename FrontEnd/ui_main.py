from PySide6.QtWidgets import (
	QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton, QLineEdit, QButtonGroup
)
from PySide6.QtCore import Qt
from BackEnd.core.clock import fmt_mmss
from BackEnd.core.models import Mode
from BackEnd.repos import session_repo
from FrontEnd.components.footer_today import FooterToday
from FrontEnd.styles.design_tokens import MODE_LABELS, stylesheet


class MainWindow(QMainWindow):
	"""Thin host around a TimerService: renders its signals, forwards button clicks."""

	def __init__(self, timer_service, user_id):
		super().__init__()
		self.setWindowTitle("StudyCycle")
		self.resize(720, 560)
		self.timer_service = timer_service
		self.user_id = user_id

		central = QWidget()
		outer = QVBoxLayout()
		outer.setContentsMargins(32, 32, 32, 0)
		outer.setSpacing(0)

		# Mode tabs
		tabs = QHBoxLayout()
		tabs.setSpacing(12)
		tabs.addStretch()
		self.mode_group = QButtonGroup(self)
		self.mode_group.setExclusive(True)
		self.mode_buttons = {}
		for mode in Mode:
			btn = QPushButton(MODE_LABELS[mode.value])
			btn.setObjectName("ModeBtn")
			btn.setCheckable(True)
			btn.clicked.connect(lambda checked=False, m=mode: self._change_mode(m))
			self.mode_group.addButton(btn)
			self.mode_buttons[mode] = btn
			tabs.addWidget(btn)
		tabs.addStretch()
		outer.addLayout(tabs)
		outer.addStretch()

		# Timer card
		card = QWidget()
		card_layout = QVBoxLayout()
		card_layout.setAlignment(Qt.AlignmentFlag.AlignCenter)
		card.setLayout(card_layout)
		card.setObjectName("TimerCard")

		self.phase_label = QLabel()
		self.phase_label.setObjectName("PhaseLabel")
		self.phase_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
		card_layout.addWidget(self.phase_label)

		self.timer_label = QLabel("25:00")
		self.timer_label.setObjectName("TimerLabel")
		self.timer_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
		card_layout.addWidget(self.timer_label)

		self.goal_input = QLineEdit()
		self.goal_input.setPlaceholderText("What will you focus on?")
		card_layout.addWidget(self.goal_input)

		btn_layout = QHBoxLayout()
		btn_layout.setSpacing(24)
		self.start_pause_btn = QPushButton("Start")
		self.start_pause_btn.setObjectName("StartBtn")
		self.reset_btn = QPushButton("Reset")
		self.reset_btn.setObjectName("EndBtn")
		for btn in (self.start_pause_btn, self.reset_btn):
			btn.setMinimumHeight(56)
			btn_layout.addWidget(btn)
		card_layout.addSpacing(24)
		card_layout.addLayout(btn_layout)

		outer.addWidget(card, alignment=Qt.AlignmentFlag.AlignHCenter)
		outer.addStretch()
		self.footer_today = FooterToday()
		outer.addWidget(self.footer_today)
		central.setLayout(outer)
		self.setCentralWidget(central)

		self.start_pause_btn.clicked.connect(self._start_pause)
		self.reset_btn.clicked.connect(self.timer_service.reset)
		self.timer_service.tick.connect(self._on_tick)
		self.timer_service.state_changed.connect(self._on_state)
		self.timer_service.mode_changed.connect(self._on_mode)
		self.timer_service.segment_completed.connect(lambda _outcome: self._refresh())

		self._refresh()

	def closeEvent(self, event):
		# keep the snapshot so a running segment survives the restart
		self.timer_service.shutdown()
		super().closeEvent(event)

	def _start_pause(self):
		if self.timer_service.is_running:
			self.timer_service.pause()
		else:
			self.timer_service.start(goal=self.goal_input.text().strip() or None)

	def _change_mode(self, mode):
		if mode != self.timer_service.mode:
			self.timer_service.change_mode(mode)

	def _on_tick(self, remaining):
		self.timer_label.setText(fmt_mmss(remaining))

	def _on_state(self, status):
		self._set_buttons(status)
		self._update_today_label()

	def _on_mode(self, mode):
		self.mode_buttons[mode].setChecked(True)
		self.setStyleSheet(stylesheet(mode.value))
		self._update_phase_label()

	def _refresh(self):
		state = self.timer_service.state
		self._on_mode(state.mode)
		self._on_tick(state.remaining_seconds)
		self._on_state(self.timer_service.status)

	def _update_phase_label(self):
		"""Focus phases show the upcoming session number within the cycle."""
		state = self.timer_service.state
		cycle = self.timer_service.settings.sessions_until_long_break
		if state.mode == Mode.WORK:
			self.phase_label.setText(f"Focus Session {state.session_index + 1}/{cycle}")
		else:
			self.phase_label.setText(MODE_LABELS[state.mode.value])

	def _set_buttons(self, status):
		if status == "running":
			self.start_pause_btn.setText("Pause")
		elif status == "paused":
			self.start_pause_btn.setText("Resume")
		else:
			self.start_pause_btn.setText("Start")
		self.goal_input.setEnabled(status == "idle" and self.timer_service.mode == Mode.WORK)

	def _update_today_label(self):
		focus_seconds, completed = session_repo.today_totals(self.user_id)
		self.footer_today.set_today(focus_seconds, completed)
