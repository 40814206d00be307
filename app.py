import getpass
import logging
import os
import sys
from PySide6.QtWidgets import QApplication
from BackEnd.core.clock import SystemClock
from BackEnd.core.foreground import QtApplicationForegroundSignal
from BackEnd.core.kv_store import FileKeyValueStore
from BackEnd.core.settings import load_settings
from BackEnd.repos.snapshot_repo import SnapshotRepository
from BackEnd.services.session_recorder import SessionRecorder
from BackEnd.services.timer_service import TimerService
from FrontEnd.ui_main import MainWindow


def configure_logging():
    level = os.environ.get("STUDYCYCLE_LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def current_user():
    return os.environ.get("STUDYCYCLE_USER") or getpass.getuser()


def build_timer_service(app, user_id):
    """Compose the engine with its file-backed collaborators."""
    clock = SystemClock()
    snapshots = SnapshotRepository(FileKeyValueStore(scope=user_id), clock)
    recorder = SessionRecorder(user_id, clock)
    return TimerService(
        load_settings(),
        snapshots,
        recorder,
        clock=clock,
        foreground=QtApplicationForegroundSignal(app),
    )


def main():
    configure_logging()
    app = QApplication(sys.argv)
    user_id = current_user()
    win = MainWindow(build_timer_service(app, user_id), user_id)
    win.show()
    sys.exit(app.exec())

if __name__ == "__main__":
    main()
