import os
from pathlib import Path

APP_NAME = "StudyCycle"


def user_data_dir(app_name=APP_NAME):
	"""Return per-user data dir (Windows/macOS/Linux), honoring STUDYCYCLE_DATA_DIR."""
	override = os.environ.get("STUDYCYCLE_DATA_DIR")
	if override:
		path = Path(override)
	else:
		if os.name == "nt":
			base = os.environ.get("LOCALAPPDATA", os.path.expanduser("~\\AppData\\Local"))
		elif os.name == "posix":
			base = os.environ.get("XDG_DATA_HOME", os.path.expanduser("~/.local/share"))
		else:
			base = os.path.expanduser("~")
		path = Path(base) / app_name
	path.mkdir(parents=True, exist_ok=True)
	return path


def scope_dir(scope):
	"""Return the directory holding key-value files for one storage scope."""
	path = user_data_dir() / "state" / scope
	path.mkdir(parents=True, exist_ok=True)
	return path


def db_path():
	"""Return Path to sessions.db inside user data dir."""
	return user_data_dir() / "sessions.db"


def settings_path():
	return user_data_dir() / "settings.json"
