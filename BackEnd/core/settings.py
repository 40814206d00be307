import json
import logging
from dataclasses import asdict, dataclass, fields

from BackEnd.core.models import Mode
from BackEnd.core.paths import settings_path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TimerSettings:
	work_duration_seconds: int = 25 * 60
	break_duration_seconds: int = 5 * 60
	long_break_duration_seconds: int = 15 * 60
	sessions_until_long_break: int = 4
	auto_start_breaks: bool = True
	auto_start_next_focus: bool = False

	def __post_init__(self):
		for name in ("work_duration_seconds", "break_duration_seconds", "long_break_duration_seconds"):
			value = getattr(self, name)
			if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
				raise ValueError(f"{name} must be a positive integer, got {value!r}")
		n = self.sessions_until_long_break
		if not isinstance(n, int) or isinstance(n, bool) or n <= 0:
			raise ValueError(f"sessions_until_long_break must be a positive integer, got {n!r}")

	def duration_for(self, mode: Mode) -> int:
		if mode == Mode.WORK:
			return self.work_duration_seconds
		if mode == Mode.BREAK:
			return self.break_duration_seconds
		return self.long_break_duration_seconds

	@classmethod
	def from_dict(cls, data):
		"""Build settings from a dict, ignoring unknown keys. Raises ValueError/TypeError."""
		if not isinstance(data, dict):
			raise TypeError("settings must be a JSON object")
		known = {f.name for f in fields(cls)}
		return cls(**{k: v for k, v in data.items() if k in known})


def save_settings(settings: TimerSettings, path=None):
	path = path or settings_path()
	with open(path, "w", encoding="utf-8") as f:
		json.dump(asdict(settings), f, indent=2)


def load_settings(path=None) -> TimerSettings:
	"""Load settings.json, falling back to (and rewriting) defaults when missing or invalid."""
	path = path or settings_path()
	if path.exists():
		try:
			with open(path, "r", encoding="utf-8") as f:
				return TimerSettings.from_dict(json.load(f))
		except (ValueError, TypeError) as e:
			logger.warning("Invalid timer settings in %s, using defaults: %s", path, e)
	defaults = TimerSettings()
	try:
		save_settings(defaults, path)
	except OSError as e:
		logger.warning("Could not write default settings to %s: %s", path, e)
	return defaults
