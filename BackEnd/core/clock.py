import time
from datetime import datetime, timezone


class SystemClock:
	"""Wall-clock time source. The only authority for elapsed time."""

	def now(self) -> int:
		"""Return current epoch time in milliseconds."""
		return int(time.time() * 1000)


def ms_to_utc_iso(ms: int) -> str:
	"""Return an epoch-millisecond timestamp as ISO8601 UTC (no microseconds)."""
	return datetime.fromtimestamp(ms / 1000, tz=timezone.utc).replace(microsecond=0).isoformat()


def ms_to_local_date_str(ms: int) -> str:
	"""Return the local date (YYYY-MM-DD) an epoch-millisecond timestamp falls on."""
	return datetime.fromtimestamp(ms / 1000).date().isoformat()


def fmt_mmss(seconds: int) -> str:
	"""Format seconds as MM:SS."""
	m, s = divmod(max(0, int(seconds)), 60)
	return f"{m:02}:{s:02}"
