import sqlite3
from contextlib import closing
from datetime import date
from pathlib import Path
from BackEnd.core.paths import db_path

SCHEMA_PATH = Path(__file__).parent / "schema.sql"


def connect(dbfile=None):
	"""Open SQLite connection and ensure schema is applied."""
	conn = sqlite3.connect(dbfile or db_path())
	conn.row_factory = sqlite3.Row
	with open(SCHEMA_PATH, encoding="utf-8") as f:
		conn.executescript(f.read())
	return conn


def session_key(session_type, start_ms):
	"""Stable identity of one countdown segment: its mode plus its start time."""
	return f"{session_type}:{int(start_ms)}"


def upsert_partial(user_id, key, session_type, duration, local_date, created_at, now_iso, goal=None, dbfile=None):
	"""Create or grow the in-progress row for a segment.

	Duration only ever grows, so re-sending the same minute boundary is a no-op.
	Finalized rows are never touched.
	"""
	with closing(connect(dbfile)) as conn, conn:
		conn.execute(
			"""
			INSERT INTO focus_sessions
				(user_id, session_key, session_type, duration, completed, finalized, goal, local_date, created_at, updated_at)
			VALUES (?, ?, ?, ?, 0, 0, ?, ?, ?, ?)
			ON CONFLICT (user_id, session_key) DO UPDATE SET
				duration = MAX(focus_sessions.duration, excluded.duration),
				updated_at = excluded.updated_at
			WHERE focus_sessions.finalized = 0
			""",
			(user_id, key, session_type, int(duration), goal, local_date, created_at, now_iso)
		)


def finalize_session(user_id, key, session_type, duration, completed, local_date, created_at, now_iso, goal=None, dbfile=None):
	"""Write the final, immutable row for a segment. Returns False if it was already final."""
	with closing(connect(dbfile)) as conn, conn:
		cur = conn.execute(
			"""
			INSERT INTO focus_sessions
				(user_id, session_key, session_type, duration, completed, finalized, goal, local_date, created_at, updated_at)
			VALUES (?, ?, ?, ?, ?, 1, ?, ?, ?, ?)
			ON CONFLICT (user_id, session_key) DO UPDATE SET
				duration = excluded.duration,
				completed = excluded.completed,
				finalized = 1,
				updated_at = excluded.updated_at
			WHERE focus_sessions.finalized = 0
			""",
			(user_id, key, session_type, int(duration), int(bool(completed)), goal, local_date, created_at, now_iso)
		)
		return cur.rowcount > 0


def sessions_for_user(user_id, dbfile=None):
	"""Return all rows for a user, oldest first."""
	with closing(connect(dbfile)) as conn:
		cur = conn.execute(
			"SELECT user_id, session_key, session_type, duration, completed, finalized, goal, local_date, created_at "
			"FROM focus_sessions WHERE user_id=? ORDER BY id",
			(user_id,)
		)
		return [dict(row) for row in cur.fetchall()]


def today_totals(user_id, local_date=None, dbfile=None):
	"""Return (focus_seconds, completed_work_sessions) for one local day, today by default."""
	local_date = local_date or date.today().isoformat()
	work = [
		row for row in sessions_for_user(user_id, dbfile)
		if row["session_type"] == "work" and row["local_date"] == local_date
	]
	return sum(row["duration"] for row in work), sum(1 for row in work if row["completed"])
