import logging
import sqlite3
from pathlib import Path

from BackEnd.core.models import PersistedSession
from BackEnd.core.paths import db_path

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).parent.parent.parent / "SQL" / "schema.sql"


class SessionRepo:
	"""Append-only session log in SQLite.

	Records are never updated in place. Readers get plain PersistedSession
	objects and do their own sorting.
	"""

	def __init__(self, dbfile=None):
		self.dbfile = Path(dbfile) if dbfile is not None else db_path()

	def connect(self):
		"""Open SQLite connection and ensure schema is applied."""
		conn = sqlite3.connect(self.dbfile)
		conn.row_factory = sqlite3.Row
		with open(SCHEMA_PATH, encoding="utf-8") as f:
			conn.executescript(f.read())

		# Migration: ensure newer columns exist on older DBs
		cur = conn.execute("PRAGMA table_info(sessions)")
		cols = {r['name'] for r in cur.fetchall()}
		if 'completed' not in cols:
			conn.execute("ALTER TABLE sessions ADD COLUMN completed INTEGER NOT NULL DEFAULT 1")
		return conn

	def append(self, record: PersistedSession):
		"""Insert one finished session."""
		row = record.to_row()
		row["local_date"] = record.start_time.date().isoformat()
		conn = self.connect()
		try:
			with conn:
				conn.execute(
					"""
					INSERT INTO sessions (id, start_time, end_time, local_date, duration_sec, session_type, completed)
					VALUES (:id, :start_time, :end_time, :local_date, :duration_sec, :session_type, :completed)
					""",
					row
				)
		finally:
			conn.close()
		logger.debug("Recorded %s session %s", record.session_type.value, record.id)

	def query_all(self):
		"""Return every stored session, oldest first."""
		conn = self.connect()
		try:
			cur = conn.execute(
				"SELECT id, start_time, end_time, duration_sec, session_type, completed FROM sessions ORDER BY start_time"
			)
			rows = cur.fetchall()
		finally:
			conn.close()
		sessions = []
		for row in rows:
			try:
				sessions.append(PersistedSession.from_row(row))
			except ValueError:
				logger.warning("Skipping unreadable session row %s", row["id"])
		return sessions

	def count(self):
		conn = self.connect()
		try:
			row = conn.execute("SELECT COUNT(*) AS total FROM sessions").fetchone()
		finally:
			conn.close()
		return row["total"] if row else 0

	def clear(self):
		"""Delete all history. Used by the reset tool only."""
		conn = self.connect()
		try:
			with conn:
				conn.execute("DELETE FROM sessions")
		finally:
			conn.close()
