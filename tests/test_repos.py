import json
from datetime import datetime, timedelta

from BackEnd.core.models import PersistedSession, SessionType
from BackEnd.core.paths import db_path, settings_path
from BackEnd.core.settings import KeyboardShortcut, Settings, ShortcutAction
from BackEnd.repos.session_repo import SessionRepo
from BackEnd.repos.settings_repo import SettingsRepo


def make_session(start, kind=SessionType.WORK):
    return PersistedSession(
        start_time=start,
        end_time=start + timedelta(minutes=25),
        duration_seconds=1500.0,
        session_type=kind,
    )


class TestSessionRepo:
    def test_append_and_query_round_trip(self, tmp_path):
        repo = SessionRepo(tmp_path / "s.db")
        first = make_session(datetime(2026, 10, 16, 9, 0))
        second = make_session(datetime(2026, 10, 17, 9, 0), SessionType.LONG_BREAK)
        repo.append(second)
        repo.append(first)
        rows = repo.query_all()
        assert [r.id for r in rows] == [first.id, second.id]
        assert rows[0] == first
        assert rows[1].session_type == SessionType.LONG_BREAK

    def test_empty_log(self, tmp_path):
        assert SessionRepo(tmp_path / "s.db").query_all() == []

    def test_count_and_clear(self, tmp_path):
        repo = SessionRepo(tmp_path / "s.db")
        repo.append(make_session(datetime(2026, 10, 17, 9, 0)))
        repo.append(make_session(datetime(2026, 10, 17, 10, 0)))
        assert repo.count() == 2
        repo.clear()
        assert repo.count() == 0

    def test_default_location(self, data_home):
        assert SessionRepo().dbfile == db_path()
        assert db_path().parent == data_home

    def test_older_database_gains_completed_column(self, tmp_path):
        import sqlite3
        path = tmp_path / "old.db"
        conn = sqlite3.connect(path)
        conn.execute(
            "CREATE TABLE sessions (id TEXT PRIMARY KEY, start_time TEXT NOT NULL, end_time TEXT NOT NULL, "
            "local_date TEXT NOT NULL, duration_sec REAL NOT NULL DEFAULT 0, session_type TEXT NOT NULL DEFAULT 'work')"
        )
        conn.execute(
            "INSERT INTO sessions VALUES ('abc', '2026-10-17T09:00:00', '2026-10-17T09:25:00', '2026-10-17', 1500, 'work')"
        )
        conn.commit()
        conn.close()
        rows = SessionRepo(path).query_all()
        assert len(rows) == 1
        assert rows[0].completed is True


class TestSettingsRepo:
    def test_missing_file_gives_defaults(self, tmp_path):
        assert SettingsRepo(tmp_path / "none.json").load_config() == Settings()

    def test_round_trip(self, tmp_path):
        repo = SettingsRepo(tmp_path / "settings.json")
        settings = Settings(work_minutes=50, daily_goal=4, full_cycle_mode=True, sound_enabled=False)
        assert repo.save_config(settings)
        assert repo.load_config() == settings

    def test_flat_camel_case_file(self, tmp_path):
        repo = SettingsRepo(tmp_path / "settings.json")
        repo.save_config(Settings())
        data = json.loads((tmp_path / "settings.json").read_text(encoding="utf-8"))
        assert data["workMinutes"] == 25
        assert data["shortBreakMinutes"] == 5
        assert data["longBreakMinutes"] == 15
        assert data["longBreakInterval"] == 4
        assert data["dailyGoal"] == 8
        assert data["fullCycleMode"] is False
        assert data["autoStartNext"] is True

    def test_corrupt_file_gives_defaults(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text("{not json", encoding="utf-8")
        assert SettingsRepo(path).load_config() == Settings()

    def test_non_object_file_gives_defaults(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text("[1, 2]", encoding="utf-8")
        assert SettingsRepo(path).load_config() == Settings()

    def test_invalid_values_clamped_on_load(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"dailyGoal": 0, "workMinutes": -10, "longBreakInterval": "x"}), encoding="utf-8")
        settings = SettingsRepo(path).load_config()
        assert settings.daily_goal == 1
        assert settings.work_minutes == 1
        assert settings.long_break_interval == 4

    def test_missing_shortcuts_written_back(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"workMinutes": 30}), encoding="utf-8")
        settings = SettingsRepo(path).load_config()
        assert settings.work_minutes == 30
        assert len(settings.keyboard_shortcuts) == 3
        data = json.loads(path.read_text(encoding="utf-8"))
        assert [s["action"] for s in data["keyboardShortcuts"]] == ["startPause", "reset", "showStatistics"]

    def test_custom_shortcut_survives(self, tmp_path):
        repo = SettingsRepo(tmp_path / "settings.json")
        custom = KeyboardShortcut(ShortcutAction.RESET, "X", ("control",), enabled=False)
        repo.save_config(Settings().with_shortcut(custom))
        loaded = repo.load_config().shortcut_for(ShortcutAction.RESET)
        assert loaded == custom

    def test_default_location(self):
        assert SettingsRepo().path == settings_path()

    def test_unwritable_location_reports_failure(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("x", encoding="utf-8")
        repo = SettingsRepo(blocker / "settings.json")
        assert repo.save_config(Settings()) is False
