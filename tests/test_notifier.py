from BackEnd.core.models import SessionType
from BackEnd.core.settings import Settings
from BackEnd.services import notifier


def test_disabled_notifications_give_nothing():
    assert notifier.compose(SessionType.WORK, SessionType.SHORT_BREAK, Settings(notifications_enabled=False)) is None


def test_simple_mode_work_done():
    notice = notifier.compose(SessionType.WORK, SessionType.WORK, Settings())
    assert notice.body == "Time's up! Take a break."
    assert notice.play_sound is True
    assert "Pomodoro" in notice.title


def test_full_cycle_messages_follow_next_phase():
    settings = Settings(full_cycle_mode=True, sound_enabled=False)
    short = notifier.compose(SessionType.WORK, SessionType.SHORT_BREAK, settings)
    long = notifier.compose(SessionType.WORK, SessionType.LONG_BREAK, settings)
    assert "short break" in short.body
    assert "long break" in long.body
    assert short.play_sound is False


def test_break_over():
    notice = notifier.compose(SessionType.LONG_BREAK, SessionType.WORK, Settings(full_cycle_mode=True))
    assert notice.body == "Long Break over. Ready to focus?"


def test_missing_settings_still_notifies():
    notice = notifier.compose(SessionType.WORK, SessionType.WORK, None)
    assert notice is not None and notice.play_sound
