from datetime import datetime, timedelta

from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.colors import to_hex
from matplotlib.figure import Figure

from BackEnd.core.models import PersistedSession, SessionType
from BackEnd.services import stats_service
from FrontEnd.stats_chart import draw_weekly_chart
from FrontEnd.stats_window import StatisticsWindow
from FrontEnd.styles.design_tokens import COLORS

NOW = datetime(2026, 10, 17, 15, 0)


def work(days_ago, hour=9):
    start = (NOW - timedelta(days=days_ago)).replace(hour=hour)
    return PersistedSession(start, start + timedelta(minutes=25), 1500.0, SessionType.WORK)


def test_one_bar_per_day_with_today_highlighted():
    figure = Figure()
    FigureCanvasAgg(figure)
    breakdown = stats_service.weekly_breakdown([work(0), work(0, 10), work(3)], NOW)
    ax = draw_weekly_chart(figure, breakdown)
    bars = ax.patches
    assert len(bars) == 7
    assert bars[-1].get_height() == 50 / 60
    assert to_hex(bars[-1].get_facecolor()) == COLORS['bar_today'].lower()
    assert to_hex(bars[0].get_facecolor()) == COLORS['bar'].lower()
    assert len(ax.texts) == 2


def test_redraw_replaces_axes():
    figure = Figure()
    FigureCanvasAgg(figure)
    breakdown = stats_service.weekly_breakdown([], NOW)
    draw_weekly_chart(figure, breakdown)
    draw_weekly_chart(figure, breakdown)
    assert len(figure.axes) == 1


def test_statistics_window_refresh(store):
    from BackEnd.core.settings import Settings
    for days_ago, hour in [(0, 9), (0, 10), (1, 9)]:
        store.append(work(days_ago, hour))
    window = StatisticsWindow(store, lambda: Settings(daily_goal=4), now=lambda: NOW)
    window.refresh()
    assert window.today_count.text() == "2"
    assert window.today_focus.text() == "50m"
    assert window.week_total.text() == "3"
    assert "2 day streak" in window.streak_label.text()
    assert window.footer_today.bar.value() == 50
    assert window.history_table.rowCount() == 3
