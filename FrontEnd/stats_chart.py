from BackEnd.services.stats_service import format_duration
from FrontEnd.styles.design_tokens import COLORS


def draw_weekly_chart(figure, breakdown):
	"""Draw focus hours per day for a weekly_breakdown() result onto `figure`.

	Returns the axes so callers (and tests) can inspect the bars.
	"""
	figure.clear()
	figure.patch.set_alpha(0.0)
	ax = figure.add_subplot(111)
	ax.set_facecolor(COLORS['background'])

	x = [day.day_name for day in breakdown]
	y = [day.focus_seconds / 3600 for day in breakdown]
	colors = [COLORS['bar_today'] if day.is_today else COLORS['bar'] for day in breakdown]
	bars = ax.bar(x, y, color=colors, edgecolor=COLORS['bar_edge'], linewidth=1.5, alpha=0.9)

	for bar, day in zip(bars, breakdown):
		if day.work_sessions > 0:
			ax.text(bar.get_x() + bar.get_width()/2, bar.get_height() + 0.02,
			       f"{day.work_sessions} · {format_duration(day.focus_seconds)}",
			       ha='center', va='bottom', fontsize=8, color=COLORS['text_strong'])

	ax.set_ylabel("Focus Hours", fontsize=11, color=COLORS['text_strong'], labelpad=8)
	ax.set_title("Last 7 Days", fontsize=13, fontweight='bold', color=COLORS['text_strong'], pad=12)
	ax.set_ylim(bottom=0)
	ax.grid(True, axis='y', alpha=0.25, linestyle='--', linewidth=0.8, color=COLORS['grid'])
	ax.set_axisbelow(True)
	ax.tick_params(axis='both', colors=COLORS['text_strong'], labelsize=9)
	for spine in ['top', 'right']:
		ax.spines[spine].set_visible(False)
	for spine in ['bottom', 'left']:
		ax.spines[spine].set_color(COLORS['grid'])
	figure.tight_layout()
	return ax
