"""PNG rendering of a computed timeline."""
import io

import matplotlib
matplotlib.use('Agg')  # Use non-GUI backend for server
import matplotlib.pyplot as plt

STATUS_COLORS = {
    'PLANNED': '#93c5fd',
    'IN_PROGRESS': '#4287f5',
    'BLOCKED': '#ef4444',
    'DONE': '#10b981',
    'COMPLETED': '#059669',
}
DEFAULT_COLOR = '#FF8200'
LINK_STYLES = {'FS': '-', 'SS': '--', 'FF': '-.', 'SF': ':'}


def render_png(timeline, geometry, title=None):
    rows = timeline.rows
    height_in = max(3.0, 1.2 + 0.45 * len(rows))
    fig, ax = plt.subplots(figsize=(14, height_in))
    try:
        _draw(ax, timeline, geometry)
        if title:
            ax.set_title(title)
        fig.tight_layout()
        buf = io.BytesIO()
        fig.savefig(buf, format='png')
        return buf.getvalue()
    finally:
        plt.close(fig)


def _draw(ax, timeline, geometry):
    width = geometry.width
    ax.set_xlim(0, width)
    if not timeline.rows:
        ax.text(0.5, 0.5, 'No tasks match the filters for this window', ha='center', va='center',
                fontsize=14, color='gray', transform=ax.transAxes)
        ax.set_yticks([])
    else:
        # rows are drawn top-down in canvas pixels, matching the link geometry
        for r in timeline.rows:
            pos = r.position
            y = geometry.y_for(pos.row)
            ax.barh(y, geometry.x_for(pos.width_pct), left=geometry.x_for(pos.left_pct),
                    height=geometry.row_height * 0.8, align='center',
                    color=STATUS_COLORS.get(r.task.status, DEFAULT_COLOR), edgecolor='black')
        for link in timeline.links:
            xs = [p[0] for p in link.path]
            ys = [p[1] for p in link.path]
            ax.plot(xs[:-1], ys[:-1], color='#9ca3af', lw=1.2, linestyle=LINK_STYLES.get(link.type, '-'))
            ax.annotate('', xy=link.path[-1], xytext=link.path[-2],
                        arrowprops=dict(arrowstyle='->', color='#9ca3af', lw=1.2))
        ax.set_yticks([geometry.y_for(r.position.row) for r in timeline.rows])
        ax.set_yticklabels([r.task.title for r in timeline.rows])
        ax.set_ylim(timeline.height, 0)
    if timeline.today_pct is not None:
        ax.axvline(geometry.x_for(timeline.today_pct), color='red', lw=1.5)
    days = timeline.days
    if days:
        span = max(1, len(days) - 1)
        step = max(1, len(days) // 16)
        picked = list(range(0, len(days), step))
        ax.set_xticks([i / span * width for i in picked])
        ax.set_xticklabels([days[i]['label'] for i in picked])
    ax.set_xlabel(f"{timeline.window.start:%B %Y}" if days else 'Date')
