"""
ASCII plotting for estimated-1RM progress.

Creates terminal-friendly charts of the daily 1RM series and simple bar
charts for volume summaries.
"""

from datetime import date

from .config import DEFAULT_PLOT_HEIGHT, DEFAULT_PLOT_WIDTH


def create_1rm_plot(
    series: list[tuple[date, float]],
    exercise_name: str,
    width: int = DEFAULT_PLOT_WIDTH,
    height: int = DEFAULT_PLOT_HEIGHT,
) -> str:
    """
    Create an ASCII plot of estimated 1RM over time.

    Args:
        series: (day, estimated 1RM) points, oldest first
        exercise_name: Display name shown in the chart title
        width: Plot width in characters
        height: Plot height in lines

    Returns:
        ASCII art string
    """
    if not series:
        return f"No estimated 1RM recorded for {exercise_name} yet."

    points = sorted(series, key=lambda p: p[0])

    min_date = points[0][0]
    max_date = points[-1][0]
    date_range = (max_date - min_date).days or 1

    values = [v for _, v in points]
    y_min = max(0, int(min(values)) - 5)
    y_max = int(max(values)) + 5
    y_range = (y_max - y_min) or 1

    plot_width = width - 7  # Leave room for y-axis labels
    plot_height = height - 3  # Leave room for x-axis and title

    grid = [[" " for _ in range(plot_width)] for _ in range(plot_height)]

    plot_points: list[tuple[int, int, float]] = []  # (x, y, value)
    for day, value in points:
        x = int(((day - min_date).days / date_range) * (plot_width - 1))
        y = int(((value - y_min) / y_range) * (plot_height - 1))
        y = plot_height - 1 - y  # Flip y-axis
        plot_points.append((x, y, value))

    def _p(x: int, r: int, ch: str) -> None:
        if 0 <= x < plot_width and 0 <= r < plot_height and grid[r][x] == " ":
            grid[r][x] = ch

    # Connecting lines (staircase style: ╭─╯)
    for (col1, row1, _), (col2, row2, _) in zip(plot_points, plot_points[1:]):
        if row1 == row2:
            for x in range(col1 + 1, col2):
                _p(x, row1, "─")
            continue

        if col1 == col2:
            for r in range(min(row1, row2) + 1, max(row1, row2)):
                _p(col1, r, "│")
            continue

        row_dir = -1 if row2 < row1 else 1  # -1 = going up (higher value)
        corner_exit = "╯" if row_dir == -1 else "╮"
        corner_entry = "╭" if row_dir == -1 else "╰"
        n_segs = abs(row2 - row1) + 1

        for step in range(n_segs):
            row = row1 + row_dir * step
            pivot_in = col1 + (col2 - col1) * step // n_segs
            pivot_out = col1 + (col2 - col1) * (step + 1) // n_segs

            if step > 0:
                _p(pivot_in, row, corner_entry)
            start = col1 if step == 0 else pivot_in
            end = col2 if step == n_segs - 1 else pivot_out
            for x in range(start + 1, end):
                _p(x, row, "─")
            if step < n_segs - 1:
                _p(pivot_out, row, corner_exit)

    for x, y, _ in plot_points:
        grid[y][x] = "●"

    lines = [f"Estimated 1RM Progress ({exercise_name})", "─" * width]

    for i, row in enumerate(grid):
        y_val = y_max - (i / (plot_height - 1)) * y_range if plot_height > 1 else y_max
        lines.append(f"{y_val:4.0f} ┤" + "".join(row))

    lines.append("─" * width)

    label_line = [" "] * plot_width
    mid_date = min_date + (max_date - min_date) / 2
    for x_pos, day in ((0, min_date), (plot_width // 2, mid_date), (plot_width - 6, max_date)):
        for i, c in enumerate(day.strftime("%b %d")):
            if 0 <= x_pos + i < plot_width:
                label_line[x_pos + i] = c
    lines.append("      " + "".join(label_line))
    lines.append("● best estimated 1RM of the day (kg)")

    return "\n".join(lines)


def create_simple_bar_chart(
    labels: list[str],
    values: list[float],
    width: int = 40,
    title: str = "",
) -> str:
    """
    Create a simple horizontal bar chart.

    Args:
        labels: Labels for each bar
        values: Values for each bar
        width: Maximum bar width
        title: Chart title

    Returns:
        ASCII bar chart string
    """
    if not values:
        return "No data to display."

    max_val = max(values)
    max_label_len = max(len(label) for label in labels) if labels else 0

    lines = []

    if title:
        lines.append(title)
        lines.append("─" * (max_label_len + width + 5))

    for label, value in zip(labels, values):
        bar_len = int((value / max_val) * width) if max_val > 0 else 0
        lines.append(f"{label:>{max_label_len}} │{'█' * bar_len} {value:.1f}")

    return "\n".join(lines)


def create_weekly_volume_chart(totals: list[float]) -> str:
    """
    Create a chart of weekly training volume.

    Args:
        totals: Volume per week, oldest first (last = current week)

    Returns:
        ASCII chart string
    """
    if not totals or not any(totals):
        return "No training volume in this period."

    weeks = len(totals)
    labels = []
    for i in range(weeks - 1, -1, -1):
        if i == 0:
            labels.append("This week")
        elif i == 1:
            labels.append("Last week")
        else:
            labels.append(f"{i} weeks ago")

    return create_simple_bar_chart(labels, totals, title="Weekly Volume (kg × reps)")
