"""
Text charts for the terminal.

Horizontal bar charts of calorie data points.
"""

from .analytics import DataPoint


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
    max_label_len = max(len(l) for l in labels) if labels else 0

    lines = []

    if title:
        lines.append(title)
        lines.append("─" * (max_label_len + width + 8))

    for label, value in zip(labels, values):
        bar_len = int((value / max_val) * width) if max_val > 0 else 0
        bar = "█" * bar_len
        lines.append(f"{label:>{max_label_len}} │{bar} {value:.0f}")

    return "\n".join(lines)


def create_calorie_chart(points: list[DataPoint], title: str = "Calories (kcal)") -> str:
    """Bar chart of calorie data points, one bar per bucket."""
    return create_simple_bar_chart(
        [p.label for p in points],
        [float(p.calories) for p in points],
        title=title,
    )
