"""Plotly figures for chart widget views."""

import plotly.graph_objects as go

from .renderer import BarView, LineView, PieView

DONUT_HOLE = 0.5
COMPLETED_COLOR = "#22c55e"  # green-500
TOTAL_COLOR = "#e2e8f0"  # slate-200


def _base_layout(show_legend: bool, height: int = 280) -> dict:
    return {
        "template": "plotly_white",
        "height": height,
        "margin": {"l": 20, "r": 20, "t": 10, "b": 20},
        "showlegend": show_legend,
        "legend": {"x": 0.5, "y": -0.1, "xanchor": "center", "orientation": "h"},
    }


def bar_figure(view: BarView) -> go.Figure:
    """Bar chart of a breakdown; one named trace per group so the legend lists them."""
    horizontal = view.orientation == "horizontal"

    figure = go.Figure()
    for item in view.items:
        figure.add_trace(
            go.Bar(
                x=[item.value] if horizontal else [item.name],
                y=[item.name] if horizontal else [item.value],
                name=item.name,
                orientation="h" if horizontal else "v",
                marker={"color": item.color, "line": {"width": 1, "color": "white"}},
                text=[item.value],
                textposition="auto",
                hovertemplate=f"{item.name}: %{{text}}<extra></extra>",
            )
        )
    # Each group sits on its own category, so overlay keeps full-width bars
    figure.update_layout(barmode="overlay", **_base_layout(view.show_legend))
    if horizontal:
        figure.update_yaxes(autorange="reversed")
    return figure


def pie_figure(view: PieView) -> go.Figure:
    """Pie or donut chart of a breakdown."""
    figure = go.Figure(
        go.Pie(
            labels=[s.name for s in view.slices],
            values=[s.value for s in view.slices],
            marker={"colors": [s.color for s in view.slices]},
            hole=DONUT_HOLE if view.donut else 0,
            sort=False,
            direction="clockwise",
            textinfo="percent",
        )
    )
    figure.update_layout(**_base_layout(view.show_legend))
    return figure


def line_figure(view: LineView) -> go.Figure:
    """Completion trend as overlaid total and completed bars."""
    # Month labels repeat over a year, so bars are placed by index
    positions = list(range(len(view.points)))
    ticks = [(i, p.date) for i, p in enumerate(view.points) if p.show_label]

    figure = go.Figure()
    figure.add_trace(
        go.Bar(
            x=positions,
            y=[point.total for point in view.points],
            name="Total",
            marker={"color": TOTAL_COLOR},
        )
    )
    figure.add_trace(
        go.Bar(
            x=positions,
            y=[point.completed for point in view.points],
            name="Completed",
            marker={"color": COMPLETED_COLOR},
        )
    )
    figure.update_layout(barmode="overlay", **_base_layout(view.show_legend))
    figure.update_xaxes(
        tickmode="array",
        tickvals=[i for i, _ in ticks],
        ticktext=[date for _, date in ticks],
    )
    figure.update_yaxes(range=[0, view.max_total])
    return figure
