import plotly.graph_objects as go
from typing import Optional, Sequence

from panelgen.schemas import Panel, Point, SymbolKind


SYMBOL_MARKERS = {
    SymbolKind.DOT: "circle",
    SymbolKind.HEXAGON: "hexagon",
    SymbolKind.SQUARE: "square",
    SymbolKind.STAR: "star",
    SymbolKind.TRIANGLE: "triangle-up",
    SymbolKind.ELIMINATION: "y-up",
}


def generate_panel_visualization(panel: Panel, path: Optional[Sequence[Point]] = None) -> go.Figure:
    """Generate a Plotly figure of a panel, with `path` (or its known solution) drawn on top."""
    grid = panel.grid
    fig = go.Figure()

    # grid edges
    edge_x, edge_y = [], []
    for y in range(grid.height):
        edge_x += [0, grid.width - 1, None]
        edge_y += [y, y, None]
    for x in range(grid.width):
        edge_x += [x, x, None]
        edge_y += [0, grid.height - 1, None]
    fig.add_trace(go.Scatter(
        x=edge_x, y=edge_y, mode="lines", line=dict(width=6, color="#555"), name="Grid", hoverinfo="none"
    ))

    # walls
    wall_nodes = grid.wall_nodes()
    wall_cells = sorted(grid.wall_cells())
    if wall_nodes or wall_cells:
        fig.add_trace(go.Scatter(
            x=[p.x for p in wall_nodes] + [x + 0.5 for x, _ in wall_cells],
            y=[p.y for p in wall_nodes] + [y + 0.5 for _, y in wall_cells],
            mode="markers",
            marker=dict(symbol="x", size=18, color="black"),
            name="Walls",
        ))

    # symbols: node symbols sit on the node, cell symbols in the middle of the cell
    for kind, marker in SYMBOL_MARKERS.items():
        symbols = panel.symbols_of(kind)
        if not symbols:
            continue
        offset = 0 if symbols[0].on_node else 0.5
        fig.add_trace(go.Scatter(
            x=[s.position.x + offset for s in symbols],
            y=[s.position.y + offset for s in symbols],
            mode="markers+text" if kind == SymbolKind.TRIANGLE else "markers",
            text=[str(getattr(s, "value", "")) for s in symbols],
            textposition="bottom center",
            marker=dict(
                symbol=marker,
                size=20,
                color=[getattr(getattr(s, "color", None), "value", "gold") for s in symbols],
                line=dict(width=1, color="#222"),
            ),
            name=kind.value,
        ))

    line = list(path) if path else list(panel.solution or [])
    if line:
        fig.add_trace(go.Scatter(
            x=[p.x for p in line], y=[p.y for p in line],
            mode="lines", line=dict(width=10, color="#fbbf24"), name="Line"
        ))

    fig.add_trace(go.Scatter(
        x=[grid.start.x, grid.end.x], y=[grid.start.y, grid.end.y],
        mode="markers",
        marker=dict(size=26, color=["#4ade80", "#ef4444"]),
        text=["start", "end"],
        name="Start / End",
    ))

    fig.update_layout(
        title=f"Panel: {panel.name or 'Preview'}",
        showlegend=True,
        plot_bgcolor="#334155",
        xaxis=dict(visible=False),
        yaxis=dict(visible=False, autorange="reversed", scaleanchor="x"),
        height=600
    )

    return fig
