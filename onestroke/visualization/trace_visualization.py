import plotly.graph_objects as go

from onestroke.schemas import Level, TraceSnapshot

PENDING_EDGE_COLOR = "gray"
COMPLETED_EDGE_COLOR = "green"
CURSOR_LINE_COLOR = "rgba(0, 0, 255, 0.5)"
NODE_COLOR = "#4A9EFF"
START_NODE_COLOR = "yellow"
PATH_NODE_COLOR = "orange"


def generate_trace_visualization(level: Level, snapshot: TraceSnapshot) -> go.Figure:
    """Generate a Plotly figure of a level and the current attempt on it."""
    positions = [(n.x, n.y) for n in level.nodes]
    completed = set(snapshot.completed_edges)

    edge_x, edge_y = [], []
    done_x, done_y = [], []
    for e in level.edges:
        x0, y0 = positions[e.start]
        x1, y1 = positions[e.end]
        if e.key in completed:
            done_x += [x0, x1, None]
            done_y += [y0, y1, None]
        else:
            edge_x += [x0, x1, None]
            edge_y += [y0, y1, None]

    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=edge_x, y=edge_y, mode="lines", line=dict(width=10, color=PENDING_EDGE_COLOR), name="Edges"
    ))
    fig.add_trace(go.Scatter(
        x=done_x, y=done_y, mode="lines", line=dict(width=12, color=COMPLETED_EDGE_COLOR), name="Traced"
    ))

    # in-progress segment from the last node to the pointer, already normalized by the host
    if snapshot.drawing and snapshot.path and snapshot.cursor_point is not None:
        x0, y0 = positions[snapshot.path[-1]]
        x1, y1 = snapshot.cursor_point
        fig.add_trace(go.Scatter(
            x=[x0, x1], y=[y0, y1], mode="lines",
            line=dict(width=12, color=CURSOR_LINE_COLOR, dash="dash"),
            name="Stroke"
        ))

    colors = []
    for index in range(len(level.nodes)):
        if snapshot.path and index == snapshot.path[0]:
            colors.append(START_NODE_COLOR)
        elif index in snapshot.path:
            colors.append(PATH_NODE_COLOR)
        else:
            colors.append(NODE_COLOR)

    fig.add_trace(go.Scatter(
        x=[p[0] for p in positions], y=[p[1] for p in positions], mode="markers+text",
        text=list(range(len(level.nodes))), textposition="middle center",
        marker=dict(size=36, color=colors, line=dict(width=2, color="black")),
        name="Nodes"
    ))

    title = f"Level: {level.name}"
    if snapshot.solved:
        title += " - Level Complete!"

    fig.update_layout(
        title=title,
        showlegend=False,
        plot_bgcolor="white",
        xaxis=dict(visible=False, range=[-0.5, 0.5]),
        yaxis=dict(visible=False, range=[0.5, -0.5], scaleanchor="x"), # screen y grows downwards
        height=600
    )

    return fig
