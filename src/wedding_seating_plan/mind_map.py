"""Interactive seating chart built with networkx and pyvis."""
import math
from typing import Dict, Iterable, List, Tuple

import networkx as nx
from pyvis.network import Network

from .models import ROLE_LABELS, Couple, Exclusion, Table

COUPLE_COLOR = "#3CB371"
EXCLUSION_COLOR = "#FF6B6B"
HONOR_COLOR = "#FFD700"
PALETTE = [
    "#FFB347", "#77DD77", "#AEC6CF", "#F49AC2", "#B39EB5", "#779ECB",
    "#966FD6", "#FF6961", "#CB99C9", "#CFCFC4", "#FDFD96", "#84B6F4",
]


def build_seating_graph(
    tables: Iterable[Table],
    couples: Iterable[Couple] = (),
    exclusions: Iterable[Exclusion] = (),
    shape: str = "round",
    canvas_size: Tuple[int, int] = (1600, 1000),
) -> nx.Graph:
    """
    Graph with one node per seated guest and edges for couples and exclusions.

    Node positions place each table on a grid and seat its guests around
    the table center, on a circle or a square depending on ``shape``.
    """
    tables = sorted(tables, key=lambda t: t.number)
    width, height = canvas_size
    centers = _compute_table_centers([t.number for t in tables], width, height)
    seat_of: Dict[str, int] = {}

    G = nx.Graph()
    for i, table in enumerate(tables):
        color = HONOR_COLOR if table.is_honor else PALETTE[i % len(PALETTE)]
        cx, cy = centers[table.number]
        n = max(1, len(table.guests))
        if shape == "square":
            side = max(2, int(math.ceil(n / 4)) + 1)
            coords = _square_layout(cx, cy, n, side)
        else:
            coords = _circle_layout(cx, cy, 60 + 6 * n, n)
        for g, (x, y) in zip(table.guests, coords):
            seat_of[g.id] = table.number
            G.add_node(
                g.id,
                label=g.full_name,
                title=_node_tooltip(g.full_name, table, ROLE_LABELS.get(g.role, "Guest")),
                color=color,
                table=table.number,
                x=x,
                y=y,
                physics=False,
                shape="dot",
                size=22 if g.is_honor else 16,
            )

    for c in couples:
        a, b = c.members()
        if a in seat_of and b in seat_of:
            G.add_edge(a, b, color=COUPLE_COLOR, width=3, label="couple", dashes=seat_of[a] != seat_of[b])
    for e in exclusions:
        a, b = e.members()
        # Only exclusions broken at a shared table are worth drawing
        if a in seat_of and b in seat_of and seat_of[a] == seat_of[b]:
            G.add_edge(a, b, color=EXCLUSION_COLOR, width=3, label="exclusion")
    return G


def generate_seating_mind_map(
    tables: Iterable[Table],
    couples: Iterable[Couple] = (),
    exclusions: Iterable[Exclusion] = (),
    shape: str = "round",
) -> str:
    """Return an HTML page with the interactive seating chart."""
    G = build_seating_graph(tables, couples, exclusions, shape=shape)
    net = Network(height="700px", width="100%", bgcolor="#111111", font_color="#EEEEEE")
    net.toggle_physics(False)
    net.from_nx(G)
    return _inject_legend_html(net.generate_html())


def _compute_table_centers(numbers: List[int], width: int, height: int) -> Dict[int, Tuple[int, int]]:
    """Place table centers on a grid inside the canvas area."""
    if not numbers:
        return {}
    n = len(numbers)
    cols = max(1, int(math.ceil(math.sqrt(n))))
    rows = int(math.ceil(n / cols))
    margin = 120
    step_x = max(1, width - 2 * margin) // cols
    step_y = max(1, height - 2 * margin) // rows
    centers = {}
    for idx, number in enumerate(numbers):
        r, c = divmod(idx, cols)
        centers[number] = (margin + c * step_x + step_x // 2, margin + r * step_y + step_y // 2)
    return centers


def _circle_layout(cx: int, cy: int, r: int, n: int) -> List[Tuple[int, int]]:
    pts = []
    for i in range(n):
        theta = 2 * math.pi * i / n
        pts.append((int(cx + r * math.cos(theta)), int(cy + r * math.sin(theta))))
    return pts


def _square_layout(cx: int, cy: int, n: int, side: int) -> List[Tuple[int, int]]:
    """Seats along the edges of a square, clockwise from the top left corner."""
    cell = 32
    half = side * cell // 2
    left, top = cx - half, cy - half
    pts: List[Tuple[int, int]] = []
    for c in range(side):
        pts.append((left + c * cell, top))
    for r in range(side):
        pts.append((left + side * cell, top + r * cell))
    for c in range(side, 0, -1):
        pts.append((left + c * cell, top + side * cell))
    for r in range(side, 0, -1):
        pts.append((left, top + r * cell))
    while len(pts) < n:
        pts.append((cx, cy))
    return pts[:n]


def _node_tooltip(name: str, table: Table, role: str) -> str:
    return (
        f"<b>{name}</b><br>"
        f"Table: {table.name}<br>"
        f"Role: {role}"
    )


def _inject_legend_html(html: str) -> str:
    legend = f"""
    <div style="position:absolute;right:12px;bottom:12px;background:#222;color:#eee;
                border:1px solid #444;border-radius:8px;padding:8px 12px;font-size:12px;">
      <div><span style="color:{COUPLE_COLOR}">&#9644;</span> couple (dashed: separated)</div>
      <div><span style="color:{EXCLUSION_COLOR}">&#9644;</span> exclusion at same table</div>
      <div><span style="color:{HONOR_COLOR}">&#9679;</span> honor table</div>
    </div>
    """
    if "</body>" in html:
        return html.replace("</body>", legend + "</body>", 1)
    return html + legend
