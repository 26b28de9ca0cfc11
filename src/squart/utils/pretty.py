"""Pretty-print helpers for board snapshots."""

from __future__ import annotations

import sys


SYMBOLS = {
    "void": " ",
    "inactive": "#",
    "open": ".",
    "horizontal": "H",
    "vertical": "V",
}


def cell_symbol(cell: dict) -> str:
    if cell["is_void"]:
        return SYMBOLS["void"]
    if cell["is_inactive"]:
        return SYMBOLS["inactive"]
    if cell["occupied_by"]:
        return SYMBOLS[cell["occupied_by"]]
    return SYMBOLS["open"]


def format_board(snapshot: dict) -> str:
    """Render a ``board_snapshot`` grid with row/column indices."""
    width = snapshot["cols"]
    header_cells = [f"{c:>2}" for c in range(width)]
    lines = ["    " + " ".join(header_cells)]
    lines.append("    " + "-" * (3 * width - 1))
    for r, row in enumerate(snapshot["cells"]):
        row_render = " ".join(f"{cell_symbol(cell):>2}" for cell in row)
        lines.append(f"{r:>2} | {row_render}")
    return "\n".join(lines)


def print_board_stats(snapshot: dict, *, stream=None) -> None:
    """Print the grid followed by area, inactive and move statistics."""

    stream = stream or sys.stdout
    print(format_board(snapshot), file=stream)

    horizontal = snapshot["moves"]["horizontal"]
    vertical = snapshot["moves"]["vertical"]
    print(file=stream)
    print(
        f"  Size:          {snapshot['rows']} x {snapshot['cols']} ({snapshot['total_square_count']} cells)",
        file=stream,
    )
    print(f"  Playable:      {snapshot['playable_square_count']} ({snapshot['void_count']} void)", file=stream)
    print(
        f"  Inactive:      {snapshot['inactive_count']} ({snapshot['actual_inactive_percentage']:.1f}%)",
        file=stream,
    )
    if snapshot["requested_inactive_percentage"] is not None:
        print(f"  Requested:     {snapshot['requested_inactive_percentage']:g}%", file=stream)
    print(f"  Moves:         H={horizontal} V={vertical} (diff {abs(horizontal - vertical)})", file=stream)
    print(f"  Placements:    {len(snapshot['placements'])}", file=stream)
    if snapshot["status"] == "active":
        print(f"  To move:       {snapshot['current_player']}", file=stream)
    else:
        print(f"  Finished:      {snapshot['winner'] or 'draw'}", file=stream)
    if snapshot["seed"] is not None:
        print(file=stream)
        print(f"Seed: {snapshot['seed']}", file=stream)
