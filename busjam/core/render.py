"""Text rendering of boards and rankings for external decision services.

The grid and candidate lines are parsed by consumers, so their layout is
fixed: one `Row N:` line per board row (row 0 first), each single-character
cell followed by one space (so rows end in a space), and one
`[x,y] cost=N blockers=...` line per candidate.
"""

from __future__ import annotations

from typing import Sequence

from busjam.core.constants import COLOR_CODES, DISABLED_CHAR, EMPTY_CHAR, UNKNOWN_CODE
from busjam.core.ranking import MoveCostResult, best_move
from busjam.core.snapshot import BoardSnapshot, GameSnapshot
from busjam.core.utils import Position

LEGEND_LINE = "Legend: . = Empty, X = Disabled, " + ", ".join(
    f"{code} = {name}" for name, code in COLOR_CODES.items()
)

SYSTEM_PROMPT = (
    "You are playing Bus Jam, a puzzle game where you need to optimize moves to get "
    "matching-color passengers to buses.\n\n"
    "KEY RULES (FOLLOW PRECISELY):\n\n"
    "1) ALWAYS move passengers with CLEAR PATHS to the bus first. These have a move cost of 1.\n\n"
    "2) If no passenger has a clear path, move the blocker of the passenger with the LOWEST MOVE COST.\n\n"
    "3) Move cost = (number of blockers + 1). Always minimize the total move cost.\n\n"
    "4) Coordinates are [x,y] where x is HORIZONTAL and y is VERTICAL.\n\n"
    "5) The MATCHING PASSENGER ANALYSIS section shows the exact move costs - trust this analysis.\n\n"
    "6) RESPOND WITH COORDINATES IN THE FORMAT [1,2] WITHOUT ANY PREFIXES (no 'x=' or 'y=')."
)

USER_SUFFIX = (
    "What is your next move?\n"
    "Respond with ONLY the coordinates [x,y] of the passenger you want to move, "
    "making sure x is HORIZONTAL and y is VERTICAL.\n"
    "IMPORTANT: Format your answer as simple coordinates like [1,2] WITHOUT using "
    "'x=' and 'y=' prefixes. Then briefly explain why this is the optimal move."
)


def color_code(color: str) -> str:
    return COLOR_CODES.get(color, UNKNOWN_CODE)


def format_position(pos: Position) -> str:
    return f"[{pos[0]},{pos[1]}]"


def render_grid(board: BoardSnapshot) -> list[str]:
    lines: list[str] = []
    for row in range(board.height):
        chars = []
        for col in range(board.width):
            cell = board.cell(col, row)
            if cell.disabled:
                chars.append(DISABLED_CHAR)
            elif cell.occupant is None:
                chars.append(EMPTY_CHAR)
            else:
                chars.append(color_code(cell.occupant))
        lines.append(f"Row {row}: " + "".join(f"{char} " for char in chars))
    return lines


def render_candidate(result: MoveCostResult) -> str:
    if result.blockers:
        blockers = " ".join(format_position(pos) for pos in result.blockers)
    else:
        blockers = "none"
    return f"{format_position(result.source)} cost={result.cost} blockers={blockers}"


def render_ranking(ranking: Sequence[MoveCostResult], target_color: str) -> list[str]:
    if not ranking:
        return [f"No {target_color} passengers found on the grid."]
    lines = [f"Found {len(ranking)} {target_color} passengers that match the current bus."]
    lines.extend(render_candidate(result) for result in ranking)
    return lines


def _analysis_lines(ranking: Sequence[MoveCostResult], target_color: str) -> list[str]:
    lines = render_ranking(ranking, target_color)
    if not ranking:
        return lines
    lines.append("")
    for result in ranking:
        where = format_position(result.source)
        if result.reachable:
            lines.append(f"Passenger at {where} has a clear path to the bus (move cost 1).")
        elif result.stuck:
            lines.append(f"Passenger at {where} is walled in; no blocker can free it.")
        else:
            count = len(result.blockers)
            lines.append(
                f"Passenger at {where} has {count} blockers. Move cost: {result.cost} "
                f"({count} blockers + 1 final move). "
                f"Best blocker to move: {format_position(result.blockers[0])}"
            )
    best = best_move(ranking)
    if best is not None:
        lines.append("")
        lines.append(f"Recommended move: {format_position(best.next_move)}")
    return lines


def build_prompt(
    game: GameSnapshot,
    ranking: Sequence[MoveCostResult],
    move_count: int = 0,
) -> str:
    """Full game-state description handed to the decision service."""
    lines = [
        "======= BUS JAM GAME STATE =======",
        "",
        "GAME RULES:",
        "1. Move matching-color passengers to the bus when they can reach the top row",
        "2. Move non-matching passengers to the waiting area only if they block a matching passenger",
        "3. You lose if the waiting area fills up, so use it sparingly",
        "4. Always choose the matching passenger that requires the FEWEST moves to reach the bus",
        "",
        "COORDINATES: [x,y] where x=HORIZONTAL, y=VERTICAL",
        "For example, [12,16] means the passenger in column 12, row 16",
        "",
        f"Current level: {game.level_index}",
        f"Move count: {move_count}",
        "",
    ]

    if game.queue is not None:
        lines.append(f"Current bus color: {game.queue.color}")
        lines.append(f"Is bus full: {game.queue.is_full}")
        lines.append(f"Seats remaining: {game.queue.remaining}/{game.queue.capacity}")
        lines.append("")

    if game.buffer.capacity:
        lines.append("Waiting area status:")
        for idx, slot in enumerate(game.buffer.slots, start=1):
            lines.append(f"Slot {idx}: {slot} passenger" if slot is not None else f"Slot {idx}: Empty")
        lines.append(f"Waiting area: {game.buffer.filled}/{game.buffer.capacity} slots filled")
        lines.append("")

    lines.append("GRID STATE:")
    lines.extend(render_grid(game.board))
    lines.append("")
    lines.append(LEGEND_LINE)
    lines.append("")

    lines.append("======= MATCHING PASSENGER ANALYSIS =======")
    if game.queue is None:
        lines.append("No bus is waiting.")
    else:
        lines.extend(_analysis_lines(ranking, game.queue.color))
    lines.append("")

    lines.append("WHAT TO DO:")
    lines.append("1. If there's a passenger with a clear path to the bus, MOVE IT")
    lines.append("2. Otherwise, move the FIRST blocker of the passenger with the LOWEST move cost")
    return "\n".join(lines)


def build_user_message(
    game: GameSnapshot,
    ranking: Sequence[MoveCostResult],
    move_count: int = 0,
) -> str:
    return build_prompt(game, ranking, move_count) + "\n\n" + USER_SUFFIX


__all__ = [
    "LEGEND_LINE",
    "SYSTEM_PROMPT",
    "USER_SUFFIX",
    "color_code",
    "format_position",
    "render_grid",
    "render_candidate",
    "render_ranking",
    "build_prompt",
    "build_user_message",
]
