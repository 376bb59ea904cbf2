"""SVG board renderer + JavaScript click handler for Gradio."""

from __future__ import annotations

from typing import Optional

from gobang.engine.state import EngineState
from gobang.game.board import format_point
from gobang.game.types import Player, Point

# Layout constants
CELL_SIZE = 40
MARGIN = 40
STONE_RADIUS = 17
CLICK_RADIUS = 18  # Invisible click target radius

# Colors
BG_COLOR = "#DCB35C"
LINE_COLOR = "#4A3728"
BLACK_STONE = "#1A1A1A"
WHITE_STONE = "#F5F5F5"
WHITE_STROKE = "#888"
BANNER_COLOR = "rgba(0, 0, 0, 0.6)"


def board_pixels(size: int) -> int:
    return MARGIN * 2 + CELL_SIZE * (size - 1)


def _coord(point: Point) -> tuple[int, int]:
    """Convert board coordinates to SVG pixel coordinates (row 0 at the top)."""
    return MARGIN + point.col * CELL_SIZE, MARGIN + point.row * CELL_SIZE


def render_board_svg(
    state: EngineState,
    clickable: bool = True,
    highlight_last: bool = True,
    game_over_message: str = "",
) -> str:
    """Render the board as an SVG string."""
    board = state.board
    size = board.size
    px = board_pixels(size)
    parts: list[str] = []

    parts.append(
        f'<svg xmlns="http://www.w3.org/2000/svg" '
        f'width="{px}" height="{px}" viewBox="0 0 {px} {px}" id="gomoku-board">'
    )
    parts.append(f'<rect width="{px}" height="{px}" fill="{BG_COLOR}" rx="4"/>')

    # Grid lines
    far = MARGIN + (size - 1) * CELL_SIZE
    for i in range(size):
        offset = MARGIN + i * CELL_SIZE
        parts.append(
            f'<line x1="{offset}" y1="{MARGIN}" x2="{offset}" y2="{far}" '
            f'stroke="{LINE_COLOR}" stroke-width="1"/>'
        )
        parts.append(
            f'<line x1="{MARGIN}" y1="{offset}" x2="{far}" y2="{offset}" '
            f'stroke="{LINE_COLOR}" stroke-width="1"/>'
        )

    cx, cy = _coord(board.center)
    parts.append(f'<circle cx="{cx}" cy="{cy}" r="4" fill="{LINE_COLOR}"/>')

    # Labels: columns on top, rows on the left, both from format_point
    for i in range(size):
        label = format_point(Point(i, i))
        x, y = _coord(Point(i, i))
        parts.append(
            f'<text x="{x}" y="{MARGIN - 15}" text-anchor="middle" '
            f'font-size="13" font-family="monospace" fill="{LINE_COLOR}">{label[0]}</text>'
        )
        parts.append(
            f'<text x="{MARGIN - 22}" y="{y + 5}" text-anchor="middle" '
            f'font-size="13" font-family="monospace" fill="{LINE_COLOR}">{label[1:]}</text>'
        )

    # Stones
    last = state.last_move
    for point, player in board.stones():
        x, y = _coord(point)
        fill = BLACK_STONE if player is Player.BLACK else WHITE_STONE
        stroke = "none" if player is Player.BLACK else WHITE_STROKE
        parts.append(
            f'<circle cx="{x}" cy="{y}" r="{STONE_RADIUS}" '
            f'fill="{fill}" stroke="{stroke}" stroke-width="1.5"/>'
        )
        if highlight_last and last is not None and point == last.point:
            marker = WHITE_STONE if player is Player.BLACK else BLACK_STONE
            parts.append(f'<circle cx="{x}" cy="{y}" r="5" fill="{marker}" opacity="0.7"/>')

    # Clickable intersection targets (invisible circles)
    if clickable and not state.is_over:
        for point in board.points():
            if not board.is_empty(point):
                continue
            x, y = _coord(point)
            coord = format_point(point)
            parts.append(
                f'<circle cx="{x}" cy="{y}" r="{CLICK_RADIUS}" '
                f'fill="transparent" class="board-click" '
                f'data-coord="{coord}" style="cursor:pointer">'
                f'<title>{coord}</title></circle>'
            )

    if game_over_message:
        parts.append(
            f'<rect x="0" y="{px // 2 - 30}" width="{px}" height="60" fill="{BANNER_COLOR}"/>'
        )
        parts.append(
            f'<text x="{px // 2}" y="{px // 2 + 10}" text-anchor="middle" '
            f'font-size="28" font-family="sans-serif" fill="white">{game_over_message}</text>'
        )

    parts.append("</svg>")
    return "\n".join(parts)


def overlay_message(state: EngineState, human: Optional[Player]) -> str:
    """Short banner text once the game is over, from the human's point of view."""
    if not state.is_over:
        return ""
    if state.winner is None:
        return "Draw!"
    return "You win!" if state.winner is human else "AI wins!"


# JavaScript that handles clicks on the SVG and writes the coordinate to
# a hidden Gradio Textbox, then triggers the submit button.
BOARD_CLICK_JS = """
() => {
    if (window._gomokuClickBound) return;
    window._gomokuClickBound = true;

    document.addEventListener('click', function(e) {
        const circle = e.target.closest('.board-click');
        if (!circle) return;
        const coord = circle.getAttribute('data-coord');
        if (!coord) return;

        const container = document.querySelector('#coord-input textarea, #coord-input input');
        if (container) {
            // Native setter so Gradio's change detection sees the value
            const nativeSetter = Object.getOwnPropertyDescriptor(
                window.HTMLInputElement.prototype, 'value'
            )?.set || Object.getOwnPropertyDescriptor(
                window.HTMLTextAreaElement.prototype, 'value'
            )?.set;
            if (nativeSetter) {
                nativeSetter.call(container, coord);
            } else {
                container.value = coord;
            }
            container.dispatchEvent(new Event('input', { bubbles: true }));
            const btn = document.querySelector('#coord-submit');
            if (btn) btn.click();
        }
    });
}
"""
