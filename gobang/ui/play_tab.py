"""Play tab: human vs engine with an interactive SVG board."""

from __future__ import annotations

import logging
import random as _random
from dataclasses import dataclass, field
from typing import Optional

import gradio as gr

from gobang.engine.state import (
    EngineState,
    apply_move,
    choose_move,
    new_game,
    undo_move,
)
from gobang.game.board import format_point, parse_coordinate
from gobang.game.errors import GomokuError, NoLegalMoves
from gobang.game.types import Player
from gobang.ui.board_component import overlay_message, render_board_svg

logger = logging.getLogger(__name__)

# Deeper searches take tens of seconds per reply on 15x15
DEPTH_CHOICES = [1, 2, 3]
DEFAULT_DEPTH = 2


@dataclass
class GameSession:
    """Per-tab game state held in gr.State."""

    state: EngineState = field(default_factory=new_game)
    human_player: Player = Player.BLACK
    depth: int = DEFAULT_DEPTH

    def reset(self, human_player: Optional[Player] = None) -> None:
        # Keep the random fingerprint table; only the game itself starts over
        self.state = new_game(self.state.board.size, hasher=self.state.hasher)
        if human_player is not None:
            self.human_player = human_player

    @property
    def status_text(self) -> str:
        s = self.state
        if s.is_over:
            if s.winner is not None:
                who = "You win!" if s.winner is self.human_player else "AI wins!"
                return f"Game over: {who} ({s.winner} by 5-in-a-row)"
            return "Game over: Draw!"
        if s.side_to_move is self.human_player:
            return f"Your turn ({s.side_to_move})"
        return f"AI is thinking... ({s.side_to_move})"

    @property
    def move_history_table(self) -> list[list[str]]:
        return [
            [str(i + 1), str(m.player), format_point(m.point)]
            for i, m in enumerate(self.state.moves)
        ]


def _make_board_html(session: GameSession) -> str:
    clickable = (
        not session.state.is_over
        and session.state.side_to_move is session.human_player
    )
    return render_board_svg(
        session.state,
        clickable=clickable,
        game_over_message=overlay_message(session.state, session.human_player),
    )


def _outputs(session: GameSession, status: Optional[str] = None):
    return (
        _make_board_html(session),
        status if status is not None else session.status_text,
        session.move_history_table,
        session,
    )


def _engine_reply(session: GameSession) -> Optional[str]:
    """Let the engine move if it is its turn. Returns a status override, if any."""
    s = session.state
    if s.is_over or s.side_to_move is session.human_player:
        return None
    try:
        move = choose_move(s, search_depth=session.depth)
    except NoLegalMoves:
        return "No moves left: draw."
    apply_move(s, move.point)
    return None


def _apply_human_move(coord_text: str, session: GameSession):
    """Process a human move, then let the engine respond."""
    if session.state.is_over:
        return _outputs(session) + ("",)

    point = parse_coordinate(coord_text, session.state.board.size)
    if point is None:
        return _outputs(session, f"Invalid coordinate: '{coord_text}'. Use format like H8.") + ("",)

    try:
        apply_move(session.state, point)
    except GomokuError as exc:
        return _outputs(session, str(exc)) + ("",)

    status = _engine_reply(session)
    return _outputs(session, status) + ("",)


def _new_game_with_color(color_choice: str, depth: int, session: GameSession):
    """Start a new game. color_choice is 'Black', 'White', or 'Random'."""
    if color_choice == "Random":
        human = _random.choice([Player.BLACK, Player.WHITE])
    elif color_choice == "White":
        human = Player.WHITE
    else:
        human = Player.BLACK

    session.depth = int(depth)
    session.reset(human_player=human)
    logger.info("human plays %s, engine depth %d", human, session.depth)

    # Black always opens; if that's the engine, it moves now
    _engine_reply(session)
    return _outputs(session) + (f"You are {human}.",)


def _undo_move(session: GameSession):
    """Undo the last move pair (engine + human)."""
    if not session.state.moves:
        return _outputs(session, "Nothing to undo.")

    last = session.state.last_move
    if last is not None and last.player is not session.human_player:
        undo_move(session.state)  # engine's reply
    if session.state.moves:
        undo_move(session.state)  # human's move
    # The engine may be left to move if it opened the game
    _engine_reply(session)
    return _outputs(session)


def build_play_tab() -> None:
    """Construct the Play tab UI inside a gr.Blocks context."""

    session_state = gr.State(GameSession())

    with gr.Row():
        with gr.Column(scale=3):
            board_html = gr.HTML(value=render_board_svg(new_game()), label="Board")
        with gr.Column(scale=1):
            status_text = gr.Textbox(
                value="Your turn (Black)",
                label="Status",
                interactive=False,
                lines=2,
            )
            color_info = gr.Textbox(
                value="You are Black.",
                label="Color",
                interactive=False,
                lines=1,
            )

            gr.Markdown("### New Game")
            color_choice = gr.Radio(
                choices=["Random", "Black", "White"],
                value="Black",
                label="Play as",
            )
            depth_choice = gr.Dropdown(
                choices=DEPTH_CHOICES,
                value=DEFAULT_DEPTH,
                label="Search depth",
            )
            new_game_btn = gr.Button("New Game", variant="primary")
            undo_btn = gr.Button("Undo")

            gr.Markdown("### Enter Move")
            coord_input = gr.Textbox(
                label="Coordinate (e.g. H8)",
                placeholder="H8",
                elem_id="coord-input",
                lines=1,
            )
            coord_submit = gr.Button("Submit Move", elem_id="coord-submit")

            gr.Markdown("### Move History")
            move_table = gr.Dataframe(
                headers=["#", "Player", "Move"],
                datatype=["number", "str", "str"],
                interactive=False,
                column_count=3,
            )

    board_outputs = [board_html, status_text, move_table, session_state]

    coord_submit.click(
        fn=_apply_human_move,
        inputs=[coord_input, session_state],
        outputs=board_outputs + [coord_input],
    )
    new_game_btn.click(
        fn=_new_game_with_color,
        inputs=[color_choice, depth_choice, session_state],
        outputs=board_outputs + [color_info],
    )
    undo_btn.click(
        fn=_undo_move,
        inputs=[session_state],
        outputs=board_outputs,
    )
