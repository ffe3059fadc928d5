"""
Game notation for Othello (PGN-like format).

Format example:
```
[Event "Casual Game"]
[Date "2026.10.19"]
[Black "Human"]
[White "Minimax depth 4"]
[Score "38-26"]
[Result "1-0"]

1. d3 c5 2. f6 f5 3. e6 e3 ...
1-0
```

Squares use file letters a-h for columns and ranks 1-8 for rows, with
rank 1 on the top row. Search paths use the "row:col" form instead
(e.g. "2:3" is d3).
"""

from __future__ import annotations
import re
from datetime import date
from dataclasses import dataclass, field
from typing import Optional

from .bitboard import (
    BLACK, WHITE, COLOR_NAMES,
    sq_to_algebraic, algebraic_to_sq, sq_to_rowcol, rowcol_to_sq, is_valid_sq
)
from .state import BoardState, winner, resolve, is_legal_move
from .moves import game_status

Coord = tuple[int, int]

RESULT_BLACK_WIN = "1-0"
RESULT_WHITE_WIN = "0-1"
RESULT_DRAW = "1/2-1/2"
RESULT_ONGOING = "*"


def coord_to_key(coord: Coord) -> str:
    """(2, 3) -> '2:3'."""
    return f"{coord[0]}:{coord[1]}"


def key_to_coord(key: str) -> Coord:
    """'2:3' -> (2, 3)."""
    parts = key.strip().split(':')
    if len(parts) != 2:
        raise ValueError(f"Invalid coordinate key: {key!r}")
    return int(parts[0]), int(parts[1])


def coord_to_algebraic(coord: Coord) -> str:
    """(2, 3) -> 'd3'."""
    return sq_to_algebraic(rowcol_to_sq(*coord))


def algebraic_to_coord(s: str) -> Coord:
    return sq_to_rowcol(algebraic_to_sq(s))


def parse_coord(s: str) -> Coord:
    """Accept either 'd3' or '2:3'."""
    s = s.strip()
    if ':' in s:
        coord = key_to_coord(s)
        if not is_valid_sq(*coord):
            raise ValueError(f"Coordinate off the board: {s!r}")
        return coord
    return algebraic_to_coord(s)


def result_for(state: BoardState) -> str:
    """Result tag for a position: '*' while the side to move can play."""
    if game_status(state) is None:
        return RESULT_ONGOING
    won = winner(state)
    if won == BLACK:
        return RESULT_BLACK_WIN
    if won == WHITE:
        return RESULT_WHITE_WIN
    return RESULT_DRAW


@dataclass
class GameRecord:
    """Record of a complete or in-progress game."""

    # Metadata (PGN-style tags)
    event: str = "Othello Game"
    date: str = field(default_factory=lambda: date.today().strftime("%Y.%m.%d"))
    black: str = "Black"
    white: str = "White"
    result: str = RESULT_ONGOING

    # Move history as (color, row, col)
    moves: list[tuple[int, int, int]] = field(default_factory=list)

    @classmethod
    def from_history(
        cls,
        history: list[tuple[int, int, int]],
        final_state: Optional[BoardState] = None,
        **metadata
    ) -> GameRecord:
        """Create a record from a move history."""
        record = cls(**metadata)
        record.moves = list(history)
        if final_state is None:
            final_state = record.replay()
        record.result = result_for(final_state)
        return record

    def to_text(self) -> str:
        """Export to PGN-like format."""
        final_state = self.replay()
        lines = [
            f'[Event "{self.event}"]',
            f'[Date "{self.date}"]',
            f'[Black "{self.black}"]',
            f'[White "{self.white}"]',
            f'[Score "{final_state.black}-{final_state.white}"]',
            f'[Result "{self.result}"]',
            '',
        ]

        # Word wrap at 80 chars
        wrapped = []
        current_line = ""
        for word in self._format_moves().split():
            if len(current_line) + len(word) + 1 > 80:
                wrapped.append(current_line)
                current_line = word
            else:
                current_line = f"{current_line} {word}".strip()
        if current_line:
            wrapped.append(current_line)
        lines.extend(wrapped)

        if self.result != RESULT_ONGOING:
            lines.append(self.result)

        return '\n'.join(lines)

    def _format_moves(self) -> str:
        parts = []
        move_num = 1
        for color, row, col in self.moves:
            alg = coord_to_algebraic((row, col))
            if color == BLACK:
                parts.append(f"{move_num}. {alg}")
            else:
                parts.append(alg)
                move_num += 1
        return ' '.join(parts)

    def history_lines(self) -> list[str]:
        """One 'B: r:c' line per move, as printed by the game client."""
        return [
            f"{COLOR_NAMES[color][0]}: {coord_to_key((row, col))}"
            for color, row, col in self.moves
        ]

    @classmethod
    def from_text(cls, text: str) -> GameRecord:
        """Parse PGN-like text. Raises ValueError for unplayable moves."""
        record = cls()

        tag_pattern = r'\[(\w+)\s+"([^"]*)"\]'
        for match in re.finditer(tag_pattern, text):
            tag, value = match.groups()
            tag_lower = tag.lower()
            if tag_lower == 'event':
                record.event = value
            elif tag_lower == 'date':
                record.date = value
            elif tag_lower == 'black':
                record.black = value
            elif tag_lower == 'white':
                record.white = value
            elif tag_lower == 'result':
                record.result = value

        move_text = re.sub(tag_pattern, '', text)
        move_text = re.sub(r'\s*(1-0|0-1|1/2-1/2|\*)\s*$', '', move_text)

        state = BoardState.new_game()
        for token in move_text.split():
            if re.match(r'^\d+\.$', token):
                continue
            row, col = parse_coord(token)
            if not is_legal_move(row, col, state):
                raise ValueError(f"Illegal move in record: {token}")
            record.moves.append((state.turn, row, col))
            state = resolve(row, col, state)

        return record

    def replay(self) -> BoardState:
        """Replay all moves from the opening and return the final state."""
        state = BoardState.new_game()
        for color, row, col in self.moves:
            if color != state.turn or not is_legal_move(row, col, state):
                raise ValueError(
                    f"Cannot replay {COLOR_NAMES[color]} {coord_to_algebraic((row, col))}"
                )
            state = resolve(row, col, state)
        return state


def history_to_text(history: list[tuple[int, int, int]], **metadata) -> str:
    """Convert a move history to PGN-like notation."""
    return GameRecord.from_history(history, **metadata).to_text()


def text_to_game(text: str) -> BoardState:
    """Parse notation and return the resulting position."""
    return GameRecord.from_text(text).replay()
