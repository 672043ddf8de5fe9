"""Board model definitions for sf32-toolkit."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Board:
    slug: str
    description: str
    chip: str


def chip_for_model(slug: str) -> str:
    """Chip name passed to sftool -c, e.g. sf32lb52-lcd_n16r8 -> SF32LB52."""
    return slug.split("-", 1)[0].upper()


BOARDS: dict[str, Board] = {}


def _register(slug: str, description: str) -> Board:
    board = Board(slug=slug, description=description, chip=chip_for_model(slug))
    BOARDS[slug] = board
    return board


_register("sf32lb52-lcd_n16r8", "SF32LB52 LCD dev board (16MB NOR, 8MB PSRAM)")
_register("sf32lb52-audio_board", "SF32LB52 audio dev board")
_register("sf32wb52-eval_board", "SF32WB52 evaluation board")


def custom_board(slug: str) -> Board:
    return Board(slug=slug, description="Custom board", chip=chip_for_model(slug))


def list_boards(custom_models: list[str] | None = None) -> list[Board]:
    """Return the built-in boards followed by any custom models not already listed."""
    boards = list(BOARDS.values())
    seen = {b.slug for b in boards}
    for slug in custom_models or []:
        if slug not in seen:
            boards.append(custom_board(slug))
            seen.add(slug)
    return boards


def get_board(slug: str, custom_models: list[str] | None = None) -> Board | None:
    for b in list_boards(custom_models):
        if b.slug == slug:
            return b
    return None


def resolve_board(slug: str, custom_models: list[str] | None = None) -> Board:
    """Return the registered board, or a custom one for an unlisted model."""
    return get_board(slug, custom_models) or custom_board(slug)
