"""Minimal PGN export, built from the stored SAN history only."""

DEFAULT_EVENT = "Chess Game"


def export_pgn(game_id: int, moves_san: list[str], event: str = DEFAULT_EVENT) -> str:
    """
    Header with the game id and unknown players, then numbered move pairs.

    NOTE no result token is written after the moves.
    """
    lines = [
        f'[Event "{event} {game_id}"]\n',
        '[White "?"]\n',
        '[Black "?"]\n',
        "\n",
    ]
    for ply, san in enumerate(moves_san):
        if ply % 2 == 0:
            lines.append(f"{ply // 2 + 1}. {san} ")
        else:
            lines.append(f"{san} ")
    return "".join(lines)
