from .board import Board, has_bit


def render_ascii(board: Board, boxes: int, player: int) -> str:
    """ASCII visualization of a box configuration; parses back to the same level."""
    out_lines = []
    for r in range(board.height):
        row_chars = []
        for c in range(board.width):
            idx = r * board.width + c
            if board.is_outside(idx):
                row_chars.append(' ')
                continue
            if board.is_wall(idx):
                row_chars.append('#')
                continue
            has_goal = board.is_goal(idx)
            if idx == player:
                row_chars.append('+' if has_goal else '@')
            elif has_bit(boxes, idx):
                row_chars.append('*' if has_goal else '$')
            else:
                row_chars.append('.' if has_goal else ' ')
        out_lines.append(''.join(row_chars).rstrip())
    return "\n".join(out_lines)


def render_board(board: Board) -> str:
    return render_ascii(board, board.initial_boxes, board.start)


def render_state(state) -> str:
    return render_ascii(state.board, state.boxes, state.player)
