"""Board fixtures shared by the tests."""

# Four T-tetrominoes tiling a 4x4 block, as (anchor, rotation) relative to the block corner:
#   A A A B
#   C A B B
#   C C D B
#   C D D D
T_BLOCK_4X4 = [
    ((0, 1), 180),
    ((1, 3), 270),
    ((2, 0), 90),
    ((3, 2), 0),
]


def domino_rows(rows, cols):
    """Anchors of horizontal dominoes covering an even-width grid row by row."""
    return [(r, c) for r in range(rows) for c in range(0, cols, 2)]


def t_tiling(size):
    """(anchor, rotation) of T-tetrominoes tiling a size x size grid, size a multiple of 4."""
    placements = []
    for br in range(0, size, 4):
        for bc in range(0, size, 4):
            for (r, c), rotation in T_BLOCK_4X4:
                placements.append(((br + r, bc + c), rotation))
    return placements


def place_with_rotation(session, kind, anchor, rotation):
    session.select_type(kind)
    for _ in range(4):
        if session.active_rotation == rotation:
            break
        session.rotate()
    return session.place(anchor)
