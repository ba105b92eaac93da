"""Tile distance on the square tribes grid."""


def chebyshev_distance(x1: int, y1: int, x2: int, y2: int) -> int:
    """Steps a unit needs to walk from (x1, y1) to (x2, y2) on open ground.

    Every one of the 8 surrounding tiles is one step away, so the
    larger of the two axis offsets wins. Attack range, village spacing
    and capital water clearance are all measured with it.

    chebyshev_distance(4, 4, 6, 5) is 2: an archer on (4, 4) can hit (6, 5).
    """
    return max(abs(x2 - x1), abs(y2 - y1))
