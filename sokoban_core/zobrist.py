import random


class Zobrist:
    """Zobrist keys for search states of one board.

    For a fixed board we generate:
      - a key for a box on each playable cell
      - a key for the canonical player cell (smallest reachable cell)
    Walls/goals are not included in the hash (they are fixed for the level).
    The box part is maintained incrementally: one push XORs two keys.
    """
    def __init__(self, size: int, cells: int, seed: int = 12345) -> None:
        rng = random.Random(seed)
        self.size = size
        self.player_keys = [0] * size
        self.box_keys = [0] * size
        for idx in range(size):
            if (cells >> idx) & 1:
                self.player_keys[idx] = rng.getrandbits(64)
                self.box_keys[idx] = rng.getrandbits(64)

    def box_hash(self, boxes: int) -> int:
        h = 0
        idx = 0
        while boxes:
            if boxes & 1:
                h ^= self.box_keys[idx]
            boxes >>= 1
            idx += 1
        return h

    def moved(self, box_hash: int, src: int, dst: int) -> int:
        return box_hash ^ self.box_keys[src] ^ self.box_keys[dst]

    def state_hash(self, box_hash: int, canonical: int) -> int:
        return box_hash ^ self.player_keys[canonical]
