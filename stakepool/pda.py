"""Program-derived address computation."""

import hashlib

MAX_SEEDS = 16
MAX_SEED_LEN = 32
PDA_MARKER = b"ProgramDerivedAddress"

_P = 2**255 - 19
_D = (-121665 * pow(121666, _P - 2, _P)) % _P


def is_on_curve(data) -> bool:
    """Return True if the 32 bytes decompress to a point on the ed25519 curve."""
    data = bytes(data)
    if len(data) != 32:
        return False
    y = (int.from_bytes(data, "little") & ((1 << 255) - 1)) % _P
    y2 = y * y % _P
    u = (y2 - 1) % _P
    v = (_D * y2 + 1) % _P
    x2 = u * pow(v, _P - 2, _P) % _P
    return x2 == 0 or pow(x2, (_P - 1) // 2, _P) == 1


def create_program_address(seeds, program_id) -> bytes:
    """Derive an address from seeds; raise ValueError if it lies on the curve."""
    seeds = [bytes(seed) for seed in seeds]
    if len(seeds) > MAX_SEEDS:
        raise ValueError(f"at most {MAX_SEEDS} seeds are allowed")
    if any(len(seed) > MAX_SEED_LEN for seed in seeds):
        raise ValueError(f"a seed may be at most {MAX_SEED_LEN} bytes long")
    digest = hashlib.sha256()
    for seed in seeds:
        digest.update(seed)
    digest.update(bytes(program_id))
    digest.update(PDA_MARKER)
    address = digest.digest()
    if is_on_curve(address):
        raise ValueError("invalid seeds: address must fall off the curve")
    return address


def find_program_address(seeds, program_id) -> tuple[bytes, int]:
    """Return the first off-curve address and its bump, searching from 255 down."""
    seeds = [bytes(seed) for seed in seeds]
    if len(seeds) + 1 > MAX_SEEDS:
        raise ValueError(f"at most {MAX_SEEDS - 1} seeds are allowed besides the bump")
    for bump in range(255, -1, -1):
        try:
            return create_program_address([*seeds, bytes([bump])], program_id), bump
        except ValueError:
            if any(len(seed) > MAX_SEED_LEN for seed in seeds):
                raise
    raise ValueError("unable to find a viable program address bump seed")