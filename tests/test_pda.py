import pytest

from stakepool.pda import create_program_address, find_program_address, is_on_curve

PROGRAM = bytes(range(32))
BASE_POINT = bytes.fromhex("58" + "66" * 31)
IDENTITY = bytes([1]) + bytes(31)


def test_base_point_is_on_curve():
    assert is_on_curve(BASE_POINT) is True


def test_identity_is_on_curve():
    assert is_on_curve(IDENTITY) is True


def test_wrong_length_is_not_on_curve():
    assert is_on_curve(b"\x01" * 31) is False


def test_find_matches_create_and_is_off_curve():
    seeds = [b"pool_config", bytes([7]) * 32]
    address, bump = find_program_address(seeds, PROGRAM)
    assert len(address) == 32
    assert is_on_curve(address) is False
    assert create_program_address([*seeds, bytes([bump])], PROGRAM) == address


def test_find_is_deterministic_and_program_dependent():
    seeds = [b"seed"]
    first = find_program_address(seeds, PROGRAM)
    assert first == find_program_address(seeds, PROGRAM)
    other_program = bytes([9]) * 32
    assert find_program_address(seeds, other_program)[0] != first[0]


def test_higher_bumps_are_on_curve():
    bumps = []
    for index in range(20):
        seeds = [b"s", index.to_bytes(4, "little")]
        _, bump = find_program_address(seeds, PROGRAM)
        bumps.append(bump)
        for higher in range(bump + 1, 256):
            with pytest.raises(ValueError):
                create_program_address([*seeds, bytes([higher])], PROGRAM)
    assert any(bump < 255 for bump in bumps)


def test_too_many_seeds_rejected():
    with pytest.raises(ValueError):
        create_program_address([b"a"] * 17, PROGRAM)
    with pytest.raises(ValueError):
        find_program_address([b"a"] * 16, PROGRAM)


def test_seed_too_long_rejected():
    with pytest.raises(ValueError):
        create_program_address([bytes(33)], PROGRAM)
    with pytest.raises(ValueError):
        find_program_address([bytes(33)], PROGRAM)