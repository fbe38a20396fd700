import pytest

from stakepool.state import (
    DEFAULT_PUBKEY,
    U64_MAX,
    PoolConfig,
    RewardDistributorConfig,
    UserStake,
    account_discriminator,
)

A = bytes([1]) * 32
B = bytes([2]) * 32
C = bytes([3]) * 32


def _pool():
    return PoolConfig(A, B, C, 10, 20, 4, 123, DEFAULT_PUBKEY)


def test_discriminator_shape():
    first = account_discriminator("PoolConfig")
    assert len(first) == 8
    assert first == account_discriminator("PoolConfig")
    assert first != account_discriminator("UserStake")


def test_pool_round_trip():
    pool = _pool()
    data = pool.to_bytes()
    assert len(data) == PoolConfig.LEN
    assert data[:8] == account_discriminator("PoolConfig")
    assert PoolConfig.from_bytes(data) == pool


def test_reward_round_trip():
    config = RewardDistributorConfig(A, B, U64_MAX)
    data = config.to_bytes()
    assert len(data) == RewardDistributorConfig.LEN
    assert RewardDistributorConfig.from_bytes(data) == config


def test_user_stake_round_trip_with_trailing_bytes():
    stake = UserStake(A, B, 5, 15, 3, 100)
    data = stake.to_bytes() + b"\x00\x00"
    assert UserStake.from_bytes(data) == stake


def test_integers_are_little_endian():
    stake = UserStake(A, B, 1, 0, 0, 0)
    data = stake.to_bytes()
    assert data[8 + 64:8 + 72] == b"\x01" + bytes(7)


def test_wrong_discriminator_rejected():
    data = RewardDistributorConfig(A, B, 1).to_bytes()
    with pytest.raises(ValueError):
        UserStake.from_bytes(data + bytes(64))


def test_short_data_rejected():
    data = _pool().to_bytes()
    with pytest.raises(ValueError):
        PoolConfig.from_bytes(data[:-1])


def test_invalid_fields_rejected():
    with pytest.raises(ValueError):
        PoolConfig(A[:31], B, C, 1, 2, 3).to_bytes()
    with pytest.raises(ValueError):
        UserStake(A, B, -1, 0, 0, 0).to_bytes()
    with pytest.raises(ValueError):
        RewardDistributorConfig(A, B, U64_MAX + 1).to_bytes()


def test_weighted_amount():
    stake = UserStake(A, B, 0, 10, 7, 9)
    assert stake.weighted_amount() == stake.amount * stake.weight_multiplier


def test_weighted_amount_overflow():
    stake = UserStake(A, B, 0, 10, 2, U64_MAX)
    with pytest.raises(OverflowError):
        stake.weighted_amount()


def test_pool_defaults():
    pool = PoolConfig(A, B, C, 1, 2, 3)
    assert pool.total_weighted_amount == 0
    assert pool.reward_distributor == DEFAULT_PUBKEY