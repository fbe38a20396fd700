"""Account state stored by the staking program and its binary layout."""

import hashlib
import struct
from dataclasses import astuple, dataclass, fields
from typing import ClassVar

PUBKEY_LEN = 32
DISCRIMINATOR_LEN = 8
DEFAULT_PUBKEY = bytes(PUBKEY_LEN)
U64_MAX = 2**64 - 1

_POOL_LAYOUT = struct.Struct("<32s32s32sQQQQ32s")
_REWARD_LAYOUT = struct.Struct("<32s32sQ")
_STAKE_LAYOUT = struct.Struct("<32s32sQQQQ")


def account_discriminator(name) -> bytes:
    """The 8-byte prefix identifying an account type by its name."""
    return hashlib.sha256(f"account:{name}".encode()).digest()[:DISCRIMINATOR_LEN]


def _pack(account, layout: struct.Struct) -> bytes:
    values = astuple(account)
    for field, value in zip(fields(account), values):
        if isinstance(value, (bytes, bytearray)):
            if len(value) != PUBKEY_LEN:
                raise ValueError(f"{field.name} must be {PUBKEY_LEN} bytes")
        elif not isinstance(value, int) or not 0 <= value <= U64_MAX:
            raise ValueError(f"{field.name} must be an unsigned 64-bit integer")
    return account_discriminator(type(account).__name__) + layout.pack(*values)


def _unpack(cls, layout: struct.Struct, data):
    data = bytes(data)
    if len(data) < DISCRIMINATOR_LEN + layout.size:
        raise ValueError(f"{cls.__name__} data is too short")
    if data[:DISCRIMINATOR_LEN] != account_discriminator(cls.__name__):
        raise ValueError(f"account discriminator does not match {cls.__name__}")
    return cls(*layout.unpack_from(data, DISCRIMINATOR_LEN))


@dataclass
class PoolConfig:
    """Configuration of one staking pool."""

    owner: bytes
    stake_token_mint: bytes
    stake_token_vault: bytes
    min_duration: int
    max_duration: int
    max_wight_multiplier: int
    total_weighted_amount: int = 0
    reward_distributor: bytes = DEFAULT_PUBKEY

    LEN: ClassVar[int] = DISCRIMINATOR_LEN + _POOL_LAYOUT.size
    SEED_PREFIX: ClassVar[bytes] = b"pool_config"

    def to_bytes(self) -> bytes:
        return _pack(self, _POOL_LAYOUT)

    @classmethod
    def from_bytes(cls, data) -> "PoolConfig":
        return _unpack(cls, _POOL_LAYOUT, data)


@dataclass
class RewardDistributorConfig:
    """Reward emission settings attached to a pool; emission rate is per second."""

    pool_config: bytes
    reward_token_mint: bytes
    emission_rate: int

    LEN: ClassVar[int] = DISCRIMINATOR_LEN + _REWARD_LAYOUT.size
    SEED_PREFIX: ClassVar[bytes] = b"reward_config"

    def to_bytes(self) -> bytes:
        return _pack(self, _REWARD_LAYOUT)

    @classmethod
    def from_bytes(cls, data) -> "RewardDistributorConfig":
        return _unpack(cls, _REWARD_LAYOUT, data)


@dataclass
class UserStake:
    """A user's locked deposit in a pool."""

    owner: bytes
    pool_config: bytes
    start_time: int
    end_time: int
    weight_multiplier: int
    amount: int

    LEN: ClassVar[int] = DISCRIMINATOR_LEN + _STAKE_LAYOUT.size
    SEED_PREFIX: ClassVar[bytes] = b"user_stake"

    def weighted_amount(self) -> int:
        """Staked amount scaled by the weight multiplier."""
        result = self.amount * self.weight_multiplier
        if result > U64_MAX:
            raise OverflowError("weighted amount exceeds 64 bits")
        return result

    def to_bytes(self) -> bytes:
        return _pack(self, _STAKE_LAYOUT)

    @classmethod
    def from_bytes(cls, data) -> "UserStake":
        return _unpack(cls, _STAKE_LAYOUT, data)