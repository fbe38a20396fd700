"""In-memory execution of the staking program's instructions."""

import logging
import time
from dataclasses import dataclass

from .errors import ErrorCode, StakeProgramError
from .pda import find_program_address
from .state import (
    DEFAULT_PUBKEY,
    PUBKEY_LEN,
    U64_MAX,
    PoolConfig,
    RewardDistributorConfig,
    UserStake,
)

logger = logging.getLogger(__name__)

# Basis points: 1 = 0.01%.
BIPS = 10_000

_B58_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"


def _b58decode(text: str) -> bytes:
    number = 0
    for char in text:
        number = number * 58 + _B58_ALPHABET.index(char)
    leading = len(text) - len(text.lstrip("1"))
    return bytes(leading) + number.to_bytes((number.bit_length() + 7) // 8, "big")


PROGRAM_ID = _b58decode("14cNesu4Fnme8M6wqK5GMJWygsXYbQuae4KbyBp9aBNW")


def _checked(value: int) -> int:
    if not 0 <= value <= U64_MAX:
        raise OverflowError("arithmetic overflow")
    return value


def _u64(name: str, value) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= U64_MAX:
        raise ValueError(f"{name} must be an unsigned 64-bit integer")
    return value


def _pubkey(name: str, value) -> bytes:
    key = bytes(value)
    if len(key) != PUBKEY_LEN:
        raise ValueError(f"{name} must be {PUBKEY_LEN} bytes")
    return key


def calculate_user_weight_multiplier(pool_config, user_lockup_period) -> int:
    """Weight multiplier for a lockup, linear between the pool's bounds, in basis points.

    The exact minimum lockup yields 1 and the exact maximum yields the pool's
    maximum multiplier unscaled, as the pool defines them.
    """
    if user_lockup_period == pool_config.min_duration:
        return 1
    if user_lockup_period == pool_config.max_duration:
        return pool_config.max_wight_multiplier
    adjusted = _checked(user_lockup_period - pool_config.min_duration)
    span = _checked(pool_config.max_duration - pool_config.min_duration)
    extra = _checked(
        _checked(_checked(pool_config.max_wight_multiplier - 1) * adjusted) * BIPS
    )
    return _checked(BIPS + extra // span)


@dataclass
class TokenAccount:
    """A token balance held by an owner for one mint."""

    address: bytes
    owner: bytes
    mint: bytes
    amount: int


class StakingProgram:
    """Holds program accounts and executes staking instructions against them."""

    def __init__(self, program_id=PROGRAM_ID, clock=None):
        self.program_id = _pubkey("program_id", program_id)
        self._clock = clock if clock is not None else (lambda: int(time.time()))
        self.accounts: dict[bytes, object] = {}
        self.token_accounts: dict[bytes, TokenAccount] = {}

    def add_token_account(self, address, owner, mint, amount) -> TokenAccount:
        """Register a token account with an initial balance."""
        account = TokenAccount(
            _pubkey("address", address),
            _pubkey("owner", owner),
            _pubkey("mint", mint),
            _u64("amount", amount),
        )
        self.token_accounts[account.address] = account
        return account

    def _pool_seeds(self, pool: PoolConfig) -> list[bytes]:
        return [PoolConfig.SEED_PREFIX, pool.owner, pool.stake_token_mint]

    def _load(self, address, kind):
        account = self.accounts.get(_pubkey("account", address))
        if not isinstance(account, kind):
            raise ValueError(f"{kind.__name__} account is not initialized")
        return account

    def _token_account(self, address) -> TokenAccount:
        account = self.token_accounts.get(_pubkey("token account", address))
        if account is None:
            raise ValueError("token account does not exist")
        return account

    def pool_create(
        self,
        owner,
        stake_token_mint,
        stake_token_vault,
        min_duration,
        max_duration,
        max_wight_multiplier,
    ) -> bytes:
        """Create a pool configuration and return its address."""
        pool = PoolConfig(
            owner=_pubkey("owner", owner),
            stake_token_mint=_pubkey("stake_token_mint", stake_token_mint),
            stake_token_vault=_pubkey("stake_token_vault", stake_token_vault),
            min_duration=_u64("min_duration", min_duration),
            max_duration=_u64("max_duration", max_duration),
            max_wight_multiplier=_u64("max_wight_multiplier", max_wight_multiplier),
            total_weighted_amount=0,
            reward_distributor=DEFAULT_PUBKEY,
        )
        address, _ = find_program_address(self._pool_seeds(pool), self.program_id)
        self.accounts[address] = pool
        return address

    def create_reward_distributor(
        self, pool_owner, pool_config, reward_token_mint, emission_rate
    ) -> bytes:
        """Attach a reward distributor to a pool and return its address."""
        pool_owner = _pubkey("pool_owner", pool_owner)
        pool_address = _pubkey("pool_config", pool_config)
        reward_token_mint = _pubkey("reward_token_mint", reward_token_mint)
        emission_rate = _u64("emission_rate", emission_rate)

        pool = self._load(pool_address, PoolConfig)
        if pool_owner != pool.owner:
            raise StakeProgramError(ErrorCode.INVALID_POOL_OWNER)
        expected, _ = find_program_address(self._pool_seeds(pool), self.program_id)
        if expected != pool_address:
            raise ValueError("pool config seeds constraint violated")
        address, _ = find_program_address(
            [RewardDistributorConfig.SEED_PREFIX, pool_address, reward_token_mint],
            self.program_id,
        )
        if address in self.accounts:
            raise ValueError("reward distributor account already in use")

        if emission_rate == 0:
            raise StakeProgramError(ErrorCode.EMISSION_RATE_ZERO)
        if pool.reward_distributor != DEFAULT_PUBKEY:
            raise StakeProgramError(ErrorCode.REDECLARATION_OF_REWARD_DISTRIBUTOR)

        self.accounts[address] = RewardDistributorConfig(
            pool_config=pool_address,
            reward_token_mint=reward_token_mint,
            emission_rate=emission_rate,
        )
        pool.reward_distributor = address
        return address

    def stake_tokens(
        self, user, pool_config, user_token_account, amount, lockup_period
    ) -> bytes:
        """Lock tokens into the pool's vault and return the user stake address."""
        user = _pubkey("user", user)
        pool_address = _pubkey("pool_config", pool_config)
        amount = _u64("amount", amount)
        lockup_period = _u64("lockup_period", lockup_period)
        pool = self._load(pool_address, PoolConfig)

        if amount == 0:
            raise StakeProgramError(ErrorCode.AMOUNT_ZERO)
        if lockup_period < pool.min_duration:
            raise StakeProgramError(ErrorCode.LOCKUP_PERIOD_LESS_THAN_MIN)
        if lockup_period > pool.max_duration:
            raise StakeProgramError(ErrorCode.LOCKUP_PERIOD_BIGGER_THAN_MAX)

        start = int(self._clock()) % (U64_MAX + 1)
        multiplier = calculate_user_weight_multiplier(pool, lockup_period)
        logger.info("User multiplier: %d", multiplier)

        stake = UserStake(
            owner=user,
            pool_config=pool_address,
            start_time=start,
            end_time=_checked(start + lockup_period),
            weight_multiplier=multiplier,
            amount=amount,
        )

        source = self._token_account(user_token_account)
        destination = self._token_account(pool.stake_token_vault)
        if source.owner != user:
            raise ValueError("token account owner does not match the authority")
        if source.mint != destination.mint:
            raise ValueError("token accounts have different mints")
        if source.amount < amount:
            raise ValueError("insufficient funds")
        _checked(destination.amount + amount)

        address, _ = find_program_address(
            [UserStake.SEED_PREFIX, pool_address, user], self.program_id
        )
        self.accounts[address] = stake
        source.amount -= amount
        destination.amount += amount
        return address