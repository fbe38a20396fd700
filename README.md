# stakepool

`stakepool` models a token staking pool in memory. A pool owner creates a pool
for one stake token, with a minimum and a maximum lockup period and a maximum
weight multiplier. Users stake tokens for a lockup period of their choice:
longer lockups earn a larger weight multiplier. A pool owner may attach one
reward distributor, which records a reward token and an emission rate per
second.

Accounts are addressed the way program-derived addresses are: SHA-256 over the
seeds, a bump byte, the program id and the marker `ProgramDerivedAddress`,
taking the first bump (from 255 down) whose result does not lie on the ed25519
curve. Account state serialises to and from bytes with an 8-byte discriminator
in front of it.

The package has no third-party dependencies.

## Installation

```
pip install .
```

For the tests:

```
pip install ".[test]"
pytest
```

## Usage

```python
from stakepool.program import StakingProgram
from stakepool.errors import ErrorCode, StakeProgramError

program = StakingProgram(program_id=bytes(32), clock=lambda: 1_700_000_000)

owner = bytes([1]) * 32
user = bytes([2]) * 32
stake_mint = bytes([3]) * 32
vault = bytes([4]) * 32
user_tokens = bytes([5]) * 32
reward_mint = bytes([6]) * 32

program.add_token_account(vault, owner, stake_mint, 0)
program.add_token_account(user_tokens, user, stake_mint, 1_000)

pool = program.pool_create(owner, stake_mint, vault,
                           min_duration=60, max_duration=3_600,
                           max_wight_multiplier=4)

distributor = program.create_reward_distributor(owner, pool, reward_mint,
                                                emission_rate=10)

stake = program.stake_tokens(user, pool, user_tokens,
                             amount=500, lockup_period=3_600)

print(program.accounts[stake])          # UserStake(...)
print(program.token_accounts[vault].amount)  # 500
```

Public keys are 32-byte values. `StakingProgram(program_id, clock)` takes the
program id used for address derivation (a built-in id by default) and a
callable returning the current Unix time (the system clock by default).
Created accounts are kept in `program.accounts`, keyed by address; token
balances are `TokenAccount` entries in `program.token_accounts`.

- `pool_create(...)` stores a `PoolConfig` at the address derived from
  `b"pool_config"`, the owner and the stake mint, and returns that address.
- `create_reward_distributor(pool_owner, pool_config, reward_token_mint,
  emission_rate)` checks that the caller owns the pool, stores a
  `RewardDistributorConfig` at the address derived from `b"reward_config"`,
  the pool and the reward mint, records it in the pool and returns its address.
- `stake_tokens(user, pool_config, user_token_account, amount, lockup_period)`
  records a `UserStake` at the address derived from `b"user_stake"`, the pool
  and the user, with start and end time taken from the clock, and moves the
  amount from the user's token account into the pool vault. A second stake by
  the same user in the same pool replaces the first record.

Rule violations raise `StakeProgramError`, whose `code` is a member of
`ErrorCode` and whose `message` describes it:

```python
try:
    program.stake_tokens(user, pool, user_tokens, amount=0, lockup_period=60)
except StakeProgramError as err:
    assert err.code is ErrorCode.AMOUNT_ZERO
```

The codes are `AMOUNT_ZERO`, `LOCKUP_PERIOD_LESS_THAN_MIN`,
`LOCKUP_PERIOD_BIGGER_THAN_MAX`, `INVALID_POOL_OWNER`, `INVALID_STAKE_TOKEN`,
`EMISSION_RATE_ZERO` and `REDECLARATION_OF_REWARD_DISTRIBUTOR`, numbered from
6000. Other failures raise `ValueError`: malformed keys or amounts, accounts
that do not exist or are already in use, a token account not owned by the
user, mismatched mints and insufficient funds. Arithmetic beyond 64 bits raises
`OverflowError`. The computed multiplier is logged at INFO level on the
`stakepool.program` logger.

### Weight multiplier

`calculate_user_weight_multiplier(pool_config, lockup_period)` returns `1` for
a lockup of exactly the pool's minimum, the pool's `max_wight_multiplier` for
exactly its maximum, and otherwise a value in basis points (`BIPS` = 10,000 =
1x) that rises linearly between the two:
`10_000 + (max_wight_multiplier - 1) * (lockup - min) * 10_000 // (max - min)`.

### State

`stakepool.state` holds the dataclasses `PoolConfig`,
`RewardDistributorConfig` and `UserStake`, each with `to_bytes()`,
`from_bytes(data)`, `LEN` and `SEED_PREFIX`. `account_discriminator(name)`
gives the 8-byte prefix (the first bytes of SHA-256 of `account:<name>`).
`UserStake.weighted_amount()` is the staked amount times its weight
multiplier.

`stakepool.pda` provides `create_program_address`, `find_program_address` and
`is_on_curve`.

## Limitations

- There is no unstake instruction: staked tokens stay in the vault.
- Rewards are not accrued or paid out; a reward distributor only records its
  mint and emission rate. `PoolConfig.total_weighted_amount` stays at 0.
- All state lives in memory in a `StakingProgram` instance; nothing is
  persisted, and there is no command-line interface.