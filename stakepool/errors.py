"""Error codes raised by the staking program."""

from enum import IntEnum


class ErrorCode(IntEnum):
    """Custom program error codes; custom codes start at 6000."""

    AMOUNT_ZERO = 6000
    LOCKUP_PERIOD_LESS_THAN_MIN = 6001
    LOCKUP_PERIOD_BIGGER_THAN_MAX = 6002
    INVALID_POOL_OWNER = 6003
    INVALID_STAKE_TOKEN = 6004
    EMISSION_RATE_ZERO = 6005
    REDECLARATION_OF_REWARD_DISTRIBUTOR = 6006

    @property
    def message(self) -> str:
        """Human-readable description of the error."""
        return _MESSAGES[self]


_MESSAGES = {
    ErrorCode.AMOUNT_ZERO: "Amount is zero",
    ErrorCode.LOCKUP_PERIOD_LESS_THAN_MIN: "Lockup period is less than minimum value",
    ErrorCode.LOCKUP_PERIOD_BIGGER_THAN_MAX: "Lockup period is bigger than max value",
    ErrorCode.INVALID_POOL_OWNER: "Invalid pool owner",
    ErrorCode.INVALID_STAKE_TOKEN: "Invalid stake token",
    ErrorCode.EMISSION_RATE_ZERO: "Emission is zero",
    ErrorCode.REDECLARATION_OF_REWARD_DISTRIBUTOR: "Redeclaration of reward distributor",
}


class StakeProgramError(Exception):
    """Raised when an instruction violates one of the program's rules."""

    def __init__(self, code):
        self.code = ErrorCode(code)
        super().__init__(self.code.message)

    @property
    def message(self) -> str:
        return self.code.message