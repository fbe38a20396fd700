"""In-memory token staking pool with lockup-weighted stakes and reward distributors."""

__version__ = "0.1.0"
__all__ = ["errors", "pda", "state", "program"]