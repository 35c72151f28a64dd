from .expiry import ExpirySweeper, SweeperState

__all__ = [
    "ExpirySweeper",
    "SweeperState",
]
