"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Game (simulation / scoring preconditions)
  2xxx: Leaderboard
  9xxx: System
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- 1xxx: Game ---
# Duration, balance, price and volatility come from configuration, so a
# violation is a server fault rather than a client one.

class InvalidDurationError(AppError):
    def __init__(self, duration: int) -> None:
        super().__init__(1001, f"Round duration must be positive, got {duration}", 500)


class InvalidStartBalanceError(AppError):
    def __init__(self, start_balance: float) -> None:
        super().__init__(1002, f"Start balance must be positive, got {start_balance}", 500)


class InvalidStartPriceError(AppError):
    def __init__(self, symbol: str, start_price: float) -> None:
        super().__init__(
            1003, f"Start price for {symbol} must be positive, got {start_price}", 500
        )


class InvalidVolatilityError(AppError):
    def __init__(self, symbol: str, volatility: float) -> None:
        super().__init__(
            1004, f"Volatility for {symbol} must not be negative, got {volatility}", 500
        )


class InvalidTradesCountError(AppError):
    def __init__(self, trades: int) -> None:
        super().__init__(1005, f"Trades count must not be negative, got {trades}", 422)


# --- 2xxx: Leaderboard ---

class InvalidUsernameError(AppError):
    def __init__(self) -> None:
        super().__init__(2001, "Invalid username", 400)


class ScoreSaveError(AppError):
    def __init__(self) -> None:
        super().__init__(2002, "Failed to save score", 500)


# --- 9xxx: System ---

class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500)


class InvalidRequestError(AppError):
    def __init__(self, detail: str = "Invalid request") -> None:
        super().__init__(9003, detail, 400)
