from abc import ABC, abstractmethod

from pydantic import BaseModel


class RateLimitResult(BaseModel):
    """Outcome of a single rate-limit check"""

    allowed: bool
    remaining: int
    reset_time: float  # epoch seconds at which the current window ends


class RateLimiter(ABC):
    """Fixed-window request counter keyed by client identity"""

    @abstractmethod
    def hit(self, key: str, max_requests: int, window_seconds: float) -> RateLimitResult:
        """Count one request for key and decide whether it is allowed"""
        pass

    @abstractmethod
    def reset(self) -> None:
        """Forget every tracked key"""
        pass
