"""Interface for throttling outbound API calls."""

import abc


class RateLimiter(abc.ABC):
    """Abstract Base Class for rate limiters shared by concurrent callers."""

    @abc.abstractmethod
    def acquire(self) -> None:
        """Blocks the calling thread until a request is permitted.

        Never fails and never hands a permit back; it can only delay.
        """
        pass
