import threading


class PageBudget:
    """Global page allowance shared by all branches of one crawl.

    `try_acquire` is an atomic check-and-increment, so concurrent siblings
    cannot jointly overshoot the limit.
    """

    def __init__(self, max_pages: int):
        if max_pages < 1:
            raise ValueError("max_pages must be >= 1")
        self._max_pages = int(max_pages)
        self._used = 0
        self._lock = threading.Lock()

    @property
    def max_pages(self) -> int:
        return self._max_pages

    @property
    def used(self) -> int:
        with self._lock:
            return self._used

    @property
    def remaining(self) -> int:
        with self._lock:
            return self._max_pages - self._used

    @property
    def exhausted(self) -> bool:
        return self.remaining <= 0

    def try_acquire(self) -> bool:
        """Reserve one page; False once the budget is spent."""
        with self._lock:
            if self._used >= self._max_pages:
                return False
            self._used += 1
            return True
