from concurrent.futures import Future, as_completed
from typing import Callable, Iterator, Mapping


class CompletionBarrier:
    """Counts outstanding chapter tasks and reports progress as they finish.

    Only the main flow arrives at the barrier, so no locking is needed.
    """

    def __init__(self, total: int, progress_fn: Callable[[float, str], None]):
        if total < 0:
            raise ValueError("total must not be negative")
        self.total = total
        self.outstanding = total
        self.progress_fn = progress_fn

    @property
    def finished(self) -> int:
        return self.total - self.outstanding

    @property
    def done(self) -> bool:
        return self.outstanding == 0

    def arrive(self, label: str = "") -> int:
        if self.outstanding == 0:
            raise RuntimeError("more completions than launched tasks")
        self.outstanding -= 1
        text = f"Finished {self.finished}/{self.total}"
        if label:
            text += f": {label[:60]}"
        self.progress_fn(self.finished / self.total, text)
        return self.outstanding

    def drain(self, future_map: Mapping[Future, str]) -> Iterator[Future]:
        """Yield futures in completion order, counting each one once the caller is done with it.

        ``future_map`` maps every launched future to a label for progress
        reporting. If the caller stops early (a fatal error), the remaining
        futures are never counted and ``done`` stays false.
        """
        for future in as_completed(future_map):
            yield future
            self.arrive(future_map[future])
