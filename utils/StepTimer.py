import logging
from contextlib import contextmanager
from time import perf_counter
from typing import Dict


class StepTimer:
    """Accumulate wall-clock time per pipeline stage."""

    def __init__(self):
        self.durations: Dict[str, float] = {}

    @contextmanager
    def timeit(self, label: str):
        start = perf_counter()
        try:
            yield
        finally:
            self.durations[label] = self.durations.get(label, 0.0) + perf_counter() - start

    def log_summary(self, title: str = "Runtime summary") -> None:
        if not self.durations:
            return
        width = max(len(k) for k in self.durations)
        lines = [f"{k.ljust(width)} : {v:8.3f}s" for k, v in self.durations.items()]
        logging.info("%s\n%s", title, "\n".join(lines))
