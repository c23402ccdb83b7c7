"""Visit counting for the static file server."""

import threading

from fastapi.staticfiles import StaticFiles

_INT32_SPAN = 2 ** 32
_INT32_MIN = -(2 ** 31)


class HitCounter:
    """Thread-safe 32-bit visit counter.

    Lives for as long as the app that owns it; nothing is persisted.
    Overflow wraps around like a signed 32-bit integer.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._hits = 0

    def increment(self) -> int:
        with self._lock:
            self._hits = (self._hits + 1 - _INT32_MIN) % _INT32_SPAN + _INT32_MIN
            return self._hits

    @property
    def value(self) -> int:
        with self._lock:
            return self._hits

    def reset(self) -> None:
        with self._lock:
            self._hits = 0


class HitCountingStaticFiles(StaticFiles):
    """StaticFiles that counts every HTTP request it receives."""

    def __init__(self, *, hit_counter: HitCounter, **kwargs) -> None:
        super().__init__(**kwargs)
        self.hit_counter = hit_counter

    async def __call__(self, scope, receive, send) -> None:
        if scope["type"] == "http":
            self.hit_counter.increment()
        await super().__call__(scope, receive, send)


def render_metrics_page(hits: int) -> str:
    return f"""
    <html>
      <body>
        <h1>Welcome, Chirpy Admin</h1>
        <p>Chirpy has been visited {hits} times!</p>
      </body>
    </html>
    """
