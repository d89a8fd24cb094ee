"""Deterministic clocks and RNG stand-ins shared by the tests."""

ADMIN_USER = "admin"
ADMIN_PASS = "quakerfm"
WEBHOOK_URL = "https://discord.test/api/webhooks/1/abc"


class FakeClock:
    """Millisecond wall clock plus monotonic seconds, both moved by hand."""

    def __init__(self, start_ms: int = 1_700_000_000_000):
        self.ms = start_ms
        self.seconds = 100.0

    def now_ms(self) -> int:
        return self.ms

    def monotonic(self) -> float:
        return self.seconds

    def advance(self, seconds: float) -> None:
        self.ms += int(seconds * 1000)
        self.seconds += seconds


class StubRng:
    """random()/uniform() that return a fixed fraction of their range."""

    def __init__(self, fraction: float):
        self.fraction = fraction

    def random(self) -> float:
        return self.fraction

    def uniform(self, a: float, b: float) -> float:
        return a + (b - a) * self.fraction
