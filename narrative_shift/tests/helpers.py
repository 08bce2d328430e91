"""Shared constants and builders for the NarrativeShift test-suite."""

from narrative_shift.config.settings import RefundPolicy, Settings

# 2025-10-09T08:53:20Z
T0 = 1_760_000_000
DAY = 86400

ALICE = "a1" * 32
BOB = "b0" * 32
TREASURY = "7e" * 32
OTHER_TREASURY = "0f" * 32

TIER_A = 100_000_000
TIER_B = 300_000_000


class FixedClock:
    """Network clock that only moves when told to."""

    def __init__(self, now: int):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, seconds: int) -> None:
        self.now += seconds


def make_settings(**overrides) -> Settings:
    values = dict(
        TREASURY_IDENTITY=TREASURY,
        TIER_A_PRICE=TIER_A,
        TIER_B_PRICE=TIER_B,
        TIER_BOUNDARY_DAYS=30,
        CANCELLATION_REFUND_POLICY=RefundPolicy.NONE,
        LEDGER_AIRDROP_ENABLED=False,
    )
    values.update(overrides)
    return Settings(_env_file=None, **values)
