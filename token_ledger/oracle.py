from .models import ReserveReading

DECIMALS = 18


def normalize_reserve(value: int, decimals: int, target_decimals: int = DECIMALS) -> int:
    """Rescale a reserve reported with ``decimals`` places to ``target_decimals``."""
    if decimals < target_decimals:
        return value * 10 ** (target_decimals - decimals)
    if decimals > target_decimals:
        # Floor division rounds toward -inf; truncate toward zero instead.
        scale = 10 ** (decimals - target_decimals)
        return value // scale if value >= 0 else -((-value) // scale)
    return value


class ReserveOracleAdapter:
    """Reads a reserve feed through the environment using ``call``."""

    def __init__(self, call, target_decimals: int = DECIMALS):
        self.call = call
        self.target_decimals = target_decimals

    def read(self, oracle_address: str) -> ReserveReading:
        _, answer, _, _, _ = self.call(oracle_address, "latest_round_data")
        decimals = self.call(oracle_address, "decimals")
        return ReserveReading(value=answer, decimals=decimals)

    def normalized(self, oracle_address: str) -> int:
        reading = self.read(oracle_address)
        return normalize_reserve(reading.value, reading.decimals, self.target_decimals)
