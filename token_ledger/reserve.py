import logging

from .errors import ReserveExceeded

logger = logging.getLogger(__name__)


class ReserveGuard:
    def __init__(self, storage, adapter):
        self.storage = storage
        self.adapter = adapter

    def normalized_reserve(self, oracle_address: str = None) -> int:
        return self.adapter.normalized(oracle_address or self.storage.oracle_address)

    def assert_mint_allowed(self, proposed_new_supply: int):
        reserve = self.normalized_reserve()
        if proposed_new_supply > reserve:
            logger.warning(
                "Mint rejected: supply %d would exceed reserve %d", proposed_new_supply, reserve
            )
            raise ReserveExceeded()

    def assert_oracle_swap_allowed(self, new_oracle_address: str):
        reserve = self.normalized_reserve(new_oracle_address)
        if self.storage.total_supply > reserve:
            logger.warning(
                "Oracle swap to %s rejected: supply %d exceeds its reserve %d",
                new_oracle_address, self.storage.total_supply, reserve,
            )
            raise ReserveExceeded()
