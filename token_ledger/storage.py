from typing import Optional

from .chain import ZERO_ADDRESS
from .models import Role


class TokenStorage:
    """
    Persistent state of a token, owned by the proxy.

    Every logic version reads and writes this one layout, so fields are only
    ever appended. Helpers must go through the attributes on each access:
    a reverted call frame replaces the attribute values in place.
    """

    def __init__(self, logic_address: Optional[str] = None):
        self.logic_address = logic_address
        self.initialized = False
        self.name = ""
        self.symbol = ""

        self.balances: dict[str, int] = {}
        self.allowances: dict[str, dict[str, int]] = {}
        self.total_supply = 0

        self.roles: dict[Role, set[str]] = {role: set() for role in Role}

        self.whitelist_tiers: dict[str, int] = {}
        self.outbound_restrictions: dict[tuple[int, int], bool] = {}
        self.blacklist: set[str] = set()

        self.oracle_address = ZERO_ADDRESS

        self.flash_mint_fee = 0
        self.flash_fee_receiver = ZERO_ADDRESS
        self.flash_lock = False

        self.transfer_proposals: list[dict] = []
        # Held on the token's own address on behalf of pending proposals.
        self.escrowed_total = 0
