"""
Upgrade indirection.

``TokenProxy`` owns the token's storage and forwards every call to the
logic contract its storage points at. Logic contracts are stateless: a call
through the proxy runs the logic against the proxy's address and storage,
so retargeting the pointer swaps behavior while every balance stays put.
"""

import hashlib
import logging

from .chain import ZERO_ADDRESS, Contract, view
from .errors import ExecutionError, IncompatibleLogic, NullLogicAddress
from .storage import TokenStorage

logger = logging.getLogger(__name__)

PROXIABLE_UUID = hashlib.sha3_256(b"PROXIABLE").hexdigest()


class Proxiable:
    """Mixin for logic contracts that can sit behind a ``TokenProxy``."""

    @view
    def proxiable_uuid(self) -> str:
        return PROXIABLE_UUID

    @view
    def get_logic_address(self) -> str:
        return self.storage.logic_address

    def _update_code_address(self, new_address: str):
        # A proxy answers proxiable_uuid through its own logic but cannot be one.
        if new_address == self.address or (
            self.env.is_contract(new_address)
            and isinstance(self.env.contract(new_address), TokenProxy)
        ):
            raise IncompatibleLogic()
        try:
            declared = self.call(new_address, "proxiable_uuid")
        except ExecutionError as exc:
            raise IncompatibleLogic() from exc
        if declared != PROXIABLE_UUID:
            raise IncompatibleLogic()
        self.storage.logic_address = new_address
        self.emit("CodeAddressUpdated", newAddress=new_address)
        logger.info("Token %s now runs logic at %s", self.address, new_address)


class TokenProxy(Contract):
    def __init__(self, logic_address: str):
        if not logic_address or logic_address == ZERO_ADDRESS:
            raise NullLogicAddress()
        super().__init__()
        self.storage.logic_address = logic_address

    def create_storage(self):
        return TokenStorage()

    def resolve(self, method: str):
        logic = self.env.contract(self.storage.logic_address)
        return logic.delegate(self).resolve(method)
