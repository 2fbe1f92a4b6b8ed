"""
Flash minting.

A loan mints the principal to the receiver, calls its ``on_flash_loan``
hook and takes ``amount + fee`` back through the allowance the receiver
granted to the token. The principal is not checked against the reserve; it
must be burned again before the call returns, and the enclosing call frame
reverts everything if any step fails.
"""

import hashlib
import logging
from contextlib import contextmanager

from .chain import MAX_UINT256, ZERO_ADDRESS, checked_add
from .errors import InsufficientAllowance, InvalidCallbackReturn, ReentrantCall, UnsupportedToken

logger = logging.getLogger(__name__)

CALLBACK_SUCCESS = hashlib.sha3_256(b"ERC3156FlashBorrower.onFlashLoan").hexdigest()


@contextmanager
def nonreentrant(storage):
    if storage.flash_lock:
        raise ReentrantCall()
    storage.flash_lock = True
    try:
        yield
    finally:
        storage.flash_lock = False


class FlashLoanEngine:
    def __init__(self, token):
        self.token = token

    @property
    def storage(self):
        return self.token.storage

    def max_flash_loan(self, token_address: str) -> int:
        if token_address != self.token.address:
            return 0
        return MAX_UINT256 - self.storage.total_supply

    def flash_fee(self, token_address: str, amount: int) -> int:
        if token_address != self.token.address:
            raise UnsupportedToken()
        return self.storage.flash_mint_fee

    def flash_loan(self, initiator: str, receiver: str, token_address: str,
                   amount: int, data=None) -> bool:
        ledger = self.token.ledger
        with nonreentrant(self.storage):
            fee = self.flash_fee(token_address, amount)
            repayment = checked_add(amount, fee)
            ledger.mint(receiver, amount)

            ack = self.token.call(receiver, "on_flash_loan", initiator, token_address, amount, fee, data)
            if ack != CALLBACK_SUCCESS:
                raise InvalidCallbackReturn()

            ledger.spend_allowance(
                receiver, self.token.address, repayment,
                InsufficientAllowance("ERC20FlashMint: allowance does not allow refund"),
            )
            fee_receiver = self.storage.flash_fee_receiver
            if fee == 0 or fee_receiver == ZERO_ADDRESS:
                ledger.burn(receiver, repayment)
            else:
                ledger.burn(receiver, amount)
                ledger.transfer(receiver, fee_receiver, fee)

        logger.info("Flash loan of %d to %s repaid with fee %d", amount, receiver, fee)
        return True
