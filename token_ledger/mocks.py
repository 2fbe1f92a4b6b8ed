"""
In-process stand-ins for the token's external collaborators: a reserve
feed, a plain external token, flash-loan borrowers and a helper that
force-sends native currency.
"""

from .chain import Contract, external, payable, view
from .errors import UnsupportedToken
from .flash import CALLBACK_SUCCESS
from .ledger import Ledger
from .storage import TokenStorage


class MockReserveFeed(Contract):
    """Reserve feed answering ``latest_round_data`` like a price aggregator."""

    def __init__(self, decimals: int, answer: int):
        super().__init__()
        self.storage.decimals = decimals
        self.storage.answer = answer
        self.storage.round_id = 1

    @view
    def decimals(self) -> int:
        return self.storage.decimals

    @view
    def latest_answer(self) -> int:
        return self.storage.answer

    @view
    def latest_round_data(self) -> tuple[int, int, int, int, int]:
        round_id = self.storage.round_id
        return round_id, self.storage.answer, 0, 0, round_id

    @external
    def update_answer(self, answer: int) -> None:
        self.storage.answer = answer
        self.storage.round_id += 1


class ERC20Mock(Contract):
    def __init__(self, holder: str, initial_balance: int):
        super().__init__()
        self.ledger.mint(holder, initial_balance)

    def create_storage(self):
        return TokenStorage()

    def bind(self):
        self.ledger = Ledger(self.storage, self.emit)

    def emit(self, name: str, **args):
        # Constructor mints run before deployment.
        if self.env is not None:
            super().emit(name, **args)

    @view
    def total_supply(self) -> int:
        return self.ledger.total_supply()

    @view
    def balance_of(self, account: str) -> int:
        return self.ledger.balance_of(account)

    @view
    def allowance(self, owner: str, spender: str) -> int:
        return self.ledger.allowance(owner, spender)

    @external
    def transfer(self, to: str, amount: int) -> bool:
        self.ledger.transfer(self.msg.sender, to, amount)
        return True

    @external
    def approve(self, spender: str, amount: int) -> bool:
        self.ledger.approve(self.msg.sender, spender, amount)
        return True

    @external
    def transfer_from(self, owner: str, to: str, amount: int) -> bool:
        self.ledger.transfer_from(self.msg.sender, owner, to, amount)
        return True


class FlashBorrowerMock(Contract):
    """
    Well-behaved borrower whose acknowledgement and approval can be switched
    off. ``data`` may carry a ``(method, *args)`` call the borrower makes on
    the token while it holds the loan.
    """

    def __init__(self, enable_return: bool = True, enable_approve: bool = True):
        super().__init__()
        self.storage.enable_return = enable_return
        self.storage.enable_approve = enable_approve

    @external
    def on_flash_loan(self, initiator: str, token: str, amount: int, fee: int, data=None):
        if self.msg.sender != token:
            raise UnsupportedToken("FlashBorrower: callback not sent by the loaned token")

        self.emit("BalanceOf", token=token, account=self.address,
                  value=self.call(token, "balance_of", self.address))
        self.emit("TotalSupply", token=token, value=self.call(token, "total_supply"))

        if data:
            method, *args = data
            self.call(token, method, *args)
        if self.storage.enable_approve:
            self.call(token, "approve", token, amount + fee)
        return CALLBACK_SUCCESS if self.storage.enable_return else None


class FlashBorrowerReentrancy(Contract):
    """Borrower that tries to take a second loan from inside the callback."""

    @external
    def on_flash_loan(self, initiator: str, token: str, amount: int, fee: int, data=None):
        self.call(token, "flash_loan", self.address, token, amount, data)
        return CALLBACK_SUCCESS


class Sender(Contract):
    """Accepts native currency and force-sends all of it, bypassing ``receive``."""

    @payable
    def receive(self) -> None:
        pass

    @external
    def send(self, target: str) -> int:
        amount = self.env.balance_of(self.address)
        self.env.move_native(self.address, target, amount)
        return amount
