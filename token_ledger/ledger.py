from typing import Optional

from .chain import MAX_UINT256, ZERO_ADDRESS, checked_add, checked_sub, require_uint
from .errors import InsufficientAllowance, InsufficientBalance


class Ledger:
    """
    Balances, allowances and total supply with checked uint256 arithmetic.

    ``mint``/``burn``/``move`` are primitives with no authorization; callers
    decide who may reach them. ``transfer`` and ``transfer_from`` consult the
    transfer gate when one is configured.
    """

    def __init__(self, storage, emit, gate=None):
        self.storage = storage
        self.emit = emit
        self.gate = gate

    def balance_of(self, account: str) -> int:
        return self.storage.balances.get(account, 0)

    def total_supply(self) -> int:
        return self.storage.total_supply

    def allowance(self, owner: str, spender: str) -> int:
        return self.storage.allowances.get(owner, {}).get(spender, 0)

    def mint(self, to: str, amount: int):
        require_uint(amount)
        new_supply = checked_add(self.storage.total_supply, amount)
        new_balance = checked_add(self.balance_of(to), amount)
        self.storage.total_supply = new_supply
        self.storage.balances[to] = new_balance
        self.emit("Transfer", sender=ZERO_ADDRESS, recipient=to, value=amount)

    def burn(self, account: str, amount: int):
        require_uint(amount)
        balance = self.balance_of(account)
        if balance < amount:
            raise InsufficientBalance("ERC20: burn amount exceeds balance")
        self._set_balance(account, balance - amount)
        self.storage.total_supply = checked_sub(self.storage.total_supply, amount)
        self.emit("Transfer", sender=account, recipient=ZERO_ADDRESS, value=amount)

    def move(self, sender: str, recipient: str, amount: int):
        require_uint(amount)
        balance = self.balance_of(sender)
        if balance < amount:
            raise InsufficientBalance("ERC20: transfer amount exceeds balance")
        self._set_balance(sender, balance - amount)
        self.storage.balances[recipient] = checked_add(self.balance_of(recipient), amount)
        self.emit("Transfer", sender=sender, recipient=recipient, value=amount)

    def transfer(self, sender: str, recipient: str, amount: int):
        if self.gate is not None:
            self.gate.enforce(sender, recipient, amount)
        self.move(sender, recipient, amount)

    def approve(self, owner: str, spender: str, amount: int):
        require_uint(amount)
        self.storage.allowances.setdefault(owner, {})[spender] = amount
        self.emit("Approval", owner=owner, spender=spender, value=amount)

    def spend_allowance(self, owner: str, spender: str, amount: int,
                        error: Optional[Exception] = None):
        current = self.allowance(owner, spender)
        if current == MAX_UINT256:
            return
        if current < amount:
            raise error or InsufficientAllowance()
        self.approve(owner, spender, current - amount)

    def transfer_from(self, spender: str, owner: str, recipient: str, amount: int):
        if self.gate is not None:
            self.gate.enforce(owner, recipient, amount)
        self.spend_allowance(owner, spender, amount)
        self.move(owner, recipient, amount)

    def _set_balance(self, account: str, value: int):
        if value:
            self.storage.balances[account] = value
        else:
            self.storage.balances.pop(account, None)
