"""
In-process execution environment for token contracts.

The environment gives every contract an address, keeps native-currency
balances, dispatches calls with an explicit sender and records events.
Each dispatched call is a frame: all contract storage, native balances and
the event log are snapshotted on entry and restored in place if the frame
raises, so a failure anywhere discards everything the frame did.
"""

import copy
import hashlib
import logging
from dataclasses import dataclass
from types import SimpleNamespace
from typing import Any, Optional

from .errors import (
    InsufficientNativeBalance,
    Overflow,
    PaymentRejected,
    Underflow,
    UnknownContract,
    UnknownMethod,
)
from .models import Event, Receipt

logger = logging.getLogger(__name__)

ZERO_ADDRESS = "0x" + "0" * 40
MAX_UINT256 = 2 ** 256 - 1
DEFAULT_ACCOUNT_BALANCE = 100 * 10 ** 18


def require_uint(value: int) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"expected an integer amount, got {type(value).__name__}")
    if value < 0:
        raise Underflow()
    if value > MAX_UINT256:
        raise Overflow()
    return value


def checked_add(a: int, b: int) -> int:
    result = require_uint(a) + require_uint(b)
    if result > MAX_UINT256:
        raise Overflow()
    return result


def checked_sub(a: int, b: int) -> int:
    result = require_uint(a) - require_uint(b)
    if result < 0:
        raise Underflow()
    return result


def external(fn):
    """Mark a contract method as callable through the environment."""
    fn.__external__ = "transact"
    fn.__payable__ = getattr(fn, "__payable__", False)
    return fn


def payable(fn):
    fn = external(fn)
    fn.__payable__ = True
    return fn


def view(fn):
    fn.__external__ = "view"
    fn.__payable__ = False
    return fn


@dataclass
class Msg:
    sender: str
    value: int = 0


class Contract:
    """
    Base class for anything deployed into an ``Environment``.

    Subclasses keep all mutable state on ``self.storage`` and build helpers
    that read it in ``bind``; a delegated copy (see ``delegate``) rebinds the
    same logic to another contract's address and storage.
    """

    def __init__(self):
        self.env: Optional["Environment"] = None
        self.address: Optional[str] = None
        self.storage = self.create_storage()
        self.bind()

    def create_storage(self):
        return SimpleNamespace()

    def bind(self):
        pass

    @property
    def msg(self) -> Msg:
        return self.env.msg

    def emit(self, name: str, **args):
        self.env.emit(self.address, name, args)

    def call(self, to: str, method: str, *args, value: int = 0):
        return self.env.call(self.address, to, method, *args, value=value)

    def resolve(self, method: str):
        fn = getattr(self, method, None) if not method.startswith("_") else None
        if fn is None or not getattr(fn, "__external__", None):
            raise UnknownMethod(f"{type(self).__name__} has no external method {method!r}")
        return fn

    def delegate(self, host: "Contract") -> "Contract":
        bound = copy.copy(self)
        bound.env = host.env
        bound.address = host.address
        bound.storage = host.storage
        bound.bind()
        return bound


class ContractHandle:
    """
    Caller-side view of a deployed contract.

    Attribute access resolves an external method; view methods return their
    value, state-changing methods return a ``Receipt``.
    """

    def __init__(self, env: "Environment", address: str):
        self.env = env
        self.address = address

    def __getattr__(self, method: str):
        if method.startswith("_"):
            raise AttributeError(method)
        fn = self.env.contract(self.address).resolve(method)
        kind = fn.__external__

        def invoke(*args, sender: Optional[str] = None, value: int = 0):
            sender = sender or self.env.default_sender
            if kind == "view":
                return self.env.call(sender, self.address, method, *args)
            return self.env.transact(sender, self.address, method, *args, value=value)

        invoke.__name__ = method
        return invoke

    def __repr__(self):
        return f"ContractHandle({self.address})"


class Environment:
    def __init__(self, account_count: int = 10):
        self.contracts: dict[str, Contract] = {}
        self.native: dict[str, int] = {}
        self.events: list[Event] = []
        self.accounts: list[str] = [f"0x{index + 1:040x}" for index in range(account_count)]
        for account in self.accounts:
            self.native[account] = DEFAULT_ACCOUNT_BALANCE
        self._frames: list[Msg] = []
        self._nonce = 0

    @property
    def default_sender(self) -> str:
        return self.accounts[0]

    @property
    def msg(self) -> Msg:
        if not self._frames:
            raise RuntimeError("no active call frame")
        return self._frames[-1]

    def deploy(self, contract: Contract) -> str:
        self._nonce += 1
        digest = hashlib.sha256(f"contract:{self._nonce}".encode()).hexdigest()
        address = "0x" + digest[:40]
        contract.env = self
        contract.address = address
        self.contracts[address] = contract
        self.native.setdefault(address, 0)
        logger.debug("Deployed %s at %s", type(contract).__name__, address)
        return address

    def at(self, address: str) -> ContractHandle:
        self.contract(address)
        return ContractHandle(self, address)

    def contract(self, address: str) -> Contract:
        contract = self.contracts.get(address)
        if contract is None:
            raise UnknownContract(f"no contract deployed at {address}")
        return contract

    def is_contract(self, address: str) -> bool:
        return address in self.contracts

    def balance_of(self, address: str) -> int:
        return self.native.get(address, 0)

    def emit(self, address: str, name: str, args: dict):
        self.events.append(Event(name=name, address=address, args=args))

    def call(self, sender: str, to: str, method: str, *args, value: int = 0) -> Any:
        fn = self.contract(to).resolve(method)
        if fn.__external__ == "view":
            self._frames.append(Msg(sender=sender))
            try:
                return fn(*args)
            finally:
                self._frames.pop()

        if value and not fn.__payable__:
            raise PaymentRejected(f"{method!r} does not accept native value")

        snapshot = self._snapshot()
        self._frames.append(Msg(sender=sender, value=value))
        try:
            if value:
                self.move_native(sender, to, value)
            return fn(*args)
        except Exception as exc:
            self._restore(snapshot)
            log = logger.warning if len(self._frames) == 1 else logger.debug
            log("Call %s.%s from %s reverted: %s", to, method, sender, exc)
            raise
        finally:
            self._frames.pop()

    def transact(self, sender: str, to: str, method: str, *args, value: int = 0) -> Receipt:
        start = len(self.events)
        result = self.call(sender, to, method, *args, value=value)
        return Receipt(
            sender=sender, to=to, method=method,
            result=result, events=list(self.events[start:]),
        )

    def send_value(self, sender: str, to: str, value: int) -> Receipt:
        """Plain native payment; contracts must expose a payable ``receive``."""
        if self.is_contract(to):
            try:
                self.contract(to).resolve("receive")
            except UnknownMethod as exc:
                raise PaymentRejected(f"{to} does not accept native payments") from exc
            return self.transact(sender, to, "receive", value=value)
        self.move_native(sender, to, value)
        return Receipt(sender=sender, to=to, method="")

    def move_native(self, sender: str, to: str, value: int):
        """Move native value without invoking the recipient."""
        require_uint(value)
        available = self.native.get(sender, 0)
        if available < value:
            raise InsufficientNativeBalance(
                f"{sender} holds {available}, cannot send {value}"
            )
        self.native[sender] = available - value
        self.native[to] = self.native.get(to, 0) + value

    def _snapshot(self) -> dict:
        return {
            "storage": {
                address: copy.deepcopy(contract.storage.__dict__)
                for address, contract in self.contracts.items()
            },
            "native": dict(self.native),
            "events": len(self.events),
        }

    def _restore(self, snapshot: dict):
        # Restore in place: frames further up the stack still hold these objects.
        for address, state in snapshot["storage"].items():
            storage = self.contracts[address].storage
            storage.__dict__.clear()
            storage.__dict__.update(state)
        self.native.clear()
        self.native.update(snapshot["native"])
        del self.events[snapshot["events"]:]
