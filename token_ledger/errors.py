from typing import Optional


class ExecutionError(Exception):
    """Raised by the execution environment itself, not by contract logic."""


class UnknownContract(ExecutionError):
    pass


class UnknownMethod(ExecutionError):
    pass


class PaymentRejected(ExecutionError):
    pass


class InsufficientNativeBalance(ExecutionError):
    pass


class TokenError(Exception):
    """
    Base class for every failure raised by token logic.

    ``code`` is stable and meant for tooling to branch on; ``reason`` is the
    human readable revert message.
    """

    code = "TOKEN_ERROR"
    default_reason = "token operation failed"

    def __init__(self, reason: Optional[str] = None):
        self.reason = reason or self.default_reason
        super().__init__(self.reason)


class Unauthorized(TokenError):
    code = "UNAUTHORIZED"
    default_reason = "caller is not authorized"

    @classmethod
    def missing_role(cls, role) -> "Unauthorized":
        name = role.value
        return cls(f"{name}Role: caller does not have the {name} role")


class InsufficientBalance(TokenError):
    code = "INSUFFICIENT_BALANCE"
    default_reason = "ERC20: transfer amount exceeds balance"


class InsufficientAllowance(TokenError):
    code = "INSUFFICIENT_ALLOWANCE"
    default_reason = "ERC20: insufficient allowance"


class TransferRestricted(TokenError):
    code = "TRANSFER_RESTRICTED"
    default_reason = "transfer restricted"


class ReserveExceeded(TokenError):
    code = "RESERVE_EXCEEDED"
    default_reason = "reserve must exceed the total supply"


class ReentrantCall(TokenError):
    code = "REENTRANT_CALL"
    default_reason = "ReentrancyGuard: reentrant call"


class UnsupportedToken(TokenError):
    code = "UNSUPPORTED_TOKEN"
    default_reason = "ERC20FlashMint: wrong token"


class InvalidCallbackReturn(TokenError):
    code = "INVALID_CALLBACK_RETURN"
    default_reason = "ERC20FlashMint: invalid return value"


class IncompatibleLogic(TokenError):
    code = "INCOMPATIBLE_LOGIC"
    default_reason = "Not compatible"


class NullLogicAddress(TokenError):
    code = "NULL_LOGIC_ADDRESS"
    default_reason = "Contract Logic cannot be 0x0"


class AlreadyInitialized(TokenError):
    code = "ALREADY_INITIALIZED"
    default_reason = "Initializable: contract is already initialized"


class Overflow(TokenError):
    code = "OVERFLOW"
    default_reason = "arithmetic operation overflowed"


class Underflow(TokenError):
    code = "UNDERFLOW"
    default_reason = "arithmetic operation underflowed"


class ProposalNotPending(TokenError):
    code = "PROPOSAL_NOT_PENDING"
    default_reason = "Escrow: transfer proposal is not pending"
