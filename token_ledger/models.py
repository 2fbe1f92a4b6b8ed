from enum import Enum, IntEnum
from typing import Any, Optional
from pydantic import BaseModel, Field, ConfigDict


class Role(str, Enum):
    OWNER = "Owner"
    MINTER = "Minter"
    REVOKER = "Revoker"
    BLACKLISTER = "Blacklister"
    WHITELISTER = "Whitelister"
    # Only consulted by the escrow logic version.
    ESCROWER = "Escrower"


class RestrictionCode(IntEnum):
    SUCCESS = 0
    WHITELIST = 1
    BLACKLIST = 2

    @property
    def allowed(self) -> bool:
        return self is RestrictionCode.SUCCESS

    @property
    def message(self) -> str:
        return RESTRICTION_MESSAGES[self]


RESTRICTION_MESSAGES = {
    RestrictionCode.SUCCESS: "SUCCESS",
    RestrictionCode.WHITELIST: "The transfer was restricted due to white list configuration.",
    RestrictionCode.BLACKLIST: "The transfer was restricted due to black list configuration.",
}

UNKNOWN_RESTRICTION_MESSAGE = "UNKNOWN ERROR CODE"


class ProposalStatus(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class TokenConfig(BaseModel):
    """Options accepted once by ``initialize``."""

    initial_supply_recipient: str
    name: str
    symbol: str
    initial_supply: int = Field(default=0, ge=0)
    reserve_oracle_address: str
    auto_enroll_owner_as_minter: bool = False
    auto_enroll_owner_as_whitelister: bool = False

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "initial_supply_recipient": "0x0000000000000000000000000000000000000001",
            "name": "Wrapped Token",
            "symbol": "WTOK",
            "initial_supply": 500000000000000000000000000,
            "reserve_oracle_address": "0x9f2c6a1b5d0e4f3a2b1c0d9e8f7a6b5c4d3e2f1a",
            "auto_enroll_owner_as_minter": True,
            "auto_enroll_owner_as_whitelister": False,
        }
    })


class ReserveReading(BaseModel):
    value: int
    decimals: int = Field(..., ge=0)


class Event(BaseModel):
    name: str
    address: str
    args: dict[str, Any] = Field(default_factory=dict)


class Receipt(BaseModel):
    sender: str
    to: str
    method: str
    result: Any = None
    events: list[Event] = Field(default_factory=list)

    def events_named(self, name: str) -> list[Event]:
        return [e for e in self.events if e.name == name]


class TransferProposal(BaseModel):
    index: int
    sender: str
    recipient: str
    amount: int
    status: ProposalStatus

    model_config = ConfigDict(from_attributes=True)


# HTTP surface

class MintRequest(BaseModel):
    sender: str = Field(..., description="Account submitting the call")
    to: str
    amount: int = Field(..., ge=0)


class BurnRequest(BaseModel):
    sender: str
    amount: int = Field(..., ge=0)


class TransferRequest(BaseModel):
    sender: str
    to: str
    amount: int = Field(..., ge=0)


class RevokeRequest(BaseModel):
    sender: str
    from_address: str
    to: str
    amount: int = Field(..., ge=0)


class RoleChangeRequest(BaseModel):
    sender: str
    account: str


class TierRequest(BaseModel):
    sender: str
    account: str
    tier: int = Field(..., ge=0)


class OutboundRestrictionRequest(BaseModel):
    sender: str
    from_tier: int = Field(..., ge=0)
    to_tier: int = Field(..., ge=0)
    enabled: bool


class BlacklistRequest(BaseModel):
    sender: str
    account: str
    blacklisted: bool


class TokenInfo(BaseModel):
    address: str
    logic_address: str
    name: str
    symbol: str
    decimals: int
    total_supply: int
    reserve: int
    oracle_address: str


class BalanceResponse(BaseModel):
    address: str
    balance: int


class RolesResponse(BaseModel):
    address: str
    roles: list[Role]


class TransferCheckResponse(BaseModel):
    code: int
    message: str
    allowed: bool


class FlashInfoResponse(BaseModel):
    token: str
    value: int


class TxResponse(BaseModel):
    method: str
    result: Optional[Any] = None
    events: list[Event]
    message: str
