"""
Reserve-backed Wrapped Token Ledger

This package provides:
- A balance ledger with checked uint256 arithmetic
- Owner/Minter/Revoker/Blacklister/Whitelister roles
- Whitelist tiers, outbound restrictions and a blacklist on transfers
- Minting bounded by an oracle-reported reserve
- Atomic flash minting with a reentrancy lock
- Upgradeable logic behind a storage-owning proxy
- An in-process execution environment to run it all
"""

from .chain import (
    MAX_UINT256,
    ZERO_ADDRESS,
    Contract,
    ContractHandle,
    Environment,
)
from .deploy import NAME, SUPPLY, SYMBOL, TokenDeployment, deploy_token
from .escrow import WrappedTokenEscrow
from .flash import CALLBACK_SUCCESS
from .models import (
    Event,
    ProposalStatus,
    Receipt,
    RestrictionCode,
    Role,
    TokenConfig,
)
from .oracle import DECIMALS
from .proxy import PROXIABLE_UUID, TokenProxy
from .token import WrappedToken

__all__ = [
    "MAX_UINT256",
    "ZERO_ADDRESS",
    "Contract",
    "ContractHandle",
    "Environment",
    "NAME",
    "SUPPLY",
    "SYMBOL",
    "TokenDeployment",
    "deploy_token",
    "WrappedTokenEscrow",
    "CALLBACK_SUCCESS",
    "Event",
    "ProposalStatus",
    "Receipt",
    "RestrictionCode",
    "Role",
    "TokenConfig",
    "DECIMALS",
    "PROXIABLE_UUID",
    "TokenProxy",
    "WrappedToken",
]
