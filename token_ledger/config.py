import os
from typing import Optional

from pydantic import BaseModel, Field

from .deploy import NAME, SUPPLY, SYMBOL
from .oracle import DECIMALS


def _flag(value: Optional[str], default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Settings(BaseModel):
    token_name: str = NAME
    token_symbol: str = SYMBOL
    initial_supply: int = Field(default=SUPPLY // 100, ge=0)
    reserve: int = SUPPLY
    reserve_decimals: int = Field(default=DECIMALS, ge=0)
    auto_enroll_owner_as_minter: bool = True
    auto_enroll_owner_as_whitelister: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        defaults = cls()
        return cls(
            token_name=os.getenv("TOKEN_NAME", defaults.token_name),
            token_symbol=os.getenv("TOKEN_SYMBOL", defaults.token_symbol),
            initial_supply=int(os.getenv("TOKEN_INITIAL_SUPPLY", defaults.initial_supply)),
            reserve=int(os.getenv("TOKEN_RESERVE", defaults.reserve)),
            reserve_decimals=int(os.getenv("TOKEN_RESERVE_DECIMALS", defaults.reserve_decimals)),
            auto_enroll_owner_as_minter=_flag(
                os.getenv("TOKEN_AUTO_MINTER"), defaults.auto_enroll_owner_as_minter
            ),
            auto_enroll_owner_as_whitelister=_flag(
                os.getenv("TOKEN_AUTO_WHITELISTER"), defaults.auto_enroll_owner_as_whitelister
            ),
            log_level=os.getenv("LOG_LEVEL", defaults.log_level),
        )
