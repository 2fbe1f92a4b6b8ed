from dataclasses import dataclass
from typing import Optional

from .chain import ContractHandle, Environment
from .mocks import MockReserveFeed
from .models import TokenConfig
from .oracle import DECIMALS
from .proxy import TokenProxy
from .token import WrappedToken

NAME = "Wrapped Token"
SYMBOL = "WTOK"
# 50 billion whole tokens.
SUPPLY = 10 ** DECIMALS * 50 * 1_000_000_000


@dataclass
class TokenDeployment:
    env: Environment
    feed: str
    logic: str
    proxy: str
    token: ContractHandle


def deploy_token(
    env: Environment,
    owner: Optional[str] = None,
    *,
    name: str = NAME,
    symbol: str = SYMBOL,
    initial_supply: int = SUPPLY // 100,
    reserve: int = SUPPLY,
    reserve_decimals: int = DECIMALS,
    auto_enroll_owner_as_minter: bool = True,
    auto_enroll_owner_as_whitelister: bool = False,
    logic_cls=WrappedToken,
) -> TokenDeployment:
    """Deploy a reserve feed, the token logic and a proxy, then initialize."""
    owner = owner or env.default_sender
    feed = env.deploy(MockReserveFeed(reserve_decimals, reserve))
    logic = env.deploy(logic_cls())
    proxy = env.deploy(TokenProxy(logic))
    token = env.at(proxy)
    token.initialize(
        TokenConfig(
            initial_supply_recipient=owner,
            name=name,
            symbol=symbol,
            initial_supply=initial_supply,
            reserve_oracle_address=feed,
            auto_enroll_owner_as_minter=auto_enroll_owner_as_minter,
            auto_enroll_owner_as_whitelister=auto_enroll_owner_as_whitelister,
        ),
        sender=owner,
    )
    return TokenDeployment(env=env, feed=feed, logic=logic, proxy=proxy, token=token)
