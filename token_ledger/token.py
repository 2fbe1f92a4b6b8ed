"""
Reserve-backed wrapped token logic (version 1).

Deploy behind a ``TokenProxy`` and call ``initialize`` once through the
proxy. Every public method reads its caller from the current call frame.
"""

import logging
from typing import Any, Union

from .chain import Contract, checked_add, checked_sub, external, require_uint, view
from .errors import AlreadyInitialized, InsufficientAllowance
from .flash import FlashLoanEngine
from .gate import TransferGate
from .ledger import Ledger
from .models import RestrictionCode, Role, TokenConfig
from .oracle import DECIMALS, ReserveOracleAdapter
from .proxy import Proxiable
from .reserve import ReserveGuard
from .roles import RoleRegistry
from .storage import TokenStorage

logger = logging.getLogger(__name__)


class WrappedToken(Proxiable, Contract):
    def create_storage(self):
        return TokenStorage()

    def bind(self):
        self.roles = RoleRegistry(self.storage, self.emit)
        self.gate = TransferGate(self.storage, self.emit, self.roles)
        self.ledger = Ledger(self.storage, self.emit, self.gate)
        self.reserve_guard = ReserveGuard(self.storage, ReserveOracleAdapter(self.call))
        self.flash = FlashLoanEngine(self)

    # Lifecycle

    @external
    def initialize(self, config: Union[TokenConfig, dict]) -> None:
        if self.storage.initialized:
            raise AlreadyInitialized()
        config = TokenConfig.model_validate(config)
        owner = config.initial_supply_recipient
        actor = self.msg.sender

        self.storage.initialized = True
        self.storage.name = config.name
        self.storage.symbol = config.symbol
        self.storage.oracle_address = config.reserve_oracle_address
        self.storage.flash_fee_receiver = owner

        self.roles.grant(Role.OWNER, owner, actor)
        if config.auto_enroll_owner_as_minter:
            self.roles.grant(Role.MINTER, owner, actor)
        if config.auto_enroll_owner_as_whitelister:
            self.roles.grant(Role.WHITELISTER, owner, actor)

        if config.initial_supply:
            self.reserve_guard.assert_mint_allowed(
                checked_add(self.storage.total_supply, config.initial_supply)
            )
            self.ledger.mint(owner, config.initial_supply)
        logger.info(
            "Initialized %s (%s) for %s with supply %d",
            config.name, config.symbol, owner, config.initial_supply,
        )

    @view
    def name(self) -> str:
        return self.storage.name

    @view
    def symbol(self) -> str:
        return self.storage.symbol

    @view
    def decimals(self) -> int:
        return DECIMALS

    # ERC-20

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
    def increase_allowance(self, spender: str, added: int) -> bool:
        owner = self.msg.sender
        self.ledger.approve(owner, spender, checked_add(self.ledger.allowance(owner, spender), added))
        return True

    @external
    def decrease_allowance(self, spender: str, subtracted: int) -> bool:
        owner = self.msg.sender
        current = self.ledger.allowance(owner, spender)
        if current < subtracted:
            raise InsufficientAllowance("ERC20: decreased allowance below zero")
        self.ledger.approve(owner, spender, current - subtracted)
        return True

    @external
    def transfer_from(self, owner: str, to: str, amount: int) -> bool:
        self.ledger.transfer_from(self.msg.sender, owner, to, amount)
        return True

    # Supply

    @external
    def mint(self, to: str, amount: int) -> bool:
        minter = self.msg.sender
        self.roles.require(Role.MINTER, minter)
        self.reserve_guard.assert_mint_allowed(checked_add(self.storage.total_supply, amount))
        self.ledger.mint(to, amount)
        self.emit("Mint", minter=minter, to=to, amount=amount)
        logger.info("%s minted %d to %s", minter, amount, to)
        return True

    @external
    def burn(self, amount: int) -> bool:
        burner = self.msg.sender
        self.ledger.burn(burner, amount)
        self.emit("Burn", burner=burner, amount=amount)
        return True

    @external
    def revoke_to_address(self, from_address: str, to: str, amount: int) -> bool:
        revoker = self.msg.sender
        self.roles.require(Role.REVOKER, revoker)
        self.ledger.move(from_address, to, amount)
        self.emit("RevokeToAddress", revoker=revoker, sender=from_address, to=to, amount=amount)
        logger.info("%s revoked %d from %s to %s", revoker, amount, from_address, to)
        return True

    # Roles

    @external
    def add_role(self, role: Union[Role, str], account: str) -> None:
        self.roles.add_role(self.msg.sender, Role(role), account)

    @external
    def remove_role(self, role: Union[Role, str], account: str) -> None:
        self.roles.remove_role(self.msg.sender, Role(role), account)

    @view
    def is_role(self, role: Union[Role, str], account: str) -> bool:
        return self.roles.is_role(Role(role), account)

    @view
    def roles_of(self, account: str) -> list[Role]:
        return self.roles.roles_of(account)

    @view
    def role_members(self, role: Union[Role, str]) -> list[str]:
        return self.roles.members(Role(role))

    # Transfer gate

    @external
    def set_tier(self, account: str, tier: int) -> None:
        self.gate.set_tier(self.msg.sender, account, tier)

    @view
    def tier_of(self, account: str) -> int:
        return self.gate.tier_of(account)

    @external
    def set_outbound_restriction(self, from_tier: int, to_tier: int, enabled: bool) -> None:
        self.gate.set_outbound_restriction(self.msg.sender, from_tier, to_tier, enabled)

    @view
    def is_outbound_restricted(self, from_tier: int, to_tier: int) -> bool:
        return self.gate.is_outbound_restricted(from_tier, to_tier)

    @external
    def set_blacklisted(self, account: str, blacklisted: bool) -> None:
        self.gate.set_blacklisted(self.msg.sender, account, blacklisted)

    @view
    def is_blacklisted(self, account: str) -> bool:
        return self.gate.is_blacklisted(account)

    @view
    def check_transfer(self, sender: str, recipient: str, amount: int) -> RestrictionCode:
        return self.gate.check_transfer(sender, recipient, amount)

    @view
    def detect_transfer_restriction(self, sender: str, recipient: str, amount: int) -> int:
        return int(self.gate.check_transfer(sender, recipient, amount))

    @view
    def message_for_transfer_restriction(self, code: int) -> str:
        return self.gate.message_for(code)

    # Reserve

    @view
    def oracle_address(self) -> str:
        return self.storage.oracle_address

    @view
    def reserve(self) -> int:
        return self.reserve_guard.normalized_reserve()

    @external
    def update_oracle_address(self, new_oracle_address: str) -> None:
        self.roles.require(Role.OWNER, self.msg.sender)
        self.reserve_guard.assert_oracle_swap_allowed(new_oracle_address)
        previous = self.storage.oracle_address
        self.storage.oracle_address = new_oracle_address
        self.emit("OracleAddressUpdated", previous=previous, newAddress=new_oracle_address)
        logger.info("Reserve oracle changed from %s to %s", previous, new_oracle_address)

    # Flash loans

    @view
    def max_flash_loan(self, token: str) -> int:
        return self.flash.max_flash_loan(token)

    @view
    def flash_fee(self, token: str, amount: int) -> int:
        return self.flash.flash_fee(token, amount)

    @view
    def flash_fee_receiver(self) -> str:
        return self.storage.flash_fee_receiver

    @external
    def flash_loan(self, receiver: str, token: str, amount: int, data: Any = None) -> bool:
        return self.flash.flash_loan(self.msg.sender, receiver, token, amount, data)

    @external
    def set_flash_mint_fee(self, fee: int) -> None:
        self.roles.require(Role.OWNER, self.msg.sender)
        self.storage.flash_mint_fee = require_uint(fee)
        self.emit("FlashMintFeeUpdated", fee=fee, actor=self.msg.sender)

    @external
    def set_flash_fee_receiver(self, receiver: str) -> None:
        self.roles.require(Role.OWNER, self.msg.sender)
        self.storage.flash_fee_receiver = receiver
        self.emit("FlashFeeReceiverUpdated", receiver=receiver, actor=self.msg.sender)

    # Upgrades

    @external
    def update_code_address(self, new_address: str) -> None:
        self.roles.require(Role.OWNER, self.msg.sender)
        self._update_code_address(new_address)

    # Recovery

    @external
    def recover(self, token: str) -> int:
        owner = self.msg.sender
        self.roles.require(Role.OWNER, owner)
        if token == self.address:
            amount = checked_sub(self.ledger.balance_of(self.address), self.storage.escrowed_total)
            self.ledger.transfer(self.address, owner, amount)
        else:
            amount = self.call(token, "balance_of", self.address)
            self.call(token, "transfer", owner, amount)
        logger.info("Recovered %d of token %s to %s", amount, token, owner)
        return amount

    @external
    def withdraw(self) -> int:
        owner = self.msg.sender
        self.roles.require(Role.OWNER, owner)
        amount = self.env.balance_of(self.address)
        self.env.send_value(self.address, owner, amount)
        logger.info("Withdrew %d native units to %s", amount, owner)
        return amount
