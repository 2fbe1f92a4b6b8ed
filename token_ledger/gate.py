import logging

from .chain import require_uint
from .errors import TransferRestricted
from .models import RestrictionCode, Role, RESTRICTION_MESSAGES, UNKNOWN_RESTRICTION_MESSAGE

logger = logging.getLogger(__name__)


class TransferGate:
    """
    Whitelist tiers, outbound restrictions and the blacklist.

    An enabled outbound restriction for a (from tier, to tier) pairing only
    lets the transfer through when both parties hold a tier of at least 1.
    """

    def __init__(self, storage, emit, roles):
        self.storage = storage
        self.emit = emit
        self.roles = roles

    def tier_of(self, account: str) -> int:
        return self.storage.whitelist_tiers.get(account, 0)

    def is_blacklisted(self, account: str) -> bool:
        return account in self.storage.blacklist

    def is_outbound_restricted(self, from_tier: int, to_tier: int) -> bool:
        return self.storage.outbound_restrictions.get((from_tier, to_tier), False)

    def set_tier(self, actor: str, account: str, tier: int):
        self.roles.require(Role.WHITELISTER, actor)
        require_uint(tier)
        if tier == 0:
            self.storage.whitelist_tiers.pop(account, None)
            self.emit("RemovedFromWhitelist", account=account, actor=actor)
        else:
            self.storage.whitelist_tiers[account] = tier
            self.emit("AddedToWhitelist", account=account, tier=tier, actor=actor)
        logger.info("Whitelist tier of %s set to %d by %s", account, tier, actor)

    def set_outbound_restriction(self, actor: str, from_tier: int, to_tier: int, enabled: bool):
        self.roles.require(Role.WHITELISTER, actor)
        require_uint(from_tier)
        require_uint(to_tier)
        previous = self.is_outbound_restricted(from_tier, to_tier)
        self.storage.outbound_restrictions[(from_tier, to_tier)] = bool(enabled)
        self.emit(
            "OutboundWhitelistUpdated",
            actor=actor, from_tier=from_tier, to_tier=to_tier,
            previous=previous, enabled=bool(enabled),
        )

    def set_blacklisted(self, actor: str, account: str, blacklisted: bool):
        self.roles.require(Role.BLACKLISTER, actor)
        if blacklisted:
            self.storage.blacklist.add(account)
            self.emit("AddedToBlacklist", account=account, actor=actor)
        else:
            self.storage.blacklist.discard(account)
            self.emit("RemovedFromBlacklist", account=account, actor=actor)
        logger.info("Blacklist flag of %s set to %s by %s", account, bool(blacklisted), actor)

    def check_transfer(self, sender: str, recipient: str, amount: int) -> RestrictionCode:
        if self.is_blacklisted(sender) or self.is_blacklisted(recipient):
            return RestrictionCode.BLACKLIST
        from_tier = self.tier_of(sender)
        to_tier = self.tier_of(recipient)
        if self.is_outbound_restricted(from_tier, to_tier) and not (from_tier >= 1 and to_tier >= 1):
            return RestrictionCode.WHITELIST
        return RestrictionCode.SUCCESS

    def enforce(self, sender: str, recipient: str, amount: int):
        code = self.check_transfer(sender, recipient, amount)
        if not code.allowed:
            raise TransferRestricted(code.message)

    @staticmethod
    def message_for(code: int) -> str:
        try:
            return RESTRICTION_MESSAGES[RestrictionCode(code)]
        except ValueError:
            return UNKNOWN_RESTRICTION_MESSAGE
