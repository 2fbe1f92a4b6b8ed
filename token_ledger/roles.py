import logging

from .errors import Unauthorized
from .models import Role

logger = logging.getLogger(__name__)


class RoleRegistry:
    """Named account sets; only Owners may change membership of any set."""

    def __init__(self, storage, emit):
        self.storage = storage
        self.emit = emit

    def is_role(self, role: Role, account: str) -> bool:
        return account in self.storage.roles[Role(role)]

    def members(self, role: Role) -> list[str]:
        return sorted(self.storage.roles[Role(role)])

    def roles_of(self, account: str) -> list[Role]:
        return [role for role in Role if account in self.storage.roles[role]]

    def require(self, role: Role, account: str):
        role = Role(role)
        if not self.is_role(role, account):
            raise Unauthorized.missing_role(role)

    def add_role(self, actor: str, role: Role, account: str):
        self.require(Role.OWNER, actor)
        self.grant(Role(role), account, actor)

    def remove_role(self, actor: str, role: Role, account: str):
        role = Role(role)
        self.require(Role.OWNER, actor)
        if role is Role.OWNER and self.storage.roles[role] == {account}:
            raise Unauthorized("OwnerRole: cannot remove the last owner")
        self.storage.roles[role].discard(account)
        self.emit(f"{role.value}Removed", account=account, actor=actor)
        logger.info("%s role removed from %s by %s", role.value, account, actor)

    def grant(self, role: Role, account: str, actor: str):
        """Add without an authorization check; used while bootstrapping."""
        self.storage.roles[role].add(account)
        self.emit(f"{role.value}Added", account=account, actor=actor)
        logger.info("%s role granted to %s by %s", role.value, account, actor)
