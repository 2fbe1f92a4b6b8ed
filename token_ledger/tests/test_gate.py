"""
Unit Tests for the transfer gate

Tests cover:
1. Blacklisting senders and recipients
2. Whitelist tiers and outbound restrictions
3. Restriction codes and messages
4. Role gating of gate configuration
"""

import pytest

from token_ledger.chain import Environment
from token_ledger.deploy import deploy_token
from token_ledger.errors import TransferRestricted, Unauthorized
from token_ledger.models import RestrictionCode, Role


BLACKLIST_MESSAGE = "The transfer was restricted due to black list configuration."
WHITELIST_MESSAGE = "The transfer was restricted due to white list configuration."


def setup_gate():
    env = Environment()
    deployment = deploy_token(env, auto_enroll_owner_as_whitelister=True)
    deployment.token.add_role(Role.BLACKLISTER, env.accounts[0])
    return env, deployment.token


class TestBlacklist:
    """Tests for blacklisted parties."""

    def test_blacklisted_sender_cannot_transfer(self):
        env, token = setup_gate()
        owner, holder = env.accounts[0], env.accounts[2]
        token.transfer(holder, 100)

        token.set_blacklisted(holder, True)

        with pytest.raises(TransferRestricted) as exc_info:
            token.transfer(env.accounts[3], 10, sender=holder)
        assert str(exc_info.value) == BLACKLIST_MESSAGE
        assert token.balance_of(holder) == 100

    def test_blacklisted_recipient_cannot_receive(self):
        env, token = setup_gate()
        recipient = env.accounts[2]

        token.set_blacklisted(recipient, True)

        with pytest.raises(TransferRestricted):
            token.transfer(recipient, 10)
        assert token.balance_of(recipient) == 0

    def test_rejected_regardless_of_balance(self):
        env, token = setup_gate()
        empty = env.accounts[6]

        token.set_blacklisted(empty, True)

        # Gate is consulted before the balance check
        with pytest.raises(TransferRestricted):
            token.transfer(env.accounts[3], 10 ** 30, sender=empty)

    def test_unblacklisting_restores_transfers(self):
        env, token = setup_gate()
        recipient = env.accounts[2]

        token.set_blacklisted(recipient, True)
        assert token.is_blacklisted(recipient) is True
        token.set_blacklisted(recipient, False)

        token.transfer(recipient, 10)
        assert token.balance_of(recipient) == 10

    def test_transfer_from_is_gated(self):
        env, token = setup_gate()
        owner, spender, recipient = env.accounts[0], env.accounts[1], env.accounts[2]

        token.approve(spender, 50, sender=owner)
        token.set_blacklisted(recipient, True)

        with pytest.raises(TransferRestricted):
            token.transfer_from(owner, recipient, 50, sender=spender)
        assert token.allowance(owner, spender) == 50

    def test_non_blacklister_cannot_blacklist(self):
        env, token = setup_gate()

        with pytest.raises(Unauthorized) as exc_info:
            token.set_blacklisted(env.accounts[2], True, sender=env.accounts[3])

        assert str(exc_info.value) == "BlacklisterRole: caller does not have the Blacklister role"


class TestWhitelist:
    """Tests for tiers and outbound restrictions."""

    def test_unrestricted_by_default(self):
        env, token = setup_gate()
        recipient = env.accounts[2]

        token.set_tier(recipient, 1)
        token.transfer(recipient, 10)

        assert token.balance_of(recipient) == 10

    def test_restricted_pairing_requires_tiered_counterparts(self):
        env, token = setup_gate()
        owner, tiered = env.accounts[0], env.accounts[2]

        token.set_tier(tiered, 1)
        token.set_outbound_restriction(0, 1, True)

        with pytest.raises(TransferRestricted) as exc_info:
            token.transfer(tiered, 10, sender=owner)
        assert str(exc_info.value) == WHITELIST_MESSAGE

        # Once the owner holds a tier the pairing is (1, 1), which is unrestricted
        token.set_tier(owner, 1)
        token.transfer(tiered, 10, sender=owner)
        assert token.balance_of(tiered) == 10

    def test_tiered_account_restricted_from_untiered(self):
        env, token = setup_gate()
        tiered, untiered = env.accounts[2], env.accounts[3]

        token.set_tier(tiered, 2)
        token.transfer(tiered, 10)
        token.set_outbound_restriction(2, 0, True)

        with pytest.raises(TransferRestricted):
            token.transfer(untiered, 5, sender=tiered)

        token.set_outbound_restriction(2, 0, False)
        token.transfer(untiered, 5, sender=tiered)
        assert token.balance_of(untiered) == 5

    def test_enabled_pairing_between_tiers_passes(self):
        env, token = setup_gate()
        a, b = env.accounts[2], env.accounts[3]

        token.set_tier(a, 1)
        token.set_tier(b, 1)
        token.set_outbound_restriction(1, 1, True)
        token.transfer(a, 10)

        token.transfer(b, 10, sender=a)

        assert token.balance_of(b) == 10
        assert token.is_outbound_restricted(1, 1) is True

    def test_removing_tier(self):
        env, token = setup_gate()
        account = env.accounts[2]

        token.set_tier(account, 3)
        assert token.tier_of(account) == 3

        receipt = token.set_tier(account, 0)

        assert token.tier_of(account) == 0
        assert receipt.events_named("RemovedFromWhitelist")

    def test_non_whitelister_cannot_configure(self):
        env, token = setup_gate()
        outsider = env.accounts[4]

        with pytest.raises(Unauthorized) as exc_info:
            token.set_tier(env.accounts[2], 1, sender=outsider)
        assert str(exc_info.value) == "WhitelisterRole: caller does not have the Whitelister role"

        with pytest.raises(Unauthorized):
            token.set_outbound_restriction(1, 1, True, sender=outsider)


class TestRestrictionCodes:
    """Tests for detect_transfer_restriction and its messages."""

    def test_codes(self):
        env, token = setup_gate()
        owner, tiered, blocked = env.accounts[0], env.accounts[2], env.accounts[3]

        token.set_tier(tiered, 1)
        token.set_outbound_restriction(0, 1, True)
        token.set_blacklisted(blocked, True)

        assert token.detect_transfer_restriction(owner, env.accounts[5], 1) == 0
        assert token.detect_transfer_restriction(owner, tiered, 1) == 1
        assert token.detect_transfer_restriction(owner, blocked, 1) == 2
        assert token.check_transfer(owner, blocked, 1) is RestrictionCode.BLACKLIST

    def test_messages(self):
        env, token = setup_gate()

        assert token.message_for_transfer_restriction(0) == "SUCCESS"
        assert token.message_for_transfer_restriction(1) == WHITELIST_MESSAGE
        assert token.message_for_transfer_restriction(2) == BLACKLIST_MESSAGE
        assert token.message_for_transfer_restriction(99) == "UNKNOWN ERROR CODE"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
