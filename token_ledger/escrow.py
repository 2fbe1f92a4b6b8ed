import logging

from .chain import checked_add, checked_sub, external, view
from .errors import ProposalNotPending
from .models import ProposalStatus, Role, TransferProposal
from .token import WrappedToken

logger = logging.getLogger(__name__)


class WrappedTokenEscrow(WrappedToken):
    """
    Upgrade target where ``transfer`` only proposes a transfer.

    Proposed funds are parked on the token's own address until an Escrower
    approves (released to the recipient) or rejects (returned to the sender)
    the proposal.
    """

    @external
    def transfer(self, to: str, amount: int) -> bool:
        sender = self.msg.sender
        self.gate.enforce(sender, to, amount)
        self.ledger.move(sender, self.address, amount)
        self.storage.escrowed_total = checked_add(self.storage.escrowed_total, amount)

        index = len(self.storage.transfer_proposals)
        self.storage.transfer_proposals.append({
            "index": index,
            "sender": sender,
            "recipient": to,
            "amount": amount,
            "status": ProposalStatus.PENDING,
        })
        self.emit("TransferProposalCreated", index=index, sender=sender, to=to, amount=amount)
        return True

    @external
    def approve_transfer_proposal(self, index: int) -> None:
        proposal = self._pending_proposal(index)
        self.storage.escrowed_total = checked_sub(self.storage.escrowed_total, proposal["amount"])
        self.ledger.move(self.address, proposal["recipient"], proposal["amount"])
        proposal["status"] = ProposalStatus.APPROVED
        self.emit("TransferProposalApproved", index=index, approver=self.msg.sender)
        logger.info("Transfer proposal %d approved by %s", index, self.msg.sender)

    @external
    def reject_transfer_proposal(self, index: int) -> None:
        proposal = self._pending_proposal(index)
        self.storage.escrowed_total = checked_sub(self.storage.escrowed_total, proposal["amount"])
        self.ledger.move(self.address, proposal["sender"], proposal["amount"])
        proposal["status"] = ProposalStatus.REJECTED
        self.emit("TransferProposalRejected", index=index, rejecter=self.msg.sender)
        logger.info("Transfer proposal %d rejected by %s", index, self.msg.sender)

    @view
    def transfer_proposal(self, index: int) -> TransferProposal:
        return TransferProposal(**self._proposal(index))

    @view
    def transfer_proposal_count(self) -> int:
        return len(self.storage.transfer_proposals)

    def _proposal(self, index: int) -> dict:
        if not 0 <= index < len(self.storage.transfer_proposals):
            raise ProposalNotPending(f"Escrow: no transfer proposal at index {index}")
        return self.storage.transfer_proposals[index]

    def _pending_proposal(self, index: int) -> dict:
        self.roles.require(Role.ESCROWER, self.msg.sender)
        proposal = self._proposal(index)
        if proposal["status"] != ProposalStatus.PENDING:
            raise ProposalNotPending()
        return proposal
