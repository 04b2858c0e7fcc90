"""Output contracts for advisor responses and consensus results."""

from conductor.shared.contracts.advisor_response import AdvisorResponseV1, ResponsePriority
from conductor.shared.contracts.consensus_output import ConsensusResultV1, RecommendationRecord

__all__ = ["AdvisorResponseV1", "ResponsePriority", "ConsensusResultV1", "RecommendationRecord"]
