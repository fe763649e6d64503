# ABOUTME: Mutation flows behind every user-initiated write.
# ABOUTME: Exports the optimistic routine and the post, reaction, follow, and delete flows.

from oneword.mutations.deletion import DeletePostFlow, DeleteState
from oneword.mutations.follows import FollowState, FollowToggle
from oneword.mutations.optimistic import InFlightGuard, run_optimistic
from oneword.mutations.posting import PostWordFlow
from oneword.mutations.reactions import ReactionState, ReactionToggle
from oneword.mutations.results import MutationResult, MutationStatus

__all__ = [
    "DeletePostFlow",
    "DeleteState",
    "FollowState",
    "FollowToggle",
    "InFlightGuard",
    "MutationResult",
    "MutationStatus",
    "PostWordFlow",
    "ReactionState",
    "ReactionToggle",
    "run_optimistic",
]
