"""Per-repository issue state: which issues were emitted and how many comments were seen.

An issue id is present only once its issue entry has been emitted. Counts
and activity times only move forward.
"""

import logging
from datetime import datetime, timedelta

from issuefeed.models import Comment, CommentState, Issue

LOG = logging.getLogger("issuefeed.tracker")

# Upstream "since" filters are inclusive; asking for last_activity + 1s makes them exclusive.
SINCE_RESOLUTION = timedelta(seconds=1)


class IssueStateTracker:
    """CommentState map keyed by platform issue id.

    Written only by the scan of the owning repository.
    """

    def __init__(self) -> None:
        self._states: dict[int, CommentState] = {}

    def __len__(self) -> int:
        return len(self._states)

    def __contains__(self, issue_id: int) -> bool:
        return issue_id in self._states

    def get(self, issue_id: int) -> CommentState | None:
        state = self._states.get(issue_id)
        return state.model_copy() if state is not None else None

    def is_new(self, issue: Issue) -> bool:
        return issue.id not in self._states

    def has_new_comments(self, issue: Issue) -> bool:
        """True when upstream reports more comments than were ingested so far."""
        state = self._states.get(issue.id)
        return state is not None and issue.comments > state.count

    def track_issue(self, issue: Issue) -> CommentState:
        """Start tracking a freshly emitted issue: no comments, active since creation."""
        if issue.id in self._states:
            raise ValueError(f"Issue {issue.id} is already tracked")
        state = CommentState(count=0, last_activity=issue.created_at)
        self._states[issue.id] = state
        LOG.debug("Tracking issue %s (#%s) since %s", issue.id, issue.number, issue.created_at)
        return state.model_copy()

    def since(self, issue_id: int) -> datetime:
        """Exclusive lower bound for the next comment fetch of this issue."""
        return self._states[issue_id].last_activity + SINCE_RESOLUTION

    def record_comment(self, issue_id: int, comment: Comment) -> CommentState:
        """Count an emitted comment and move last_activity forward."""
        state = self._states[issue_id]
        state.count += 1
        if comment.created_at > state.last_activity:
            state.last_activity = comment.created_at
        return state.model_copy()
