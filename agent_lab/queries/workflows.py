"""Query projections and filters for workflow runs, stages and decisions."""

from __future__ import annotations

import enum
from collections.abc import Mapping
from dataclasses import dataclass, field

from agent_lab.queries.builder import Builder
from agent_lab.queries.projection import Projection
from agent_lab.queries.sort import SortField


class RunStatus(enum.Enum):
    pending = "pending"
    running = "running"
    completed = "completed"
    failed = "failed"
    cancelled = "cancelled"


run_projection = (
    Projection("public", "runs", "r")
    .project("id", "ID")
    .project("workflow_name", "WorkflowName")
    .project("status", "Status")
    .project("params", "Params")
    .project("result", "Result")
    .project("error_message", "ErrorMessage")
    .project("started_at", "StartedAt")
    .project("completed_at", "CompletedAt")
    .project("created_at", "CreatedAt")
    .project("updated_at", "UpdatedAt")
)

stage_projection = (
    Projection("public", "stages", "s")
    .project("id", "ID")
    .project("run_id", "RunID")
    .project("node_name", "NodeName")
    .project("iteration", "Iteration")
    .project("status", "Status")
    .project("input_snapshot", "InputSnapshot")
    .project("output_snapshot", "OutputSnapshot")
    .project("duration_ms", "DurationMs")
    .project("error_message", "ErrorMessage")
    .project("created_at", "CreatedAt")
)

decision_projection = (
    Projection("public", "decisions", "d")
    .project("id", "ID")
    .project("run_id", "RunID")
    .project("from_node", "FromNode")
    .project("to_node", "ToNode")
    .project("predicate_name", "PredicateName")
    .project("predicate_result", "PredicateResult")
    .project("reason", "Reason")
    .project("created_at", "CreatedAt")
)

run_default_sort = SortField("CreatedAt", descending=True)
stage_default_sort = SortField("CreatedAt")
decision_default_sort = SortField("CreatedAt")


def _parse_statuses(raw: str | None) -> tuple[str, ...]:
    if not raw:
        return ()
    known = {status.value for status in RunStatus}
    statuses = []
    for item in raw.split(","):
        item = item.strip().lower()
        if item in known and item not in statuses:
            statuses.append(item)
    return tuple(statuses)


@dataclass(frozen=True)
class RunFilters:
    """Run criteria. ``statuses`` matches any of the listed run states."""

    workflow_name: str | None = None
    statuses: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_query(cls, params: Mapping[str, str]) -> RunFilters:
        return cls(
            workflow_name=params.get("workflow_name") or None,
            statuses=_parse_statuses(params.get("status")),
        )

    def apply(self, builder: Builder) -> Builder:
        return builder.where_equals("WorkflowName", self.workflow_name).where_in(
            "Status", self.statuses
        )


def stages_query(run_id) -> Builder:
    """Builder for the stages of one run in execution order."""
    return Builder(stage_projection, stage_default_sort).where_equals("RunID", str(run_id))


def decisions_query(run_id) -> Builder:
    """Builder for the routing decisions of one run in execution order."""
    return Builder(decision_projection, decision_default_sort).where_equals(
        "RunID", str(run_id)
    )
