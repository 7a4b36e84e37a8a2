"""Query projections and filters for workflow profiles and their stages."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from agent_lab.queries.builder import Builder
from agent_lab.queries.projection import Projection
from agent_lab.queries.sort import SortField

projection = (
    Projection("public", "profiles", "p")
    .project("id", "ID")
    .project("workflow_name", "WorkflowName")
    .project("name", "Name")
    .project("description", "Description")
    .project("created_at", "CreatedAt")
    .project("updated_at", "UpdatedAt")
)

stage_projection = (
    Projection("public", "profile_stages", "ps")
    .project("profile_id", "ProfileID")
    .project("stage_name", "StageName")
    .project("agent_id", "AgentID")
    .project("system_prompt", "SystemPrompt")
    .project("options", "Options")
)

default_sort = SortField("Name")
stage_default_sort = SortField("StageName")

search_fields = ("Name",)


@dataclass(frozen=True)
class ProfileFilters:
    workflow_name: str | None = None

    @classmethod
    def from_query(cls, params: Mapping[str, str]) -> ProfileFilters:
        return cls(workflow_name=params.get("workflow_name") or None)

    def apply(self, builder: Builder) -> Builder:
        return builder.where_equals("WorkflowName", self.workflow_name)


def stages_query(profile_id) -> Builder:
    """Builder for every stage of one profile, ordered by stage name."""
    return Builder(stage_projection, stage_default_sort).where_equals(
        "ProfileID", str(profile_id)
    )
