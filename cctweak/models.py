"""Pydantic models for cctweak settings and patch run results.

The settings models mirror the persisted ``config.json`` record, which uses
camelCase keys (``ccVersion``, ``changesApplied``, ...).  Python code uses the
snake_case attribute names; ``model_dump(by_alias=True)`` produces the
on-disk shape.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, PositiveInt, field_validator
from pydantic.alias_generators import to_camel

FORMAT_PLACEHOLDER = "{}"


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Theme(_CamelModel):
    """A named colour table selectable inside the host application."""

    name: str = Field(..., description="Display name shown in the theme picker")
    id: str = Field(..., description="Identifier the host dispatches on")
    colors: Dict[str, str] = Field(
        default_factory=dict, description="Colour channel name -> colour string"
    )


class LaunchTextConfig(_CamelModel):
    """Banner shown when the host application starts."""

    method: Literal["figlet", "custom"] = "figlet"
    figlet_text: str = ""
    figlet_font: str = "ANSI Shadow"
    custom_text: str = ""


class ThinkingVerbsConfig(_CamelModel):
    """Verbs cycled through while the host is working, plus their format."""

    format: str = Field(
        default="{}…", description='Template with one "{}" placeholder for the verb'
    )
    verbs: List[str] = Field(default_factory=list)

    @field_validator("format")
    @classmethod
    def _format_has_placeholder(cls, value: str) -> str:
        if FORMAT_PLACEHOLDER not in value:
            raise ValueError('format must contain a "{}" placeholder')
        return value

    @field_validator("verbs")
    @classmethod
    def _verbs_not_empty(cls, value: List[str]) -> List[str]:
        if not value:
            raise ValueError("at least one verb is required")
        return value


class ThinkingStyleConfig(_CamelModel):
    """Spinner animation shown next to the thinking verb."""

    phases: List[str] = Field(default_factory=list)
    update_interval: PositiveInt = 120
    reverse_mirror: bool = True

    @field_validator("phases")
    @classmethod
    def _phases_not_empty(cls, value: List[str]) -> List[str]:
        if not value:
            raise ValueError("at least one spinner phase is required")
        return value


class Settings(_CamelModel):
    themes: List[Theme] = Field(default_factory=list)
    launch_text: LaunchTextConfig = Field(default_factory=LaunchTextConfig)
    thinking_verbs: ThinkingVerbsConfig
    thinking_style: ThinkingStyleConfig


class TweakConfig(_CamelModel):
    """The persisted settings record, including the backup bookkeeping.

    ``cc_version`` is the host version the backup was taken from and
    ``changes_applied`` is true only right after a successful patch write.
    """

    cc_version: str = ""
    cc_installation_dir: Optional[str] = None
    last_modified: str = ""
    changes_applied: bool = False
    settings: Settings


class RunStatus(str, Enum):
    ALL_APPLIED = "all_applied"
    PARTIALLY_APPLIED = "partially_applied"
    FAILED = "failed"


class PatchOutcome(BaseModel):
    """Result of one customization point within a patch run."""

    point: str = Field(..., description="Customization point name")
    group: str = Field(..., description="Settings section the point belongs to")
    applied: bool = False
    skipped: bool = Field(
        default=False, description="Settings asked for nothing at this point"
    )
    reason: Optional[str] = Field(
        default=None, description="Why the point was not applied"
    )


class PatchRunResult(BaseModel):
    """Aggregated result of :meth:`PatchOrchestrator.apply`."""

    status: RunStatus
    outcomes: List[PatchOutcome] = Field(default_factory=list)
    written: bool = Field(default=False, description="Whether the bundle was written")
    error: Optional[str] = Field(
        default=None, description="Fatal error that aborted the run"
    )
    config: Optional[TweakConfig] = Field(
        default=None, description="Settings record after the run"
    )

    def outcome(self, point: str) -> Optional[PatchOutcome]:
        for outcome in self.outcomes:
            if outcome.point == point:
                return outcome
        return None

    def failed_points(self) -> List[PatchOutcome]:
        return [o for o in self.outcomes if not o.applied]

    def group_applied(self, group: str) -> bool:
        """True when every attempted point of ``group`` was applied."""
        members = [o for o in self.outcomes if o.group == group]
        return bool(members) and all(o.applied for o in members)
