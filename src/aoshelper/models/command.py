"""Command detail records as shipped in the AOS R8 command dictionary."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# The dictionary uses "N/A" as a placeholder for empty sections
PLACEHOLDER = "N/A"


class AosModel(BaseModel):
    """Base for dictionary records: unknown fields are ignored."""

    model_config = ConfigDict(extra="ignore")


class Parameter(AosModel):
    name: str
    description: str = ""


class RelatedCommand(AosModel):
    command: str
    description: str = ""


class OutputDefinition(AosModel):
    field: str
    description: str = ""


class CommandDetail(AosModel):
    """Full reference entry for one CLI command."""

    command: str
    description: str = ""
    syntax: str = ""
    parameters: list[Parameter] = Field(default_factory=list)
    defaults: str = ""
    platforms_supported: dict[str, str] = Field(default_factory=dict)
    usage_guidelines: list[str] = Field(default_factory=list)
    examples: list[str] = Field(default_factory=list)
    release_history: list[str] = Field(default_factory=list)
    related_commands: list[RelatedCommand] = Field(default_factory=list)
    mib_objects: list[str] = Field(default_factory=list)
    output_definitions: list[OutputDefinition] = Field(default_factory=list)

    @property
    def documented_parameters(self) -> list[Parameter]:
        return [p for p in self.parameters if p.name != PLACEHOLDER]

    @property
    def documented_guidelines(self) -> list[str]:
        return [g for g in self.usage_guidelines if g != PLACEHOLDER]

    def matches(self, query: str) -> bool:
        """Case-insensitive substring match on command name or description."""
        needle = query.lower()
        return needle in self.command.lower() or needle in self.description.lower()

    @classmethod
    def from_record(cls, command: str, record: Any) -> "CommandDetail":
        """Build a detail from a dictionary value.

        ``record`` is either a mapping of detail fields or a bare description
        string. The command name given as key wins over any ``command`` field
        inside the record.
        """
        if isinstance(record, str):
            return cls(command=command, description=record)
        if record is None:
            return cls(command=command)
        return cls(**{**record, "command": command})
