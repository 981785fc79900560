"""Base classes for harness export adapters.

A harness is a runtime that can host an agent (Claude Code, Letta, an
AgentSkills.io-compatible loader ...). An adapter turns a validated
AgentStory into the files that harness expects.

Classes:
    HarnessAdapter: Abstract base class for all adapters.
        - ``can_export`` reports whether (and how well) a story maps onto
          the harness
        - ``generate`` produces the files

    HarnessFile / HarnessOutput / HarnessCompatibility: adapter results.
    HarnessAdapterInfo: display metadata for listing adapters.
    HarnessExportResult: combined outcome of exporting to several adapters.

Example:
    >>> class EchoAdapter(HarnessAdapter):
    ...     id = "echo"
    ...     name = "Echo"
    ...
    ...     def can_export(self, story):
    ...         return HarnessCompatibility(compatible=True)
    ...
    ...     def generate(self, story):
    ...         return HarnessOutput(files=[HarnessFile("echo.txt", story.name)])
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Optional

from agentstory.schemas.story import AgentStory


# =============================================================================
# Result Dataclasses
# =============================================================================


@dataclass
class HarnessFile:
    """A generated file, path relative to the export root."""

    path: str
    content: str

    def to_dict(self) -> dict[str, Any]:
        return {"path": self.path, "content": self.content}


@dataclass
class HarnessCompatibility:
    """How well a story maps onto a harness.

    Attributes:
        compatible: False when the story lacks something the harness needs.
        warnings: Features that will be approximated or need manual work.
        missing_features: Required features the story does not have.
        unsupported_features: Story features the harness cannot express.
    """

    compatible: bool
    warnings: list[str] = field(default_factory=list)
    missing_features: list[str] = field(default_factory=list)
    unsupported_features: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "compatible": self.compatible,
            "warnings": list(self.warnings),
            "missingFeatures": list(self.missing_features),
            "unsupportedFeatures": list(self.unsupported_features),
        }


@dataclass
class HarnessOutput:
    """Files and notes produced by one adapter."""

    files: list[HarnessFile] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    instructions: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "files": [f.to_dict() for f in self.files],
            "warnings": list(self.warnings),
            "instructions": self.instructions,
        }


@dataclass
class HarnessAdapterInfo:
    id: str
    name: str
    description: str
    url: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "description": self.description, "url": self.url}


@dataclass
class HarnessExportResult:
    """Outcome of exporting one story to several harnesses.

    Attributes:
        outputs: Adapter id -> output, for every adapter that ran.
        warnings: Compatibility and generation warnings, each prefixed with
            the adapter name.
        source: Pretty-printed story JSON when requested.
    """

    outputs: dict[str, HarnessOutput] = field(default_factory=dict)
    warnings: list[str] = field(default_factory=list)
    source: Optional[str] = None

    def all_files(self) -> list[HarnessFile]:
        return [f for output in self.outputs.values() for f in output.files]

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "outputs": {k: v.to_dict() for k, v in self.outputs.items()},
            "warnings": list(self.warnings),
        }
        if self.source is not None:
            data["source"] = self.source
        return data


# =============================================================================
# HarnessAdapter
# =============================================================================


class HarnessAdapter(ABC):
    """Abstract base class for harness adapters.

    Subclasses set the class attributes and implement both methods. Both
    must be pure: no I/O, no mutation of the story.

    Class Attributes:
        id: Registry key, lowercase.
        name: Display name.
        description: One-line description.
        url: Homepage of the harness.
    """

    id: str = ""
    name: str = ""
    description: str = ""
    url: Optional[str] = None

    @abstractmethod
    def can_export(self, story: AgentStory) -> HarnessCompatibility:
        """Check how well ``story`` maps onto this harness."""

    @abstractmethod
    def generate(self, story: AgentStory) -> HarnessOutput:
        """Generate the harness files for ``story``."""

    def info(self) -> HarnessAdapterInfo:
        return HarnessAdapterInfo(
            id=self.id,
            name=self.name,
            description=self.description,
            url=self.url,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r})"


__all__ = [
    "HarnessFile",
    "HarnessCompatibility",
    "HarnessOutput",
    "HarnessAdapterInfo",
    "HarnessExportResult",
    "HarnessAdapter",
]
