"""Schema definitions for Agent Stories and the organization module.

All schemas are Pydantic-based. Python attributes are snake_case and the
wire format is camelCase; unknown fields are ignored.

Usage:
    >>> from agentstory.schemas import AgentStory
    >>> story = AgentStory.model_validate({"name": "Support Bot"})
"""

from agentstory.schemas.base import (
    StoryModel,
    SLUG_PATTERN,
    IDENTIFIER_PATTERN,
    generate_slug,
    is_valid_slug,
)
from agentstory.schemas.trigger import SkillTrigger, TriggerType
from agentstory.schemas.behavior import (
    AdaptiveBehavior,
    ExecutionStage,
    IterativeBehavior,
    SequentialBehavior,
    SkillBehavior,
    StageTransition,
    WorkflowBehavior,
)
from agentstory.schemas.reasoning import (
    BackoffStrategy,
    ConfidenceConfig,
    DecisionPoint,
    Reasoning,
    ReasoningStrategy,
    RetryConfig,
)
from agentstory.schemas.tools import Tool, ToolPermission
from agentstory.schemas.acceptance import (
    FailureHandling,
    FailureMode,
    QualityMetric,
    SkillAcceptance,
)
from agentstory.schemas.guardrails import AgentGuardrail, GuardrailEnforcement, SkillGuardrail
from agentstory.schemas.collaboration import (
    AgentCollaboration,
    Checkpoint,
    CheckpointType,
    CollaborationRole,
    Coordination,
    Escalation,
    HumanInteraction,
    HumanInteractionMode,
    PeerInteraction,
    PeerRelation,
)
from agentstory.schemas.memory import (
    LearningConfig,
    LearningType,
    Memory,
    MemoryStoreType,
    MemoryUpdateMode,
    PersistentStore,
)
from agentstory.schemas.skill import (
    PortableFile,
    Skill,
    SkillAcquisition,
    SkillInput,
    SkillOutput,
    SkillPortability,
)
from agentstory.schemas.story import AUTONOMY_LEVEL_METADATA, AgentStory, AutonomyLevel
from agentstory.schemas.organization import (
    BusinessDomain,
    Department,
    Person,
    PersonStatus,
    Responsibility,
    Role,
    RoleAssignment,
    RoleLevel,
)
from agentstory.schemas.hap import (
    HAPIntegrationStatus,
    HumanAgentPair,
    PhaseAssignment,
    PhaseOwner,
    ResponsibilityPhase,
    TaskPhases,
    TaskResponsibility,
)

__all__ = [
    # Base
    "StoryModel",
    "SLUG_PATTERN",
    "IDENTIFIER_PATTERN",
    "generate_slug",
    "is_valid_slug",
    # Skill parts
    "SkillTrigger",
    "TriggerType",
    "AdaptiveBehavior",
    "ExecutionStage",
    "IterativeBehavior",
    "SequentialBehavior",
    "SkillBehavior",
    "StageTransition",
    "WorkflowBehavior",
    "BackoffStrategy",
    "ConfidenceConfig",
    "DecisionPoint",
    "Reasoning",
    "ReasoningStrategy",
    "RetryConfig",
    "Tool",
    "ToolPermission",
    "FailureHandling",
    "FailureMode",
    "QualityMetric",
    "SkillAcceptance",
    "AgentGuardrail",
    "GuardrailEnforcement",
    "SkillGuardrail",
    "PortableFile",
    "Skill",
    "SkillAcquisition",
    "SkillInput",
    "SkillOutput",
    "SkillPortability",
    # Agent level
    "AgentCollaboration",
    "Checkpoint",
    "CheckpointType",
    "CollaborationRole",
    "Coordination",
    "Escalation",
    "HumanInteraction",
    "HumanInteractionMode",
    "PeerInteraction",
    "PeerRelation",
    "LearningConfig",
    "LearningType",
    "Memory",
    "MemoryStoreType",
    "MemoryUpdateMode",
    "PersistentStore",
    "AUTONOMY_LEVEL_METADATA",
    "AgentStory",
    "AutonomyLevel",
    # Organization
    "BusinessDomain",
    "Department",
    "Person",
    "PersonStatus",
    "Responsibility",
    "Role",
    "RoleAssignment",
    "RoleLevel",
    "HAPIntegrationStatus",
    "HumanAgentPair",
    "PhaseAssignment",
    "PhaseOwner",
    "ResponsibilityPhase",
    "TaskPhases",
    "TaskResponsibility",
]
