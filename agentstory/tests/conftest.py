"""Shared fixtures for agentstory tests."""

import copy
import os

import pytest

from agentstory.config.settings import clear_settings_cache
from agentstory.export.registry import reset_default_registry
from agentstory.interfaces.cli.logging import reset_cli_logging


# =============================================================================
# Isolation
# =============================================================================


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Run every test in an empty directory with no AGENTSTORY_ variables."""
    for key in list(os.environ):
        if key.startswith("AGENTSTORY_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)

    clear_settings_cache()
    reset_default_registry()
    yield
    reset_cli_logging()
    clear_settings_cache()
    reset_default_registry()


# =============================================================================
# Sample Skills
# =============================================================================


TRIAGE_SKILL = {
    "id": "skill-triage",
    "name": "Triage",
    "domain": "NLP",
    "description": "Classify incoming tickets by urgency",
    "acquired": "built_in",
    "triggers": [{"type": "message", "description": "A new ticket arrives"}],
    "acceptance": {"successConditions": ["Ticket has a priority label"]},
}


@pytest.fixture
def triage_skill():
    """A complete skill with no optional sections."""
    return copy.deepcopy(TRIAGE_SKILL)


@pytest.fixture
def support_bot():
    """Directed story with one schedule-triggered skill and no timeout."""
    return {
        "name": "Support Bot",
        "autonomyLevel": "directed",
        "skills": [
            {
                "name": "Triage",
                "domain": "NLP",
                "description": "x",
                "acquired": "built_in",
                "triggers": [{"type": "schedule", "description": "daily"}],
                "acceptance": {"successConditions": ["done"]},
            }
        ],
    }


@pytest.fixture
def full_story():
    """A story that exercises most optional sections and raises no warnings."""
    return {
        "id": "story-1",
        "identifier": "ops-assistant",
        "name": "Ops Assistant",
        "role": "An operations assistant for the support team",
        "purpose": "Keep the ticket queue moving",
        "autonomyLevel": "supervised",
        "humanInteraction": {
            "mode": "on_the_loop",
            "checkpoints": [
                {"name": "Refund approval", "trigger": "Refund over $100", "type": "approval", "timeout": "1h"}
            ],
            "escalation": {"conditions": "Customer is angry", "channel": "#support-leads"},
        },
        "collaboration": {
            "role": "supervisor",
            "coordinates": [{"agent": "Billing Bot", "via": "queue", "for": "refunds"}],
        },
        "memory": {
            "working": ["Current ticket", "Customer history"],
        },
        "guardrails": [
            {"name": "No PII", "constraint": "Never echo card numbers", "rationale": "Compliance"}
        ],
        "skills": [
            {
                "id": "skill-triage",
                "name": "Triage Tickets",
                "domain": "Support",
                "description": "Classify incoming tickets by urgency",
                "acquired": "built_in",
                "triggers": [
                    {"type": "message", "description": "A new ticket arrives", "examples": ["Printer on fire"]}
                ],
                "inputs": [
                    {"name": "ticket_text", "type": "string", "description": "Ticket body"},
                    {"name": "priority_hint", "type": "int", "description": "Optional hint", "required": False},
                ],
                "outputs": [{"name": "priority", "type": "string", "description": "P1-P4"}],
                "behavior": {
                    "model": "workflow",
                    "stages": [
                        {
                            "name": "Read",
                            "purpose": "Understand the ticket",
                            "actions": ["Parse body"],
                            "transitions": [{"to": "Label", "when": "parsed"}],
                        },
                        {"name": "Label", "purpose": "Apply a priority"},
                    ],
                    "entryStage": "Read",
                },
                "reasoning": {
                    "strategy": "hybrid",
                    "decisionPoints": [
                        {"name": "Urgency", "inputs": ["ticket_text"], "approach": "Keyword rules, then LLM"}
                    ],
                    "retry": {"maxAttempts": 2},
                    "confidence": {"threshold": 0.8, "fallbackAction": "Ask a human"},
                },
                "tools": [
                    {"name": "Zendesk", "purpose": "Read and label tickets", "permissions": ["read", "write"]}
                ],
                "acceptance": {
                    "successConditions": ["Ticket has a priority label"],
                    "qualityMetrics": [{"name": "Accuracy", "target": ">= 95%"}],
                    "timeout": "30s",
                },
                "failureHandling": {
                    "modes": [{"condition": "Zendesk down", "recovery": "Retry later", "escalate": True}]
                },
                "guardrails": [{"name": "Read only on closed tickets", "constraint": "Do not edit closed tickets"}],
                "portability": {
                    "slug": "triage-tickets",
                    "license": "MIT",
                    "scripts": [{"filename": "label.py", "content": "print('label')\n"}],
                    "references": [{"filename": "priorities.md", "content": "# Priorities\n"}, {"filename": "empty.md"}],
                },
            },
            {
                "id": "skill-digest",
                "name": "Daily Digest",
                "domain": "Reporting",
                "description": "Summarize the day's tickets",
                "acquired": "learned",
                "triggers": [{"type": "manual", "description": "Lead asks for a digest"}],
                "behavior": {"model": "sequential", "steps": ["Collect tickets", "Summarize"]},
                "acceptance": {"successConditions": ["Digest posted"]},
            },
        ],
    }
