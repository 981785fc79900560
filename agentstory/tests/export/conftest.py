"""Shared fixtures for export tests."""

import pytest

from agentstory.schemas.story import AgentStory


@pytest.fixture
def story(full_story):
    """The parsed full story."""
    return AgentStory.model_validate(full_story)


@pytest.fixture
def minimal_story():
    """A story with a name and nothing else."""
    return AgentStory.model_validate({"name": "Bare Bot"})


@pytest.fixture
def scheduled_story(support_bot):
    """Support Bot plus persistent memory and learning."""
    support_bot["memory"] = {
        "persistent": [{"name": "tickets", "type": "relational", "purpose": "Ticket history"}],
        "learning": [{"type": "feedback_loop", "signal": "Thumbs up"}],
    }
    return AgentStory.model_validate(support_bot)
