"""pytest fixtures for wbs editor tests."""

import pytest

from wbs_editor.core.planner import AssistantReply, MockPlanner
from wbs_editor.core.session import EditorSession
from wbs_editor.core.templates import initial_tree
from wbs_editor.core.tree import WbsNode


@pytest.fixture
def default_tree():
    """the built-in micro-reactor wbs."""
    return initial_tree()


@pytest.fixture
def small_tree():
    """root with one section that has a nested branch and an empty section."""
    return WbsNode.from_dict({
        "key": "root",
        "label": "PROJETO: test",
        "children": [
            {
                "key": "3",
                "label": "3 Benches",
                "children": [
                    {
                        "key": "3.A",
                        "label": "3.A Aquisição",
                        "children": [{"key": "3.A.1", "label": "3.A.1 Pumps", "docs": []}],
                    },
                ],
            },
            {"key": "4", "label": "4 X", "children": []},
        ],
    })


@pytest.fixture
def mock_planner():
    """planner that answers with a message and no operations."""
    return MockPlanner(
        AssistantReply(
            ops=[],
            tips=["keep licensing early"],
            message="renaming the quality section.",
        )
    )


@pytest.fixture
def session(mock_planner):
    """session on the default tree with a mock planner."""
    return EditorSession(tree=initial_tree(), planner=mock_planner)
