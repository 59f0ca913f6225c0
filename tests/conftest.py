from datetime import datetime, timezone

import pytest

from taskmd.maybe import ABSENT, Present
from taskmd.models import Due, Lists, Subtask, Task, TaskList


SHIP_DUE = datetime(2024, 5, 6, 7, 8, 9, 123456, tzinfo=timezone.utc)
GROCERY_DUE = datetime(2025, 12, 31, 23, 59, tzinfo=timezone.utc)


# --- Canned documents ---

EXAMPLE_DOC = (
    "## Work\n"
    "\n"
    "- Buy milk\n"
    "    @ 2024-01-01T00:00:00Z\n"
    "    > urgent\n"
    "    * [x] pick 2%\n"
    "    * [ ] pick organic\n"
)

TWO_LISTS_DOC = (
    "## Home\n"
    "\n"
    "- Water plants\n"
    "- Fix shelf\n"
    "    > needs the long screws\n"
    "    > and a drill\n"
    "\n"
    "## Later\n"
    "\n"
)


@pytest.fixture
def example_doc():
    return EXAMPLE_DOC


@pytest.fixture
def two_lists_doc():
    return TWO_LISTS_DOC


@pytest.fixture
def sample_lists():
    """A tree exercising every optional field."""
    return Lists(
        items=[
            TaskList(
                title="Work",
                tasks=[
                    Task(
                        name="Ship release",
                        due=Present(Due(SHIP_DUE)),
                        description=Present("check changelog\n\nthen tag"),
                        subtasks=[
                            Subtask(complete=True, name="bump version"),
                            Subtask(complete=False, name="publish"),
                        ],
                    ),
                    Task(name="Reply to email"),
                    Task(
                        name="",
                        subtasks=[Subtask(complete=False, name="[x] not a mark")],
                    ),
                ],
            ),
            TaskList(title="Empty"),
            TaskList(
                title="Errands",
                tasks=[
                    Task(
                        name="Groceries",
                        due=Present(Due(GROCERY_DUE)),
                        description=ABSENT,
                    ),
                ],
            ),
        ]
    )
