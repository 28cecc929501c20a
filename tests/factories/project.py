"""
Project factory for test data generation.
"""

import factory

from app.models.project import Project
from tests.factories.base import AsyncFactory


class ProjectFactory(AsyncFactory):
    """
    Factory for Project model.

    Required: user_id, client_id
    """

    class Meta:
        model = Project

    user_id = None
    client_id = None
    name = factory.Sequence(lambda n: f"Project {n}")
    status = "active"
    total_amount = 10000.0
    deadline = None
    reminder_date = None
    completed_date = None
    team_members = None
