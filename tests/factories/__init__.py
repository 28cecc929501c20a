"""
Data factories for test data generation.

Factories use factory-boy to create realistic test data with sensible defaults.
All factories support async creation via create_async() method.

Usage:
    from tests.factories import UserFactory, ClientFactory

    # Create user
    user = await UserFactory.create_async(db_session, email="custom@test.com")

    # Create client owned by that user
    client = await ClientFactory.create_async(db_session, user_id=user.id)
"""

from tests.factories.user import UserFactory
from tests.factories.client import ClientFactory
from tests.factories.lead import LeadFactory
from tests.factories.project import ProjectFactory
from tests.factories.payment import PaymentFactory
from tests.factories.team_member import TeamMemberFactory
from tests.factories.team_member_payment import TeamMemberPaymentFactory
from tests.factories.investment import InvestmentFactory
from tests.factories.email import (
    AutomationRuleFactory,
    EmailQueueItemFactory,
    EmailSettingsFactory,
    EmailTemplateFactory,
)

__all__ = [
    "UserFactory",
    "ClientFactory",
    "LeadFactory",
    "ProjectFactory",
    "PaymentFactory",
    "TeamMemberFactory",
    "TeamMemberPaymentFactory",
    "InvestmentFactory",
    "EmailSettingsFactory",
    "EmailTemplateFactory",
    "AutomationRuleFactory",
    "EmailQueueItemFactory",
]
