"""
Access rules by account type and plan.

Every account owns its own records; what differs between accounts is which
resources they can use at all (team, investments and email automation are
agency-only) and which notification features their plan includes.
"""

from enum import Enum
from typing import Dict, Optional, Set


class UserType(str, Enum):
    FREELANCER = "freelancer"
    AGENCY = "agency"
    BUSINESS = "business"


class Plan(str, Enum):
    FREE = "free"
    PRO = "pro"
    AGENCY = "agency"


class Resource(str, Enum):
    """Resources that can be accessed"""
    CLIENT = "client"
    LEAD = "lead"
    PROJECT = "project"
    PAYMENT = "payment"
    INVOICE = "invoice"
    REPORT = "report"
    EXPORT = "export"
    TEAM_MEMBER = "team_member"
    TEAM_PAYMENT = "team_payment"
    INVESTMENT = "investment"
    EMAIL_AUTOMATION = "email_automation"


class Feature(str, Enum):
    """Plan-gated notification features"""
    FOLLOW_UP_REMINDERS = "follow_up_reminders"
    PAYMENT_FOLLOW_UPS = "payment_follow_ups"


COMMON_RESOURCES: Set[Resource] = {
    Resource.CLIENT,
    Resource.LEAD,
    Resource.PROJECT,
    Resource.PAYMENT,
    Resource.INVOICE,
    Resource.REPORT,
    Resource.EXPORT,
}

USER_TYPE_RESOURCES: Dict[UserType, Set[Resource]] = {
    UserType.FREELANCER: COMMON_RESOURCES,
    UserType.BUSINESS: COMMON_RESOURCES,
    UserType.AGENCY: COMMON_RESOURCES | {
        Resource.TEAM_MEMBER,
        Resource.TEAM_PAYMENT,
        Resource.INVESTMENT,
        Resource.EMAIL_AUTOMATION,
    },
}

PLAN_FEATURES: Dict[Plan, Set[Feature]] = {
    Plan.FREE: set(),
    Plan.PRO: {Feature.FOLLOW_UP_REMINDERS, Feature.PAYMENT_FOLLOW_UPS},
    Plan.AGENCY: {Feature.FOLLOW_UP_REMINDERS, Feature.PAYMENT_FOLLOW_UPS},
}


def has_access(user_type: Optional[UserType], resource: Resource) -> bool:
    """
    Check if an account type may use a resource.

    Accounts that have not finished onboarding (no user type yet) get the
    common resources only.
    """
    if user_type is None:
        return resource in COMMON_RESOURCES
    return resource in USER_TYPE_RESOURCES.get(UserType(user_type), set())


def plan_has_feature(plan: Optional[Plan], feature: Feature) -> bool:
    if plan is None:
        return False
    return feature in PLAN_FEATURES.get(Plan(plan), set())


def is_agency(user_type: Optional[str]) -> bool:
    return user_type == UserType.AGENCY.value
