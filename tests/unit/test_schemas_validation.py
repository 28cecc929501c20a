"""
Unit tests for Pydantic schemas validation.

Tests schema validation without database.
"""

import pytest
from pydantic import ValidationError
from datetime import date

from app.schemas.user import UserCreate, ProfileUpdate
from app.schemas.client import ClientCreate
from app.schemas.project import ProjectCreate, ProjectUpdate
from app.schemas.payment import PaymentCreate
from app.schemas.investment import InvestmentCreate, InvestmentUpdate
from app.schemas.email import AutomationRuleCreate, EmailTemplateCreate


class TestUserSchemas:

    def test_user_create_valid(self):
        user = UserCreate(name="John Doe", email="john@example.com", password="secret1")

        assert user.email == "john@example.com"

    def test_user_create_invalid_email(self):
        with pytest.raises(ValidationError) as exc_info:
            UserCreate(name="John Doe", email="not-an-email", password="secret1")

        assert any("email" in str(error).lower() for error in exc_info.value.errors())

    def test_password_min_length(self):
        with pytest.raises(ValidationError):
            UserCreate(name="John Doe", email="john@example.com", password="12345")

    def test_profile_update_rejects_unknown_user_type(self):
        with pytest.raises(ValidationError):
            ProfileUpdate(user_type="enterprise")

    def test_profile_update_all_optional(self):
        assert ProfileUpdate().model_dump(exclude_unset=True) == {}


class TestClientSchemas:

    def test_name_required(self):
        with pytest.raises(ValidationError):
            ClientCreate(name="")

    def test_email_optional(self):
        assert ClientCreate(name="Acme").email is None


class TestProjectSchemas:

    def test_defaults(self):
        project = ProjectCreate(name="Site", client_id=1)

        assert project.status == "active"
        assert project.total_amount == 0
        assert project.team_members is None

    def test_invalid_status(self):
        with pytest.raises(ValidationError):
            ProjectCreate(name="Site", client_id=1, status="archived")

    def test_negative_total_rejected(self):
        with pytest.raises(ValidationError):
            ProjectCreate(name="Site", client_id=1, total_amount=-1)

    def test_at_most_three_team_members(self):
        assert ProjectCreate(name="Site", client_id=1, team_members=[1, 2, 3]).team_members == [1, 2, 3]

        with pytest.raises(ValidationError) as exc_info:
            ProjectCreate(name="Site", client_id=1, team_members=[1, 2, 3, 4])

        assert "at most 3" in str(exc_info.value)

    def test_team_members_unique(self):
        with pytest.raises(ValidationError):
            ProjectUpdate(team_members=[2, 2])

    def test_update_can_clear_team(self):
        assert ProjectUpdate(team_members=[]).team_members == []


class TestPaymentSchemas:

    def test_amount_must_be_positive(self):
        with pytest.raises(ValidationError):
            PaymentCreate(project_id=1, amount=0, date=date(2024, 1, 1))

    def test_payment_type_values(self):
        assert PaymentCreate(project_id=1, amount=10, date=date(2024, 1, 1), payment_type="final").payment_type == "final"

        with pytest.raises(ValidationError):
            PaymentCreate(project_id=1, amount=10, date=date(2024, 1, 1), payment_type="refund")


class TestInvestmentSchemas:

    def test_cash_needs_no_upi_details(self):
        investment = InvestmentCreate(name="Laptop", amount=90000, date=date(2024, 1, 1), payment_method="cash")

        assert investment.upi_id is None

    def test_upi_requires_details(self):
        with pytest.raises(ValidationError) as exc_info:
            InvestmentCreate(name="Ads", amount=500, date=date(2024, 1, 1), payment_method="upi", upi_id="agency@upi")

        assert "UPI ID and transaction ID are required" in str(exc_info.value)

    def test_upi_with_details(self):
        investment = InvestmentCreate(
            name="Ads",
            amount=500,
            date=date(2024, 1, 1),
            payment_method="upi",
            upi_id="agency@upi",
            transaction_id="TXN123",
        )

        assert investment.transaction_id == "TXN123"

    def test_update_switching_to_upi_requires_details(self):
        with pytest.raises(ValidationError):
            InvestmentUpdate(payment_method="upi")

    def test_unknown_payment_method(self):
        with pytest.raises(ValidationError):
            InvestmentCreate(name="Ads", amount=500, date=date(2024, 1, 1), payment_method="cheque")


class TestEmailSchemas:

    def test_unknown_event_rejected(self):
        with pytest.raises(ValidationError):
            EmailTemplateCreate(name="X", subject="S", body="B", event="CLIENT_DELETED")

    def test_rule_delay_not_negative(self):
        with pytest.raises(ValidationError):
            AutomationRuleCreate(event="CLIENT_CREATED", template_id=1, delay=-5)
