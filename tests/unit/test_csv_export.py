"""
Unit tests for app/services/exports.py and app/services/avatar.py
"""

from datetime import date, datetime, timezone

from app.services.avatar import avatar_url, gravatar_url
from app.services.exports import export_csv, export_filename


class TestExportCsv:

    def test_header_from_first_row(self):
        rows = [{"name": "Acme", "email": "a@acme.com"}, {"name": "Globex", "email": None}]

        assert export_csv(rows) == "name,email\nAcme,a@acme.com\nGlobex,"

    def test_explicit_headers_select_and_order_columns(self):
        rows = [{"a": 1, "b": 2, "c": 3}]

        assert export_csv(rows, headers=["c", "a"]) == "c,a\n3,1"

    def test_quotes_commas_quotes_and_newlines(self):
        rows = [{"notes": 'He said "hi", then left\nearly'}]

        assert export_csv(rows) == 'notes\n"He said ""hi"", then left\nearly"'

    def test_dates_and_json_values(self):
        rows = [{
            "date": date(2024, 3, 5),
            "created_at": datetime(2024, 3, 5, 9, 30, tzinfo=timezone.utc),
            "team_members": [1, 2],
        }]

        assert export_csv(rows) == 'date,created_at,team_members\n2024-03-05,2024-03-05T09:30:00+00:00,"[1, 2]"'

    def test_empty_rows(self):
        assert export_csv([]) == ""

    def test_filename(self):
        assert export_filename("team_payments", date(2024, 3, 5)) == "team_payments_2024-03-05.csv"


class TestAvatar:

    def test_gravatar_normalizes_email(self):
        assert gravatar_url("  Maya@Example.com ") == gravatar_url("maya@example.com")
        assert gravatar_url("maya@example.com").endswith("?s=80&d=identicon")

    def test_uploaded_photo_wins(self):
        assert avatar_url("https://cdn.test/me.png", "maya@example.com") == "https://cdn.test/me.png"

    def test_no_photo_no_email(self):
        assert avatar_url(None, None) is None
        assert avatar_url(None, "maya@example.com").startswith("https://www.gravatar.com/avatar/")
