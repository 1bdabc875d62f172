from datetime import date, datetime

from django.contrib.auth import get_user_model
from django.contrib.auth.models import AnonymousUser
from django.test import TestCase, override_settings

from accounts.access_control import AuthorizationError
from docgen.services.variable_resolver import add_months, resolve_variables
from project.models import Client, Project

NOW = datetime(2024, 3, 5, 9, 30)


class ResolveVariablesTests(TestCase):
    def setUp(self):
        User = get_user_model()
        self.user = User.objects.create_user(
            username="freelancer", password="pw", email="me@example.com",
            first_name="Sam", last_name="Rivera",
        )
        self.other = User.objects.create_user(username="other", password="pw")
        self.client_record = Client.objects.create(
            owner=self.user, name="Jane Doe", email="jane@example.com", phone="555-0100",
        )
        self.project = Project.objects.create(
            owner=self.user, name="Website", description="Redesign",
            start_date=date(2024, 1, 1), end_date=date(2024, 1, 31), status="IN_PROGRESS",
        )

    def test_system_values(self):
        values = resolve_variables(self.user, now=NOW)
        self.assertEqual(values['current_date'], "3/5/2024")
        self.assertEqual(values['today'], "3/5/2024")
        self.assertEqual(values['current_year'], "2024")
        self.assertEqual(values['current_month'], "March")
        self.assertEqual(values['next_week'], "3/12/2024")
        self.assertEqual(values['next_month'], "4/5/2024")
        self.assertEqual(values['in_30_days'], "4/4/2024")
        self.assertEqual(values['due_date_30'], "4/4/2024")

    def test_greeting_follows_the_hour(self):
        for hour, greeting in [(9, "Good morning"), (14, "Good afternoon"), (20, "Good evening")]:
            values = resolve_variables(self.user, now=datetime(2024, 3, 5, hour, 0))
            self.assertEqual(values['time_greeting'], greeting)

    def test_user_values_and_business_defaults(self):
        values = resolve_variables(self.user, now=NOW)
        self.assertEqual(values['my_name'], "Sam Rivera")
        self.assertEqual(values['your_name'], "Sam Rivera")
        self.assertEqual(values['my_email'], "me@example.com")
        self.assertEqual(values['your_email'], "me@example.com")
        self.assertEqual(values['business_name'], "Sam Rivera")
        self.assertEqual(values['payment_terms'], "30 days")
        self.assertEqual(values['late_fee'], "1.5% per month")
        self.assertEqual(values['currency'], "$")
        self.assertEqual(values['tax_rate'], "0%")

    def test_business_name_prefers_profile_value(self):
        self.user.business_name = "Rivera Studio"
        self.user.save()
        self.assertEqual(resolve_variables(self.user, now=NOW)['business_name'], "Rivera Studio")

    @override_settings(DOCGEN_BUSINESS_DEFAULTS={'payment_terms': "Net 15"})
    def test_business_defaults_are_configurable(self):
        self.assertEqual(resolve_variables(self.user, now=NOW)['payment_terms'], "Net 15")

    def test_client_values(self):
        values = resolve_variables(self.user, client_id=self.client_record.id, now=NOW)
        self.assertEqual(values['client_name'], "Jane Doe")
        self.assertEqual(values['client_email'], "jane@example.com")
        self.assertEqual(values['client_phone'], "555-0100")
        self.assertEqual(values['client_company'], "")
        self.assertEqual(values['company_name'], "Jane Doe")
        self.assertEqual(values['client_first_name'], "Jane")
        self.assertEqual(values['dear_client'], "Dear Jane Doe")
        self.assertEqual(values['dear_firstname'], "Dear Jane")

    def test_project_duration(self):
        values = resolve_variables(self.user, project_id=self.project.id, now=NOW)
        self.assertEqual(values['project_name'], "Website")
        self.assertEqual(values['project_start_date'], "1/1/2024")
        self.assertEqual(values['project_end_date'], "1/31/2024")
        self.assertEqual(values['project_status'], "IN_PROGRESS")
        self.assertEqual(values['project_duration'], "30 days")
        self.assertEqual(values['project_duration_weeks'], "5 weeks")

    def test_duration_needs_both_dates(self):
        self.project.end_date = None
        self.project.save()
        values = resolve_variables(self.user, project_id=self.project.id, now=NOW)
        self.assertEqual(values['project_end_date'], "")
        self.assertNotIn('project_duration', values)

    def test_project_client_backfills_missing_client(self):
        company = Client.objects.create(owner=self.user, name="Bob Stone", company="Stone Ltd")
        self.project.client = company
        self.project.save()

        values = resolve_variables(self.user, project_id=self.project.id, now=NOW)
        self.assertEqual(values['client_name'], "Bob Stone")
        self.assertEqual(values['company_name'], "Stone Ltd")

        values = resolve_variables(
            self.user, client_id=self.client_record.id, project_id=self.project.id, now=NOW
        )
        self.assertEqual(values['client_name'], "Jane Doe")

    def test_foreign_or_unknown_records_are_skipped(self):
        foreign = Client.objects.create(owner=self.other, name="Not Yours")
        values = resolve_variables(self.user, client_id=foreign.id, project_id=99999, now=NOW)
        self.assertNotIn('client_name', values)
        self.assertNotIn('project_name', values)
        self.assertEqual(values['current_year'], "2024")

        values = resolve_variables(self.user, client_id="abc", now=NOW)
        self.assertNotIn('client_name', values)

    def test_anonymous_caller_is_rejected(self):
        with self.assertRaises(AuthorizationError):
            resolve_variables(AnonymousUser())


class AddMonthsTests(TestCase):
    def test_day_is_clamped_to_month_end(self):
        self.assertEqual(add_months(date(2024, 1, 31), 1), date(2024, 2, 29))
        self.assertEqual(add_months(date(2023, 12, 15), 1), date(2024, 1, 15))
