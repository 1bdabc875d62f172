from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.test import TestCase

from accounts.access_control import NotFoundOrAccessDenied
from docgen.models import Document, DocumentTemplate
from docgen.services.generation import generate_document, generate_document_from_template
from project.models import Client, Project, TimelineEntry


class GenerateDocumentTests(TestCase):
    def setUp(self):
        User = get_user_model()
        self.user = User.objects.create_user(username="freelancer", password="pw", email="me@example.com")
        self.other = User.objects.create_user(username="other", password="pw")
        self.template = DocumentTemplate.objects.create(
            owner=self.user, name="Quick invoice", type="INVOICE",
            content="Hi {{client_name}}, total due {{total}}",
        )

    def test_simple_generation(self):
        document = generate_document(
            self.user, self.template.id, "Invoice for Acme",
            {'client_name': "Acme", 'total': "$500"},
        )
        document.refresh_from_db()
        self.assertEqual(document.content, "Hi Acme, total due $500")
        self.assertEqual(document.size, len("Hi Acme, total due $500"))
        self.assertEqual(document.type, "INVOICE")
        self.assertEqual(document.status, "DRAFT")
        self.assertFalse(document.is_template)
        self.assertEqual(document.template, self.template)

    def test_variable_values_carry_generation_metadata(self):
        document = generate_document(
            self.user, self.template.id, "Invoice", {'client_name': "Acme", 'total': "$500"},
        )
        values = document.variable_values
        self.assertEqual(values['client_name'], "Acme")
        self.assertEqual(values['metrics']['wordCount'], 5)
        self.assertIn('generatedAt', values)
        self.assertEqual(values['templateVersion'], self.template.updated_at.isoformat())

    def test_missing_values_are_marked(self):
        document = generate_document(self.user, self.template.id, "Invoice", {'client_name': "Acme"})
        self.assertEqual(document.content, "Hi Acme, total due [MISSING_VALUE]")

    def test_initial_version_is_optional(self):
        without = generate_document(self.user, self.template.id, "A", {'client_name': "Acme", 'total': 1})
        self.assertEqual(without.versions.count(), 0)

        with_version = generate_document(
            self.user, self.template.id, "B", {'client_name': "Acme", 'total': 1}, create_version=True,
        )
        version = with_version.versions.get()
        self.assertEqual(version.version_number, 1)
        self.assertEqual(version.change_notes, "Initial version")
        self.assertEqual(version.content, with_version.content)

    def test_declared_defaults_and_types_are_applied(self):
        self.template.content = "{{hours}} hours, terms {{terms}}"
        self.template.variables = [
            {'key': 'hours', 'label': 'Hours', 'type': 'number', 'source': 'manual', 'required': True},
            {'key': 'terms', 'label': 'Terms', 'type': 'text', 'source': 'manual', 'required': False,
             'defaultValue': 'Net 30'},
        ]
        self.template.save()

        document = generate_document(self.user, self.template.id, "Retainer", {'hours': "12"})
        self.assertEqual(document.content, "12 hours, terms Net 30")

        formatted = generate_document(self.user, self.template.id, "Retainer", {'hours': "1,500.00"})
        self.assertEqual(formatted.content, "1,500.00 hours, terms Net 30")

        with self.assertRaises(ValidationError):
            generate_document(self.user, self.template.id, "Retainer", {'hours': "twelve"})
        with self.assertRaises(ValidationError):
            generate_document(self.user, self.template.id, "Retainer", {})
        self.assertEqual(Document.objects.count(), 2)

    def test_global_templates_are_usable(self):
        shared = DocumentTemplate.objects.create(
            name="Shared", type="OTHER", content="Hello {{name}}", is_global=True,
        )
        document = generate_document(self.other, shared.id, "Mine", {'name': "Bo"})
        self.assertEqual(document.owner, self.other)
        self.assertEqual(document.content, "Hello Bo")

    def test_other_users_template_is_not_found(self):
        with self.assertRaises(NotFoundOrAccessDenied):
            generate_document(self.other, self.template.id, "Nope", {})
        with self.assertRaises(NotFoundOrAccessDenied):
            generate_document(self.user, 99999, "Nope", {})

    def test_name_and_status_are_validated(self):
        with self.assertRaises(ValidationError):
            generate_document(self.user, self.template.id, "   ", {})
        with self.assertRaises(ValidationError):
            generate_document(self.user, self.template.id, "Doc", {}, status="LOST")
        document = generate_document(self.user, self.template.id, "Doc", {}, status="SENT")
        self.assertEqual(document.status, "SENT")

    def test_client_and_project_must_belong_to_caller(self):
        foreign_client = Client.objects.create(owner=self.other, name="Foreign")
        with self.assertRaises(NotFoundOrAccessDenied):
            generate_document(self.user, self.template.id, "Doc", {}, client_id=foreign_client.id)

        project = Project.objects.create(owner=self.user, name="Website")
        client = Client.objects.create(owner=self.user, name="Acme")
        document = generate_document(
            self.user, self.template.id, "Doc", {}, client_id=client.id, project_id=project.id,
        )
        self.assertEqual(document.client, client)
        self.assertEqual(document.project, project)

        entry = TimelineEntry.objects.get(project=project)
        self.assertEqual(entry.entry_type, "document")
        self.assertEqual(entry.related_id, str(document.id))
        self.assertEqual(entry.related_type, "document")

    def test_gallery_entry_point_uses_same_substitution(self):
        document = generate_document_from_template(
            self.user, self.template.id, "Gallery", {'client_name': "Acme", 'total': "$5"},
        )
        self.assertEqual(document.content, "Hi Acme, total due $5")
