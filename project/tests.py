from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse

from accounts.access_control import NotFoundOrAccessDenied
from project.models import Client, Project, TimelineEntry
from project.services.timeline import get_project_timeline, record_timeline_entry


class TimelineServiceTests(TestCase):
    def setUp(self):
        User = get_user_model()
        self.user = User.objects.create_user(username="freelancer", password="pw")
        self.other = User.objects.create_user(username="other", password="pw")
        self.project = Project.objects.create(owner=self.user, name="Website")

    def test_record_entry_links_related_record(self):
        client = Client.objects.create(owner=self.user, name="Acme")
        entry = record_timeline_entry(
            self.user, 'communication', "Kick-off call", project=self.project,
            related=client, metadata={'minutes': 30},
        )
        self.assertEqual(entry.related_id, str(client.pk))
        self.assertEqual(entry.related_type, "client")
        self.assertEqual(entry.metadata, {'minutes': 30})
        self.assertEqual(entry.importance, "medium")

    def test_failed_write_is_logged_not_raised(self):
        with self.assertLogs('project.services.timeline', level='ERROR'):
            entry = record_timeline_entry(self.user, None, "Broken entry", project=self.project)
        self.assertIsNone(entry)
        self.assertFalse(TimelineEntry.objects.exists())
        # the surrounding transaction is still usable
        self.assertEqual(Project.objects.count(), 1)

    def test_project_timeline_is_newest_first(self):
        first = record_timeline_entry(self.user, 'task', "First", project=self.project)
        second = record_timeline_entry(self.user, 'task', "Second", project=self.project)
        self.assertEqual(get_project_timeline(self.user, self.project.id), [second, first])

    def test_foreign_project_timeline_is_not_found(self):
        with self.assertRaises(NotFoundOrAccessDenied):
            get_project_timeline(self.other, self.project.id)


class ProjectViewsTests(TestCase):
    def setUp(self):
        User = get_user_model()
        self.user = User.objects.create_user(username="freelancer", password="pw")
        self.other = User.objects.create_user(username="other", password="pw")
        self.acme = Client.objects.create(owner=self.user, name="Acme")
        Client.objects.create(owner=self.user, name="Old client", status="ARCHIVED")
        Client.objects.create(owner=self.other, name="Not mine")
        self.project = Project.objects.create(owner=self.user, name="Website", client=self.acme)
        self.client.force_login(self.user)

    def test_list_clients_defaults_to_active(self):
        resp = self.client.get(reverse('project:list-clients'))
        self.assertEqual([c['name'] for c in resp.json()['clients']], ["Acme"])
        resp = self.client.get(reverse('project:list-clients'), {'status': 'ARCHIVED'})
        self.assertEqual([c['name'] for c in resp.json()['clients']], ["Old client"])

    def test_list_projects_by_client(self):
        resp = self.client.get(reverse('project:list-projects'), {'client_id': self.acme.id})
        self.assertEqual([p['name'] for p in resp.json()['projects']], ["Website"])

    def test_timeline_endpoint(self):
        record_timeline_entry(self.user, 'milestone', "Design approved", project=self.project, importance='high')
        resp = self.client.get(reverse('project:project-timeline', args=[self.project.id]))
        self.assertEqual(resp.status_code, 200)
        entry = resp.json()['entries'][0]
        self.assertEqual(entry['title'], "Design approved")
        self.assertEqual(entry['importance'], "high")

    def test_timeline_of_foreign_project(self):
        self.client.force_login(self.other)
        resp = self.client.get(reverse('project:project-timeline', args=[self.project.id]))
        self.assertEqual(resp.status_code, 404)
