# docgen/tests/test_views.py
import pytest
from django.core.cache import cache
from django.urls import reverse

from docgen.models import Document, DocumentTemplate
from docgen.services.versioning import snapshot
from project.models import Client, Project


@pytest.mark.django_db
def test_login_is_required(client):
    resp = client.get(reverse('docgen:list-templates'))
    assert resp.status_code == 302


@pytest.mark.django_db
def test_list_templates(logged_in, template):
    DocumentTemplate.objects.create(name='Shared', type='OTHER', content='x', is_global=True)
    resp = logged_in.get(reverse('docgen:list-templates'))
    assert resp.status_code == 200
    names = [t['name'] for t in resp.json()['templates']]
    assert names == ['Shared', 'Quick invoice']
    assert 'content' not in resp.json()['templates'][0]


@pytest.mark.django_db
def test_list_templates_etag_changes_when_templates_change(logged_in, template):
    url = reverse('docgen:list-templates')
    first = logged_in.get(url)
    etag = first['ETag']

    assert logged_in.get(url, HTTP_IF_NONE_MATCH=etag).status_code == 304

    template.name = 'Renamed'
    template.save()
    refreshed = logged_in.get(url, HTTP_IF_NONE_MATCH=etag)
    assert refreshed.status_code == 200
    assert refreshed['ETag'] != etag


@pytest.mark.django_db
def test_document_list_etag_survives_a_cleared_cache(logged_in, user, document):
    url = reverse('docgen:list-documents')
    etag = logged_in.get(url)['ETag']

    cache.clear()
    Document.objects.create(owner=user, name='Second', type='OTHER', content='x')

    refreshed = logged_in.get(url, HTTP_IF_NONE_MATCH=etag)
    assert refreshed.status_code == 200
    assert len(refreshed.json()['documents']) == 2


@pytest.mark.django_db
def test_template_list_etag_survives_a_cleared_cache(logged_in, user, template):
    url = reverse('docgen:list-templates')
    etag = logged_in.get(url)['ETag']

    cache.clear()
    template.delete()

    refreshed = logged_in.get(url, HTTP_IF_NONE_MATCH=etag)
    assert refreshed.status_code == 200
    assert refreshed.json()['templates'] == []


@pytest.mark.django_db
def test_document_list_etag_follows_client_names(logged_in, user, document):
    acme = Client.objects.create(owner=user, name='Acme')
    document.client = acme
    document.save()
    url = reverse('docgen:list-documents')
    etag = logged_in.get(url)['ETag']

    cache.clear()
    acme.name = 'Acme Ltd'
    acme.save()

    refreshed = logged_in.get(url, HTTP_IF_NONE_MATCH=etag)
    assert refreshed.status_code == 200
    assert refreshed.json()['documents'][0]['clientName'] == 'Acme Ltd'


@pytest.mark.django_db
def test_create_and_update_template(logged_in):
    resp = logged_in.post(
        reverse('docgen:create-template'),
        data={'name': 'Mine', 'type': 'OTHER', 'content': 'Hello {{name}}', 'variables': [{'key': 'name'}]},
        content_type='application/json',
    )
    assert resp.status_code == 201
    template_id = resp.json()['template']['id']

    resp = logged_in.post(
        reverse('docgen:update-template', args=[template_id]),
        data={'description': 'Greeting'},
        content_type='application/json',
    )
    assert resp.status_code == 200
    assert resp.json()['template']['description'] == 'Greeting'
    assert resp.json()['template']['content'] == 'Hello {{name}}'


@pytest.mark.django_db
def test_create_template_validation_errors(logged_in):
    resp = logged_in.post(
        reverse('docgen:create-template'),
        data={'name': 'Mine', 'type': 'OTHER'},
        content_type='application/json',
    )
    assert resp.status_code == 400
    assert resp.json()['success'] is False
    assert 'content' in resp.json()['error']


@pytest.mark.django_db
def test_invalid_json_body(logged_in):
    resp = logged_in.post(reverse('docgen:create-template'), data='{not json', content_type='application/json')
    assert resp.status_code == 400


@pytest.mark.django_db
def test_global_template_cannot_be_edited(logged_in):
    shared = DocumentTemplate.objects.create(name='Shared', type='OTHER', content='x', is_global=True)
    resp = logged_in.post(
        reverse('docgen:update-template', args=[shared.id]), data={'name': 'x'}, content_type='application/json',
    )
    assert resp.status_code == 403

    resp = logged_in.post(reverse('docgen:copy-template', args=[shared.id]))
    assert resp.status_code == 201
    assert resp.json()['template']['name'] == 'Shared (Custom)'


@pytest.mark.django_db
def test_delete_template(logged_in, template):
    resp = logged_in.post(reverse('docgen:delete-template', args=[template.id]))
    assert resp.status_code == 200
    assert not DocumentTemplate.objects.filter(id=template.id).exists()


@pytest.mark.django_db
def test_endpoints_reject_wrong_method(logged_in, template):
    assert logged_in.get(reverse('docgen:delete-template', args=[template.id])).status_code == 405
    assert logged_in.post(reverse('docgen:list-templates')).status_code == 405


@pytest.mark.django_db
def test_template_preview(logged_in, template):
    resp = logged_in.get(reverse('docgen:template-preview', args=[template.id]))
    assert resp.status_code == 200
    assert resp.json()['content'].startswith('Hi Jane Doe, total due')


@pytest.mark.django_db
def test_variable_values(logged_in, user):
    acme = Client.objects.create(owner=user, name='Acme Corp')
    resp = logged_in.get(reverse('docgen:variable-values'), {'client_id': acme.id})
    assert resp.status_code == 200
    values = resp.json()['variables']
    assert values['client_name'] == 'Acme Corp'
    assert values['my_name'] == 'Sam Rivera'


@pytest.mark.django_db
def test_generate_document(logged_in, user, template):
    project = Project.objects.create(owner=user, name='Website')
    resp = logged_in.post(reverse('docgen:generate-document'), data={
        'template_id': template.id,
        'name': 'Invoice for Acme',
        'variable_values': {'client_name': 'Acme', 'total': '$500'},
        'project_id': project.id,
        'create_version': True,
    }, content_type='application/json')

    assert resp.status_code == 201
    body = resp.json()
    assert body['filename'].startswith('Invoice-for-Acme-')
    document = Document.objects.get(id=body['documentId'])
    assert document.content == 'Hi Acme, total due $500'
    assert document.versions.count() == 1

    timeline = logged_in.get(reverse('project:project-timeline', args=[project.id]))
    assert timeline.status_code == 200
    assert timeline.json()['entries'][0]['relatedId'] == str(document.id)


@pytest.mark.django_db
def test_generate_with_foreign_template_is_not_found(client, other_user, template):
    client.force_login(other_user)
    resp = client.post(reverse('docgen:generate-document'), data={
        'template_id': template.id, 'name': 'Nope', 'variable_values': {},
    }, content_type='application/json')
    assert resp.status_code == 404
    assert resp.json() == {'success': False, 'error': 'Template not found or access denied'}


@pytest.mark.django_db
@pytest.mark.parametrize('payload', [
    {'template_id': 'abc'},
    {'client_id': 'abc'},
    {'project_id': '7x'},
])
def test_generate_with_malformed_ids_is_not_found(logged_in, template, payload):
    data = {'template_id': template.id, 'name': 'Invoice', 'variable_values': {}, **payload}
    resp = logged_in.post(reverse('docgen:generate-document'), data=data, content_type='application/json')
    assert resp.status_code == 404
    assert Document.objects.count() == 0


@pytest.mark.django_db
def test_create_version_flag_must_be_boolean(logged_in, template):
    resp = logged_in.post(reverse('docgen:generate-document'), data={
        'template_id': template.id, 'name': 'Invoice', 'variable_values': {}, 'create_version': 'false',
    }, content_type='application/json')
    assert resp.status_code == 400
    assert 'create_version' in resp.json()['error']
    assert Document.objects.count() == 0


@pytest.mark.django_db
def test_create_and_update_document_with_malformed_ids(logged_in, document):
    resp = logged_in.post(reverse('docgen:create-document'), data={
        'name': 'Notes', 'type': 'OTHER', 'content': 'Hello', 'client_id': 'abc',
    }, content_type='application/json')
    assert resp.status_code == 404

    resp = logged_in.post(reverse('docgen:update-document', args=[document.id]),
                          data={'project_id': 'abc'}, content_type='application/json')
    assert resp.status_code == 404
    document.refresh_from_db()
    assert document.project is None


@pytest.mark.django_db
def test_document_crud(logged_in):
    resp = logged_in.post(reverse('docgen:create-document'), data={
        'name': 'Notes', 'type': 'OTHER', 'content': 'Hello',
    }, content_type='application/json')
    assert resp.status_code == 201
    document_id = resp.json()['document']['id']

    resp = logged_in.get(reverse('docgen:document-detail', args=[document_id]))
    assert resp.json()['document']['size'] == 5

    resp = logged_in.post(reverse('docgen:update-document', args=[document_id]),
                          data={'content': 'Hello again'}, content_type='application/json')
    assert resp.json()['document']['size'] == len('Hello again')

    resp = logged_in.get(reverse('docgen:list-documents'), {'type': 'OTHER'})
    assert [d['id'] for d in resp.json()['documents']] == [document_id]

    resp = logged_in.post(reverse('docgen:delete-document', args=[document_id]))
    assert resp.status_code == 200
    assert logged_in.get(reverse('docgen:document-detail', args=[document_id])).status_code == 404


@pytest.mark.django_db
def test_status_metrics_and_versions(logged_in, user, document):
    resp = logged_in.post(reverse('docgen:update-document-status', args=[document.id]),
                          data={'status': 'SENT', 'notes': 'emailed'}, content_type='application/json')
    assert resp.status_code == 200
    assert resp.json()['statusHistory'][0]['to'] == 'SENT'

    resp = logged_in.post(reverse('docgen:create-version', args=[document.id]),
                          data={'change_notes': 'before edits'}, content_type='application/json')
    assert resp.status_code == 201
    assert resp.json()['versionNumber'] == 1
    version_id = resp.json()['versionId']

    Document.objects.filter(id=document.id).update(content='Replaced', size=len('Replaced'))
    resp = logged_in.post(reverse('docgen:restore-version', args=[document.id, version_id]))
    assert resp.status_code == 200
    assert resp.json()['document']['content'] == '## Scope\n- Design'

    resp = logged_in.get(reverse('docgen:list-versions', args=[document.id]))
    versions = resp.json()['versions']
    assert [v['versionNumber'] for v in versions] == [3, 2, 1]
    assert versions[0]['changeNotes'] == 'Restored to v1'
    assert versions[0]['changes']['hasContentChanges'] is True
    assert 'changes' not in versions[-1]

    resp = logged_in.get(reverse('docgen:document-metrics', args=[document.id]))
    assert resp.json()['metrics']['versions'] == 3


@pytest.mark.django_db
def test_snapshot_of_empty_document_is_bad_request(logged_in, user):
    empty = Document.objects.create(owner=user, name='Empty', type='OTHER')
    resp = logged_in.post(reverse('docgen:create-version', args=[empty.id]))
    assert resp.status_code == 400


@pytest.mark.django_db
def test_restore_unknown_version(logged_in, user, document):
    other = Document.objects.create(owner=user, name='Other', type='OTHER', content='x')
    version = snapshot(user, other.id)
    resp = logged_in.post(reverse('docgen:restore-version', args=[document.id, version.id]))
    assert resp.status_code == 404


@pytest.mark.django_db
def test_exports(logged_in, document):
    resp = logged_in.get(reverse('docgen:export-document', args=[document.id, 'html']))
    assert resp.status_code == 200
    assert resp['Content-Disposition'].startswith('attachment; filename="Quote-')
    assert b'<h2>Scope</h2>' in resp.content

    resp = logged_in.get(reverse('docgen:export-document', args=[document.id, 'pdf']))
    assert resp['Content-Disposition'].startswith('inline;')
    assert b'window.print()' in resp.content

    resp = logged_in.get(reverse('docgen:export-document', args=[document.id, 'docx']))
    assert resp['Content-Type'].startswith('application/vnd.openxmlformats-officedocument.wordprocessingml')

    resp = logged_in.get(reverse('docgen:export-document', args=[document.id, 'rtf']))
    assert resp.status_code == 400


@pytest.mark.django_db
def test_excel_register_export(logged_in, document):
    resp = logged_in.get(reverse('docgen:export-documents-excel'))
    assert resp.status_code == 200
    assert resp['Content-Type'] == 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'
    assert resp['Content-Disposition'].startswith('attachment; filename="documents_')


@pytest.mark.django_db
def test_other_users_document_is_not_found(client, other_user, document):
    client.force_login(other_user)
    assert client.get(reverse('docgen:document-detail', args=[document.id])).status_code == 404
    assert client.get(reverse('docgen:export-document', args=[document.id, 'txt'])).status_code == 404
