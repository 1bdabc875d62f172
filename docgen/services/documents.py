# docgen/services/documents.py
import logging
from collections import namedtuple

from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils import timezone

from accounts.access_control import get_owned_or_404, resolve_caller
from docgen.forms import DocumentForm
from docgen.models import Document
from docgen.services import export
from docgen.services.generation import STATUSES, get_owned_client, get_owned_project, get_visible_template
from docgen.services.metrics import calculate_metrics
from docgen.services.template_engine import substitute
from docgen.signals import queryset_stamp
from docgen.variables import SCALAR_TYPES
from project.models import Client, Project
from project.services.timeline import record_timeline_entry

logger = logging.getLogger(__name__)

DOCUMENT_NOT_FOUND = "Document not found or access denied"
TYPES = {choice for choice, _ in Document._meta.get_field('type').choices}
EDITABLE_FIELDS = DocumentForm._meta.fields
EXPORT_FORMATS = ('html', 'txt', 'pdf', 'docx')

ExportResult = namedtuple('ExportResult', ['filename', 'content_type', 'payload', 'as_attachment'])


def _owned_documents(user):
    return Document.objects.filter(owner=user).select_related('client', 'project', 'template')


def _as_id(value, field):
    if value in (None, ''):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError({field: ["Must be a numeric id."]})


def list_documents(user, status=None, type=None, client_id=None, project_id=None):
    user = resolve_caller(user)
    documents = _owned_documents(user)

    if status:
        if status not in STATUSES:
            raise ValidationError({'status': [f"Unknown status '{status}'."]})
        documents = documents.filter(status=status)
    if type:
        if type not in TYPES:
            raise ValidationError({'type': [f"Unknown document type '{type}'."]})
        documents = documents.filter(type=type)
    client_id = _as_id(client_id, 'client_id')
    if client_id is not None:
        documents = documents.filter(client_id=client_id)
    project_id = _as_id(project_id, 'project_id')
    if project_id is not None:
        documents = documents.filter(project_id=project_id)
    return list(documents)


def list_fingerprint(user):
    """Changes whenever the caller's document listing can, including the client and project names it shows."""
    return '-'.join(
        queryset_stamp(queryset) for queryset in (
            Document.objects.filter(owner=user),
            Client.objects.filter(owner=user),
            Project.objects.filter(owner=user),
        )
    )


def get_document(user, document_id):
    user = resolve_caller(user)
    return get_owned_or_404(_owned_documents(user), DOCUMENT_NOT_FOUND, id=document_id)


def _validated_form(form):
    if not form.is_valid():
        raise ValidationError(form.errors.as_data())
    return form


def _variable_values(data):
    values = data.get('variable_values')
    if values is None:
        return {}
    if not isinstance(values, dict):
        raise ValidationError({'variable_values': ["Must be an object."]})
    return values


def create_document(user, data):
    """Freestanding document (optionally linked to a template) without substitution."""
    user = resolve_caller(user)
    form = _validated_form(DocumentForm({'status': 'DRAFT', **data}, instance=Document(owner=user)))
    values = _variable_values(data)
    client = get_owned_client(user, data.get('client_id'))
    project = get_owned_project(user, data.get('project_id'))
    template = None
    if data.get('template_id') not in (None, ''):
        template = get_visible_template(user, data['template_id'])

    document = form.save(commit=False)
    document.client = client
    document.project = project
    document.template = template
    document.variable_values = values
    document.is_template = False
    document.save()

    logger.info(f"User {user.pk} created document {document.pk}")
    record_timeline_entry(
        user, 'document', f"Document created: {document.name}",
        project=project, related=document, metadata={'documentType': document.type},
    )
    return document


def _status_change(document, user, to_status, notes=None):
    history = document.status_history
    history.append({
        'from': document.status,
        'to': to_status,
        'changedBy': user.display_name,
        'changedAt': timezone.now().isoformat(),
        'notes': notes or '',
    })
    document.variable_values = {**(document.variable_values or {}), 'statusHistory': history}
    document.status = to_status


def update_document(user, document_id, data):
    """
    Partial update of name, type, content, status, client and project.
    A status change is recorded in the status history.
    """
    user = resolve_caller(user)
    with transaction.atomic():
        document = get_owned_or_404(
            Document.objects.select_for_update().filter(owner=user), DOCUMENT_NOT_FOUND, id=document_id
        )
        previous_status = document.status

        merged = {field: getattr(document, field) for field in EDITABLE_FIELDS}
        merged.update({field: value for field, value in data.items() if field in EDITABLE_FIELDS})
        # the form would overwrite status before the history entry is written
        new_status = merged.pop('status')
        merged['status'] = previous_status
        form = _validated_form(DocumentForm(merged, instance=document))
        if new_status not in STATUSES:
            raise ValidationError({'status': [f"Unknown status '{new_status}'."]})

        if 'client_id' in data:
            client = get_owned_client(user, data['client_id'])
        else:
            client = document.client
        if 'project_id' in data:
            project = get_owned_project(user, data['project_id'])
        else:
            project = document.project

        document = form.save(commit=False)
        document.client = client
        document.project = project
        if new_status != previous_status:
            _status_change(document, user, new_status, data.get('notes'))
        document.save()

    logger.info(f"User {user.pk} updated document {document.pk}")
    return document


def delete_document(user, document_id):
    user = resolve_caller(user)
    document = get_owned_or_404(Document.objects.filter(owner=user), DOCUMENT_NOT_FOUND, id=document_id)
    document_pk = document.pk
    document.delete()
    logger.info(f"User {user.pk} deleted document {document_pk}")


def update_document_status(user, document_id, status, notes=None):
    """Set the status and append ``{from, to, changedBy, changedAt, notes}`` to the history."""
    user = resolve_caller(user)
    if status not in STATUSES:
        raise ValidationError({'status': [f"Unknown status '{status}'."]})

    with transaction.atomic():
        document = get_owned_or_404(
            Document.objects.select_for_update().filter(owner=user), DOCUMENT_NOT_FOUND, id=document_id
        )
        previous = document.status
        _status_change(document, user, status, notes)
        document.save(update_fields=['status', 'variable_values', 'updated_at'])

    logger.info(f"Document {document.pk} status {previous} -> {status}")
    record_timeline_entry(
        user, 'document', f"Document {document.name} marked {document.get_status_display()}",
        description=notes or '', project=document.project, related=document,
        metadata={'from': previous, 'to': status},
        importance='high' if status in ('APPROVED', 'REJECTED') else 'medium',
    )
    return document


def get_document_metrics(user, document_id):
    user = resolve_caller(user)
    document = get_owned_or_404(Document.objects.filter(owner=user), DOCUMENT_NOT_FOUND, id=document_id)
    metrics = calculate_metrics(document.content)
    metrics['lastModified'] = document.updated_at
    metrics['versions'] = document.versions.count()
    return metrics


def export_content(document):
    """Stored content with any scalar stored values substituted once more."""
    values = {
        key: value for key, value in (document.variable_values or {}).items()
        if isinstance(value, SCALAR_TYPES) or value is None
    }
    if not values:
        return document.content
    return substitute(document.content, values)


def export_document(user, document_id, fmt):
    if fmt not in EXPORT_FORMATS:
        raise ValidationError(f"Unsupported export format '{fmt}'.")
    document = get_document(user, document_id)
    if not document.content:
        raise ValidationError("Document has no content to export.")

    content = export_content(document)
    filename = export.make_filename(document.name, fmt)
    if fmt == 'html':
        payload = export.to_html(content, document.name)
    elif fmt == 'pdf':
        payload = export.to_print_html(content, document.name)
    elif fmt == 'txt':
        payload = export.to_text(content)
    else:
        payload = export.to_docx(content, document.name)

    logger.info(f"Exported document {document.pk} as {fmt}")
    return ExportResult(filename, export.CONTENT_TYPES[fmt], payload, fmt != 'pdf')
