# docgen/services/generation.py
import logging

from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils import timezone

from accounts.access_control import get_owned_or_404, resolve_caller
from docgen.models import Document, DocumentTemplate
from docgen.services.metrics import calculate_metrics
from docgen.services.template_engine import substitute
from docgen.services import versioning
from docgen.variables import coerce_variable_values
from project.models import Client, Project
from project.services.timeline import record_timeline_entry

logger = logging.getLogger(__name__)

STATUSES = {choice for choice, _ in Document.STATUS_CHOICES}


def get_visible_template(user, template_id):
    return get_owned_or_404(
        DocumentTemplate.objects.visible_to(user), "Template not found or access denied", id=template_id
    )


def get_owned_client(user, client_id):
    if client_id in (None, ''):
        return None
    return get_owned_or_404(Client.objects.filter(owner=user), "Client not found or access denied", id=client_id)


def get_owned_project(user, project_id):
    if project_id in (None, ''):
        return None
    return get_owned_or_404(Project.objects.filter(owner=user), "Project not found or access denied", id=project_id)


def generate_document(user, template_id, name, variable_values=None, client_id=None,
                      project_id=None, status=None, create_version=False):
    """
    Create a document by substituting ``variable_values`` into a template.

    Every supplied key is substituted; declared template variables missing
    from the input fall back to their default. The stored variable values
    carry the content metrics, the generation time and the template's
    ``updated_at`` so stale documents can be spotted later.
    """
    user = resolve_caller(user)
    template = get_visible_template(user, template_id)

    name = (name or '').strip()
    if not name:
        raise ValidationError({'name': ["Document name is required."]})
    status = status or 'DRAFT'
    if status not in STATUSES:
        raise ValidationError({'status': [f"Unknown status '{status}'."]})

    values = coerce_variable_values(template.variables, variable_values)
    client = get_owned_client(user, client_id)
    project = get_owned_project(user, project_id)

    content = substitute(template.content, values)
    metrics = calculate_metrics(content)

    with transaction.atomic():
        document = Document.objects.create(
            name=name,
            type=template.type,
            status=status,
            content=content,
            variable_values={
                **values,
                'metrics': metrics,
                'generatedAt': timezone.now().isoformat(),
                'templateVersion': template.updated_at.isoformat(),
            },
            is_template=False,
            owner=user,
            template=template,
            client=client,
            project=project,
        )
        if create_version:
            locked = Document.objects.select_for_update().get(pk=document.pk)
            versioning.create_version(locked, user, "Initial version")

    logger.info(f"Generated document {document.pk} from template {template.pk} for user {user.pk}")
    record_timeline_entry(
        user, 'document', f"Document generated: {document.name}",
        description=f"Created from template '{template.name}'",
        project=project, related=document,
        metadata={'templateId': template.pk, 'documentType': document.type},
    )
    return document


def generate_document_from_template(user, template_id, name, variable_values=None,
                                    client_id=None, project_id=None, status=None):
    """Template gallery entry point; same substitution rules as ``generate_document``."""
    return generate_document(
        user, template_id, name, variable_values,
        client_id=client_id, project_id=project_id, status=status,
    )
