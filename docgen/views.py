# docgen/views.py
from django.contrib.auth.decorators import login_required
from django.core.exceptions import ValidationError
from django.http import HttpResponse, JsonResponse
from django.utils import timezone
from django.views.decorators.http import etag, require_GET, require_POST

from accounts.access_control import resolve_caller
from utils.http import json_api, parse_json_body
from .models import Document
from .services import documents as document_service
from .services import export
from .services import templates as template_service
from .services import versioning
from .services.generation import generate_document
from .services.variable_resolver import resolve_variables
from .signals import DOCUMENTS_PATH, TEMPLATES_PATH, page_generation


def _list_etag(path, fingerprint):
    def etag_func(request, *args, **kwargs):
        return (
            f"{request.user.pk}-{fingerprint(request.user)}-"
            f"{page_generation(path)}-{request.GET.urlencode()}"
        )
    return etag_func


def template_dict(template, include_content=True):
    data = {
        'id': template.id,
        'name': template.name,
        'description': template.description,
        'type': template.type,
        'variables': template.variables or [],
        'isDefault': template.is_default,
        'isGlobal': template.is_global,
        'createdAt': template.created_at,
        'updatedAt': template.updated_at,
    }
    if include_content:
        data['content'] = template.content
    return data


def document_dict(document, include_content=True):
    data = {
        'id': document.id,
        'name': document.name,
        'type': document.type,
        'status': document.status,
        'size': document.size,
        'clientId': document.client_id,
        'clientName': document.client.name if document.client else None,
        'projectId': document.project_id,
        'projectName': document.project.name if document.project else None,
        'templateId': document.template_id,
        'isTemplate': document.is_template,
        'createdAt': document.created_at,
        'updatedAt': document.updated_at,
    }
    if include_content:
        data['content'] = document.content
        data['variableValues'] = document.variable_values
        data['statusHistory'] = document.status_history
    return data


def version_dict(version):
    return {
        'id': version.id,
        'versionNumber': version.version_number,
        'content': version.content,
        'variableValues': version.variable_values,
        'contentHash': version.content_hash,
        'changeNotes': version.change_notes,
        'metrics': version.metrics,
        'createdBy': version.created_by,
        'createdAt': version.created_at,
    }


# ---------------------------------------------------------------- templates

@login_required
@require_GET
@etag(_list_etag(TEMPLATES_PATH, template_service.list_fingerprint))
@json_api("Failed to fetch templates")
def list_templates(request):
    templates = template_service.list_templates(request.user)
    return JsonResponse({'templates': [template_dict(t, include_content=False) for t in templates]})


@login_required
@require_GET
@json_api("Failed to fetch template")
def template_detail(request, template_id):
    template = template_service.get_template(request.user, template_id)
    return JsonResponse({'template': template_dict(template)})


@login_required
@require_POST
@json_api("Failed to create template")
def create_template(request):
    template = template_service.create_template(request.user, parse_json_body(request))
    return JsonResponse({'success': True, 'template': template_dict(template)}, status=201)


@login_required
@require_POST
@json_api("Failed to update template")
def update_template(request, template_id):
    template = template_service.update_template(request.user, template_id, parse_json_body(request))
    return JsonResponse({'success': True, 'template': template_dict(template)})


@login_required
@require_POST
@json_api("Failed to delete template")
def delete_template(request, template_id):
    template_service.delete_template(request.user, template_id)
    return JsonResponse({'success': True})


@login_required
@require_POST
@json_api("Failed to copy template")
def copy_template(request, template_id):
    template = template_service.copy_global_template(request.user, template_id)
    return JsonResponse({'success': True, 'template': template_dict(template)}, status=201)


@login_required
@require_GET
@json_api("Failed to generate template preview")
def template_preview(request, template_id):
    return JsonResponse(template_service.generate_template_preview(request.user, template_id))


# ---------------------------------------------------------------- generation

@login_required
@require_GET
@json_api("Failed to resolve variables")
def variable_values(request):
    values = resolve_variables(
        request.user,
        client_id=request.GET.get('client_id'),
        project_id=request.GET.get('project_id'),
    )
    return JsonResponse({'variables': values})


@login_required
@require_POST
@json_api("Failed to generate document")
def generate(request):
    data = parse_json_body(request)
    create_version = data.get('create_version', False)
    if not isinstance(create_version, bool):
        raise ValidationError({'create_version': ["Must be true or false."]})
    document = generate_document(
        request.user,
        data.get('template_id'),
        data.get('name'),
        data.get('variable_values'),
        client_id=data.get('client_id'),
        project_id=data.get('project_id'),
        status=data.get('status'),
        create_version=create_version,
    )
    return JsonResponse({
        'success': True,
        'documentId': document.id,
        'filename': export.make_filename(document.name, 'html'),
    }, status=201)


# ---------------------------------------------------------------- documents

@login_required
@require_GET
@etag(_list_etag(DOCUMENTS_PATH, document_service.list_fingerprint))
@json_api("Failed to fetch documents")
def list_documents(request):
    documents = document_service.list_documents(
        request.user,
        status=request.GET.get('status'),
        type=request.GET.get('type'),
        client_id=request.GET.get('client_id'),
        project_id=request.GET.get('project_id'),
    )
    return JsonResponse({'documents': [document_dict(d, include_content=False) for d in documents]})


@login_required
@require_GET
@json_api("Failed to export documents")
def export_documents_excel(request):
    user = resolve_caller(request.user)
    documents = Document.objects.filter(owner=user).select_related('client', 'project', 'template')
    response = HttpResponse(export.documents_to_excel(documents), content_type=export.CONTENT_TYPES['xlsx'])
    filename = f"documents_{timezone.localdate()}.xlsx"
    response['Content-Disposition'] = f'attachment; filename="{filename}"'
    return response


@login_required
@require_POST
@json_api("Failed to create document")
def create_document(request):
    document = document_service.create_document(request.user, parse_json_body(request))
    return JsonResponse({'success': True, 'document': document_dict(document)}, status=201)


@login_required
@require_GET
@json_api("Failed to fetch document")
def document_detail(request, document_id):
    document = document_service.get_document(request.user, document_id)
    return JsonResponse({'document': document_dict(document)})


@login_required
@require_POST
@json_api("Failed to update document")
def update_document(request, document_id):
    document = document_service.update_document(request.user, document_id, parse_json_body(request))
    return JsonResponse({'success': True, 'document': document_dict(document)})


@login_required
@require_POST
@json_api("Failed to delete document")
def delete_document(request, document_id):
    document_service.delete_document(request.user, document_id)
    return JsonResponse({'success': True})


@login_required
@require_POST
@json_api("Failed to update document status")
def update_status(request, document_id):
    data = parse_json_body(request)
    document = document_service.update_document_status(
        request.user, document_id, data.get('status'), data.get('notes'),
    )
    return JsonResponse({'success': True, 'status': document.status, 'statusHistory': document.status_history})


@login_required
@require_GET
@json_api("Failed to get document metrics")
def document_metrics(request, document_id):
    return JsonResponse({'metrics': document_service.get_document_metrics(request.user, document_id)})


@login_required
@require_GET
@json_api("Failed to export document")
def export_document(request, document_id, fmt):
    result = document_service.export_document(request.user, document_id, fmt)
    response = HttpResponse(result.payload, content_type=result.content_type)
    disposition = 'attachment' if result.as_attachment else 'inline'
    response['Content-Disposition'] = f'{disposition}; filename="{result.filename}"'
    return response


# ---------------------------------------------------------------- versions

@login_required
@require_GET
@json_api("Failed to fetch document versions")
def list_versions(request, document_id):
    versions = versioning.list_versions(request.user, document_id)
    payload = []
    # newest first; each entry is compared with the one before it
    for index, version in enumerate(versions):
        data = version_dict(version)
        if index + 1 < len(versions):
            data['changes'] = versioning.compare_versions(versions[index + 1], version)
        payload.append(data)
    return JsonResponse({'versions': payload})


@login_required
@require_POST
@json_api("Failed to create document version")
def create_version(request, document_id):
    data = parse_json_body(request)
    version = versioning.snapshot(request.user, document_id, data.get('change_notes'))
    return JsonResponse({'success': True, 'versionId': version.id, 'versionNumber': version.version_number}, status=201)


@login_required
@require_POST
@json_api("Failed to restore document version")
def restore_version(request, document_id, version_id):
    document = versioning.restore(request.user, document_id, version_id)
    return JsonResponse({'success': True, 'document': document_dict(document)})
