from django.contrib.auth.decorators import login_required
from django.http import JsonResponse
from django.views.decorators.http import require_GET
import logging

from accounts.access_control import resolve_caller
from utils.http import json_api
from .models import Client, Project
from .services.timeline import get_project_timeline

logger = logging.getLogger(__name__)


@login_required
@require_GET
@json_api("Failed to fetch clients")
def list_clients(request):
    user = resolve_caller(request.user)
    status = request.GET.get('status', 'ACTIVE')
    clients = Client.objects.filter(owner=user)
    if status in ('ACTIVE', 'ARCHIVED'):
        clients = clients.filter(status=status)
    return JsonResponse({'clients': list(clients.values('id', 'name', 'company', 'email', 'status'))})


@login_required
@require_GET
@json_api("Failed to fetch projects")
def list_projects(request):
    user = resolve_caller(request.user)
    projects = Project.objects.filter(owner=user)
    client_id = request.GET.get('client_id')
    if client_id and client_id.isdigit():
        projects = projects.filter(client_id=client_id)
    return JsonResponse({'projects': list(projects.values('id', 'name', 'status', 'client_id'))})


@login_required
@require_GET
@json_api("Failed to fetch project timeline")
def project_timeline(request, project_id):
    entries = get_project_timeline(request.user, project_id)
    return JsonResponse({'entries': [
        {
            'id': entry.id,
            'type': entry.entry_type,
            'title': entry.title,
            'description': entry.description,
            'timestamp': entry.created_at.isoformat(),
            'relatedId': entry.related_id,
            'relatedType': entry.related_type,
            'metadata': entry.metadata,
            'importance': entry.importance,
        }
        for entry in entries
    ]})
