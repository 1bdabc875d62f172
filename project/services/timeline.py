# project/services/timeline.py
import logging

from django.db import DatabaseError, transaction

from accounts.access_control import get_owned_or_404, resolve_caller
from project.models import Project, TimelineEntry

logger = logging.getLogger(__name__)


def record_timeline_entry(owner, entry_type, title, description="", project=None,
                          related=None, metadata=None, importance="medium"):
    """
    Best-effort write of a timeline entry.

    Runs in its own savepoint so a failing insert never breaks the caller's
    transaction. Failures are logged and swallowed; returns the entry or None.
    """
    related_id = related_type = None
    if related is not None:
        related_id = str(related.pk)
        related_type = related._meta.model_name

    try:
        with transaction.atomic():
            return TimelineEntry.objects.create(
                owner=owner,
                project=project,
                entry_type=entry_type,
                title=title,
                description=description,
                related_id=related_id,
                related_type=related_type,
                metadata=metadata or {},
                importance=importance,
            )
    except (DatabaseError, ValueError, TypeError) as e:
        logger.exception(f"Timeline entry '{title}' could not be recorded: {e}")
        return None


def get_project_timeline(owner, project_id):
    """Timeline entries for one of the owner's projects, newest first."""
    owner = resolve_caller(owner)
    project = get_owned_or_404(
        Project.objects.filter(owner=owner), "Project not found or access denied", id=project_id
    )
    return list(project.timeline_entries.all())
