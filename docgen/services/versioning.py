# docgen/services/versioning.py
"""
Append-only version history for documents.

Version numbers are allocated while holding a row lock on the document, and
the (document, version_number) unique constraint backs that up at the
database level. Versions are never edited or deleted here.
"""
import hashlib
import json
import logging

from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import Max

from accounts.access_control import get_owned_or_404, resolve_caller
from docgen.models import Document, DocumentVersion
from docgen.services.metrics import calculate_metrics
from project.services.timeline import record_timeline_entry

logger = logging.getLogger(__name__)

DOCUMENT_NOT_FOUND = "Document not found or access denied"


def content_hash(content):
    """Non-cryptographic change detector: 64-bit BLAKE2b hex digest."""
    return hashlib.blake2b((content or '').encode('utf-8'), digest_size=8).hexdigest()


def next_version_number(document):
    current = document.versions.aggregate(highest=Max('version_number'))['highest']
    return (current or 0) + 1


def create_version(document, user, change_notes=None):
    """
    Write a version row for ``document`` as it currently stands.
    Callers must hold the document row lock (see ``lock_document``).
    """
    content = document.content or ''
    return DocumentVersion.objects.create(
        document=document,
        version_number=next_version_number(document),
        content=content,
        variable_values=document.variable_values or {},
        content_hash=content_hash(content),
        change_notes=change_notes,
        metrics=calculate_metrics(content),
        created_by=user.display_name,
    )


def lock_document(user, document_id):
    return get_owned_or_404(
        Document.objects.select_for_update().filter(owner=user), DOCUMENT_NOT_FOUND, id=document_id
    )


def snapshot(user, document_id, change_notes=None):
    user = resolve_caller(user)
    with transaction.atomic():
        document = lock_document(user, document_id)
        if not document.content:
            raise ValidationError("Document has no content to version.")
        version = create_version(document, user, change_notes)

    logger.info(f"Created version {version.version_number} of document {document.pk}")
    return version


def restore(user, document_id, version_id):
    """
    Roll ``document_id`` back to ``version_id``.

    A backup of the current state is written first and a marker version after,
    all in one transaction, so every restore can itself be undone.
    """
    user = resolve_caller(user)
    with transaction.atomic():
        document = lock_document(user, document_id)
        version = get_owned_or_404(document.versions.all(), "Version not found", id=version_id)
        number = version.version_number

        create_version(document, user, f"Backup before restoring to v{number}")

        document.content = version.content
        document.variable_values = version.variable_values
        document.save(update_fields=['content', 'variable_values', 'size', 'updated_at'])

        create_version(document, user, f"Restored to v{number}")

    logger.info(f"Restored document {document.pk} to version {number}")
    record_timeline_entry(
        user, 'document', f"Document restored to version {number}",
        description=document.name, project=document.project, related=document,
        metadata={'versionNumber': number},
    )
    return document


def list_versions(user, document_id):
    user = resolve_caller(user)
    document = get_owned_or_404(Document.objects.filter(owner=user), DOCUMENT_NOT_FOUND, id=document_id)
    return list(document.versions.all())


def _metric(version, name):
    return (version.metrics or {}).get(name, 0)


def compare_versions(older, newer):
    """Summary of what changed between two versions of the same document."""
    return {
        'hasContentChanges': older.content_hash != newer.content_hash or older.content != newer.content,
        'hasVariableChanges': (
            json.dumps(older.variable_values, sort_keys=True, default=str)
            != json.dumps(newer.variable_values, sort_keys=True, default=str)
        ),
        'wordCountDiff': _metric(newer, 'wordCount') - _metric(older, 'wordCount'),
        'characterCountDiff': _metric(newer, 'characterCount') - _metric(older, 'characterCount'),
        'timeDiff': (newer.created_at - older.created_at).total_seconds(),
    }
