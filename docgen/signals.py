# docgen/signals.py
import logging

from django.core.cache import cache
from django.db.models import Count, Max
from django.db.models.signals import post_delete, post_save
from django.dispatch import Signal, receiver

from project.models import Client, Project

from .models import Document, DocumentTemplate, DocumentVersion

logger = logging.getLogger(__name__)

DOCUMENTS_PATH = '/documents'
TEMPLATES_PATH = '/documents/templates'

# Sent with ``path`` whenever the data behind a logical page changes.
page_stale = Signal()


def document_path(document_id):
    return f"{DOCUMENTS_PATH}/{document_id}"


def template_path(template_id):
    return f"{TEMPLATES_PATH}/{template_id}"


def _generation_key(path):
    return f"docgen:page-generation:{path}"


def page_generation(path):
    """Counter bumped each time ``path`` is marked stale; used for ETags."""
    return cache.get(_generation_key(path), 0)


def queryset_stamp(queryset):
    """
    ``count:latest-update`` for a queryset of rows with ``updated_at``.
    Adding, removing or saving a row changes it, whatever state the cache is in.
    """
    stats = queryset.order_by().aggregate(count=Count('id'), latest=Max('updated_at'))
    latest = stats['latest'].timestamp() if stats['latest'] else 0
    return f"{stats['count']}:{latest}"


def revalidate_path(path):
    """Notify receivers that ``path`` is stale. Receiver errors are logged, never raised."""
    for receiver_func, response in page_stale.send_robust(sender=None, path=path):
        if isinstance(response, Exception):
            logger.error(f"Revalidation receiver {receiver_func!r} failed for {path}: {response}")


@receiver(page_stale)
def bump_page_generation(sender, path, **kwargs):
    key = _generation_key(path)
    cache.add(key, 0, timeout=None)
    cache.incr(key)


@receiver([post_save, post_delete], sender=Document)
def on_document_changed(sender, instance, **kwargs):
    revalidate_path(DOCUMENTS_PATH)
    revalidate_path(document_path(instance.pk))


@receiver(post_save, sender=DocumentVersion)
def on_version_created(sender, instance, created, **kwargs):
    if created:
        revalidate_path(document_path(instance.document_id))


@receiver([post_save, post_delete], sender=DocumentTemplate)
def on_template_changed(sender, instance, **kwargs):
    revalidate_path(TEMPLATES_PATH)
    revalidate_path(template_path(instance.pk))


@receiver([post_save, post_delete], sender=Client)
@receiver([post_save, post_delete], sender=Project)
def on_related_record_changed(sender, instance, **kwargs):
    # document listings show client and project names
    revalidate_path(DOCUMENTS_PATH)
