from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Q

from .variables import validate_variable_definitions


DOCUMENT_TYPE_CHOICES = [
    ('PROPOSAL', 'Proposal'),
    ('CONTRACT', 'Contract'),
    ('INVOICE', 'Invoice'),
    ('REPORT', 'Report'),
    ('OTHER', 'Other'),
]


class DocumentTemplateQuerySet(models.QuerySet):
    def visible_to(self, user):
        """Global templates plus the user's own."""
        return self.filter(Q(is_global=True) | Q(owner=user, is_global=False))

    def owned_by(self, user):
        return self.filter(owner=user, is_global=False)


class DocumentTemplate(models.Model):
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True, null=True)
    type = models.CharField(max_length=20, choices=DOCUMENT_TYPE_CHOICES)
    content = models.TextField()
    variables = models.JSONField(default=list, blank=True)
    is_default = models.BooleanField(default=False)
    is_global = models.BooleanField(default=False)
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE,
        null=True, blank=True, related_name='document_templates',
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = DocumentTemplateQuerySet.as_manager()

    class Meta:
        ordering = ['name']
        constraints = [
            models.CheckConstraint(
                condition=Q(is_global=True, owner__isnull=True) | Q(is_global=False, owner__isnull=False),
                name='docgen_template_owner_scope',
            ),
            models.UniqueConstraint(
                fields=['name'], condition=Q(is_global=True),
                name='docgen_unique_global_template_name',
            ),
        ]

    def __str__(self):
        return self.name

    def clean(self):
        if self.is_global and self.owner_id:
            raise ValidationError("Global templates cannot have an owner.")
        if not self.is_global and not self.owner_id:
            raise ValidationError("Templates must either be global or belong to a user.")
        self.variables = validate_variable_definitions(self.variables)


class Document(models.Model):
    STATUS_CHOICES = [
        ('DRAFT', 'Draft'),
        ('SENT', 'Sent'),
        ('APPROVED', 'Approved'),
        ('REJECTED', 'Rejected'),
        ('ARCHIVED', 'Archived'),
    ]

    name = models.CharField(max_length=255)
    type = models.CharField(max_length=20, choices=DOCUMENT_TYPE_CHOICES)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='DRAFT')
    content = models.TextField(blank=True, null=True)
    size = models.PositiveIntegerField(blank=True, null=True)
    client = models.ForeignKey('project.Client', on_delete=models.SET_NULL, null=True, blank=True, related_name='documents')
    project = models.ForeignKey('project.Project', on_delete=models.SET_NULL, null=True, blank=True, related_name='documents')
    template = models.ForeignKey('DocumentTemplate', on_delete=models.SET_NULL, null=True, blank=True, related_name='documents')
    variable_values = models.JSONField(default=dict, blank=True)
    is_template = models.BooleanField(default=False)
    owner = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='documents')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-updated_at', '-id']

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):
        # size always mirrors the stored content length
        self.size = len(self.content) if self.content is not None else None
        super().save(*args, **kwargs)

    @property
    def status_history(self):
        return list((self.variable_values or {}).get('statusHistory', []))


class DocumentVersion(models.Model):
    """Immutable snapshot of a document's content and variable values."""
    document = models.ForeignKey('Document', on_delete=models.CASCADE, related_name='versions')
    version_number = models.PositiveIntegerField()
    content = models.TextField(blank=True)
    variable_values = models.JSONField(default=dict, blank=True)
    content_hash = models.CharField(max_length=64)
    change_notes = models.TextField(blank=True, null=True)
    metrics = models.JSONField(default=dict, blank=True)
    created_by = models.CharField(max_length=255)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-version_number']
        constraints = [
            models.UniqueConstraint(fields=['document', 'version_number'], name='docgen_unique_version_number'),
        ]

    def __str__(self):
        return f"{self.document.name} v{self.version_number}"

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValidationError("Document versions are immutable.")
        super().save(*args, **kwargs)
