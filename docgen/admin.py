from django.contrib import admin

from .models import Document, DocumentTemplate, DocumentVersion


@admin.register(DocumentTemplate)
class DocumentTemplateAdmin(admin.ModelAdmin):
    list_display = ("name", "type", "is_global", "is_default", "owner", "updated_at")
    list_filter = ("type", "is_global", "is_default")
    search_fields = ("name", "description")


class DocumentVersionInline(admin.TabularInline):
    model = DocumentVersion
    extra = 0
    can_delete = False
    fields = ("version_number", "change_notes", "content_hash", "created_by", "created_at")
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Document)
class DocumentAdmin(admin.ModelAdmin):
    list_display = ("name", "type", "status", "client", "project", "owner", "updated_at")
    list_filter = ("type", "status")
    search_fields = ("name", "client__name", "project__name")
    readonly_fields = ("size", "created_at", "updated_at")
    inlines = [DocumentVersionInline]
