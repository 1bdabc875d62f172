from django.contrib import admin
from .models import Client, Project, TimelineEntry


class ProjectInline(admin.TabularInline):
    model = Project
    extra = 0
    fields = ("name", "status", "start_date", "end_date")


@admin.register(Client)
class ClientAdmin(admin.ModelAdmin):
    list_display = ("name", "company", "email", "status", "owner", "updated_at")
    list_filter = ("status",)
    search_fields = ("name", "company", "email")
    inlines = [ProjectInline]


@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    list_display = ("name", "client", "status", "start_date", "end_date", "owner")
    list_filter = ("status",)
    search_fields = ("name", "client__name")


@admin.register(TimelineEntry)
class TimelineEntryAdmin(admin.ModelAdmin):
    list_display = ("title", "entry_type", "project", "importance", "created_at")
    list_filter = ("entry_type", "importance")
    readonly_fields = ("created_at",)
