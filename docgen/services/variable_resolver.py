# docgen/services/variable_resolver.py
"""
Auto-populated template variables.

``resolve_variables`` gathers values from the calling user, an optional
client and project, and the clock. The result is merged by the caller into
the values passed to generation; generation itself never calls back here.
"""
import calendar
import logging
import math
from datetime import timedelta

from django.conf import settings
from django.utils import timezone

from accounts.access_control import resolve_caller
from project.models import Client, Project

logger = logging.getLogger(__name__)


def format_date(value):
    """Render a date the way documents display it: M/D/YYYY."""
    if not value:
        return ''
    return f"{value.month}/{value.day}/{value.year}"


def add_months(value, months):
    """Shift ``value`` by whole calendar months, clamping the day to the month end."""
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def time_greeting(hour):
    if hour < 12:
        return 'Good morning'
    if hour < 18:
        return 'Good afternoon'
    return 'Good evening'


def system_variables(now):
    today = now.date()
    in_30_days = format_date(today + timedelta(days=30))
    return {
        'current_date': format_date(today),
        'today': format_date(today),
        'current_year': str(today.year),
        'current_month': calendar.month_name[today.month],
        'next_week': format_date(today + timedelta(days=7)),
        'next_month': format_date(add_months(today, 1)),
        'in_30_days': in_30_days,
        'due_date_30': in_30_days,
        'time_greeting': time_greeting(now.hour),
    }


def user_variables(user):
    name = user.get_full_name()
    email = user.email or ''
    fallback = getattr(settings, 'DOCGEN_FALLBACK_BUSINESS_NAME', 'Your Business')
    values = {
        'my_name': name,
        'your_name': name,
        'my_email': email,
        'your_email': email,
        'business_name': user.business_name or user.display_name or fallback,
    }
    values.update(getattr(settings, 'DOCGEN_BUSINESS_DEFAULTS', {}))
    return values


def client_variables(client):
    first_name = client.first_name
    return {
        'client_name': client.name,
        'client_email': client.email or '',
        'client_phone': client.phone or '',
        'client_company': client.company or '',
        'client_notes': client.notes or '',
        'company_name': client.company or client.name,
        'client_first_name': first_name,
        'dear_client': f"Dear {client.name}",
        'dear_firstname': f"Dear {first_name}",
    }


def project_variables(project):
    values = {
        'project_name': project.name,
        'project_description': project.description or '',
        'project_start_date': format_date(project.start_date),
        'project_end_date': format_date(project.end_date),
        'project_status': project.status,
    }
    if project.start_date and project.end_date:
        days = (project.end_date - project.start_date).days
        values['project_duration'] = f"{days} days"
        values['project_duration_weeks'] = f"{math.ceil(days / 7)} weeks"
    return values


def _lookup(queryset, pk):
    if pk in (None, ''):
        return None
    try:
        return queryset.filter(pk=pk).first()
    except (TypeError, ValueError):
        return None


def resolve_variables(user, client_id=None, project_id=None, now=None):
    """
    Build the auto-populated variable mapping for ``user``.

    Client and project lookups are scoped to the caller; a reference that is
    missing or belongs to someone else is skipped rather than failing the call.
    """
    user = resolve_caller(user)
    if now is None:
        now = timezone.localtime()

    values = system_variables(now)
    values.update(user_variables(user))

    client = _lookup(Client.objects.filter(owner=user), client_id)
    if client is not None:
        values.update(client_variables(client))
    elif client_id not in (None, ''):
        logger.debug(f"Client {client_id} not available to user {user.pk}; client variables skipped")

    project = _lookup(Project.objects.filter(owner=user).select_related('client'), project_id)
    if project is not None:
        values.update(project_variables(project))
        if client is None and project.client is not None:
            values.update(client_variables(project.client))
    elif project_id not in (None, ''):
        logger.debug(f"Project {project_id} not available to user {user.pk}; project variables skipped")

    return values
