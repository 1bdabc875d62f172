# docgen/services/templates.py
import logging
from datetime import timedelta

from django.core.exceptions import PermissionDenied, ValidationError
from django.db import transaction
from django.utils import timezone

from accounts.access_control import get_owned_or_404, resolve_caller
from docgen.default_templates import DEFAULT_TEMPLATES
from docgen.forms import DocumentTemplateForm
from docgen.models import DocumentTemplate
from docgen.services.template_engine import extract_placeholders, highlight_variables, substitute
from docgen.services.variable_resolver import format_date, system_variables
from docgen.signals import queryset_stamp
from docgen.variables import validate_variable_definitions

logger = logging.getLogger(__name__)

TEMPLATE_NOT_FOUND = "Template not found or access denied"
EDITABLE_FIELDS = DocumentTemplateForm._meta.fields


def list_templates(user):
    """Global templates (oldest first) followed by the user's own (most recently edited first)."""
    user = resolve_caller(user)
    global_templates = DocumentTemplate.objects.filter(is_global=True).order_by('created_at', 'id')
    own_templates = DocumentTemplate.objects.owned_by(user).order_by('-updated_at', '-id')
    return list(global_templates) + list(own_templates)


def list_fingerprint(user):
    return queryset_stamp(DocumentTemplate.objects.visible_to(user))


def get_template(user, template_id):
    user = resolve_caller(user)
    return get_owned_or_404(DocumentTemplate.objects.visible_to(user), TEMPLATE_NOT_FOUND, id=template_id)


def _save_form(form):
    if not form.is_valid():
        raise ValidationError(form.errors.as_data())
    return form.save()


def create_template(user, data):
    user = resolve_caller(user)
    form = DocumentTemplateForm(data, instance=DocumentTemplate(owner=user, is_global=False))
    template = _save_form(form)
    logger.info(f"User {user.pk} created template {template.pk}")
    return template


def _get_editable_template(user, template_id):
    template = get_owned_or_404(DocumentTemplate.objects.visible_to(user), TEMPLATE_NOT_FOUND, id=template_id)
    if template.is_global:
        raise PermissionDenied("Global templates are read-only; copy the template to customise it.")
    return template


def update_template(user, template_id, data):
    """Partial update: fields missing from ``data`` keep their current values."""
    user = resolve_caller(user)
    template = _get_editable_template(user, template_id)

    merged = {field: getattr(template, field) for field in EDITABLE_FIELDS}
    merged.update({field: value for field, value in data.items() if field in EDITABLE_FIELDS})
    template = _save_form(DocumentTemplateForm(merged, instance=template))
    logger.info(f"User {user.pk} updated template {template.pk}")
    return template


def delete_template(user, template_id):
    user = resolve_caller(user)
    template = _get_editable_template(user, template_id)
    template_pk = template.pk
    template.delete()
    logger.info(f"User {user.pk} deleted template {template_pk}")


def copy_global_template(user, template_id):
    """Editable private copy of a global template."""
    user = resolve_caller(user)
    source = get_owned_or_404(DocumentTemplate.objects.filter(is_global=True), "Global template not found", id=template_id)
    copy = DocumentTemplate.objects.create(
        name=f"{source.name} (Custom)",
        description=source.description,
        type=source.type,
        content=source.content,
        variables=list(source.variables or []),
        is_default=False,
        is_global=False,
        owner=user,
    )
    logger.info(f"User {user.pk} copied global template {source.pk} to {copy.pk}")
    return copy


def sample_variables(user, now=None):
    """Realistic stand-in values for previewing a template without a client or project."""
    now = now or timezone.localtime()
    today = now.date()
    name = user.get_full_name()

    sample = system_variables(now)
    sample.update({
        'my_name': name or 'John Smith',
        'your_name': name or 'John Smith',
        'my_email': user.email or 'john@example.com',
        'your_email': user.email or 'john@example.com',
        'business_name': user.business_name or name or 'Smith Consulting',

        'client_name': 'Jane Doe',
        'client_first_name': 'Jane',
        'client_email': 'jane@example.com',
        'client_phone': '(555) 123-4567',
        'client_company': 'Acme Corporation',
        'company_name': 'Acme Corporation',
        'dear_client': 'Dear Jane Doe',
        'dear_firstname': 'Dear Jane',

        'project_name': 'E-commerce Website Redesign',
        'project_description': (
            'Complete redesign of the company website with modern UI/UX, mobile '
            'responsiveness, and enhanced e-commerce functionality.'
        ),
        'project_start_date': format_date(today),
        'project_end_date': format_date(today + timedelta(days=30)),
        'project_duration': '30 days',
        'project_duration_weeks': '4-5 weeks',
        'project_status': 'IN_PROGRESS',

        'project_cost': '$5,000',
        'total_cost': '$5,000',
        'hourly_rate': '$75',
        'estimated_hours': '67 hours',
        'payment_terms': '50% upfront, 50% on completion',
        'late_fee': '1.5% per month',
        'currency': '$',
        'tax_rate': '8.5%',
        'subtotal': '$4,500',
        'tax_amount': '$382.50',
        'total_amount': '$5,000',
    })
    return sample


def _sample_for_definition(definition, today):
    var_type = definition.get('type')
    if var_type == 'currency':
        return '$2,500'
    if var_type == 'number':
        return '42'
    if var_type == 'date':
        return format_date(today)
    if var_type == 'select':
        options = definition.get('options') or []
        return options[0] if options else 'Option 1'
    if var_type == 'textarea':
        return (
            'This is sample text for the textarea field. It demonstrates how longer '
            'content will appear in your final document.'
        )
    return definition.get('defaultValue') or f"Sample {definition.get('label') or definition.get('key')}"


def generate_template_preview(user, template_id, now=None):
    """
    Template content rendered with sample data.

    Returns the substituted ``content``, the sample ``variables``, a
    ``highlighted`` HTML rendering and the ``placeholders`` found in the
    template, with ``missingKeys`` listing those no sample value covers.
    """
    user = resolve_caller(user)
    template = get_owned_or_404(DocumentTemplate.objects.visible_to(user), TEMPLATE_NOT_FOUND, id=template_id)
    now = now or timezone.localtime()

    sample = sample_variables(user, now)
    for definition in template.variables or []:
        key = definition.get('key')
        if key and not sample.get(key):
            sample[key] = _sample_for_definition(definition, now.date())

    placeholders = extract_placeholders(template.content)
    return {
        'content': substitute(template.content, sample),
        'variables': sample,
        'highlighted': highlight_variables(template.content, sample),
        'placeholders': placeholders,
        'missingKeys': [key for key in placeholders if key not in sample],
    }


def seed_global_templates(refresh=False):
    """
    Install the bundled global templates, keyed on name.

    Existing templates are left alone unless ``refresh`` is set, in which case
    their content and variables are overwritten. Returns ``[(template, created)]``.
    """
    results = []
    with transaction.atomic():
        for seed in DEFAULT_TEMPLATES:
            defaults = {
                'description': seed['description'],
                'type': seed['type'],
                'content': seed['content'],
                'variables': validate_variable_definitions(seed['variables']),
                'is_default': seed['is_default'],
                'owner': None,
            }
            if refresh:
                template, created = DocumentTemplate.objects.update_or_create(
                    name=seed['name'], is_global=True, defaults=defaults,
                )
            else:
                template, created = DocumentTemplate.objects.get_or_create(
                    name=seed['name'], is_global=True, defaults=defaults,
                )
            results.append((template, created))

    created_count = sum(1 for _, created in results if created)
    logger.info(f"Seeded global templates: {created_count} created, {len(results) - created_count} existing")
    return results
