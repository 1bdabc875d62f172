from django import template
from django.utils.safestring import mark_safe

from docgen.services.export import markdown_to_html

register = template.Library()


@register.filter
def render_markdown(content):
    """
    Usage: {{ document.content|render_markdown }}
    Headings, lists and bold/italic runs become HTML; other lines become paragraphs.
    """
    return mark_safe(markdown_to_html(content))
