# docgen/services/template_engine.py
"""
Placeholder substitution for document templates.

Placeholders are written ``{{key}}``. Substitution is a single pass over the
original content: inserted values are never scanned again, so a value that
itself looks like a placeholder is emitted literally.
"""
import re

from django.conf import settings
from django.utils.html import escape

PLACEHOLDER_RE = re.compile(r'\{\{([^}]*)\}\}')


def missing_marker():
    return getattr(settings, 'DOCGEN_MISSING_VALUE', '[MISSING_VALUE]')


def _as_text(value):
    if value is None:
        return ''
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return str(value)


def substitute(content, variables):
    """
    Replace every ``{{key}}`` for which ``variables`` has an entry with
    its text (booleans as ``true``/``false``, None as an empty string); any
    other ``{{...}}`` becomes the missing-value marker.
    """
    variables = variables or {}
    marker = missing_marker()

    def replace(match):
        key = match.group(1)
        if key in variables:
            return _as_text(variables[key])
        return marker

    return PLACEHOLDER_RE.sub(replace, content or '')


def extract_placeholders(content):
    """Placeholder keys, as substitution matches them, in order of first appearance."""
    keys = []
    for match in PLACEHOLDER_RE.finditer(content or ''):
        key = match.group(1)
        if key and key not in keys:
            keys.append(key)
    return keys


def highlight_variables(content, variables=None):
    """
    HTML preview of a template: substituted values are wrapped in
    ``<mark class="var-filled">`` and unresolved placeholders in
    ``<mark class="var-missing">``. Surrounding text is escaped.
    """
    variables = variables or {}
    content = content or ''
    parts = []
    position = 0
    for match in PLACEHOLDER_RE.finditer(content):
        parts.append(escape(content[position:match.start()]))
        key = match.group(1)
        if key in variables:
            parts.append(
                f'<mark class="var-filled" data-key="{escape(key)}">{escape(_as_text(variables[key]))}</mark>'
            )
        else:
            parts.append(f'<mark class="var-missing" data-key="{escape(key)}">{escape(match.group(0))}</mark>')
        position = match.end()
    parts.append(escape(content[position:]))
    return ''.join(parts)
