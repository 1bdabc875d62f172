# docgen/variables.py
"""
Validation of template variable definitions and coercion of the values
supplied for them.

Values are checked against the declared ``type`` of their definition before
they reach substitution; undeclared keys are accepted as long as they are
plain scalars (str, int, float, bool).
"""
import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation

from django.core.exceptions import ValidationError

KEY_PATTERN = re.compile(r'^[a-z][a-z0-9_]*$')

VARIABLE_TYPES = ('text', 'textarea', 'number', 'currency', 'date', 'select')
VARIABLE_SOURCES = ('manual', 'client', 'project', 'user', 'system')
SCALAR_TYPES = (str, int, float, bool)

# Formats accepted for date variables besides ISO: the resolver's M/D/YYYY
# rendering and long-form "June 1, 2025".
DATE_INPUT_FORMATS = ('%m/%d/%Y', '%B %d, %Y')


def validate_variable_definitions(definitions):
    """
    Return a normalised copy of ``definitions``.

    Raises ValidationError listing every problem: non-object entries,
    malformed or duplicate keys, unknown types/sources and select
    variables without options.
    """
    if definitions in (None, ''):
        return []
    if not isinstance(definitions, (list, tuple)):
        raise ValidationError("Variables must be a list of definitions.")

    errors = []
    cleaned = []
    seen = set()
    for index, raw in enumerate(definitions, 1):
        if not isinstance(raw, dict):
            errors.append(f"Variable #{index} must be an object.")
            continue

        key = str(raw.get('key') or '').strip()
        if not KEY_PATTERN.match(key):
            errors.append(f"Variable #{index}: key '{key}' must be a snake_case identifier.")
        elif key in seen:
            errors.append(f"Duplicate variable key '{key}'.")
        seen.add(key)

        var_type = raw.get('type') or 'text'
        if var_type not in VARIABLE_TYPES:
            errors.append(f"Variable '{key}': unknown type '{var_type}'.")

        source = raw.get('source') or 'manual'
        if source not in VARIABLE_SOURCES:
            errors.append(f"Variable '{key}': unknown source '{source}'.")

        definition = {
            'key': key,
            'label': str(raw.get('label') or key),
            'type': var_type,
            'source': source,
            'required': bool(raw.get('required', False)),
        }

        options = raw.get('options')
        if var_type == 'select':
            if not isinstance(options, (list, tuple)) or not options:
                errors.append(f"Variable '{key}': select variables need at least one option.")
            else:
                definition['options'] = [str(option) for option in options]
        elif options:
            definition['options'] = [str(option) for option in options]

        if raw.get('defaultValue') not in (None, ''):
            definition['defaultValue'] = raw['defaultValue']
        if raw.get('description'):
            definition['description'] = str(raw['description'])

        cleaned.append(definition)

    if errors:
        raise ValidationError(errors)
    return cleaned


def _coerce_number(value):
    """Check that ``value`` reads as a number; the caller's own text is kept for substitution."""
    if isinstance(value, bool):
        raise ValidationError("Expected a number.")
    try:
        number = Decimal(str(value).strip().replace(',', ''))
    except InvalidOperation:
        raise ValidationError("Expected a number.")
    if not number.is_finite():
        raise ValidationError("Expected a number.")
    return value


def _coerce_currency(value):
    if isinstance(value, bool):
        raise ValidationError("Expected an amount.")
    if isinstance(value, (int, float)):
        return value
    return str(value).strip()


def _coerce_date(value):
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    text = str(value).strip()
    try:
        return date.fromisoformat(text).isoformat()
    except ValueError:
        pass
    for fmt in DATE_INPUT_FORMATS:
        try:
            datetime.strptime(text, fmt)
            return text
        except ValueError:
            continue
    raise ValidationError(f"'{text}' is not a valid date.")


def coerce_variable_value(definition, value):
    """Coerce one value to the type its definition declares. Blank values return None."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    if not isinstance(value, SCALAR_TYPES + (date,)):
        raise ValidationError("Expected a text, number or boolean value.")

    var_type = definition.get('type', 'text')
    if var_type == 'number':
        return _coerce_number(value)
    if var_type == 'currency':
        return _coerce_currency(value)
    if var_type == 'date':
        return _coerce_date(value)
    if var_type == 'select':
        text = str(value)
        options = definition.get('options') or []
        if text not in options:
            raise ValidationError(f"'{text}' is not one of the available options.")
        return text
    return value if isinstance(value, str) else str(value)


def coerce_variable_values(definitions, values):
    """
    Build the substitution mapping for a template.

    Declared variables are coerced to their type and fall back to their
    ``defaultValue``; required ones without any value are errors. Undeclared
    keys pass through when they are plain scalars.
    """
    if values is None:
        values = {}
    if not isinstance(values, dict):
        raise ValidationError("Variable values must be an object.")

    declared = {definition['key']: definition for definition in definitions or []}
    errors = {}
    result = {}

    for key, value in values.items():
        if key in declared:
            continue
        if value is None:
            result[key] = ''
        elif isinstance(value, SCALAR_TYPES):
            result[key] = value
        else:
            errors[key] = ["Expected a text, number or boolean value."]

    for key, definition in declared.items():
        try:
            value = coerce_variable_value(definition, values.get(key))
        except ValidationError as e:
            errors[key] = e.messages
            continue
        if value is None and definition.get('defaultValue') not in (None, ''):
            value = definition['defaultValue']
        if value is None:
            if definition.get('required'):
                errors[key] = ["This variable is required."]
            continue
        result[key] = value

    if errors:
        raise ValidationError(errors)
    return result
