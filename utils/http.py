# utils/http.py
import functools
import json
import logging

from django.core.exceptions import PermissionDenied, ValidationError
from django.http import Http404, JsonResponse

logger = logging.getLogger(__name__)


def validation_messages(error):
    """Flatten a ValidationError into a dict or list that JSON can carry."""
    if hasattr(error, 'error_dict'):
        return {field: [str(m) for m in msgs] for field, msgs in error.message_dict.items()}
    return list(error.messages)


def parse_json_body(request):
    if not request.body:
        return {}
    try:
        data = json.loads(request.body)
    except (TypeError, ValueError):
        raise ValidationError("Request body must be valid JSON.")
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object.")
    return data


def json_api(failure_message):
    """
    Map service exceptions onto JSON responses:
    ValidationError -> 400, PermissionDenied -> 403, Http404 -> 404,
    anything else is logged and reported as a generic 500.
    """
    def decorator(view_func):
        @functools.wraps(view_func)
        def wrapper(request, *args, **kwargs):
            try:
                return view_func(request, *args, **kwargs)
            except ValidationError as e:
                return JsonResponse({'success': False, 'error': validation_messages(e)}, status=400)
            except PermissionDenied as e:
                return JsonResponse({'success': False, 'error': str(e) or 'Unauthorized'}, status=403)
            except Http404 as e:
                return JsonResponse({'success': False, 'error': str(e) or 'Not found'}, status=404)
            except Exception:
                logger.exception(f"{failure_message} ({view_func.__name__})")
                return JsonResponse({'success': False, 'error': failure_message}, status=500)
        return wrapper
    return decorator
