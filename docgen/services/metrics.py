# docgen/services/metrics.py
import math
import re

from django.conf import settings

TAG_RE = re.compile(r'<[^>]*>')
WHITESPACE_RE = re.compile(r'\s+')


def clean_text(content):
    """Strip markup tags, collapse whitespace runs to one space and trim."""
    text = TAG_RE.sub('', content or '')
    return WHITESPACE_RE.sub(' ', text).strip()


def calculate_metrics(content):
    text = clean_text(content)
    words = len(text.split(' ')) if text else 0
    words_per_minute = getattr(settings, 'DOCGEN_WORDS_PER_MINUTE', 200)
    words_per_page = getattr(settings, 'DOCGEN_WORDS_PER_PAGE', 250)
    return {
        'wordCount': words,
        'characterCount': len(text),
        'estimatedReadTime': math.ceil(words / words_per_minute),
        'pageCount': math.ceil(words / words_per_page),
    }
