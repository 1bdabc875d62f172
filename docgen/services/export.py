# docgen/services/export.py
"""
Document export: styled HTML, print-ready HTML (browser print to PDF),
plain text, Word and an Excel register of documents.

The markdown handling is deliberately small: ``#``/``##``/``###`` headings,
``**bold**``, ``*italic*``, ``- `` list items, blank-line paragraphs and
single-newline line breaks. Content is not HTML-escaped, so markup already in
a document passes through.
"""
import io
import re
from datetime import timezone as dt_timezone

import openpyxl
from django.template.loader import render_to_string
from django.utils import timezone
from docx import Document as DocxDocument
from openpyxl.utils import get_column_letter

from docgen.services.metrics import TAG_RE, calculate_metrics, clean_text
from docgen.services.variable_resolver import format_date

CONTENT_TYPES = {
    'html': 'text/html; charset=utf-8',
    'txt': 'text/plain; charset=utf-8',
    'pdf': 'text/html; charset=utf-8',
    'docx': 'application/vnd.openxmlformats-officedocument.wordprocessingml.document',
    'xlsx': 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet',
}

HEADING_RE = re.compile(r'^(#{1,3})\s+(.*)$')
BOLD_RE = re.compile(r'\*\*(.+?)\*\*')
ITALIC_RE = re.compile(r'\*(.+?)\*')
BLANK_LINE_RE = re.compile(r'\n[ \t]*\n')
UNSAFE_FILENAME_RE = re.compile(r'[^a-zA-Z0-9\s-]')
WHITESPACE_RE = re.compile(r'\s+')


def _inline(text):
    text = BOLD_RE.sub(r'<strong>\1</strong>', text)
    return ITALIC_RE.sub(r'<em>\1</em>', text)


def _flush_paragraph(lines, html):
    if lines:
        html.append('<p>' + '<br>'.join(lines) + '</p>')
        del lines[:]


def _flush_list(items, html):
    if items:
        html.append('<ul>' + ''.join(f'<li>{item}</li>' for item in items) + '</ul>')
        del items[:]


def markdown_to_html(content):
    text = (content or '').replace('\r\n', '\n').strip()
    if not text:
        return ''

    html = []
    for block in BLANK_LINE_RE.split(text):
        paragraph = []
        items = []
        for line in block.split('\n'):
            line = line.strip()
            if line.startswith('- '):
                _flush_paragraph(paragraph, html)
                items.append(_inline(line[2:].strip()))
                continue
            _flush_list(items, html)
            heading = HEADING_RE.match(line)
            if heading:
                _flush_paragraph(paragraph, html)
                level = len(heading.group(1))
                html.append(f'<h{level}>{_inline(heading.group(2).strip())}</h{level}>')
            elif line:
                paragraph.append(_inline(line))
        _flush_list(items, html)
        _flush_paragraph(paragraph, html)
    return '\n'.join(html)


def _context(content, title, generated_on):
    return {
        'title': title,
        'content': content,
        'generated_on': format_date(generated_on or timezone.localdate()),
    }


def to_html(content, title, generated_on=None):
    """Standalone, print-oriented HTML page for ``content``."""
    return render_to_string('docgen/export_document.html', _context(content, title, generated_on))


def to_print_html(content, title, generated_on=None):
    """Same page with print margins and a script that opens the print dialog."""
    return render_to_string('docgen/export_print.html', _context(content, title, generated_on))


def to_text(content):
    return clean_text(content)


def make_filename(name, extension, now=None):
    """
    ``"Acme Proposal!"`` -> ``Acme-Proposal-2025-06-01T10-20-30-123Z.html``.
    The timestamp is UTC with millisecond precision.
    """
    now = now or timezone.now()
    if timezone.is_aware(now):
        now = now.astimezone(dt_timezone.utc)
    stamp = f"{now:%Y-%m-%dT%H-%M-%S}-{now.microsecond // 1000:03d}Z"
    sanitized = WHITESPACE_RE.sub('-', UNSAFE_FILENAME_RE.sub('', name or '').strip())
    return f"{sanitized or 'document'}-{stamp}.{extension}"


def _add_runs(paragraph, text):
    # **bold** segments land on odd indexes
    for index, segment in enumerate(re.split(r'\*\*(.+?)\*\*', text)):
        if segment:
            paragraph.add_run(segment).bold = index % 2 == 1


def to_docx(content, title):
    """Word rendition of ``content``; returns the .docx file as bytes."""
    doc = DocxDocument()
    doc.add_heading(title, 0)

    for raw_line in (content or '').replace('\r\n', '\n').split('\n'):
        line = TAG_RE.sub('', raw_line).strip()
        if not line:
            continue
        heading = HEADING_RE.match(line)
        if heading:
            doc.add_heading(heading.group(2).strip(), len(heading.group(1)))
        elif line.startswith('- '):
            _add_runs(doc.add_paragraph(style='List Bullet'), line[2:].strip())
        else:
            _add_runs(doc.add_paragraph(), line)

    output = io.BytesIO()
    doc.save(output)
    return output.getvalue()


REGISTER_COLUMNS = ['Name', 'Type', 'Status', 'Client', 'Project', 'Template', 'Words', 'Size', 'Created', 'Updated']


def _timestamp(value):
    return timezone.localtime(value).strftime('%Y-%m-%d %H:%M') if value else ''


def documents_to_excel(documents):
    """Spreadsheet listing ``documents``, one row each; returns the .xlsx file as bytes."""
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = 'Documents'
    ws.append(REGISTER_COLUMNS)

    for document in documents:
        ws.append([
            document.name,
            document.get_type_display(),
            document.get_status_display(),
            document.client.name if document.client else '',
            document.project.name if document.project else '',
            document.template.name if document.template else '',
            calculate_metrics(document.content)['wordCount'],
            document.size or 0,
            _timestamp(document.created_at),
            _timestamp(document.updated_at),
        ])

    for i, _ in enumerate(REGISTER_COLUMNS, 1):
        ws.column_dimensions[get_column_letter(i)].width = 18

    output = io.BytesIO()
    wb.save(output)
    return output.getvalue()
