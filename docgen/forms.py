from django import forms

from .models import Document, DocumentTemplate
from .variables import validate_variable_definitions


class DocumentTemplateForm(forms.ModelForm):
    class Meta:
        model = DocumentTemplate
        fields = ['name', 'description', 'type', 'content', 'variables', 'is_default']

    def clean_name(self):
        name = (self.cleaned_data.get('name') or '').strip()
        if not name:
            raise forms.ValidationError("Template name is required.")
        return name

    def clean_content(self):
        content = self.cleaned_data.get('content') or ''
        if not content.strip():
            raise forms.ValidationError("Template content is required.")
        return content

    def clean_variables(self):
        return validate_variable_definitions(self.cleaned_data.get('variables'))


class DocumentForm(forms.ModelForm):
    class Meta:
        model = Document
        fields = ['name', 'type', 'status', 'content']

    def clean_name(self):
        name = (self.cleaned_data.get('name') or '').strip()
        if not name:
            raise forms.ValidationError("Document name is required.")
        return name
