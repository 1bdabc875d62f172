# docgen/urls.py
from django.urls import path

from . import views

app_name = 'docgen'

urlpatterns = [
    path('templates/', views.list_templates, name='list-templates'),
    path('templates/create/', views.create_template, name='create-template'),
    path('templates/<int:template_id>/', views.template_detail, name='template-detail'),
    path('templates/<int:template_id>/update/', views.update_template, name='update-template'),
    path('templates/<int:template_id>/delete/', views.delete_template, name='delete-template'),
    path('templates/<int:template_id>/copy/', views.copy_template, name='copy-template'),
    path('templates/<int:template_id>/preview/', views.template_preview, name='template-preview'),

    path('variables/', views.variable_values, name='variable-values'),
    path('generate/', views.generate, name='generate-document'),

    path('documents/', views.list_documents, name='list-documents'),
    path('documents/create/', views.create_document, name='create-document'),
    path('documents/export/excel/', views.export_documents_excel, name='export-documents-excel'),
    path('documents/<int:document_id>/', views.document_detail, name='document-detail'),
    path('documents/<int:document_id>/update/', views.update_document, name='update-document'),
    path('documents/<int:document_id>/delete/', views.delete_document, name='delete-document'),
    path('documents/<int:document_id>/status/', views.update_status, name='update-document-status'),
    path('documents/<int:document_id>/metrics/', views.document_metrics, name='document-metrics'),
    path('documents/<int:document_id>/export/<str:fmt>/', views.export_document, name='export-document'),
    path('documents/<int:document_id>/versions/', views.list_versions, name='list-versions'),
    path('documents/<int:document_id>/versions/create/', views.create_version, name='create-version'),
    path(
        'documents/<int:document_id>/versions/<int:version_id>/restore/',
        views.restore_version, name='restore-version',
    ),
]
