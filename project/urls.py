from django.urls import path
from . import views

app_name = 'project'

urlpatterns = [
    path('clients/', views.list_clients, name='list-clients'),
    path('projects/', views.list_projects, name='list-projects'),
    path('<int:project_id>/timeline/', views.project_timeline, name='project-timeline'),
]
