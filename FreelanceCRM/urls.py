from django.contrib import admin
from django.urls import path, include
from django.shortcuts import redirect


def root_redirect(request):
    return redirect('docgen:list-templates')

urlpatterns = [
    path('', root_redirect, name='root'),
    path('admin/', admin.site.urls),
    path('project/', include(('project.urls', 'project'), namespace='project')),
    path('docgen/', include(('docgen.urls', 'docgen'), namespace='docgen')),
]
