import pytest

from docgen.models import Document, DocumentTemplate


@pytest.fixture
def user(django_user_model):
    return django_user_model.objects.create_user(
        username='freelancer', password='pass', email='me@example.com', first_name='Sam', last_name='Rivera',
    )


@pytest.fixture
def other_user(django_user_model):
    return django_user_model.objects.create_user(username='other', password='pass')


@pytest.fixture
def logged_in(client, user):
    client.force_login(user)
    return client


@pytest.fixture
def template(user):
    return DocumentTemplate.objects.create(
        owner=user, name='Quick invoice', type='INVOICE', content='Hi {{client_name}}, total due {{total}}',
    )


@pytest.fixture
def document(user):
    return Document.objects.create(
        owner=user, name='Quote', type='PROPOSAL', content='## Scope\n- Design', variable_values={},
    )
