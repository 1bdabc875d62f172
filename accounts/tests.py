from django.contrib.auth import get_user_model
from django.contrib.auth.models import AnonymousUser
from django.core.exceptions import PermissionDenied
from django.test import TestCase

from accounts.access_control import AuthorizationError, NotFoundOrAccessDenied, get_owned_or_404, resolve_caller


class ResolveCallerTests(TestCase):
    def setUp(self):
        User = get_user_model()
        self.user = User.objects.create_user(
            username="freelancer", password="pw", email="me@example.com"
        )

    def test_active_user_resolves(self):
        self.assertEqual(resolve_caller(self.user), self.user)

    def test_anonymous_user_is_rejected(self):
        with self.assertRaises(AuthorizationError):
            resolve_caller(AnonymousUser())

    def test_missing_user_is_rejected(self):
        with self.assertRaises(AuthorizationError):
            resolve_caller(None)

    def test_inactive_user_is_rejected(self):
        self.user.is_active = False
        self.user.save()
        with self.assertRaises(PermissionDenied):
            resolve_caller(self.user)


class DisplayNameTests(TestCase):
    def test_display_name_prefers_full_name(self):
        User = get_user_model()
        user = User.objects.create_user(
            username="jsmith", first_name="John", last_name="Smith", email="john@example.com"
        )
        self.assertEqual(user.display_name, "John Smith")

    def test_display_name_falls_back_to_email_then_username(self):
        User = get_user_model()
        with_email = User.objects.create_user(username="a", email="a@example.com")
        bare = User.objects.create_user(username="b")
        self.assertEqual(with_email.display_name, "a@example.com")
        self.assertEqual(bare.display_name, "b")


class GetOwnedOr404Tests(TestCase):
    def setUp(self):
        self.user = get_user_model().objects.create_user(username="freelancer", password="pw")
        self.users = get_user_model().objects.all()

    def test_existing_row_is_returned(self):
        self.assertEqual(get_owned_or_404(self.users, id=self.user.pk), self.user)

    def test_missing_row_is_not_found(self):
        with self.assertRaises(NotFoundOrAccessDenied):
            get_owned_or_404(self.users, id=self.user.pk + 100)

    def test_malformed_id_is_not_found(self):
        for bad_id in ("abc", "1.5", ["1"]):
            with self.subTest(bad_id=bad_id):
                with self.assertRaises(NotFoundOrAccessDenied):
                    get_owned_or_404(self.users, "User not found", id=bad_id)
