"""Cadastro, login (cliente e planejador), sessão JWT e logout."""

from django.conf import settings
from django.test import TestCase
from django.urls import reverse

from chamados_core.adapters.config import composition_root
from chamados_core.adapters.security.hash_service import HashService
from chamados_core.adapters.security.jwt_service import JWTService
from plugins.django_interface.models import RegisteredUser

PLANNER_KEY = "chave-de-teste-planejador"


class RegistrationTests(TestCase):
    def _register(self, **overrides):
        data = {"first_name": "João", "last_name": "Silva", "whatsapp": "(11) 98765-4321", "email": "joao@email.com"}
        data.update(overrides)
        return self.client.post(reverse("register"), data, content_type="application/json")

    def test_register_creates_user_and_opens_session(self) -> None:
        resp = self._register()
        self.assertEqual(resp.status_code, 201)
        body = resp.json()
        self.assertEqual(body["user"]["whatsapp_last4"], "4321")
        self.assertEqual(body["session"]["role"], "client")
        self.assertIn(settings.AUTH_COOKIE_NAME, resp.cookies)

        user = RegisteredUser.objects.get()
        self.assertEqual(user.whatsapp, "5511987654321")
        self.assertEqual(JWTService.decode_token(body["token"])["sub"], str(user.id))

    def test_same_phone_in_another_format_is_duplicate(self) -> None:
        self._register()
        resp = self._register(first_name="Outro", whatsapp="+55 11 98765-4321")
        self.assertEqual(resp.status_code, 409)
        self.assertEqual(resp.json()["code"], "duplicate_user")

    def test_same_first_name_and_suffix_is_duplicate(self) -> None:
        self._register()
        resp = self._register(first_name="joão", whatsapp="21 99999-4321")
        self.assertEqual(resp.status_code, 409)
        self.assertEqual(RegisteredUser.objects.count(), 1)

    def test_foreign_numbers_keep_their_country_code(self) -> None:
        self.assertEqual(self._register(whatsapp="+1 212 555 1234").status_code, 201)
        self.assertEqual(self._register(first_name="Inês", whatsapp="+351 912 345 678").status_code, 201)
        self.assertEqual(
            set(RegisteredUser.objects.values_list("whatsapp", flat=True)),
            {"12125551234", "351912345678"},
        )

    def test_foreign_number_is_not_confused_with_brazilian_one(self) -> None:
        self._register(whatsapp="+1 212 555 1234")
        resp = self._register(first_name="Pedro", whatsapp="(12) 12555-1234")
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(RegisteredUser.objects.count(), 2)

    def test_validation_happens_before_store(self) -> None:
        resp = self._register(first_name="  ", whatsapp="1234")
        self.assertEqual(resp.status_code, 400)
        errors = resp.json()["errors"]
        self.assertIn("first_name", errors)
        self.assertIn("whatsapp", errors)
        self.assertFalse(RegisteredUser.objects.exists())


class ClientLoginTests(TestCase):
    def setUp(self) -> None:
        self.client.post(
            reverse("register"),
            {"first_name": "Maria", "last_name": "Santos", "whatsapp": "11976543210"},
            content_type="application/json",
        )
        self.client.cookies.clear()

    def _login(self, **data):
        return self.client.post(reverse("login"), data, content_type="application/json")

    def test_login_with_first_name_and_last4(self) -> None:
        resp = self._login(first_name="maria", whatsapp_last4="3210")
        self.assertEqual(resp.status_code, 200)
        cookie = resp.cookies.get(settings.AUTH_COOKIE_NAME)
        self.assertIsNotNone(cookie, "JWT cookie não encontrado")
        payload = JWTService.decode_token(cookie.value)
        self.assertEqual(payload["sub"], str(RegisteredUser.objects.get().id))
        self.assertEqual(payload["role"], "client")
        self.assertEqual(payload["full_name"], "Maria Santos")

    def test_unknown_user(self) -> None:
        resp = self._login(first_name="Maria", whatsapp_last4="0000")
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json()["code"], "invalid_credentials")

    def test_suffix_must_have_four_digits(self) -> None:
        resp = self._login(first_name="Maria", whatsapp_last4="32a")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["field"], "whatsapp_last4")

    def test_me_and_logout(self) -> None:
        self._login(first_name="Maria", whatsapp_last4="3210")
        me = self.client.get(reverse("me"))
        self.assertEqual(me.status_code, 200)
        self.assertEqual(me.json()["first_name"], "Maria")

        out = self.client.post(reverse("logout"))
        self.assertEqual(out.status_code, 200)
        self.assertEqual(self.client.get(reverse("me")).status_code, 401)

    def test_me_requires_session(self) -> None:
        self.assertEqual(self.client.get(reverse("me")).status_code, 401)

    def test_tampered_token_is_rejected(self) -> None:
        resp = self.client.get(reverse("me"), HTTP_AUTHORIZATION="Bearer not.a.jwt")
        self.assertEqual(resp.status_code, 401)


class PlannerLoginTests(TestCase):
    def setUp(self) -> None:
        self.auth_service = composition_root.container.auth_service()
        self._previous_hash = self.auth_service.planner_access_key_hash
        self.auth_service.planner_access_key_hash = HashService.hash_password(PLANNER_KEY)

    def tearDown(self) -> None:
        self.auth_service.planner_access_key_hash = self._previous_hash

    def _login(self, access_key):
        return self.client.post(
            reverse("login"), {"first_name": "Ana", "access_key": access_key}, content_type="application/json"
        )

    def test_planner_login(self) -> None:
        resp = self._login(PLANNER_KEY)
        self.assertEqual(resp.status_code, 200)
        user = resp.json()["user"]
        self.assertEqual(user["role"], "planner")
        self.assertEqual(user["id"], "planner")

    def test_wrong_key(self) -> None:
        self.assertEqual(self._login("errada").status_code, 401)

    def test_disabled_without_configured_hash(self) -> None:
        self.auth_service.planner_access_key_hash = None
        self.assertEqual(self._login(PLANNER_KEY).status_code, 401)
