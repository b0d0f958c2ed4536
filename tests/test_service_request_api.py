"""API REST de chamados: papéis, ciclo de vida e mapeamento de erros."""
import uuid
from datetime import timedelta
from decimal import Decimal
from unittest import mock

from django.db import OperationalError
from django.test import TestCase
from django.urls import reverse
from django.utils import timezone
from rest_framework.test import APIClient

from chamados_core.adapters.repositories.service_request_repo_impl import ServiceRequestRepoImpl
from plugins.django_interface.models import ServiceRequest
from tests.helpers.factories import bearer, client_session, make_payment, make_request, planner_session

LIST_URL = reverse("service_requests-list")


def detail_url(pk) -> str:
    return reverse("service_requests-detail", args=[str(pk)])


def action_url(pk, name: str) -> str:
    return reverse(f"service_requests-{name}", args=[str(pk)])


class ServiceRequestApiTestCase(TestCase):
    def setUp(self) -> None:
        self.repo = ServiceRequestRepoImpl()
        self.alice = client_session(first_name="Alice", last4="1111")
        self.bruno = client_session(first_name="Bruno", last4="2222")
        self.planner = planner_session()

    def as_user(self, user) -> APIClient:
        api = APIClient()
        api.credentials(**bearer(user))
        return api

    def create_for(self, user, **overrides):
        return self.repo.add(make_request(user_id=user.id, **overrides))


class CreateTests(ServiceRequestApiTestCase):
    def test_requires_session(self) -> None:
        resp = APIClient().post(LIST_URL, {"title": "x"}, format="json")
        self.assertEqual(resp.status_code, 401)

    def test_client_creates_pending_request_ignoring_status_and_payment(self) -> None:
        resp = self.as_user(self.alice).post(
            LIST_URL,
            {
                "title": "Vazamento na torneira",
                "description": "Pingando",
                "category": "hydraulic",
                "location": "Apto 301",
                "priority": "high",
                "status": "completed",
                "payment": {"amount": "10.00"},
            },
            format="json",
        )
        self.assertEqual(resp.status_code, 201)
        body = resp.json()
        self.assertEqual(body["status"], "pending")
        self.assertIsNone(body["payment"])
        self.assertEqual(body["user_id"], self.alice.id)
        self.assertEqual(body["requester"], "Alice Silva")
        self.assertEqual(body["contact"], "WhatsApp: 1111")
        self.assertEqual(body["category_name"], "Hidráulica")
        self.assertEqual(ServiceRequest.objects.count(), 1)

    def test_blank_title_and_unknown_category(self) -> None:
        resp = self.as_user(self.alice).post(
            LIST_URL,
            {"title": " ", "description": "d", "category": "elevator", "location": "Hall"},
            format="json",
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(set(resp.json()["errors"]), {"title", "category"})
        self.assertFalse(ServiceRequest.objects.exists())


class ReadTests(ServiceRequestApiTestCase):
    def test_client_lists_only_own_requests(self) -> None:
        mine = self.create_for(self.alice)
        self.create_for(self.bruno)

        resp = self.as_user(self.alice).get(LIST_URL, {"user_id": self.bruno.id})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual([r["id"] for r in resp.json()["results"]], [str(mine.id)])
        self.assertEqual(resp.json()["total_items"], 1)

    def test_planner_lists_everything_with_filters(self) -> None:
        self.create_for(self.alice, status="scheduled", scheduled_date=timezone.now())
        self.create_for(self.bruno)

        api = self.as_user(self.planner)
        self.assertEqual(api.get(LIST_URL).json()["total_items"], 2)
        self.assertEqual(api.get(LIST_URL, {"status": "scheduled"}).json()["total_items"], 1)
        self.assertEqual(api.get(LIST_URL, {"status": "archived"}).status_code, 400)
        self.assertEqual(api.get(LIST_URL, {"page": "zero"}).status_code, 400)

    def test_reading_another_clients_request_is_not_found(self) -> None:
        other = self.create_for(self.bruno)
        self.assertEqual(self.as_user(self.alice).get(detail_url(other.id)).status_code, 404)
        self.assertEqual(self.as_user(self.bruno).get(detail_url(other.id)).status_code, 200)
        self.assertEqual(self.as_user(self.planner).get(detail_url(uuid.uuid4())).status_code, 404)

    def test_by_owner(self) -> None:
        self.create_for(self.alice)
        self.create_for(self.alice)

        url = reverse("service_requests-by-owner", args=[self.alice.id])
        self.assertEqual(len(self.as_user(self.alice).get(url).json()), 2)
        self.assertEqual(len(self.as_user(self.planner).get(url).json()), 2)
        self.assertEqual(self.as_user(self.bruno).get(url).status_code, 403)

        mine = self.as_user(self.bruno).get(reverse("service_requests-mine"))
        self.assertEqual(mine.json(), [])

    def test_by_status_is_planner_only(self) -> None:
        self.create_for(self.alice)
        url = reverse("service_requests-by-status", args=["pending"])
        self.assertEqual(len(self.as_user(self.planner).get(url).json()), 1)
        self.assertEqual(self.as_user(self.alice).get(url).status_code, 403)

    def test_overdue_flags_are_derived(self) -> None:
        past = timezone.now() - timedelta(days=1)
        req = self.create_for(self.alice, status="scheduled", scheduled_date=past)
        body = self.as_user(self.planner).get(detail_url(req.id)).json()
        self.assertTrue(body["is_overdue"])
        self.assertTrue(body["is_schedule_late"])
        self.assertFalse(body["is_payment_overdue"])
        self.assertEqual(body["status_label"], "Agendado")


class PlannerOperationTests(ServiceRequestApiTestCase):
    def test_client_cannot_transition_update_or_delete(self) -> None:
        req = self.create_for(self.alice)
        api = self.as_user(self.alice)
        self.assertEqual(api.post(action_url(req.id, "transition"), {"status": "scheduled"}, format="json").status_code, 403)
        self.assertEqual(api.patch(detail_url(req.id), {"title": "x"}, format="json").status_code, 403)
        self.assertEqual(api.delete(detail_url(req.id)).status_code, 403)
        self.assertEqual(self.repo.find_by_id(req.id).status, "pending")

    def test_full_lifecycle(self) -> None:
        req = self.create_for(self.alice)
        api = self.as_user(self.planner)

        before = timezone.now()
        resp = api.post(action_url(req.id, "transition"), {"status": "scheduled", "scheduled_days": 5}, format="json")
        self.assertEqual(resp.status_code, 200)
        stored = self.repo.find_by_id(req.id)
        self.assertEqual(stored.scheduled_days, 5)
        self.assertGreaterEqual(stored.scheduled_date, before + timedelta(days=5))

        resp = api.post(
            action_url(req.id, "transition"),
            {"status": "completed", "payment_amount": "45.00"},
            format="json",
        )
        self.assertEqual(resp.status_code, 200)
        payment = resp.json()["payment"]
        self.assertEqual(payment["amount"], "45.00")
        self.assertFalse(payment["is_paid"])

        resp = api.post(action_url(req.id, "mark-paid"), {"payment_method": "PIX"}, format="json")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["payment"]["payment_method"], "pix")
        first_paid_at = self.repo.find_by_id(req.id).payment.paid_at

        resp = api.post(action_url(req.id, "mark-paid"), {"payment_method": "cash"}, format="json")
        self.assertEqual(resp.status_code, 200)
        stored = self.repo.find_by_id(req.id)
        self.assertEqual(stored.payment.paid_at, first_paid_at)
        self.assertEqual(stored.payment.payment_method, "pix")

        stats = api.get(reverse("dashboard-stats")).json()
        self.assertEqual(stats["completed"], 1)
        self.assertEqual(Decimal(stats["totalRevenue"]), Decimal("45.00"))
        self.assertEqual(stats["pendingPayments"], 0)

    def test_backward_transition_conflicts(self) -> None:
        req = self.create_for(self.alice, status="completed", completed_at=timezone.now())
        resp = self.as_user(self.planner).post(action_url(req.id, "transition"), {"status": "pending"}, format="json")
        self.assertEqual(resp.status_code, 409)
        self.assertEqual(resp.json()["code"], "invalid_transition")

    def test_mark_paid_errors(self) -> None:
        api = self.as_user(self.planner)
        no_payment = self.create_for(self.alice, status="completed", completed_at=timezone.now())
        resp = api.post(action_url(no_payment.id, "mark-paid"), {"payment_method": "pix"}, format="json")
        self.assertEqual((resp.status_code, resp.json()["code"]), (400, "no_payment_attached"))

        billed = self.create_for(self.alice, status="completed", completed_at=timezone.now(), payment=make_payment())
        resp = api.post(action_url(billed.id, "mark-paid"), {"payment_method": "cheque"}, format="json")
        self.assertEqual((resp.status_code, resp.json()["code"]), (400, "payment_method_required"))

    def test_update_only_touches_descriptive_fields(self) -> None:
        req = self.create_for(self.alice)
        resp = self.as_user(self.planner).patch(
            detail_url(req.id), {"title": "Torneira trocada", "priority": "urgent"}, format="json"
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["title"], "Torneira trocada")
        self.assertEqual(resp.json()["priority_label"], "Urgente")
        self.assertEqual(resp.json()["status"], "pending")

    def test_delete(self) -> None:
        req = self.create_for(self.alice)
        api = self.as_user(self.planner)
        self.assertEqual(api.delete(detail_url(req.id)).status_code, 204)
        self.assertEqual(api.delete(detail_url(req.id)).status_code, 404)

    def test_store_failure_maps_to_503(self) -> None:
        with mock.patch.object(ServiceRequest.objects, "all", side_effect=OperationalError("timeout")):
            resp = self.as_user(self.planner).get(LIST_URL)
        self.assertEqual(resp.status_code, 503)
        self.assertEqual(resp.json()["code"], "store_unavailable")


class DashboardApiTests(ServiceRequestApiTestCase):
    def test_planner_only(self) -> None:
        self.assertEqual(self.as_user(self.alice).get(reverse("dashboard-stats")).status_code, 403)
        self.assertEqual(APIClient().get(reverse("dashboard-financial")).status_code, 401)

    def test_financial_summary(self) -> None:
        now = timezone.now()
        self.create_for(self.alice, status="completed", payment=make_payment("45.00", due_date=now - timedelta(days=1)))
        self.create_for(
            self.bruno,
            status="completed",
            payment=make_payment("30.00", due_date=now, is_paid=True, paid_at=now, payment_method="cash"),
        )
        body = self.as_user(self.planner).get(reverse("dashboard-financial")).json()
        self.assertEqual(Decimal(body["totalRevenue"]), Decimal("75.00"))
        self.assertEqual(body["overdue"]["count"], 1)
        self.assertEqual(body["paid"]["count"], 1)
