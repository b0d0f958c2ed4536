"""Repositórios Django ORM e tradução de falhas do banco."""
from datetime import timedelta
from decimal import Decimal
from unittest import mock

from django.db import OperationalError
from django.test import TestCase

from chamados_core.adapters.repositories.registered_user_repo_impl import RegisteredUserRepoImpl
from chamados_core.adapters.repositories.service_request_repo_impl import ServiceRequestRepoImpl
from chamados_core.core.application.commands.service_request_commands import TransitionServiceRequestCommand
from chamados_core.core.application.dtos.service_request_dto import TransitionServiceRequestDTO
from chamados_core.core.application.handlers.service_request_handlers import TransitionServiceRequestHandler
from chamados_core.core.domain.entities.registered_user_entity import RegisteredUserEntity
from chamados_core.core.domain.events.exceptions import DuplicateUser, InvalidTransition, NotFound, StoreUnavailable
from chamados_core.core.domain.services.request_lifecycle import transition
from plugins.django_interface.models import RegisteredUser, ServiceRequest
from tests.helpers.factories import NOW, make_payment, make_request, planner_session


class ServiceRequestRepoTests(TestCase):
    def setUp(self) -> None:
        self.repo = ServiceRequestRepoImpl()

    def test_add_and_find_keeps_flattened_payment(self) -> None:
        entity = make_request(status="completed", completed_at=NOW, payment=make_payment("45.00", notes="PIX"))
        self.repo.add(entity)

        found = self.repo.find_by_id(str(entity.id))
        self.assertEqual(found.payment.amount, Decimal("45.00"))
        self.assertEqual(found.payment.notes, "PIX")
        self.assertFalse(found.payment.is_paid)
        self.assertIsNotNone(found.updated_at)

    def test_missing_payment_stays_none(self) -> None:
        entity = self.repo.add(make_request())
        self.assertIsNone(self.repo.find_by_id(entity.id).payment)

    def test_find_by_id_with_malformed_id(self) -> None:
        self.assertIsNone(self.repo.find_by_id("not-a-uuid"))

    def test_find_by_owner_newest_first(self) -> None:
        old = self.repo.add(make_request(user_id="u1", created_at=NOW - timedelta(days=2)))
        new = self.repo.add(make_request(user_id="u1", created_at=NOW))
        self.repo.add(make_request(user_id="u2"))

        self.assertEqual([r.id for r in self.repo.find_by_owner("u1")], [new.id, old.id])
        self.assertEqual(self.repo.find_by_owner("nobody"), [])

    def test_find_by_status(self) -> None:
        self.repo.add(make_request(status="scheduled", scheduled_date=NOW))
        self.repo.add(make_request())
        self.assertEqual([r.status for r in self.repo.find_by_status("scheduled")], ["scheduled"])

    def test_update_merges_and_ignores_immutable_fields(self) -> None:
        entity = self.repo.add(make_request(user_id="u1"))
        saved = self.repo.update(str(entity.id), {"title": "Novo título", "user_id": "u9", "created_at": NOW + timedelta(days=1), "bogus": 1})
        self.assertEqual(saved.title, "Novo título")
        self.assertEqual(saved.user_id, "u1")
        self.assertEqual(saved.created_at, NOW)

    def test_update_and_delete_unknown_id(self) -> None:
        with self.assertRaises(NotFound):
            self.repo.update("00000000-0000-0000-0000-000000000000", {"title": "x"})
        with self.assertRaises(NotFound):
            self.repo.delete("00000000-0000-0000-0000-000000000000")

    def test_save_persists_lifecycle_changes(self) -> None:
        entity = self.repo.add(make_request())
        entity.status = "completed"
        entity.completed_at = NOW
        entity.payment = make_payment("80.00", is_paid=True, paid_at=NOW, payment_method="card")
        self.repo.save(entity)

        model = ServiceRequest.objects.get(id=entity.id)
        self.assertEqual(model.status, "completed")
        self.assertEqual(model.payment_method, "card")
        self.assertTrue(model.payment_is_paid)

    def test_save_rejects_copy_read_before_another_write(self) -> None:
        stored = self.repo.add(make_request())
        first = self.repo.find_by_id(str(stored.id))
        second = self.repo.find_by_id(str(stored.id))

        transition(first, "completed", now=NOW)
        self.repo.save(first, expected_status="pending")

        transition(second, "scheduled", now=NOW)
        with self.assertRaises(InvalidTransition):
            self.repo.save(second, expected_status="pending")
        self.assertEqual(ServiceRequest.objects.get(id=stored.id).status, "completed")

    def test_transition_handler_does_not_move_completed_request_back(self) -> None:
        stored = self.repo.add(make_request())
        stale = self.repo.find_by_id(str(stored.id))
        self.repo.update(str(stored.id), {"status": "completed", "completed_at": NOW})

        dispatcher = mock.Mock()
        handler = TransitionServiceRequestHandler(self.repo, dispatcher, clock=lambda: NOW)
        command = TransitionServiceRequestCommand(
            actor=planner_session(),
            request_id=str(stored.id),
            payload=TransitionServiceRequestDTO(status="scheduled"),
        )
        with mock.patch.object(self.repo, "find_by_id", return_value=stale):
            with self.assertRaises(InvalidTransition):
                handler.handle(command)

        self.assertEqual(ServiceRequest.objects.get(id=stored.id).status, "completed")
        dispatcher.dispatch_all.assert_not_called()

    def test_list_filters_and_pages(self) -> None:
        for i in range(5):
            self.repo.add(make_request(title=f"Lâmpada {i}", category="electrical", created_at=NOW - timedelta(hours=i)))
        self.repo.add(make_request(title="Pintura do hall", category="painting"))

        page = self.repo.list({"category": "electrical"}, page=2, page_size=2)
        self.assertEqual(page.total, 5)
        self.assertEqual(page.total_pages, 3)
        self.assertEqual([r.title for r in page.items], ["Lâmpada 2", "Lâmpada 3"])

        found = self.repo.list({"search": "hall"}, page=1, page_size=10)
        self.assertEqual([r.title for r in found.items], ["Pintura do hall"])

    def test_database_error_becomes_store_unavailable(self) -> None:
        with mock.patch.object(ServiceRequest.objects, "filter", side_effect=OperationalError("connection refused")):
            with self.assertRaises(StoreUnavailable) as ctx:
                self.repo.find_by_owner("u1")
        self.assertIsInstance(ctx.exception.__cause__, OperationalError)


class RegisteredUserRepoTests(TestCase):
    def setUp(self) -> None:
        self.repo = RegisteredUserRepoImpl()
        self.user = self.repo.add(
            RegisteredUserEntity(
                id="8a6e0804-2bd0-4672-b79d-d97027f9071a",
                first_name="Maria",
                last_name="Santos",
                whatsapp="5511976543210",
                whatsapp_last4="3210",
                registered_at=NOW,
            )
        )

    def test_lookup_by_first_name_is_case_insensitive(self) -> None:
        self.assertEqual(self.repo.find_by_first_name_and_last4("maria", "3210").id, self.user.id)
        self.assertIsNone(self.repo.find_by_first_name_and_last4("maria", "0000"))

    def test_lookup_by_whatsapp(self) -> None:
        self.assertIsNotNone(self.repo.find_by_whatsapp("5511976543210"))
        self.assertIsNone(self.repo.find_by_whatsapp("5511900000000"))

    def test_same_whatsapp_registered_twice_is_duplicate(self) -> None:
        twin = RegisteredUserEntity(
            id="1f0c7a52-5d0e-4b5e-9a51-7f3f0f6f2c11",
            first_name="Ana",
            last_name="Lima",
            whatsapp="5511976543210",
            whatsapp_last4="3210",
            registered_at=NOW,
        )
        with self.assertRaises(DuplicateUser):
            self.repo.add(twin)
        self.assertEqual(RegisteredUser.objects.count(), 1)
