"""Máquina de estados do chamado e da cobrança."""
from datetime import timedelta
from decimal import Decimal

from django.test import SimpleTestCase

from chamados_core.core.domain.events.events import (
    PaymentAttachedEvent,
    PaymentReceivedEvent,
    ServiceRequestStatusChangedEvent,
)
from chamados_core.core.domain.events.exceptions import (
    InvalidTransition,
    NoPaymentAttached,
    PaymentMethodRequired,
    ValidationError,
)
from chamados_core.core.domain.services.request_lifecycle import (
    LifecyclePolicy,
    can_transition,
    is_overdue,
    is_payment_overdue,
    is_schedule_late,
    mark_paid,
    transition,
)
from tests.helpers.factories import NOW, make_payment, make_request


class TransitionTableTests(SimpleTestCase):
    def test_forward_moves_are_allowed(self) -> None:
        self.assertTrue(can_transition("pending", "scheduled"))
        self.assertTrue(can_transition("pending", "completed"))
        self.assertTrue(can_transition("scheduled", "scheduled"))
        self.assertTrue(can_transition("in-progress", "completed"))

    def test_backward_moves_are_rejected(self) -> None:
        self.assertFalse(can_transition("completed", "pending"))
        self.assertFalse(can_transition("in-progress", "scheduled"))
        self.assertFalse(can_transition("scheduled", "pending"))

    def test_completed_is_terminal(self) -> None:
        req = make_request(status="completed", completed_at=NOW)
        for target in ("pending", "scheduled", "in-progress", "completed"):
            with self.assertRaises(InvalidTransition):
                transition(req, target, now=NOW)
        self.assertEqual(req.status, "completed")

    def test_unknown_status_is_plain_validation_error(self) -> None:
        req = make_request()
        with self.assertRaises(ValidationError) as ctx:
            transition(req, "archived", now=NOW)
        self.assertNotIsInstance(ctx.exception, InvalidTransition)
        self.assertEqual(ctx.exception.field, "status")


class SchedulingTests(SimpleTestCase):
    def test_default_three_days(self) -> None:
        req = make_request()
        events = transition(req, "scheduled", now=NOW)
        self.assertEqual(req.status, "scheduled")
        self.assertEqual(req.scheduled_days, 3)
        self.assertEqual(req.scheduled_date, NOW + timedelta(days=3))
        self.assertEqual(len(events), 1)
        self.assertIsInstance(events[0], ServiceRequestStatusChangedEvent)
        self.assertEqual(events[0].previous_status, "pending")

    def test_supplied_days_are_used(self) -> None:
        req = make_request()
        transition(req, "scheduled", now=NOW, scheduled_days=5)
        self.assertEqual(req.scheduled_date, NOW + timedelta(days=5))

    def test_policy_default_days(self) -> None:
        req = make_request()
        transition(req, "scheduled", now=NOW, policy=LifecyclePolicy(default_scheduled_days=10))
        self.assertEqual(req.scheduled_date, NOW + timedelta(days=10))

    def test_reschedule_recomputes_from_new_moment(self) -> None:
        req = make_request()
        transition(req, "scheduled", now=NOW, scheduled_days=2)
        later = NOW + timedelta(days=1)
        transition(req, "scheduled", now=later)
        # mantém o prazo anterior, a partir do novo "agora"
        self.assertEqual(req.scheduled_days, 2)
        self.assertEqual(req.scheduled_date, later + timedelta(days=2))

    def test_non_positive_days_fail_before_mutation(self) -> None:
        req = make_request()
        with self.assertRaises(ValidationError):
            transition(req, "scheduled", now=NOW, scheduled_days=0)
        self.assertEqual(req.status, "pending")
        self.assertIsNone(req.scheduled_date)

    def test_later_transitions_keep_scheduled_date(self) -> None:
        req = make_request()
        transition(req, "scheduled", now=NOW, scheduled_days=5)
        frozen = req.scheduled_date
        transition(req, "in-progress", now=NOW + timedelta(days=6))
        transition(req, "completed", now=NOW + timedelta(days=7))
        self.assertEqual(req.scheduled_date, frozen)


class CompletionTests(SimpleTestCase):
    def test_completion_with_amount_attaches_payment(self) -> None:
        req = make_request(status="in-progress")
        events = transition(req, "completed", now=NOW, payment_amount=Decimal("150"), payment_notes="Troca do reparo")
        self.assertEqual(req.completed_at, NOW)
        self.assertEqual(req.payment.amount, Decimal("150.00"))
        self.assertEqual(req.payment.due_date, NOW + timedelta(days=7))
        self.assertFalse(req.payment.is_paid)
        self.assertIsNone(req.payment.paid_at)
        self.assertEqual(req.payment.notes, "Troca do reparo")
        self.assertEqual(
            [type(e) for e in events],
            [ServiceRequestStatusChangedEvent, PaymentAttachedEvent],
        )

    def test_zero_or_missing_amount_completes_without_payment(self) -> None:
        for amount in (None, Decimal("0")):
            req = make_request()
            events = transition(req, "completed", now=NOW, payment_amount=amount)
            self.assertEqual(req.status, "completed")
            self.assertIsNone(req.payment)
            self.assertEqual(len(events), 1)

    def test_negative_amount_is_rejected(self) -> None:
        req = make_request(status="in-progress")
        with self.assertRaises(ValidationError):
            transition(req, "completed", now=NOW, payment_amount=Decimal("-1"))
        self.assertEqual(req.status, "in-progress")
        self.assertIsNone(req.completed_at)

    def test_payment_term_follows_policy(self) -> None:
        req = make_request()
        transition(req, "completed", now=NOW, payment_amount=Decimal("10"), policy=LifecyclePolicy(payment_term_days=15))
        self.assertEqual(req.payment.due_date, NOW + timedelta(days=15))


class MarkPaidTests(SimpleTestCase):
    def _completed(self):
        return make_request(status="completed", completed_at=NOW, payment=make_payment(due_date=NOW + timedelta(days=7)))

    def test_marks_paid_with_method(self) -> None:
        req = self._completed()
        events = mark_paid(req, "pix", now=NOW, notes="Pago na portaria")
        self.assertTrue(req.payment.is_paid)
        self.assertEqual(req.payment.paid_at, NOW)
        self.assertEqual(req.payment.payment_method, "pix")
        self.assertEqual(req.payment.notes, "Pago na portaria")
        self.assertIsInstance(events[0], PaymentReceivedEvent)

    def test_missing_or_unknown_method(self) -> None:
        for method in (None, "", "bitcoin"):
            req = self._completed()
            with self.assertRaises(PaymentMethodRequired):
                mark_paid(req, method, now=NOW)
            self.assertFalse(req.payment.is_paid)

    def test_no_payment_attached(self) -> None:
        req = make_request(status="completed", completed_at=NOW)
        with self.assertRaises(NoPaymentAttached):
            mark_paid(req, "cash", now=NOW)

    def test_second_call_is_a_noop(self) -> None:
        req = self._completed()
        mark_paid(req, "pix", now=NOW)
        events = mark_paid(req, "card", now=NOW + timedelta(days=1))
        self.assertEqual(events, [])
        self.assertEqual(req.payment.paid_at, NOW)
        self.assertEqual(req.payment.payment_method, "pix")

    def test_notes_kept_when_not_supplied(self) -> None:
        req = self._completed()
        req.payment.notes = "Orçamento aprovado"
        mark_paid(req, "boleto", now=NOW)
        self.assertEqual(req.payment.notes, "Orçamento aprovado")


class OverdueTests(SimpleTestCase):
    def test_scheduled_in_the_past(self) -> None:
        req = make_request(status="scheduled", scheduled_date=NOW - timedelta(hours=1))
        self.assertTrue(is_overdue(req, NOW))
        self.assertTrue(is_schedule_late(req, NOW))

    def test_scheduled_in_the_future(self) -> None:
        req = make_request(status="scheduled", scheduled_date=NOW + timedelta(days=1))
        self.assertFalse(is_overdue(req, NOW))

    def test_in_progress_past_date_is_late_but_not_overdue(self) -> None:
        req = make_request(status="in-progress", scheduled_date=NOW - timedelta(days=1))
        self.assertTrue(is_schedule_late(req, NOW))
        self.assertFalse(is_overdue(req, NOW))

    def test_unpaid_payment_past_due(self) -> None:
        req = make_request(
            status="completed",
            scheduled_date=NOW - timedelta(days=10),
            payment=make_payment(due_date=NOW - timedelta(days=1)),
        )
        self.assertFalse(is_schedule_late(req, NOW))
        self.assertTrue(is_payment_overdue(req, NOW))
        self.assertTrue(is_overdue(req, NOW))

    def test_paid_payment_is_never_overdue(self) -> None:
        req = make_request(
            status="completed",
            payment=make_payment(due_date=NOW - timedelta(days=1), is_paid=True, paid_at=NOW, payment_method="pix"),
        )
        self.assertFalse(is_overdue(req, NOW))
