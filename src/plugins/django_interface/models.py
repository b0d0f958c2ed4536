"""
Dominio → ORM

⚑ A cobrança fica achatada em colunas `payment_*` do próprio chamado
⚑ `user_id` guarda o id da sessão (UUID do cadastro ou "planner")
⚑ Ordem padrão: criação mais recente primeiro
"""

from __future__ import annotations

import uuid

from django.db import models
from django.db.models import CheckConstraint, Index, Q
from django.utils import timezone


# ╭──────────────────────────────────────────────╮
# │ 1. Cadastro de clientes                     │
# ╰──────────────────────────────────────────────╯
class RegisteredUser(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    first_name = models.CharField(max_length=100)
    last_name = models.CharField(max_length=100)
    whatsapp = models.CharField(max_length=20, unique=True)
    whatsapp_last4 = models.CharField(max_length=4, db_index=True)
    email = models.EmailField(max_length=128, blank=True, null=True)
    registered_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "registered_users"
        ordering = ["-registered_at"]
        indexes = [Index(fields=["first_name", "whatsapp_last4"])]

    def __str__(self) -> str:
        return f"{self.first_name} {self.last_name} (…{self.whatsapp_last4})"


# ╭──────────────────────────────────────────────╮
# │ 2. Chamados                                 │
# ╰──────────────────────────────────────────────╯
class ServiceRequest(models.Model):
    class Priority(models.TextChoices):
        LOW = "low", "Baixa"
        MEDIUM = "medium", "Média"
        HIGH = "high", "Alta"
        URGENT = "urgent", "Urgente"

    class Status(models.TextChoices):
        PENDING = "pending", "Pendente"
        SCHEDULED = "scheduled", "Agendado"
        IN_PROGRESS = "in-progress", "Em Andamento"
        COMPLETED = "completed", "Concluído"

    class PaymentMethod(models.TextChoices):
        PIX = "pix", "PIX"
        CASH = "cash", "Dinheiro"
        CARD = "card", "Cartão"
        TRANSFER = "transfer", "Transferência"
        BOLETO = "boleto", "Boleto"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user_id = models.CharField(max_length=64, db_index=True)
    title = models.CharField(max_length=200)
    description = models.TextField()
    category = models.CharField(max_length=32, db_index=True)
    location = models.CharField(max_length=255)
    requester = models.CharField(max_length=255)
    contact = models.CharField(max_length=255, blank=True, default="")
    priority = models.CharField(max_length=10, choices=Priority.choices, default=Priority.MEDIUM)
    status = models.CharField(
        max_length=15, choices=Status.choices, default=Status.PENDING, db_index=True
    )
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)
    scheduled_days = models.PositiveIntegerField(null=True, blank=True)
    scheduled_date = models.DateTimeField(null=True, blank=True)
    completed_at = models.DateTimeField(null=True, blank=True)

    # cobrança (payment_amount nulo = sem cobrança)
    payment_amount = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    payment_due_date = models.DateTimeField(null=True, blank=True)
    payment_is_paid = models.BooleanField(default=False)
    payment_paid_at = models.DateTimeField(null=True, blank=True)
    payment_method = models.CharField(
        max_length=10, choices=PaymentMethod.choices, null=True, blank=True
    )
    payment_notes = models.TextField(null=True, blank=True)

    class Meta:
        db_table = "service_requests"
        ordering = ["-created_at"]
        indexes = [
            Index(fields=["user_id", "-created_at"]),
            Index(fields=["status", "-created_at"]),
        ]
        constraints = [
            CheckConstraint(
                condition=Q(payment_is_paid=False) | Q(payment_paid_at__isnull=False, payment_method__isnull=False),
                name="ck_paid_requires_date_and_method",
            ),
            CheckConstraint(
                condition=Q(payment_amount__isnull=True) | Q(payment_due_date__isnull=False),
                name="ck_payment_requires_due_date",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.title} [{self.status}]"
