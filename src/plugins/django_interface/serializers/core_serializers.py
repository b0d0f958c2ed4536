# =========================================================
# Serializers compatíveis com as *entities* (e não com os
# modelos Django). Os campos derivados (atraso, rótulos,
# categoria) vêm das mesmas funções puras usadas no painel.
# =========================================================
from django.utils import timezone
from rest_framework import serializers

from chamados_core.core.domain.reference_data import (
    PAYMENT_METHOD_LABELS,
    PRIORITY_LABELS,
    STATUS_LABELS,
    get_category,
)
from chamados_core.core.domain.services.request_lifecycle import (
    is_overdue,
    is_payment_overdue,
    is_schedule_late,
)


# ───────────────────────────────────────────────
# Cobrança
# ───────────────────────────────────────────────
class PaymentSerializer(serializers.Serializer):
    amount         = serializers.DecimalField(max_digits=12, decimal_places=2)
    due_date       = serializers.DateTimeField()
    is_paid        = serializers.BooleanField()
    paid_at        = serializers.DateTimeField(allow_null=True)
    payment_method = serializers.CharField(allow_null=True)
    payment_method_label = serializers.SerializerMethodField()
    notes          = serializers.CharField(allow_null=True, allow_blank=True)

    def get_payment_method_label(self, obj):
        return PAYMENT_METHOD_LABELS.get(obj.payment_method) if obj.payment_method else None


# ───────────────────────────────────────────────
# Chamados
# ───────────────────────────────────────────────
class ServiceRequestSerializer(serializers.Serializer):
    id             = serializers.UUIDField()
    user_id        = serializers.CharField()
    title          = serializers.CharField()
    description    = serializers.CharField()
    category       = serializers.CharField()
    category_name  = serializers.SerializerMethodField()
    location       = serializers.CharField()
    requester      = serializers.CharField()
    contact        = serializers.CharField(allow_blank=True)
    priority       = serializers.CharField()
    priority_label = serializers.SerializerMethodField()
    status         = serializers.CharField()
    status_label   = serializers.SerializerMethodField()
    created_at     = serializers.DateTimeField()
    scheduled_days = serializers.IntegerField(allow_null=True)
    scheduled_date = serializers.DateTimeField(allow_null=True)
    completed_at   = serializers.DateTimeField(allow_null=True)
    payment        = PaymentSerializer(allow_null=True)
    is_overdue     = serializers.SerializerMethodField()
    is_schedule_late   = serializers.SerializerMethodField()
    is_payment_overdue = serializers.SerializerMethodField()

    def _now(self):
        return self.context.get("now") or timezone.now()

    def get_category_name(self, obj):
        return get_category(obj.category).name

    def get_priority_label(self, obj):
        return PRIORITY_LABELS.get(obj.priority, obj.priority)

    def get_status_label(self, obj):
        return STATUS_LABELS.get(obj.status, obj.status)

    def get_is_overdue(self, obj):
        return is_overdue(obj, self._now())

    def get_is_schedule_late(self, obj):
        return is_schedule_late(obj, self._now())

    def get_is_payment_overdue(self, obj):
        return is_payment_overdue(obj, self._now())


# ───────────────────────────────────────────────
# Sessão / Cadastro
# ───────────────────────────────────────────────
class SessionUserSerializer(serializers.Serializer):
    id             = serializers.CharField()
    first_name     = serializers.CharField()
    full_name      = serializers.CharField()
    role           = serializers.CharField()
    whatsapp_last4 = serializers.CharField(allow_null=True)


class RegisteredUserSerializer(serializers.Serializer):
    id             = serializers.UUIDField()
    first_name     = serializers.CharField()
    last_name      = serializers.CharField()
    whatsapp_last4 = serializers.CharField()
    email          = serializers.EmailField(allow_null=True)
    registered_at  = serializers.DateTimeField()


# ───────────────────────────────────────────────
# Painel
# ───────────────────────────────────────────────
class DashboardStatsSerializer(serializers.Serializer):
    total           = serializers.IntegerField()
    pending         = serializers.IntegerField()
    scheduled       = serializers.IntegerField()
    inProgress      = serializers.IntegerField()
    completed       = serializers.IntegerField()
    overdue         = serializers.IntegerField()
    totalRevenue    = serializers.DecimalField(max_digits=14, decimal_places=2)
    pendingPayments = serializers.IntegerField()


class PaymentBucketSerializer(serializers.Serializer):
    amount     = serializers.DecimalField(max_digits=14, decimal_places=2)
    count      = serializers.IntegerField()
    requestIds = serializers.ListField(child=serializers.CharField())


class FinancialSummarySerializer(serializers.Serializer):
    totalRevenue = serializers.DecimalField(max_digits=14, decimal_places=2)
    paid         = PaymentBucketSerializer()
    pending      = PaymentBucketSerializer()
    overdue      = PaymentBucketSerializer()
