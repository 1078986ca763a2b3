from decimal import Decimal

from django.db import models
from django.db.models import Sum
from django.contrib.auth.models import User

from connect_app.utils.constants import TransactionType, EscrowStatus


class Wallet(models.Model):
    user = models.OneToOneField(User, on_delete=models.CASCADE)
    balance = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))

    def __str__(self):
        return f"{self.user.username}'s wallet: {self.balance}"


class WalletTransaction(models.Model):
    wallet = models.ForeignKey(Wallet, on_delete=models.CASCADE, related_name="wallet_transactions")
    transaction_type = models.CharField(max_length=10, choices=TransactionType.CHOICES)
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    title = models.CharField(max_length=32, null=False, blank=False, default='unknown')
    description = models.TextField(blank=True, max_length=150)
    reference_id = models.CharField(max_length=64, default='unknown')
    timestamp = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-timestamp', '-id']

    def __str__(self):
        return f"{self.wallet.user.username} {self.transaction_type} of {self.amount} on {self.timestamp}"


class EscrowHold(models.Model):
    """A trip payment parked in the app vault until the passenger confirms arrival"""

    trip = models.OneToOneField('connect_app.Trip', on_delete=models.PROTECT, related_name='escrow')
    payer = models.ForeignKey(Wallet, on_delete=models.PROTECT, related_name='escrow_payments')
    payee = models.ForeignKey(Wallet, on_delete=models.PROTECT, related_name='escrow_payouts', null=True, blank=True)
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    status = models.CharField(max_length=10, choices=EscrowStatus.CHOICES, default=EscrowStatus.HELD, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)
    settled_at = models.DateTimeField(null=True, blank=True)

    def __str__(self):
        return f"Escrow for trip {self.trip_id}: {self.amount} ({self.status})"

    @classmethod
    def vault_balance(cls):
        total = cls.objects.filter(status=EscrowStatus.HELD).aggregate(total=Sum('amount'))['total']
        return total or Decimal('0.00')
