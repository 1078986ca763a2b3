from rest_framework import serializers

from connect_app.utils.constants import TopUpMethod
from .models import Wallet, WalletTransaction, EscrowHold


class WalletSerializer(serializers.ModelSerializer):
    class Meta:
        model = Wallet
        fields = ['id', 'user', 'balance']


class WalletTransactionSerializer(serializers.ModelSerializer):
    class Meta:
        model = WalletTransaction
        fields = ['id', 'title', 'description', 'reference_id', 'wallet', 'transaction_type', 'amount', 'timestamp']


class TopUpSerializer(serializers.Serializer):
    amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=1)
    method = serializers.ChoiceField(choices=TopUpMethod.CHOICES, default=TopUpMethod.SIMULATED)


class EscrowHoldSerializer(serializers.ModelSerializer):
    booking_reference = serializers.CharField(source='trip.booking_reference', read_only=True)
    payer = serializers.CharField(source='payer.user.username', read_only=True)

    class Meta:
        model = EscrowHold
        fields = ['id', 'trip', 'booking_reference', 'payer', 'amount', 'status', 'created_at']
