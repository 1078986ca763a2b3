from django.contrib import admin

from .models import Wallet, WalletTransaction, EscrowHold


@admin.register(Wallet)
class WalletAdmin(admin.ModelAdmin):
    list_display = ['user', 'balance']
    search_fields = ['user__username']


@admin.register(WalletTransaction)
class WalletTransactionAdmin(admin.ModelAdmin):
    list_display = ['wallet', 'transaction_type', 'amount', 'title', 'reference_id', 'timestamp']
    list_filter = ['transaction_type']
    search_fields = ['wallet__user__username', 'reference_id']


@admin.register(EscrowHold)
class EscrowHoldAdmin(admin.ModelAdmin):
    list_display = ['trip', 'payer', 'payee', 'amount', 'status', 'created_at', 'settled_at']
    list_filter = ['status']
    readonly_fields = ['trip', 'payer', 'payee', 'amount', 'status', 'created_at', 'settled_at']
