from decimal import Decimal

from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='City',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=50, unique=True)),
                ('image', models.URLField(blank=True, default='')),
            ],
            options={
                'verbose_name_plural': 'cities',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='OTPAttempt',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('mobile_number', models.CharField(db_index=True, max_length=15, unique=True)),
                ('attempt_count', models.IntegerField(default=0)),
                ('last_attempt', models.DateTimeField(auto_now=True)),
                ('blocked_until', models.DateTimeField(blank=True, null=True)),
            ],
            options={
                'indexes': [models.Index(fields=['mobile_number', 'last_attempt'], name='otp_mobile_last_idx')],
            },
        ),
        migrations.CreateModel(
            name='VehicleType',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=30, unique=True)),
                ('rate_multiplier', models.DecimalField(decimal_places=2, default=Decimal('1.00'), max_digits=4)),
                ('seats', models.PositiveSmallIntegerField()),
                ('layout', models.JSONField(default=list, help_text='Seats per row, front row first, e.g. [1, 3, 3]')),
                ('image', models.URLField(blank=True, default='')),
            ],
            options={
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='Profile',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('mobile_number', models.CharField(blank=True, db_index=True, max_length=15, null=True, unique=True)),
                ('full_name', models.CharField(max_length=100)),
                ('role', models.CharField(choices=[('passenger', 'Passenger'), ('owner', 'Vehicle Owner')], default='passenger', max_length=10)),
                ('vehicle_no', models.CharField(blank=True, max_length=20, null=True)),
                ('vehicle_type', models.CharField(blank=True, max_length=30, null=True)),
                ('profile_image', models.FileField(blank=True, null=True, upload_to='profiles/')),
                ('auth_provider', models.CharField(choices=[('phone', 'Phone OTP'), ('google', 'Google')], default='phone', max_length=10)),
                ('driver_rating', models.DecimalField(decimal_places=2, default=5.0, max_digits=3)),
                ('total_reviews', models.IntegerField(default=0)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('user', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, to=settings.AUTH_USER_MODEL)),
            ],
        ),
        migrations.CreateModel(
            name='Route',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('distance_km', models.PositiveIntegerField()),
                ('base_fare', models.PositiveIntegerField(help_text='Per-seat fare for a standard vehicle')),
                ('from_city', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='routes_from', to='connect_app.city')),
                ('to_city', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='routes_to', to='connect_app.city')),
            ],
            options={
                'ordering': ['id'],
                'unique_together': {('from_city', 'to_city')},
            },
        ),
        migrations.CreateModel(
            name='RideOffer',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('vehicle_no', models.CharField(max_length=20)),
                ('vehicle_type', models.CharField(max_length=30)),
                ('departure_date', models.DateField(db_index=True)),
                ('departure_time', models.TimeField()),
                ('price_per_seat', models.PositiveIntegerField()),
                ('total_seats', models.PositiveSmallIntegerField()),
                ('booked_seats', models.JSONField(default=list)),
                ('rating', models.DecimalField(decimal_places=2, default=5.0, max_digits=3)),
                ('is_active', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('driver', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='ride_offers', to=settings.AUTH_USER_MODEL)),
                ('from_city', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='offers_from', to='connect_app.city')),
                ('to_city', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='offers_to', to='connect_app.city')),
            ],
            options={
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['from_city', 'to_city', 'departure_date'], name='offer_route_date_idx')],
            },
        ),
        migrations.CreateModel(
            name='Trip',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('travel_date', models.DateField(db_index=True)),
                ('seats', models.JSONField(default=list)),
                ('cost', models.PositiveIntegerField()),
                ('status', models.CharField(choices=[('BOOKED', 'Booked'), ('EN_ROUTE', 'En Route'), ('ARRIVED', 'Arrived'), ('COMPLETED', 'Completed'), ('CANCELLED', 'Cancelled')], db_index=True, default='BOOKED', max_length=10)),
                ('driver_name', models.CharField(default='Assigned Driver', max_length=100)),
                ('vehicle_no', models.CharField(default='JK-XX-TEMP', max_length=20)),
                ('vehicle_type', models.CharField(max_length=30)),
                ('user_rating', models.PositiveSmallIntegerField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('completed_at', models.DateTimeField(blank=True, null=True)),
                ('cancelled_at', models.DateTimeField(blank=True, null=True)),
                ('driver', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='driven_trips', to=settings.AUTH_USER_MODEL)),
                ('from_city', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='trips_from', to='connect_app.city')),
                ('offer', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='trips', to='connect_app.rideoffer')),
                ('passenger', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='trips', to=settings.AUTH_USER_MODEL)),
                ('to_city', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='trips_to', to='connect_app.city')),
            ],
            options={
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['passenger', '-created_at'], name='trip_passenger_created_idx'),
                    models.Index(fields=['driver', 'status'], name='trip_driver_status_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='ChatMessage',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('text', models.TextField(max_length=1000)),
                ('timestamp', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('sender', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='chat_messages', to=settings.AUTH_USER_MODEL)),
                ('trip', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='messages', to='connect_app.trip')),
            ],
            options={
                'ordering': ['timestamp', 'id'],
            },
        ),
    ]
