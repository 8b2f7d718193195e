import django.db.models.deletion
import django.utils.timezone
import uuid6
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="CustomerRecord",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid6.uuid7,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("updated_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("name", models.CharField(max_length=255)),
                ("is_active", models.BooleanField(default=True)),
            ],
            options={
                "db_table": "customers",
                "ordering": ["created_at", "id"],
                "indexes": [
                    models.Index(fields=["is_active"], name="customers_active_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="CustomerEmailRecord",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("position", models.PositiveSmallIntegerField()),
                ("value", models.CharField(max_length=254)),
                ("is_primary", models.BooleanField(default=False)),
                (
                    "customer",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="emails",
                        to="customers.customerrecord",
                    ),
                ),
            ],
            options={
                "db_table": "customer_emails",
                "ordering": ["position"],
            },
        ),
        migrations.CreateModel(
            name="CustomerPhoneRecord",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("position", models.PositiveSmallIntegerField()),
                ("area_code", models.CharField(max_length=2)),
                ("number", models.CharField(max_length=9)),
                ("is_primary", models.BooleanField(default=False)),
                (
                    "customer",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="phones",
                        to="customers.customerrecord",
                    ),
                ),
            ],
            options={
                "db_table": "customer_phones",
                "ordering": ["position"],
            },
        ),
        migrations.CreateModel(
            name="CustomerAddressRecord",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("position", models.PositiveSmallIntegerField()),
                ("street", models.CharField(max_length=255)),
                ("number", models.CharField(max_length=20)),
                ("complement", models.CharField(blank=True, max_length=255, null=True)),
                ("city", models.CharField(max_length=120)),
                ("state", models.CharField(max_length=60)),
                ("zip_code", models.CharField(max_length=20)),
                ("country", models.CharField(max_length=60)),
                ("is_primary", models.BooleanField(default=False)),
                (
                    "customer",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="addresses",
                        to="customers.customerrecord",
                    ),
                ),
            ],
            options={
                "db_table": "customer_addresses",
                "ordering": ["position"],
            },
        ),
        migrations.CreateModel(
            name="CustomerDocumentRecord",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("position", models.PositiveSmallIntegerField()),
                ("number", models.CharField(max_length=64, unique=True)),
                ("document_type", models.CharField(max_length=20)),
                (
                    "customer",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="documents",
                        to="customers.customerrecord",
                    ),
                ),
            ],
            options={
                "db_table": "customer_documents",
                "ordering": ["position"],
            },
        ),
    ]
