import django.db.models.deletion
from django.db import migrations, models


def claim_existing_numbers(apps, schema_editor):
    CustomerDocumentRecord = apps.get_model("customers", "CustomerDocumentRecord")
    CustomerDocumentClaim = apps.get_model("customers", "CustomerDocumentClaim")
    seen = set()
    claims = []
    for row in CustomerDocumentRecord.objects.order_by("id").only("customer_id", "number"):
        if row.number not in seen:
            seen.add(row.number)
            claims.append(CustomerDocumentClaim(customer_id=row.customer_id, number=row.number))
    CustomerDocumentClaim.objects.bulk_create(claims)


class Migration(migrations.Migration):

    dependencies = [
        ("customers", "0001_initial"),
    ]

    operations = [
        migrations.AlterField(
            model_name="customerdocumentrecord",
            name="number",
            field=models.CharField(db_index=True, max_length=64),
        ),
        migrations.CreateModel(
            name="CustomerDocumentClaim",
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
                ("number", models.CharField(max_length=64, unique=True)),
                (
                    "customer",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="document_claims",
                        to="customers.customerrecord",
                    ),
                ),
            ],
            options={
                "db_table": "customer_document_claims",
            },
        ),
        migrations.RunPython(claim_existing_numbers, migrations.RunPython.noop),
    ]
