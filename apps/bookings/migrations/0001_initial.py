from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Booking",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("full_name", models.CharField(max_length=255)),
                ("phone", models.CharField(max_length=64)),
                ("instagram", models.CharField(max_length=255)),
                ("email", models.EmailField(blank=True, max_length=254, null=True)),
                ("date", models.DateField()),
                ("slot", models.CharField(max_length=4)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "verbose_name": "Booking",
                "verbose_name_plural": "Bookings",
                "ordering": ["date", "slot"],
            },
        ),
        migrations.CreateModel(
            name="SlotOverride",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("date", models.DateField()),
                ("slot", models.CharField(max_length=4)),
                ("is_open", models.BooleanField()),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "verbose_name": "Slot override",
                "verbose_name_plural": "Slot overrides",
                "ordering": ["date", "slot"],
            },
        ),
        migrations.AddConstraint(
            model_name="booking",
            constraint=models.UniqueConstraint(fields=("date", "slot"), name="booking_unique_date_slot"),
        ),
        migrations.AddConstraint(
            model_name="slotoverride",
            constraint=models.UniqueConstraint(fields=("date", "slot"), name="slot_override_unique_date_slot"),
        ),
    ]
