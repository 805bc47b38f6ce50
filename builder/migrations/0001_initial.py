import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Build",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True, default="")),
                ("total_price", models.DecimalField(decimal_places=2, max_digits=10)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("user", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="builds", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "ordering": ["-created_at", "-id"],
            },
        ),
        migrations.CreateModel(
            name="BuildComponent",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("component_type", models.CharField(choices=[("cpu", "cpu"), ("gpu", "gpu"), ("motherboard", "motherboard"), ("ram", "ram"), ("storage", "storage"), ("psu", "psu"), ("case", "case"), ("cooler", "cooler"), ("monitor", "monitor"), ("keyboard", "keyboard"), ("mouse", "mouse"), ("headset", "headset"), ("speaker", "speaker"), ("webcam", "webcam")], max_length=50)),
                ("component_id", models.PositiveIntegerField()),
                ("build", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="components", to="builder.build")),
            ],
            options={
                "ordering": ["id"],
            },
        ),
    ]
