from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="CPU",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=255)),
                ("price", models.DecimalField(decimal_places=2, max_digits=10)),
                ("image_url", models.CharField(blank=True, max_length=255, null=True)),
                ("socket", models.CharField(max_length=50)),
                ("cores", models.IntegerField()),
                ("threads", models.IntegerField()),
                ("base_clock", models.DecimalField(decimal_places=2, max_digits=5)),
                ("boost_clock", models.DecimalField(blank=True, decimal_places=2, max_digits=5, null=True)),
                ("tdp", models.IntegerField()),
            ],
            options={
                "verbose_name": "CPU",
                "verbose_name_plural": "CPUs",
                "ordering": ["name", "id"],
                "abstract": False,
            },
        ),
        migrations.CreateModel(
            name="GPU",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=255)),
                ("price", models.DecimalField(decimal_places=2, max_digits=10)),
                ("image_url", models.CharField(blank=True, max_length=255, null=True)),
                ("memory_size", models.IntegerField()),
                ("memory_type", models.CharField(max_length=50)),
                ("core_clock", models.IntegerField()),
                ("boost_clock", models.IntegerField(blank=True, null=True)),
                ("tdp", models.IntegerField()),
            ],
            options={
                "verbose_name": "GPU",
                "verbose_name_plural": "GPUs",
                "ordering": ["name", "id"],
                "abstract": False,
            },
        ),
        migrations.CreateModel(
            name="Motherboard",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=255)),
                ("price", models.DecimalField(decimal_places=2, max_digits=10)),
                ("image_url", models.CharField(blank=True, max_length=255, null=True)),
                ("socket", models.CharField(max_length=50)),
                ("chipset", models.CharField(max_length=50)),
                ("form_factor", models.CharField(choices=[("ATX", "ATX"), ("Micro-ATX", "Micro-ATX"), ("Mini-ITX", "Mini-ITX")], max_length=20)),
                ("ram_slots", models.IntegerField()),
                ("max_ram", models.IntegerField()),
                ("has_integrated_wifi", models.BooleanField(default=False)),
            ],
            options={
                "ordering": ["name", "id"],
                "abstract": False,
            },
        ),
        migrations.CreateModel(
            name="RAM",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=255)),
                ("price", models.DecimalField(decimal_places=2, max_digits=10)),
                ("image_url", models.CharField(blank=True, max_length=255, null=True)),
                ("capacity", models.IntegerField()),
                ("type", models.CharField(max_length=50)),
                ("speed", models.IntegerField()),
            ],
            options={
                "verbose_name": "RAM kit",
                "ordering": ["name", "id"],
                "abstract": False,
            },
        ),
        migrations.CreateModel(
            name="Storage",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=255)),
                ("price", models.DecimalField(decimal_places=2, max_digits=10)),
                ("image_url", models.CharField(blank=True, max_length=255, null=True)),
                ("type", models.CharField(choices=[("HDD", "HDD"), ("SSD", "SSD"), ("NVMe", "NVMe")], max_length=10)),
                ("capacity", models.IntegerField()),
                ("interface", models.CharField(max_length=50)),
            ],
            options={
                "verbose_name_plural": "storage",
                "ordering": ["name", "id"],
                "abstract": False,
            },
        ),
        migrations.CreateModel(
            name="PSU",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=255)),
                ("price", models.DecimalField(decimal_places=2, max_digits=10)),
                ("image_url", models.CharField(blank=True, max_length=255, null=True)),
                ("power", models.IntegerField()),
                ("efficiency_rating", models.CharField(choices=[("80 Plus", "80 Plus"), ("80 Plus Bronze", "80 Plus Bronze"), ("80 Plus Gold", "80 Plus Gold"), ("80 Plus Platinum", "80 Plus Platinum")], max_length=30)),
                ("modular", models.BooleanField(default=False)),
            ],
            options={
                "verbose_name": "PSU",
                "verbose_name_plural": "PSUs",
                "ordering": ["name", "id"],
                "abstract": False,
            },
        ),
        migrations.CreateModel(
            name="Case",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=255)),
                ("price", models.DecimalField(decimal_places=2, max_digits=10)),
                ("image_url", models.CharField(blank=True, max_length=255, null=True)),
                ("form_factor", models.CharField(choices=[("ATX", "ATX"), ("Micro-ATX", "Micro-ATX"), ("Mini-ITX", "Mini-ITX")], max_length=20)),
                ("max_gpu_length", models.IntegerField()),
                ("max_cooler_height", models.IntegerField()),
                ("has_rgb", models.BooleanField(default=False)),
            ],
            options={
                "ordering": ["name", "id"],
                "abstract": False,
            },
        ),
        migrations.CreateModel(
            name="Cooler",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=255)),
                ("price", models.DecimalField(decimal_places=2, max_digits=10)),
                ("image_url", models.CharField(blank=True, max_length=255, null=True)),
                ("type", models.CharField(choices=[("Air", "Air"), ("Liquid", "Liquid")], max_length=10)),
                ("socket", models.CharField(max_length=255)),
                ("tdp_supported", models.IntegerField()),
                ("fan_size", models.IntegerField()),
            ],
            options={
                "ordering": ["name", "id"],
                "abstract": False,
            },
        ),
        migrations.CreateModel(
            name="Monitor",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=255)),
                ("price", models.DecimalField(decimal_places=2, max_digits=10)),
                ("image_url", models.CharField(blank=True, max_length=255, null=True)),
                ("screen_size", models.DecimalField(decimal_places=1, max_digits=4)),
                ("resolution", models.CharField(max_length=50)),
                ("refresh_rate", models.IntegerField()),
                ("panel_type", models.CharField(choices=[("TN", "TN"), ("IPS", "IPS"), ("VA", "VA"), ("OLED", "OLED")], max_length=10)),
                ("response_time", models.DecimalField(decimal_places=1, max_digits=3)),
            ],
            options={
                "ordering": ["name", "id"],
                "abstract": False,
            },
        ),
        migrations.CreateModel(
            name="Keyboard",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=255)),
                ("price", models.DecimalField(decimal_places=2, max_digits=10)),
                ("image_url", models.CharField(blank=True, max_length=255, null=True)),
                ("type", models.CharField(choices=[("Mechanical", "Mechanical"), ("Membrane", "Membrane")], max_length=20)),
                ("switch_type", models.CharField(blank=True, max_length=50, null=True)),
                ("layout", models.CharField(max_length=50)),
                ("backlight", models.BooleanField(default=False)),
            ],
            options={
                "ordering": ["name", "id"],
                "abstract": False,
            },
        ),
        migrations.CreateModel(
            name="Mouse",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=255)),
                ("price", models.DecimalField(decimal_places=2, max_digits=10)),
                ("image_url", models.CharField(blank=True, max_length=255, null=True)),
                ("dpi", models.IntegerField()),
                ("buttons", models.IntegerField()),
                ("wireless", models.BooleanField(default=False)),
                ("rgb", models.BooleanField(default=False)),
            ],
            options={
                "verbose_name_plural": "mice",
                "ordering": ["name", "id"],
                "abstract": False,
            },
        ),
        migrations.CreateModel(
            name="Headset",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=255)),
                ("price", models.DecimalField(decimal_places=2, max_digits=10)),
                ("image_url", models.CharField(blank=True, max_length=255, null=True)),
                ("type", models.CharField(choices=[("Wired", "Wired"), ("Wireless", "Wireless")], max_length=10)),
                ("microphone", models.BooleanField(default=True)),
                ("surround_sound", models.BooleanField(default=False)),
            ],
            options={
                "ordering": ["name", "id"],
                "abstract": False,
            },
        ),
        migrations.CreateModel(
            name="Speaker",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=255)),
                ("price", models.DecimalField(decimal_places=2, max_digits=10)),
                ("image_url", models.CharField(blank=True, max_length=255, null=True)),
                ("type", models.CharField(choices=[("2.0", "2.0"), ("2.1", "2.1"), ("5.1", "5.1"), ("7.1", "7.1")], max_length=5)),
                ("total_watts", models.IntegerField()),
                ("bluetooth", models.BooleanField(default=False)),
            ],
            options={
                "ordering": ["name", "id"],
                "abstract": False,
            },
        ),
        migrations.CreateModel(
            name="Webcam",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=255)),
                ("price", models.DecimalField(decimal_places=2, max_digits=10)),
                ("image_url", models.CharField(blank=True, max_length=255, null=True)),
                ("resolution", models.CharField(max_length=50)),
                ("fps", models.IntegerField()),
                ("microphone", models.BooleanField(default=False)),
                ("autofocus", models.BooleanField(default=False)),
            ],
            options={
                "ordering": ["name", "id"],
                "abstract": False,
            },
        ),
    ]
