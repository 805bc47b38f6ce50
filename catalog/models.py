from django.db import models

FORM_FACTOR_CHOICES = [
    ("ATX", "ATX"),
    ("Micro-ATX", "Micro-ATX"),
    ("Mini-ITX", "Mini-ITX"),
]


class Component(models.Model):
    """Fields every catalog entry shares, whatever its category."""

    name = models.CharField(max_length=255)
    price = models.DecimalField(max_digits=10, decimal_places=2)
    image_url = models.CharField(max_length=255, blank=True, null=True)

    class Meta:
        abstract = True
        ordering = ["name", "id"]

    def __str__(self):
        return self.name


class CPU(Component):
    socket = models.CharField(max_length=50)
    cores = models.IntegerField()
    threads = models.IntegerField()
    base_clock = models.DecimalField(max_digits=5, decimal_places=2)
    boost_clock = models.DecimalField(max_digits=5, decimal_places=2, blank=True, null=True)
    tdp = models.IntegerField()

    class Meta(Component.Meta):
        verbose_name = "CPU"
        verbose_name_plural = "CPUs"


class GPU(Component):
    memory_size = models.IntegerField()
    memory_type = models.CharField(max_length=50)
    core_clock = models.IntegerField()
    boost_clock = models.IntegerField(blank=True, null=True)
    tdp = models.IntegerField()

    class Meta(Component.Meta):
        verbose_name = "GPU"
        verbose_name_plural = "GPUs"


class Motherboard(Component):
    socket = models.CharField(max_length=50)
    chipset = models.CharField(max_length=50)
    form_factor = models.CharField(max_length=20, choices=FORM_FACTOR_CHOICES)
    ram_slots = models.IntegerField()
    max_ram = models.IntegerField()
    has_integrated_wifi = models.BooleanField(default=False)


class RAM(Component):
    capacity = models.IntegerField()
    type = models.CharField(max_length=50)
    speed = models.IntegerField()

    class Meta(Component.Meta):
        verbose_name = "RAM kit"


class Storage(Component):
    type = models.CharField(
        max_length=10,
        choices=[("HDD", "HDD"), ("SSD", "SSD"), ("NVMe", "NVMe")],
    )
    capacity = models.IntegerField()
    interface = models.CharField(max_length=50)

    class Meta(Component.Meta):
        verbose_name_plural = "storage"


class PSU(Component):
    power = models.IntegerField()
    efficiency_rating = models.CharField(
        max_length=30,
        choices=[
            ("80 Plus", "80 Plus"),
            ("80 Plus Bronze", "80 Plus Bronze"),
            ("80 Plus Gold", "80 Plus Gold"),
            ("80 Plus Platinum", "80 Plus Platinum"),
        ],
    )
    modular = models.BooleanField(default=False)

    class Meta(Component.Meta):
        verbose_name = "PSU"
        verbose_name_plural = "PSUs"


class Case(Component):
    form_factor = models.CharField(max_length=20, choices=FORM_FACTOR_CHOICES)
    max_gpu_length = models.IntegerField()
    max_cooler_height = models.IntegerField()
    has_rgb = models.BooleanField(default=False)


class Cooler(Component):
    type = models.CharField(max_length=10, choices=[("Air", "Air"), ("Liquid", "Liquid")])
    socket = models.CharField(max_length=255)
    tdp_supported = models.IntegerField()
    fan_size = models.IntegerField()


class Monitor(Component):
    screen_size = models.DecimalField(max_digits=4, decimal_places=1)
    resolution = models.CharField(max_length=50)
    refresh_rate = models.IntegerField()
    panel_type = models.CharField(
        max_length=10,
        choices=[("TN", "TN"), ("IPS", "IPS"), ("VA", "VA"), ("OLED", "OLED")],
    )
    response_time = models.DecimalField(max_digits=3, decimal_places=1)


class Keyboard(Component):
    type = models.CharField(
        max_length=20,
        choices=[("Mechanical", "Mechanical"), ("Membrane", "Membrane")],
    )
    switch_type = models.CharField(max_length=50, blank=True, null=True)
    layout = models.CharField(max_length=50)
    backlight = models.BooleanField(default=False)


class Mouse(Component):
    dpi = models.IntegerField()
    buttons = models.IntegerField()
    wireless = models.BooleanField(default=False)
    rgb = models.BooleanField(default=False)

    class Meta(Component.Meta):
        verbose_name_plural = "mice"


class Headset(Component):
    type = models.CharField(max_length=10, choices=[("Wired", "Wired"), ("Wireless", "Wireless")])
    microphone = models.BooleanField(default=True)
    surround_sound = models.BooleanField(default=False)


class Speaker(Component):
    type = models.CharField(
        max_length=5,
        choices=[("2.0", "2.0"), ("2.1", "2.1"), ("5.1", "5.1"), ("7.1", "7.1")],
    )
    total_watts = models.IntegerField()
    bluetooth = models.BooleanField(default=False)


class Webcam(Component):
    resolution = models.CharField(max_length=50)
    fps = models.IntegerField()
    microphone = models.BooleanField(default=False)
    autofocus = models.BooleanField(default=False)
