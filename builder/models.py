from django.conf import settings
from django.db import models

from catalog.registry import CATEGORIES

COMPONENT_TYPE_CHOICES = [(c, c) for c in CATEGORIES]


class Build(models.Model):
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="builds"
    )
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    # Denormalized sum of component prices at save time; not refreshed when
    # catalog prices change later.
    total_price = models.DecimalField(max_digits=10, decimal_places=2)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return f"{self.name} ({self.user})"


class BuildComponent(models.Model):
    build = models.ForeignKey(
        Build, on_delete=models.CASCADE, related_name="components"
    )
    component_type = models.CharField(max_length=50, choices=COMPONENT_TYPE_CHOICES)
    component_id = models.PositiveIntegerField()

    class Meta:
        ordering = ["id"]

    def __str__(self):
        return f"{self.component_type} #{self.component_id}"
