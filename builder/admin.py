from django.contrib import admin

from .models import Build, BuildComponent


class BuildComponentInline(admin.TabularInline):
    model = BuildComponent
    extra = 0


@admin.register(Build)
class BuildAdmin(admin.ModelAdmin):
    list_display = ("name", "user", "total_price", "created_at")
    list_filter = ("created_at",)
    search_fields = ("name", "user__email", "user__name")
    readonly_fields = ("created_at",)
    raw_id_fields = ("user",)
    inlines = [BuildComponentInline]
