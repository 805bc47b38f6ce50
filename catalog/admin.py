from django.contrib import admin

from .models import (
    CPU,
    GPU,
    PSU,
    RAM,
    Case,
    Cooler,
    Headset,
    Keyboard,
    Monitor,
    Motherboard,
    Mouse,
    Speaker,
    Storage,
    Webcam,
)


@admin.register(CPU)
class CPUAdmin(admin.ModelAdmin):
    list_display = ("name", "socket", "cores", "threads", "base_clock", "boost_clock", "tdp", "price")
    list_filter = ("socket",)
    search_fields = ("name",)


@admin.register(GPU)
class GPUAdmin(admin.ModelAdmin):
    list_display = ("name", "memory_size", "memory_type", "core_clock", "boost_clock", "tdp", "price")
    list_filter = ("memory_type",)
    search_fields = ("name",)


@admin.register(Motherboard)
class MotherboardAdmin(admin.ModelAdmin):
    list_display = ("name", "socket", "chipset", "form_factor", "ram_slots", "max_ram", "has_integrated_wifi", "price")
    list_filter = ("socket", "form_factor", "has_integrated_wifi")
    search_fields = ("name", "chipset")


@admin.register(RAM)
class RAMAdmin(admin.ModelAdmin):
    list_display = ("name", "capacity", "type", "speed", "price")
    list_filter = ("type", "speed")
    search_fields = ("name",)


@admin.register(Storage)
class StorageAdmin(admin.ModelAdmin):
    list_display = ("name", "type", "capacity", "interface", "price")
    list_filter = ("type", "interface")
    search_fields = ("name",)


@admin.register(PSU)
class PSUAdmin(admin.ModelAdmin):
    list_display = ("name", "power", "efficiency_rating", "modular", "price")
    list_filter = ("efficiency_rating", "modular")
    search_fields = ("name",)


@admin.register(Case)
class CaseAdmin(admin.ModelAdmin):
    list_display = ("name", "form_factor", "max_gpu_length", "max_cooler_height", "has_rgb", "price")
    list_filter = ("form_factor", "has_rgb")
    search_fields = ("name",)


@admin.register(Cooler)
class CoolerAdmin(admin.ModelAdmin):
    list_display = ("name", "type", "socket", "tdp_supported", "fan_size", "price")
    list_filter = ("type",)
    search_fields = ("name", "socket")


@admin.register(Monitor)
class MonitorAdmin(admin.ModelAdmin):
    list_display = ("name", "screen_size", "resolution", "refresh_rate", "panel_type", "response_time", "price")
    list_filter = ("panel_type", "resolution")


@admin.register(Keyboard)
class KeyboardAdmin(admin.ModelAdmin):
    list_display = ("name", "type", "switch_type", "layout", "backlight", "price")
    list_filter = ("type", "backlight")


@admin.register(Mouse)
class MouseAdmin(admin.ModelAdmin):
    list_display = ("name", "dpi", "buttons", "wireless", "rgb", "price")
    list_filter = ("wireless", "rgb")


@admin.register(Headset)
class HeadsetAdmin(admin.ModelAdmin):
    list_display = ("name", "type", "microphone", "surround_sound", "price")
    list_filter = ("type",)


@admin.register(Speaker)
class SpeakerAdmin(admin.ModelAdmin):
    list_display = ("name", "type", "total_watts", "bluetooth", "price")
    list_filter = ("type", "bluetooth")


@admin.register(Webcam)
class WebcamAdmin(admin.ModelAdmin):
    list_display = ("name", "resolution", "fps", "microphone", "autofocus", "price")
    list_filter = ("resolution",)
