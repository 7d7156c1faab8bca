from django.contrib import admin

from venue.models import StoredValue


@admin.register(StoredValue)
class StoredValueAdmin(admin.ModelAdmin):
    list_display = ["key", "updated_at"]
    search_fields = ["key"]
    readonly_fields = ["updated_at"]
