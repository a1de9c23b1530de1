from django.contrib import admin
from .models import Enrollment, Attendance


@admin.register(Enrollment)
class EnrollmentAdmin(admin.ModelAdmin):
    list_display = ['user', 'course', 'self_enrolled', 'enrolled_by', 'enrolled_at']
    list_filter = ['course', 'enrolled_at']
    search_fields = ['user__email', 'user__name', 'course__name']
    readonly_fields = ['id', 'enrolled_at']
    date_hierarchy = 'enrolled_at'

    def self_enrolled(self, obj):
        return obj.is_self_enrollment
    self_enrolled.short_description = 'Self enrolled'
    self_enrolled.boolean = True


@admin.register(Attendance)
class AttendanceAdmin(admin.ModelAdmin):
    list_display = ['user', 'schedule', 'time_worked', 'updated_at']
    list_filter = ['schedule__course']
    search_fields = ['user__email', 'user__name', 'schedule__topic']
    readonly_fields = ['id', 'created_at', 'updated_at']
