from django.contrib import admin
from django.utils import timezone
from .models import Course, Schedule, Project, ProjectSubmission


class ScheduleInline(admin.TabularInline):
    model = Schedule
    extra = 0
    fields = ['date', 'topic', 'description']


class ProjectInline(admin.TabularInline):
    model = Project
    extra = 0
    fields = ['name', 'due_date']


@admin.register(Course)
class CourseAdmin(admin.ModelAdmin):
    list_display = ['name', 'created_by', 'enrolled_students_count', 'created_at']
    search_fields = ['name', 'description', 'created_by__email']
    readonly_fields = ['id', 'created_at', 'updated_at', 'enrolled_students_count']
    inlines = [ScheduleInline, ProjectInline]

    fieldsets = (
        ('Basic Information', {
            'fields': ('name', 'description', 'image_url', 'created_by')
        }),
        ('Metadata', {
            'fields': ('id', 'created_at', 'updated_at', 'enrolled_students_count'),
            'classes': ('collapse',)
        }),
    )


@admin.register(Schedule)
class ScheduleAdmin(admin.ModelAdmin):
    list_display = ['topic', 'course', 'date', 'created_at']
    list_filter = ['course', 'date']
    search_fields = ['topic', 'description', 'course__name']
    date_hierarchy = 'date'


@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    list_display = ['name', 'course', 'due_date', 'submission_count', 'created_at']
    list_filter = ['course', 'due_date']
    search_fields = ['name', 'description', 'course__name']

    def submission_count(self, obj):
        return obj.submissions.count()
    submission_count.short_description = 'Submissions'


@admin.register(ProjectSubmission)
class ProjectSubmissionAdmin(admin.ModelAdmin):
    list_display = ['project', 'user', 'is_reviewed', 'reviewer', 'submitted_at', 'reviewed_at']
    list_filter = ['is_reviewed', 'project__course', 'submitted_at']
    search_fields = ['project__name', 'user__email', 'user__name', 'review_notes']
    readonly_fields = ['id', 'submitted_at', 'updated_at', 'reviewed_at']
    date_hierarchy = 'submitted_at'
    actions = ['mark_as_reviewed']

    def mark_as_reviewed(self, request, queryset):
        """Action to mark submissions as reviewed without notes"""
        updated = queryset.filter(is_reviewed=False).update(
            is_reviewed=True,
            reviewed_at=timezone.now(),
            reviewer=request.user
        )
        self.message_user(request, f'{updated} submissions were marked as reviewed.')
    mark_as_reviewed.short_description = "Mark selected submissions as reviewed"
