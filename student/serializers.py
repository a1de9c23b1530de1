from rest_framework import serializers
from courses.models import Schedule
from users.serializers import UserSummarySerializer
from .models import Enrollment, Attendance


class EnrollmentSerializer(serializers.ModelSerializer):
    user_id = serializers.IntegerField(read_only=True)
    course_id = serializers.IntegerField(read_only=True)
    enrolled_by_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = Enrollment
        fields = ['id', 'user_id', 'course_id', 'enrolled_by_id', 'enrolled_at']
        read_only_fields = fields


class SelfEnrollSerializer(serializers.Serializer):
    course_id = serializers.IntegerField()


class AssignEnrollmentSerializer(serializers.Serializer):
    """
    Serializer for an admin enrolling another user
    """
    user_id = serializers.IntegerField()
    course_id = serializers.IntegerField()


# ===== ATTENDANCE SERIALIZERS =====

class AttendanceScheduleSerializer(serializers.ModelSerializer):
    course_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = Schedule
        fields = ['id', 'course_id', 'date', 'topic', 'description']
        read_only_fields = fields


class AttendanceSerializer(serializers.ModelSerializer):
    user_id = serializers.IntegerField(read_only=True)
    schedule_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = Attendance
        fields = ['id', 'user_id', 'schedule_id', 'time_worked', 'created_at', 'updated_at']
        read_only_fields = fields


class UserAttendanceSerializer(AttendanceSerializer):
    schedule = AttendanceScheduleSerializer(read_only=True)

    class Meta(AttendanceSerializer.Meta):
        fields = AttendanceSerializer.Meta.fields + ['schedule']
        read_only_fields = fields


class ScheduleAttendanceSerializer(AttendanceSerializer):
    user = UserSummarySerializer(read_only=True)

    class Meta(AttendanceSerializer.Meta):
        fields = AttendanceSerializer.Meta.fields + ['user']
        read_only_fields = fields


class MarkAttendanceSerializer(serializers.Serializer):
    """
    Serializer for recording minutes worked in a session. user_id defaults to
    the caller; only admins may record for someone else.
    """
    schedule_id = serializers.IntegerField()
    time_worked = serializers.IntegerField(min_value=0)
    user_id = serializers.IntegerField(required=False)
