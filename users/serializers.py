from rest_framework import serializers
from .models import User, MacAddress


class UserSerializer(serializers.ModelSerializer):
    """
    Serializer for User model
    """
    class Meta:
        model = User
        fields = [
            'id', 'name', 'email', 'number', 'role', 'is_onboarded',
            'is_active', 'created_at'
        ]
        read_only_fields = fields


class UserSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ['id', 'name', 'email']
        read_only_fields = fields


class MacAddressSerializer(serializers.ModelSerializer):
    class Meta:
        model = MacAddress
        fields = ['id', 'address', 'created_at']
        read_only_fields = fields


class UserListSerializer(UserSerializer):
    """
    Admin user listing - includes each user's enrollments and their course
    """
    enrollments = serializers.SerializerMethodField()

    class Meta(UserSerializer.Meta):
        fields = UserSerializer.Meta.fields + ['enrollments']
        read_only_fields = fields

    def get_enrollments(self, obj):
        return [
            {
                'id': enrollment.id,
                'enrolled_at': enrollment.enrolled_at,
                'course': {
                    'id': enrollment.course.id,
                    'name': enrollment.course.name,
                    'description': enrollment.course.description,
                },
            }
            for enrollment in obj.enrollments.all()
        ]


class UserProfileSerializer(UserListSerializer):
    """
    Admin view of a single user - enrollments plus registered MAC addresses
    """
    mac_addresses = MacAddressSerializer(many=True, read_only=True)

    class Meta(UserListSerializer.Meta):
        fields = UserListSerializer.Meta.fields + ['mac_addresses']
        read_only_fields = fields


class RoleUpdateSerializer(serializers.Serializer):
    """
    Serializer for updating user role
    """
    role = serializers.ChoiceField(choices=User.Role.choices)

    def validate_role(self, value):
        """Admins cannot demote themselves"""
        request = self.context.get('request')
        target = self.context.get('target')
        if request and target and target.pk == request.user.pk and value != User.Role.ADMIN:
            raise serializers.ValidationError("You cannot remove your own admin role.")
        return value
