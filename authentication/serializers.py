import re

from rest_framework import serializers
from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError as DjangoValidationError

User = get_user_model()

MAC_ADDRESS_RE = re.compile(r'^([0-9A-Fa-f]{2}[:-]){5}[0-9A-Fa-f]{2}$')


class SignupSerializer(serializers.ModelSerializer):
    """
    Serializer for public account creation. Accounts are always created with
    the USER role.
    """
    password = serializers.CharField(write_only=True, style={'input_type': 'password'})

    class Meta:
        model = User
        fields = ['name', 'email', 'password', 'number']
        extra_kwargs = {
            'number': {'required': False},
        }

    def validate_email(self, value):
        """Emails are unique regardless of case"""
        value = User.objects.normalize_email(value).lower()
        if User.objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError("A user with this email already exists.")
        return value

    def validate_password(self, value):
        try:
            validate_password(value)
        except DjangoValidationError as e:
            raise serializers.ValidationError(list(e.messages))
        return value

    def create(self, validated_data):
        return User.objects.create_user(role=User.Role.USER, **validated_data)


class LoginSerializer(serializers.Serializer):
    """
    Serializer for email/password login
    """
    email = serializers.EmailField()
    password = serializers.CharField(style={'input_type': 'password'})


class MacAddressRegistrationSerializer(serializers.Serializer):
    """
    Serializer for registering one or more device MAC addresses
    """
    mac_addresses = serializers.ListField(
        child=serializers.CharField(max_length=17),
        allow_empty=False,
    )

    def validate_mac_addresses(self, value):
        normalized = []
        for address in value:
            if not MAC_ADDRESS_RE.match(address):
                raise serializers.ValidationError(f"Invalid MAC address: {address}")
            normalized.append(address.upper().replace('-', ':'))
        if len(set(normalized)) != len(normalized):
            raise serializers.ValidationError("Duplicate MAC addresses in request.")
        return normalized
