from rest_framework import status, permissions
from rest_framework.decorators import api_view, permission_classes, authentication_classes
from rest_framework.response import Response
from django.contrib.auth import get_user_model
from django.db import transaction
from django.utils import timezone
from users.models import MacAddress
from users.serializers import UserSerializer
from .serializers import SignupSerializer, LoginSerializer, MacAddressRegistrationSerializer
from .tokens import generate_token
import logging

logger = logging.getLogger(__name__)
User = get_user_model()


@api_view(['POST'])
@authentication_classes([])
@permission_classes([permissions.AllowAny])
def signup(request):
    """
    Create a new account.

    Expected payload:
    {
        "name": "Jane Doe",
        "email": "jane@example.com",
        "password": "secret-pass",
        "number": "+15550100"
    }
    """
    serializer = SignupSerializer(data=request.data)

    if not serializer.is_valid():
        return Response(
            {'error': 'Invalid request data', 'details': serializer.errors},
            status=status.HTTP_400_BAD_REQUEST
        )

    try:
        user = serializer.save()
    except Exception as e:
        logger.error(f"Signup error: {e}")
        return Response(
            {'error': 'Failed to create user'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    logger.info(f"New user created: {user.email}")
    return Response(UserSerializer(user).data, status=status.HTTP_201_CREATED)


@api_view(['POST'])
@authentication_classes([])
@permission_classes([permissions.AllowAny])
def login(request):
    """
    Exchange email and password for an access token.

    Expected payload:
    {
        "email": "jane@example.com",
        "password": "secret-pass"
    }
    """
    serializer = LoginSerializer(data=request.data)

    if not serializer.is_valid():
        return Response(
            {'error': 'Invalid request data', 'details': serializer.errors},
            status=status.HTTP_400_BAD_REQUEST
        )

    email = serializer.validated_data['email']
    password = serializer.validated_data['password']

    try:
        user = User.objects.get(email__iexact=email)
    except User.DoesNotExist:
        return Response(
            {'error': 'User not found'},
            status=status.HTTP_404_NOT_FOUND
        )

    if not user.is_active or not user.check_password(password):
        logger.warning(f"Failed login attempt for {email}")
        return Response(
            {'error': 'Invalid credentials'},
            status=status.HTTP_401_UNAUTHORIZED
        )

    user.last_login = timezone.now()
    user.save(update_fields=['last_login'])

    return Response({
        'token': generate_token(user),
        'user': UserSerializer(user).data,
    })


@api_view(['POST'])
@permission_classes([permissions.IsAuthenticated])
def register_mac_addresses(request):
    """
    Register device MAC addresses for the current user.

    The request is all-or-nothing: if any address is already registered for
    the user nothing is stored.

    Expected payload:
    {
        "mac_addresses": ["AA:BB:CC:DD:EE:FF"]
    }
    """
    serializer = MacAddressRegistrationSerializer(data=request.data)

    if not serializer.is_valid():
        return Response(
            {'error': 'Invalid request data', 'details': serializer.errors},
            status=status.HTTP_400_BAD_REQUEST
        )

    addresses = serializer.validated_data['mac_addresses']
    user = request.user

    existing = MacAddress.objects.filter(user=user, address__in=addresses).values_list('address', flat=True).first()
    if existing:
        return Response(
            {'error': f'MAC address {existing} already exists for this user'},
            status=status.HTTP_400_BAD_REQUEST
        )

    with transaction.atomic():
        MacAddress.objects.bulk_create([
            MacAddress(user=user, address=address) for address in addresses
        ])

    logger.info(f"Registered {len(addresses)} MAC addresses for {user.email}")
    return Response({'message': 'MAC addresses added successfully!'})
