from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from authentication.permissions import IsAdminRole
from .models import User
from .serializers import UserListSerializer, UserProfileSerializer, RoleUpdateSerializer
import logging

logger = logging.getLogger(__name__)


class OnboardingStatusView(APIView):
    """
    Report whether the current user has finished onboarding.
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return Response({'is_onboarded': request.user.is_onboarded})


class CompleteOnboardingView(APIView):
    """
    Mark onboarding as finished for the current user.
    """
    permission_classes = [IsAuthenticated]

    def post(self, request):
        user = request.user
        if not user.is_onboarded:
            user.is_onboarded = True
            user.save(update_fields=['is_onboarded', 'updated_at'])
            logger.info(f"Onboarding completed for {user.email}")

        return Response({'message': 'Onboarding completed successfully'})


class OnboardingView(APIView):
    """
    Entry point of the onboarding flow. Only reachable until onboarding is done.
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        if request.user.is_onboarded:
            return Response(
                {'error': 'Onboarding already completed'},
                status=status.HTTP_403_FORBIDDEN
            )
        return Response({'message': 'Proceed with onboarding'})


class UserListView(APIView):
    """
    List every user with their enrollments (admin only).
    """
    permission_classes = [IsAdminRole]

    def get(self, request):
        users = User.objects.prefetch_related('enrollments__course').order_by('id')

        role = request.query_params.get('role')
        if role:
            users = users.filter(role=role.upper())

        serializer = UserListSerializer(users, many=True)
        return Response(serializer.data)


class UserProfileView(APIView):
    """
    Detailed profile of a single user (admin only).
    """
    permission_classes = [IsAdminRole]

    def get(self, request, user_id):
        user = (
            User.objects
            .prefetch_related('enrollments__course', 'mac_addresses')
            .filter(id=user_id)
            .first()
        )
        if not user:
            return Response(
                {'error': 'User not found'},
                status=status.HTTP_404_NOT_FOUND
            )

        return Response(UserProfileSerializer(user).data)


class UpdateUserRoleView(APIView):
    """
    Update user role (admin only).
    """
    permission_classes = [IsAdminRole]

    def patch(self, request, user_id):
        try:
            user = User.objects.get(id=user_id)
        except User.DoesNotExist:
            return Response(
                {'error': 'User not found'},
                status=status.HTTP_404_NOT_FOUND
            )

        serializer = RoleUpdateSerializer(
            data=request.data,
            context={'request': request, 'target': user}
        )

        if not serializer.is_valid():
            return Response(
                {'error': 'Invalid data', 'details': serializer.errors},
                status=status.HTTP_400_BAD_REQUEST
            )

        new_role = serializer.validated_data['role']
        old_role = user.role

        user.role = new_role
        user.save(update_fields=['role', 'updated_at'])

        logger.info(f"User {user.email} role changed from {old_role} to {new_role} by {request.user.email}")

        return Response(UserProfileSerializer(user).data)
