"""
AUTH VIEWS

Identity is owned by the remote auth service; these endpoints proxy it.

- POST /api/auth/register/
- POST /api/auth/login/           returns the bearer session; merges the guest cart
- POST /api/auth/logout/
- POST /api/auth/password-reset/  always 202 (no account enumeration)
"""

import logging

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.throttling import ScopedRateThrottle
from rest_framework.views import APIView

from backend.exception_handler import error_response
from cart.services import CartService
from remote.exceptions import RemoteAuthError, RemoteStoreError, RemoteStoreNotConfigured
from remote.middleware import remote_for_request
from users.serializers import (
    LoginResponseSerializer,
    LoginSerializer,
    PasswordResetSerializer,
    RegisterSerializer,
    UserSerializer,
)
from users.services.auth_service import AuthService

logger = logging.getLogger(__name__)


class AuthThrottleMixin:
    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "auth"


# ---------------------------
# VIEWS
# ---------------------------


class RegisterView(AuthThrottleMixin, APIView):
    permission_classes = [AllowAny]
    serializer_class = RegisterSerializer

    @extend_schema(
        tags=["Auth"],
        request=RegisterSerializer,
        responses={201: UserSerializer, 400: OpenApiResponse(description="Rejected by auth service")},
        description="Register a new storefront account",
    )
    def post(self, request):
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            user = AuthService(remote_for_request(request)).register(
                email=data["email"],
                password=data["password"],
                display_name=data["display_name"],
            )
        except RemoteAuthError as exc:
            return error_response(
                code="REGISTRATION_FAILED",
                message=exc.message,
                http_status=status.HTTP_400_BAD_REQUEST,
            )

        return Response(UserSerializer(user).data, status=status.HTTP_201_CREATED)


class LoginView(AuthThrottleMixin, APIView):
    permission_classes = [AllowAny]
    serializer_class = LoginSerializer

    @extend_schema(
        tags=["Auth"],
        request=LoginSerializer,
        responses={200: LoginResponseSerializer, 401: OpenApiResponse(description="Invalid credentials")},
        description=(
            "Authenticate with email and password. Any guest cart held in the session "
            "is merged into the account cart."
        ),
    )
    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        remote = remote_for_request(request)

        try:
            user, session = AuthService(remote).login(
                email=serializer.validated_data["email"],
                password=serializer.validated_data["password"],
            )
        except RemoteAuthError:
            return error_response(
                code="INVALID_CREDENTIALS",
                message="Invalid credentials",
                http_status=status.HTTP_401_UNAUTHORIZED,
            )

        merged = 0
        merge_failed = False
        try:
            merged = CartService(
                remote=remote.with_token(session["access_token"]),
                session=request.session,
                user=user,
            ).merge_guest_cart_into_account()
        except RemoteStoreError:
            # remaining guest lines stay in the session; the next login retries
            merge_failed = True
            logger.exception("Guest cart merge failed", extra={"user_id": user.id})

        payload = {
            "user": user,
            "session": {
                "access_token": session["access_token"],
                "refresh_token": session.get("refresh_token") or "",
                "expires_in": session.get("expires_in"),
                "token_type": session.get("token_type") or "bearer",
            },
            "cart_merged": merged,
            "cart_merge_failed": merge_failed,
        }
        return Response(LoginResponseSerializer(payload).data, status=status.HTTP_200_OK)


class LogoutView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(tags=["Auth"], request=None, responses={204: None})
    def post(self, request):
        try:
            AuthService(remote_for_request(request)).logout(request.auth)
        except RemoteStoreError:
            # the token expires on its own; signing out locally is enough
            logger.warning("Remote sign-out failed", extra={"user_id": request.user.id})
        return Response(status=status.HTTP_204_NO_CONTENT)


class PasswordResetView(AuthThrottleMixin, APIView):
    permission_classes = [AllowAny]
    serializer_class = PasswordResetSerializer

    @extend_schema(
        tags=["Auth"],
        request=PasswordResetSerializer,
        responses={202: OpenApiResponse(description="Reset email requested")},
        description="Ask the auth service to email a password reset link",
    )
    def post(self, request):
        serializer = PasswordResetSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            AuthService(remote_for_request(request)).reset_password(
                email=serializer.validated_data["email"]
            )
        except RemoteStoreNotConfigured:
            raise
        except RemoteAuthError:
            logger.info("Password reset rejected by auth service")
        except RemoteStoreError:
            # rate limits and outages are not reported to the caller
            logger.warning("Password reset request failed", exc_info=True)

        return Response(
            {"detail": "If the account exists, a reset link has been sent."},
            status=status.HTTP_202_ACCEPTED,
        )
