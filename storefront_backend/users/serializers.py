from django.contrib.auth.password_validation import validate_password
from rest_framework import serializers


# ---------------- REGISTER ----------------
class RegisterSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(
        write_only=True,
        validators=[validate_password],
        style={"input_type": "password"},
    )
    display_name = serializers.CharField(max_length=120)


# ---------------- LOGIN (INPUT ONLY) ----------------
class LoginSerializer(serializers.Serializer):
    """
    Input validation only.
    Authentication is handled by the remote auth service.
    """
    email = serializers.EmailField()
    password = serializers.CharField(
        write_only=True,
        style={"input_type": "password"},
    )


class PasswordResetSerializer(serializers.Serializer):
    email = serializers.EmailField()


# ---------------- USER OUTPUT ----------------
class UserSerializer(serializers.Serializer):
    """
    Safe user representation for frontend consumption.
    """
    id = serializers.CharField()
    email = serializers.EmailField()
    display_name = serializers.CharField()
    role = serializers.CharField()


class SessionSerializer(serializers.Serializer):
    access_token = serializers.CharField()
    refresh_token = serializers.CharField(allow_blank=True)
    expires_in = serializers.IntegerField(allow_null=True)
    token_type = serializers.CharField()


class LoginResponseSerializer(serializers.Serializer):
    user = UserSerializer()
    session = SessionSerializer()
    cart_merged = serializers.IntegerField(
        help_text="Guest cart lines folded into the account cart (0 if the merge failed)",
    )
    cart_merge_failed = serializers.BooleanField()
