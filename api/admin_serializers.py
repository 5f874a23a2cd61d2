from rest_framework import serializers
from django.contrib.auth import get_user_model

from .models import Artist

User = get_user_model()


class AdminUserSerializer(serializers.ModelSerializer):
    songs_count = serializers.IntegerField(source='uploaded_songs.count', read_only=True)

    class Meta:
        model = User
        fields = [
            'id', 'email', 'name', 'roles', 'is_active', 'is_staff', 'is_verified',
            'date_joined', 'last_login', 'songs_count',
        ]
        read_only_fields = ['id', 'date_joined', 'last_login']

    def update(self, instance, validated_data):
        # role and staff flag move together so the admin check stays consistent
        roles = validated_data.get('roles')
        if roles == User.ROLE_ADMIN:
            validated_data.setdefault('is_staff', True)
        elif roles is not None and not instance.is_superuser:
            validated_data.setdefault('is_staff', False)
        instance = super().update(instance, validated_data)
        if instance.is_artist:
            Artist.ensure_for(instance)
        return instance
