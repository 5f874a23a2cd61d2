import logging
from datetime import timedelta

from django.db.models import Count
from django.shortcuts import get_object_or_404
from django.utils import timezone
from rest_framework import status
from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response
from rest_framework.views import APIView

from .admin_serializers import AdminUserSerializer
from .models import Playback, User
from .permissions import IsAdmin

logger = logging.getLogger(__name__)


class AdminPagination(PageNumberPagination):
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class AdminUserListView(APIView):
    permission_classes = [IsAdmin]

    def get(self, request):
        users = User.objects.order_by('-date_joined')

        role = request.query_params.get('role')
        if role:
            users = users.filter(roles=role)
        q = request.query_params.get('q')
        if q:
            users = users.filter(email__icontains=q)

        paginator = AdminPagination()
        result_page = paginator.paginate_queryset(users, request)
        serializer = AdminUserSerializer(result_page, many=True)
        return paginator.get_paginated_response(serializer.data)


class AdminUserDetailView(APIView):
    permission_classes = [IsAdmin]

    def get(self, request, pk):
        user = get_object_or_404(User, pk=pk)
        serializer = AdminUserSerializer(user)
        return Response(serializer.data)

    def patch(self, request, pk):
        user = get_object_or_404(User, pk=pk)
        serializer = AdminUserSerializer(user, data=request.data, partial=True)
        if serializer.is_valid():
            serializer.save()
            logger.info('Admin %s updated user %s', request.user.id, user.id)
            return Response(serializer.data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    def delete(self, request, pk):
        user = get_object_or_404(User, pk=pk)
        if user.pk == request.user.pk:
            return Response({'error': 'You cannot delete your own account'}, status=status.HTTP_400_BAD_REQUEST)
        user.delete()
        logger.info('Admin %s deleted user %s', request.user.id, pk)
        return Response(status=status.HTTP_204_NO_CONTENT)


class AdminPlaybackSummaryView(APIView):
    """Return overall playback counts for admin dashboards.

    Response:
    {
        "total": int,
        "last_30_days": int,
        "last_7_days": int,
        "last_24_hours": int,
        "by_type": {"song": int, "album": int, "category": int}
    }
    """
    permission_classes = [IsAdmin]

    def get(self, request):
        now = timezone.now()
        last_24 = now - timedelta(days=1)
        last_7 = now - timedelta(days=7)
        last_30 = now - timedelta(days=30)

        events = Playback.objects.all()
        by_type = dict.fromkeys((Playback.TYPE_SONG, Playback.TYPE_ALBUM, Playback.TYPE_CATEGORY), 0)
        for row in events.order_by().values('item_type').annotate(count=Count('id')):
            by_type[row['item_type']] = row['count']

        return Response({
            'total': events.count(),
            'last_30_days': events.filter(played_at__gte=last_30).count(),
            'last_7_days': events.filter(played_at__gte=last_7).count(),
            'last_24_hours': events.filter(played_at__gte=last_24).count(),
            'by_type': by_type,
        })
