"""API views for core application."""

import structlog
from django.http import StreamingHttpResponse
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from core.auth.backend_session import BackendSessionAuthentication
from core.enums import DISPLAY_CATEGORIES, NotificationCategory
from core.schemas.notification import CategoryFeedResponse
from core.services import health_service
from core.services.connection_request_service import connection_request_service
from core.services.notification_feed_service import (
    by_category,
    notification_feed_service,
)
from core.services.realtime import FeedStream

logger = structlog.get_logger(__name__)

VIEWER_ROLE = "authenticated"


def _forbidden_unless_viewer(request) -> Response | None:
    """Reject sessions whose role is not a signed-in viewer.

    Args:
        request: Authenticated DRF request

    Returns:
        A 403 Response, or None if the session belongs to a viewer
    """
    if request.user.role == VIEWER_ROLE:
        return None

    logger.warning(
        "Session role cannot read notification feeds",
        user_id=request.user.user_id,
        role=request.user.role,
    )
    return Response(
        {
            "error": "forbidden",
            "message": "You do not have permission to perform this action",
            "detail": f"Requires the {VIEWER_ROLE} role",
        },
        status=status.HTTP_403_FORBIDDEN,
    )


class LivenessCheckView(APIView):
    """Liveness probe endpoint.

    Returns 200 if the service is alive and running. Does not check the
    hosted backend and is exempt from authentication.
    """

    authentication_classes = ()
    permission_classes = (AllowAny,)

    def get(self, _request):
        """Handle GET request for liveness check."""
        liveness = health_service.get_liveness_status()
        return Response(liveness.model_dump(), status=status.HTTP_200_OK)


class ReadinessCheckView(APIView):
    """Readiness probe endpoint.

    Returns 200 with a degraded status when the hosted backend is
    unreachable, so the service stays routable while the backend recovers.
    Exempt from authentication.
    """

    authentication_classes = ()
    permission_classes = (AllowAny,)

    def get(self, _request):
        """Handle GET request for readiness check."""
        readiness = health_service.get_readiness_status()
        return Response(readiness.model_dump(mode="json"), status=status.HTTP_200_OK)


class NotificationFeedView(APIView):
    """The viewer's merged notification feed.

    Without parameters, returns the whole feed plus one bucket per display
    category. With ``?category=<name>``, returns only that category.
    """

    authentication_classes = (BackendSessionAuthentication,)
    permission_classes = (IsAuthenticated,)

    def get(self, request):
        """Handle GET request for the notification feed.

        Args:
            request: HTTP request object, optionally with a category query
                parameter

        Returns:
            200 OK with NotificationFeedResponse or CategoryFeedResponse
            400 Bad Request if the category is not a display category
            401 Unauthorized if authentication fails
            403 Forbidden if the session is not a viewer session
            502 Bad Gateway if the backend cannot be read
        """
        forbidden = _forbidden_unless_viewer(request)
        if forbidden is not None:
            return forbidden

        user = request.user
        category_name = request.query_params.get("category")

        logger.info(
            "Notification feed requested",
            user_id=user.user_id,
            category=category_name,
        )

        if category_name is not None:
            category = NotificationCategory.from_name(category_name)
            if category is None:
                return Response(
                    {
                        "error": "bad_request",
                        "message": "Invalid request parameters",
                        "detail": (
                            f"category must be one of: {', '.join(DISPLAY_CATEGORIES)}"
                        ),
                    },
                    status=status.HTTP_400_BAD_REQUEST,
                )

            feed = notification_feed_service.refresh(
                user.user_id, access_token=user.access_token
            )
            entries = by_category(feed, category.value)
            response_data = CategoryFeedResponse(
                category=category.value,
                notifications=entries,
                count=len(entries),
            )
            return Response(
                response_data.model_dump(mode="json"), status=status.HTTP_200_OK
            )

        response_data = notification_feed_service.get_feed(
            user.user_id, access_token=user.access_token
        )
        return Response(response_data.model_dump(mode="json"), status=status.HTTP_200_OK)


class NotificationStreamView(APIView):
    """Server-sent event stream of the viewer's feed.

    Sends the feed on connect and after every change to the viewer's
    notifications or connection requests. The realtime subscription behind
    the stream is released when the client disconnects.
    """

    authentication_classes = (BackendSessionAuthentication,)
    permission_classes = (IsAuthenticated,)

    def get(self, request):
        """Handle GET request opening the feed stream.

        Returns:
            200 OK text/event-stream
            401 Unauthorized if authentication fails
            403 Forbidden if the session is not a viewer session
        """
        forbidden = _forbidden_unless_viewer(request)
        if forbidden is not None:
            return forbidden

        user = request.user
        logger.info("Notification stream opened", user_id=user.user_id)

        response = StreamingHttpResponse(
            iter(FeedStream(user.user_id, access_token=user.access_token)),
            content_type="text/event-stream",
        )
        response["Cache-Control"] = "no-cache"
        response["X-Accel-Buffering"] = "no"
        return response


class ConnectionRequestResolveView(APIView):
    """Base view resolving a connection request addressed to the viewer."""

    authentication_classes = (BackendSessionAuthentication,)
    permission_classes = (IsAuthenticated,)
    accept: bool = True

    def post(self, request, request_id):
        """Handle POST request to resolve a connection request.

        Args:
            request: HTTP request object
            request_id: ID of the connection request

        Returns:
            200 OK with ConnectionRequestResolution
            401 Unauthorized if authentication fails
            403 Forbidden if the viewer is not the request's recipient
            404 Not Found if the request does not exist
            409 Conflict if the request is no longer pending
            502 Bad Gateway if a backend step fails
        """
        forbidden = _forbidden_unless_viewer(request)
        if forbidden is not None:
            return forbidden

        user = request.user
        logger.info(
            "Connection request resolution received",
            user_id=user.user_id,
            request_id=request_id,
            accept=self.accept,
        )

        # Backend failures propagate to the DRF exception handler
        resolution = connection_request_service.resolve(
            request_id,
            self.accept,
            user.user_id,
            access_token=user.access_token,
        )
        return Response(resolution.model_dump(mode="json"), status=status.HTTP_200_OK)


class ConnectionRequestAcceptView(ConnectionRequestResolveView):
    """Accept a pending connection request and create the connection."""

    accept = True


class ConnectionRequestRejectView(ConnectionRequestResolveView):
    """Reject a pending connection request."""

    accept = False
