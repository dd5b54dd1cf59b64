"""
Notification center feature package.

Classifies notifications by title keywords (category, priority, suggested
follow-ups) and serves the caller's notification list with read/unread
bookkeeping.
"""

from .api.router import router as notifications_router  # noqa: F401
from .domain.models import Classification, NotificationCategory, Priority  # noqa: F401
from .services.classifier import NotificationClassifier, classify  # noqa: F401
