"""
Keyword rule tables for classifying notifications by title.

Category rules are tried in order and the first match wins; titles matching
nothing fall back to DEFAULT_CATEGORY_RULE. Priority rules are a separate
table evaluated on their own, so one keyword ("vence") can drive both the
category and the priority.

Matching is plain, case-sensitive substring containment with no accent
folding, because notification titles are generated server-side from fixed
Spanish templates.
"""

from dataclasses import dataclass

from .models import NotificationCategory, NotificationType, Priority, SuggestedAction


@dataclass(frozen=True, slots=True)
class KeywordRule:
    keywords: tuple[str, ...]

    def matches(self, text: str) -> bool:
        return any(keyword in text for keyword in self.keywords)


@dataclass(frozen=True, slots=True)
class CategoryRule(KeywordRule):
    category: NotificationCategory
    type: NotificationType
    actions: tuple[SuggestedAction, ...] = ()


@dataclass(frozen=True, slots=True)
class PriorityRule(KeywordRule):
    priority: Priority


CATEGORY_RULES: tuple[CategoryRule, ...] = (
    CategoryRule(
        keywords=("empresa", "equipo", "miembro"),
        category=NotificationCategory.COMPANY_ACTIVITY,
        type=NotificationType.COMPANY_ACTIVITY,
        actions=(SuggestedAction("Ver equipo", "/business-dashboard/team", "users"),),
    ),
    CategoryRule(
        keywords=("oportunidad", "publicación", "vence"),
        category=NotificationCategory.OPPORTUNITY_STATUS,
        type=NotificationType.OPPORTUNITY_STATUS,
        actions=(
            SuggestedAction("Ver oportunidad", "/business-dashboard/opportunities", "briefcase"),
            SuggestedAction("Renovar", None, "calendar"),
        ),
    ),
    CategoryRule(
        keywords=("aplicó", "aplicación", "candidato"),
        category=NotificationCategory.APPLICATION,
        type=NotificationType.APPLICATION,
        actions=(
            SuggestedAction("Revisar perfil", "/business-dashboard/applications", "eye"),
            SuggestedAction("Responder", "/business-dashboard/messages", "message-square"),
            SuggestedAction("Agendar entrevista", None, "calendar"),
        ),
    ),
    CategoryRule(
        keywords=("servicio", "consulta", "funnel"),
        category=NotificationCategory.SERVICE_INQUIRY,
        type=NotificationType.SERVICE_INQUIRY,
        actions=(
            SuggestedAction("Responder mensaje", "/business-dashboard/messages", "message-square"),
            SuggestedAction("Agendar llamada", None, "calendar"),
        ),
    ),
)

DEFAULT_CATEGORY_RULE = CategoryRule(
    keywords=(),
    category=NotificationCategory.REMINDER,
    type=NotificationType.INACTIVITY_REMINDER,
)

PRIORITY_RULES: tuple[PriorityRule, ...] = (
    PriorityRule(keywords=("urgente", "vence", "crítico"), priority=Priority.HIGH),
    PriorityRule(keywords=("recordatorio", "sugerencia"), priority=Priority.LOW),
)

DEFAULT_PRIORITY = Priority.MEDIUM
