"""
The ten completeness criteria.

Each criterion is a named predicate over ProfileSignals worth a fixed ten
points. Order matters only for presentation: it is the order the profile
checklist is shown in, and the first failing entry is the suggested next step.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass

from .models import ExperienceLevel, ProfileSignals

CRITERION_POINTS = 10
MIN_SKILLS = 3
MIN_BIO_LENGTH = 50
PLACEHOLDER_NAME = "sin nombre"

_NON_ALNUM = re.compile(r"[^a-z0-9]")


def _present(value: str | None) -> bool:
    return bool(value and value.strip())


def _normalize_handle(value: str) -> str:
    return _NON_ALNUM.sub("", value.lower())


def is_real_name(full_name: str | None, email: str | None) -> bool:
    """
    Decide whether a stored name was typed by the user.

    Accounts created without a name get either the "Sin nombre" placeholder or
    the email local part copied into full_name. A name of two or more words is
    always accepted; a single word is accepted only if it differs from the
    email local part once punctuation is stripped.
    """
    if not _present(full_name):
        return False

    name = full_name.strip()
    if name.lower() == PLACEHOLDER_NAME:
        return False

    if len(name.split()) >= 2:
        return True

    local_part = email.split("@", 1)[0] if email else ""
    return _normalize_handle(name) != _normalize_handle(local_part)


@dataclass(frozen=True, slots=True)
class Criterion:
    key: str
    title: str
    description: str
    suggestion: str
    check: Callable[[ProfileSignals], bool]
    points: int = CRITERION_POINTS


CRITERIA: tuple[Criterion, ...] = (
    Criterion(
        key="profile-photo",
        title="Foto de Perfil",
        description="Agrega una foto profesional",
        suggestion="Sube una foto profesional para mejorar tu perfil",
        check=lambda s: s.has_avatar,
    ),
    Criterion(
        key="full-name",
        title="Nombre completo",
        description="Tu nombre y apellido",
        suggestion="Agrega tu nombre completo para que otros puedan encontrarte",
        check=lambda s: s.has_real_name,
    ),
    Criterion(
        key="country",
        title="País",
        description="País de residencia",
        suggestion="Indica tu ubicación para oportunidades locales",
        check=lambda s: _present(s.country),
    ),
    Criterion(
        key="city",
        title="Ciudad",
        description="Ciudad de residencia",
        suggestion="Especifica tu ciudad para oportunidades cercanas",
        check=lambda s: _present(s.city),
    ),
    Criterion(
        key="category",
        title="Categoría Profesional",
        description="Categoría principal (secundaria opcional)",
        suggestion="Selecciona tu área de especialización principal",
        check=lambda s: _present(s.primary_category_id),
    ),
    Criterion(
        key="title",
        title="Título profesional",
        description="Título que represente tu rol actual",
        suggestion="Define un título que represente tu rol actual",
        check=lambda s: _present(s.professional_title),
    ),
    Criterion(
        key="experience-level",
        title="Nivel de experiencia",
        description="Años de experiencia profesional",
        suggestion="Indica tu nivel de experiencia profesional",
        check=lambda s: ExperienceLevel.is_canonical(s.experience_level),
    ),
    Criterion(
        key="skills",
        title="Habilidades",
        description=f"Al menos {MIN_SKILLS} habilidades",
        suggestion="Lista las habilidades que te destacan",
        check=lambda s: len(s.skills or ()) >= MIN_SKILLS,
    ),
    Criterion(
        key="bio",
        title="Biografía",
        description=f"Mínimo {MIN_BIO_LENGTH} caracteres",
        suggestion="Escribe una descripción atractiva de tu experiencia",
        check=lambda s: len(s.bio or "") >= MIN_BIO_LENGTH,
    ),
    Criterion(
        key="education",
        title="Formación Académica",
        description="Al menos un estudio o certificación",
        suggestion="Agrega tu formación académica o certificaciones",
        check=lambda s: s.has_education_record,
    ),
)
