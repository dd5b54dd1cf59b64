from .profile_signals_repository import ProfileSignalsRepository, build_profile_signals

__all__ = ["ProfileSignalsRepository", "build_profile_signals"]
