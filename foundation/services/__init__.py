"""서비스 패키지 — 비즈니스 로직 계층.

Service package — Business logic layer.
Services enforce the domain rules (demande lifecycle, moderation, publishing)
on top of the repositories and raise the HTTP errors from utils.exceptions.
"""
