"""레포지토리 패키지 — 데이터베이스 쿼리 계층.

Repository package — Database query layer.
Each module exposes a singleton (e.g. `demande_repository`) built on
BaseRepository and adds the queries its service needs.
"""
