"""레포지토리 패키지 — 데이터베이스 쿼리 계층.

Repository package — Database query layer for users, content, and the
like/subscription edges. Each repository extends BaseRepository and adds
its own joined lookups, listing queries, and atomic edge writes.
"""
