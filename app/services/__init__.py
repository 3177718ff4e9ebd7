"""서비스 패키지 — 비즈니스 로직 계층.

Service package — Business logic layer. Services validate input, enforce
ownership, call repositories and the media store, and build response
schemas. Routers commit the transaction after a service call returns.
"""
